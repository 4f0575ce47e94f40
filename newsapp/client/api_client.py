"""HTTP client for the backend, as used by the mobile reading views."""

import logging
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)


class ClientError(Exception):
    """The backend answered with ``success: false`` or could not be reached."""

    def __init__(self, error, message=None, status_code=None):
        self.error = error
        self.message = message
        self.status_code = status_code
        super().__init__(error if not message else f'{error}: {message}')


class BackendClient:

    def __init__(self, base_url, token=None, timeout=10, session=None):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def set_token(self, token):
        self.token = token

    def _request(self, method, endpoint, json=None, params=None):
        headers = {'Content-Type': 'application/json'}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'

        try:
            resp = self.session.request(
                method,
                f'{self.base_url}{endpoint}',
                json=json,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error('API request error: %s', e)
            raise ClientError('Network error', str(e)) from e

        try:
            data = resp.json()
        except ValueError:
            raise ClientError('Invalid response', status_code=resp.status_code)

        if not data.get('success'):
            raise ClientError(
                data.get('error') or 'Request failed',
                data.get('message'),
                resp.status_code,
            )
        return data

    def _session_from(self, data):
        self.set_token(data.get('token'))
        return data

    # Auth

    def sign_up(self, email, password, name):
        return self._session_from(self._request(
            'POST', '/auth/signup',
            json={'email': email, 'password': password, 'name': name},
        ))

    def sign_in(self, email, password):
        return self._session_from(self._request(
            'POST', '/auth/signin', json={'email': email, 'password': password},
        ))

    def login_as_developer(self):
        return self._session_from(self._request('POST', '/auth/developer'))

    def login_as_guest(self):
        return self._session_from(self._request('POST', '/auth/guest'))

    def login_with_google(self, user_data):
        return self._session_from(self._request('POST', '/auth/google', json=user_data))

    def login_with_facebook(self, user_data):
        return self._session_from(self._request('POST', '/auth/facebook', json=user_data))

    def verify_token(self):
        return self._request('GET', '/auth/verify')['user']

    # News

    def top_headlines(self):
        return self._request('GET', '/news/headlines')['articles']

    def search_news(self, query):
        return self._request('GET', '/news/search', params={'q': query})['articles']

    def articles_by_category(self, category):
        return self._request('GET', f'/news/category/{quote(category, safe="")}')['articles']

    def articles_by_source(self, source):
        return self._request('GET', f'/news/source/{quote(source, safe="")}')['articles']

    def article(self, article_id):
        return self._request('GET', f'/news/articles/{quote(article_id, safe="")}')['article']

    def categories(self):
        return self._request('GET', '/news/categories')['categories']

    def sources(self):
        return self._request('GET', '/news/sources')['sources']

    # User

    def profile(self):
        return self._request('GET', '/user/profile')['user']

    def update_profile(self, **fields):
        return self._request('PUT', '/user/profile', json=fields)['user']

    def update_preferences(self, **preferences):
        return self._request('PUT', '/user/preferences', json=preferences)['user']

    def change_password(self, current_password, new_password):
        return self._request('PUT', '/user/change-password', json={
            'currentPassword': current_password,
            'newPassword': new_password,
        })

    def save_article(self, article_id):
        return self._request('POST', '/user/save-article', json={'articleId': article_id})['savedArticles']

    def remove_saved_article(self, article_id):
        endpoint = f'/user/save-article/{quote(article_id, safe="")}'
        return self._request('DELETE', endpoint)['savedArticles']

    def saved_articles(self):
        return self._request('GET', '/user/saved-articles')['articles']

    def add_to_history(self, article_id):
        return self._request('POST', '/user/reading-history', json={'articleId': article_id})['readingHistory']

    def reading_history(self):
        return self._request('GET', '/user/reading-history')['readingHistory']
