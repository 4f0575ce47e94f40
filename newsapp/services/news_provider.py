"""Thin client for the NewsAPI-style provider.

Two endpoints are used: ``/top-headlines`` and ``/everything``. Both
answer ``{status, totalResults, articles}`` on success and
``{status: "error", code, message}`` on failure. Any failure is raised as
``ProviderError``; nothing is retried.
"""

import logging

import requests
from flask import current_app

from newsapp.errors import ProviderError

logger = logging.getLogger(__name__)


class NewsApiClient:

    def __init__(self, base_url, api_key, timeout=10, session=None):
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests

    def top_headlines(self, **params):
        return self._get('top-headlines', params)

    def everything(self, **params):
        return self._get('everything', params)

    def _get(self, endpoint, params):
        url = f'{self.base_url}/{endpoint}'
        query = {k: v for k, v in params.items() if v is not None}
        query['apiKey'] = self.api_key

        try:
            resp = self.session.get(url, params=query, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning('News provider request to %s failed: %s', endpoint, e)
            raise ProviderError(str(e)) from e

        try:
            data = resp.json()
        except ValueError:
            logger.warning('News provider returned non-JSON (%s) for %s', resp.status_code, endpoint)
            raise ProviderError(f'Unexpected response ({resp.status_code})', resp.status_code)

        if not isinstance(data, dict) or data.get('status') != 'ok':
            message = (data.get('message') if isinstance(data, dict) else None) or 'NewsAPI error'
            logger.warning('News provider error on %s: %s', endpoint, message)
            raise ProviderError(message, resp.status_code)

        return data.get('articles') or []


def get_provider():
    """Build a provider client from the current app config."""
    config = current_app.config
    return NewsApiClient(
        config['NEWS_API_BASE_URL'],
        config['NEWS_API_KEY'],
        timeout=config['NEWS_API_TIMEOUT'],
    )
