from unittest.mock import MagicMock

import pytest

from newsapp import create_app
from newsapp.extensions import db as _db
from newsapp.config import TestConfig
from newsapp.services import accounts
from newsapp.services.credentials import issue_token


def make_raw_article(**overrides):
    """Build a raw provider record the way NewsAPI returns one."""
    raw = {
        'source': {'id': 'techcrunch', 'name': 'TechCrunch'},
        'author': 'Jane Writer',
        'title': 'A new chip appears',
        'description': 'Short summary of the chip.',
        'url': 'https://techcrunch.com/2024/01/01/chip',
        'urlToImage': 'https://techcrunch.com/chip.jpg',
        'publishedAt': '2024-01-01T12:00:00Z',
        'content': ' '.join(['word'] * 1000),
    }
    raw.update(overrides)
    return raw


def provider_response(articles=None, status='ok', message=None, status_code=200):
    """A mocked requests response carrying a provider payload."""
    resp = MagicMock()
    resp.status_code = status_code
    body = {'status': status}
    if status == 'ok':
        body['totalResults'] = len(articles or [])
        body['articles'] = articles or []
    else:
        body['code'] = 'error'
        body['message'] = message
    resp.json.return_value = body
    return resp


@pytest.fixture
def app():
    """Create a test Flask application with SQLite in-memory database."""
    application = create_app(TestConfig)

    with application.app_context():
        _db.create_all()

        yield application

        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def user(app):
    return accounts.register_local('reader@example.com', 'secret1', 'Reader')


@pytest.fixture
def auth_headers(user):
    return {'Authorization': f'Bearer {issue_token(user.id)}'}
