"""Translate preferences into provider queries and return stored Articles.

Ordering is whatever the provider returns; nothing is re-ranked here.
"""

from flask import current_app

from newsapp.errors import ValidationError
from newsapp.services.ingestion import ingest_articles
from newsapp.services.news_provider import get_provider

DEFAULT_COUNTRY = 'us'
DEFAULT_LANGUAGE = 'en'


def _first(preferences, field):
    values = (preferences or {}).get(field) or []
    return values[0] if values else None


def _page_size():
    return current_app.config['NEWS_PAGE_SIZE']


def headline_params(preferences):
    params = {
        'country': _first(preferences, 'countries') or DEFAULT_COUNTRY,
        'language': _first(preferences, 'languages') or DEFAULT_LANGUAGE,
        'pageSize': _page_size(),
    }
    category = _first(preferences, 'categories')
    if category:
        params['category'] = category.lower()
    return params


def search_params(query, preferences):
    query = (query or '').strip()
    if not query:
        raise ValidationError('Query parameter is required')
    return {
        'q': query,
        'language': _first(preferences, 'languages') or DEFAULT_LANGUAGE,
        'sortBy': 'publishedAt',
        'pageSize': _page_size(),
    }


def category_params(category):
    return {
        'category': category.lower(),
        'country': DEFAULT_COUNTRY,
        'pageSize': _page_size(),
    }


def source_params(source):
    return {
        'sources': source,
        'pageSize': _page_size(),
    }


def get_headlines(preferences, provider=None):
    provider = provider or get_provider()
    return ingest_articles(provider.top_headlines(**headline_params(preferences)))


def search(query, preferences, provider=None):
    params = search_params(query, preferences)
    provider = provider or get_provider()
    return ingest_articles(provider.everything(**params))


def by_category(category, provider=None):
    provider = provider or get_provider()
    return ingest_articles(provider.top_headlines(**category_params(category)))


def by_source(source, provider=None):
    provider = provider or get_provider()
    return ingest_articles(provider.top_headlines(**source_params(source)))
