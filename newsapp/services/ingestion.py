"""Turn raw provider records into stored Articles.

An article is identified by its provider URL. The first ingestion of a
URL normalizes and stores it; every later ingestion returns the stored row
as is, without re-deriving anything.
"""

import logging
import uuid
from datetime import datetime, timezone

from flask import current_app

from newsapp.extensions import db
from newsapp.models.article import Article
from newsapp.services.store import insert_if_absent
from newsapp.services.word_count import count_words, reading_time_minutes, reward_credits

logger = logging.getLogger(__name__)

NO_TITLE = 'No title available'
NO_DESCRIPTION = 'No description available'
NO_CONTENT = 'No content available'
UNKNOWN_SOURCE = 'Unknown Source'
UNKNOWN_AUTHOR = 'Unknown Author'

# Checked in this order; the first category with a matching keyword wins.
CATEGORY_KEYWORDS = (
    ('Technology', ('techcrunch', 'the-verge', 'wired', 'ars-technica')),
    ('Business', ('bloomberg', 'reuters', 'cnbc', 'financial-times')),
    ('Sports', ('espn', 'bbc-sport', 'the-sport-bible')),
)


def classify_category(source_name):
    lowered = (source_name or '').lower()
    hyphenated = '-'.join(lowered.split())
    for category, keywords in CATEGORY_KEYWORDS:
        if any(k in lowered or k in hyphenated for k in keywords):
            return category
    return 'General'


def external_key(raw):
    return raw.get('url') or f'article-{uuid.uuid4().hex}'


def _parse_published(value, fallback):
    if not value:
        return fallback
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        return fallback


def normalize_article(raw, now=None):
    """Map one raw provider record onto Article column values."""
    now = now or datetime.now(timezone.utc)
    config = current_app.config
    source = raw.get('source') or {}

    description = raw.get('description') or NO_DESCRIPTION
    content = raw.get('content') or raw.get('description') or NO_CONTENT
    source_name = source.get('name') or UNKNOWN_SOURCE

    word_count = count_words(raw.get('content') or raw.get('description') or '')

    return {
        'external_id': external_key(raw),
        'title': raw.get('title') or NO_TITLE,
        'description': description,
        'content': content,
        'url': raw.get('url') or '',
        'image_url': raw.get('urlToImage') or config['PLACEHOLDER_IMAGE_URL'],
        'published_at': _parse_published(raw.get('publishedAt'), now),
        'source_name': source_name,
        'source_id': source.get('id') or '',
        'category': classify_category(source.get('name') or ''),
        'author': raw.get('author') or UNKNOWN_AUTHOR,
        'read_time': reading_time_minutes(word_count, config['WORDS_PER_MINUTE']),
        'credits': reward_credits(
            word_count,
            config['WORDS_PER_CREDIT'],
            config['MIN_ARTICLE_CREDITS'],
            config['MAX_ARTICLE_CREDITS'],
        ),
        'tags': [],
        'language': 'en',
        'country': 'us',
        'is_active': True,
    }


def ingest_article(raw):
    """Return the stored Article for ``raw``, creating it on first sight."""
    key = external_key(raw)
    existing = Article.query.filter_by(external_id=key).first()
    if existing:
        return existing

    values = normalize_article(raw)
    values['external_id'] = key
    article, created = insert_if_absent(Article, values, 'external_id')
    if created:
        logger.debug('Ingested article %s', key)
    return article


def ingest_articles(raws):
    """Ingest a provider batch, keeping provider order.

    A record that fails to store is logged and skipped; the rest of the
    batch still goes through.
    """
    articles = []
    for raw in raws or []:
        try:
            articles.append(ingest_article(raw))
        except Exception as e:
            db.session.rollback()
            url = raw.get('url') if isinstance(raw, dict) else None
            logger.warning('Error processing article %s: %s', url, e)
    return articles
