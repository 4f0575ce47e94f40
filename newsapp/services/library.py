"""Per-user saved articles, reading history, preferences and password.

The list columns are JSON, so every change assigns a fresh list rather
than mutating the stored one in place.
"""

from datetime import datetime, timezone

from flask import current_app

from newsapp.errors import AuthError, DuplicateError, NotFoundError, ValidationError, check_text
from newsapp.extensions import db
from newsapp.models.article import Article, CATEGORIES

PREFERENCE_FIELDS = ('categories', 'sources', 'languages', 'countries')

# General is where unclassified articles land, not something a reader picks
PREFERENCE_CATEGORIES = tuple(c for c in CATEGORIES if c != 'General')


def save_article(user, article_id):
    check_text({'articleId': article_id})
    if not article_id:
        raise ValidationError('Article ID is required')
    if article_id in (user.saved_articles or []):
        raise DuplicateError('Article already saved')
    if not db.session.get(Article, article_id):
        raise NotFoundError('Article not found')

    user.saved_articles = list(user.saved_articles or []) + [article_id]
    db.session.commit()
    return user.saved_articles


def remove_saved_article(user, article_id):
    saved = list(user.saved_articles or [])
    remaining = [a for a in saved if a != article_id]
    if len(remaining) != len(saved):
        user.saved_articles = remaining
        db.session.commit()
    return user.saved_articles or []


def saved_articles(user):
    """Stored articles for the saved ids, in saved order."""
    ids = list(user.saved_articles or [])
    if not ids:
        return []
    by_id = {a.id: a for a in Article.query.filter(Article.id.in_(ids)).all()}
    return [by_id[i] for i in ids if i in by_id]


def record_read(user, article_id, now=None, limit=None):
    """Move ``article_id`` to the front of the history, then cap its length."""
    check_text({'articleId': article_id})
    if not article_id:
        raise ValidationError('Article ID is required')
    if limit is None:
        limit = current_app.config['READING_HISTORY_LIMIT']
    now = now or datetime.now(timezone.utc)

    history = [e for e in (user.reading_history or []) if e.get('articleId') != article_id]
    history.insert(0, {'articleId': article_id, 'readAt': now.isoformat()})
    user.reading_history = history[:limit]
    db.session.commit()
    return user.reading_history


def update_preferences(user, **fields):
    """Overwrite only the preference lists that were supplied."""
    preferences = dict(user.preferences or {})
    for field in PREFERENCE_FIELDS:
        value = fields.get(field)
        if value is None:
            continue
        if not isinstance(value, list):
            raise ValidationError(f'{field} must be a list')
        if not all(isinstance(v, str) for v in value):
            raise ValidationError(f'{field} must be a list of strings')
        if field == 'categories':
            unknown = [c for c in value if c not in PREFERENCE_CATEGORIES]
            if unknown:
                raise ValidationError('Unknown categories', ', '.join(map(str, unknown)))
        preferences[field] = list(value)

    user.preferences = preferences
    db.session.commit()
    return user.preferences


def update_profile(user, name=None, avatar=None):
    check_text({'name': name, 'avatar': avatar})
    if name:
        user.name = name.strip()
    if avatar is not None:
        user.avatar = avatar
    db.session.commit()
    return user


def change_password(user, current_password, new_password):
    check_text({'currentPassword': current_password, 'newPassword': new_password})
    if not current_password or not new_password:
        raise ValidationError('Current password and new password are required')

    min_length = current_app.config['MIN_PASSWORD_LENGTH']
    if len(new_password) < min_length:
        raise ValidationError(f'New password must be at least {min_length} characters')

    if not user.has_password:
        raise ValidationError(
            'This account does not have a password set. '
            'Please use your social login method.'
        )

    if not user.check_password(current_password):
        raise AuthError('Current password is incorrect')

    user.set_password(new_password)
    db.session.commit()
