"""Account creation and sign-in.

Starting credits and default preferences live in ``ACCOUNT_DEFAULTS``,
one row per account provider, and are applied by ``new_user``.
"""

import logging
import uuid
from datetime import datetime, timezone
from urllib.parse import quote

from flask import current_app
from sqlalchemy.exc import IntegrityError

from newsapp.errors import AuthError, DuplicateError, ValidationError, check_text
from newsapp.extensions import db
from newsapp.models.user import User
from newsapp.services.store import insert_if_absent

logger = logging.getLogger(__name__)

_FULL_PREFERENCES = {
    'categories': ['Technology', 'World', 'Business', 'Science', 'Health'],
    'sources': ['BBC', 'CNN', 'Reuters', 'TechCrunch', 'The Verge'],
    'languages': ['en'],
    'countries': ['us'],
}

ACCOUNT_DEFAULTS = {
    'local': {'credits': 100, 'preferences': _FULL_PREFERENCES},
    'developer': {'credits': 1000, 'preferences': _FULL_PREFERENCES},
    'guest': {
        'credits': 50,
        'preferences': {
            'categories': ['Technology', 'World', 'Business'],
            'sources': ['BBC', 'CNN', 'Reuters'],
            'languages': ['en'],
            'countries': ['us'],
        },
    },
    'google': {
        'credits': 100,
        'preferences': {
            'categories': ['Technology', 'World', 'Business'],
            'sources': ['Google News', 'BBC', 'CNN'],
            'languages': ['en'],
            'countries': ['us'],
        },
    },
    'facebook': {
        'credits': 100,
        'preferences': {
            'categories': ['Technology', 'World', 'Business'],
            'sources': ['Facebook News', 'BBC', 'CNN'],
            'languages': ['en'],
            'countries': ['us'],
        },
    },
}

DEVELOPER_EMAIL = 'developer@newsapp.com'


def default_values(provider):
    defaults = ACCOUNT_DEFAULTS[provider]
    return {
        'provider': provider,
        'credits': defaults['credits'],
        'preferences': {k: list(v) for k, v in defaults['preferences'].items()},
        'saved_articles': [],
        'reading_history': [],
        'is_active': True,
    }


def new_user(provider, **fields):
    """Build (but don't add) a User with the provider's defaults applied."""
    values = default_values(provider)
    values.update(fields)
    password = values.pop('password', None)
    user = User(**values)
    user.set_password(password)
    return user


def _initials_avatar(name):
    return f'https://ui-avatars.com/api/?name={quote(name)}&background=667eea&color=fff'


def register_local(email, password, name):
    check_text({'email': email, 'password': password, 'name': name})
    if not email or not password or not name:
        raise ValidationError('Email, password, and name are required')

    min_length = current_app.config['MIN_PASSWORD_LENGTH']
    if len(password) < min_length:
        raise ValidationError(f'Password must be at least {min_length} characters')

    email = User.normalize_email(email)
    if User.query.filter_by(email=email).first():
        raise DuplicateError('User with this email already exists')

    user = new_user(
        'local',
        email=email,
        password=password,
        name=name.strip(),
        avatar=_initials_avatar(name.strip()),
    )
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise DuplicateError('User with this email already exists')

    logger.info('Created local account %s', user.id)
    return user


def authenticate(email, password):
    check_text({'email': email, 'password': password})
    if not email or not password:
        raise ValidationError('Email and password are required')

    user = User.query.filter_by(email=User.normalize_email(email)).first()
    if not user:
        raise AuthError('Invalid email or password')

    if not user.has_password:
        raise AuthError(
            'This account was created with social login. '
            'Please use that method to sign in.'
        )

    if not user.check_password(password):
        raise AuthError('Invalid email or password')

    user.last_login = datetime.now(timezone.utc)
    db.session.commit()
    return user


def developer_account():
    """Fetch or create the one developer account."""
    values = default_values('developer')
    values.update(
        id=str(uuid.uuid4()),
        email=DEVELOPER_EMAIL,
        name='Developer User',
        avatar='https://via.placeholder.com/150/667eea/ffffff?text=DEV',
        provider_id='developer-user',
    )
    user, created = insert_if_absent(User, values, 'email')
    if created:
        logger.info('Created developer account %s', user.id)
    return user


def guest_account():
    guest_id = f'guest-{uuid.uuid4().hex}'
    user = new_user(
        'guest',
        email=f'{guest_id}@guest.newsapp.com',
        name='Guest User',
        avatar='https://via.placeholder.com/150/cccccc/ffffff?text=GUEST',
        provider_id=guest_id,
    )
    db.session.add(user)
    db.session.commit()
    return user


def social_account(provider, email, name, avatar=None, provider_id=None):
    """Find a google/facebook account by email or provider id, else create it."""
    check_text({'email': email, 'name': name, 'avatar': avatar, 'providerId': provider_id})
    if not email or not name:
        raise ValidationError('Email and name are required')

    email = User.normalize_email(email)
    user = User.query.filter_by(email=email).first()
    if not user and provider_id:
        user = User.query.filter_by(provider=provider, provider_id=provider_id).first()
    if user:
        return user

    values = default_values(provider)
    values.update(
        id=str(uuid.uuid4()),
        email=email,
        name=name.strip(),
        avatar=avatar or '',
        provider_id=provider_id or '',
    )
    user, created = insert_if_absent(User, values, 'email')
    if created:
        logger.info('Created %s account %s', provider, user.id)
    return user
