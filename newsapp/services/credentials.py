"""Bearer tokens and password hashes.

Tokens are HS256 JWTs carrying ``userId`` and an expiry. ``decode_token``
lets PyJWT's own exceptions escape so callers can tell an expired token
(``jwt.ExpiredSignatureError``) from a malformed one
(``jwt.InvalidTokenError``).
"""

import re
from datetime import datetime, timedelta, timezone

import jwt
from flask import current_app
from werkzeug.security import check_password_hash, generate_password_hash

_ALGORITHM = 'HS256'
_EXPIRY_RE = re.compile(r'^\s*(\d+)\s*([dhms]?)\s*$')
_UNITS = {'d': 'days', 'h': 'hours', 'm': 'minutes', 's': 'seconds', '': 'seconds'}


def parse_expiry(value) -> timedelta:
    """Parse '7d', '12h', '30m', '45s' or a bare number of seconds."""
    if isinstance(value, timedelta):
        return value
    match = _EXPIRY_RE.match(str(value))
    if not match:
        raise ValueError(f'Unrecognised token expiry: {value!r}')
    amount, unit = match.groups()
    return timedelta(**{_UNITS[unit]: int(amount)})


def issue_token(user_id, expires_in=None) -> str:
    if expires_in is None:
        expires_in = current_app.config['JWT_EXPIRES_IN']
    now = datetime.now(timezone.utc)
    payload = {
        'userId': user_id,
        'iat': now,
        'exp': now + parse_expiry(expires_in),
    }
    return jwt.encode(payload, current_app.config['JWT_SECRET'], algorithm=_ALGORITHM)


def decode_token(token) -> dict:
    payload = jwt.decode(
        token,
        current_app.config['JWT_SECRET'],
        algorithms=[_ALGORITHM],
        options={'require': ['exp', 'userId']},
    )
    return payload


def hash_password(password, method=None) -> str:
    return generate_password_hash(password, method=method or 'pbkdf2:sha256:600000')


def verify_password(password_hash, candidate) -> bool:
    return check_password_hash(password_hash, candidate)
