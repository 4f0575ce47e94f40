import jwt
from functools import wraps
from flask import request, jsonify, g
from newsapp.extensions import db
from newsapp.models.user import User
from newsapp.services.credentials import decode_token


def _unauthorized(error):
    return jsonify({'success': False, 'error': error}), 401


def bearer_token():
    auth_header = request.headers.get('Authorization', '')
    if auth_header.startswith('Bearer '):
        return auth_header[7:].strip() or None
    return None


def require_auth(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        token = bearer_token()
        if not token:
            return _unauthorized('Access denied. No token provided.')

        try:
            payload = decode_token(token)
        except jwt.ExpiredSignatureError:
            return _unauthorized('Token expired.')
        except jwt.InvalidTokenError:
            return _unauthorized('Invalid token.')

        user = db.session.get(User, str(payload['userId']))
        if not user:
            return _unauthorized('Invalid token. User not found.')

        if not user.is_active:
            return _unauthorized('Account is deactivated.')

        g.user_id = user.id
        g.user = user
        g.jwt_payload = payload

        return f(*args, **kwargs)
    return decorated
