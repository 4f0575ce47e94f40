from flask import Blueprint, g
from newsapp.api.responses import json_body, success
from newsapp.middleware.auth import require_auth
from newsapp.services import accounts
from newsapp.services.credentials import issue_token

bp = Blueprint('auth', __name__, url_prefix='/api/auth')


def _session(user, status=200):
    """Token plus public user view, the shape every sign-in route returns."""
    return success(status, token=issue_token(user.id), user=user.to_dict())


@bp.route('/signup', methods=['GET'])
def signup_info():
    return success(
        message='Signup endpoint for creating a new user account',
        method='POST',
        requiredFields=['email', 'password', 'name'],
        example={
            'email': 'user@example.com',
            'password': 'secure123',
            'name': 'John Doe',
        },
    )


@bp.route('/signup', methods=['POST'])
def signup():
    """Create a local account. Accepts: { email, password, name }"""
    data = json_body()
    user = accounts.register_local(
        data.get('email'), data.get('password'), data.get('name')
    )
    return _session(user, 201)


@bp.route('/signin', methods=['POST'])
def signin():
    data = json_body()
    user = accounts.authenticate(data.get('email'), data.get('password'))
    return _session(user)


@bp.route('/developer', methods=['POST'])
def developer_login():
    return _session(accounts.developer_account())


@bp.route('/guest', methods=['POST'])
def guest_login():
    return _session(accounts.guest_account())


@bp.route('/google', methods=['POST'])
def google_login():
    data = json_body()
    user = accounts.social_account(
        'google',
        data.get('email'),
        data.get('name'),
        avatar=data.get('picture'),
        provider_id=data.get('googleId'),
    )
    return _session(user)


@bp.route('/facebook', methods=['POST'])
def facebook_login():
    """Facebook sends the picture as { data: { url } }."""
    data = json_body()
    picture = data.get('picture')
    if isinstance(picture, dict):
        nested = picture.get('data')
        picture = nested.get('url') if isinstance(nested, dict) else None
    user = accounts.social_account(
        'facebook',
        data.get('email'),
        data.get('name'),
        avatar=picture,
        provider_id=data.get('facebookId'),
    )
    return _session(user)


@bp.route('/verify', methods=['GET'])
@require_auth
def verify():
    return success(user=g.user.to_dict())
