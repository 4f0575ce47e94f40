import json
from datetime import timedelta

from newsapp.extensions import db
from newsapp.models.user import User
from newsapp.services.credentials import issue_token, parse_expiry


def _post(client, path, payload=None, headers=None):
    return client.post(
        path,
        data=json.dumps(payload or {}),
        content_type='application/json',
        headers=headers or {},
    )


class TestSignup:
    """POST /api/auth/signup"""

    def test_signup_returns_201_with_token(self, client):
        resp = _post(client, '/api/auth/signup', {
            'email': 'A@B.com', 'password': 'secret1', 'name': 'A',
        })
        assert resp.status_code == 201
        data = resp.get_json()
        assert data['success'] is True
        assert data['token']
        assert data['user']['email'] == 'a@b.com'
        assert data['user']['credits'] == 100
        assert data['user']['preferences']['countries'] == ['us']
        assert data['user']['preferences']['languages'] == ['en']

    def test_signup_never_returns_password(self, client):
        resp = _post(client, '/api/auth/signup', {
            'email': 'a@b.com', 'password': 'secret1', 'name': 'A',
        })
        user = resp.get_json()['user']
        assert 'password' not in user
        assert 'password_hash' not in user

    def test_password_is_stored_hashed(self, client):
        _post(client, '/api/auth/signup', {
            'email': 'a@b.com', 'password': 'secret1', 'name': 'A',
        })
        stored = User.query.filter_by(email='a@b.com').one()
        assert stored.password_hash != 'secret1'
        assert stored.check_password('secret1') is True

    def test_signup_missing_fields_returns_400(self, client):
        resp = _post(client, '/api/auth/signup', {'email': 'a@b.com'})
        assert resp.status_code == 400
        data = resp.get_json()
        assert data['success'] is False
        assert data['error'] == 'Email, password, and name are required'

    def test_signup_short_password_returns_400(self, client):
        resp = _post(client, '/api/auth/signup', {
            'email': 'a@b.com', 'password': '123', 'name': 'A',
        })
        assert resp.status_code == 400

    def test_duplicate_email_case_insensitive(self, client):
        _post(client, '/api/auth/signup', {
            'email': 'a@b.com', 'password': 'secret1', 'name': 'A',
        })
        resp = _post(client, '/api/auth/signup', {
            'email': ' A@B.COM ', 'password': 'secret2', 'name': 'Other',
        })
        assert resp.status_code == 400
        assert resp.get_json()['error'] == 'User with this email already exists'

    def test_signup_info(self, client):
        resp = client.get('/api/auth/signup')
        assert resp.status_code == 200
        assert resp.get_json()['requiredFields'] == ['email', 'password', 'name']


class TestSignin:
    """POST /api/auth/signin"""

    def test_signin_sets_last_login(self, client):
        signup = _post(client, '/api/auth/signup', {
            'email': 'a@b.com', 'password': 'secret1', 'name': 'A',
        }).get_json()
        assert signup['user']['lastLogin'] is None

        first = _post(client, '/api/auth/signin', {'email': 'a@b.com', 'password': 'secret1'})
        assert first.status_code == 200
        first_login = first.get_json()['user']['lastLogin']
        assert first_login is not None
        assert first.get_json()['token']

        second = _post(client, '/api/auth/signin', {'email': 'a@b.com', 'password': 'secret1'})
        assert second.get_json()['user']['lastLogin'] >= first_login

    def test_wrong_password_returns_401(self, client, user):
        resp = _post(client, '/api/auth/signin', {'email': user.email, 'password': 'nope-nope'})
        assert resp.status_code == 401
        assert resp.get_json()['error'] == 'Invalid email or password'

    def test_unknown_email_returns_401(self, client):
        resp = _post(client, '/api/auth/signin', {'email': 'ghost@x.com', 'password': 'secret1'})
        assert resp.status_code == 401

    def test_social_account_cannot_sign_in_with_password(self, client):
        _post(client, '/api/auth/google', {'email': 'g@x.com', 'name': 'G', 'googleId': 'g-1'})
        resp = _post(client, '/api/auth/signin', {'email': 'g@x.com', 'password': 'whatever'})
        assert resp.status_code == 401
        assert 'social login' in resp.get_json()['error']

    def test_missing_fields_returns_400(self, client):
        resp = _post(client, '/api/auth/signin', {'email': 'a@b.com'})
        assert resp.status_code == 400


class TestDeveloperAndGuest:

    def test_developer_is_a_singleton(self, client):
        first = _post(client, '/api/auth/developer').get_json()
        second = _post(client, '/api/auth/developer').get_json()
        assert first['user']['id'] == second['user']['id']
        assert first['user']['credits'] == 1000
        assert first['user']['provider'] == 'developer'
        assert User.query.filter_by(provider='developer').count() == 1

    def test_guest_accounts_are_fresh(self, client):
        first = _post(client, '/api/auth/guest').get_json()
        second = _post(client, '/api/auth/guest').get_json()
        assert first['user']['id'] != second['user']['id']
        assert first['user']['credits'] == 50
        assert first['user']['preferences']['categories'] == ['Technology', 'World', 'Business']


class TestSocialLogin:

    def test_google_creates_then_reuses(self, client):
        payload = {'email': 'g@x.com', 'name': 'G', 'picture': 'https://img/g.png', 'googleId': 'g-1'}
        first = _post(client, '/api/auth/google', payload).get_json()
        second = _post(client, '/api/auth/google', payload).get_json()
        assert first['user']['id'] == second['user']['id']
        assert first['user']['avatar'] == 'https://img/g.png'
        assert 'Google News' in first['user']['preferences']['sources']

    def test_google_matches_on_provider_id(self, client):
        first = _post(client, '/api/auth/google', {
            'email': 'old@x.com', 'name': 'G', 'googleId': 'g-1',
        }).get_json()
        second = _post(client, '/api/auth/google', {
            'email': 'new@x.com', 'name': 'G', 'googleId': 'g-1',
        }).get_json()
        assert first['user']['id'] == second['user']['id']

    def test_facebook_picture_payload(self, client):
        resp = _post(client, '/api/auth/facebook', {
            'email': 'f@x.com', 'name': 'F', 'facebookId': 'f-1',
            'picture': {'data': {'url': 'https://img/f.png'}},
        })
        assert resp.status_code == 200
        user = resp.get_json()['user']
        assert user['avatar'] == 'https://img/f.png'
        assert user['provider'] == 'facebook'

    def test_social_missing_email_returns_400(self, client):
        resp = _post(client, '/api/auth/google', {'name': 'G'})
        assert resp.status_code == 400


class TestTokenBoundary:
    """GET /api/auth/verify and the require_auth decorator."""

    def test_verify_valid_token(self, client, user, auth_headers):
        resp = client.get('/api/auth/verify', headers=auth_headers)
        assert resp.status_code == 200
        assert resp.get_json()['user']['id'] == user.id

    def test_missing_token(self, client):
        resp = client.get('/api/auth/verify')
        assert resp.status_code == 401
        assert resp.get_json()['error'] == 'Access denied. No token provided.'

    def test_expired_and_malformed_are_distinct(self, client, user):
        expired = issue_token(user.id, expires_in=timedelta(seconds=-5))
        resp_expired = client.get('/api/auth/verify', headers={'Authorization': f'Bearer {expired}'})
        resp_bad = client.get('/api/auth/verify', headers={'Authorization': 'Bearer not.a.token'})

        assert resp_expired.status_code == 401
        assert resp_bad.status_code == 401
        assert resp_expired.get_json()['error'] == 'Token expired.'
        assert resp_bad.get_json()['error'] == 'Invalid token.'

    def test_token_signed_with_other_secret(self, client, user, app):
        app.config['JWT_SECRET'] = 'other-secret'
        token = issue_token(user.id)
        app.config['JWT_SECRET'] = 'test-secret'
        resp = client.get('/api/auth/verify', headers={'Authorization': f'Bearer {token}'})
        assert resp.status_code == 401
        assert resp.get_json()['error'] == 'Invalid token.'

    def test_token_for_missing_user(self, client):
        token = issue_token('no-such-user')
        resp = client.get('/api/auth/verify', headers={'Authorization': f'Bearer {token}'})
        assert resp.status_code == 401
        assert resp.get_json()['error'] == 'Invalid token. User not found.'

    def test_deactivated_user_rejected(self, client, user, auth_headers):
        user.is_active = False
        db.session.commit()
        resp = client.get('/api/auth/verify', headers=auth_headers)
        assert resp.status_code == 401
        assert resp.get_json()['error'] == 'Account is deactivated.'


class TestParseExpiry:
    def test_units(self):
        assert parse_expiry('7d') == timedelta(days=7)
        assert parse_expiry('12h') == timedelta(hours=12)
        assert parse_expiry('30m') == timedelta(minutes=30)
        assert parse_expiry('45') == timedelta(seconds=45)

    def test_rejects_garbage(self):
        import pytest
        with pytest.raises(ValueError):
            parse_expiry('next week')


class TestWronglyTypedInput:
    """Bodies and fields of the wrong JSON type are 400s, never 500s."""

    def test_array_body_is_treated_as_empty(self, client):
        resp = _post(client, '/api/auth/signup', ['x'])
        assert resp.status_code == 400
        assert resp.get_json()['error'] == 'Email, password, and name are required'

    def test_signup_non_string_email(self, client):
        resp = _post(client, '/api/auth/signup', {
            'email': 123, 'password': 'secret1', 'name': 'A',
        })
        assert resp.status_code == 400
        assert resp.get_json()['error'] == 'email must be a string'
        assert User.query.count() == 0

    def test_signin_non_string_password(self, client, user):
        resp = _post(client, '/api/auth/signin', {
            'email': 'reader@example.com', 'password': 123456,
        })
        assert resp.status_code == 400
        assert resp.get_json()['error'] == 'password must be a string'

    def test_google_non_string_name(self, client):
        resp = _post(client, '/api/auth/google', {'email': 'g@b.com', 'name': ['G']})
        assert resp.status_code == 400
        assert resp.get_json()['error'] == 'name must be a string'
        assert User.query.count() == 0

    def test_facebook_odd_picture_shape(self, client):
        resp = _post(client, '/api/auth/facebook', {
            'email': 'f@b.com', 'name': 'F', 'picture': {'data': 'nope'},
        })
        assert resp.status_code == 200
        assert resp.get_json()['user']['avatar'] == ''
