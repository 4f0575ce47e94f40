import uuid
from datetime import datetime, timezone

from flask import current_app

from newsapp.extensions import db
from newsapp.services.credentials import hash_password, verify_password

PROVIDERS = ('local', 'google', 'facebook', 'developer', 'guest')


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = db.Column(db.String(320), nullable=False, unique=True)
    password_hash = db.Column(db.String(255), nullable=True)
    name = db.Column(db.String(200), nullable=False)
    avatar = db.Column(db.String(1000), nullable=False, default='')
    provider = db.Column(db.Enum(*PROVIDERS, name='account_provider'), nullable=False, default='guest')
    provider_id = db.Column(db.String(200), nullable=False, default='')
    credits = db.Column(db.Integer, nullable=False, default=100)
    preferences = db.Column(db.JSON, nullable=False, default=dict)
    saved_articles = db.Column(db.JSON, nullable=False, default=list)
    reading_history = db.Column(db.JSON, nullable=False, default=list)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    last_login = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        db.Index('ix_users_provider_id', 'provider', 'provider_id'),
    )

    @staticmethod
    def normalize_email(email):
        return (email or '').strip().lower()

    @property
    def has_password(self):
        return bool(self.password_hash)

    def set_password(self, password):
        if password:
            self.password_hash = hash_password(
                password, current_app.config['PASSWORD_HASH_METHOD']
            )

    def check_password(self, candidate):
        if not self.password_hash or not candidate:
            return False
        return verify_password(self.password_hash, candidate)

    def to_dict(self, include_library=False):
        """Public view of the account. The password hash never leaves here."""
        data = {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'avatar': self.avatar,
            'provider': self.provider,
            'credits': self.credits,
            'preferences': dict(self.preferences or {}),
            'lastLogin': self.last_login.isoformat() if self.last_login else None,
        }
        if include_library:
            data['savedArticles'] = list(self.saved_articles or [])
            data['readingHistory'] = list(self.reading_history or [])
        return data
