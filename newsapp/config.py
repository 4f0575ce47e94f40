import os
from dotenv import load_dotenv

load_dotenv()

def _fix_db_url(url):
    """Fix common DATABASE_URL issues for SQLAlchemy compatibility."""
    if not url:
        return 'sqlite:///app.db'
    # Heroku/Railway use postgres:// but SQLAlchemy requires postgresql://
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url

class Config:
    SQLALCHEMY_DATABASE_URI = _fix_db_url(os.environ.get('DATABASE_URL', ''))
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # News provider
    NEWS_API_KEY = os.environ.get('NEWS_API_KEY', '')
    NEWS_API_BASE_URL = os.environ.get('NEWS_API_BASE_URL', 'https://newsapi.org/v2')
    NEWS_API_TIMEOUT = int(os.environ.get('NEWS_API_TIMEOUT', '10'))
    NEWS_PAGE_SIZE = 20

    # Tokens and passwords
    JWT_SECRET = os.environ.get('JWT_SECRET', 'fallback-secret')
    JWT_EXPIRES_IN = os.environ.get('JWT_EXPIRES_IN', '7d')
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256:600000'
    MIN_PASSWORD_LENGTH = 6

    # Article derivations
    WORDS_PER_MINUTE = 200
    WORDS_PER_CREDIT = 50
    MIN_ARTICLE_CREDITS = 5
    MAX_ARTICLE_CREDITS = 30
    PLACEHOLDER_IMAGE_URL = 'https://picsum.photos/400/600'

    READING_HISTORY_LIMIT = 100

class DevConfig(Config):
    DEBUG = True

class ProdConfig(Config):
    DEBUG = False

class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    JWT_SECRET = 'test-secret'
    NEWS_API_KEY = 'test-key'
    NEWS_API_BASE_URL = 'https://newsapi.test/v2'
    # Keep hashing cheap so the suite stays fast
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256:1000'
