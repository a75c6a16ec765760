"""Configuration module for Flask application."""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_flag(name, default='false'):
    return os.getenv(name, default).lower() in ('1', 'true', 'yes')


class Config:
    """Base configuration class."""

    # Flask
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('FLASK_DEBUG', '0') == '1'
    ENV = os.getenv('FLASK_ENV', 'development')
    TESTING = False

    # Session Configuration (Production-safe defaults)
    SESSION_COOKIE_SECURE = _env_flag('SESSION_COOKIE_SECURE')
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = os.getenv('SESSION_COOKIE_SAMESITE', 'Lax')

    # Database - Priority: DATABASE_URL > DB_*
    DATABASE_URL = os.getenv('DATABASE_URL')

    if not DATABASE_URL:
        DB_HOST = os.getenv('DB_HOST', 'localhost')
        DB_PORT = os.getenv('DB_PORT', '5432')
        DB_NAME = os.getenv('DB_NAME', 'linkhub')
        DB_USER = os.getenv('DB_USER', 'linkhub')
        DB_PASSWORD = os.getenv('DB_PASSWORD', 'linkhub')

        DATABASE_URL = (
            f"postgresql+psycopg://{DB_USER}:{DB_PASSWORD}"
            f"@{DB_HOST}:{DB_PORT}/{DB_NAME}"
        )

    # SQLAlchemy
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_ECHO = _env_flag('SQLALCHEMY_ECHO')
    SQLALCHEMY_POOL_SIZE = int(os.getenv('SQLALCHEMY_POOL_SIZE', '10'))
    SQLALCHEMY_MAX_OVERFLOW = int(os.getenv('SQLALCHEMY_MAX_OVERFLOW', '20'))

    # Object Storage Configuration (S3, R2, MinIO)
    S3_ENDPOINT = os.getenv('S3_ENDPOINT', 'http://minio:9000')
    S3_ACCESS_KEY = os.getenv('S3_ACCESS_KEY', 'minioadmin')
    S3_SECRET_KEY = os.getenv('S3_SECRET_KEY', 'minioadmin')
    S3_BUCKET = os.getenv('S3_BUCKET', 'uploads')
    S3_REGION = os.getenv('S3_REGION', 'us-east-1')
    S3_PUBLIC_URL = os.getenv('S3_PUBLIC_URL', 'http://localhost:9000')

    # Upload constraints
    MAX_UPLOAD_SIZE = int(os.getenv('MAX_UPLOAD_SIZE', 2 * 1024 * 1024))  # 2MB
    ALLOWED_MIME_TYPES = {
        'image/jpeg',
        'image/png',
        'image/gif',
        'image/webp',
        'image/svg+xml',
    }

    # Redis-backed edge config (reserved slugs, beta feature allow-lists)
    REDIS_URL = os.getenv('REDIS_URL', 'redis://redis:6379/0')
    CACHE_ENABLED = _env_flag('CACHE_ENABLED', 'true')
    CACHE_KEY_PREFIX = os.getenv('CACHE_KEY_PREFIX', 'linkhub')
    EDGE_CONFIG_KEY_PREFIX = os.getenv('EDGE_CONFIG_KEY_PREFIX', CACHE_KEY_PREFIX)

    # Beta features reported in workspace flags
    BETA_FEATURES = tuple(
        feature.strip()
        for feature in os.getenv('BETA_FEATURES', 'noDubLink,analyticsSettingsSiteVisitTracking').split(',')
        if feature.strip()
    )

    # Return raw internal error messages to API callers
    EXPOSE_ERROR_DETAILS = _env_flag('EXPOSE_ERROR_DETAILS', '1' if DEBUG else 'false')

    BACKGROUND_WORKERS = int(os.getenv('BACKGROUND_WORKERS', '4'))
    PARTNERS_PAGE_SIZE = int(os.getenv('PARTNERS_PAGE_SIZE', '100'))

    # Error tracking
    SENTRY_DSN = os.getenv('SENTRY_DSN')


class TestConfig(Config):
    """Configuration used by the test suite."""

    TESTING = True
    DEBUG = False
    ENV = 'testing'
    SECRET_KEY = 'test-secret-key'

    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ECHO = False

    S3_ENDPOINT = 'http://storage.test'
    S3_BUCKET = 'test-uploads'
    S3_PUBLIC_URL = 'https://cdn.test'

    CACHE_ENABLED = False
    EDGE_CONFIG_KEY_PREFIX = 'test'
    BETA_FEATURES = ('noDubLink', 'analyticsSettingsSiteVisitTracking')
    EXPOSE_ERROR_DETAILS = False
    BACKGROUND_WORKERS = 1
    PARTNERS_PAGE_SIZE = 100
    SENTRY_DSN = None
