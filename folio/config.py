"""Application configuration for local, test and production environments."""

import os


def _database_url():
    url = os.getenv('DATABASE_URL', 'sqlite:///folio.db')
    # Render/Heroku style URLs are not accepted by SQLAlchemy 1.4+
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


class Config:
    """Defaults shared by all environments."""

    DEBUG = False
    TESTING = False

    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    MAX_CONTENT_LENGTH = int(os.getenv('MAX_CONTENT_LENGTH', 16 * 1024 * 1024))  # 16MB

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv('CORS_ORIGINS', '*').split(',')
        if origin.strip()
    ]

    # 'memory', 'redis' or 'none'
    CACHE_BACKEND = os.getenv('CACHE_BACKEND', 'memory')
    CACHE_TTL_SECONDS = int(os.getenv('CACHE_TTL_SECONDS', 3600))
    REDIS_URL = os.getenv('REDIS_URL', '')

    SUPABASE_URL = os.getenv('SUPABASE_URL', '')
    SUPABASE_SERVICE_KEY = os.getenv('SUPABASE_SERVICE_KEY', '')
    STORAGE_BUCKET = os.getenv('STORAGE_BUCKET', 'page-images')

    OPENAI_API_KEY = os.getenv('OPENAI_API_KEY', '')
    ANTHROPIC_API_KEY = os.getenv('ANTHROPIC_API_KEY', '')
    TRANSLATION_TIMEOUT = float(os.getenv('TRANSLATION_TIMEOUT', 60))

    OCR_LANGUAGES = os.getenv('OCR_LANGUAGES', 'eng+ara')
    TESSERACT_CMD = os.getenv('TESSERACT_CMD', '')


class DevelopmentConfig(Config):
    DEBUG = True


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    CACHE_BACKEND = 'memory'
    LOG_LEVEL = 'WARNING'


class ProductionConfig(Config):
    DEBUG = False


CONFIG_MAPPING = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig,
}
