import os
import tempfile
from urllib.parse import urlparse

basedir = os.path.abspath(os.path.dirname(__file__))


def _is_vercel_runtime():
    return bool(os.environ.get('VERCEL') or os.environ.get('VERCEL_ENV'))


def _is_production_runtime():
    flask_env = (os.environ.get('FLASK_ENV') or '').strip().lower()
    vercel_env = (os.environ.get('VERCEL_ENV') or '').strip().lower()
    return flask_env == 'production' or vercel_env == 'production'


def _as_bool(value, default=False):
    if value is None:
        return default
    return str(value).strip().lower() in {'1', 'true', 'yes', 'on'}


def _as_int(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_float(value, default):
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _database_url():
    raw = (os.environ.get('DATABASE_URL') or '').strip()
    if raw.startswith('postgres://'):
        raw = raw.replace('postgres://', 'postgresql://', 1)
    if raw:
        return raw
    if _is_vercel_runtime():
        return 'sqlite:////tmp/beyond_house.db'
    return 'sqlite:///' + os.path.join(basedir, 'beyond_house.db')


def _database_engine_options(database_url):
    if database_url.startswith('sqlite'):
        return {}
    options = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
    }
    parsed = urlparse(database_url)
    if parsed.scheme.startswith('postgresql'):
        connect_timeout_seconds = max(1, _as_int(os.environ.get('DB_CONNECT_TIMEOUT_SECONDS'), 5))
        statement_timeout_ms = max(1000, _as_int(os.environ.get('DB_STATEMENT_TIMEOUT_MS'), 8000))
        options['connect_args'] = {
            'connect_timeout': connect_timeout_seconds,
            'options': f'-c statement_timeout={statement_timeout_ms}',
        }
    return options


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or ''
    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_ENGINE_OPTIONS = _database_engine_options(SQLALCHEMY_DATABASE_URI)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    UPLOAD_FOLDER = (os.environ.get('UPLOAD_FOLDER') or '').strip() or (
        os.path.join(tempfile.gettempdir(), 'uploads') if _is_vercel_runtime() else os.path.join(basedir, 'uploads')
    )
    MEDIA_BUCKET = (os.environ.get('MEDIA_BUCKET') or 'media').strip() or 'media'
    MEDIA_MAX_UPLOAD_BYTES = _as_int(os.environ.get('MEDIA_MAX_UPLOAD_BYTES'), 5 * 1024 * 1024)
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # request ceiling; per-image limit is MEDIA_MAX_UPLOAD_BYTES
    MAX_UPLOAD_IMAGE_PIXELS = _as_int(os.environ.get('MAX_UPLOAD_IMAGE_PIXELS'), 40_000_000)

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_SECURE = _as_bool(
        os.environ.get('SESSION_COOKIE_SECURE'),
        ((os.environ.get('PREFERRED_URL_SCHEME') or '').lower() == 'https') or _is_production_runtime(),
    )
    REMEMBER_COOKIE_HTTPONLY = True
    REMEMBER_COOKIE_SAMESITE = 'Lax'
    REMEMBER_COOKIE_SECURE = SESSION_COOKIE_SECURE
    TRUST_PROXY_HEADERS = _as_bool(os.environ.get('TRUST_PROXY_HEADERS'), _is_vercel_runtime())
    PREFERRED_URL_SCHEME = os.environ.get('PREFERRED_URL_SCHEME') or ('https' if SESSION_COOKIE_SECURE else 'http')
    HSTS_ENABLED = _as_bool(os.environ.get('HSTS_ENABLED'), True)
    HSTS_MAX_AGE = _as_int(os.environ.get('HSTS_MAX_AGE'), 31536000)
    HSTS_INCLUDE_SUBDOMAINS = _as_bool(os.environ.get('HSTS_INCLUDE_SUBDOMAINS'), True)
    CSRF_EXEMPT_ENDPOINTS = ('chat.chat',)

    ADMIN_EMAIL = (os.environ.get('ADMIN_EMAIL') or 'admin@beyondhouse.co.ke').strip().lower()
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD') or ''
    AUTH_LOGIN_LIMIT = _as_int(os.environ.get('AUTH_LOGIN_LIMIT'), 5)
    AUTH_LOGIN_WINDOW_SECONDS = _as_int(os.environ.get('AUTH_LOGIN_WINDOW_SECONDS'), 300)

    CHAT_API_URL = (os.environ.get('CHAT_API_URL') or 'https://ai.gateway.lovable.dev/v1/chat/completions').strip()
    CHAT_API_KEY = (os.environ.get('CHAT_API_KEY') or os.environ.get('LOVABLE_API_KEY') or '').strip()
    CHAT_MODEL = (os.environ.get('CHAT_MODEL') or 'google/gemini-2.5-flash').strip()
    CHAT_TIMEOUT_SECONDS = _as_float(os.environ.get('CHAT_TIMEOUT_SECONDS'), 60.0)

    SENTRY_DSN = (os.environ.get('SENTRY_DSN') or '').strip()
    SENTRY_ENVIRONMENT = (os.environ.get('SENTRY_ENVIRONMENT') or '').strip()
    SENTRY_TRACES_SAMPLE_RATE = _as_float(os.environ.get('SENTRY_TRACES_SAMPLE_RATE'), 0.0)
    LOG_JSON = _as_bool(os.environ.get('LOG_JSON'), True)
    LOG_LEVEL = (os.environ.get('LOG_LEVEL') or 'INFO').strip().upper()
