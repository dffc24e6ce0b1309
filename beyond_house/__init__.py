import os
import re
import secrets
import json
import logging
from urllib.parse import urlparse
from flask import Flask, abort, flash, g, has_request_context, redirect, render_template, request, session, url_for
from flask_login import current_user
from markupsafe import Markup, escape
from sqlalchemy import text
from werkzeug.middleware.proxy_fix import ProxyFix

from .auth import is_admin, login_manager
from .config import Config
from .content import get_site_settings
from .models import db, SiteSettings, UserRole, ROLE_ADMIN

_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._:-]{8,80}$")
_sentry_initialized = False


class JsonLogFormatter(logging.Formatter):
    def format(self, record):
        payload = {
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'time': self.formatTime(record, self.datefmt),
        }
        if has_request_context():
            payload.update(
                {
                    'request_id': getattr(g, 'request_id', ''),
                    'method': request.method,
                    'path': request.path,
                    'remote_ip': request.remote_addr,
                }
            )
        if record.exc_info:
            payload['exc_info'] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(app):
    if not app.config.get('LOG_JSON', True):
        return
    formatter = JsonLogFormatter()
    for handler in app.logger.handlers:
        handler.setFormatter(formatter)
    app.logger.setLevel(getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))


def get_csrf_token():
    token = session.get('_csrf_token')
    if not token:
        token = secrets.token_urlsafe(32)
        session['_csrf_token'] = token
    return token


def csrf_input():
    token = get_csrf_token()
    return Markup(f'<input type="hidden" name="_csrf_token" value="{escape(token)}">')  # nosec B704


def get_csp_nonce():
    nonce = getattr(g, 'csp_nonce', '')
    if nonce:
        return nonce
    nonce = secrets.token_urlsafe(16)
    g.csp_nonce = nonce
    return nonce


def safe_referrer_path(fallback):
    raw_referrer = (request.referrer or '').strip()
    if not raw_referrer:
        return fallback

    parsed = urlparse(raw_referrer)
    if parsed.scheme and parsed.scheme not in {'http', 'https'}:
        return fallback
    if parsed.netloc and parsed.netloc != request.host:
        return fallback

    path = parsed.path or '/'
    if not path.startswith('/'):
        return fallback

    target = path
    if parsed.query:
        target = f"{target}?{parsed.query}"
    return target


def init_sentry(app):
    global _sentry_initialized
    if _sentry_initialized:
        return

    dsn = (app.config.get('SENTRY_DSN') or '').strip()
    if not dsn:
        return

    try:
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration
        from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

        traces_sample_rate = float(app.config.get('SENTRY_TRACES_SAMPLE_RATE') or 0.0)
        sentry_sdk.init(
            dsn=dsn,
            integrations=[FlaskIntegration(), SqlalchemyIntegration()],
            traces_sample_rate=traces_sample_rate,
            environment=(app.config.get('SENTRY_ENVIRONMENT') or None),
        )
        _sentry_initialized = True
        app.logger.info('Sentry monitoring enabled.')
    except Exception:
        app.logger.exception('Failed to initialize Sentry monitoring.')


def create_app(config_overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)
    configure_logging(app)

    asset_version = (app.config.get('ASSET_VERSION') or '').strip()
    if not asset_version:
        commit_sha = (os.environ.get('GITHUB_SHA') or os.environ.get('VERCEL_GIT_COMMIT_SHA') or '').strip()
        if commit_sha:
            asset_version = commit_sha[:12]
        else:
            css_path = os.path.join(app.static_folder or '', 'css', 'style.css')
            try:
                asset_version = str(int(os.path.getmtime(css_path)))
            except OSError:
                asset_version = 'dev'
    app.config['ASSET_VERSION'] = asset_version

    if not app.config.get('SECRET_KEY'):
        import warnings
        app.config['SECRET_KEY'] = secrets.token_urlsafe(32)
        warnings.warn(
            'SECRET_KEY is not set, using a random key. '
            'Sessions will not survive restarts. '
            'Set the SECRET_KEY environment variable for production.',
            stacklevel=2,
        )

    if app.config.get('TRUST_PROXY_HEADERS'):
        # Only trust one proxy hop (the platform edge) when explicitly enabled.
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)

    init_sentry(app)
    os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)

    db.init_app(app)
    login_manager.init_app(app)
    csrf_exempt = set(app.config.get('CSRF_EXEMPT_ENDPOINTS') or ())

    @app.before_request
    def assign_request_id():
        incoming = (request.headers.get('X-Request-ID') or '').strip()
        if _REQUEST_ID_RE.match(incoming):
            g.request_id = incoming
        else:
            g.request_id = secrets.token_hex(16)

    @app.before_request
    def enforce_csrf():
        if request.method not in ('POST', 'PUT', 'PATCH', 'DELETE'):
            return
        if request.endpoint in csrf_exempt:
            return
        expected = session.get('_csrf_token')
        provided = request.form.get('_csrf_token') or request.headers.get('X-CSRF-Token')
        if not expected or not provided or not secrets.compare_digest(expected, provided):
            abort(400, description='Invalid or missing CSRF token.')

    @app.before_request
    def ensure_csp_nonce():
        get_csp_nonce()

    @app.context_processor
    def inject_globals():
        try:
            user_is_admin = is_admin(current_user)
        except Exception:
            db.session.rollback()
            user_is_admin = False
        return dict(
            site_settings=get_site_settings(),
            csrf_token=get_csrf_token,
            csrf_input=csrf_input,
            csp_nonce=get_csp_nonce(),
            asset_v=app.config.get('ASSET_VERSION', 'dev'),
            user_is_admin=user_is_admin,
        )

    @app.after_request
    def add_security_headers(response):
        response.headers['X-Request-ID'] = getattr(g, 'request_id', '')
        response.headers.setdefault('X-Content-Type-Options', 'nosniff')
        response.headers.setdefault('X-Frame-Options', 'DENY')
        response.headers.setdefault('Referrer-Policy', 'strict-origin-when-cross-origin')
        response.headers.setdefault('Permissions-Policy', 'geolocation=(), microphone=(), camera=()')
        response.headers.setdefault('Cross-Origin-Resource-Policy', 'same-origin')
        response.headers.setdefault('X-Permitted-Cross-Domain-Policies', 'none')
        response.headers.setdefault('Cross-Origin-Opener-Policy', 'same-origin')
        if request.is_secure and app.config.get('HSTS_ENABLED', True):
            hsts_max_age = max(0, int(app.config.get('HSTS_MAX_AGE', 31536000)))
            hsts_parts = [f'max-age={hsts_max_age}']
            if app.config.get('HSTS_INCLUDE_SUBDOMAINS', True):
                hsts_parts.append('includeSubDomains')
            response.headers.setdefault('Strict-Transport-Security', '; '.join(hsts_parts))
        if request.path.startswith('/admin') or request.path.startswith('/auth'):
            response.headers.setdefault('X-Robots-Tag', 'noindex, nofollow, noarchive')

        if request.path.startswith('/static/') and response.status_code in (200, 304):
            response.headers['Cache-Control'] = 'public, max-age=31536000, immutable'
        elif request.path.startswith('/media/') and response.status_code in (200, 304):
            # Object names are timestamped and never overwritten.
            response.headers['Cache-Control'] = 'public, max-age=3600'

        # Always refresh rendered HTML so CMS edits show up immediately.
        if response.content_type and response.content_type.startswith('text/html'):
            nonce = get_csp_nonce()
            response.headers['Cache-Control'] = 'no-store, no-cache, must-revalidate, max-age=0'
            response.headers['Pragma'] = 'no-cache'
            response.headers['Expires'] = '0'
            csp_parts = [
                "default-src 'self'",
                "base-uri 'self'",
                "frame-ancestors 'none'",
                "form-action 'self'",
                "object-src 'none'",
                "img-src 'self' data: https:",
                f"script-src 'self' 'nonce-{nonce}'",
                f"style-src 'self' 'nonce-{nonce}'",
                "font-src 'self' data:",
                "connect-src 'self'",
            ]
            if request.is_secure:
                csp_parts.append('upgrade-insecure-requests')
            response.headers['Content-Security-Policy'] = "; ".join(csp_parts)
        return response

    @app.errorhandler(400)
    def handle_bad_request(error):
        description = str(getattr(error, 'description', '') or '')
        if 'CSRF' in description:
            if request.is_json or request.path.endswith('/reorder') or request.path.endswith('/upload'):
                return {'error': 'Your session expired. Please reload the page.'}, 400
            flash('Your form session expired. Please retry your action.', 'danger')
            return redirect(safe_referrer_path(url_for('main.index')))
        return error

    @app.errorhandler(404)
    def handle_not_found(error):
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def handle_server_error(error):
        return render_template('errors/500.html'), 500

    @app.get('/healthz')
    def healthz():
        try:
            db.session.execute(text('SELECT 1'))
            return {'status': 'ok'}, 200
        except Exception:
            db.session.rollback()
            app.logger.exception('Health check DB probe failed.')
            return {'status': 'degraded'}, 503

    @app.get('/readyz')
    def readyz():
        checks = {
            'database': False,
            'site_settings_seeded': False,
            'admin_role_seeded': False,
        }
        try:
            db.session.execute(text('SELECT 1'))
            checks['database'] = True
            checks['site_settings_seeded'] = db.session.query(SiteSettings.id).first() is not None
            checks['admin_role_seeded'] = db.session.query(UserRole.id).filter_by(role=ROLE_ADMIN).first() is not None
            all_ready = all(checks.values())
            return {'status': 'ready' if all_ready else 'warming', 'checks': checks}, (200 if all_ready else 503)
        except Exception:
            db.session.rollback()
            app.logger.exception('Readiness check failed.')
            return {'status': 'degraded', 'checks': checks}, 503

    from .routes.main import main_bp
    from .routes.auth import auth_bp
    from .routes.admin import admin_bp
    from .routes.chat import chat_bp
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(chat_bp)

    with app.app_context():
        try:
            db.create_all()
        except Exception:
            app.logger.exception('db.create_all() failed, tables may need manual migration.')
        try:
            from .seed import seed_database
            seed_database()
        except Exception:
            app.logger.exception('seed_database() failed, seeding skipped.')

    return app
