"""Accounts, role lookup and the admin gate.

The role table is the only authorization signal: a user is an admin exactly
when a ``user_roles`` row with role ``admin`` exists for them.
"""
from datetime import timedelta
from functools import wraps

from flask import current_app, flash, redirect, url_for
from flask_login import LoginManager, current_user, login_user, logout_user
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from .models import (
    db,
    AuthRateLimitBucket,
    Profile,
    User,
    UserRole,
    ROLE_ADMIN,
    ROLE_USER,
    normalize_app_role,
    utc_now_naive,
)
from .utils import get_request_ip

login_manager = LoginManager()
login_manager.login_view = 'auth.auth'
login_manager.login_message = None

AUTH_DUMMY_HASH = generate_password_hash('BeyondHouse::dummy-auth-check')
SIGN_IN_SCOPE = 'sign_in'
ACCESS_DENIED_MESSAGE = (
    "Access Denied. You don't have admin privileges. "
    'Please contact an administrator to request access.'
)


class AuthError(Exception):
    """Sign-in or sign-up failed; the message is shown to the user."""


@login_manager.user_loader
def load_user(user_id):
    try:
        parsed_id = int(user_id)
    except (TypeError, ValueError):
        return None
    return db.session.get(User, parsed_id)


def is_admin(user):
    if user is None or not getattr(user, 'is_authenticated', False):
        return False
    return db.session.query(UserRole.id).filter_by(user_id=user.id, role=ROLE_ADMIN).first() is not None


def grant_role(user, role):
    role = normalize_app_role(role)
    if not UserRole.query.filter_by(user_id=user.id, role=role).first():
        db.session.add(UserRole(user_id=user.id, role=role))


def admin_required(view):
    """Redirect anonymous users to sign in and non-admins home."""

    @wraps(view)
    def wrapped(*args, **kwargs):
        if not current_user.is_authenticated:
            return redirect(url_for('auth.auth'))
        if not is_admin(current_user):
            flash(ACCESS_DENIED_MESSAGE, 'danger')
            return redirect(url_for('main.index'))
        return view(*args, **kwargs)

    return wrapped


def _normalize_email(email):
    return (email or '').strip().lower()


def sign_up(email, password, full_name=''):
    email = _normalize_email(email)
    if User.query.filter_by(email=email).first():
        raise AuthError('An account with this email already exists. Please sign in instead.')
    user = User(email=email)
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.flush()
        db.session.add(Profile(id=user.id, full_name=(full_name or '').strip()[:100] or None, email=email))
        grant_role(user, ROLE_USER)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise AuthError('An account with this email already exists. Please sign in instead.')
    login_user(user)
    current_app.logger.info('New account created (id=%s).', user.id)
    return user


def _login_bucket():
    ip = get_request_ip()
    now = utc_now_naive()
    window = current_app.config.get('AUTH_LOGIN_WINDOW_SECONDS', 300)
    bucket = AuthRateLimitBucket.query.filter_by(scope=SIGN_IN_SCOPE, ip=ip).first()
    if not bucket:
        bucket = AuthRateLimitBucket(scope=SIGN_IN_SCOPE, ip=ip, count=0, reset_at=now + timedelta(seconds=window))
        db.session.add(bucket)
        db.session.commit()
        return bucket
    if bucket.reset_at <= now:
        bucket.count = 0
        bucket.reset_at = now + timedelta(seconds=window)
        db.session.commit()
    return bucket


def sign_in_rate_limited():
    bucket = _login_bucket()
    if bucket.count < current_app.config.get('AUTH_LOGIN_LIMIT', 5):
        return False, 0
    return True, max(1, int((bucket.reset_at - utc_now_naive()).total_seconds()))


def _register_sign_in_failure():
    bucket = _login_bucket()
    bucket.count += 1
    db.session.commit()


def _clear_sign_in_failures():
    bucket = AuthRateLimitBucket.query.filter_by(scope=SIGN_IN_SCOPE, ip=get_request_ip()).first()
    if bucket:
        db.session.delete(bucket)
        db.session.commit()


def sign_in(email, password):
    user = User.query.filter_by(email=_normalize_email(email)).first()
    if user:
        password_ok = user.check_password(password)
    else:
        # Keep response timing closer for unknown emails.
        check_password_hash(AUTH_DUMMY_HASH, password or '')
        password_ok = False
    if not password_ok:
        _register_sign_in_failure()
        raise AuthError('Invalid email or password. Please try again.')
    _clear_sign_in_failures()
    login_user(user)
    return user


def sign_out():
    logout_user()


def ensure_admin_account():
    """Create or re-sync the bootstrap admin from ADMIN_EMAIL / ADMIN_PASSWORD."""
    email = _normalize_email(current_app.config.get('ADMIN_EMAIL'))
    password = current_app.config.get('ADMIN_PASSWORD') or ''
    if not email or not password:
        return None
    user = User.query.filter_by(email=email).first()
    if user is None:
        user = User(email=email)
        db.session.add(user)
        user.set_password(password)
        db.session.flush()
        db.session.add(Profile(id=user.id, full_name='Administrator', email=email))
    else:
        user.set_password(password)
    grant_role(user, ROLE_ADMIN)
    db.session.commit()
    return user
