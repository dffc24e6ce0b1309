import re
import uuid

import pytest

from beyond_house import create_app
from beyond_house.models import AuthRateLimitBucket, db

ADMIN_EMAIL = "admin@beyondhouse.co.ke"
ADMIN_PASSWORD = "admin123"
CSRF_TOKEN_RE = re.compile(r'name="_csrf_token" value="([^"]+)"')


def extract_csrf_token(html):
    match = CSRF_TOKEN_RE.search(html or "")
    return match.group(1) if match else None


def page_csrf_token(client, path="/contact"):
    token = extract_csrf_token(client.get(path).get_data(as_text=True))
    assert token
    return token


def build_test_app(tmp_path, overrides=None):
    db_path = tmp_path / f"site_test_{uuid.uuid4().hex[:8]}.db"
    upload_path = tmp_path / f"uploads_{uuid.uuid4().hex[:8]}"

    config = {
        "TESTING": True,
        "SECRET_KEY": "test-secret-key",
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_path}",
        "SQLALCHEMY_ENGINE_OPTIONS": {},
        "UPLOAD_FOLDER": str(upload_path),
        "SESSION_COOKIE_SECURE": False,
        "REMEMBER_COOKIE_SECURE": False,
        "ADMIN_EMAIL": ADMIN_EMAIL,
        "ADMIN_PASSWORD": ADMIN_PASSWORD,
        "CHAT_API_KEY": "test-chat-key",
        "LOG_JSON": False,
    }
    if overrides:
        config.update(overrides)

    app = create_app(config)
    with app.app_context():
        AuthRateLimitBucket.query.delete()
        db.session.commit()
    return app


def sign_in(client, email=ADMIN_EMAIL, password=ADMIN_PASSWORD, **kwargs):
    csrf_token = page_csrf_token(client, "/auth")
    return client.post(
        "/auth",
        data={"_csrf_token": csrf_token, "mode": "signin", "email": email, "password": password},
        follow_redirects=False,
        **kwargs,
    )


def sign_up(client, email, password="visitor-pass", full_name="Site Visitor"):
    csrf_token = page_csrf_token(client, "/auth?mode=signup")
    return client.post(
        "/auth",
        data={
            "_csrf_token": csrf_token,
            "mode": "signup",
            "email": email,
            "password": password,
            "full_name": full_name,
        },
        follow_redirects=False,
    )


@pytest.fixture()
def app(tmp_path):
    return build_test_app(tmp_path)


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def admin_client(client):
    response = sign_in(client)
    assert response.status_code in (302, 303)
    assert response.headers["Location"].endswith("/admin/")
    return client


@pytest.fixture()
def admin_csrf(admin_client):
    return page_csrf_token(admin_client, "/admin/")
