import time

import jwt
import pytest

from app import app as flask_app

JWT_SECRET = "test-secret-with-enough-bytes-for-hs256"


def make_token(sub="user-123", audience="authenticated", expires_in=3600, secret=JWT_SECRET):
    payload = {"sub": sub, "aud": audience, "exp": int(time.time()) + expires_in}
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def app():
    flask_app.config.update(
        TESTING=True,
        ESV_API_KEY="test-esv-key",
        ESV_API_URL="https://api.esv.org/v3/passage/text/",
        ESV_TIMEOUT_SECONDS=5,
        JWT_SECRET=JWT_SECRET,
        JWT_AUDIENCE="authenticated",
    )
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def token_factory():
    return make_token


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token()}"}
