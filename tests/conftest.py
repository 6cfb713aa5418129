# tests/conftest.py
import os, sys
from datetime import datetime, timedelta
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("JWT_ACCESS_MINUTES", "15")

from notebin import create_app
from notebin.extensions import db
from notebin.users.models import User


class FakeClock:
    """Deterministic clock handed to NoteStore / LifecycleCoordinator."""

    def __init__(self, start=datetime(2024, 1, 1, 9, 0, 0)):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture()
def app():
    app = create_app()
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()

@pytest.fixture()
def client(app):
    return app.test_client()

@pytest.fixture()
def session(app):
    with app.app_context():
        yield db.session

@pytest.fixture()
def clock():
    return FakeClock()

@pytest.fixture()
def make_user(session):
    def _make(username):
        user = User(username=username)
        user.set_password("secret123")
        session.add(user)
        session.commit()
        return user.id
    return _make

@pytest.fixture()
def auth_headers(client):
    """Registers a user and returns its Authorization header."""
    def _headers(username, password="secret123"):
        r = client.post("/api/v1/auth/register", json={"username": username, "password": password})
        assert r.status_code == 201
        return {"Authorization": f"Bearer {r.get_json()['access_token']}"}
    return _headers
