import itertools

import pytest

from config import TestConfig
from leettrack import create_app, db
from leettrack.models.user import User

_emails = itertools.count(1)


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    """Create an account and return (token, user_id)."""

    def _register(email=None, password="secret123"):
        email = email or f"user{next(_emails)}@example.com"
        res = client.post("/api/auth/register", json={"email": email, "password": password})
        assert res.status_code == 201, res.get_json()
        body = res.get_json()
        return body["token"], body["user"]["id"]

    return _register


@pytest.fixture
def set_user(app):
    def _set_user(user_id, **fields):
        with app.app_context():
            user = db.session.get(User, user_id)
            for name, value in fields.items():
                setattr(user, name, value)
            db.session.commit()

    return _set_user


@pytest.fixture
def get_user(app):
    def _get_user(user_id):
        with app.app_context():
            return db.session.get(User, user_id).to_dict()

    return _get_user


@pytest.fixture
def make_friends(client):
    def _make_friends(token_a, token_b, email_b):
        res = client.post("/api/social/friends/request", json={"email": email_b}, headers=auth(token_a))
        assert res.status_code == 201, res.get_json()
        request_id = res.get_json()["friendship"]["id"]
        res = client.post(f"/api/social/friends/{request_id}/accept", headers=auth(token_b))
        assert res.status_code == 200, res.get_json()

    return _make_friends
