import os
import sys
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault('APP_ENV', 'testing')
os.environ.setdefault('CELERY_TASK_ALWAYS_EAGER', '1')

from models import db  # noqa: E402


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    @property
    def ok(self):
        return self.status_code < 400


class EmailOutbox:
    """Records every call the email transport would have made."""

    def __init__(self):
        self.calls = []
        self.status_code = 200
        self.fail_for = set()

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        if json and set(json.get("to", [])) & self.fail_for:
            return FakeResponse(500)
        return FakeResponse(self.status_code)

    @property
    def recipients(self):
        return [c["json"]["to"][0] for c in self.calls]


@pytest.fixture(scope='session')
def app_instance():
    from app import create_app
    from app.config import TestingConfig
    app = create_app(TestingConfig)
    app.config.update(
        TESTING=True,
        SQLALCHEMY_DATABASE_URI='sqlite:///:memory:',
        SQLALCHEMY_TRACK_MODIFICATIONS=False
    )
    return app


@pytest.fixture(scope='function')
def app(app_instance):
    with app_instance.app_context():
        db.drop_all()
        db.create_all()
        app_instance.extensions["order_board"].invalidate()
        yield app_instance
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    return app.test_client()


@pytest.fixture(autouse=True)
def outbox(monkeypatch):
    box = EmailOutbox()
    monkeypatch.setattr("app.services.notifications.requests.post", box.post)
    return box


@pytest.fixture
def admin_headers(client):
    resp = client.post("/api/v1/admin/login", json={"password": "theresa"})
    token = resp.get_json()["data"]["access"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seed_menu(client):
    def _seed(items):
        resp = client.post("/__seed/menu", json={"items": items})
        return resp.get_json()["data"]["item_ids"]
    return _seed
