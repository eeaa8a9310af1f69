# ===============================================================================
# PYTEST CONFIGURATION FOR MERCHSTORE
# ===============================================================================
"""
Shared fixtures.

- app / http: Flask app on an in-memory sqlite database and its test client
- store: the OrderStore the handlers use, inside an app context
- flask_session: requests-style session that routes into the test client,
  so the client package can be exercised end to end without a network
"""
from urllib.parse import urlsplit

import pytest

from merchstore import create_app
from merchstore.client import MemoryStorage
from merchstore.errors import StoreError
from merchstore.extensions import db

ADMIN_SECRET = "correct-horse-battery"


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "ADMIN_PORTAL_PASSWORD": ADMIN_SECRET,
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def http(app):
    return app.test_client()


@pytest.fixture
def store(app):
    with app.app_context():
        yield app.extensions["order_store"]


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_SECRET}"}


@pytest.fixture
def make_order(store):
    def _make(order_hash="ABC123DEF456", email="a@b.com", status="pending", items=None):
        if items is None:
            items = [{"product": "Pulli", "color": "rot", "size": "M", "quantity": 1}]
        return store.insert(order_hash=order_hash, email=email, items=items, status=status)
    return _make


@pytest.fixture
def storage():
    return MemoryStorage()


class BrokenStore:
    """Every call fails the way an unreachable database would."""

    def _boom(self, *args, **kwargs):
        raise StoreError("database unavailable")

    insert = find_by_codes = all_orders = mark_paid = _boom


@pytest.fixture
def broken_store(app):
    app.extensions["order_store"] = BrokenStore()
    return app


# ---- requests adapter ------------------------------------------------------

class FlaskResponse:
    def __init__(self, resp):
        self._resp = resp
        self.status_code = resp.status_code
        self.headers = resp.headers

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        data = self._resp.get_json(silent=True)
        if data is None:
            raise ValueError("response body is not JSON")
        return data


class FlaskSession:
    def __init__(self, test_client):
        self.test_client = test_client
        self.calls = []

    def post(self, url, json=None, headers=None, timeout=None):
        path = urlsplit(url).path
        self.calls.append(path)
        return FlaskResponse(self.test_client.post(path, json=json, headers=headers))


@pytest.fixture
def flask_session(http):
    return FlaskSession(http)
