import httpx
import pytest

from backend import create_app
from backend.database.connection import create_store_engine
from backend.database.storage import TaskStore
from frontend.api import TasksApiClient


@pytest.fixture
def store():
    store = TaskStore(create_store_engine("sqlite://"))
    store.create_schema()
    yield store
    store.dispose()


@pytest.fixture
def app(store):
    app = create_app({"TESTING": True}, store=store)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def api(app):
    """Frontend API client wired straight into the Flask app."""
    http = httpx.Client(transport=httpx.WSGITransport(app=app))
    api = TasksApiClient(["http://testserver"], http=http)
    yield api
    api.close()
