"""
Shared fixtures: every test gets the Flask app pointed at a fresh SQLite file
with the admin account already seeded.
"""
import pytest

from app import app as flask_app
from app import prepare_database
from database import bootstrap_schema, get_connection

SECRET_KEY = "test-secret"
ADMIN_PASSWORD = "admin-pass"


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "tweeter.db"


@pytest.fixture
def tweeter_app(db_path):
    flask_app.config.update(
        TESTING=True,
        DATABASE=db_path,
        SECRET_KEY=SECRET_KEY,
        ADMIN_PASSWORD=ADMIN_PASSWORD,
    )
    prepare_database(db_path, ADMIN_PASSWORD)
    yield flask_app


@pytest.fixture
def client(tweeter_app):
    return tweeter_app.test_client()


@pytest.fixture
def conn(db_path):
    connection = get_connection(db_path)
    bootstrap_schema(connection)
    yield connection
    connection.close()


def register(client, username, password="hunter2"):
    return client.post("/register", data={"username": username, "password": password})


def login(client, username, password):
    return client.post("/login", data={"username": username, "password": password})
