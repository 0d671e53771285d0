import pytest

from fakes import FakeMongoClient

from mgm import Connection, ConnectionConfig, hooks, reset_default_connection, set_default_config


@pytest.fixture(autouse=True)
def clear_hooks():
    hooks.clear()
    yield
    hooks.clear()


@pytest.fixture
def fake_client():
    return FakeMongoClient()


@pytest.fixture
def connection(fake_client):
    return Connection(ConnectionConfig(uri="", database="models"), client=fake_client)


@pytest.fixture
def default_connection(fake_client):
    reset_default_connection()
    conn = set_default_config(db_name="models", client=fake_client)
    yield conn
    reset_default_connection()
