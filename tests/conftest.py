"""Pytest fixtures for urbackupy tests."""
import pytest

from urbackupy import UrBackupClient

from tests.fakes import ENDPOINT, PASSWORD, USERNAME, FakeServer, FakeTransport


@pytest.fixture
def fake_server():
    """Stateful fake UrBackup server."""
    return FakeServer()


@pytest.fixture
def transport(fake_server):
    """Recording transport backed by the fake server."""
    return FakeTransport(fake_server)


@pytest.fixture
def server(transport):
    """Client logging in with username and password."""
    return UrBackupClient(ENDPOINT, USERNAME, PASSWORD, transport=transport)


@pytest.fixture
def anonymous_server(transport):
    """Client using anonymous login."""
    return UrBackupClient(ENDPOINT, transport=transport)
