# tests/conftest.py
"""Shared fixtures: a fresh application per test on a temporary SQLite file."""

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app


@pytest.fixture
def settings(tmp_path):
    """Settings isolated from the environment and the working directory."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        access_log_path=tmp_path / "access.log",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Test client with lifespan startup (table creation) and shutdown."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def db_session(app, client):
    """Session on the test database, opened after tables exist."""
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def sample_contact_data():
    """Sample contact data for tests."""
    return {
        "nome": "Ana Silva",
        "email": "ana@example.com",
        "telefone": "(11) 91234-5678",
    }


@pytest.fixture
def sample_contact_data_2():
    """Second sample contact data for tests."""
    return {
        "nome": "Bruno Costa",
        "email": "bruno.costa@example.com",
        "telefone": "(21) 98765-4321",
    }
