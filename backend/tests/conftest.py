"""
Configuration partagée pour tous les tests.
Les tests API remplacent get_db par un MagicMock pour éviter toute connexion réelle ;
seuls les tests de scénario utilisent une base SQLite en mémoire.
"""

import uuid
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import get_db
from app.dependencies import get_current_user
from app.main import create_app
from app.models.user import User, UserRole


def make_test_settings(**overrides) -> Settings:
    values = {
        "DATABASE_URL": "sqlite://",
        "ENV": "test",
        "SECRET_KEY": "test-secret-key",
        "BCRYPT_ROUNDS": 4,
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def app():
    return create_app(make_test_settings())


@pytest.fixture
def mock_db():
    return MagicMock()


@pytest.fixture
def client(app, mock_db):
    """Client HTTP de test avec la BDD mockée."""
    app.dependency_overrides[get_db] = lambda: mock_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_user():
    """Fabrique d'utilisateurs ORM non persistés."""
    def _make_user(role=UserRole.STUDENT, **kwargs) -> User:
        return User(
            id=kwargs.get("id", uuid.uuid4()),
            email=kwargs.get("email", f"{uuid.uuid4().hex[:8]}@univ.tn"),
            password_hash=kwargs.get("password_hash", "hash"),
            first_name=kwargs.get("first_name", "Amira"),
            last_name=kwargs.get("last_name", "Ben Salah"),
            role=role,
            is_active=kwargs.get("is_active", True),
        )
    return _make_user


@pytest.fixture
def login_as(app):
    """Remplace l'utilisateur authentifié de toutes les requêtes suivantes."""
    def _login_as(user: User) -> User:
        app.dependency_overrides[get_current_user] = lambda: user
        return user
    return _login_as


@pytest.fixture
def live_app():
    """Application complète sur une base SQLite en mémoire (un schéma neuf par test)."""
    return create_app(make_test_settings())


@pytest.fixture
def live_client(live_app):
    with TestClient(live_app) as c:
        yield c


@pytest.fixture
def make_settings():
    return make_test_settings
