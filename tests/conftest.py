import pytest
from fastapi.testclient import TestClient

from transaction_service.database import init_db, close_db, get_session
from transaction_service.main import app
from transaction_service.models import Transaction
from transaction_service.services import TransactionStore


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def db_url(tmp_path):
    """URL of a fresh SQLite database file."""
    return f"sqlite:///{tmp_path / 'transactions.db'}"


@pytest.fixture
def db(db_url):
    """A session on a freshly created database."""
    init_db(db_url)
    session = get_session()
    yield session
    session.close()
    close_db()


@pytest.fixture
def store(db):
    return TransactionStore(db)


@pytest.fixture
def add_transaction(db):
    """Insert a transaction directly, bypassing the service."""
    def _add(id, amount, type="purchase", parent_id=None):
        db.add(Transaction(id=id, amount=amount, type=type, parent_id=parent_id))
        db.commit()
    return _add


@pytest.fixture
def client(db_url, monkeypatch):
    """HTTP client for the app, backed by a fresh database."""
    # Leave the root logger to pytest
    monkeypatch.setattr("transaction_service.main.setup_logging", lambda settings: None)
    init_db(db_url)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    close_db()
