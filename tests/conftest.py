import pytest
from fastapi.testclient import TestClient

from finance_tracker.api import create_app
from finance_tracker.database import connect, get_session_factory, init_db
from finance_tracker.repository import TransactionRepository


@pytest.fixture
def engine(tmp_path):
    engine = connect(f"sqlite:///{tmp_path / 'finance.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def repository(engine):
    return TransactionRepository(get_session_factory(engine))


@pytest.fixture
def client(repository):
    with TestClient(create_app(repository)) as test_client:
        yield test_client
