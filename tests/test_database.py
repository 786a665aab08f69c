import pytest
from sqlalchemy import inspect, text

from finance_tracker.database import connect, init_db


def test_connect_returns_live_engine(tmp_path):
    engine = connect(f"sqlite:///{tmp_path / 'live.db'}")

    assert engine.dialect.name == "sqlite"
    engine.dispose()


def test_connect_exits_on_unparseable_descriptor():
    with pytest.raises(SystemExit) as exc_info:
        connect("this is not a database url")

    assert exc_info.value.code == 1


def test_connect_exits_on_unreachable_store(tmp_path):
    missing = tmp_path / "no" / "such" / "dir" / "finance.db"

    with pytest.raises(SystemExit) as exc_info:
        connect(f"sqlite:///{missing}")

    assert exc_info.value.code == 1


def test_init_db_creates_transactions_table(engine):
    columns = {column["name"] for column in inspect(engine).get_columns("transactions")}

    assert columns == {"id", "amount", "category", "description", "type", "created_at"}


def test_init_db_is_repeatable(engine):
    init_db(engine)

    assert inspect(engine).has_table("transactions")


def test_store_assigns_created_at_for_plain_inserts(engine):
    with engine.begin() as conn:
        conn.execute(text("INSERT INTO transactions (amount, category, type) VALUES (12.5, 'Food', 'expense')"))
        created_at = conn.execute(text("SELECT created_at FROM transactions")).scalar_one()

    assert created_at is not None
