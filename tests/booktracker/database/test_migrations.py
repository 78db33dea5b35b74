import pytest
from sqlalchemy import inspect

from booktracker.database import Database, run_migrations
from booktracker.database.migrations import MIGRATIONS, current_version


@pytest.fixture
def empty_database(database_url):
    db = Database(database_url)
    yield db
    db.dispose()


def test_migrations_apply_in_order(empty_database):
    assert current_version(empty_database.engine) is None

    applied = run_migrations(empty_database.engine)

    assert applied == [migration.version for migration in MIGRATIONS] == [1, 2]
    assert current_version(empty_database.engine) == 2


def test_migrations_are_idempotent(empty_database):
    run_migrations(empty_database.engine)

    assert run_migrations(empty_database.engine) == []
    assert current_version(empty_database.engine) == 2


def test_schema_has_expected_tables(database):
    inspector = inspect(database.engine)

    assert {"users", "sessions", "books", "reading_sessions", "schema_version"} <= set(
        inspector.get_table_names()
    )
    book_columns = {column["name"] for column in inspector.get_columns("books")}
    assert {"user_id", "pages_read", "total_pages", "tags", "goal_end_date", "rating"} <= book_columns
