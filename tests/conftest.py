"""
Pytest configuration for recordbase.

Provides fixtures for:
- An in-memory storage service double for unit tests
- Sample record types
- Database connection management and a `people` table for integration tests
"""

from __future__ import annotations

import os
import threading
from typing import Any, Dict, Generator, List, Optional

import psycopg
import pytest

from recordbase.config import Settings
from recordbase.domain.models import Record
from recordbase.infrastructure.database import Database
from recordbase.introspection import clear_field_cache


class Person(Record):
    name: str
    age: int
    birthCity: Optional[str] = None

    @classmethod
    def table_name(cls) -> str:
        return "people"


class FakeDatabase:
    """
    Storage service double that records every statement it receives.

    Rows to return are queued with `queue_rows`. An INSERT that was not given
    rows returns the next identity, like `INSERT ... RETURNING "id"`; other
    statements without queued rows return an empty list.
    """

    def __init__(self, columns: Optional[List[str]] = None, next_id: int = 1) -> None:
        self.columns = columns if columns is not None else ["id", "name", "age", "birth_city"]
        self.next_id = next_id
        self.last_id: Optional[int] = None
        self.calls: List[Dict[str, Any]] = []
        self.describe_calls = 0
        self._queued: List[List[Dict[str, Any]]] = []
        self._lock = threading.Lock()

    def queue_rows(self, *rows: Dict[str, Any]) -> None:
        self._queued.append(list(rows))

    def execute(self, statement, params=None, target_type=None) -> List[Any]:
        sql_text = statement.as_string(None)
        with self._lock:
            self.calls.append(
                {"sql": sql_text, "params": dict(params or {}), "target_type": target_type}
            )
            if self._queued:
                rows = self._queued.pop(0)
            elif sql_text.startswith("INSERT"):
                rows = [{"id": self._assign_id()}]
            else:
                rows = []
        if target_type is None:
            return rows
        return [target_type.from_row(row) for row in rows]

    def _assign_id(self) -> int:
        self.last_id = self.next_id
        self.next_id += 1
        return self.last_id

    def last_insert_id(self) -> int:
        return self.last_id

    def describe_table(self, table_name: str) -> List[str]:
        self.describe_calls += 1
        return list(self.columns)

    @property
    def statements(self) -> List[str]:
        return [call["sql"] for call in self.calls]


@pytest.fixture(autouse=True)
def _fresh_field_cache() -> Generator[None, None, None]:
    clear_field_cache()
    yield
    clear_field_cache()


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def make_fake_db():
    return FakeDatabase


@pytest.fixture
def person_model():
    return Person


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "recordbase"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return (
        f"postgresql://{test_settings.db_user}:{test_settings.db_password}"
        f"@{test_settings.db_host}:{test_settings.db_port}/{test_settings.db_name}"
    )


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture(scope="session")
def db_connection(
    test_dsn: str, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped autocommit connection for integration tests.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = psycopg.connect(test_dsn, autocommit=True)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="session")
def people_table(db_connection: psycopg.Connection) -> str:
    """
    Create the `people` table used by the Person record type.
    """
    with db_connection.cursor() as cur:
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS people (
                id BIGSERIAL PRIMARY KEY,
                name TEXT NOT NULL,
                age INTEGER NOT NULL,
                birth_city TEXT
            );
            """
        )
    return "people"


@pytest.fixture(scope="function")
def clean_people_table(db_connection: psycopg.Connection, people_table: str):
    """
    Empty the people table around each test function.

    Identity restarts at 1 so tests can rely on sequential ids.
    """
    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE people RESTART IDENTITY;")
    yield
    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE people RESTART IDENTITY;")


@pytest.fixture(scope="function")
def database(db_connection: psycopg.Connection, clean_people_table) -> Database:
    return Database(db_connection, statement_timeout_ms=5_000)
