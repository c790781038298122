"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import Any, Dict, List

from jobboard.database import Database, QueryResult, init_database
from jobboard.jobs import JobRepository
from jobboard.logger import StructuredLogger


class RecordingClient:
    """Database stand-in that records statements instead of running them."""

    def __init__(self, rows: List[Dict[str, Any]] = None):
        self.rows = rows or []
        self.calls = []

    def query(self, sql, values=()):
        self.calls.append((sql, list(values)))
        return QueryResult(list(self.rows), len(self.rows))


@pytest.fixture
def quiet_logger() -> StructuredLogger:
    """Logger with no handlers, so tests don't write log files."""
    return StructuredLogger(name="jobboard-test", enable_file=False, enable_console=False)


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def db(db_url, quiet_logger) -> Database:
    """Initialized database with three companies: c1, c2, c3."""
    engine = init_database(db_url)
    database = Database(engine=engine, logger=quiet_logger)
    for n in (1, 2, 3):
        database.query(
            """INSERT INTO companies (handle, name, num_employees, description, logo_url)
               VALUES ($1, $2, $3, $4, $5)""",
            [f"c{n}", f"C{n}", n, f"Desc{n}", f"http://c{n}.img"],
        )
    yield database
    engine.dispose()


@pytest.fixture
def jobs(db) -> JobRepository:
    return JobRepository(db)


@pytest.fixture
def new_job() -> Dict[str, Any]:
    """Valid job payload."""
    return {
        "title": "new",
        "salary": 10000,
        "equity": "0",
        "companyHandle": "c1",
    }


@pytest.fixture
def recording_client() -> RecordingClient:
    return RecordingClient()
