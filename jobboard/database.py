"""
Database schema and client.

Uses SQLAlchemy for table definitions and connections. Repositories talk to
the database only through Database.query, which takes PostgreSQL-style
positional placeholders ($1, $2, ...) and returns plain dict rows.
"""

import re
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    create_engine,
    event,
    text,
)
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import declarative_base

from .env import get_database_url, get_echo_sql, get_log_level, load_env
from .errors import ConstraintError
from .logger import StructuredLogger, get_logger

Base = declarative_base()

_PLACEHOLDER = re.compile(r"\$(\d+)")


class Company(Base):
    """Company a job belongs to."""

    __tablename__ = "companies"

    handle = Column(String(25), primary_key=True)
    name = Column(Text, nullable=False, unique=True)
    num_employees = Column(Integer, CheckConstraint("num_employees >= 0"))
    description = Column(Text, nullable=False, server_default="")
    logo_url = Column(Text)


class Job(Base):
    """Job listing model."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    salary = Column(Integer, CheckConstraint("salary >= 0"))
    # SQLite would coerce NUMERIC text to int/float and lose the digits
    equity = Column(
        Numeric().with_variant(String(), "sqlite"),
        CheckConstraint("CAST(equity AS NUMERIC) <= 1.0"),
    )
    company_handle = Column(
        String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
    )


class QueryResult(NamedTuple):
    rows: List[Dict[str, Any]]
    rowcount: int


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL.

    SQLite does not enforce foreign keys unless asked to on every
    connection, so a connect hook is installed for it.

    Args:
        url: SQLAlchemy database URL
        echo: Log every statement through SQLAlchemy

    Returns:
        SQLAlchemy engine
    """
    engine = create_engine(url, echo=echo)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def init_database(url: str) -> Engine:
    """
    Initialize database and create tables.

    Args:
        url: SQLAlchemy database URL; for SQLite files the parent
            directory is created if missing

    Returns:
        Engine bound to the initialized database
    """
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite" and parsed.database not in (None, "", ":memory:"):
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

    engine = get_engine(url)
    Base.metadata.create_all(engine)
    return engine


def bind_positional(sql: str, values: Sequence[Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Rewrite $n placeholders into named bind parameters.

    >>> bind_positional("SELECT * FROM jobs WHERE id = $1", [7])
    ('SELECT * FROM jobs WHERE id = :p1', {'p1': 7})
    """
    statement = _PLACEHOLDER.sub(lambda m: f":p{m.group(1)}", sql)
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}
    return statement, params


class Database:
    """
    Thin client executing one parameterized statement per call.

    Every call runs in its own transaction: committed when the statement
    succeeds, rolled back when it raises.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        engine: Optional[Engine] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            url: Database URL; defaults to JOBBOARD_DATABASE_URL
            engine: Existing engine, takes precedence over url
            logger: Defaults to the global logger at JOBBOARD_LOG_LEVEL

        Settings not given explicitly are read from the environment after
        loading .env from the working directory.
        """
        load_env()
        if engine is None:
            engine = get_engine(url or get_database_url(), echo=get_echo_sql())
        self.engine = engine
        self.logger = logger or get_logger(level=get_log_level())

    def query(self, sql: str, values: Sequence[Any] = ()) -> QueryResult:
        """
        Execute a statement with positional parameters.

        Args:
            sql: Statement text using $1, $2, ... placeholders
            values: Bound values, in placeholder order

        Returns:
            QueryResult with the returned rows as dicts; rowcount is the
            number of returned rows for statements that return rows and the
            affected row count otherwise

        Raises:
            ConstraintError: if the database rejected the statement
        """
        statement, params = bind_positional(sql, values)
        kind = sql.split(None, 1)[0].upper() if sql.strip() else ""
        self.logger.debug("Executing query", kind=kind, params=len(params))

        try:
            with self.engine.begin() as conn:
                result = conn.execute(text(statement), params)
                if result.returns_rows:
                    rows = [dict(row._mapping) for row in result]
                    rowcount = len(rows)
                else:
                    rows = []
                    rowcount = result.rowcount
        except IntegrityError as e:
            self.logger.record_query_failure(type(e.orig).__name__)
            self.logger.warning("Constraint violation", kind=kind, error=str(e.orig))
            raise ConstraintError(str(e.orig)) from e

        self.logger.record_query(len(rows))
        return QueryResult(rows, rowcount)
