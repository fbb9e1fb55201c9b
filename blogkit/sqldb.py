"""SQL database connection, transactions and positional query execution."""

from __future__ import annotations

import logging
import re
import uuid
from collections.abc import Sequence
from types import TracebackType
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, CursorResult, Engine, RootTransaction
from sqlalchemy.exc import SQLAlchemyError

_log = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\$(\d+)")


class DatabaseConnectionError(RuntimeError):
    """Raised when a SQL database cannot be connected to or used."""


def _adapt(value: Any) -> Any:
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [_adapt(item) for item in value]
    return value


def _translate(query: str, params: Sequence[Any], paramstyle: str) -> tuple[str, Any]:
    """Rewrite ``$N`` placeholders into the driver's parameter style."""
    values = [_adapt(value) for value in params]
    if not _PLACEHOLDER.search(query):
        return query, None

    def position(match: re.Match[str]) -> int:
        number = int(match.group(1))
        if not 1 <= number <= len(values):
            raise ValueError(f"missing value for placeholder ${number}")
        return number

    match paramstyle:
        case "qmark" | "format":
            order: list[int] = []
            marker = "?" if paramstyle == "qmark" else "%s"
            text = query if paramstyle == "qmark" else query.replace("%", "%%")

            def positional(found: re.Match[str]) -> str:
                order.append(position(found))
                return marker

            sql = _PLACEHOLDER.sub(positional, text)
            return sql, tuple(values[number - 1] for number in order)
        case "numeric":
            sql = _PLACEHOLDER.sub(lambda found: f":{position(found)}", query)
            return sql, tuple(values)
        case "named":
            sql = _PLACEHOLDER.sub(lambda found: f":p{position(found)}", query)
            return sql, {f"p{number}": value for number, value in enumerate(values, 1)}
        case "pyformat":
            text = query.replace("%", "%%")
            sql = _PLACEHOLDER.sub(lambda found: f"%(p{position(found)})s", text)
            return sql, {f"p{number}": value for number, value in enumerate(values, 1)}
        case _:
            raise ValueError(f"unsupported parameter style {paramstyle!r}")


def _run(connection: Connection, query: str, params: Sequence[Any]) -> CursorResult[Any]:
    sql, values = _translate(query, params, connection.dialect.paramstyle)
    return connection.exec_driver_sql(sql, values)


def _rows(result: CursorResult[Any]) -> list[tuple[Any, ...]]:
    if not result.returns_rows:
        return []
    return [tuple(row) for row in result.fetchall()]


def _first(result: CursorResult[Any]) -> tuple[Any, ...] | None:
    if not result.returns_rows:
        return None
    row = result.first()
    return None if row is None else tuple(row)


class SqlTx:
    """An open transaction; as a context manager it commits or rolls back."""

    def __init__(self, connection: Connection, transaction: RootTransaction) -> None:
        self._connection = connection
        self._transaction = transaction

    def __enter__(self) -> SqlTx:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        if not self._transaction.is_active:
            self._connection.close()
        elif exc_type is None:
            self.commit()
        else:
            self.rollback()

    def commit(self) -> None:
        """Commit the transaction and release its connection."""
        try:
            self._transaction.commit()
        finally:
            self._connection.close()

    def rollback(self) -> None:
        """Roll the transaction back and release its connection."""
        try:
            self._transaction.rollback()
        finally:
            self._connection.close()

    def execute(self, query: str, params: Sequence[Any] = ()) -> int:
        """Run a statement and return the number of affected rows."""
        return _run(self._connection, query, params).rowcount

    def query(self, query: str, params: Sequence[Any] = ()) -> list[tuple[Any, ...]]:
        """Run a query and return all of its rows."""
        return _rows(_run(self._connection, query, params))

    def query_row(self, query: str, params: Sequence[Any] = ()) -> tuple[Any, ...] | None:
        """Run a query and return its first row, or None."""
        return _first(_run(self._connection, query, params))


class SqlDB:
    """A database handle; each call runs in its own committed transaction."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def begin(self) -> SqlTx:
        """Start a transaction."""
        connection = self._engine.connect()
        return SqlTx(connection, connection.begin())

    def execute(self, query: str, params: Sequence[Any] = ()) -> int:
        """Run a statement and return the number of affected rows."""
        with self._engine.begin() as connection:
            return _run(connection, query, params).rowcount

    def query(self, query: str, params: Sequence[Any] = ()) -> list[tuple[Any, ...]]:
        """Run a query and return all of its rows."""
        with self._engine.begin() as connection:
            return _rows(_run(connection, query, params))

    def query_row(self, query: str, params: Sequence[Any] = ()) -> tuple[Any, ...] | None:
        """Run a query and return its first row, or None."""
        with self._engine.begin() as connection:
            return _first(_run(connection, query, params))


class PostgresDB:
    """A connection to one named PostgreSQL database."""

    def __init__(self, name: str, uri: str, is_ssl_disabled: bool) -> None:
        self.name = name
        self.uri = uri
        self.is_ssl_disabled = is_ssl_disabled
        self._engine: Engine | None = None

    def connection_uri(self) -> str:
        """Return the URI of the database, with SSL disabled if asked for."""
        connection_uri = f"{self.uri}/{self.name}"
        if self.is_ssl_disabled:
            connection_uri = f"{connection_uri}?sslmode=disable"
        return connection_uri

    def _require_engine(self) -> Engine:
        if self._engine is None:
            raise DatabaseConnectionError(f"database {self.name!r} is not connected")
        return self._engine

    def connect(self) -> PostgresDB:
        """Open and ping the connection; raise DatabaseConnectionError on failure."""
        _log.info("dbName=%s status=connecting...", self.name)
        if not self.name:
            _log.critical("status=missing parameters reason=name is required")
            raise DatabaseConnectionError("name is required")
        if not self.uri:
            _log.critical("dbName=%s status=missing parameters reason=uri is required", self.name)
            raise DatabaseConnectionError("uri is required")
        url = self.connection_uri()
        if url.startswith("postgres://"):
            url = "postgresql://" + url[len("postgres://"):]
        try:
            engine = create_engine(url)
        except (SQLAlchemyError, ImportError) as exc:
            _log.critical("status=connection failed! error=%s", exc)
            raise DatabaseConnectionError(f"connection failed: {exc}") from exc
        try:
            with engine.connect():
                pass
        except SQLAlchemyError as exc:
            engine.dispose()
            _log.critical("status=failed to ping connection! error=%s", exc)
            raise DatabaseConnectionError(f"failed to ping connection: {exc}") from exc
        self._engine = engine
        _log.info("dbName=%s status=connected successfully.", self.name)
        return self

    def disconnect(self) -> None:
        """Close the connection; a failure to close is only logged."""
        _log.info("dbName=%s status=disconnecting...", self.name)
        engine = self._require_engine()
        try:
            engine.dispose()
        except SQLAlchemyError as exc:
            _log.error("dbName=%s status=failed to disconnect gracefully error=%s", self.name, exc)
        self._engine = None
        _log.info("dbName=%s status=disconnected successfully", self.name)

    def get_db(self) -> SqlDB:
        """Return a handle for running statements."""
        return SqlDB(self._require_engine())

    def ping(self) -> None:
        """Check that the database answers."""
        engine = self._require_engine()
        try:
            with engine.connect():
                pass
        except SQLAlchemyError as exc:
            raise DatabaseConnectionError(f"failed to ping connection: {exc}") from exc