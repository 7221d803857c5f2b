"""
Query Executor - Timed, logged SQL execution.

Every bookstore statement goes through here so that:
- all queries are logged with their duration
- database failures surface as DatabaseError
- callers get plain row tuples, not driver objects
"""
import time
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from snippets.core.exceptions import DatabaseError
from snippets.core.logging_config import LoggerMixin
from snippets.database.connection import DatabaseConnection, get_database

Row = Tuple[Any, ...]


def _preview(sql: str) -> str:
    return " ".join(sql.split())[:100]


class QueryExecutor(LoggerMixin):
    """
    Executes SQL statements with logging and timing.

    Example:
        >>> executor = QueryExecutor()
        >>> rows = executor.fetch_all("SELECT Isbn, Title FROM Books")
    """

    def __init__(self, db_connection: Optional[DatabaseConnection] = None):
        """
        Args:
            db_connection: Optional DatabaseConnection instance. If not provided, uses default.
        """
        self.db = db_connection if db_connection is not None else get_database()

    def _run(self, session: Session, sql: str, params: Optional[Dict[str, Any]]):
        start_time = time.perf_counter()
        try:
            result = session.execute(text(sql), params or {})
        except SQLAlchemyError as e:
            self.logger.error(f"Query failed: {_preview(sql)}: {e}")
            raise DatabaseError() from e
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        self.logger.debug(
            f"Executed query in {elapsed_ms:.2f}ms: {_preview(sql)}",
            extra={"elapsed_ms": round(elapsed_ms, 4)},
        )
        return result

    def fetch_all(
        self,
        sql: str,
        params: Optional[Dict[str, Any]] = None,
        session: Optional[Session] = None,
    ) -> List[Row]:
        """Run a query and return every row as a tuple."""
        if session is not None:
            return [tuple(row) for row in self._run(session, sql, params)]
        with self.db.get_session() as own_session:
            return [tuple(row) for row in self._run(own_session, sql, params)]

    def fetch_one(
        self,
        sql: str,
        params: Optional[Dict[str, Any]] = None,
        session: Optional[Session] = None,
    ) -> Optional[Row]:
        """Run a query and return the single matching row, or None."""
        rows = self.fetch_all(sql, params, session=session)
        return rows[0] if rows else None

    def scalar(
        self,
        sql: str,
        params: Optional[Dict[str, Any]] = None,
        session: Optional[Session] = None,
    ) -> Any:
        """Run a statement and return the first column of the first row."""
        if session is not None:
            return self._run(session, sql, params).scalar()
        with self.db.get_session() as own_session:
            return self._run(own_session, sql, params).scalar()

    def execute_script(self, statements: Iterable[str]) -> int:
        """
        Run several statements in one transaction.

        Returns:
            Number of statements executed
        """
        count = 0
        with self.db.get_session() as session:
            for statement in statements:
                self._run(session, statement, None)
                count += 1
        self.logger.info(f"Executed script of {count} statements")
        return count


def split_statements(script: str) -> Sequence[str]:
    """
    Split a ';' separated SQL script into statements.

    Lines starting with '--' are dropped. A ';' inside a single-quoted
    literal does not end a statement; a doubled '' stays inside the literal.

    Example:
        >>> split_statements("INSERT INTO T VALUES ('a;b');\\nSELECT 1;")
        ["INSERT INTO T VALUES ('a;b')", 'SELECT 1']
    """
    lines = [
        line for line in script.splitlines()
        if line.strip() and not line.strip().startswith("--")
    ]

    statements: List[str] = []
    current: List[str] = []
    in_literal = False
    for char in "\n".join(lines):
        if char == "'":
            in_literal = not in_literal
        if char == ";" and not in_literal:
            statements.append("".join(current))
            current = []
        else:
            current.append(char)
    statements.append("".join(current))

    return [stmt.strip() for stmt in statements if stmt.strip()]
