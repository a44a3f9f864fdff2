"""
Database manager for the TV catalog.

Handles all database operations including:
- Connection management with SQLAlchemy
- Transactions with bounded retry on transient failures
- Schema setup and reset
- Read queries for the API (paginated lists, sub-resources)
"""

import time
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import Connection, Engine, make_url
from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    OperationalError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.pool import StaticPool

from .config import Config
from .errors import ConflictError, TransientStoreError
from .schema import TABLE_NAMES, metadata
from .utils import calculate_backoff, setup_logger, to_json_value

T = TypeVar("T")

# MySQL client/server codes worth retrying: connection refused/lost, lock wait, deadlock
TRANSIENT_MYSQL_CODES = {1040, 1205, 1213, 2002, 2003, 2006, 2013}

SHOW_SELECT = "SELECT id, title, description, year, created_at FROM shows"
SEASON_SELECT = "SELECT id, show_id, season_number, year, created_at FROM seasons"
EPISODE_SELECT = """
    SELECT e.id, e.season_id, s.show_id, s.season_number, e.air_date,
           e.title, e.description, e.created_at
    FROM episodes e
    JOIN seasons s ON s.id = e.season_id
"""
ACTOR_SELECT = "SELECT id, name, created_at FROM actors"
CHARACTER_SELECT = """
    SELECT c.id, c.show_id, c.name, c.actor_id, a.name AS actor_name, c.created_at
    FROM characters c
    LEFT JOIN actors a ON a.id = c.actor_id
"""


def is_transient_error(exc: BaseException) -> bool:
    """Check whether a store error is a retryable connection-level failure."""
    if isinstance(exc, (DisconnectionError, PoolTimeoutError)):
        return True
    if isinstance(exc, IntegrityError):
        return False
    if isinstance(exc, DBAPIError):
        if exc.connection_invalidated:
            return True
        if isinstance(exc, OperationalError):
            args = getattr(exc.orig, "args", ())
            if args and isinstance(args[0], int) and args[0] in TRANSIENT_MYSQL_CODES:
                return True
            return "database is locked" in str(exc.orig).lower()
    return False


def row_to_dict(row) -> dict:
    """Convert a result mapping into a JSON-ready dict."""
    return {key: to_json_value(value) for key, value in row.items()}


class DatabaseManager:
    """
    Handles all database operations.

    Responsibilities:
    - Connection management with SQLAlchemy
    - Transaction management and transient retry
    - Schema creation, reset and status
    - Read queries for every entity
    """

    TABLES = TABLE_NAMES

    def __init__(self, config: Config, engine: Optional[Engine] = None):
        self.config = config
        self.logger = setup_logger("database", config.log_dir)
        self.engine = engine or self._create_engine()
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

    def _create_engine(self) -> Engine:
        """Create SQLAlchemy engine with connection pooling."""
        url = make_url(self.config.get_db_url())
        if url.get_backend_name() == "sqlite":
            options: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
            if url.database in (None, "", ":memory:"):
                # One shared connection keeps the in-memory database alive
                options["poolclass"] = StaticPool
            return create_engine(url, **options)

        return create_engine(
            url,
            pool_size=self.config.db_pool_size,
            max_overflow=self.config.db_max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )

    def run_in_transaction(self, operation: Callable[[Connection], T]) -> T:
        """
        Run operation(conn) in a transaction, retrying transient failures.

        Raises:
            ConflictError: On a uniqueness or foreign key violation.
            TransientStoreError: When every attempt failed transiently.
        """
        attempts = max(1, self.config.db_retry_attempts)
        attempt = 0
        while True:
            try:
                with self.engine.begin() as conn:
                    return operation(conn)
            except IntegrityError as e:
                self.logger.warning(f"Constraint violation: {e.orig}")
                raise ConflictError(
                    "Constraint violation", details={"reason": str(e.orig)}
                ) from e
            except SQLAlchemyError as e:
                if not is_transient_error(e):
                    raise
                if attempt + 1 >= attempts:
                    self.logger.error(f"Transient store error after {attempts} attempts: {e}")
                    raise TransientStoreError(
                        "Database unavailable, please retry",
                        details={"attempts": attempts},
                    ) from e
                backoff = calculate_backoff(attempt, self.config.db_retry_base_delay)
                self.logger.warning(
                    f"Transient store error, backing off {backoff:.2f}s "
                    f"(retry {attempt + 1}/{attempts - 1}): {e}"
                )
                time.sleep(backoff)
                attempt += 1

    def _execute(self, query: str, params: dict = None) -> List[dict]:
        """Execute a query and return rows as dicts."""
        def operation(conn: Connection) -> List[dict]:
            result = conn.execute(text(query), params or {})
            return [row_to_dict(row) for row in result.mappings()] if result.returns_rows else []

        return self.run_in_transaction(operation)

    def _fetch_one(self, query: str, params: dict = None) -> Optional[dict]:
        rows = self._execute(query, params)
        return rows[0] if rows else None

    def _select_page(
        self,
        select_sql: str,
        where_clauses: List[str],
        params: dict,
        order_by: str,
        limit: int,
        offset: int,
    ) -> Tuple[List[dict], int]:
        """Run a filtered select with LIMIT/OFFSET and a matching total count."""
        where_sql = " AND ".join(where_clauses) if where_clauses else "1=1"
        base = f"{select_sql} WHERE {where_sql}"

        def operation(conn: Connection) -> Tuple[List[dict], int]:
            total = conn.execute(text(f"SELECT COUNT(*) FROM ({base}) AS page_source"), params).scalar()
            result = conn.execute(
                text(f"{base} ORDER BY {order_by} LIMIT :limit OFFSET :offset"),
                {**params, "limit": limit, "offset": offset},
            )
            return [row_to_dict(row) for row in result.mappings()], int(total or 0)

        return self.run_in_transaction(operation)

    # ============ SETUP OPERATIONS ============

    def ping(self) -> bool:
        """Check database connectivity without retrying."""
        try:
            with self.engine.connect() as conn:
                return conn.execute(text("SELECT 1")).scalar() == 1
        except SQLAlchemyError as e:
            self.logger.warning(f"Database ping failed: {e}")
            return False

    def get_missing_tables(self) -> List[str]:
        """Get required tables that don't exist."""
        existing = set(inspect(self.engine).get_table_names())
        return [t for t in self.TABLES if t not in existing]

    def init_schema(self) -> dict:
        """
        Create any missing tables.

        Returns:
            {"existing": List[str], "created": List[str]}
        """
        def operation(conn: Connection) -> dict:
            existing = set(inspect(conn).get_table_names())
            metadata.create_all(conn, checkfirst=True)
            return {
                "existing": [t for t in self.TABLES if t in existing],
                "created": [t for t in self.TABLES if t not in existing],
            }

        result = self.run_in_transaction(operation)
        for table in result["created"]:
            self.logger.info(f"Created table: {table}")
        return result

    def reset_database(self) -> dict:
        """
        Drop and recreate every catalog table. All data is lost.

        Returns:
            {"dropped": List[str], "created": List[str]}
        """
        def operation(conn: Connection) -> dict:
            existing = set(inspect(conn).get_table_names())
            metadata.drop_all(conn, checkfirst=True)
            metadata.create_all(conn)
            return {
                "dropped": [t for t in reversed(self.TABLES) if t in existing],
                "created": list(self.TABLES),
            }

        result = self.run_in_transaction(operation)
        self.logger.warning(f"Database reset: dropped {len(result['dropped'])} tables")
        return result

    def get_status(self) -> dict:
        """Get row counts per table."""
        missing = self.get_missing_tables()
        counts = {}
        for table in self.TABLES:
            if table in missing:
                counts[table] = None
                continue
            row = self._execute(f"SELECT COUNT(*) AS cnt FROM {table}")
            counts[table] = row[0]["cnt"]
        return {
            "counts": counts,
            "missing_tables": missing,
            "all_tables_exist": not missing,
        }

    def delete_row(self, table: str, row_id: int) -> bool:
        """Delete a row by id; cascades follow the schema."""
        if table not in self.TABLES:
            raise ValueError(f"Unknown table: {table}")

        def operation(conn: Connection) -> bool:
            result = conn.execute(text(f"DELETE FROM {table} WHERE id = :id"), {"id": row_id})
            return result.rowcount > 0

        deleted = self.run_in_transaction(operation)
        if deleted:
            self.logger.info(f"Deleted {table} id={row_id}")
        return deleted

    # ============ SHOWS ============

    def list_shows(
        self,
        limit: int = 100,
        offset: int = 0,
        title: Optional[str] = None,
        year: Optional[int] = None,
    ) -> Tuple[List[dict], int]:
        """Get paginated shows, optionally filtered by exact title and year."""
        where_clauses = []
        params: Dict[str, Any] = {}
        if title is not None:
            where_clauses.append("title = :title")
            params["title"] = title
        if year is not None:
            where_clauses.append("year = :year")
            params["year"] = year
        return self._select_page(
            SHOW_SELECT, where_clauses, params,
            "CASE WHEN year IS NULL THEN 1 ELSE 0 END, year, title, id",
            limit, offset,
        )

    def get_show(self, show_id: int) -> Optional[dict]:
        return self._fetch_one(f"{SHOW_SELECT} WHERE id = :id", {"id": show_id})

    # ============ SEASONS ============

    def list_seasons(
        self,
        limit: int = 100,
        offset: int = 0,
        show_id: Optional[int] = None,
    ) -> Tuple[List[dict], int]:
        """Get paginated seasons, optionally for one show."""
        where_clauses = []
        params: Dict[str, Any] = {}
        if show_id is not None:
            where_clauses.append("show_id = :show_id")
            params["show_id"] = show_id
        return self._select_page(
            SEASON_SELECT, where_clauses, params,
            "show_id, season_number", limit, offset,
        )

    def get_season(self, season_id: int) -> Optional[dict]:
        return self._fetch_one(f"{SEASON_SELECT} WHERE id = :id", {"id": season_id})

    def get_season_by_number(self, show_id: int, season_number: int) -> Optional[dict]:
        return self._fetch_one(
            f"{SEASON_SELECT} WHERE show_id = :show_id AND season_number = :season_number",
            {"show_id": show_id, "season_number": season_number},
        )

    # ============ EPISODES ============

    def list_episodes(
        self,
        limit: int = 100,
        offset: int = 0,
        show_id: Optional[int] = None,
        season_id: Optional[int] = None,
        season_number: Optional[int] = None,
    ) -> Tuple[List[dict], int]:
        """Get paginated episodes ordered by air date."""
        where_clauses = []
        params: Dict[str, Any] = {}
        if show_id is not None:
            where_clauses.append("s.show_id = :show_id")
            params["show_id"] = show_id
        if season_id is not None:
            where_clauses.append("e.season_id = :season_id")
            params["season_id"] = season_id
        if season_number is not None:
            where_clauses.append("s.season_number = :season_number")
            params["season_number"] = season_number
        return self._select_page(
            EPISODE_SELECT, where_clauses, params,
            "CASE WHEN e.air_date IS NULL THEN 1 ELSE 0 END, e.air_date, e.id",
            limit, offset,
        )

    def get_episode(self, episode_id: int) -> Optional[dict]:
        return self._fetch_one(f"{EPISODE_SELECT} WHERE e.id = :id", {"id": episode_id})

    def list_episode_characters(
        self,
        episode_id: int,
        limit: int = 100,
        offset: int = 0,
    ) -> Tuple[List[dict], int]:
        """Get characters linked to an episode, ordered by name."""
        return self._select_page(
            CHARACTER_SELECT,
            ["c.id IN (SELECT character_id FROM episode_characters WHERE episode_id = :episode_id)"],
            {"episode_id": episode_id},
            "c.name, c.id", limit, offset,
        )

    # ============ ACTORS ============

    def list_actors(
        self,
        limit: int = 100,
        offset: int = 0,
        name: Optional[str] = None,
    ) -> Tuple[List[dict], int]:
        """Get paginated actors, optionally filtered by exact name."""
        where_clauses = []
        params: Dict[str, Any] = {}
        if name is not None:
            where_clauses.append("name = :name")
            params["name"] = name
        return self._select_page(ACTOR_SELECT, where_clauses, params, "name, id", limit, offset)

    def get_actor(self, actor_id: int) -> Optional[dict]:
        return self._fetch_one(f"{ACTOR_SELECT} WHERE id = :id", {"id": actor_id})

    # ============ CHARACTERS ============

    def list_characters(
        self,
        limit: int = 100,
        offset: int = 0,
        show_id: Optional[int] = None,
        actor_id: Optional[int] = None,
    ) -> Tuple[List[dict], int]:
        """Get paginated characters with their actor names."""
        where_clauses = []
        params: Dict[str, Any] = {}
        if show_id is not None:
            where_clauses.append("c.show_id = :show_id")
            params["show_id"] = show_id
        if actor_id is not None:
            where_clauses.append("c.actor_id = :actor_id")
            params["actor_id"] = actor_id
        return self._select_page(CHARACTER_SELECT, where_clauses, params, "c.name, c.id", limit, offset)

    def get_character(self, character_id: int) -> Optional[dict]:
        return self._fetch_one(f"{CHARACTER_SELECT} WHERE c.id = :id", {"id": character_id})


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
