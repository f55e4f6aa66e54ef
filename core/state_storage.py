"""Learning state storage implementation using SQLite3.

The whole learning state (statistics, pattern cache, recent history and runtime settings)
is stored as one JSON document under a single key of a key-value table.
"""

from __future__ import annotations

import json
import sqlite3
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final, Self

from models.learning_models import PersistedState
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging


__all__: list[str] = ["STATE_KEY", "StateStorage", "StateStorageError"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

STATE_KEY: Final[str] = "learning_state"


class StateStorageError(Exception):
    """Raised when the learning state cannot be read or written."""


class StateStorage:
    """SQLite3-based storage for the learning state.

    Attributes:
        db_path (Path): Path to the SQLite database file.
        _connection (sqlite3.Connection | None): Active database connection.
    """

    def __init__(self, db_path: str | Path) -> None:
        """Initialize the StateStorage with the path to the database file.

        Args:
            db_path (str | Path): Path to the SQLite database file.

        Raises:
            StateStorageError: If the database path is empty.
        """
        logger.debug("Initializing %s", self.__class__.__name__)

        if str(db_path).strip() == "":
            msg: str = "The database path is empty."
            raise StateStorageError(msg)

        self.db_path: Path = Path(db_path)
        self._connection: sqlite3.Connection | None = None
        logger.debug("Database path set to: %s", self.db_path)

    def __enter__(self) -> Self:
        """Enter context manager; initialize database connection."""
        self._initialize_database()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager; close database connection."""
        _ = exc_type, exc_val, exc_tb
        self.close()

    def _initialize_database(self) -> None:
        """Open the connection and create the table if it doesn't exist."""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(
                str(self.db_path),
                check_same_thread=False,
                isolation_level=None,  # Autocommit mode
            )
            self._connection.row_factory = sqlite3.Row
            self._connection.execute(
                """
                CREATE TABLE IF NOT EXISTS state (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )
        except (OSError, sqlite3.Error) as err:
            self._connection = None
            msg: str = f"Failed to open state database '{self.db_path}': {err}"
            raise StateStorageError(msg) from err
        logger.debug("Database initialized successfully")

    @property
    def connection(self) -> sqlite3.Connection:
        """Get the active database connection, opening it on first use."""
        if self._connection is None:
            self._initialize_database()
        if self._connection is None:
            msg = "Database connection is not initialized."
            raise StateStorageError(msg)
        return self._connection

    def load(self, key: str = STATE_KEY) -> PersistedState:
        """Load the learning state, merged over defaults.

        Missing, unreadable or malformed data yields the default state; the problem is logged.

        Args:
            key (str): Identifier of the state entry.

        Returns:
            PersistedState: Loaded or default state.
        """
        try:
            row: sqlite3.Row | None = self.connection.execute(
                "SELECT value FROM state WHERE key = ?",
                (key,),
            ).fetchone()
        except (StateStorageError, sqlite3.Error) as err:
            logger.warning("Failed to read learning state; using defaults: %s", err)
            return PersistedState()

        if row is None:
            logger.debug("No learning state found for key: %s", key)
            return PersistedState()

        try:
            data: Any = json.loads(row["value"])
            if not isinstance(data, dict):
                msg: str = f"Expected a JSON object, got {type(data).__name__}"
                raise TypeError(msg)
            state: PersistedState = PersistedState.from_dict(data, infer_missing=True)
        except (json.JSONDecodeError, TypeError, KeyError, ValueError, AttributeError) as err:
            logger.warning("Stored learning state is malformed; using defaults: %s", err)
            return PersistedState()

        logger.debug("Loaded learning state with %d patterns", len(state.patterns))
        return state

    def save(self, state: PersistedState, key: str = STATE_KEY) -> None:
        """Write the learning state.

        Args:
            state (PersistedState): State to store.
            key (str): Identifier of the state entry.

        Raises:
            StateStorageError: If the state cannot be written.
        """
        try:
            self.connection.execute(
                "INSERT OR REPLACE INTO state (key, value, updated_at) VALUES (?, ?, ?)",
                (key, state.to_json(ensure_ascii=False), time.time()),
            )
        except sqlite3.Error as err:
            msg: str = f"Failed to save learning state: {err}"
            raise StateStorageError(msg) from err
        logger.debug("Saved learning state for key: %s", key)

    def clear(self, key: str = STATE_KEY) -> None:
        """Delete the stored learning state.

        Raises:
            StateStorageError: If the entry cannot be deleted.
        """
        try:
            self.connection.execute("DELETE FROM state WHERE key = ?", (key,))
        except sqlite3.Error as err:
            msg: str = f"Failed to clear learning state: {err}"
            raise StateStorageError(msg) from err
        logger.debug("Deleted learning state for key: %s", key)

    def close(self) -> None:
        """Close the database connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            logger.debug("Database connection closed")
