from __future__ import annotations

import logging
from dataclasses import dataclass

import mysql.connector

from ..core.exceptions import StorageFailure

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
        )


class DatabaseConnection:
    """Injected DB connection factory with an explicit lifecycle.

    ``open()`` at process start checks that the server is reachable,
    ``close()`` at shutdown stops handing out connections. Each repository
    call gets its own short-lived connection and closes it when done.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> "DatabaseConnection":
        if self._open:
            return self
        self._new_connection().close()
        self._open = True
        logger.info(
            "Database connection opened (%s@%s:%s/%s)",
            self._config.user,
            self._config.host,
            self._config.port,
            self._config.database,
        )
        return self

    def close(self) -> None:
        if not self._open:
            return
        self._open = False
        logger.info("Database connection closed")

    def connect(self):
        if not self._open:
            raise StorageFailure("Database connection is not open")
        return self._new_connection()

    def _new_connection(self):
        try:
            return mysql.connector.connect(
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
            )
        except mysql.connector.Error as exc:
            raise StorageFailure(f"Database unavailable: {exc}") from exc
