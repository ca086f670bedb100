"""
MySQL status counter source.

Reads cumulative statement counters with SHOW GLOBAL STATUS through
mysql-connector-python.
"""

import logging
from typing import Any, Optional

import mysql.connector

from ..models.config import ConnectionConfig
from ..models.sample import Snapshot
from ..validation import FetchError, ProbeConnectionError
from .base import AbstractSnapshotSource

logger = logging.getLogger(__name__)

STATUS_QUERY = "SHOW GLOBAL STATUS LIKE %s"


def parse_counter_value(value: Any) -> Optional[int]:
    """
    Convert a status value to int.

    Returns None for values that are not whole numbers (e.g. 'ON', 'TLSv1.3').
    """
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


class MySQLStatusSource(AbstractSnapshotSource):
    """
    Snapshot source backed by a single MySQL connection.
    """

    def __init__(self, connection_config: ConnectionConfig):
        self.config = connection_config
        self.connection = None
        logger.info(
            f"Initializing {self.__class__.__name__} for {connection_config.describe()}, "
            f"status pattern: '{connection_config.status_pattern}'"
        )

    @property
    def is_connected(self) -> bool:
        return self.connection is not None

    def connect(self) -> None:
        if self.connection is not None:
            return
        try:
            self.connection = mysql.connector.connect(**self.config.to_connect_kwargs())
        except mysql.connector.Error as e:
            raise ProbeConnectionError(
                f"Cannot connect to MySQL at {self.config.describe()}: {e}"
            ) from e
        logger.info(f"Connected to MySQL at {self.config.describe()}")

    def fetch_snapshot(self) -> Snapshot:
        if self.connection is None:
            raise FetchError("fetch_snapshot() called before connect()")

        try:
            cursor = self.connection.cursor()
            try:
                cursor.execute(STATUS_QUERY, (self.config.status_pattern,))
                rows = cursor.fetchall()
            finally:
                cursor.close()
        except mysql.connector.Error as e:
            raise FetchError(f"SHOW GLOBAL STATUS failed: {e}") from e

        snapshot: Snapshot = {}
        for name, raw_value in rows:
            if isinstance(name, (bytes, bytearray)):
                name = name.decode("utf-8", errors="replace")
            value = parse_counter_value(raw_value)
            if value is None:
                logger.debug(f"Skipping non-numeric status variable {name}={raw_value!r}")
                continue
            snapshot[name] = value

        logger.debug(f"Fetched {len(snapshot)} status counters")
        return snapshot

    def close(self) -> None:
        if self.connection is None:
            return
        try:
            self.connection.close()
            logger.info("MySQL connection closed")
        except mysql.connector.Error as e:
            logger.warning(f"Error while closing MySQL connection: {e}")
        finally:
            self.connection = None
