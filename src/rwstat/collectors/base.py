"""
Defines the abstract interface for snapshot sources.

A snapshot source hands the poll loop a mapping of counter name to
cumulative value each time it is asked. Implementations own their
connection and must release it in `close()`.
"""

import logging
from abc import ABC, abstractmethod

from ..models.sample import Snapshot

logger = logging.getLogger(__name__)


class AbstractSnapshotSource(ABC):
    """
    Abstract base class for counter snapshot sources.

    Sources can be used as context managers: entering connects, leaving
    closes.
    """

    @abstractmethod
    def connect(self) -> None:
        """
        Open the underlying connection.

        Raises:
            ProbeConnectionError: If the server cannot be reached or
                rejects the credentials.
        """
        pass

    @abstractmethod
    def fetch_snapshot(self) -> Snapshot:
        """
        Take one snapshot of the server's cumulative counters.

        The call blocks until the full result is available; no timeout is
        applied here.

        Raises:
            FetchError: If the counters cannot be retrieved.
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        pass

    def __enter__(self) -> "AbstractSnapshotSource":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
