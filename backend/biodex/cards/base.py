"""
Biodex Cards — Collaborator Interfaces
========================================

What:  Abstract contracts for the three things a RecordEditCard talks to.
Why:   The card is tested with in-memory fakes and run against either the
       REST API or the service layer without changing a line of card code.

    DataStore   fetch / update / delete one record
    Notifier    show a transient success or error message
    Navigator   tell dependent list views to re-fetch

Error contract:
    DataStore writes either return normally (the write is durable) or raise
    StoreError with a message fit for the user. Implementations translate
    their own failures (HTTP status, BiodexError, network errors) into it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from biodex.schemas.species import SpeciesRecord


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    message: str
    kind: NotificationKind
    title: Optional[str] = None


class DataStore(ABC):
    """
    Persistence seen from one viewer.

    A store is bound to the viewer it acts for, the way a signed-in client
    is; the backing service uses that identity to re-check ownership.
    """

    @abstractmethod
    async def fetch_record(self, record_id: int) -> SpeciesRecord:
        """
        Load one committed record.

        Raises:
            StoreError: the record is missing or the store is unreachable.
        """
        ...

    @abstractmethod
    async def update_record(self, record_id: int, patch: Dict[str, Any]) -> None:
        """
        Replace the editable fields of a record.

        `patch` always holds all six normalized fields. Partial patches are
        not supported.

        Raises:
            StoreError: the write was rejected or failed.
        """
        ...

    @abstractmethod
    async def delete_record(self, record_id: int) -> None:
        """
        Remove a record.

        Raises:
            StoreError: the delete was rejected or failed.
        """
        ...


class Notifier(ABC):

    @abstractmethod
    def notify(
        self,
        message: str,
        kind: NotificationKind,
        title: Optional[str] = None,
    ) -> None:
        """Fire-and-forget; nothing is returned to the caller."""
        ...


class Navigator(ABC):

    @abstractmethod
    def refresh(self) -> None:
        """Signal that views built from the store should re-fetch."""
        ...
