"""
Biodex Cards — Notifier and Navigator Implementations
=======================================================

LogNotifier        writes notifications to the `biodex.notify` logger
MemoryNotifier     keeps them in order, for hosts that render their own toasts
CallbackNavigator  fans refresh() out to registered listeners
"""

import logging
from typing import Callable, List, Optional

from biodex.cards.base import Navigator, Notification, NotificationKind, Notifier

notify_logger = logging.getLogger("biodex.notify")
logger = logging.getLogger(__name__)


class LogNotifier(Notifier):
    """Success → INFO, error → WARNING."""

    def notify(
        self,
        message: str,
        kind: NotificationKind,
        title: Optional[str] = None,
    ) -> None:
        level = logging.INFO if kind == NotificationKind.SUCCESS else logging.WARNING
        if title:
            notify_logger.log(level, "%s %s", title, message)
        else:
            notify_logger.log(level, "%s", message)


class MemoryNotifier(Notifier):

    def __init__(self) -> None:
        self.notifications: List[Notification] = []

    def notify(
        self,
        message: str,
        kind: NotificationKind,
        title: Optional[str] = None,
    ) -> None:
        self.notifications.append(Notification(message=message, kind=NotificationKind(kind), title=title))

    def of_kind(self, kind: NotificationKind) -> List[Notification]:
        return [n for n in self.notifications if n.kind == kind]

    def clear(self) -> None:
        self.notifications.clear()


class CallbackNavigator(Navigator):
    """
    Calls every registered listener on refresh().

    A listener that raises is logged and skipped so the remaining views
    still hear about the change.
    """

    def __init__(self) -> None:
        self._listeners: List[Callable[[], None]] = []
        self.refresh_count = 0

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener: Callable[[], None]) -> None:
        self._listeners.remove(listener)

    def refresh(self) -> None:
        self.refresh_count += 1
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.error("Refresh listener %r failed", listener, exc_info=True)
