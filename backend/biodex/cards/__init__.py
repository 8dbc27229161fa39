# Cards package init
"""
Biodex Cards — Client-side Record Components
==============================================

What:  The species RecordEditCard and the collaborators it is wired to.

    base.py              DataStore / Notifier / Navigator contracts
    record_edit_card.py  the card and its view/edit/delete state machine
    stores.py            HttpDataStore (REST) and SqlDataStore (in-process)
    notifications.py     LogNotifier, MemoryNotifier, CallbackNavigator
"""

from biodex.cards.base import DataStore, Navigator, Notification, NotificationKind, Notifier
from biodex.cards.notifications import CallbackNavigator, LogNotifier, MemoryNotifier
from biodex.cards.record_edit_card import CardState, CardSummary, RecordEditCard
from biodex.cards.stores import HttpDataStore, SqlDataStore

__all__ = [
    "CallbackNavigator",
    "CardState",
    "CardSummary",
    "DataStore",
    "HttpDataStore",
    "LogNotifier",
    "MemoryNotifier",
    "Navigator",
    "Notification",
    "NotificationKind",
    "Notifier",
    "RecordEditCard",
    "SqlDataStore",
]
