"""
Biodex Cards — RecordEditCard
===============================

What:  The species card: a summary face, a detail dialog whose fields are
       read-only until the owner enters edit mode, validated submission, and
       owner-only deletion behind a confirmation step.
How:   Holds volatile UI state and a draft copy of the editable fields.
       Talks to the outside world only through DataStore, Notifier and
       Navigator.

State machine (per card):

    Viewing ──begin_edit (owner)──▶ Editing
    Editing ──cancel_edit / submit ok──▶ Viewing
    Editing ──submit failed (validation or store)──▶ Editing
    Viewing ──begin_delete (owner)──▶ DeleteConfirming
    DeleteConfirming ──cancel_delete / confirm_delete (any outcome)──▶ Viewing

    Non-owners never leave Viewing. Hiding the controls is a UX gate only;
    the store re-checks ownership on every write.

Ordering:
    Navigator.refresh() is only called after the DataStore call returns, so
    list views never re-fetch ahead of the write they are reacting to.

Delete outcome:
    confirm_delete() does not branch on the store result. It closes the
    confirmation, refreshes and reports success even when the delete failed;
    the failure is only logged. The refreshed list shows the truth.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from biodex.cards.base import DataStore, Navigator, NotificationKind, Notifier
from biodex.config import settings
from biodex.exceptions import StoreError
from biodex.schemas.species import EDITABLE_FIELDS, SpeciesForm, SpeciesRecord

logger = logging.getLogger(__name__)

UPDATE_SUCCESS_MESSAGE = "Species updated successfully!"
UPDATE_FAILURE_TITLE = "Something went wrong."
DELETE_SUCCESS_TITLE = "Species has been deleted!"


class CardState(str, Enum):
    VIEWING = "viewing"
    EDITING = "editing"
    DELETE_CONFIRMING = "delete_confirming"


class CardSummary(BaseModel):
    """What the card face shows before the detail dialog opens."""

    image: Optional[str]
    title: str
    subtitle: Optional[str]
    teaser: str


class RecordEditCard:
    """
    One species card for one viewer.

    Args:
        record: The committed record as last fetched.
        viewer_id: Identity of the viewer; compared with `record.author`.
        store, notifier, navigator: Collaborators, see biodex.cards.base.

    Attributes:
        detail_open: Detail/edit dialog visibility.
        delete_confirm_open: Delete confirmation visibility.
        editing: Whether draft fields accept input.
        draft: Working copy of the six editable fields. Always holds every
            key; absent values are None.
        errors: Inline validation messages by field name, from the last submit.
    """

    def __init__(
        self,
        record: SpeciesRecord,
        viewer_id: str,
        store: DataStore,
        notifier: Notifier,
        navigator: Navigator,
    ):
        self.record = record
        self.viewer_id = viewer_id
        self.store = store
        self.notifier = notifier
        self.navigator = navigator

        self.detail_open = False
        self.delete_confirm_open = False
        self.editing = False
        self.draft: Dict[str, Any] = record.editable_values()
        self.errors: Dict[str, str] = {}
        self._pending = False

    @classmethod
    async def load(
        cls,
        store: DataStore,
        record_id: int,
        viewer_id: str,
        notifier: Notifier,
        navigator: Navigator,
    ) -> "RecordEditCard":
        """Fetch a record through `store` and build its card. StoreError propagates."""
        record = await store.fetch_record(record_id)
        return cls(record, viewer_id, store, notifier, navigator)

    # ── Derived state ─────────────────────────────────────────────────────

    @property
    def is_owner(self) -> bool:
        return self.viewer_id == self.record.author

    @property
    def state(self) -> CardState:
        if self.delete_confirm_open:
            return CardState.DELETE_CONFIRMING
        if self.editing:
            return CardState.EDITING
        return CardState.VIEWING

    @property
    def pending(self) -> bool:
        """True while a submit or delete is waiting on the store."""
        return self._pending

    def summary(self) -> CardSummary:
        description = self.record.description
        teaser = ""
        if description:
            teaser = description[: settings.description_preview_length].strip() + "..."
        return CardSummary(
            image=self.record.image,
            title=self.record.scientific_name,
            subtitle=self.record.common_name,
            teaser=teaser,
        )

    def controls(self) -> List[str]:
        """Names of the controls a renderer should show right now."""
        visible = ["learn_more"]
        if not self.is_owner:
            return visible
        state = self.state
        if state is CardState.EDITING:
            visible += ["update", "cancel"]
        elif state is CardState.DELETE_CONFIRMING:
            visible += ["confirm_delete", "cancel_delete"]
        else:
            visible += ["edit", "delete"]
        return visible

    def is_read_only(self, field: str) -> bool:
        return not self.editing or field not in EDITABLE_FIELDS

    # ── Dialog visibility ─────────────────────────────────────────────────

    def open(self) -> None:
        self.detail_open = True

    def close(self) -> None:
        self.detail_open = False

    # ── Editing ───────────────────────────────────────────────────────────

    def begin_edit(self) -> bool:
        if not self.is_owner or self.state is not CardState.VIEWING:
            return False
        self.editing = True
        return True

    def set_field(self, field: str, value: Any) -> bool:
        """Change one draft value. Ignored while read-only or while a submit is pending."""
        if self._pending or self.is_read_only(field):
            return False
        self.draft[field] = value
        return True

    def cancel_edit(self) -> None:
        self.draft = self.record.editable_values()
        self.errors = {}
        self.editing = False

    async def submit_edit(self) -> bool:
        """
        Validate the draft and send it to the store.

        Returns True when the record was updated. On a validation failure
        `errors` is filled and the store is never called. On a store failure
        an error notification is shown and the draft is kept for a retry.
        Either way the card stays in Editing.
        """
        if not self.editing or self._pending:
            return False

        try:
            form = SpeciesForm.model_validate(self.draft)
        except PydanticValidationError as exc:
            self.errors = _field_errors(exc)
            logger.debug("Species %s draft rejected: %s", self.record.id, self.errors)
            return False
        self.errors = {}

        patch = form.to_patch()
        self._pending = True
        try:
            await self.store.update_record(self.record.id, patch)
        except StoreError as exc:
            self.notifier.notify(exc.message, NotificationKind.ERROR, title=UPDATE_FAILURE_TITLE)
            return False
        finally:
            self._pending = False

        self.record = self.record.model_copy(update=patch)
        self.draft = self.record.editable_values()
        self.editing = False
        self.navigator.refresh()
        self.notifier.notify(UPDATE_SUCCESS_MESSAGE, NotificationKind.SUCCESS)
        return True

    # ── Deleting ──────────────────────────────────────────────────────────

    def begin_delete(self) -> bool:
        if not self.is_owner or self.state is not CardState.VIEWING:
            return False
        self.delete_confirm_open = True
        return True

    def cancel_delete(self) -> None:
        self.delete_confirm_open = False

    async def confirm_delete(self) -> None:
        if not self.delete_confirm_open or self._pending:
            return

        self._pending = True
        try:
            await self.store.delete_record(self.record.id)
        except StoreError as exc:
            logger.warning("Delete of species %s failed: %s", self.record.id, exc.message)
        finally:
            self._pending = False

        self.delete_confirm_open = False
        self.navigator.refresh()
        self.notifier.notify(
            f"Successfully deleted {self.record.scientific_name}.",
            NotificationKind.SUCCESS,
            title=DELETE_SUCCESS_TITLE,
        )


def _field_errors(exc: PydanticValidationError) -> Dict[str, str]:
    """First message per field, keyed by field name."""
    errors: Dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc") or ("__root__",)
        errors.setdefault(str(loc[0]), error["msg"])
    return errors
