"""Order submission flow.

A submission moves through explicit stages::

    Submitted -> SpinOffered -> SpinResolved -> Notified
    Submitted -> Notified

Each stage talks to one gateway. A gateway failure is logged and kept as an
alert for the caller; writes that already happened are not undone and
nothing is retried.
"""

from enum import Enum

import structlog
from protean.exceptions import ValidationError

from notifications.dispatch import notify_new_order
from ordering.sheets.port import SheetStoreError
from ordering.utils.logging import order_context

logger = structlog.get_logger(__name__)


class SubmissionStage(Enum):
    SUBMITTED = "Submitted"
    SPIN_OFFERED = "SpinOffered"
    SPIN_RESOLVED = "SpinResolved"
    NOTIFIED = "Notified"


_VALID_TRANSITIONS = {
    SubmissionStage.SUBMITTED: {SubmissionStage.SPIN_OFFERED, SubmissionStage.NOTIFIED},
    SubmissionStage.SPIN_OFFERED: {SubmissionStage.SPIN_RESOLVED},
    SubmissionStage.SPIN_RESOLVED: {SubmissionStage.NOTIFIED},
    SubmissionStage.NOTIFIED: set(),  # Terminal
}


class Submission:
    def __init__(self, order_id: str, stage: SubmissionStage = SubmissionStage.SUBMITTED):
        self.order_id = order_id
        self.stage = stage
        self.alerts: list[str] = []

    def _advance(self, stage: SubmissionStage):
        if stage not in _VALID_TRANSITIONS[self.stage]:
            raise ValidationError({"stage": [f"Cannot move from {self.stage.value} to {stage.value}"]})
        self.stage = stage

    def _alert(self, message: str, error) -> None:
        logger.error(message, order_id=self.order_id, stage=self.stage.value, error=str(error))
        self.alerts.append(f"{message}: {error}")

    # -------------------------------------------------------------------
    # Stages
    # -------------------------------------------------------------------
    def persist(self, book, order) -> bool:
        """Write the order row, then its item rows.

        Returns False when the order row could not be written; the item rows
        are skipped in that case.
        """
        try:
            book.save_order_row(order)
        except SheetStoreError as exc:
            self._alert("Failed to save order", exc)
            return False

        try:
            book.save_item_rows(order)
        except SheetStoreError as exc:
            self._alert("Failed to save order items", exc)
        return True

    def offer_spin(self) -> None:
        self._advance(SubmissionStage.SPIN_OFFERED)

    def resolve_spin(self, book, spins_used: int, spin_completed: str) -> None:
        self._advance(SubmissionStage.SPIN_RESOLVED)
        try:
            book.update_spin(self.order_id, spins_used, spin_completed)
        except SheetStoreError as exc:
            self._alert("Failed to save spin result", exc)

    def notify_saved(self, book, spin=None, gifts=()) -> bool:
        """Reload the stored order and notify with it."""
        try:
            snapshot = book.load(self.order_id).snapshot()
        except SheetStoreError as exc:
            self._advance(SubmissionStage.NOTIFIED)
            self._alert("Failed to load order for notification", exc)
            return False
        return self.notify(snapshot, spin=spin, gifts=gifts)

    def notify(self, snapshot, spin=None, gifts=()) -> bool:
        self._advance(SubmissionStage.NOTIFIED)
        with order_context(self.order_id):
            result = notify_new_order(snapshot, spin=spin, gifts=gifts)
        if not result.success:
            self._alert("Failed to notify staff chat", "; ".join(result.errors) or "no recipients")
        return result.success
