"""Prize wheel — commands and handlers.

Opening the wheel checks the order row, each draw spends one spin and logs a
reward, and closing the wheel settles the order's spin fields and sends the
new-order notification with the results.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Integer, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.ledger.order_book import OrderBook
from ordering.order.submission import Submission, SubmissionStage
from ordering.sheets.port import SheetStoreError
from ordering.spin.eligibility import SpinCompletion, SpinStatus, remaining_spins, spin_status_for
from ordering.spin.session import SpinSession
from ordering.spin.wheel import draw_prize, is_winning
from shared.snapshots import SpinSummary

logger = structlog.get_logger(__name__)


def session_state(session: SpinSession) -> dict:
    return {
        "order_id": str(session.order_id),
        "chances": session.chances,
        "spins_used": session.spins_used,
        "remaining": session.remaining,
        "gifts": session.gift_list,
        "status": session.status,
    }


def _open_session(order_id):
    repo = current_domain.repository_for(SpinSession)
    try:
        session = repo.get(order_id)
    except ObjectNotFoundError:
        raise ValidationError({"spin": ["The prize wheel has not been opened for this order"]}) from None
    return repo, session


@ordering.command(part_of="SpinSession")
class OpenSpin:
    order_id = String(required=True, max_length=64)


@ordering.command(part_of="SpinSession")
class DrawSpin:
    order_id = String(required=True, max_length=64)


@ordering.command(part_of="SpinSession")
class CloseSpin:
    order_id = String(required=True, max_length=64)


@ordering.command(part_of="SpinSession")
class RecordSpinStatus:
    order_id = String(required=True, max_length=64)
    spins_used = Integer(required=True, min_value=0)
    spin_completed = String(required=True, choices=SpinCompletion)


@ordering.command_handler(part_of=SpinSession)
class SpinWheelHandler:
    @handle(OpenSpin)
    def open_spin(self, command):
        row = OrderBook().get_row(command.order_id)
        repo = current_domain.repository_for(SpinSession)

        try:
            existing = repo.get(command.order_id)
        except ObjectNotFoundError:
            existing = None
        if existing is not None and existing.is_open:
            return session_state(existing)

        status = spin_status_for(row.eligible_for_gift, row.spin_chances, row.spins_used, row.spin_completed)
        if status == SpinStatus.NOT_ELIGIBLE:
            raise ValidationError({"spin": ["Order is not eligible for the prize wheel"]})
        if status == SpinStatus.COMPLETED or remaining_spins(row.spin_chances, row.spins_used) == 0:
            raise ValidationError({"spin": ["All spins for this order have been used"]})

        if existing is not None:
            session = existing
            session.reopen(chances=row.spin_chances, spins_used=row.spins_used)
        else:
            session = SpinSession.open(
                order_id=row.order_id,
                customer_name=row.customer_name,
                chances=row.spin_chances,
                spins_used=row.spins_used,
            )
        repo.add(session)
        logger.info("Spin session opened", order_id=row.order_id, remaining=session.remaining)
        return session_state(session)

    @handle(DrawSpin)
    def draw_spin(self, command):
        repo, session = _open_session(command.order_id)

        prize = draw_prize()
        session.record_draw(prize)
        repo.add(session)

        alerts = []
        if is_winning(prize):
            try:
                OrderBook().append_reward(str(session.order_id), session.customer_name, prize.label)
            except SheetStoreError as exc:
                logger.error("Failed to log spin reward", order_id=command.order_id, error=str(exc))
                alerts.append(f"Failed to log spin reward: {exc}")

        state = session_state(session)
        state["prize"] = {"id": prize.id, "label": prize.label, "category": prize.category, "value": prize.value}
        state["alerts"] = alerts
        return state

    @handle(CloseSpin)
    def close_spin(self, command):
        repo, session = _open_session(command.order_id)
        completion = session.close()
        repo.add(session)

        book = OrderBook()
        submission = Submission(str(session.order_id), stage=SubmissionStage.SPIN_OFFERED)
        submission.resolve_spin(book, session.spins_used, completion)
        submission.notify_saved(
            book,
            spin=SpinSummary(chances=session.chances, spins_used=session.spins_used, completed=completion),
            gifts=session.gift_list,
        )

        logger.info("Spin session closed", order_id=command.order_id, spin_completed=completion)
        state = session_state(session)
        state["spin_completed"] = completion
        state["stage"] = submission.stage.value
        state["alerts"] = submission.alerts
        return state

    @handle(RecordSpinStatus)
    def record_spin_status(self, command):
        OrderBook().update_spin(command.order_id, command.spins_used, command.spin_completed)
