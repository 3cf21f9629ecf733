"""Staff chat dispatch — renders order messages and fans them out to every chat.

Delivery never raises: each recipient's result is collected and the
broadcast counts as delivered when at least one chat accepted the message.
"""

from dataclasses import dataclass, field

import structlog

from notifications.channel import chat_ids, get_chat_channel
from notifications.messages.diff import detect_changes
from notifications.messages.new_order import NewOrderTemplate
from notifications.messages.order_update import OrderUpdateTemplate
from notifications.messages.whatsapp import chat_text
from shared.snapshots import OrderSnapshot, SpinSummary

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class BroadcastResult:
    delivered: int
    failed: int
    results: list[dict] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.delivered > 0

    @property
    def errors(self) -> list[str]:
        return [result.get("error", "") for result in self.results if result.get("status") != "sent"]


def broadcast(text: str, parse_mode: str = "HTML") -> BroadcastResult:
    adapter = get_chat_channel()
    results = []
    for chat_id in chat_ids():
        result = adapter.send(chat_id, text, parse_mode=parse_mode)
        results.append({**result, "chat_id": chat_id})

    delivered = sum(1 for result in results if result.get("status") == "sent")
    outcome = BroadcastResult(delivered=delivered, failed=len(results) - delivered, results=results)

    if outcome.success:
        logger.info("Chat message delivered", delivered=outcome.delivered, failed=outcome.failed)
    else:
        logger.warning("Chat message not delivered to any recipient", errors=outcome.errors)
    return outcome


def notify_new_order(order: OrderSnapshot, spin: SpinSummary | None = None, gifts=()) -> BroadcastResult:
    document = NewOrderTemplate.render(order, spin=spin, gifts=gifts)
    return broadcast(chat_text(document, order.whatsapp))


def notify_order_update(before: OrderSnapshot, after: OrderSnapshot) -> tuple[list[str], BroadcastResult]:
    changes = detect_changes(before, after)
    document = OrderUpdateTemplate.render(before, after, changes=changes)
    return changes, broadcast(chat_text(document, after.whatsapp))
