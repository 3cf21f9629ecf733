"""SpinSession aggregate — one sitting at the prize wheel for a placed order.

A session is opened with the order's entitlement and the spins it already
used. Each draw uses one spin; closing the session settles the order's spin
fields as Completed (``Ya``) or Skipped. Only the close is written back to the
order row; individual prizes go to the reward log as they are drawn.
"""

import json
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String, Text

from ordering.domain import ordering
from ordering.spin.eligibility import SpinCompletion, SpinStatus, remaining_spins
from ordering.spin.events import PrizeDrawn, SpinSessionClosed, SpinSessionOpened
from ordering.spin.wheel import is_winning


class SessionStatus(Enum):
    IN_PROGRESS = SpinStatus.IN_PROGRESS.value
    COMPLETED = SpinStatus.COMPLETED.value
    SKIPPED = SpinStatus.SKIPPED.value


@ordering.aggregate
class SpinSession:
    order_id = Identifier(identifier=True, required=True)
    customer_name = String(max_length=255, default="")
    chances = Integer(required=True, min_value=0)
    used_before = Integer(default=0, min_value=0)
    spins_taken = Integer(default=0, min_value=0)
    gifts = Text()  # JSON list of prize labels
    status = String(choices=SessionStatus, default=SessionStatus.IN_PROGRESS.value)

    @classmethod
    def open(cls, order_id, customer_name, chances, spins_used=0):
        session = cls(
            order_id=order_id,
            customer_name=customer_name,
            chances=chances,
            used_before=spins_used,
            spins_taken=0,
            gifts=json.dumps([]),
            status=SessionStatus.IN_PROGRESS.value,
        )
        session.raise_(
            SpinSessionOpened(
                order_id=str(order_id),
                chances=chances,
                remaining=session.remaining,
            )
        )
        return session

    def reopen(self, chances, spins_used):
        """Start a new sitting for an order whose last session was skipped."""
        if self.is_open:
            raise ValidationError({"spin": ["The prize wheel is already open for this order"]})

        self.chances = chances
        self.used_before = spins_used
        self.spins_taken = 0
        self.gifts = json.dumps([])
        self.status = SessionStatus.IN_PROGRESS.value

        self.raise_(
            SpinSessionOpened(
                order_id=str(self.order_id),
                chances=chances,
                remaining=self.remaining,
            )
        )

    @property
    def spins_used(self) -> int:
        return self.used_before + self.spins_taken

    @property
    def remaining(self) -> int:
        return remaining_spins(self.chances, self.spins_used)

    @property
    def gift_list(self) -> list[str]:
        return json.loads(self.gifts) if self.gifts else []

    @property
    def is_open(self) -> bool:
        return self.status == SessionStatus.IN_PROGRESS.value

    def record_draw(self, prize):
        """Use one spin on ``prize``; winning prizes are added to the gifts."""
        if not self.is_open:
            raise ValidationError({"spin": ["The prize wheel is closed for this order"]})
        if self.remaining == 0:
            raise ValidationError({"spin": ["No spins remaining"]})

        self.spins_taken += 1
        if is_winning(prize):
            self.gifts = json.dumps([*self.gift_list, prize.label])

        self.raise_(
            PrizeDrawn(
                order_id=str(self.order_id),
                prize_id=prize.id,
                label=prize.label,
                remaining=self.remaining,
            )
        )

    def close(self) -> str:
        """Finish the session and return the order's new ``Spin Completed`` value."""
        if not self.is_open:
            raise ValidationError({"spin": ["The prize wheel is already closed for this order"]})

        if self.spins_used > 0:
            completion = SpinCompletion.YES.value
            self.status = SessionStatus.COMPLETED.value
        else:
            completion = SpinCompletion.SKIPPED.value
            self.status = SessionStatus.SKIPPED.value

        self.raise_(
            SpinSessionClosed(
                order_id=str(self.order_id),
                spins_used=self.spins_used,
                spin_completed=completion,
            )
        )
        return completion
