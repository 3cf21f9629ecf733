"""Domain events for the SpinSession aggregate."""

from protean.fields import Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="SpinSession")
class SpinSessionOpened:
    """The prize wheel was opened for an eligible order."""

    __version__ = 1

    order_id = Identifier(required=True)
    chances = Integer(required=True)
    remaining = Integer(required=True)


@ordering.event(part_of="SpinSession")
class PrizeDrawn:
    __version__ = 1

    order_id = Identifier(required=True)
    prize_id = String(required=True)
    label = String(required=True)
    remaining = Integer(required=True)


@ordering.event(part_of="SpinSession")
class SpinSessionClosed:
    """The wheel was closed; the order is now Completed or Skipped."""

    __version__ = 1

    order_id = Identifier(required=True)
    spins_used = Integer(required=True)
    spin_completed = String(required=True)
