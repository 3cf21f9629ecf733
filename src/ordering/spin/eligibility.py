"""Spin entitlement rules.

Pure functions over order totals and persisted spin fields; nothing here
touches a repository or a gateway.
"""

from enum import Enum

from ordering.settings import spin_threshold


class SpinCompletion(Enum):
    """Persisted value of the ``Spin Completed`` column."""

    NO = "Tidak"
    YES = "Ya"
    SKIPPED = "Skipped"


class GiftEligibility(Enum):
    YES = "Ya"
    NO = "Tidak"


class SpinStatus(Enum):
    NOT_ELIGIBLE = "NotEligible"
    ELIGIBLE_PENDING = "EligiblePending"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    SKIPPED = "Skipped"


def spin_chances(total, threshold=None) -> int:
    """Number of wheel spins an order total earns: ``floor(total / threshold)``."""
    threshold = threshold or spin_threshold()
    if not total or total < 0:
        return 0
    return int(total // threshold)


def remaining_spins(chances: int, spins_used: int) -> int:
    return max(0, chances - spins_used)


def spin_status_for(eligible: bool, chances: int, spins_used: int, completion: str, in_progress=False) -> SpinStatus:
    """Derive the wheel state of a persisted order.

    A session that is open and has not been closed yet reports ``InProgress``
    regardless of the stored columns.
    """
    if not eligible or chances == 0:
        return SpinStatus.NOT_ELIGIBLE
    if in_progress:
        return SpinStatus.IN_PROGRESS
    if completion == SpinCompletion.YES.value:
        return SpinStatus.COMPLETED
    if completion == SpinCompletion.SKIPPED.value:
        return SpinStatus.SKIPPED
    return SpinStatus.ELIGIBLE_PENDING
