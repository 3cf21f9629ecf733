"""Ordering bounded context — cookie orders, spin-the-wheel promotions and the order ledger.

Orders are built in memory as aggregates, persisted to the spreadsheet-backed
order book, and announced to the staff chat channel once submission completes.
"""

import structlog
from protean.domain import Domain

from ordering.utils.logging import configure_logging

configure_logging()

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
