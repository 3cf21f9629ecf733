"""Staff sessions for the order back office.

Logging in with the configured staff credentials creates a ``StaffSession``
whose token is presented on every protected request; logging out discards it.
Sessions live in process memory.
"""

import hmac
import secrets
from dataclasses import dataclass, field
from datetime import UTC, datetime

import structlog

from ordering.settings import staff_credentials

logger = structlog.get_logger(__name__)


class InvalidCredentials(Exception):
    pass


@dataclass(frozen=True)
class StaffSession:
    token: str
    username: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


_sessions: dict[str, StaffSession] = {}


def login(username: str, password: str) -> StaffSession:
    expected_username, expected_password = staff_credentials()
    username_ok = hmac.compare_digest((username or "").encode(), expected_username.encode())
    password_ok = hmac.compare_digest((password or "").encode(), expected_password.encode())
    if not (username_ok and password_ok):
        logger.warning("Staff login rejected", username=username)
        raise InvalidCredentials("Invalid username or password")

    session = StaffSession(token=secrets.token_urlsafe(32), username=username)
    _sessions[session.token] = session
    logger.info("Staff logged in", username=username)
    return session


def logout(token: str) -> bool:
    session = _sessions.pop(token or "", None)
    if session is not None:
        logger.info("Staff logged out", username=session.username)
    return session is not None


def resolve(token: str | None) -> StaffSession | None:
    if not token:
        return None
    return _sessions.get(token)


def reset_sessions():
    """Forget every session (useful for testing)."""
    _sessions.clear()
