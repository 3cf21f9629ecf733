"""Environment-driven settings for the storefront.

Values are read on every call so tests can adjust the environment with
``monkeypatch.setenv`` without reloading modules.
"""

import os

DEFAULT_SPIN_THRESHOLD = 500_000


def spin_threshold() -> int:
    """Order total (Rp) that earns one spin of the prize wheel."""
    raw = os.environ.get("SPIN_THRESHOLD")
    if not raw:
        return DEFAULT_SPIN_THRESHOLD
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"SPIN_THRESHOLD must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"SPIN_THRESHOLD must be positive, got {value}")
    return value


def staff_credentials() -> tuple[str, str]:
    return (
        os.environ.get("ORDERS_LIST_USERNAME", "admin"),
        os.environ.get("ORDERS_LIST_PASSWORD", "sukses123"),
    )


def environment() -> str:
    """Deployment environment name (``development``, ``test``, ``staging``, ``production``)."""
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()
