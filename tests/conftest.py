import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_configure(config):
    """Select the config environment before any domain module is imported."""
    os.environ["PROTEAN_ENV"] = config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Every test starts from the default adapters and settings."""
    for name in (
        "SHEET_STORE",
        "SHEET_WORKBOOK_PATH",
        "CHAT_ADAPTER",
        "TELEGRAM_BOT_TOKEN",
        "TELEGRAM_CHAT_IDS",
        "SPIN_THRESHOLD",
        "ORDERS_LIST_USERNAME",
        "ORDERS_LIST_PASSWORD",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Reset adapter singletons and in-memory state after every test."""
    yield

    from backoffice.session import reset_sessions
    from notifications.channel import reset_chat_channel
    from ordering.sheets import reset_sheet_store
    from ordering.spin.wheel import reset_rng

    reset_sheet_store()
    reset_chat_channel()
    reset_sessions()
    reset_rng()
