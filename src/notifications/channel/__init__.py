"""Chat channel registry — pluggable staff chat adapter and its recipients.

Uses the fake adapter by default; set CHAT_ADAPTER=telegram together with
TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_IDS to post to Telegram.
"""

import os

DEFAULT_CHAT_ID = "staff"

_chat_instance = None


def get_chat_channel():
    """Return the configured chat adapter (singleton)."""
    global _chat_instance
    if _chat_instance is None:
        adapter = os.environ.get("CHAT_ADAPTER", "fake")
        if adapter == "fake":
            from notifications.channel.fake_chat import FakeChatAdapter

            _chat_instance = FakeChatAdapter()
        elif adapter == "telegram":
            from notifications.channel.telegram_adapter import TelegramChatAdapter

            _chat_instance = TelegramChatAdapter(os.environ.get("TELEGRAM_BOT_TOKEN", ""))
        else:
            raise ValueError(f"Unknown chat adapter: {adapter}")
    return _chat_instance


def chat_ids() -> list[str]:
    """Recipients from the comma-separated TELEGRAM_CHAT_IDS."""
    raw = os.environ.get("TELEGRAM_CHAT_IDS", "")
    ids = [chat_id.strip() for chat_id in raw.split(",") if chat_id.strip()]
    return ids or [DEFAULT_CHAT_ID]


def reset_chat_channel():
    """Reset the chat adapter singleton (useful for testing)."""
    global _chat_instance
    _chat_instance = None
