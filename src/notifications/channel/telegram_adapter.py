"""Telegram adapter — posts messages through the Bot API ``sendMessage`` call."""

import requests
import structlog

from notifications.channel.chat_port import ChatPort

logger = structlog.get_logger(__name__)

API_BASE = "https://api.telegram.org"


class TelegramChatAdapter(ChatPort):
    def __init__(self, bot_token: str, timeout: float = 10.0, session: requests.Session | None = None):
        if not bot_token:
            raise ValueError("TELEGRAM_BOT_TOKEN is required for the telegram chat adapter")
        self.bot_token = bot_token
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def url(self) -> str:
        return f"{API_BASE}/bot{self.bot_token}/sendMessage"

    def send(self, chat_id: str, text: str, parse_mode: str = "HTML") -> dict:
        payload = {"chat_id": chat_id, "text": text, "parse_mode": parse_mode}
        try:
            resp = self.session.post(self.url, json=payload, timeout=self.timeout)
            resp.raise_for_status()
            body = resp.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Telegram sendMessage failed", chat_id=chat_id, error=str(exc))
            return {"message_id": None, "status": "failed", "error": str(exc)}

        if not body.get("ok"):
            error = body.get("description", "Telegram rejected the message")
            logger.warning("Telegram rejected the message", chat_id=chat_id, error=error)
            return {"message_id": None, "status": "failed", "error": error}

        message_id = str(body.get("result", {}).get("message_id", ""))
        return {"message_id": message_id, "status": "sent"}
