"""Fake chat adapter — records sent messages for testing."""

from uuid import uuid4

from notifications.channel.chat_port import ChatPort


class FakeChatAdapter(ChatPort):
    """Chat adapter that records messages in memory for test assertions."""

    def __init__(self):
        self.sent_messages: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Chat delivery failed"
        self.failing_chats: set[str] = set()

    def configure(self, should_succeed: bool = True, failure_reason: str = "Chat delivery failed", failing_chats=()):
        """Configure the fake adapter behavior for testing.

        ``failing_chats`` fails only the listed recipients.
        """
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.failing_chats = set(failing_chats)

    def send(self, chat_id: str, text: str, parse_mode: str = "HTML") -> dict:
        if not self.should_succeed or chat_id in self.failing_chats:
            return {
                "message_id": None,
                "status": "failed",
                "error": self.failure_reason,
            }

        message_id = f"chat-{uuid4().hex[:12]}"
        self.sent_messages.append(
            {
                "message_id": message_id,
                "chat_id": chat_id,
                "text": text,
                "parse_mode": parse_mode,
            }
        )

        return {"message_id": message_id, "status": "sent"}

    def reset(self):
        """Clear sent messages (useful between tests)."""
        self.sent_messages.clear()
        self.should_succeed = True
        self.failure_reason = "Chat delivery failed"
        self.failing_chats = set()
