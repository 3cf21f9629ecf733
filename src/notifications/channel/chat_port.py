"""Chat channel port — abstract interface for staff chat notifications."""

from abc import ABC, abstractmethod


class ChatPort(ABC):
    """Abstract interface for chat dispatch adapters."""

    @abstractmethod
    def send(self, chat_id: str, text: str, parse_mode: str = "HTML") -> dict:
        """Send a text message to one chat.

        Adapters never raise for delivery problems.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
