import pytest


@pytest.fixture()
def chat():
    from notifications.channel import get_chat_channel

    return get_chat_channel()
