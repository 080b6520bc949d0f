"""Test configuration for kapow-sms."""

import pytest

pytest_plugins = ["pytest_asyncio"]


@pytest.fixture
def http_config():
    """Credentials for the default http/get transport."""
    from kapow_sms.config import SenderConfig

    return SenderConfig(login="kapow-user", password="s3cret")


@pytest.fixture
def http_client():
    """Fake gateway replying with an accepted message."""
    from kapow_sms.memory.fake import FakeHttpClient, FakeResponse

    return FakeHttpClient(default=FakeResponse("OK 42 abc123"))


@pytest.fixture
def email_transport():
    """In-memory mail transport."""
    from kapow_sms.memory.fake import InMemoryEmailTransport

    return InMemoryEmailTransport()


@pytest.fixture
def sender(http_config, http_client):
    """Sender using http/get with a fake gateway."""
    from kapow_sms.sender import KapowSender

    return KapowSender(http_config, http_client=http_client)
