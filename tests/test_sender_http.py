"""Tests for sending over http and https."""

from urllib.parse import parse_qs, urlsplit

import pytest

from kapow_sms.config import SenderConfig
from kapow_sms.delivery import DeliveryStatus
from kapow_sms.exceptions import ConfigurationError, CredentialError, TransportError
from kapow_sms.memory.fake import FakeHttpClient, FakeResponse
from kapow_sms.sender import KapowSender


def _query(url):
    return {key: values[0] for key, values in parse_qs(urlsplit(url).query).items()}


def test_http_transport_requires_http_client(http_config):
    """Test construction fails without an HTTP capability."""
    with pytest.raises(ConfigurationError, match="HTTP client"):
        KapowSender(http_config)


def test_https_transport_requires_http_client():
    """Test https needs an HTTP capability too."""
    with pytest.raises(ConfigurationError):
        KapowSender(SenderConfig(send_via="https"))


@pytest.mark.asyncio
async def test_send_accepted_records_state(sender, http_client):
    """Test an OK reply yields the message id and credit balance."""
    result = await sender.send("07712345678", "Hello, world!")

    assert result
    assert result.status is DeliveryStatus.ACCEPTED
    assert result.tracked is True
    assert result.message_id == "abc123"
    assert result.credits == 42
    assert result.recipient == "447712345678"

    assert sender.message_id == "abc123"
    assert sender.credit_balance == 42
    assert sender.raw_response == "OK 42 abc123"
    assert sender.sent_at is not None
    assert result.sent_at == sender.sent_at
    http_client.assert_called("GET", count=1)


@pytest.mark.asyncio
async def test_send_get_builds_query(sender, http_client):
    """Test the GET request targets sendsms.php with all required fields."""
    await sender.send("+447712345678", "Hello\r\nworld")

    request = http_client.last_request
    parts = urlsplit(request.url)
    assert parts.scheme == "http"
    assert parts.netloc == "www.kapow.co.uk"
    assert parts.path == "/scripts/sendsms.php"
    assert request.data is None
    assert _query(request.url) == {
        "username": "kapow-user",
        "password": "s3cret",
        "mobile": "447712345678",
        "sms": "Hello world",
        "returnid": "TRUE",
    }


@pytest.mark.asyncio
async def test_send_get_percent_encodes_values(http_client):
    """Test every GET value is percent-encoded."""
    config = SenderConfig(
        login="me&you",
        password="p@ss word",
        callback_url="http://example.com/done?id=1",
    )
    sender = KapowSender(config, http_client=http_client)

    await sender.send("447712345678", "50% off & more")

    url = http_client.last_request.url
    assert "sms=50%25%20off%20%26%20more" in url
    assert "username=me%26you" in url
    assert "password=p%40ss%20word" in url
    assert "url=http%3A%2F%2Fexample.com%2Fdone%3Fid%3D1" in url
    assert _query(url)["sms"] == "50% off & more"


@pytest.mark.asyncio
async def test_send_https_post_uses_form_body(http_client):
    """Test POST sends unencoded form fields to the https endpoint."""
    config = SenderConfig(
        user="kapow-user", password="s3cret", send_via="https", http_method="post"
    )
    sender = KapowSender(config, http_client=http_client)

    await sender.send("07712345678", "50% off & more")

    request = http_client.last_request
    assert request.method == "POST"
    assert request.url == "https://www.kapow.co.uk/scripts/sendsms.php"
    assert request.data == {
        "username": "kapow-user",
        "password": "s3cret",
        "mobile": "447712345678",
        "sms": "50% off & more",
        "returnid": "TRUE",
    }


@pytest.mark.asyncio
async def test_send_includes_optional_fields(http_client):
    """Test from_id, route and url are sent when configured."""
    config = SenderConfig(
        login="u",
        password="p",
        http_method="post",
        from_id="MYSHOP",
        route="840101",
        callback_url="http://example.com/default",
    )
    sender = KapowSender(config, http_client=http_client)

    await sender.send("447712345678", "hi")

    data = http_client.last_request.data
    assert data["from_id"] == "MYSHOP"
    assert data["route"] == "840101"
    assert data["url"] == "http://example.com/default"


@pytest.mark.asyncio
async def test_per_message_callback_overrides_default(http_client):
    """Test a per-call callback URL wins over the configured one."""
    config = SenderConfig(
        login="u", password="p", http_method="post", callback_url="http://example.com/default"
    )
    sender = KapowSender(config, http_client=http_client)

    await sender.send("447712345678", "hi", callback_url="http://example.com/done123")

    assert http_client.last_request.data["url"] == "http://example.com/done123"


@pytest.mark.asyncio
async def test_empty_optional_fields_are_omitted(http_client):
    """Test empty optional values are not sent."""
    config = SenderConfig(login="u", password="p", http_method="post", from_id="", route="")
    sender = KapowSender(config, http_client=http_client)

    await sender.send("447712345678", "hi")

    assert set(http_client.last_request.data) == {
        "username",
        "password",
        "mobile",
        "sms",
        "returnid",
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "config",
    [
        SenderConfig(login="u"),
        SenderConfig(password="p"),
        SenderConfig(),
    ],
)
async def test_send_without_credentials_fails_before_request(config, http_client):
    """Test http/s requires login and password and never calls the gateway."""
    sender = KapowSender(config, http_client=http_client)

    with pytest.raises(CredentialError):
        await sender.send("447712345678", "hi")

    assert http_client.requests == []


@pytest.mark.asyncio
async def test_provider_rejection_returns_failed_result(sender, http_client, caplog):
    """Test a non-OK reply is a failed result, not an exception."""
    http_client.queue(FakeResponse("FAIL bad-number"))

    with caplog.at_level("WARNING", logger="kapow_sms.sender"):
        result = await sender.send("447712345678", "hi")

    assert not result
    assert result.status is DeliveryStatus.FAILED
    assert result.message_id is None
    assert result.error == "FAIL"
    assert sender.message_id is None
    assert sender.credit_balance is None
    assert sender.raw_response == "FAIL bad-number"
    assert "Kapow returned 'FAIL'" in caplog.text


@pytest.mark.asyncio
async def test_empty_reply_is_a_rejection(sender, http_client):
    """Test an empty body is treated as not accepted."""
    http_client.queue(FakeResponse(""))

    result = await sender.send("447712345678", "hi")

    assert not result
    assert result.error == "empty response"


@pytest.mark.asyncio
async def test_non_success_response_raises_transport_error(sender, http_client):
    """Test an HTTP failure is fatal and carries the status line."""
    http_client.queue(FakeResponse.error("503 Service Unavailable"))

    with pytest.raises(TransportError, match="503 Service Unavailable") as exc_info:
        await sender.send("447712345678", "hi")

    assert exc_info.value.status_line == "503 Service Unavailable"
    assert sender.message_id is None


@pytest.mark.asyncio
async def test_missing_response_raises_transport_error(sender, http_client):
    """Test a client returning no response is fatal."""
    http_client.queue(None)

    with pytest.raises(TransportError, match="No HTTP request issued"):
        await sender.send("447712345678", "hi")


@pytest.mark.asyncio
async def test_client_exception_raises_transport_error(http_config):
    """Test network errors from the client surface as TransportError."""

    class BrokenClient(FakeHttpClient):
        async def get(self, url):
            raise OSError("connection refused")

    sender = KapowSender(http_config, http_client=BrokenClient())

    with pytest.raises(TransportError, match="connection refused"):
        await sender.send("447712345678", "hi")


@pytest.mark.asyncio
async def test_unknown_http_method_raises_configuration_error(http_config, http_client):
    """Test an unrecognized http method is a configuration error."""
    config = http_config.model_copy(update={"http_method": "put"})
    sender = KapowSender(config, http_client=http_client)

    with pytest.raises(ConfigurationError, match="http_method"):
        await sender.send("447712345678", "hi")

    assert http_client.requests == []


@pytest.mark.asyncio
async def test_non_numeric_credits_kept_verbatim(sender, http_client):
    """Test the credits token is stored as-is when not an integer."""
    http_client.queue(FakeResponse("OK 12.5 xyz"))

    result = await sender.send("447712345678", "hi")

    assert result.credits == "12.5"
    assert result.message_id == "xyz"


@pytest.mark.asyncio
async def test_password_not_logged(sender, caplog):
    """Test request logging masks the password."""
    with caplog.at_level("DEBUG", logger="kapow_sms.sender"):
        await sender.send("447712345678", "hi")

    assert "s3cret" not in caplog.text
    assert "password=%2A%2A%2A" in caplog.text or "password=***" in caplog.text


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "config",
    [
        SenderConfig(login="u", password=""),
        SenderConfig(login="", password="p"),
    ],
)
async def test_send_with_empty_credentials_fails_before_request(config, http_client):
    """Test empty login or password count as missing."""
    sender = KapowSender(config, http_client=http_client)

    with pytest.raises(CredentialError):
        await sender.send("447712345678", "hi")

    assert http_client.requests == []
