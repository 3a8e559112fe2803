import pytest
from fastapi.testclient import TestClient

from officehours.config import Settings
from officehours.errors import DeliveryFailure
from officehours.main import create_app
from officehours.services.fingerprint import IdentityHasher


class RecordingChannel:
    """Delivery channel that keeps every message instead of sending it."""

    enabled = True

    def __init__(self):
        self.sent: list[tuple[str, str]] = []

    async def send(self, destination: str, body: str) -> None:
        self.sent.append((destination, body))


class FailingChannel:
    enabled = True

    def __init__(self):
        self.attempts = 0

    async def send(self, destination: str, body: str) -> None:
        self.attempts += 1
        raise DeliveryFailure("provider rejected the message")


@pytest.fixture
def hasher() -> IdentityHasher:
    return IdentityHasher("test-fingerprint-key")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        app_env="test",
        fingerprint_key="test-fingerprint-key",
        jwt_secret_key="test-jwt-key",
        staff_username="ta",
        staff_password="office-hours",
        twilio_account_sid=None,
        twilio_auth_token=None,
    )


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def app(settings, channel):
    return create_app(settings, channel)


@pytest.fixture
def client(app) -> TestClient:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers(client) -> dict[str, str]:
    resp = client.post("/api/auth/login", json={"username": "ta", "password": "office-hours"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}
