import json
import os
import re

# Console logging only while testing
os.environ["LOG_FILE"] = ""

import httpx
import pytest
from fastapi.testclient import TestClient

from sealed_otp.core.config import Settings
from sealed_otp.db.repositories.otp_session_repository import OTPSessionRepository
from sealed_otp.services.otp_service import OTPService
from sealed_otp.services.recipient_service import RecipientResolver
from sealed_otp.services.telegram_service import TelegramClient

BOT_TOKEN = "123456:TEST-TOKEN"
BOT_USER_ID = 123456

OTP_IN_MESSAGE = re.compile(r"Your Sealed Letter OTP is: (\d{6})")


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTelegram:
    """Stands in for api.telegram.org behind httpx.MockTransport"""

    def __init__(self):
        self.bot_id = BOT_USER_ID
        self.updates = []
        self.sent = []
        self.calls = []
        self.send_error = None

    def user_message(self, chat_id, *, is_bot=False):
        self.updates.append({
            "update_id": len(self.updates) + 1,
            "message": {"from": {"id": chat_id, "is_bot": is_bot}, "chat": {"id": chat_id}, "text": "/start"},
        })

    def last_code(self) -> str:
        return OTP_IN_MESSAGE.search(self.sent[-1]["text"]).group(1)

    def handler(self, request: httpx.Request) -> httpx.Response:
        method = request.url.path.rsplit("/", 1)[-1]
        self.calls.append(method)

        if not request.url.path.startswith(f"/bot{BOT_TOKEN}/"):
            return httpx.Response(401, json={"ok": False, "error_code": 401, "description": "Unauthorized"})

        if method == "getMe":
            result = {"id": self.bot_id, "is_bot": True} if self.bot_id is not None else {"is_bot": True}
            return httpx.Response(200, json={"ok": True, "result": result})

        if method == "getUpdates":
            return httpx.Response(200, json={"ok": True, "result": self.updates})

        if method == "sendMessage":
            if self.send_error:
                return httpx.Response(400, json={"ok": False, "error_code": 400, "description": self.send_error})
            payload = json.loads(request.content)
            self.sent.append(payload)
            return httpx.Response(200, json={"ok": True, "result": {"message_id": len(self.sent)}})

        return httpx.Response(404, json={"ok": False, "error_code": 404, "description": "Not Found"})


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_telegram():
    return FakeTelegram()


@pytest.fixture
def telegram_client(fake_telegram):
    return TelegramClient(BOT_TOKEN, transport=httpx.MockTransport(fake_telegram.handler))


@pytest.fixture
def store():
    return OTPSessionRepository()


@pytest.fixture
def resolver(telegram_client):
    return RecipientResolver(telegram_client)


@pytest.fixture
def otp_service(store, telegram_client, resolver, clock):
    return OTPService(
        store,
        telegram_client,
        resolver,
        ttl_ms=300000,
        max_attempts=5,
        clock=clock,
        code_factory=lambda: "482913",
    )


@pytest.fixture
def make_settings(tmp_path):
    def _make(**overrides):
        values = {
            "TELEGRAM_BOT_TOKEN": BOT_TOKEN,
            "TELEGRAM_CHAT_ID": "",
            "OTP_TTL_MS": 300000,
            "OTP_MAX_ATTEMPTS": 5,
            "STATIC_DIR": str(tmp_path),
            "LOG_FILE": "",
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make


@pytest.fixture
def make_client(make_settings, telegram_client):
    from main import create_app

    clients = []

    def _make(**overrides):
        settings = make_settings(**overrides)
        # Without a token the app builds its own unconfigured client
        app = create_app(settings, telegram_client=telegram_client if settings.is_token_configured else None)
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    return make_client()
