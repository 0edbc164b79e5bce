import pytest

from sealed_otp.exceptions.custom_exceptions import (
    ConfigurationException,
    NoRecipientFoundException,
    OTPExpiredException,
    OTPMaxAttemptsException,
    OTPNotFoundException,
    OTPValidationException,
    SelfRecipientException,
    UpstreamException,
)
from sealed_otp.services.otp_service import OTPService
from sealed_otp.services.telegram_service import TelegramClient
from sealed_otp.utils.otp_generator import OTPGenerator

from conftest import BOT_USER_ID

CODE = "482913"


async def test_issue_stores_hash_and_delivers_code(otp_service, store, fake_telegram):
    issued = await otp_service.issue("42")

    assert issued.expires_in_seconds == 300
    session = store.get(issued.session_id)
    assert session.chat_id == "42"
    assert session.attempts == 0
    assert session.otp_hash == OTPGenerator.hash_otp(CODE)
    assert CODE not in session.model_dump_json()

    assert fake_telegram.sent == [{
        "chat_id": "42",
        "text": f"Your Sealed Letter OTP is: {CODE}\nThis code expires in 5 minute(s).",
    }]


async def test_issue_sets_expiry_from_ttl(otp_service, store, clock):
    issued = await otp_service.issue("42")

    assert store.get(issued.session_id).expires_at == clock.now + 300


async def test_each_issue_gets_a_new_session(otp_service, store):
    first = await otp_service.issue("42")
    second = await otp_service.issue("42")

    assert first.session_id != second.session_id
    assert len(store) == 2


async def test_message_rounds_minutes_up(store, telegram_client, resolver, clock, fake_telegram):
    service = OTPService(store, telegram_client, resolver, ttl_ms=90500, clock=clock, code_factory=lambda: CODE)

    issued = await service.issue("42")

    assert issued.expires_in_seconds == 90
    assert service.ttl_minutes == 2
    assert fake_telegram.sent[0]["text"].endswith("expires in 2 minute(s).")


async def test_issue_without_token(store, resolver, clock):
    service = OTPService(store, TelegramClient(""), resolver, clock=clock)

    with pytest.raises(ConfigurationException):
        await service.issue("42")


async def test_delivery_failure_propagates_and_leaves_no_session(otp_service, store, fake_telegram):
    fake_telegram.send_error = "Forbidden: bot was blocked by the user"

    with pytest.raises(UpstreamException) as exc_info:
        await otp_service.issue("42")

    assert exc_info.value.message == "Forbidden: bot was blocked by the user"
    assert len(store) == 0


async def test_self_recipient_rejected_before_delivery(otp_service, store, fake_telegram):
    with pytest.raises(SelfRecipientException):
        await otp_service.issue(str(BOT_USER_ID))

    assert "sendMessage" not in fake_telegram.calls
    assert len(store) == 0


async def test_issue_without_any_recipient(otp_service):
    with pytest.raises(NoRecipientFoundException):
        await otp_service.issue()


async def test_issue_uses_resolved_chat(otp_service, fake_telegram):
    fake_telegram.user_message(31337)

    await otp_service.issue()

    assert fake_telegram.sent[0]["chat_id"] == "31337"


async def test_correct_code_verifies_exactly_once(otp_service, store):
    issued = await otp_service.issue("42")

    result = await otp_service.verify(issued.session_id, CODE)
    assert result.valid is True
    assert result.message == "OTP verified."
    assert store.get(issued.session_id) is None

    with pytest.raises(OTPNotFoundException):
        await otp_service.verify(issued.session_id, CODE)


async def test_wrong_code_counts_attempt(otp_service, store):
    issued = await otp_service.issue("42")

    result = await otp_service.verify(issued.session_id, "000000")

    assert result.valid is False
    assert result.message == "Invalid OTP."
    assert store.get(issued.session_id).attempts == 1

    assert (await otp_service.verify(issued.session_id, CODE)).valid is True


async def test_attempt_cap_deletes_session(otp_service, store):
    issued = await otp_service.issue("42")

    for _ in range(4):
        assert (await otp_service.verify(issued.session_id, "000000")).valid is False

    with pytest.raises(OTPMaxAttemptsException) as exc_info:
        await otp_service.verify(issued.session_id, "000000")
    assert exc_info.value.status_code == 429
    assert store.get(issued.session_id) is None

    with pytest.raises(OTPNotFoundException):
        await otp_service.verify(issued.session_id, CODE)


async def test_attempts_already_at_cap_are_rejected(otp_service, store):
    issued = await otp_service.issue("42")
    session = store.get(issued.session_id)
    session.attempts = 5
    store.set(session)

    with pytest.raises(OTPMaxAttemptsException):
        await otp_service.verify(issued.session_id, CODE)

    assert store.get(issued.session_id) is None


async def test_expired_session_is_removed_without_sweep(otp_service, store, clock):
    issued = await otp_service.issue("42")
    clock.advance(300.001)

    with pytest.raises(OTPExpiredException):
        await otp_service.verify(issued.session_id, CODE)

    assert store.get(issued.session_id) is None
    with pytest.raises(OTPNotFoundException):
        await otp_service.verify(issued.session_id, CODE)


async def test_session_valid_at_exact_expiry(otp_service, clock):
    issued = await otp_service.issue("42")
    clock.advance(300)

    assert (await otp_service.verify(issued.session_id, CODE)).valid is True


@pytest.mark.parametrize("code", ["12a456", "12345", "1234567", "", "      "])
async def test_malformed_code_rejected_before_lookup(otp_service, code):
    with pytest.raises(OTPValidationException) as exc_info:
        await otp_service.verify("no-such-session", code)

    assert exc_info.value.message == "OTP must be exactly 6 digits."


async def test_missing_session_id_rejected_first(otp_service):
    with pytest.raises(OTPValidationException) as exc_info:
        await otp_service.verify("  ", "12a456")

    assert exc_info.value.message == "Missing sessionId. Request a new OTP first."


async def test_unknown_session(otp_service):
    with pytest.raises(OTPNotFoundException):
        await otp_service.verify("unknown", "123456")


async def test_input_is_stripped(otp_service):
    issued = await otp_service.issue("42")

    assert (await otp_service.verify(f" {issued.session_id} ", f" {CODE} ")).valid is True


async def test_sweep_removes_expired_sessions(otp_service, store, clock):
    old = await otp_service.issue("42")
    clock.advance(200)
    fresh = await otp_service.issue("42")
    clock.advance(100)

    otp_service.sweep()

    assert store.get(old.session_id) is None
    assert store.get(fresh.session_id) is not None

    otp_service.sweep()
    assert len(store) == 1
