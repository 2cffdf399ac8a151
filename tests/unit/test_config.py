from datetime import datetime, timedelta, timezone

from lambda_gateway.config import get_settings
from lambda_gateway.utils import utc_now_iso


def test_defaults(monkeypatch):
    for name in (
        "GATEWAY_SECRET_ID",
        "GATEWAY_SECRET_BACKEND",
        "GATEWAY_SECRET_TIMEOUT",
        "GATEWAY_MISSING_SECRET_POLICY",
        "GATEWAY_ID_STRATEGY",
        "GATEWAY_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    s = get_settings()
    assert s.SECRET_ID == "lambda-gateway-secret"
    assert s.SECRET_BACKEND == "env"
    assert s.SECRET_TIMEOUT == 3.0
    assert s.MISSING_SECRET_POLICY == "fail-closed"
    assert s.ID_STRATEGY == "random"
    assert s.LOG_LEVEL == "INFO"


def test_env_read_at_call_time(monkeypatch):
    monkeypatch.setenv("GATEWAY_SECRET_BACKEND", " HTTP ")
    assert get_settings().SECRET_BACKEND == "http"
    monkeypatch.setenv("GATEWAY_SECRET_BACKEND", "file")
    assert get_settings().SECRET_BACKEND == "file"


def test_timeout_is_clamped_and_tolerates_garbage(monkeypatch):
    monkeypatch.setenv("GATEWAY_SECRET_TIMEOUT", "999")
    assert get_settings().SECRET_TIMEOUT == 30.0
    monkeypatch.setenv("GATEWAY_SECRET_TIMEOUT", "0")
    assert get_settings().SECRET_TIMEOUT == 0.1
    monkeypatch.setenv("GATEWAY_SECRET_TIMEOUT", "soon")
    assert get_settings().SECRET_TIMEOUT == 3.0


def test_unknown_policy_fails_closed(monkeypatch):
    monkeypatch.setenv("GATEWAY_MISSING_SECRET_POLICY", "whatever")
    assert get_settings().MISSING_SECRET_POLICY == "fail-closed"
    monkeypatch.setenv("GATEWAY_MISSING_SECRET_POLICY", "EMPTY-KEY")
    assert get_settings().MISSING_SECRET_POLICY == "empty-key"


def test_utc_now_iso_format():
    fixed = datetime(2024, 5, 1, 12, 30, 45, 123456, tzinfo=timezone.utc)
    assert utc_now_iso(fixed) == "2024-05-01T12:30:45.123Z"


def test_utc_now_iso_converts_offsets():
    plus_two = datetime(2024, 5, 1, 14, 0, 0, tzinfo=timezone(timedelta(hours=2)))
    assert utc_now_iso(plus_two) == "2024-05-01T12:00:00.000Z"
