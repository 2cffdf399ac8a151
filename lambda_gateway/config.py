"""
Runtime configuration for the Lambda Gateway demo backend
=========================================================

Simple settings module that reads from environment variables (only here),
and exposes a `get_settings()` factory for the rest of the codebase.
Avoid reading env vars anywhere else; import from this module instead.

Environment is read **at call time** so tests can monkeypatch variables
and build a fresh app without reloading modules.

Secrets
-------
- GATEWAY_SECRET_ID             : secret holding {"encryptionKey": "..."} (default "lambda-gateway-secret")
- GATEWAY_SECRET_BACKEND        : "env" (default), "file", "http" or "static"
- GATEWAY_SECRET_FILE           : JSON file for the "file" backend
- GATEWAY_SECRET_URL            : base URL for the "http" backend
- GATEWAY_SECRET_TIMEOUT        : seconds; default 3.0; clamped to [0.1, 30]
- GATEWAY_MISSING_SECRET_POLICY : "fail-closed" (default) or "empty-key"

User ids
--------
- GATEWAY_ID_STRATEGY : "random" (default), "uuid4" or "sequential"
- GATEWAY_ID_PREFIX   : optional prefix for the sequential strategy

Logging
-------
- GATEWAY_LOG_LEVEL : default "INFO"
"""

import os

FAIL_CLOSED = "fail-closed"
EMPTY_KEY = "empty-key"
MISSING_SECRET_POLICIES = (FAIL_CLOSED, EMPTY_KEY)


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name, str(default))
    try:
        return float(raw)
    except ValueError:
        return default


def _get_str(name: str, default: str) -> str:
    return os.getenv(name, default).strip()


class Settings:
    def __init__(self):
        # -------- Secrets --------
        self.SECRET_ID: str = _get_str("GATEWAY_SECRET_ID", "lambda-gateway-secret")
        self.SECRET_BACKEND: str = _get_str("GATEWAY_SECRET_BACKEND", "env").lower()
        self.SECRET_FILE: str = _get_str("GATEWAY_SECRET_FILE", "")
        self.SECRET_URL: str = _get_str("GATEWAY_SECRET_URL", "")
        self.SECRET_TIMEOUT: float = max(0.1, min(30.0, _get_float("GATEWAY_SECRET_TIMEOUT", 3.0)))

        policy = _get_str("GATEWAY_MISSING_SECRET_POLICY", FAIL_CLOSED).lower()
        # Anything unrecognised fails closed
        self.MISSING_SECRET_POLICY: str = policy if policy in MISSING_SECRET_POLICIES else FAIL_CLOSED

        # -------- User ids --------
        self.ID_STRATEGY: str = _get_str("GATEWAY_ID_STRATEGY", "random").lower()
        self.ID_PREFIX: str = _get_str("GATEWAY_ID_PREFIX", "")

        # -------- Logging --------
        self.LOG_LEVEL: str = _get_str("GATEWAY_LOG_LEVEL", "INFO").upper()

    def __repr__(self) -> str:
        return (
            f"Settings(secret_backend={self.SECRET_BACKEND!r}, secret_id={self.SECRET_ID!r}, "
            f"missing_secret_policy={self.MISSING_SECRET_POLICY!r}, id_strategy={self.ID_STRATEGY!r})"
        )


def get_settings() -> Settings:
    """Return a Settings snapshot of the current environment."""
    return Settings()
