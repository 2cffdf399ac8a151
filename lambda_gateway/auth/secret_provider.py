"""
Secret providers – resolve a named credential to its raw value
==============================================================

Every provider implements `fetch_secret(secret_id) -> Optional[str]` and
returns the raw secret string (typically JSON such as '{"encryptionKey": "abc123"}').
Failures are logged and reported as None rather than raised, so callers
decide what an absent secret means (see authenticator.py).

Backends
--------
- "env"    : env var GATEWAY_SECRET_<ID> (ID upper-cased, non-alphanumerics -> "_")
- "file"   : JSON file mapping secret id -> object or string
- "http"   : GET {base_url}/{secret_id} with a bounded timeout (requests)
- "static" : in-memory mapping (tests, local demos)

`get_secret_provider()` picks the backend from settings.
"""

import json
import logging
import os
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

import requests

from lambda_gateway.config import get_settings

log = logging.getLogger(__name__)

ENV_PREFIX = "GATEWAY_SECRET_"
_NON_ALNUM = re.compile(r"[^0-9A-Za-z]+")


def _stringify(value: Any) -> str:
    return value if isinstance(value, str) else json.dumps(value)


class SecretProvider(ABC):
    """Abstract base for secret backends."""

    @abstractmethod  # pragma: no cover
    def fetch_secret(self, secret_id: str) -> Optional[str]:
        """Return the secret string, or None if it cannot be resolved."""
        raise NotImplementedError

    def close(self) -> None:
        """Release any held resources. No-op by default."""


class StaticSecretProvider(SecretProvider):
    """Serves secrets from a fixed mapping; values may be strings or JSON-able objects."""

    def __init__(self, secrets: Optional[Mapping[str, Any]] = None):
        self._secrets: Dict[str, Any] = dict(secrets or {})

    def fetch_secret(self, secret_id: str) -> Optional[str]:
        if secret_id not in self._secrets:
            log.warning("Secret %r not found in static provider", secret_id)
            return None
        return _stringify(self._secrets[secret_id])


class EnvSecretProvider(SecretProvider):
    """Reads secrets from environment variables at fetch time."""

    def __init__(self, prefix: str = ENV_PREFIX):
        self.prefix = prefix

    def env_name(self, secret_id: str) -> str:
        return self.prefix + _NON_ALNUM.sub("_", secret_id).strip("_").upper()

    def fetch_secret(self, secret_id: str) -> Optional[str]:
        name = self.env_name(secret_id)
        value = os.getenv(name)
        if not value:
            log.warning("Secret %r not set (env var %s)", secret_id, name)
            return None
        return value


class FileSecretProvider(SecretProvider):
    """
    Reads secrets from a JSON file of the form:

        {"lambda-gateway-secret": {"encryptionKey": "abc123"}}

    The file is read on every fetch so rotated values are picked up.
    """

    def __init__(self, path: str):
        if not path:
            raise ValueError("A secret file path is required for the file backend (env GATEWAY_SECRET_FILE)")
        self.path = path

    def fetch_secret(self, secret_id: str) -> Optional[str]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            log.exception("Error reading secret file %s", self.path)
            return None

        if not isinstance(data, dict) or secret_id not in data:
            log.warning("Secret %r not found in %s", secret_id, self.path)
            return None
        return _stringify(data[secret_id])


class HttpSecretProvider(SecretProvider):
    """
    Fetches secrets from an HTTP secret service: GET {base_url}/{secret_id}.

    The response body is returned as-is on 2xx. Any network error, timeout or
    non-2xx status yields None. The timeout bounds every call.
    """

    def __init__(self, base_url: str, timeout: float = 3.0, session: Optional[requests.Session] = None):
        if not base_url:
            raise ValueError("A base URL is required for the http backend (env GATEWAY_SECRET_URL)")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_secret(self, secret_id: str) -> Optional[str]:
        url = f"{self.base_url}/{quote(secret_id, safe='')}"
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException:
            log.exception("Error fetching secret %r from %s", secret_id, self.base_url)
            return None

        if not resp.text:
            log.warning("Secret %r returned an empty body", secret_id)
            return None
        return resp.text

    def close(self) -> None:
        self.session.close()


def get_secret_provider(backend: Optional[str] = None, settings=None, **kwargs) -> SecretProvider:
    """
    Return a SecretProvider based on configuration.

    Parameters
    ----------
    backend : str, optional
        "env", "file", "http" or "static". If omitted, uses settings.SECRET_BACKEND.
    settings : Settings, optional
        Source of SECRET_FILE / SECRET_URL / SECRET_TIMEOUT; read from env when omitted.
    kwargs : dict
        Overrides passed to the backend (path=, base_url=, timeout=, secrets=).
    """
    if settings is None:
        settings = get_settings()

    be = (backend or settings.SECRET_BACKEND or "env").strip().lower()
    log.info("Selected secret backend: %r", be)

    if be == "env":
        return EnvSecretProvider(prefix=kwargs.get("prefix", ENV_PREFIX))
    if be == "file":
        return FileSecretProvider(path=kwargs.get("path") or settings.SECRET_FILE)
    if be == "http":
        return HttpSecretProvider(
            base_url=kwargs.get("base_url") or settings.SECRET_URL,
            timeout=kwargs.get("timeout", settings.SECRET_TIMEOUT),
        )
    if be == "static":
        return StaticSecretProvider(kwargs.get("secrets"))

    raise ValueError(f"Unknown secret backend: {be!r}")
