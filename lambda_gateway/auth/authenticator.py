"""
Core "login" logic.

HashAuthenticator turns a username into a deterministic, irreversible digest:
HMAC-SHA256(encryptionKey, username) rendered as lower-case hex. The key is
read from a secret of the form {"encryptionKey": "..."} on every call, so a
rotated secret takes effect without restarting.

Missing secret policy:
    - "fail-closed" (default): raise SecretUnavailableError.
    - "empty-key": hash with an empty key and log a warning. This weakens
      the digest to a plain keyless HMAC and exists only for parity with
      legacy deployments.
"""

import json
import logging
from typing import Optional

from lambda_gateway.config import EMPTY_KEY, FAIL_CLOSED, MISSING_SECRET_POLICIES
from .secret_provider import SecretProvider
from .utils import hash_username

log = logging.getLogger(__name__)

KEY_FIELD = "encryptionKey"


class AuthenticationError(Exception):
    """Base class for failures while computing a login digest."""


class SecretUnavailableError(AuthenticationError):
    """The secret could not be resolved and the policy forbids an empty key."""


class SecretFormatError(AuthenticationError):
    """The secret was resolved but does not carry a usable encryption key."""


def parse_encryption_key(raw: str) -> str:
    """
    Extract the encryption key from a raw secret string.

    Raises:
        SecretFormatError: If the secret is not a JSON object with a string `encryptionKey`.
    """
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise SecretFormatError("Secret is not valid JSON") from e

    if not isinstance(data, dict):
        raise SecretFormatError("Secret must be a JSON object")
    key = data.get(KEY_FIELD)
    if not isinstance(key, str):
        raise SecretFormatError(f"Secret has no string {KEY_FIELD!r} field")
    return key


class HashAuthenticator:
    def __init__(
        self,
        provider: SecretProvider,
        secret_id: str,
        missing_secret_policy: str = FAIL_CLOSED,
    ):
        """
        Args:
            provider (SecretProvider): Where the key is fetched from.
            secret_id (str): Name of the secret holding the key.
            missing_secret_policy (str): "fail-closed" or "empty-key".
        """
        if missing_secret_policy not in MISSING_SECRET_POLICIES:
            raise ValueError(f"Unknown missing secret policy: {missing_secret_policy!r}")
        self.provider = provider
        self.secret_id = secret_id
        self.missing_secret_policy = missing_secret_policy

    def resolve_key(self) -> str:
        """
        Fetch and parse the current encryption key.

        Raises:
            SecretUnavailableError: Secret absent under the fail-closed policy.
            SecretFormatError: Secret present but malformed.
        """
        raw: Optional[str] = self.provider.fetch_secret(self.secret_id)
        if raw is None:
            if self.missing_secret_policy == EMPTY_KEY:
                log.warning("Secret %r unavailable; hashing with an empty key", self.secret_id)
                return ""
            raise SecretUnavailableError(f"Secret {self.secret_id!r} could not be resolved")
        return parse_encryption_key(raw)

    def authenticate(self, username: str) -> str:
        """Return the hex HMAC-SHA256 digest of `username` under the current key."""
        return hash_username(username, self.resolve_key())
