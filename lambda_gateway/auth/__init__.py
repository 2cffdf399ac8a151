"""
Auth package for the Lambda Gateway backend.

Provides the keyed-hash "login" primitive and the secret providers it
reads its key from.
"""

from .authenticator import (
    AuthenticationError,
    HashAuthenticator,
    SecretFormatError,
    SecretUnavailableError,
)
from .secret_provider import SecretProvider, get_secret_provider

__all__ = [
    "AuthenticationError",
    "HashAuthenticator",
    "SecretFormatError",
    "SecretUnavailableError",
    "SecretProvider",
    "get_secret_provider",
]
