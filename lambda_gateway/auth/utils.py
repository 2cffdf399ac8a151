"""
Utility functions for the auth module.
"""

import hashlib
import hmac


def hash_username(username: str, key: str) -> str:
    """
    Return the lower-case hex HMAC-SHA256 of `username` keyed with `key`.

    Note:
        Deterministic and irreversible, but it is not a password scheme.
    """
    return hmac.new(key.encode("utf-8"), username.encode("utf-8"), hashlib.sha256).hexdigest()
