"""
Pydantic schemas for request payloads.
"""

from typing import Optional

from pydantic import BaseModel, field_validator


class ProfileRequest(BaseModel):
    """Payload for creating a user profile."""
    username: str
    email: Optional[str] = None

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("username must not be blank")
        return value


class LoginRequest(BaseModel):
    """Payload for the keyed-hash login."""
    username: str
