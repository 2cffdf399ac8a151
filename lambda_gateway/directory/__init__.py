from .base import BaseUserDirectory, UserRecord
from .directory import UserDirectory
from .ids import get_id_strategy

__all__ = ["BaseUserDirectory", "UserRecord", "UserDirectory", "get_id_strategy"]
