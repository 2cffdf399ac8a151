"""
lambda_gateway package initializer.
"""

from . import auth
from . import directory
from . import metrics
from . import quotes

__all__ = ["auth", "directory", "metrics", "quotes"]
