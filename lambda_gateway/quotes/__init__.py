from .catalog import QUOTES, Quote, QuoteCatalog

__all__ = ["QUOTES", "Quote", "QuoteCatalog"]
