from typing import Any, Optional


class RecommenderError(Exception):
    """Base class for errors raised by the recommender."""
    pass


class MalformedRecordError(RecommenderError, ValueError):
    """Raised when an ingested record cannot be read as (user_id, item_id)."""

    def __init__(self, message: str, record: Any = None, position: Optional[int] = None) -> None:
        super().__init__(message)
        self.record = record
        self.position = position


class InvalidArgumentError(RecommenderError, ValueError):
    """Raised for invalid request arguments or configuration values."""
    pass
