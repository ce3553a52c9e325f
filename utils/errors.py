# utils/errors.py
from __future__ import annotations

from typing import Optional


class LoadError(Exception):
    """
    Base for every failure the dataset loader can report.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(LoadError):
    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        reason: Optional[str] = None,
    ):
        super().__init__(message)
        self.status = status
        self.reason = reason


class FormatError(LoadError):
    pass


class SchemaError(LoadError):
    pass


class ConsistencyError(LoadError):
    def __init__(self, category: str, *, expected: int, actual: int):
        super().__init__(
            f"Data inconsistency in category: {category} "
            f"(expected {expected} values, got {actual})"
        )
        self.category = category
        self.expected = expected
        self.actual = actual


class RenderError(Exception):
    """
    The chart could not be built or mounted.
    """
