"""
Exceptions raised inside the shelf package.

They never leave a ``ResourceStore`` operation: each operation converts them
into an ``OperationResult`` through ``shelf.responses``.
"""

from typing import Optional

from shelf.models import FailureKind


class ShelfError(Exception):
    """Base class carrying the failure kind reported to callers."""

    kind: FailureKind = FailureKind.UPDATE_FAILED

    def __init__(self, detail: str = "", kind: Optional[FailureKind] = None):
        super().__init__(detail or self.__class__.__name__)
        self.detail = detail
        if kind is not None:
            self.kind = kind


class BookValidationError(ShelfError):
    """Payload rejected by the validator."""

    def __init__(self, kind: FailureKind, detail: str = "", field: Optional[str] = None):
        super().__init__(detail, kind)
        self.field = field


class BookNotFoundError(ShelfError):
    kind = FailureKind.NOT_FOUND

    def __init__(self, book_id: str):
        super().__init__(f"book '{book_id}' not found")
        self.book_id = book_id


class EmptyQueryError(ShelfError):
    """Filter called with no query terms."""
    kind = FailureKind.EMPTY_QUERY


class UpdateFailedError(ShelfError):
    kind = FailureKind.UPDATE_FAILED
