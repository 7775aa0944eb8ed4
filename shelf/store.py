"""
In-memory book store.

``ResourceStore`` owns every book and exposes the four operations used by the
HTTP layer. Operations never raise: each one returns an ``OperationResult``
that the dispatcher writes to the wire as-is.
"""

import secrets
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from shelf.errors import (
    BookNotFoundError, BookValidationError, ShelfError, UpdateFailedError
)
from shelf.filtering import filter_books
from shelf.models import Book, FailureKind, Operation, OperationResult
from shelf.responses import failure, is_internal, success
from shelf.validator import recognized_fields, validate_book_payload
from utilities.config import config
from utilities.logger import ShelfLogger

Selector = Union[None, str, Mapping[str, Any]]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def generate_book_id(size: Optional[int] = None) -> str:
    """Generate a URL-safe random book id."""
    return secrets.token_urlsafe(size or config.id_size)


class ResourceStore:
    """
    Volatile store for books.

    All access to the collection goes through a re-entrant lock, so requests
    served from a thread pool observe each other as fully sequential.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = generate_book_id,
        recompute_finished_on_update: Optional[bool] = None,
    ):
        """
        Initialize the store.

        Args:
            clock: Returns the current time for insertedAt/updatedAt
            id_factory: Returns a new unique id
            recompute_finished_on_update: Override of the config setting
        """
        self._books: Dict[str, Book] = {}
        self._lock = threading.RLock()
        self._clock = clock
        self._id_factory = id_factory
        if recompute_finished_on_update is None:
            recompute_finished_on_update = config.recompute_finished_on_update
        self.recompute_finished_on_update = recompute_finished_on_update
        self.shelf_logger = ShelfLogger("shelf.store").bind_context(store=hex(id(self)))

    # Operations

    def create(self, payload: Any) -> OperationResult:
        """
        Add a book.

        Args:
            payload: Decoded request body

        Returns:
            201 with ``data.bookId`` or a failure envelope
        """
        try:
            with self._lock:
                book = self._add_book(validate_book_payload(payload))
        except ShelfError as e:
            return self._fail(Operation.CREATE, e)
        return success(Operation.CREATE, {"bookId": book.id})

    def retrieve(self, selector: Selector = None) -> OperationResult:
        """
        Read books.

        Args:
            selector: None for every book, a book id, or a mapping of query terms

        Returns:
            200 with ``data.books`` or ``data.book``; 404 for an unknown id
        """
        try:
            with self._lock:
                if isinstance(selector, str):
                    book = self._find_book(selector)
                    return success(Operation.RETRIEVE, {"book": book.to_wire()})
                books = self.get_books(selector)
        except ShelfError as e:
            book_id = selector if isinstance(selector, str) else None
            return self._fail(Operation.RETRIEVE, e, book_id=book_id)
        return success(Operation.RETRIEVE, {"books": [book.to_wire() for book in books]})

    def update(self, book_id: str, payload: Any) -> OperationResult:
        """
        Merge the payload into an existing book.

        Fields absent from the payload keep their stored values. The merged
        record is what gets validated.
        """
        try:
            with self._lock:
                existing = self._find_book(book_id)
                if payload is not None and not isinstance(payload, Mapping):
                    validate_book_payload(payload)
                changes = recognized_fields(payload or {})
                candidate = {**existing.writable_fields(), **changes}
                validate_book_payload(candidate)
                self._update_book(existing, candidate)
        except ShelfError as e:
            return self._fail(Operation.UPDATE, e, book_id=book_id)
        self.shelf_logger.log_book_updated(book_id, sorted(changes))
        return success(Operation.UPDATE)

    def delete(self, book_id: str) -> OperationResult:
        try:
            with self._lock:
                self._find_book(book_id)
                self._delete_book(book_id)
                remaining = len(self._books)
        except ShelfError as e:
            return self._fail(Operation.DELETE, e, book_id=book_id)
        self.shelf_logger.log_book_deleted(book_id, remaining)
        return success(Operation.DELETE)

    # Model-level access

    def get_books(self, selector: Selector = None) -> Union[List[Book], Book]:
        """
        Return stored books.

        Args:
            selector: None for all books, an id for one book, or query terms

        Raises:
            BookNotFoundError: Unknown id
            EmptyQueryError: Empty query mapping
        """
        with self._lock:
            if selector is None:
                return list(self._books.values())
            if isinstance(selector, str):
                return self._find_book(selector)
            books = filter_books(self._books.values(), selector)
            self.shelf_logger.log_query(selector, len(books), len(self._books))
            return books

    def count(self) -> int:
        with self._lock:
            return len(self._books)

    def clear(self) -> None:
        with self._lock:
            self._books.clear()

    def __contains__(self, book_id: object) -> bool:
        with self._lock:
            return book_id in self._books

    def __len__(self) -> int:
        return self.count()

    # Internals, called with the lock held

    def _find_book(self, book_id: Optional[str]) -> Book:
        book = self._books.get(book_id) if book_id else None
        if book is None:
            raise BookNotFoundError(book_id or "")
        return book

    def _add_book(self, fields: Dict[str, Any]) -> Book:
        book_id = self._id_factory()
        while book_id in self._books:
            book_id = self._id_factory()

        now = self._clock()
        try:
            book = Book(
                id=book_id,
                finished=Book.is_finished(fields.get("pageCount"), fields.get("readPage")),
                insertedAt=now,
                updatedAt=now,
                **fields,
            )
        except ValidationError as e:
            raise BookValidationError(FailureKind.TYPE_MISMATCH, str(e))
        self._books[book_id] = book
        self.shelf_logger.log_book_created(book_id, book.name, len(self._books))
        return book

    def _update_book(self, existing: Book, candidate: Dict[str, Any]) -> Book:
        if existing.id not in self._books:
            raise UpdateFailedError(f"book '{existing.id}' disappeared before write")

        finished = existing.finished
        if self.recompute_finished_on_update:
            finished = Book.is_finished(candidate.get("pageCount"), candidate.get("readPage"))

        try:
            book = Book(
                id=existing.id,
                finished=finished,
                insertedAt=existing.inserted_at,
                updatedAt=self._clock(),
                **candidate,
            )
        except ValidationError as e:
            raise UpdateFailedError(str(e))

        self._books[existing.id] = book
        return book

    def _delete_book(self, book_id: str) -> None:
        del self._books[book_id]

    def _fail(
        self,
        operation: Operation,
        error: ShelfError,
        book_id: Optional[str] = None
    ) -> OperationResult:
        self.shelf_logger.log_failure(
            operation.value,
            error.kind.value,
            error.detail or str(error),
            internal=is_internal(operation, error.kind),
            book_id=book_id,
        )
        return failure(operation, error.kind)
