"""
Bookshelf resource manager.

This package holds the book model, payload validation, query filtering and
the in-memory ``ResourceStore`` that serves create/retrieve/update/delete.
"""

from shelf.models import Book, FailureKind, OperationResult, ResultStatus
from shelf.store import ResourceStore

__all__ = ["Book", "FailureKind", "OperationResult", "ResourceStore", "ResultStatus"]
