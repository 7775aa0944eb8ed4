"""
Result table for store operations.

Maps (operation, failure kind) to the HTTP status code and message sent to
clients. Messages are the public Indonesian texts of the bookshelf API.
"""

from typing import Any, Dict, Optional, Tuple

from shelf.models import FailureKind, Operation, OperationResult, ResultStatus


SUCCESS_MESSAGES: Dict[Operation, Tuple[int, Optional[str]]] = {
    Operation.CREATE: (201, "Buku berhasil ditambahkan"),
    Operation.RETRIEVE: (200, None),
    Operation.UPDATE: (200, "Buku berhasil diperbarui"),
    Operation.DELETE: (200, "Buku berhasil dihapus"),
}

FAILURES: Dict[Tuple[Operation, FailureKind], Tuple[int, str]] = {
    (Operation.CREATE, FailureKind.EMPTY_NAME): (
        400, "Gagal menambahkan buku. Mohon isi nama buku"),
    (Operation.CREATE, FailureKind.READ_PAGE_EXCEEDS_PAGE_COUNT): (
        400, "Gagal menambahkan buku. readPage tidak boleh lebih besar dari pageCount"),
    (Operation.RETRIEVE, FailureKind.NOT_FOUND): (
        404, "Buku tidak ditemukan"),
    (Operation.UPDATE, FailureKind.NOT_FOUND): (
        404, "Gagal memperbarui buku. Id tidak ditemukan"),
    (Operation.UPDATE, FailureKind.EMPTY_NAME): (
        400, "Gagal memperbarui buku. Mohon isi nama buku"),
    (Operation.UPDATE, FailureKind.READ_PAGE_EXCEEDS_PAGE_COUNT): (
        400, "Gagal memperbarui buku. readPage tidak boleh lebih besar dari pageCount"),
    (Operation.DELETE, FailureKind.NOT_FOUND): (
        404, "Buku gagal dihapus. Id tidak ditemukan"),
}

# Anything not listed above (TypeMismatch, EmptyQuery, UpdateFailed, ...)
GENERIC_FAILURES: Dict[Operation, Tuple[int, str]] = {
    Operation.CREATE: (500, "Buku gagal ditambahkan"),
    Operation.RETRIEVE: (500, "Gagal menampilkan buku"),
    Operation.UPDATE: (500, "Gagal memperbarui buku"),
    Operation.DELETE: (500, "Buku gagal dihapus"),
}


def success(operation: Operation, data: Optional[Dict[str, Any]] = None) -> OperationResult:
    http_code, message = SUCCESS_MESSAGES[operation]
    return OperationResult(
        status=ResultStatus.SUCCESS,
        http_code=http_code,
        message=message,
        data=data,
    )


def failure(operation: Operation, kind: FailureKind) -> OperationResult:
    """Build the failure envelope for an operation and failure kind."""
    http_code, message = FAILURES.get((operation, kind), GENERIC_FAILURES[operation])
    return OperationResult(
        status=ResultStatus.FAIL,
        http_code=http_code,
        message=message,
        failure=kind,
    )


def is_internal(operation: Operation, kind: FailureKind) -> bool:
    """True when the failure is reported as a server error."""
    return (operation, kind) not in FAILURES
