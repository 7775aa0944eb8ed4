"""
API models and schemas for the FastAPI application.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from shelf.models import Book, ResultStatus


class FailResponse(BaseModel):
    """Body of every failed request."""
    status: ResultStatus = Field(ResultStatus.FAIL, description="Always 'fail'")
    message: str = Field(..., description="Human-readable error message")
    detail: Optional[Any] = Field(None, description="Additional error details (debug only)")


class MessageResponse(BaseModel):
    """Body of a successful update or delete."""
    status: ResultStatus = Field(ResultStatus.SUCCESS, description="Always 'success'")
    message: str = Field(..., description="Outcome message")


class BookIdData(BaseModel):
    bookId: str = Field(..., description="Identifier of the new book")


class CreatedResponse(MessageResponse):
    """Body of a successful create."""
    data: BookIdData


class BookListData(BaseModel):
    books: List[Book] = Field(..., description="Books in insertion order")


class BookListResponse(BaseModel):
    """Body of a list or filter request."""
    status: ResultStatus = Field(ResultStatus.SUCCESS)
    data: BookListData


class BookDetailData(BaseModel):
    book: Book


class BookDetailResponse(BaseModel):
    """Body of a single-book request."""
    status: ResultStatus = Field(ResultStatus.SUCCESS)
    data: BookDetailData


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current timestamp")
    version: str = Field(..., description="API version")
    books_count: int = Field(..., description="Number of books on the shelf")


# OpenAPI documentation for the book routes
FAIL_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"model": FailResponse, "description": "Invalid book payload"},
    404: {"model": FailResponse, "description": "Book not found"},
    500: {"model": FailResponse, "description": "Book could not be written"},
}
