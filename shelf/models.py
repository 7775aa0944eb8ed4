"""
Pydantic models for the bookshelf.
Implements the Book record, the failure taxonomy and the operation result envelope.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field


Number = Union[int, float]


class FieldType(str, Enum):
    """Semantic type of a writable book field."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


# Writable fields in wire (camelCase) form, in payload scan order
BOOK_FIELDS: Dict[str, FieldType] = {
    "name": FieldType.STRING,
    "year": FieldType.NUMBER,
    "author": FieldType.STRING,
    "summary": FieldType.STRING,
    "publisher": FieldType.STRING,
    "pageCount": FieldType.NUMBER,
    "readPage": FieldType.NUMBER,
    "reading": FieldType.BOOLEAN,
}


class FailureKind(str, Enum):
    """Why an operation failed."""
    EMPTY_NAME = "EmptyName"
    READ_PAGE_EXCEEDS_PAGE_COUNT = "ReadPageExceedsPageCount"
    TYPE_MISMATCH = "TypeMismatch"
    NOT_FOUND = "NotFound"
    EMPTY_QUERY = "EmptyQuery"
    UPDATE_FAILED = "UpdateFailed"


class ResultStatus(str, Enum):
    """Outcome reported in the response body."""
    SUCCESS = "success"
    FAIL = "fail"


class Operation(str, Enum):
    """Store operations, used to pick messages and status codes."""
    CREATE = "create"
    RETRIEVE = "retrieve"
    UPDATE = "update"
    DELETE = "delete"


class Book(BaseModel):
    """
    A book on the shelf.

    Attribute names are snake_case; the wire format uses the camelCase aliases.
    """
    id: str = Field(..., description="Unique book identifier")
    name: str = Field(..., min_length=1, description="Book title")
    year: Optional[Number] = Field(None, description="Release year")
    author: Optional[str] = Field(None, description="Author name")
    summary: Optional[str] = Field(None, description="Summary of the book")
    publisher: Optional[str] = Field(None, description="Publisher name")
    page_count: Optional[Number] = Field(None, alias="pageCount", ge=0, description="Number of pages")
    read_page: Optional[Number] = Field(None, alias="readPage", ge=0, description="Page currently read")
    reading: Optional[bool] = Field(None, description="Whether the book is being read")
    finished: bool = Field(..., description="Whether readPage has reached pageCount")
    inserted_at: datetime = Field(..., alias="insertedAt", description="Creation timestamp")
    updated_at: datetime = Field(..., alias="updatedAt", description="Last update timestamp")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "id": "Qbax5Oy7L8WKf74l",
                "name": "Dune",
                "year": 1965,
                "author": "Frank Herbert",
                "summary": "Desert planet politics",
                "publisher": "Chilton Books",
                "pageCount": 500,
                "readPage": 500,
                "reading": False,
                "finished": True,
                "insertedAt": "2024-01-15T10:30:00Z",
                "updatedAt": "2024-01-15T10:30:00Z",
            }
        },
    }

    @staticmethod
    def is_finished(page_count: Optional[Number], read_page: Optional[Number]) -> bool:
        """A book is finished when readPage equals pageCount."""
        return page_count == read_page

    def to_wire(self) -> Dict[str, Any]:
        """Serialize using wire names and ISO-8601 timestamps."""
        return self.model_dump(mode="json", by_alias=True)

    def writable_fields(self) -> Dict[str, Any]:
        """Caller-writable fields that hold a value, keyed by wire name."""
        wire = self.model_dump(by_alias=True)
        return {key: wire[key] for key in BOOK_FIELDS if wire[key] is not None}


class OperationResult(BaseModel):
    """
    Result envelope returned by every store operation.

    The dispatcher writes ``http_code`` as the response status and ``body()``
    as the JSON payload, without interpretation.
    """
    status: ResultStatus = Field(..., description="success or fail")
    http_code: int = Field(..., description="HTTP status code for the transport")
    message: Optional[str] = Field(None, description="Human-readable outcome")
    data: Optional[Dict[str, Any]] = Field(None, description="Operation payload")
    failure: Optional[FailureKind] = Field(None, description="Failure kind, never sent on the wire")

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.SUCCESS

    def body(self) -> Dict[str, Any]:
        """JSON body for the transport; empty keys are omitted."""
        body: Dict[str, Any] = {"status": self.status.value}
        if self.message is not None:
            body["message"] = self.message
        if self.data is not None:
            body["data"] = self.data
        return body
