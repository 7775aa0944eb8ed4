"""
Payload validation for book writes.

Rules are applied in a fixed order and the first failing rule decides the
failure kind:

1. ``name`` missing, empty or falsy           -> EmptyName
2. ``readPage`` greater than ``pageCount``    -> ReadPageExceedsPageCount
   (numeric strings are compared by value here)
3. a present field with the wrong value type  -> TypeMismatch

Only fields that are present are inspected. Unknown keys are ignored.
"""

from typing import Any, Dict, Mapping, Optional, Union

from shelf.errors import BookValidationError
from shelf.models import BOOK_FIELDS, FailureKind, FieldType

NON_NEGATIVE_FIELDS = ("pageCount", "readPage")


def is_number(value: Any) -> bool:
    """True for int/float values; bool is not a number here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_number(text: str) -> Optional[Union[int, float]]:
    """Parse text as an int or finite float, or return None."""
    text = text.strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return number


def as_number(value: Any) -> Optional[Union[int, float]]:
    """Numeric value of a number or numeric string, for the page comparison."""
    if is_number(value):
        return value
    if isinstance(value, str):
        return parse_number(value)
    return None


def matches_type(value: Any, field_type: FieldType) -> bool:
    if field_type == FieldType.STRING:
        return isinstance(value, str)
    if field_type == FieldType.NUMBER:
        return is_number(value)
    return isinstance(value, bool)


def recognized_fields(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Keep only the writable book fields of a payload."""
    return {key: payload[key] for key in BOOK_FIELDS if key in payload}


def _read_page_exceeds(payload: Mapping[str, Any]) -> bool:
    read_page = as_number(payload.get("readPage"))
    page_count = as_number(payload.get("pageCount"))
    if read_page is None or page_count is None:
        return False
    return read_page > page_count


def validate_book_payload(payload: Optional[Any]) -> Dict[str, Any]:
    """
    Validate a create or update candidate.

    Args:
        payload: Decoded JSON body; ``None`` is treated as an empty object

    Returns:
        The recognized fields of the payload

    Raises:
        BookValidationError: with the kind of the first rule that fails
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise BookValidationError(
            FailureKind.TYPE_MISMATCH,
            f"payload must be an object, got {type(payload).__name__}",
        )

    if not payload.get("name"):
        raise BookValidationError(FailureKind.EMPTY_NAME, "name is required", field="name")

    if _read_page_exceeds(payload):
        raise BookValidationError(
            FailureKind.READ_PAGE_EXCEEDS_PAGE_COUNT,
            f"readPage {payload['readPage']} is greater than pageCount {payload['pageCount']}",
            field="readPage",
        )

    fields = recognized_fields(payload)
    for key, value in fields.items():
        field_type = BOOK_FIELDS[key]
        if not matches_type(value, field_type):
            raise BookValidationError(
                FailureKind.TYPE_MISMATCH,
                f"{key} must be a {field_type.value}",
                field=key,
            )
        if key in NON_NEGATIVE_FIELDS and value < 0:
            raise BookValidationError(
                FailureKind.TYPE_MISMATCH,
                f"{key} cannot be negative",
                field=key,
            )

    return fields
