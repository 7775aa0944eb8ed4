"""
Query filtering over the book collection.

Every query term is turned into a (haystack, needle) pair of lowercase
strings by ``coerce_term`` and passes when the haystack contains the needle.
Coercion has three branches, tried in order:

* numeric      - query parses as a number and the book value is a number;
                 the needle is the canonical text of that number
* boolean flag - query parses as a number and the book value is a boolean;
                 the needle is "true" for non-zero and "false" for zero
* substring    - everything else; the needle is the lowercased query text

Haystacks come from the JSON form of the book, so timestamps read exactly as
they do in API responses.

A book is kept only when all terms pass.
"""

from typing import Any, Iterable, List, Mapping, Tuple

from shelf.errors import EmptyQueryError
from shelf.models import Book
from shelf.validator import is_number, parse_number


def format_number(number: Any) -> str:
    """Render numbers the way they appear in JSON: 500, not 500.0."""
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


def render_value(value: Any) -> str:
    """Lowercase text form of a book value taken from its JSON serialization."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        return format_number(value)
    return str(value).lower()


def coerce_term(book_value: Any, query_value: Any) -> Tuple[str, str]:
    """
    Coerce a stored value and a query value into comparable strings.

    Args:
        book_value: Value of the field on the book
        query_value: Raw value from the query string

    Returns:
        Tuple of (haystack, needle)
    """
    query_text = str(query_value)
    number = parse_number(query_text)

    if number is not None and is_number(book_value):
        return render_value(book_value), format_number(number)

    if number is not None and isinstance(book_value, bool):
        return render_value(book_value), "true" if number != 0 else "false"

    return render_value(book_value), query_text.lower()


def term_matches(values: Mapping[str, Any], field: str, query_value: Any) -> bool:
    """Check one term against a book's values keyed by wire name."""
    if field not in values:
        return False
    haystack, needle = coerce_term(values[field], query_value)
    return needle in haystack


def book_matches(book: Book, terms: List[Tuple[str, Any]]) -> bool:
    values = book.model_dump(mode="json", by_alias=True)
    return all(term_matches(values, field, value) for field, value in terms)


def filter_books(books: Iterable[Book], query: Mapping[str, Any]) -> List[Book]:
    """
    Return the books matching every query term.

    Args:
        books: Books in insertion order
        query: Mapping of wire field name to expected value

    Returns:
        A new list; the input is never modified

    Raises:
        EmptyQueryError: If the query has no terms
    """
    if not query:
        raise EmptyQueryError("query has no terms")

    terms = list(query.items())
    return [book for book in books if book_matches(book, terms)]
