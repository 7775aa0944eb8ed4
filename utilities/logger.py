"""
Structured logging for the bookshelf service using structlog.
Provides JSON or console output and a store-specific event logger.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import structlog
from structlog.stdlib import LoggerFactory


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "console",
    log_file: Optional[Union[str, Path]] = None,
    debug: bool = False
) -> None:
    """
    Set up structured logging with configurable output formats.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format (json or console)
        log_file: Optional log file path
        debug: Add call site information to every event
    """
    level = getattr(logging, log_level.upper())

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    logging.getLogger().setLevel(level)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        processors.append(structlog.processors.CallsiteParameterAdder())

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter('%(message)s'))
        logging.getLogger().addHandler(file_handler)

    logger = structlog.get_logger(__name__)
    logger.info(
        "Logging system initialized",
        level=log_level,
        format=log_format,
        file=str(log_file) if log_file else None,
        debug=debug
    )


class ShelfLogger:
    """
    Event logger for store operations with bound context.
    """

    def __init__(self, name: str = "shelf"):
        self.logger = structlog.get_logger(name)
        self.context = {}

    def bind_context(self, **kwargs) -> 'ShelfLogger':
        """
        Bind context variables to every event.

        Args:
            **kwargs: Context variables to bind

        Returns:
            Self for method chaining
        """
        self.context.update(kwargs)
        return self

    def log_book_created(self, book_id: str, name: str, total_books: int) -> None:
        self.logger.info(
            "Book created",
            book_id=book_id,
            name=name,
            total_books=total_books,
            **self.context
        )

    def log_book_updated(self, book_id: str, fields: list) -> None:
        self.logger.info(
            "Book updated",
            book_id=book_id,
            fields=fields,
            **self.context
        )

    def log_book_deleted(self, book_id: str, total_books: int) -> None:
        self.logger.info(
            "Book deleted",
            book_id=book_id,
            total_books=total_books,
            **self.context
        )

    def log_query(self, terms: Mapping[str, Any], matched: int, total: int) -> None:
        self.logger.debug(
            "Books filtered",
            terms=dict(terms),
            matched=matched,
            total=total,
            **self.context
        )

    def log_failure(
        self,
        operation: str,
        kind: str,
        detail: str,
        internal: bool = False,
        book_id: Optional[str] = None
    ) -> None:
        """Log a rejected operation; internal failures are errors, the rest warnings."""
        level = "error" if internal else "warning"
        getattr(self.logger, level)(
            "Book operation failed",
            operation=operation,
            kind=kind,
            detail=detail,
            book_id=book_id,
            **self.context
        )
