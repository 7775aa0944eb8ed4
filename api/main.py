"""
FastAPI main application for the Bookshelf API.

Routes translate each request into exactly one ``ResourceStore`` call and
write the returned envelope to the wire unchanged.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Optional

import structlog
from fastapi import APIRouter, Body, Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.config import config as api_config
from api.models import (
    BookDetailResponse, BookListResponse, CreatedResponse,
    FailResponse, FAIL_RESPONSES, HealthResponse, MessageResponse
)
from shelf.models import OperationResult
from shelf.store import ResourceStore

# Setup logging
logger = structlog.get_logger(__name__)

INVALID_REQUEST_MESSAGE = "Permintaan tidak valid"
SERVER_ERROR_MESSAGE = "Terjadi kesalahan pada server"


def get_store(request: Request) -> ResourceStore:
    """Store injected into the application by ``create_app``."""
    return request.app.state.store


def respond(result: OperationResult) -> JSONResponse:
    """Relay a store result to the transport."""
    return JSONResponse(status_code=result.http_code, content=result.body())


router = APIRouter(tags=["Books"])


@router.post(
    "/books",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={code: FAIL_RESPONSES[code] for code in (400, 500)},
)
def add_book(
    payload: Any = Body(None),
    store: ResourceStore = Depends(get_store)
):
    """
    Add a book to the shelf.

    - **name**: required, non-empty
    - **readPage**: cannot exceed **pageCount**
    """
    return respond(store.create(payload))


@router.get("/books", response_model=BookListResponse)
def list_books(request: Request, store: ResourceStore = Depends(get_store)):
    """
    List books. Any query parameter becomes a filter term on the field of
    the same name, e.g. ``?name=dune&reading=1``.
    """
    terms = dict(request.query_params)
    if terms:
        return respond(store.retrieve(terms))
    return respond(store.retrieve())


@router.get(
    "/books/{book_id}",
    response_model=BookDetailResponse,
    responses={404: FAIL_RESPONSES[404]},
)
def get_book(book_id: str, request: Request, store: ResourceStore = Depends(get_store)):
    """
    Get a single book by ID. Query parameters take precedence and turn the
    request into a filter over all books, as on ``GET /books``.
    """
    terms = dict(request.query_params)
    if terms:
        return respond(store.retrieve(terms))
    return respond(store.retrieve(book_id))


@router.put(
    "/books/{book_id}",
    response_model=MessageResponse,
    responses=FAIL_RESPONSES,
)
def update_book(
    book_id: str,
    payload: Any = Body(None),
    store: ResourceStore = Depends(get_store)
):
    """Update a book. Fields left out of the body keep their values."""
    return respond(store.update(book_id, payload))


@router.put("/books", include_in_schema=False)
def update_book_without_id(
    payload: Any = Body(None),
    store: ResourceStore = Depends(get_store)
):
    return respond(store.update("", payload))


@router.delete(
    "/books/{book_id}",
    response_model=MessageResponse,
    responses={404: FAIL_RESPONSES[404]},
)
def delete_book(book_id: str, store: ResourceStore = Depends(get_store)):
    """Delete a book by ID."""
    return respond(store.delete(book_id))


@router.delete("/books", include_in_schema=False)
def delete_book_without_id(store: ResourceStore = Depends(get_store)):
    return respond(store.delete(""))


def create_app(store: Optional[ResourceStore] = None) -> FastAPI:
    """
    Build the application around a store.

    Args:
        store: Store serving the routes; a new empty one when omitted

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting Bookshelf API", books=app.state.store.count())
        yield
        logger.info("Shutting down Bookshelf API", books=app.state.store.count())

    app = FastAPI(
        title=api_config.api_title,
        description=api_config.api_description,
        version=api_config.api_version,
        lifespan=lifespan
    )
    app.state.store = store if store is not None else ResourceStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=api_config.cors_origins,
        allow_credentials=api_config.cors_allow_credentials,
        allow_methods=api_config.cors_allow_methods,
        allow_headers=api_config.cors_allow_headers,
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions raised by routing."""
        return JSONResponse(
            status_code=exc.status_code,
            content=FailResponse(message=str(exc.detail)).model_dump(mode="json", exclude_none=True),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed request bodies get the same envelope as store failures."""
        logger.warning("Invalid request", path=request.url.path, errors=str(exc.errors()))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=FailResponse(
                message=INVALID_REQUEST_MESSAGE,
                detail=str(exc.errors()) if api_config.debug else None
            ).model_dump(mode="json", exclude_none=True)
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions."""
        logger.error("Unhandled exception", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=FailResponse(
                message=SERVER_ERROR_MESSAGE,
                detail=str(exc) if api_config.debug else None
            ).model_dump(mode="json", exclude_none=True)
        )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    def health_check(store: ResourceStore = Depends(get_store)):
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now(timezone.utc),
            version=api_config.api_version,
            books_count=store.count()
        )

    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=api_config.host,
        port=api_config.port,
        reload=api_config.debug,
        log_level="info"
    )
