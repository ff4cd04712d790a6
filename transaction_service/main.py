import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import api_router
from .config import settings
from .database import init_db, close_db, is_db_initialized
from .logging_config import setup_logging
from .schemas import ErrorResponse

logger = logging.getLogger(__name__)

# Human-readable names for request fields in error messages
FIELD_LABELS = {
    "transaction_id": "transaction ID",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    setup_logging(settings)
    if not is_db_initialized():
        init_db(settings.database_url, settings)
    logger.info("Transaction service started")
    yield
    # Cleanup on shutdown
    close_db()


app = FastAPI(
    title="Transaction Service",
    description="Records transactions and sums amounts along parent links",
    version="0.1.0",
    lifespan=lifespan
)


def error_response(message: str, status_code: int) -> JSONResponse:
    """Build the JSON body returned for every failed request."""
    body = ErrorResponse(error=message, status=status_code)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def describe_validation_error(errors: list[dict]) -> str:
    """
    Turn pydantic validation errors into a single message.

    A bad URL parameter is reported first. Within the body, missing fields
    are reported before malformed ones.
    """
    path_errors = [e for e in errors if e["loc"][0] == "path"]
    if path_errors:
        field = str(path_errors[0]["loc"][-1])
        return f"Invalid {FIELD_LABELS.get(field, field)} format"

    for error in errors:
        if tuple(error["loc"]) == ("body",) or error["type"] == "json_invalid":
            return "Error decoding request body"

    missing = [e for e in errors if e["type"] == "missing"]
    first = missing[0] if missing else errors[0]
    field = str(first["loc"][-1])
    label = FIELD_LABELS.get(field, field)

    if first["type"] == "missing":
        return f"Field '{label}' is missing"
    return f"Invalid {label} format"


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(str(exc.detail), exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = describe_validation_error(exc.errors())
    logger.warning("Bad request to %s: %s", request.url.path, message)
    return error_response(message, 400)


# API routes
app.include_router(api_router, prefix="/transactionservice")


@app.get("/", response_class=PlainTextResponse)
def home():
    """Welcome message."""
    return "Welcome to transaction system"


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
