"""API error types and the JSON error handlers that render them."""
import logging

from pydantic import ValidationError as SchemaValidationError
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Unexpected internal error occurred"

IDENTIFIERS = {
    "product": "sku",
    "product root": "id",
    "product option": "id",
    "product option value": "id",
    "discount": "id",
    "webhook": "id",
    "user": "id",
}


class StorefrontError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(StorefrontError):
    """Malformed or missing input."""

    status_code = 400


class ConflictError(StorefrontError):
    """The thing being created already exists."""

    status_code = 400


class NotFoundError(StorefrontError):
    status_code = 404

    def __init__(self, item_type, value):
        self.item_type = item_type
        self.value = value
        identifier = IDENTIFIERS.get(item_type, "identified by")
        super().__init__(
            f"The {item_type} you were looking for ({identifier} '{value}') does not exist"
        )


class InternalError(StorefrontError):
    """A write failed; ``task`` names what was being attempted."""

    status_code = 500

    def __init__(self, task):
        super().__init__(INTERNAL_ERROR_MESSAGE)
        self.task = task


def error_body(status, message):
    return {"status": status, "message": message}, status


def describe_schema_error(exc):
    """First pydantic error as a short sentence, e.g. ``sku: Field required``."""
    errors = exc.errors()
    if not errors:
        return "Invalid input provided in request body"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def register_error_handlers(app):
    @app.errorhandler(StorefrontError)
    def handle_storefront_error(exc):
        # InternalError was already logged with its traceback by ``atomic``
        if isinstance(exc, NotFoundError):
            logger.info(
                "informing user that the %s they were looking for (%s) does not exist",
                exc.item_type,
                exc.value,
            )
        elif not isinstance(exc, InternalError):
            logger.info("Rejected request: %s", exc.message)
        return error_body(exc.status_code, exc.message)

    @app.errorhandler(SchemaValidationError)
    def handle_schema_error(exc):
        message = describe_schema_error(exc)
        logger.info("Invalid request body: %s", message)
        return error_body(400, message)

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return error_body(exc.code, exc.description)

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc):
        logger.exception("Unhandled error processing %s", type(exc).__name__)
        return error_body(500, INTERNAL_ERROR_MESSAGE)
