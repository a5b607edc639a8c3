from collections.abc import Generator
from contextlib import contextmanager

from pydantic import ValidationError as PydanticValidationError


class GoCardlessError(Exception):
    """Base exception for all SDK errors."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class MissingParameterError(GoCardlessError, ValueError):
    """Raised when a required path parameter is missing or blank."""

    def __init__(self, parameter: str) -> None:
        super().__init__(f"Required parameter '{parameter}' is missing or blank")
        self.parameter = parameter


class SerializationError(GoCardlessError):
    """Raised when a request value cannot be encoded for the wire."""


class ResponseDecodeError(GoCardlessError):
    """Raised when a response payload does not match the expected resource shape."""

    def __init__(self, resource: str, original_error: Exception | None = None) -> None:
        msg = f"Could not decode '{resource}' response"
        if original_error is not None:
            msg += f": {original_error}"
        super().__init__(msg, original_error)
        self.resource = resource


class PaginationLoopError(GoCardlessError):
    """Raised when a server returns a cursor that was already seen in the same run."""

    def __init__(self, cursor: str, page_number: int) -> None:
        super().__init__(f"Cursor '{cursor}' repeated on page {page_number}")
        self.cursor = cursor
        self.page_number = page_number


class IdempotentCreationConflictError(GoCardlessError):
    """
    Raised by a request executor when a create call reuses an idempotency key
    that already produced a resource.

    Services catch it and fetch the existing resource instead, unless the
    client was built with error_on_idempotency_conflict=True.
    """

    def __init__(
        self, conflicting_resource_id: str, original_error: Exception | None = None
    ) -> None:
        super().__init__(
            f"Idempotency key already used to create '{conflicting_resource_id}'",
            original_error,
        )
        self.conflicting_resource_id = conflicting_resource_id


class InvalidSignatureError(GoCardlessError):
    """Raised when a webhook body does not match its signature header."""

    def __init__(self, message: str = "Webhook signature is invalid") -> None:
        super().__init__(message)


@contextmanager
def handle_decode_errors(resource: str) -> Generator[None, None, None]:
    """
    Context manager that catches pydantic validation failures while building
    response models and raises ResponseDecodeError instead.

    Usage:
        with handle_decode_errors("customers"):
            CustomerResponse.model_validate(payload)
    """
    try:
        yield
    except PydanticValidationError as e:
        raise ResponseDecodeError(resource=resource, original_error=e) from e
