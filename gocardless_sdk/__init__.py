from .client import GoCardlessClient, RequestExecutor
from .config import PaginationOptions, RequestSettings, ResourceOptions
from .exceptions import (
    GoCardlessError,
    IdempotentCreationConflictError,
    InvalidSignatureError,
    MissingParameterError,
    PaginationLoopError,
    ResponseDecodeError,
    SerializationError,
)
from .pagination import Page, iterate_items, iterate_pages, iterate_pages_async
from .services import BillingRequestFlowService, CustomerService, EventService, PayoutService
from .webhooks import parse_webhook

__all__ = [
    "GoCardlessClient",
    "RequestExecutor",
    "PaginationOptions",
    "RequestSettings",
    "ResourceOptions",
    # Pagination
    "Page",
    "iterate_pages",
    "iterate_items",
    "iterate_pages_async",
    # Services
    "CustomerService",
    "PayoutService",
    "EventService",
    "BillingRequestFlowService",
    # Webhooks
    "parse_webhook",
    # Exceptions
    "GoCardlessError",
    "MissingParameterError",
    "SerializationError",
    "ResponseDecodeError",
    "PaginationLoopError",
    "InvalidSignatureError",
    "IdempotentCreationConflictError",
]
