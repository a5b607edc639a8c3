from typing import Any, Protocol

from .config import PaginationOptions
from .services import BillingRequestFlowService, CustomerService, EventService, PayoutService


class RequestExecutor(Protocol):
    """
    The component that performs one API call and returns the decoded JSON body.

    Implementations own transport, authentication, retries and the mapping of
    error responses to exceptions. ``execute`` must block on a real request
    rather than on ``execute_async``.

    When the API rejects a create because its idempotency key already produced
    a resource, raise ``IdempotentCreationConflictError`` carrying that
    resource's id so the service can resolve the conflict.
    """

    def execute(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]: ...

    async def execute_async(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]: ...


class GoCardlessClient:
    """
    Entry point into the SDK: one service per API resource, all sharing the
    same executor.

    Usage:
        client = GoCardlessClient(executor)
        for customer in client.customers.all():
            ...

    By default a create whose idempotency key was already used returns the
    resource from the earlier call. Pass error_on_idempotency_conflict=True
    to get IdempotentCreationConflictError instead.
    """

    def __init__(
        self,
        executor: RequestExecutor,
        pagination: PaginationOptions | None = None,
        error_on_idempotency_conflict: bool = False,
    ) -> None:
        self.executor = executor
        self.pagination = pagination or PaginationOptions()
        self.error_on_idempotency_conflict = error_on_idempotency_conflict

        self.customers = CustomerService(
            executor, self.pagination, error_on_idempotency_conflict=error_on_idempotency_conflict
        )
        self.payouts = PayoutService(executor, self.pagination)
        self.events = EventService(executor, self.pagination)
        self.billing_request_flows = BillingRequestFlowService(executor, self.pagination)
