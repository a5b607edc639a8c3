"""
Service classes: one per API resource, each method mapped onto one endpoint.

Every operation comes in a blocking form and an ``_async`` form. List
endpoints additionally get ``all`` (lazy blocking iterator over every item)
and ``all_async`` (async iterator over every page).
"""

from __future__ import annotations

import uuid
from collections.abc import AsyncIterator, Awaitable, Callable, Iterator
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from pydantic import BaseModel

from ._logging import logger, redact
from .config import PaginationOptions, RequestSettings, ResourceOptions
from .exceptions import (
    IdempotentCreationConflictError,
    MissingParameterError,
    handle_decode_errors,
)
from .pagination import Page, iterate_items, iterate_pages_async
from .params import (
    BillingRequestFlowCreateRequest,
    BillingRequestFlowInitialiseRequest,
    CustomerCreateRequest,
    CustomerListRequest,
    CustomerUpdateRequest,
    EventListRequest,
    IdempotentRequest,
    ListRequest,
    PayoutListRequest,
    PayoutUpdateRequest,
)
from .resources import (
    BillingRequestFlow,
    BillingRequestFlowResponse,
    Customer,
    CustomerListResponse,
    CustomerResponse,
    Event,
    EventListResponse,
    EventResponse,
    ListResponse,
    Payout,
    PayoutListResponse,
    PayoutResponse,
)
from .serializer import RequestSerializer

if TYPE_CHECKING:
    # Prevent circular imports at runtime
    from .client import RequestExecutor

M = TypeVar("M", bound=BaseModel)
R = TypeVar("R", bound=ListRequest)
L = TypeVar("L", bound=ListResponse)


class BaseService:
    """
    Shared plumbing for resource services.

    Subclasses set ``resource`` and implement their endpoints on top of
    ``_call``/``_call_async``, which expand the path, encode the request and
    hand it to the executor.
    """

    resource: ClassVar[ResourceOptions]
    _serializer: ClassVar[RequestSerializer] = RequestSerializer()

    def __init__(
        self,
        executor: RequestExecutor,
        pagination: PaginationOptions | None = None,
        error_on_idempotency_conflict: bool = False,
    ) -> None:
        self.executor = executor
        self.pagination = pagination or PaginationOptions()
        self.error_on_idempotency_conflict = error_on_idempotency_conflict

    # --- REQUEST PLUMBING ---

    @staticmethod
    def _require(name: str, value: str | None) -> str:
        """Rejects a missing or blank path parameter before any request is made."""
        if value is None or not str(value).strip():
            raise MissingParameterError(name)
        return value

    def _prepare(
        self,
        method: str,
        template: str,
        url_params: dict[str, Any] | None,
        request: BaseModel | None,
        payload_key: str | None,
        headers: dict[str, str] | None,
        settings: RequestSettings | None,
    ) -> dict[str, Any]:
        path = self._serializer.expand_path(template, url_params)

        params = None
        body = None
        if method == "GET":
            params = self._serializer.to_query(request)
        elif payload_key:
            body = self._serializer.to_body(payload_key, request)

        if settings is not None:
            headers = settings.merged_headers(headers)

        return {"path": path, "params": params or None, "body": body, "headers": headers or None}

    def _call(
        self,
        method: str,
        template: str,
        *,
        operation: str,
        url_params: dict[str, Any] | None = None,
        request: BaseModel | None = None,
        payload_key: str | None = None,
        headers: dict[str, str] | None = None,
        settings: RequestSettings | None = None,
    ) -> dict[str, Any]:
        prepared = self._prepare(
            method, template, url_params, request, payload_key, headers, settings
        )
        self._log_call(method, operation, url_params)
        return self.executor.execute(method, **prepared)

    async def _call_async(
        self,
        method: str,
        template: str,
        *,
        operation: str,
        url_params: dict[str, Any] | None = None,
        request: BaseModel | None = None,
        payload_key: str | None = None,
        headers: dict[str, str] | None = None,
        settings: RequestSettings | None = None,
    ) -> dict[str, Any]:
        prepared = self._prepare(
            method, template, url_params, request, payload_key, headers, settings
        )
        self._log_call(method, operation, url_params)
        return await self.executor.execute_async(method, **prepared)

    def _log_call(self, method: str, operation: str, url_params: dict[str, Any] | None) -> None:
        identity = (url_params or {}).get("identity")
        logger.debug(
            "Sending request",
            extra={
                "resource": self.resource.name,
                "operation": operation,
                "method": method,
                "identity_hash": redact(identity) if identity is not None else None,
            },
        )

    def _decode(self, model_cls: type[M], payload: dict[str, Any]) -> M:
        with handle_decode_errors(self.resource.name):
            return model_cls.model_validate(payload)

    @staticmethod
    def _idempotency_headers(request: IdempotentRequest) -> dict[str, str]:
        """Ensures the request has an idempotency key and returns it as a header."""
        if request.idempotency_key is None:
            request.idempotency_key = str(uuid.uuid4())
        return {"Idempotency-Key": request.idempotency_key}

    def _conflicting_id(self, error: IdempotentCreationConflictError) -> str:
        """
        Returns the id of the resource an earlier create with the same
        idempotency key produced, or re-raises when conflicts are errors.
        """
        if self.error_on_idempotency_conflict:
            raise error
        logger.info(
            "Idempotent create already done, fetching existing resource",
            extra={
                "resource": self.resource.name,
                "identity_hash": redact(error.conflicting_resource_id),
            },
        )
        return error.conflicting_resource_id

    # --- PAGINATION ---

    def _all(
        self,
        list_page: Callable[[R, RequestSettings | None], L],
        request: R,
        settings: RequestSettings | None,
    ) -> Iterator[Any]:
        def fetch_page(after: str | None) -> Page[Any]:
            # Each page gets its own copy so the caller's request is never mutated
            page_request = request.model_copy(update={"after": after})
            return list_page(page_request, settings).to_page()

        logger.debug(
            "Starting pagination",
            extra={"resource": self.resource.name, "limit": request.limit},
        )
        return iterate_items(fetch_page, self.pagination)

    def _all_async(
        self,
        list_page: Callable[[R, RequestSettings | None], Awaitable[L]],
        request: R,
        settings: RequestSettings | None,
    ) -> AsyncIterator[list[Any]]:
        async def fetch_page(after: str | None) -> Page[Any]:
            page_request = request.model_copy(update={"after": after})
            response = await list_page(page_request, settings)
            return response.to_page()

        logger.debug(
            "Starting async pagination",
            extra={"resource": self.resource.name, "limit": request.limit},
        )
        return iterate_pages_async(fetch_page, self.pagination)


class CustomerService(BaseService):
    """
    Customer objects hold the contact details for a customer. A customer can
    have several customer bank accounts, which in turn can have several
    Direct Debit mandates.
    """

    resource = ResourceOptions(name="customers", path="/customers", envelope="customers")

    def create(
        self, request: CustomerCreateRequest | None = None, settings: RequestSettings | None = None
    ) -> Customer:
        """
        Creates a new customer object.

        If the idempotency key was already used, the customer created by that
        earlier call is fetched and returned.
        """
        request = request or CustomerCreateRequest()
        try:
            payload = self._call(
                "POST",
                self.resource.path,
                operation="create",
                request=request,
                payload_key=self.resource.envelope,
                headers=self._idempotency_headers(request),
                settings=settings,
            )
        except IdempotentCreationConflictError as e:
            return self.get(self._conflicting_id(e), settings)
        return self._decode(CustomerResponse, payload).customers

    async def create_async(
        self, request: CustomerCreateRequest | None = None, settings: RequestSettings | None = None
    ) -> Customer:
        request = request or CustomerCreateRequest()
        try:
            payload = await self._call_async(
                "POST",
                self.resource.path,
                operation="create",
                request=request,
                payload_key=self.resource.envelope,
                headers=self._idempotency_headers(request),
                settings=settings,
            )
        except IdempotentCreationConflictError as e:
            return await self.get_async(self._conflicting_id(e), settings)
        return self._decode(CustomerResponse, payload).customers

    def list(
        self, request: CustomerListRequest | None = None, settings: RequestSettings | None = None
    ) -> CustomerListResponse:
        """Returns one cursor-paginated page of customers."""
        payload = self._call(
            "GET",
            self.resource.path,
            operation="list",
            request=request or CustomerListRequest(),
            settings=settings,
        )
        return self._decode(CustomerListResponse, payload)

    async def list_async(
        self, request: CustomerListRequest | None = None, settings: RequestSettings | None = None
    ) -> CustomerListResponse:
        payload = await self._call_async(
            "GET",
            self.resource.path,
            operation="list",
            request=request or CustomerListRequest(),
            settings=settings,
        )
        return self._decode(CustomerListResponse, payload)

    def all(
        self, request: CustomerListRequest | None = None, settings: RequestSettings | None = None
    ) -> Iterator[Customer]:
        """
        Lazily iterates over every customer, fetching pages as they are needed.
        Acts like ``list`` but follows the cursors for you.
        """
        return self._all(self.list, request or CustomerListRequest(), settings)

    def all_async(
        self, request: CustomerListRequest | None = None, settings: RequestSettings | None = None
    ) -> AsyncIterator[list[Customer]]:
        """Async iterator over pages of customers; each step fetches one page."""
        return self._all_async(self.list_async, request or CustomerListRequest(), settings)

    def get(self, identity: str, settings: RequestSettings | None = None) -> Customer:
        """Retrieves the details of an existing customer."""
        payload = self._call(
            "GET",
            self.resource.member_path,
            operation="get",
            url_params={"identity": self._require("identity", identity)},
            settings=settings,
        )
        return self._decode(CustomerResponse, payload).customers

    async def get_async(self, identity: str, settings: RequestSettings | None = None) -> Customer:
        payload = await self._call_async(
            "GET",
            self.resource.member_path,
            operation="get",
            url_params={"identity": self._require("identity", identity)},
            settings=settings,
        )
        return self._decode(CustomerResponse, payload).customers

    def update(
        self,
        identity: str,
        request: CustomerUpdateRequest | None = None,
        settings: RequestSettings | None = None,
    ) -> Customer:
        """Updates a customer object. Supports all of the fields supported when creating one."""
        payload = self._call(
            "PUT",
            self.resource.member_path,
            operation="update",
            url_params={"identity": self._require("identity", identity)},
            request=request or CustomerUpdateRequest(),
            payload_key=self.resource.envelope,
            settings=settings,
        )
        return self._decode(CustomerResponse, payload).customers

    async def update_async(
        self,
        identity: str,
        request: CustomerUpdateRequest | None = None,
        settings: RequestSettings | None = None,
    ) -> Customer:
        payload = await self._call_async(
            "PUT",
            self.resource.member_path,
            operation="update",
            url_params={"identity": self._require("identity", identity)},
            request=request or CustomerUpdateRequest(),
            payload_key=self.resource.envelope,
            settings=settings,
        )
        return self._decode(CustomerResponse, payload).customers

    def remove(self, identity: str, settings: RequestSettings | None = None) -> Customer:
        """
        Removes a customer. Removed customers no longer appear in lists and
        cannot be fetched by ID. This cannot be reversed.
        """
        payload = self._call(
            "DELETE",
            self.resource.member_path,
            operation="remove",
            url_params={"identity": self._require("identity", identity)},
            settings=settings,
        )
        return self._decode(CustomerResponse, payload).customers

    async def remove_async(self, identity: str, settings: RequestSettings | None = None) -> Customer:
        payload = await self._call_async(
            "DELETE",
            self.resource.member_path,
            operation="remove",
            url_params={"identity": self._require("identity", identity)},
            settings=settings,
        )
        return self._decode(CustomerResponse, payload).customers


class PayoutService(BaseService):
    """Payouts represent transfers from GoCardless to a creditor bank account."""

    resource = ResourceOptions(name="payouts", path="/payouts", envelope="payouts")

    def list(
        self, request: PayoutListRequest | None = None, settings: RequestSettings | None = None
    ) -> PayoutListResponse:
        payload = self._call(
            "GET",
            self.resource.path,
            operation="list",
            request=request or PayoutListRequest(),
            settings=settings,
        )
        return self._decode(PayoutListResponse, payload)

    async def list_async(
        self, request: PayoutListRequest | None = None, settings: RequestSettings | None = None
    ) -> PayoutListResponse:
        payload = await self._call_async(
            "GET",
            self.resource.path,
            operation="list",
            request=request or PayoutListRequest(),
            settings=settings,
        )
        return self._decode(PayoutListResponse, payload)

    def all(
        self, request: PayoutListRequest | None = None, settings: RequestSettings | None = None
    ) -> Iterator[Payout]:
        return self._all(self.list, request or PayoutListRequest(), settings)

    def all_async(
        self, request: PayoutListRequest | None = None, settings: RequestSettings | None = None
    ) -> AsyncIterator[list[Payout]]:
        return self._all_async(self.list_async, request or PayoutListRequest(), settings)

    def get(self, identity: str, settings: RequestSettings | None = None) -> Payout:
        payload = self._call(
            "GET",
            self.resource.member_path,
            operation="get",
            url_params={"identity": self._require("identity", identity)},
            settings=settings,
        )
        return self._decode(PayoutResponse, payload).payouts

    async def get_async(self, identity: str, settings: RequestSettings | None = None) -> Payout:
        payload = await self._call_async(
            "GET",
            self.resource.member_path,
            operation="get",
            url_params={"identity": self._require("identity", identity)},
            settings=settings,
        )
        return self._decode(PayoutResponse, payload).payouts

    def update(
        self,
        identity: str,
        request: PayoutUpdateRequest | None = None,
        settings: RequestSettings | None = None,
    ) -> Payout:
        """Updates a payout object. Only metadata may be changed."""
        payload = self._call(
            "PUT",
            self.resource.member_path,
            operation="update",
            url_params={"identity": self._require("identity", identity)},
            request=request or PayoutUpdateRequest(),
            payload_key=self.resource.envelope,
            settings=settings,
        )
        return self._decode(PayoutResponse, payload).payouts

    async def update_async(
        self,
        identity: str,
        request: PayoutUpdateRequest | None = None,
        settings: RequestSettings | None = None,
    ) -> Payout:
        payload = await self._call_async(
            "PUT",
            self.resource.member_path,
            operation="update",
            url_params={"identity": self._require("identity", identity)},
            request=request or PayoutUpdateRequest(),
            payload_key=self.resource.envelope,
            settings=settings,
        )
        return self._decode(PayoutResponse, payload).payouts


class EventService(BaseService):
    resource = ResourceOptions(name="events", path="/events")

    def list(
        self, request: EventListRequest | None = None, settings: RequestSettings | None = None
    ) -> EventListResponse:
        payload = self._call(
            "GET",
            self.resource.path,
            operation="list",
            request=request or EventListRequest(),
            settings=settings,
        )
        return self._decode(EventListResponse, payload)

    async def list_async(
        self, request: EventListRequest | None = None, settings: RequestSettings | None = None
    ) -> EventListResponse:
        payload = await self._call_async(
            "GET",
            self.resource.path,
            operation="list",
            request=request or EventListRequest(),
            settings=settings,
        )
        return self._decode(EventListResponse, payload)

    def all(
        self, request: EventListRequest | None = None, settings: RequestSettings | None = None
    ) -> Iterator[Event]:
        return self._all(self.list, request or EventListRequest(), settings)

    def all_async(
        self, request: EventListRequest | None = None, settings: RequestSettings | None = None
    ) -> AsyncIterator[list[Event]]:
        return self._all_async(self.list_async, request or EventListRequest(), settings)

    def get(self, identity: str, settings: RequestSettings | None = None) -> Event:
        payload = self._call(
            "GET",
            self.resource.member_path,
            operation="get",
            url_params={"identity": self._require("identity", identity)},
            settings=settings,
        )
        return self._decode(EventResponse, payload).events

    async def get_async(self, identity: str, settings: RequestSettings | None = None) -> Event:
        payload = await self._call_async(
            "GET",
            self.resource.member_path,
            operation="get",
            url_params={"identity": self._require("identity", identity)},
            settings=settings,
        )
        return self._decode(EventResponse, payload).events


class BillingRequestFlowService(BaseService):
    """
    Billing request flows create hosted pages where a payer completes
    the actions a billing request needs.
    """

    resource = ResourceOptions(
        name="billing_request_flows", path="/billing_request_flows", envelope="billing_request_flows"
    )

    def create(
        self, request: BillingRequestFlowCreateRequest, settings: RequestSettings | None = None
    ) -> BillingRequestFlow:
        payload = self._call(
            "POST",
            self.resource.path,
            operation="create",
            request=request,
            payload_key=self.resource.envelope,
            settings=settings,
        )
        return self._decode(BillingRequestFlowResponse, payload).billing_request_flows

    async def create_async(
        self, request: BillingRequestFlowCreateRequest, settings: RequestSettings | None = None
    ) -> BillingRequestFlow:
        payload = await self._call_async(
            "POST",
            self.resource.path,
            operation="create",
            request=request,
            payload_key=self.resource.envelope,
            settings=settings,
        )
        return self._decode(BillingRequestFlowResponse, payload).billing_request_flows

    def initialise(
        self,
        identity: str,
        request: BillingRequestFlowInitialiseRequest | None = None,
        settings: RequestSettings | None = None,
    ) -> BillingRequestFlow:
        """
        Returns the flow with a fresh session token. Any previous session for
        the flow is invalidated.
        """
        payload = self._call(
            "POST",
            f"{self.resource.member_path}/actions/initialise",
            operation="initialise",
            url_params={"identity": self._require("identity", identity)},
            request=request or BillingRequestFlowInitialiseRequest(),
            payload_key="data",
            settings=settings,
        )
        return self._decode(BillingRequestFlowResponse, payload).billing_request_flows

    async def initialise_async(
        self,
        identity: str,
        request: BillingRequestFlowInitialiseRequest | None = None,
        settings: RequestSettings | None = None,
    ) -> BillingRequestFlow:
        payload = await self._call_async(
            "POST",
            f"{self.resource.member_path}/actions/initialise",
            operation="initialise",
            url_params={"identity": self._require("identity", identity)},
            request=request or BillingRequestFlowInitialiseRequest(),
            payload_key="data",
            settings=settings,
        )
        return self._decode(BillingRequestFlowResponse, payload).billing_request_flows
