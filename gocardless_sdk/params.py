"""
Request models: write bodies and list filters for each service.

List requests carry the ``after``/``before`` cursors; pagination helpers set
``after`` on a copy of the request for every page they fetch.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .resources import (
    BankAccountType,
    Currency,
    EventResourceType,
    GoCardlessEnum,
    PayoutStatus,
    PayoutType,
    PrefilledCustomer,
)


class RequestModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class IdempotentRequest(RequestModel):
    """Create request whose key is sent as the Idempotency-Key header, never in the body."""

    idempotency_key: str | None = Field(default=None, exclude=True)


class CreatedAtFilter(RequestModel):
    """Range filter on created_at; serialized as created_at[gt], created_at[lte], etc."""

    gt: datetime | None = None
    gte: datetime | None = None
    lt: datetime | None = None
    lte: datetime | None = None


class ListRequest(RequestModel):
    after: str | None = None
    before: str | None = None
    created_at: CreatedAtFilter | None = None
    limit: int | None = Field(default=None, ge=1, le=500)


class SortDirection(GoCardlessEnum):
    ASC = "asc"
    DESC = "desc"


# --- Customers ---


class CustomerSortField(GoCardlessEnum):
    NAME = "name"
    COMPANY_NAME = "company_name"
    CREATED_AT = "created_at"


class CustomerCreateRequest(IdempotentRequest):
    address_line1: str | None = None
    address_line2: str | None = None
    address_line3: str | None = None
    city: str | None = None
    company_name: str | None = None
    country_code: str | None = None
    danish_identity_number: str | None = None
    email: str | None = None
    family_name: str | None = None
    given_name: str | None = None
    language: str | None = None
    metadata: dict[str, str] | None = None
    phone_number: str | None = None
    postal_code: str | None = None
    region: str | None = None
    swedish_identity_number: str | None = None


class CustomerListRequest(ListRequest):
    currency: Currency | None = None
    sort_direction: SortDirection | None = None
    sort_field: CustomerSortField | None = None


class CustomerUpdateRequest(RequestModel):
    address_line1: str | None = None
    address_line2: str | None = None
    address_line3: str | None = None
    city: str | None = None
    company_name: str | None = None
    country_code: str | None = None
    danish_identity_number: str | None = None
    email: str | None = None
    family_name: str | None = None
    given_name: str | None = None
    language: str | None = None
    metadata: dict[str, str] | None = None
    phone_number: str | None = None
    postal_code: str | None = None
    region: str | None = None
    swedish_identity_number: str | None = None


# --- Payouts ---


class PayoutListRequest(ListRequest):
    creditor: str | None = None
    creditor_bank_account: str | None = None
    currency: Currency | None = None
    payout_type: PayoutType | None = None
    reference: str | None = None
    status: PayoutStatus | None = None


class PayoutUpdateRequest(RequestModel):
    metadata: dict[str, str] | None = None


# --- Events ---


class EventListRequest(ListRequest):
    action: str | None = None
    include: EventResourceType | None = None
    mandate: str | None = None
    parent_event: str | None = None
    payment: str | None = None
    payout: str | None = None
    refund: str | None = None
    resource_type: EventResourceType | None = None
    subscription: str | None = None


# --- Billing request flows ---


class BillingRequestFlowCreateLinks(RequestModel):
    billing_request: str


class PrefilledBankAccountRequest(RequestModel):
    account_type: BankAccountType | None = None


class BillingRequestFlowCreateRequest(RequestModel):
    links: BillingRequestFlowCreateLinks
    auto_fulfil: bool | None = None
    customer_details_captured: bool | None = None
    exit_uri: str | None = None
    language: str | None = None
    lock_bank_account: bool | None = None
    lock_currency: bool | None = None
    lock_customer_details: bool | None = None
    prefilled_bank_account: PrefilledBankAccountRequest | None = None
    prefilled_customer: PrefilledCustomer | None = None
    redirect_uri: str | None = None
    show_redirect_buttons: bool | None = None
    show_success_redirect_button: bool | None = None


class BillingRequestFlowInitialiseRequest(RequestModel):
    customer_details_captured: bool | None = None
    language: str | None = None
