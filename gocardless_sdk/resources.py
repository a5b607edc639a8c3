"""
Response models for the GoCardless API.

Models accept unknown fields so that additions to the API do not break
decoding, and enums fall back to UNKNOWN for values this SDK does not list.
"""

from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .pagination import Page


class GoCardlessEnum(str, Enum):
    """String enum that maps unrecognized wire values to UNKNOWN."""

    @classmethod
    def _missing_(cls, value: object) -> Any:
        return cls.__members__.get("UNKNOWN")


class Currency(GoCardlessEnum):
    UNKNOWN = "unknown"
    AUD = "AUD"
    CAD = "CAD"
    DKK = "DKK"
    EUR = "EUR"
    GBP = "GBP"
    NZD = "NZD"
    SEK = "SEK"
    USD = "USD"


class ApiModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


# --- Cursor metadata ---


class Cursors(ApiModel):
    after: str | None = None
    before: str | None = None


class ListMeta(ApiModel):
    cursors: Cursors | None = None
    limit: int | None = None


# --- Customers ---


class Customer(ApiModel):
    """Contact details for a customer."""

    id: str | None = None
    created_at: datetime | None = None
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


class PayoutType(GoCardlessEnum):
    UNKNOWN = "unknown"
    MERCHANT = "merchant"
    PARTNER = "partner"


class PayoutStatus(GoCardlessEnum):
    UNKNOWN = "unknown"
    PENDING = "pending"
    PAID = "paid"
    BOUNCED = "bounced"


class PayoutFx(ApiModel):
    estimated_exchange_rate: str | None = None
    exchange_rate: str | None = None
    fx_amount: int | None = None
    fx_currency: Currency | None = None


class PayoutLinks(ApiModel):
    creditor: str | None = None
    creditor_bank_account: str | None = None


class Payout(ApiModel):
    """A transfer of collected funds to a creditor bank account. Amounts are in minor units."""

    id: str | None = None
    amount: int | None = None
    arrival_date: str | None = None
    created_at: datetime | None = None
    currency: Currency | None = None
    deducted_fees: int | None = None
    fx: PayoutFx | None = None
    links: PayoutLinks | None = None
    metadata: dict[str, str] | None = None
    payout_type: PayoutType | None = None
    reference: str | None = None
    status: PayoutStatus | None = None
    tax_currency: str | None = None


# --- Events ---


class EventResourceType(GoCardlessEnum):
    UNKNOWN = "unknown"
    BILLING_REQUESTS = "billing_requests"
    CREDITORS = "creditors"
    CUSTOMERS = "customers"
    EXPORTS = "exports"
    INSTALMENT_SCHEDULES = "instalment_schedules"
    MANDATES = "mandates"
    ORGANISATIONS = "organisations"
    OUTBOUND_PAYMENTS = "outbound_payments"
    PAYER_AUTHORISATIONS = "payer_authorisations"
    PAYMENTS = "payments"
    PAYOUTS = "payouts"
    REFUNDS = "refunds"
    SCHEME_IDENTIFIERS = "scheme_identifiers"
    SUBSCRIPTIONS = "subscriptions"


class EventOrigin(GoCardlessEnum):
    UNKNOWN = "unknown"
    BANK = "bank"
    API = "api"
    GOCARDLESS = "gocardless"
    CUSTOMER = "customer"
    PAYER = "payer"


class Scheme(GoCardlessEnum):
    UNKNOWN = "unknown"
    ACH = "ach"
    AUTOGIRO = "autogiro"
    BACS = "bacs"
    BECS = "becs"
    BECS_NZ = "becs_nz"
    BETALINGSSERVICE = "betalingsservice"
    FASTER_PAYMENTS = "faster_payments"
    PAD = "pad"
    PAY_TO = "pay_to"
    SEPA_CORE = "sepa_core"
    SEPA_COR1 = "sepa_cor1"


class EventSourceType(GoCardlessEnum):
    UNKNOWN = "unknown"
    APP = "app"
    USER = "user"
    GC_TEAM = "gc_team"
    ACCESS_TOKEN = "access_token"


class EventDetails(ApiModel):
    bank_account_id: str | None = None
    cause: str | None = None
    currency: str | None = None
    description: str | None = None
    item_count: int | None = None
    not_retried_reason: str | None = None
    origin: EventOrigin | None = None
    property: str | None = None
    reason_code: str | None = None
    scheme: Scheme | None = None
    will_attempt_retry: bool | None = None


class EventLinks(ApiModel):
    billing_request: str | None = None
    billing_request_flow: str | None = None
    creditor: str | None = None
    customer: str | None = None
    customer_bank_account: str | None = None
    instalment_schedule: str | None = None
    mandate: str | None = None
    new_customer_bank_account: str | None = None
    new_mandate: str | None = None
    organisation: str | None = None
    outbound_payment: str | None = None
    parent_event: str | None = None
    payer_authorisation: str | None = None
    payment: str | None = None
    payout: str | None = None
    previous_customer_bank_account: str | None = None
    refund: str | None = None
    scheme_identifier: str | None = None
    subscription: str | None = None


class EventSource(ApiModel):
    name: str | None = None
    type: EventSourceType | None = None


class EventCustomerNotification(ApiModel):
    id: str | None = None
    deadline: datetime | None = None
    mandatory: bool | None = None
    type: str | None = None


class Event(ApiModel):
    """Something that happened to a resource, as listed by the API or delivered by webhook."""

    id: str | None = None
    action: str | None = None
    created_at: datetime | None = None
    customer_notifications: list[EventCustomerNotification] | None = None
    details: EventDetails | None = None
    links: EventLinks | None = None
    metadata: dict[str, str] | None = None
    resource_metadata: dict[str, str] | None = None
    resource_type: EventResourceType | None = None
    source: EventSource | None = None


# --- Billing request flows ---


class BankAccountType(GoCardlessEnum):
    UNKNOWN = "unknown"
    SAVINGS = "savings"
    CHECKING = "checking"


class BillingRequestFlowLinks(ApiModel):
    billing_request: str | None = None


class PrefilledBankAccount(ApiModel):
    account_type: BankAccountType | None = None


class PrefilledCustomer(ApiModel):
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
    postal_code: str | None = None
    region: str | None = None
    swedish_identity_number: str | None = None


class BillingRequestFlow(ApiModel):
    """A hosted payment page session used to fulfil a billing request."""

    id: str | None = None
    authorisation_url: str | None = None
    auto_fulfil: bool | None = None
    created_at: datetime | None = None
    exit_uri: str | None = None
    expires_at: datetime | None = None
    language: str | None = None
    links: BillingRequestFlowLinks | None = None
    lock_bank_account: bool | None = None
    lock_currency: bool | None = None
    lock_customer_details: bool | None = None
    prefilled_bank_account: PrefilledBankAccount | None = None
    prefilled_customer: PrefilledCustomer | None = None
    redirect_uri: str | None = None
    session_token: str | None = None
    show_redirect_buttons: bool | None = None
    show_success_redirect_button: bool | None = None


# --- Response envelopes ---


class ListResponse(ApiModel):
    """
    Base for cursor-paginated list envelopes.

    Subclasses declare the list field named after the resource plural and
    point items_key at it.
    """

    items_key: ClassVar[str]

    meta: ListMeta | None = None

    @property
    def items(self) -> list[Any]:
        return getattr(self, self.items_key) or []

    def to_page(self) -> Page[Any]:
        """
        Pairs this page's items with the cursors from meta.cursors.

        A missing meta or cursors object reads as the last page.
        """
        cursors = self.meta.cursors if self.meta is not None else None
        if cursors is None:
            return Page(items=list(self.items), after=None)
        return Page(items=list(self.items), after=cursors.after, before=cursors.before)


class CustomerResponse(ApiModel):
    customers: Customer


class CustomerListResponse(ListResponse):
    items_key: ClassVar[str] = "customers"
    customers: list[Customer] = Field(default_factory=list)


class PayoutResponse(ApiModel):
    payouts: Payout


class PayoutListResponse(ListResponse):
    items_key: ClassVar[str] = "payouts"
    payouts: list[Payout] = Field(default_factory=list)


class EventResponse(ApiModel):
    events: Event


class EventListResponse(ListResponse):
    items_key: ClassVar[str] = "events"
    events: list[Event] = Field(default_factory=list)


class BillingRequestFlowResponse(ApiModel):
    billing_request_flows: BillingRequestFlow
