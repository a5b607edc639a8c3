"""
Unit tests for RequestSerializer.

Covers path expansion, query flattening and body envelopes.
"""

from datetime import date, datetime, timezone

import pytest

from gocardless_sdk.exceptions import SerializationError
from gocardless_sdk.params import (
    CreatedAtFilter,
    CustomerCreateRequest,
    CustomerListRequest,
    CustomerSortField,
    SortDirection,
)
from gocardless_sdk.serializer import RequestSerializer


@pytest.fixture
def serializer():
    return RequestSerializer()


class TestExpandPath:
    def test_substitutes_identity(self, serializer):
        assert serializer.expand_path("/customers/:identity", {"identity": "CU1"}) == "/customers/CU1"

    def test_no_params(self, serializer):
        assert serializer.expand_path("/customers") == "/customers"

    def test_quotes_reserved_characters(self, serializer):
        path = serializer.expand_path("/customers/:identity", {"identity": "a/b?c"})
        assert path == "/customers/a%2Fb%3Fc"

    def test_longer_names_win(self, serializer):
        path = serializer.expand_path("/x/:identity/y/:id", {"id": "1", "identity": "2"})
        assert path == "/x/2/y/1"

    def test_template_placeholder_in_action_path(self, serializer):
        path = serializer.expand_path(
            "/billing_request_flows/:identity/actions/initialise", {"identity": "BRF1"}
        )
        assert path == "/billing_request_flows/BRF1/actions/initialise"


class TestToQuery:
    def test_none_request(self, serializer):
        assert serializer.to_query(None) == {}

    def test_omits_none_fields(self, serializer):
        assert serializer.to_query(CustomerListRequest()) == {}

    def test_enums_use_wire_values(self, serializer):
        request = CustomerListRequest(
            sort_field=CustomerSortField.CREATED_AT, sort_direction=SortDirection.DESC
        )
        assert serializer.to_query(request) == {"sort_field": "created_at", "sort_direction": "desc"}

    def test_nested_filters_are_bracketed(self, serializer):
        request = CustomerListRequest(
            created_at=CreatedAtFilter(
                gt=datetime(2024, 1, 1, 12, 30, tzinfo=timezone.utc),
                lte=datetime(2024, 2, 1, tzinfo=timezone.utc),
            )
        )
        assert serializer.to_query(request) == {
            "created_at[gt]": "2024-01-01T12:30:00+00:00",
            "created_at[lte]": "2024-02-01T00:00:00+00:00",
        }

    def test_after_cursor_is_kept_verbatim(self, serializer):
        assert serializer.to_query(CustomerListRequest(after="ID123")) == {"after": "ID123"}
        assert serializer.to_query(CustomerListRequest(after="")) == {"after": ""}

    def test_excluded_fields_are_skipped(self, serializer):
        request = CustomerCreateRequest(idempotency_key="k", email="a@b.com")
        assert serializer.to_query(request) == {"email": "a@b.com"}


class TestStringify:
    def test_bools_are_lowercase(self, serializer):
        assert serializer._stringify(True) == "true"
        assert serializer._stringify(False) == "false"

    def test_numbers(self, serializer):
        assert serializer._stringify(10) == "10"
        assert serializer._stringify(1.5) == "1.5"

    def test_dates(self, serializer):
        assert serializer._stringify(date(2024, 3, 1)) == "2024-03-01"

    def test_lists_are_comma_joined(self, serializer):
        assert serializer._stringify(["a", SortDirection.ASC, 3]) == "a,asc,3"

    def test_unsupported_value_raises(self, serializer):
        with pytest.raises(SerializationError, match="Unsupported parameter value"):
            serializer._stringify({"nested": "dict"})


class TestToBody:
    def test_wraps_in_envelope(self, serializer):
        body = serializer.to_body("customers", CustomerCreateRequest(email="a@b.com"))
        assert body == {"customers": {"email": "a@b.com"}}

    def test_none_request_is_empty_envelope(self, serializer):
        assert serializer.to_body("data", None) == {"data": {}}

    def test_idempotency_key_never_in_body(self, serializer):
        body = serializer.to_body("customers", CustomerCreateRequest(idempotency_key="k"))
        assert body == {"customers": {}}
