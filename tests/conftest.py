"""
Shared pytest fixtures and configuration for SDK tests.

This module provides mocked request executors and canned API payloads used
across the unit tests.
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from gocardless_sdk import GoCardlessClient


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")


def _list_payload(key: str, items: list[dict[str, Any]], after: str | None) -> dict[str, Any]:
    return {
        key: items,
        "meta": {"cursors": {"after": after, "before": None}, "limit": 50},
    }


@pytest.fixture
def list_payload():
    """Builds a cursor-paginated list envelope the way the API returns it."""
    return _list_payload


@pytest.fixture
def mock_executor():
    """
    Creates a fully mocked request executor.

    ``execute`` is a MagicMock and ``execute_async`` an AsyncMock, so tests can
    set ``return_value``/``side_effect`` on either.
    """
    executor = MagicMock()
    executor.execute_async = AsyncMock()
    return executor


@pytest.fixture
def client(mock_executor):
    """A GoCardlessClient wired to the mocked executor."""
    return GoCardlessClient(mock_executor)


@pytest.fixture
def customer_data() -> dict[str, Any]:
    """Single customer as returned by the API."""
    return {
        "id": "CU123",
        "created_at": "2024-01-15T10:00:00.000Z",
        "email": "user@example.com",
        "given_name": "Frank",
        "family_name": "Osborne",
        "country_code": "GB",
        "metadata": {"salesforce_id": "ABCD1234"},
    }


@pytest.fixture
def customer_pages() -> list[dict[str, Any]]:
    """Three list pages: A,B -> c1, C -> c2, D,E -> end."""
    return [
        _list_payload("customers", [{"id": "A"}, {"id": "B"}], after="c1"),
        _list_payload("customers", [{"id": "C"}], after="c2"),
        _list_payload("customers", [{"id": "D"}, {"id": "E"}], after=None),
    ]


@pytest.fixture
def payout_data() -> dict[str, Any]:
    """Single payout with nested fx and links objects."""
    return {
        "id": "PO123",
        "amount": 1000,
        "arrival_date": "2024-01-16",
        "created_at": "2024-01-15T10:00:00.000Z",
        "currency": "GBP",
        "deducted_fees": 20,
        "fx": {
            "estimated_exchange_rate": "1.1234",
            "exchange_rate": None,
            "fx_amount": 1123,
            "fx_currency": "EUR",
        },
        "links": {"creditor": "CR123", "creditor_bank_account": "BA123"},
        "payout_type": "merchant",
        "reference": "ref-1",
        "status": "pending",
    }


@pytest.fixture
def event_data() -> dict[str, Any]:
    """Single event as listed by the API or delivered by webhook."""
    return {
        "id": "EV123",
        "created_at": "2024-01-15T10:00:00.000Z",
        "action": "confirmed",
        "resource_type": "payments",
        "links": {"payment": "PM123"},
        "details": {
            "origin": "gocardless",
            "cause": "payment_confirmed",
            "description": "Payment was confirmed as collected",
            "scheme": "bacs",
        },
        "metadata": {},
    }
