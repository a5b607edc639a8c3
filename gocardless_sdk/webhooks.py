"""
Webhook verification and parsing.

GoCardless signs each webhook body with HMAC-SHA256 using the endpoint's
secret and sends the lowercase hex digest in the ``Webhook-Signature`` header.
"""

import hashlib
import hmac

from pydantic import BaseModel, Field

from ._logging import logger
from .exceptions import InvalidSignatureError, handle_decode_errors
from .resources import Event


class WebhookPayload(BaseModel):
    events: list[Event] = Field(default_factory=list)


def compute_signature(body: str | bytes, webhook_secret: str) -> str:
    """Returns the lowercase hex HMAC-SHA256 of the raw body."""
    raw = body.encode("utf-8") if isinstance(body, str) else body
    return hmac.new(webhook_secret.encode("utf-8"), raw, hashlib.sha256).hexdigest()


def verify_signature(body: str | bytes, webhook_secret: str, signature_header: str | None) -> None:
    """
    Checks a webhook body against its signature header.

    Raises:
        InvalidSignatureError: If the header is missing or does not match
    """
    if not signature_header:
        raise InvalidSignatureError("Webhook signature header is missing")
    expected = compute_signature(body, webhook_secret)
    if not hmac.compare_digest(expected, signature_header.strip()):
        logger.warning("Rejected webhook with invalid signature")
        raise InvalidSignatureError()


def parse_webhook(
    body: str | bytes, webhook_secret: str, signature_header: str | None
) -> list[Event]:
    """
    Verifies a webhook and returns the events it carries.

    Args:
        body: The raw request body, exactly as received
        webhook_secret: The secret configured for the webhook endpoint
        signature_header: Value of the Webhook-Signature header

    Returns:
        The events in the order they appear in the body

    Raises:
        InvalidSignatureError: If the signature does not match the body
        ResponseDecodeError: If the body is not a valid events payload

    Usage:
        events = parse_webhook(request.body, secret, request.headers["Webhook-Signature"])
    """
    verify_signature(body, webhook_secret, signature_header)

    with handle_decode_errors("events"):
        payload = WebhookPayload.model_validate_json(body)

    logger.info("Parsed webhook", extra={"resource": "events", "count": len(payload.events)})
    return payload.events
