"""
Webhook Security Module

Stripe signs the exact bytes it sends, so the body must be read raw and
verified before anything parses it. Only the webhook route uses this; every
other route lets FastAPI parse the body as usual.
"""

import json
import logging

import stripe
from fastapi import Request

from . import config

logger = logging.getLogger(__name__)

# Maximum age of webhook in seconds (5 minutes)
MAX_WEBHOOK_AGE_SECONDS = 300


class WebhookSignatureError(Exception):
    """Raised when webhook signature verification fails"""

    pass


def construct_stripe_event(raw_body: bytes, sig_header: str, secret: str) -> dict:
    """Verify the Stripe-Signature header against the raw body and parse the event"""
    if not sig_header:
        raise WebhookSignatureError("Missing stripe-signature header")
    try:
        event = stripe.Webhook.construct_event(
            payload=raw_body,
            sig_header=sig_header,
            secret=secret,
            tolerance=MAX_WEBHOOK_AGE_SECONDS,
        )
    except stripe.SignatureVerificationError as e:
        raise WebhookSignatureError(f"Signature verification failed: {e}") from e
    except ValueError as e:
        # Undecodable body or invalid JSON
        raise WebhookSignatureError("Invalid payload") from e
    return event.to_dict()


def _parse_unsigned(raw_body: bytes) -> dict:
    try:
        event = json.loads(raw_body)
    except ValueError as e:
        raise WebhookSignatureError("Invalid payload") from e
    if not isinstance(event, dict):
        raise WebhookSignatureError("Invalid payload")
    return event


async def read_verified_stripe_event(request: Request) -> dict:
    """
    Capture the raw request body, verify its signature and only then parse it.

    Verification is skipped only when unsigned webhooks are explicitly allowed
    (never in production).

    Raises:
        WebhookSignatureError: bad/missing signature, missing secret, or a
            payload that is not a JSON object
    """
    raw_body = await request.body()

    if config.STRIPE_WEBHOOK_SECRET:
        event = construct_stripe_event(
            raw_body, request.headers.get("stripe-signature", ""), config.STRIPE_WEBHOOK_SECRET
        )
        logger.info("✅ Stripe webhook signature verified")
        return event

    if config.ALLOW_UNSIGNED_WEBHOOKS:
        logger.warning("⚠️ STRIPE_WEBHOOK_SECRET not set - accepting unsigned webhook (non-production)")
        return _parse_unsigned(raw_body)

    logger.error("❌ STRIPE_WEBHOOK_SECRET not configured - rejecting webhook")
    raise WebhookSignatureError("Webhook secret not configured")
