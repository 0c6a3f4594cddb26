"""Billing router - subscription endpoints and the Stripe webhook"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...email_service import send_payment_confirmation_email
from ...models import User
from ...services.notification_service import dispatch_notification
from ...shared.errors import Internal, InvalidInput
from ...webhook_security import WebhookSignatureError, read_verified_stripe_event
from .schemas import (
    CheckoutRequest,
    CheckoutResponse,
    PortalResponse,
    SubscriptionStatusResponse,
    WebhookAck,
)
from .subscription_service import SubscriptionService
from .subscription_sync import SubscriptionSync

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/subscription", tags=["Subscription"])


def get_subscription_service(db: Session = Depends(get_db)) -> SubscriptionService:
    """Dependency injection for SubscriptionService"""
    return SubscriptionService(db)


# ============================================================================
# SUBSCRIPTION MANAGEMENT
# ============================================================================


@router.get("/status", response_model=SubscriptionStatusResponse)
async def get_subscription_status(
    user: User = Depends(get_current_user),
    service: SubscriptionService = Depends(get_subscription_service),
):
    """Subscription status and quote allowance"""
    return service.get_status(user)


@router.post("/create-checkout", response_model=CheckoutResponse)
async def create_checkout_session(
    body: CheckoutRequest,
    user: User = Depends(get_current_user),
    service: SubscriptionService = Depends(get_subscription_service),
):
    return service.create_checkout_session(body, user)


@router.post("/billing-portal", response_model=PortalResponse)
async def create_billing_portal_session(
    user: User = Depends(get_current_user),
    service: SubscriptionService = Depends(get_subscription_service),
):
    return service.create_billing_portal_session(user)


# ============================================================================
# WEBHOOK
# ============================================================================


@router.post("/webhook", response_model=WebhookAck)
async def stripe_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    """
    Handle Stripe webhook events.

    The body is read raw and signature-checked before it is parsed. A bad
    signature is a 400; a processing failure is a 500 so Stripe redelivers.
    """
    try:
        event = await read_verified_stripe_event(request)
    except WebhookSignatureError as e:
        logger.warning(f"❌ Rejected Stripe webhook: {e}")
        raise InvalidInput("Invalid webhook", detail=str(e)) from e

    logger.info(f"🔔 Stripe webhook received: {event.get('type')} ({event.get('id')})")

    try:
        result = SubscriptionSync(db).apply(event)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ Error processing Stripe webhook {event.get('id')}: {e}")
        raise Internal("Webhook processing failed") from e

    if result.confirmation:
        dispatch_notification(
            background_tasks,
            "payment confirmation",
            send_payment_confirmation_email,
            **result.confirmation,
        )

    return {"received": True}


__all__ = ["router"]
