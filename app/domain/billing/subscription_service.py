"""Subscription service - status, checkout and billing portal"""

import logging

import stripe
from sqlalchemy.orm import Session

from ... import config
from ...models import User
from ...plan_limits import get_usage_stats
from ...shared.errors import Internal, InvalidInput
from .repository import BillingRepository
from .schemas import CheckoutRequest
from .stripe_service import stripe_service

logger = logging.getLogger(__name__)


class SubscriptionService:
    """Service for subscription management"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BillingRepository()

    def get_status(self, user: User) -> dict:
        return get_usage_stats(user, self.db)

    def _ensure_available(self) -> None:
        if not stripe_service.is_available():
            logger.error("❌ STRIPE_SECRET_KEY not configured")
            raise Internal("Billing is not configured")

    def create_checkout_session(self, request: CheckoutRequest, user: User) -> dict:
        """Start a Stripe Checkout for the Pro subscription"""
        self._ensure_available()
        price_id = stripe_service.price_for_plan(request.plan)
        if not price_id:
            raise InvalidInput(f"No price configured for the {request.plan} plan")

        frontend = config.FRONTEND_URL.rstrip("/")
        try:
            if not user.stripe_customer_id:
                customer_id = stripe_service.create_customer(
                    user.email, user.business_name or user.name, user.id
                )
                self.repo.link_stripe_customer(self.db, user, customer_id)

            session = stripe_service.create_checkout_session(
                customer_id=user.stripe_customer_id,
                price_id=price_id,
                user_id=user.id,
                success_url=f"{frontend}/settings?subscription=success",
                cancel_url=f"{frontend}/settings?subscription=canceled",
            )
        except stripe.StripeError as e:
            logger.error(f"❌ Failed to create checkout session for user {user.id}: {e}")
            raise Internal("Failed to create checkout session") from e

        logger.info(f"✅ Created checkout session for user {user.id}: {session.id}")
        return {"sessionId": session.id, "url": session.url}

    def create_billing_portal_session(self, user: User) -> dict:
        """Open the Stripe customer portal for managing the subscription"""
        self._ensure_available()
        if not user.stripe_customer_id:
            raise InvalidInput("No billing account found")

        try:
            session = stripe_service.create_billing_portal_session(
                user.stripe_customer_id, f"{config.FRONTEND_URL.rstrip('/')}/settings"
            )
        except stripe.StripeError as e:
            logger.error(f"❌ Failed to create billing portal session for user {user.id}: {e}")
            raise Internal("Failed to open billing portal") from e

        return {"url": session.url}
