"""Stripe service - customer, checkout and billing portal calls"""

import logging
from typing import Optional

import stripe

from ... import config

logger = logging.getLogger(__name__)


class StripeService:
    """Thin wrapper around the Stripe SDK calls the app makes"""

    def is_available(self) -> bool:
        return bool(config.STRIPE_SECRET_KEY)

    def _configure(self) -> None:
        stripe.api_key = config.STRIPE_SECRET_KEY

    def price_for_plan(self, plan: str) -> Optional[str]:
        return {"monthly": config.STRIPE_PRICE_MONTHLY, "yearly": config.STRIPE_PRICE_YEARLY}.get(plan)

    def create_customer(self, email: str, name: Optional[str], user_id: int) -> str:
        self._configure()
        customer = stripe.Customer.create(
            email=email,
            name=name or None,
            metadata={"userId": str(user_id)},
        )
        logger.info(f"Created Stripe customer {customer.id} for user {user_id}")
        return customer.id

    def create_checkout_session(
        self,
        customer_id: str,
        price_id: str,
        user_id: int,
        success_url: str,
        cancel_url: str,
    ):
        self._configure()
        return stripe.checkout.Session.create(
            customer=customer_id,
            mode="subscription",
            line_items=[{"price": price_id, "quantity": 1}],
            success_url=success_url,
            cancel_url=cancel_url,
            metadata={"userId": str(user_id)},
        )

    def create_billing_portal_session(self, customer_id: str, return_url: str):
        self._configure()
        return stripe.billing_portal.Session.create(customer=customer_id, return_url=return_url)


stripe_service = StripeService()
