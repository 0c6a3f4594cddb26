"""
Subscription sync - applies Stripe webhook events to a tenant's
``subscription_status``, the field every entitlement check reads.

Events are matched to tenants by Stripe customer id and applied as plain
overwrites, so a redelivered event leaves the tenant exactly as the first
delivery did. Event types we do not act on are logged and acknowledged.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from ...models import User
from .repository import BillingRepository

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout_completed"
SUBSCRIPTION_UPDATED = "subscription_updated"
SUBSCRIPTION_DELETED = "subscription_deleted"
INVOICE_PAYMENT_FAILED = "invoice_payment_failed"

STRIPE_EVENT_KINDS = {
    "checkout.session.completed": CHECKOUT_COMPLETED,
    "customer.subscription.updated": SUBSCRIPTION_UPDATED,
    "customer.subscription.deleted": SUBSCRIPTION_DELETED,
    "invoice.payment_failed": INVOICE_PAYMENT_FAILED,
}

DEFAULT_PRO_AMOUNT = Decimal("29")


@dataclass
class BillingEvent:
    """The parts of a Stripe event the sync needs"""

    event_type: str
    kind: Optional[str]
    event_id: Optional[str] = None
    customer_id: Optional[str] = None
    subscription_id: Optional[str] = None
    status: Optional[str] = None
    amount_total: Optional[int] = None
    metadata: dict = field(default_factory=dict)

    @classmethod
    def from_stripe(cls, payload: dict) -> "BillingEvent":
        event_type = payload.get("type") or ""
        obj = (payload.get("data") or {}).get("object") or {}
        kind = STRIPE_EVENT_KINDS.get(event_type)

        # Subscription objects carry their own id; sessions and invoices reference one
        if kind in (SUBSCRIPTION_UPDATED, SUBSCRIPTION_DELETED):
            subscription_id = obj.get("id")
        else:
            subscription_id = obj.get("subscription")

        return cls(
            event_type=event_type,
            kind=kind,
            event_id=payload.get("id"),
            customer_id=obj.get("customer"),
            subscription_id=subscription_id,
            status=obj.get("status"),
            amount_total=obj.get("amount_total"),
            metadata=obj.get("metadata") or {},
        )


@dataclass
class SyncResult:
    event_type: str
    handled: bool
    user: Optional[User] = None
    # Payment confirmation to send after acknowledging the event
    confirmation: Optional[dict] = None


class SubscriptionSync:
    def __init__(self, db: Session):
        self.db = db
        self.repo = BillingRepository()

    def apply(self, payload: dict) -> SyncResult:
        """Apply one webhook event; database errors propagate to the caller"""
        event = BillingEvent.from_stripe(payload)

        if event.kind is None:
            logger.info(f"ℹ️ Unhandled Stripe event type: {event.event_type}")
            return SyncResult(event_type=event.event_type, handled=False)

        if not event.customer_id:
            logger.warning(f"⚠️ Stripe event {event.event_id} ({event.event_type}) has no customer")
            return SyncResult(event_type=event.event_type, handled=False)

        logger.info(f"🔔 Applying {event.event_type} for customer {event.customer_id}")
        handler = {
            CHECKOUT_COMPLETED: self._checkout_completed,
            SUBSCRIPTION_UPDATED: self._subscription_updated,
            SUBSCRIPTION_DELETED: self._subscription_deleted,
            INVOICE_PAYMENT_FAILED: self._invoice_payment_failed,
        }[event.kind]
        return handler(event)

    def _set_state(self, event: BillingEvent, status: str, **kwargs) -> SyncResult:
        rows = self.repo.set_subscription_state(self.db, event.customer_id, status, **kwargs)
        if not rows:
            logger.warning(
                f"⚠️ No user for Stripe customer {event.customer_id}, ignoring {event.event_type}"
            )
            return SyncResult(event_type=event.event_type, handled=False)

        user = self.repo.get_user_by_stripe_customer_id(self.db, event.customer_id)
        logger.info(f"✅ User {user.id} subscription_status -> {status}")
        return SyncResult(event_type=event.event_type, handled=True, user=user)

    def _link_customer_from_metadata(self, event: BillingEvent) -> None:
        """Checkout sessions carry metadata.userId; use it when the customer is not linked yet"""
        if self.repo.get_user_by_stripe_customer_id(self.db, event.customer_id):
            return
        try:
            user_id = int(event.metadata.get("userId"))
        except (TypeError, ValueError):
            return
        user = self.repo.get_user_by_id(self.db, user_id)
        if user and not user.stripe_customer_id:
            self.repo.link_stripe_customer(self.db, user, event.customer_id)
            logger.info(f"🔗 Linked Stripe customer {event.customer_id} to user {user.id}")

    def _checkout_completed(self, event: BillingEvent) -> SyncResult:
        self._link_customer_from_metadata(event)
        result = self._set_state(event, "active", subscription_id=event.subscription_id)
        if result.handled:
            amount = (
                Decimal(event.amount_total) / 100
                if event.amount_total is not None
                else DEFAULT_PRO_AMOUNT
            )
            result.confirmation = {
                "to": result.user.email,
                "user_name": result.user.name or result.user.business_name or "there",
                "amount": amount,
            }
        return result

    def _subscription_updated(self, event: BillingEvent) -> SyncResult:
        if not event.status:
            logger.warning(f"⚠️ Subscription update {event.event_id} has no status, ignoring")
            return SyncResult(event_type=event.event_type, handled=False)
        # Stripe's status string is stored as-is
        return self._set_state(event, event.status)

    def _subscription_deleted(self, event: BillingEvent) -> SyncResult:
        return self._set_state(event, "canceled", subscription_id=None)

    def _invoice_payment_failed(self, event: BillingEvent) -> SyncResult:
        return self._set_state(event, "past_due")
