"""Billing repository - Database operations for billing"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import User

UNSET = object()


class BillingRepository:
    """Repository for billing database operations"""

    @staticmethod
    def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_by_stripe_customer_id(db: Session, stripe_customer_id: str) -> Optional[User]:
        return db.query(User).filter(User.stripe_customer_id == stripe_customer_id).first()

    @staticmethod
    def link_stripe_customer(db: Session, user: User, stripe_customer_id: str) -> User:
        user.stripe_customer_id = stripe_customer_id
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def set_subscription_state(
        db: Session,
        stripe_customer_id: str,
        subscription_status: str,
        subscription_id=UNSET,
    ) -> int:
        """
        Write subscription state for the tenant owning a Stripe customer.

        The same values written twice leave the row unchanged, so redelivered
        events are harmless. Returns the number of tenants updated (0 or 1).
        """
        values = {User.subscription_status: subscription_status}
        if subscription_id is not UNSET:
            values[User.subscription_id] = subscription_id

        rows = (
            db.query(User)
            .filter(User.stripe_customer_id == stripe_customer_id)
            .update(values, synchronize_session=False)
        )
        db.commit()
        return rows

    @staticmethod
    def set_subscription_status_for_user(db: Session, user: User, subscription_status: str) -> User:
        """Admin override of a tenant's entitlement"""
        user.subscription_status = subscription_status
        db.commit()
        db.refresh(user)
        return user
