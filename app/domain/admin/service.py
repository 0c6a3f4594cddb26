"""Admin service - explicit entitlement and role changes, account removal"""

import logging

from sqlalchemy.orm import Session

from ...models import User
from ...plan_limits import count_quotes
from ...shared.errors import Conflict, NotFound
from ..billing.repository import BillingRepository
from ..quotes.repository import QuoteRepository

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = BillingRepository()

    def get_user(self, user_id: int) -> User:
        user = self.repo.get_user_by_id(self.db, user_id)
        if not user:
            raise NotFound("User not found")
        return user

    def get_user_detail(self, user_id: int) -> dict:
        user = self.get_user(user_id)
        return {
            "id": user.id,
            "email": user.email,
            "name": user.name,
            "business_name": user.business_name,
            "phone": user.phone,
            "role": user.role,
            "subscription_status": user.subscription_status,
            "created_at": user.created_at,
            "stripe_customer_id": user.stripe_customer_id,
            "subscription_id": user.subscription_id,
            "quote_count": count_quotes(user, self.db),
        }

    def set_subscription_status(self, user_id: int, status: str, admin: User) -> dict:
        """Manual entitlement override (support grants, refunds)"""
        user = self.get_user(user_id)
        previous = user.subscription_status
        self.repo.set_subscription_status_for_user(self.db, user, status)
        logger.warning(
            f"🔧 Admin {admin.id} changed user {user_id} subscription_status {previous} -> {status}"
        )
        return self.get_user_detail(user_id)

    def set_role(self, user_id: int, role: str, admin: User) -> dict:
        user = self.get_user(user_id)
        user.role = role
        self.db.commit()
        logger.warning(f"🔧 Admin {admin.id} set user {user_id} role to {role}")
        return self.get_user_detail(user_id)

    def delete_user(self, user_id: int, admin: User) -> dict:
        """
        Delete an account and everything it owns.

        Quotes (with their checklists), clients, team members and checklist
        templates go with the user. The Stripe subscription is not touched.
        """
        if user_id == admin.id:
            raise Conflict("Cannot delete your own account", detail="Ask another admin to remove it.")
        user = self.get_user(user_id)
        email = user.email
        self.db.delete(user)
        self.db.commit()
        logger.warning(f"🗑️ Admin {admin.id} deleted user {user_id} ({email})")
        return {"success": True, "message": f"User {email} deleted"}

    def delete_quote(self, quote_id: int, admin: User) -> dict:
        quote = QuoteRepository.get_quote(self.db, quote_id)
        if not quote:
            raise NotFound("Quote not found")
        owner_id = quote.user_id
        QuoteRepository.delete_quote(self.db, quote)
        logger.warning(f"🗑️ Admin {admin.id} deleted quote {quote_id} of user {owner_id}")
        return {"success": True, "message": "Quote deleted"}
