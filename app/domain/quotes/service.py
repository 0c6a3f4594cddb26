"""Quote service - quote CRUD, quota enforcement and owner-driven status changes"""

import logging

from sqlalchemy.orm import Session

from ...email_service import EmailDeliveryError, send_quote_email
from ...models import Quote, User
from ...plan_limits import FREE_QUOTE_LIMIT, can_create_quote, count_quotes, quotes_remaining
from ...shared.errors import Internal, InvalidInput, NotFound, UpgradeRequired
from ...shared.time_utils import utcnow
from ..clients.repository import ClientRepository
from ..sharing.service import build_share_url
from .repository import QuoteRepository
from .schemas import QuoteCreate, QuoteUpdate, validate_quote_status

logger = logging.getLogger(__name__)


class QuoteService:
    """Service layer for quote business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = QuoteRepository()

    def get_quotes(self, user: User) -> list[Quote]:
        return self.repo.get_quotes(self.db, user.id)

    def get_quote(self, quote_id: int, user: User) -> Quote:
        """Get a quote owned by the user; other tenants' quotes are simply not found"""
        quote = self.repo.get_quote_by_id(self.db, quote_id, user.id)
        if not quote:
            raise NotFound("Quote not found")
        return quote

    def _check_client(self, client_id, user: User) -> None:
        if client_id is not None and not ClientRepository.get_client_by_id(
            self.db, client_id, user.id
        ):
            raise NotFound("Client not found")

    def create_quote(self, data: QuoteCreate, user: User) -> dict:
        """
        Create a quote if the user's plan allows it.

        Returns:
            {"quote", "quoteCount", "quotesRemaining"}
        """
        decision = can_create_quote(user, self.db)
        if decision.check_failed:
            raise Internal("Unable to verify your quote allowance. Please try again.")
        if not decision.allowed:
            logger.warning(f"⚠️ User {user.id} reached the free quote limit ({decision.quote_count})")
            raise UpgradeRequired(
                "Free quote limit reached",
                detail=(
                    f"You've used all {FREE_QUOTE_LIMIT} free quotes. "
                    "Upgrade to Pro for unlimited quotes."
                ),
                quoteCount=decision.quote_count,
                limit=FREE_QUOTE_LIMIT,
            )

        self._check_client(data.clientId, user)
        quote_data = data.to_columns()
        quote_data.setdefault("status", "draft")

        quote = self.repo.create_quote(self.db, user.id, **quote_data)
        quote_count = count_quotes(user, self.db)
        logger.info(f"✅ Quote {quote.id} created for user {user.id} ({quote_count} total)")

        return {
            "quote": quote,
            "quoteCount": quote_count,
            "quotesRemaining": quotes_remaining(user, quote_count),
        }

    def update_quote(self, quote_id: int, data: QuoteUpdate, user: User) -> Quote:
        """Owner edit; supplied fields replace stored ones, status included"""
        quote = self.get_quote(quote_id, user)
        self._check_client(data.clientId, user)
        return self.repo.update_quote(self.db, quote, **data.to_columns())

    def delete_quote(self, quote_id: int, user: User) -> dict:
        quote = self.get_quote(quote_id, user)
        self.repo.delete_quote(self.db, quote)
        logger.info(f"🗑️ Quote {quote_id} deleted by user {user.id}")
        return {"message": "Quote deleted"}

    def update_status(self, quote_id: int, status: str, user: User) -> Quote:
        """Explicit owner status change; any valid status is accepted"""
        try:
            validate_quote_status(status)
        except ValueError as e:
            raise InvalidInput(str(e)) from e

        if not self.repo.set_status(self.db, quote_id, user.id, status):
            raise NotFound("Quote not found")
        return self.get_quote(quote_id, user)

    async def send_quote(self, quote_id: int, user: User) -> dict:
        """
        Email the quote to the client with a link to the proposal page.

        The quote becomes "sent" only after the email provider accepted the
        message.
        """
        quote = self.get_quote(quote_id, user)
        if not quote.client_email:
            raise InvalidInput("Client email is required to send a quote")

        try:
            response = await send_quote_email(
                to=quote.client_email,
                business_name=user.display_business_name,
                share_url=build_share_url(quote.share_token),
                total_price=quote.total_price,
                client_name=quote.client_name,
                service_type=quote.service_type,
                property_address=quote.property_address,
                frequency=quote.frequency,
                notes=quote.notes,
                reply_to=user.email,
            )
        except EmailDeliveryError as e:
            logger.error(f"❌ Failed to send quote {quote_id} to {quote.client_email}: {e}")
            raise Internal("Failed to send quote email") from e

        self.repo.mark_sent(self.db, quote_id, user.id, utcnow())
        logger.info(f"📧 Quote {quote_id} sent to {quote.client_email}")

        email_id = response.get("id") if isinstance(response, dict) else None
        return {
            "success": True,
            "message": f"Quote sent to {quote.client_email}",
            "quote": self.get_quote(quote_id, user),
            "emailId": email_id,
        }
