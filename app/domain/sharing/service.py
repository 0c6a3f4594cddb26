"""
Share-link service - issues, rotates and resolves quote share tokens, and
applies the two client actions (approve, request changes) reachable through
a link.

Public lookups are by token alone. An unknown token, including one that was
rotated away, is NotFound; a known token past its expiry is Gone.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from ... import config
from ...models import Quote, User, generate_share_token
from ...shared.errors import Conflict, Gone, NotFound
from ...shared.time_utils import utcnow
from ..quotes.repository import QuoteRepository

logger = logging.getLogger(__name__)


def build_share_url(share_token: str) -> str:
    return f"{config.FRONTEND_URL.rstrip('/')}/proposal/{share_token}"


def is_link_expired(quote: Quote, now: datetime) -> bool:
    return quote.share_expires_at is not None and quote.share_expires_at < now


def _link_payload(quote: Quote) -> dict:
    return {
        "shareToken": quote.share_token,
        "shareUrl": build_share_url(quote.share_token),
        "expiresAt": quote.share_expires_at,
    }


class ShareLinkService:
    """Service layer for share links and public quote actions"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = QuoteRepository()

    # ========================================================================
    # OWNER
    # ========================================================================

    def _get_owned_quote(self, quote_id: int, user: User) -> Quote:
        quote = self.repo.get_quote_by_id(self.db, quote_id, user.id)
        if not quote:
            raise NotFound("Quote not found")
        return quote

    def get_link(self, quote_id: int, user: User) -> dict:
        return _link_payload(self._get_owned_quote(quote_id, user))

    def regenerate_link(
        self, quote_id: int, user: User, expires_in_days: Optional[float] = None
    ) -> dict:
        """Replace the token; links already handed out stop working immediately"""
        expires_at = utcnow() + timedelta(days=expires_in_days) if expires_in_days else None
        rows = self.repo.replace_share_token(
            self.db, quote_id, user.id, generate_share_token(), expires_at
        )
        if not rows:
            raise NotFound("Quote not found")

        logger.info(f"🔗 Share link regenerated for quote {quote_id} (expires: {expires_at})")
        return _link_payload(self._get_owned_quote(quote_id, user))

    # ========================================================================
    # PUBLIC
    # ========================================================================

    def _resolve(self, share_token: str, now: datetime) -> Quote:
        quote = self.repo.get_quote_by_share_token(self.db, share_token)
        if not quote:
            raise NotFound("Quote not found")
        if is_link_expired(quote, now):
            raise Gone("This quote link has expired")
        return quote

    def resolve_public(self, share_token: str) -> dict:
        """Public quote view plus the business it came from"""
        quote = self._resolve(share_token, utcnow())
        owner = quote.user
        return {
            "quote": quote,
            "business": {"name": owner.display_business_name, "email": owner.email},
        }

    def approve(self, share_token: str) -> Quote:
        """
        Approve the quote behind a share link.

        The conditional update is the only approval check; when it matches no
        row the quote is re-read to report why (NotFound, Gone or Conflict).
        """
        now = utcnow()
        if not self.repo.approve_by_share_token(self.db, share_token, now):
            self._resolve(share_token, now)
            raise Conflict("This quote has already been approved")

        quote = self.repo.get_quote_by_share_token(self.db, share_token)
        if not quote:
            raise NotFound("Quote not found")
        logger.info(f"✅ Quote {quote.id} approved by client")
        return quote

    def request_changes(self, share_token: str, message: str) -> Quote:
        now = utcnow()
        if not self.repo.request_changes_by_share_token(self.db, share_token, message, now):
            self._resolve(share_token, now)
            raise Conflict("This quote has already been approved")

        quote = self.repo.get_quote_by_share_token(self.db, share_token)
        if not quote:
            raise NotFound("Quote not found")
        logger.info(f"✏️ Client requested changes on quote {quote.id}")
        return quote
