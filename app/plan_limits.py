"""
Free-tier quote quota and subscription entitlement checks.

Entitlement is derived only from ``User.subscription_status``. A tenant with an
``active`` subscription has unlimited quotes; every other status is limited to
FREE_QUOTE_LIMIT quotes in total.

Known race: quote creation checks the count and then inserts without holding
a lock, so two concurrent creations from the same free tenant can both pass the
check and land one quote over the limit. The limit is soft under concurrency.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .models import Quote, User

logger = logging.getLogger(__name__)

FREE_QUOTE_LIMIT = 3
ACTIVE_STATUS = "active"
UNLIMITED = "unlimited"


@dataclass(frozen=True)
class QuotaDecision:
    allowed: bool
    remaining: Union[int, str]
    quote_count: Optional[int]
    check_failed: bool = False


def has_active_subscription(user: User) -> bool:
    return user.subscription_status == ACTIVE_STATUS


def count_quotes(user: User, db: Session) -> int:
    return db.query(func.count(Quote.id)).filter(Quote.user_id == user.id).scalar() or 0


def quotes_remaining(user: User, quote_count: int) -> Union[int, str]:
    """Free quotes left, or "unlimited" for active subscribers"""
    if has_active_subscription(user):
        return UNLIMITED
    return max(0, FREE_QUOTE_LIMIT - quote_count)


def can_create_quote(user: User, db: Session) -> QuotaDecision:
    """
    Decide whether the user may create another quote.

    Fails closed: if the quote count cannot be read the decision is a denial
    with ``check_failed`` set.
    """
    if has_active_subscription(user):
        return QuotaDecision(allowed=True, remaining=UNLIMITED, quote_count=None)

    try:
        quote_count = count_quotes(user, db)
    except SQLAlchemyError as e:
        logger.error(f"❌ Quote count failed for user {user.id}, denying creation: {e}")
        return QuotaDecision(allowed=False, remaining=0, quote_count=None, check_failed=True)

    return QuotaDecision(
        allowed=quote_count < FREE_QUOTE_LIMIT,
        remaining=max(0, FREE_QUOTE_LIMIT - quote_count),
        quote_count=quote_count,
    )


def get_usage_stats(user: User, db: Session) -> dict:
    """Subscription and quota summary for the subscription status endpoint"""
    quote_count = count_quotes(user, db)
    remaining = quotes_remaining(user, quote_count)
    return {
        "status": user.subscription_status,
        "isActive": has_active_subscription(user),
        "quoteCount": quote_count,
        "quotesRemaining": remaining,
        "canCreateQuote": remaining == UNLIMITED or remaining > 0,
    }
