"""
Analytics service - summary figures, status breakdown and a six month trend.

A quote counts as accepted once the client approved it, whatever status it
has moved on to since (scheduled, completed). The conversion rate is accepted
quotes over quotes that reached the client (sent or approved).

Aggregation runs in Python over the tenant's quotes so month bucketing does
not depend on the database's date functions.
"""

import logging
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from sqlalchemy.orm import Session

from ...models import QUOTE_STATUSES, Quote, User
from ...shared.time_utils import utcnow
from ..quotes.repository import QuoteRepository
from ..team.service import require_pro

logger = logging.getLogger(__name__)

TREND_MONTHS = 6
CENTS = Decimal("0.01")
TENTHS = Decimal("0.1")


def _money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def _total(quotes: list[Quote]) -> Decimal:
    return sum((Decimal(q.total_price or 0) for q in quotes), Decimal("0"))


def _week_start(today: date) -> date:
    """Weeks start on Sunday"""
    return today - timedelta(days=(today.weekday() + 1) % 7)


def _previous_months(today: date, count: int) -> list[date]:
    """First day of each of the last ``count`` months, oldest first (current month last)"""
    months = []
    year, month = today.year, today.month
    for _ in range(count):
        months.append(date(year, month, 1))
        year, month = (year, month - 1) if month > 1 else (year - 1, 12)
    return list(reversed(months))


class AnalyticsService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = QuoteRepository()

    def get_analytics(self, user: User, now: Optional[datetime] = None) -> dict:
        require_pro(
            user,
            "Pro subscription required",
            detail="Advanced analytics is a Pro feature. Upgrade to access detailed insights.",
        )
        now = now or utcnow()
        today = now.date()
        quotes = self.repo.get_quotes(self.db, user.id)
        logger.info(f"📊 Building analytics for user {user.id} over {len(quotes)} quotes")

        def created_on_or_after(q: Quote, day: date) -> bool:
            return q.created_at is not None and q.created_at.date() >= day

        accepted = [q for q in quotes if q.client_approved]
        reached_client = [q for q in quotes if q.sent_at is not None or q.client_approved]
        total_value = _total(quotes)

        if reached_client:
            conversion_rate = (Decimal(len(accepted)) * 100 / len(reached_client)).quantize(
                TENTHS, rounding=ROUND_HALF_UP
            )
        else:
            conversion_rate = Decimal("0.0")

        status_breakdown = {status: 0 for status in QUOTE_STATUSES}
        for q in quotes:
            status_breakdown[q.status] = status_breakdown.get(q.status, 0) + 1

        return {
            "summary": {
                "total_quotes": len(quotes),
                "this_month_quotes": sum(
                    1 for q in quotes if created_on_or_after(q, today.replace(day=1))
                ),
                "this_week_quotes": sum(1 for q in quotes if created_on_or_after(q, _week_start(today))),
                "total_quoted_value": _money(total_value),
                "accepted_value": _money(_total(accepted)),
                "conversion_rate": conversion_rate,
                "avg_quote_value": _money(total_value / len(quotes)) if quotes else _money(0),
            },
            "status_breakdown": status_breakdown,
            "monthly_trend": self._monthly_trend(quotes, today),
            "generated_at": now,
        }

    @staticmethod
    def _monthly_trend(quotes: list[Quote], today: date) -> list[dict]:
        trend = []
        for month_start in _previous_months(today, TREND_MONTHS):
            in_month = [
                q
                for q in quotes
                if q.created_at is not None
                and (q.created_at.year, q.created_at.month) == (month_start.year, month_start.month)
            ]
            month_accepted = [q for q in in_month if q.client_approved]
            trend.append(
                {
                    "month": month_start.strftime("%b %y"),
                    "total_quotes": len(in_month),
                    "accepted_quotes": len(month_accepted),
                    "revenue": _money(_total(month_accepted)),
                }
            )
        return trend
