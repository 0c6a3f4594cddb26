"""Scheduling service - schedule, unschedule and calendar listing"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Quote, TeamMember, User
from ...shared.errors import InvalidInput, NotFound
from ..quotes.repository import QuoteRepository
from .schemas import ScheduleCreate, ScheduledJob

logger = logging.getLogger(__name__)


class SchedulingService:
    """Service layer for job scheduling"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = QuoteRepository()

    def _get_quote(self, quote_id: int, user: User) -> Quote:
        quote = self.repo.get_quote_by_id(self.db, quote_id, user.id)
        if not quote:
            raise NotFound("Quote not found")
        return quote

    def get_schedule(self, user: User, start: Optional[date], end: Optional[date]) -> list:
        """Scheduled quotes in [start, end], earliest first"""
        if start and end and start > end:
            raise InvalidInput("start must be on or before end")

        query = (
            self.db.query(Quote)
            .options(joinedload(Quote.assignee))
            .filter(Quote.user_id == user.id, Quote.scheduled_date.isnot(None))
        )
        if start:
            query = query.filter(Quote.scheduled_date >= start)
        if end:
            query = query.filter(Quote.scheduled_date <= end)

        quotes = query.order_by(Quote.scheduled_date, Quote.scheduled_time).all()
        jobs = []
        for quote in quotes:
            job = ScheduledJob.model_validate(quote)
            if quote.assignee:
                job.assigned_to_name = quote.assignee.name
                job.assigned_to_color = quote.assignee.color
            jobs.append(job)
        return jobs

    def schedule_quote(self, quote_id: int, data: ScheduleCreate, user: User) -> Quote:
        """
        Put a quote on the calendar.

        A draft becomes "scheduled"; any other status (sent, approved, ...) is
        kept as is.
        """
        if data.assignedTo is not None:
            member = (
                self.db.query(TeamMember)
                .filter(TeamMember.id == data.assignedTo, TeamMember.user_id == user.id)
                .first()
            )
            if not member:
                raise NotFound("Team member not found")

        rows = self.repo.schedule(
            self.db,
            quote_id,
            user.id,
            scheduled_date=data.scheduledDate,
            scheduled_time=data.scheduledTime,
            recurring=data.recurring,
            assigned_to=data.assignedTo,
        )
        if not rows:
            raise NotFound("Quote not found")

        logger.info(f"📅 Quote {quote_id} scheduled for {data.scheduledDate}")
        return self._get_quote(quote_id, user)

    def unschedule_quote(self, quote_id: int, user: User) -> Quote:
        """Remove a quote from the calendar and put it back to draft"""
        if not self.repo.unschedule(self.db, quote_id, user.id):
            raise NotFound("Quote not found")

        logger.info(f"📅 Quote {quote_id} unscheduled")
        return self._get_quote(quote_id, user)
