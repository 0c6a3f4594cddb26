"""Quote repository - Database operations for quotes

Status changes driven by share-link holders and scheduling are single
conditional UPDATE statements, so the row's current state is checked and
changed atomically by the database. Callers get the affected row count back.
"""

from datetime import date, datetime, time
from typing import Optional

from sqlalchemy import and_, case, or_
from sqlalchemy.orm import Session

from ...models import Quote


def _link_usable(now: datetime):
    return or_(Quote.share_expires_at.is_(None), Quote.share_expires_at >= now)


class QuoteRepository:
    """Repository for quote database operations"""

    @staticmethod
    def get_quotes(db: Session, user_id: int) -> list[Quote]:
        """Get all quotes for a user, newest first"""
        return (
            db.query(Quote)
            .filter(Quote.user_id == user_id)
            .order_by(Quote.created_at.desc(), Quote.id.desc())
            .all()
        )

    @staticmethod
    def get_quotes_for_client(db: Session, client_id: int, user_id: int) -> list[Quote]:
        """Get a user's quotes linked to one of their clients, newest first"""
        return (
            db.query(Quote)
            .filter(Quote.client_id == client_id, Quote.user_id == user_id)
            .order_by(Quote.created_at.desc(), Quote.id.desc())
            .all()
        )

    @staticmethod
    def get_quote_by_id(db: Session, quote_id: int, user_id: int) -> Optional[Quote]:
        """Get a quote owned by the user"""
        return db.query(Quote).filter(Quote.id == quote_id, Quote.user_id == user_id).first()

    @staticmethod
    def get_quote(db: Session, quote_id: int) -> Optional[Quote]:
        """Get any tenant's quote by id (admin access)"""
        return db.query(Quote).filter(Quote.id == quote_id).first()

    @staticmethod
    def get_quote_by_share_token(db: Session, share_token: str) -> Optional[Quote]:
        """Look a quote up by share token alone (public, unauthenticated access)"""
        return (
            db.query(Quote)
            .filter(Quote.share_token == share_token)
            .populate_existing()
            .first()
        )

    @staticmethod
    def create_quote(db: Session, user_id: int, **quote_data) -> Quote:
        quote = Quote(user_id=user_id, **quote_data)
        db.add(quote)
        db.commit()
        db.refresh(quote)
        return quote

    @staticmethod
    def update_quote(db: Session, quote: Quote, **updates) -> Quote:
        """Update a quote with provided fields (None leaves a field unchanged)"""
        for key, value in updates.items():
            if value is not None and hasattr(quote, key):
                setattr(quote, key, value)

        db.commit()
        db.refresh(quote)
        return quote

    @staticmethod
    def delete_quote(db: Session, quote: Quote) -> None:
        """Delete a quote (its checklist instance goes with it)"""
        db.delete(quote)
        db.commit()

    # ========================================================================
    # STATUS TRANSITIONS
    # ========================================================================

    @staticmethod
    def set_status(db: Session, quote_id: int, user_id: int, status: str) -> int:
        rows = (
            db.query(Quote)
            .filter(Quote.id == quote_id, Quote.user_id == user_id)
            .update({Quote.status: status}, synchronize_session=False)
        )
        db.commit()
        return rows

    @staticmethod
    def mark_sent(db: Session, quote_id: int, user_id: int, sent_at: datetime) -> int:
        rows = (
            db.query(Quote)
            .filter(Quote.id == quote_id, Quote.user_id == user_id)
            .update({Quote.status: "sent", Quote.sent_at: sent_at}, synchronize_session=False)
        )
        db.commit()
        return rows

    @staticmethod
    def schedule(
        db: Session,
        quote_id: int,
        user_id: int,
        scheduled_date: date,
        scheduled_time: Optional[time],
        recurring: str,
        assigned_to: Optional[int],
    ) -> int:
        """Set scheduling fields; status becomes scheduled only when it is still draft"""
        rows = (
            db.query(Quote)
            .filter(Quote.id == quote_id, Quote.user_id == user_id)
            .update(
                {
                    Quote.scheduled_date: scheduled_date,
                    Quote.scheduled_time: scheduled_time,
                    Quote.recurring: recurring,
                    Quote.assigned_to: assigned_to,
                    Quote.status: case((Quote.status == "draft", "scheduled"), else_=Quote.status),
                },
                synchronize_session=False,
            )
        )
        db.commit()
        return rows

    @staticmethod
    def unschedule(db: Session, quote_id: int, user_id: int) -> int:
        """Clear scheduling fields and reset status to draft"""
        rows = (
            db.query(Quote)
            .filter(Quote.id == quote_id, Quote.user_id == user_id)
            .update(
                {
                    Quote.scheduled_date: None,
                    Quote.scheduled_time: None,
                    Quote.recurring: "none",
                    Quote.assigned_to: None,
                    Quote.status: "draft",
                },
                synchronize_session=False,
            )
        )
        db.commit()
        return rows

    @staticmethod
    def unassign_team_member(db: Session, team_member_id: int, user_id: int) -> int:
        rows = (
            db.query(Quote)
            .filter(Quote.assigned_to == team_member_id, Quote.user_id == user_id)
            .update({Quote.assigned_to: None}, synchronize_session=False)
        )
        db.commit()
        return rows

    # ========================================================================
    # SHARE LINK
    # ========================================================================

    @staticmethod
    def replace_share_token(
        db: Session,
        quote_id: int,
        user_id: int,
        share_token: str,
        share_expires_at: Optional[datetime],
    ) -> int:
        """Swap in a new token; the old one stops resolving as soon as this commits"""
        rows = (
            db.query(Quote)
            .filter(Quote.id == quote_id, Quote.user_id == user_id)
            .update(
                {Quote.share_token: share_token, Quote.share_expires_at: share_expires_at},
                synchronize_session=False,
            )
        )
        db.commit()
        return rows

    @staticmethod
    def approve_by_share_token(db: Session, share_token: str, approved_at: datetime) -> int:
        """Approve once: matches only an unexpired, not-yet-approved quote"""
        rows = (
            db.query(Quote)
            .filter(
                and_(
                    Quote.share_token == share_token,
                    Quote.client_approved.is_(False),
                    _link_usable(approved_at),
                )
            )
            .update(
                {
                    Quote.client_approved: True,
                    Quote.client_approved_at: approved_at,
                    Quote.status: "approved",
                },
                synchronize_session=False,
            )
        )
        db.commit()
        return rows

    @staticmethod
    def request_changes_by_share_token(
        db: Session, share_token: str, message: str, now: datetime
    ) -> int:
        """Record a change request; an approved quote is never moved back"""
        rows = (
            db.query(Quote)
            .filter(
                and_(
                    Quote.share_token == share_token,
                    Quote.client_approved.is_(False),
                    _link_usable(now),
                )
            )
            .update(
                {Quote.change_request: message, Quote.status: "changes_requested"},
                synchronize_session=False,
            )
        )
        db.commit()
        return rows
