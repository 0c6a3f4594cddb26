"""Team service - team members are a Pro feature"""

import logging

from sqlalchemy.orm import Session

from ...models import Quote, TeamMember, User
from ...plan_limits import has_active_subscription
from ...shared.errors import NotFound, UpgradeRequired
from ..quotes.repository import QuoteRepository
from .schemas import TeamMemberCreate, TeamMemberUpdate

logger = logging.getLogger(__name__)


def require_pro(
    user: User,
    message: str = "Team management requires Pro",
    detail: str = "Upgrade to Pro to add team members and assign jobs.",
) -> None:
    """Gate a Pro feature on the stored subscription status"""
    if not has_active_subscription(user):
        raise UpgradeRequired(message, detail=detail)


class TeamService:
    def __init__(self, db: Session):
        self.db = db

    def get_members(self, user: User) -> list[TeamMember]:
        require_pro(user)
        return (
            self.db.query(TeamMember)
            .filter(TeamMember.user_id == user.id)
            .order_by(TeamMember.name)
            .all()
        )

    def get_member(self, member_id: int, user: User) -> TeamMember:
        require_pro(user)
        member = (
            self.db.query(TeamMember)
            .filter(TeamMember.id == member_id, TeamMember.user_id == user.id)
            .first()
        )
        if not member:
            raise NotFound("Team member not found")
        return member

    def create_member(self, data: TeamMemberCreate, user: User) -> TeamMember:
        require_pro(user)
        member = TeamMember(user_id=user.id, **data.model_dump(exclude_none=True))
        self.db.add(member)
        self.db.commit()
        self.db.refresh(member)
        logger.info(f"👥 Team member {member.id} added for user {user.id}")
        return member

    def update_member(self, member_id: int, data: TeamMemberUpdate, user: User) -> TeamMember:
        member = self.get_member(member_id, user)
        updates = data.model_dump(exclude_none=True)
        if "isActive" in updates:
            updates["is_active"] = updates.pop("isActive")
        for key, value in updates.items():
            setattr(member, key, value)
        self.db.commit()
        self.db.refresh(member)
        return member

    def delete_member(self, member_id: int, user: User) -> dict:
        """Remove a member; jobs assigned to them become unassigned"""
        member = self.get_member(member_id, user)
        QuoteRepository.unassign_team_member(self.db, member.id, user.id)
        self.db.delete(member)
        self.db.commit()
        return {"message": "Team member deleted"}

    def get_member_jobs(self, member_id: int, user: User) -> list[Quote]:
        member = self.get_member(member_id, user)
        return (
            self.db.query(Quote)
            .filter(Quote.user_id == user.id, Quote.assigned_to == member.id)
            .order_by(Quote.scheduled_date, Quote.scheduled_time)
            .all()
        )
