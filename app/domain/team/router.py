"""Team router - Pro-only team member endpoints"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ..quotes.schemas import MessageResponse, QuoteListResponse
from .schemas import TeamMemberCreate, TeamMemberResponse, TeamMemberUpdate
from .service import TeamService

router = APIRouter(prefix="/team", tags=["Team"])


def get_team_service(db: Session = Depends(get_db)) -> TeamService:
    return TeamService(db)


@router.get("", response_model=list[TeamMemberResponse])
async def get_team_members(
    current_user: User = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
):
    return service.get_members(current_user)


@router.post("", response_model=TeamMemberResponse, status_code=201)
async def create_team_member(
    data: TeamMemberCreate,
    current_user: User = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
):
    return service.create_member(data, current_user)


@router.get("/{member_id}", response_model=TeamMemberResponse)
async def get_team_member(
    member_id: int,
    current_user: User = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
):
    return service.get_member(member_id, current_user)


@router.put("/{member_id}", response_model=TeamMemberResponse)
async def update_team_member(
    member_id: int,
    data: TeamMemberUpdate,
    current_user: User = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
):
    return service.update_member(member_id, data, current_user)


@router.delete("/{member_id}", response_model=MessageResponse)
async def delete_team_member(
    member_id: int,
    current_user: User = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
):
    return service.delete_member(member_id, current_user)


@router.get("/{member_id}/jobs", response_model=QuoteListResponse)
async def get_team_member_jobs(
    member_id: int,
    current_user: User = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
):
    """Quotes assigned to a team member"""
    return {"quotes": service.get_member_jobs(member_id, current_user)}


__all__ = ["router"]
