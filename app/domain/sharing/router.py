"""Share-link router - owner link management and the public proposal endpoints"""

import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Body, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...email_service import send_changes_requested_notification, send_quote_approved_notification
from ...models import User
from ...rate_limiter import create_rate_limiter
from ...services.notification_service import dispatch_notification
from .schemas import (
    ApprovalResponse,
    ChangeRequestCreate,
    ChangeRequestResponse,
    PublicQuoteResponse,
    RegenerateShareLinkRequest,
    ShareLinkResponse,
)
from .service import ShareLinkService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quotes", tags=["Share Links"])
public_router = APIRouter(prefix="/public/quotes", tags=["Public Quotes"])

public_view_limit = create_rate_limiter(limit=60, window_seconds=60, key_prefix="public_quote_view")
public_action_limit = create_rate_limiter(
    limit=10, window_seconds=60, key_prefix="public_quote_action"
)


def get_share_link_service(db: Session = Depends(get_db)) -> ShareLinkService:
    """Dependency injection for ShareLinkService"""
    return ShareLinkService(db)


# ============================================================================
# OWNER LINK MANAGEMENT
# ============================================================================


@router.get("/{quote_id}/share", response_model=ShareLinkResponse)
async def get_share_link(
    quote_id: int,
    current_user: User = Depends(get_current_user),
    service: ShareLinkService = Depends(get_share_link_service),
):
    """Get the current share link (read-only)"""
    return service.get_link(quote_id, current_user)


@router.post("/{quote_id}/share/regenerate", response_model=ShareLinkResponse)
async def regenerate_share_link(
    quote_id: int,
    data: Optional[RegenerateShareLinkRequest] = Body(default=None),
    current_user: User = Depends(get_current_user),
    service: ShareLinkService = Depends(get_share_link_service),
):
    """Issue a new share token, invalidating the old link"""
    expires_in_days = data.expiresInDays if data else None
    return service.regenerate_link(quote_id, current_user, expires_in_days)


# ============================================================================
# PUBLIC (no authentication - the share token is the credential)
# ============================================================================


@public_router.get("/{share_token}", response_model=PublicQuoteResponse)
async def view_public_quote(
    share_token: str,
    _: None = Depends(public_view_limit),
    service: ShareLinkService = Depends(get_share_link_service),
):
    return service.resolve_public(share_token)


@public_router.post("/{share_token}/approve", response_model=ApprovalResponse)
async def approve_public_quote(
    share_token: str,
    background_tasks: BackgroundTasks,
    _: None = Depends(public_action_limit),
    service: ShareLinkService = Depends(get_share_link_service),
):
    """Client approves the quote (once)"""
    quote = service.approve(share_token)

    dispatch_notification(
        background_tasks,
        "quote approved",
        send_quote_approved_notification,
        to=quote.user.email,
        client_name=quote.client_name,
        quote_id=quote.id,
        total_price=quote.total_price,
    )
    return {
        "success": True,
        "message": "Quote approved successfully",
        "clientApproved": quote.client_approved,
        "approvedAt": quote.client_approved_at,
    }


@public_router.post("/{share_token}/request-changes", response_model=ChangeRequestResponse)
async def request_quote_changes(
    share_token: str,
    data: ChangeRequestCreate,
    background_tasks: BackgroundTasks,
    _: None = Depends(public_action_limit),
    service: ShareLinkService = Depends(get_share_link_service),
):
    """Client asks the business to revise the quote"""
    quote = service.request_changes(share_token, data.message)

    dispatch_notification(
        background_tasks,
        "changes requested",
        send_changes_requested_notification,
        to=quote.user.email,
        client_name=quote.client_name,
        quote_id=quote.id,
        message=data.message,
    )
    return {"success": True, "message": "Change request submitted"}


__all__ = ["router", "public_router"]
