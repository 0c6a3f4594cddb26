"""Admin router - requires the admin role"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import require_admin
from ...database import get_db
from ...models import User
from .schemas import AdminUserResponse, DeleteResponse, RoleUpdate, SubscriptionOverride
from .service import AdminService

router = APIRouter(prefix="/admin", tags=["Admin"])


def get_admin_service(db: Session = Depends(get_db)) -> AdminService:
    return AdminService(db)


@router.get("/users/{user_id}", response_model=AdminUserResponse)
async def get_user(
    user_id: int,
    _admin: User = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
):
    return service.get_user_detail(user_id)


@router.put("/users/{user_id}/subscription", response_model=AdminUserResponse)
async def override_subscription(
    user_id: int,
    data: SubscriptionOverride,
    admin: User = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
):
    return service.set_subscription_status(user_id, data.subscriptionStatus, admin)


@router.put("/users/{user_id}/role", response_model=AdminUserResponse)
async def update_role(
    user_id: int,
    data: RoleUpdate,
    admin: User = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
):
    return service.set_role(user_id, data.role, admin)


@router.delete("/users/{user_id}", response_model=DeleteResponse)
async def delete_user(
    user_id: int,
    admin: User = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
):
    """Remove an account with all of its quotes, clients and team"""
    return service.delete_user(user_id, admin)


@router.delete("/quotes/{quote_id}", response_model=DeleteResponse)
async def delete_quote(
    quote_id: int,
    admin: User = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
):
    return service.delete_quote(quote_id, admin)


__all__ = ["router"]
