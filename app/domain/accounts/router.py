"""Account router - signup, login and profile endpoints"""

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...email_service import send_welcome_email
from ...models import User
from ...services.notification_service import dispatch_notification
from .schemas import AuthResponse, LoginRequest, ProfileUpdate, RegisterRequest, UserResponse
from .service import AccountService

router = APIRouter(prefix="/auth", tags=["Auth"])


def get_account_service(db: Session = Depends(get_db)) -> AccountService:
    return AccountService(db)


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    data: RegisterRequest,
    background_tasks: BackgroundTasks,
    service: AccountService = Depends(get_account_service),
):
    result = service.register(data)
    user = result["user"]
    dispatch_notification(
        background_tasks,
        "welcome",
        send_welcome_email,
        to=user.email,
        user_name=user.name or user.business_name or "there",
    )
    return result


@router.post("/login", response_model=AuthResponse)
async def login(data: LoginRequest, service: AccountService = Depends(get_account_service)):
    return service.login(data)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    return service.update_profile(current_user, data)


__all__ = ["router"]
