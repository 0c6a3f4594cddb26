import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .models import User
from .security_utils import verify_access_token
from .shared.errors import Forbidden, Unauthorized

logger = logging.getLogger(__name__)

# auto_error is off so a missing header maps to 401 rather than FastAPI's default
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to a user"""
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Access token required")

    payload = verify_access_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise Unauthorized("Invalid or expired token")

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise Unauthorized("Invalid or expired token") from None

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        logger.warning(f"⚠️ Token for unknown user id {user_id}")
        raise Unauthorized("User not found")
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Admin access is a role on the user record"""
    if current_user.role != "admin":
        logger.warning(f"⚠️ Non-admin user {current_user.id} attempted an admin action")
        raise Forbidden("Admin access required")
    return current_user
