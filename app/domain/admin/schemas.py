"""Admin schemas"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...models import USER_ROLES
from ..accounts.schemas import UserResponse


class SubscriptionOverride(BaseModel):
    subscriptionStatus: str = Field(min_length=1, max_length=50)


class RoleUpdate(BaseModel):
    role: str

    @field_validator("role")
    @classmethod
    def check_role(cls, v):
        if v not in USER_ROLES:
            raise ValueError(f"Invalid role. Must be one of: {', '.join(USER_ROLES)}")
        return v


class AdminUserResponse(UserResponse):
    stripe_customer_id: Optional[str] = None
    subscription_id: Optional[str] = None
    quote_count: int = 0


class DeleteResponse(BaseModel):
    success: bool
    message: str
