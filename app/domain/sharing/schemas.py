"""Share-link schemas"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from ...shared.validators import require_text
from ..quotes.schemas import PublicQuoteView


class RegenerateShareLinkRequest(BaseModel):
    expiresInDays: Optional[float] = Field(
        default=None,
        gt=0,
        le=3650,
        validation_alias=AliasChoices("expiresInDays", "expiresIn"),
    )


class ShareLinkResponse(BaseModel):
    shareToken: str
    shareUrl: str
    expiresAt: Optional[datetime] = None


class ChangeRequestCreate(BaseModel):
    message: str = Field(max_length=5000)

    @field_validator("message")
    @classmethod
    def check_message(cls, v):
        return require_text(v, "Message")


class BusinessInfo(BaseModel):
    name: str
    email: Optional[str] = None


class PublicQuoteResponse(BaseModel):
    quote: PublicQuoteView
    business: BusinessInfo


class ApprovalResponse(BaseModel):
    success: bool
    message: str
    clientApproved: bool
    approvedAt: datetime


class ChangeRequestResponse(BaseModel):
    success: bool
    message: str
