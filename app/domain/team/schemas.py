"""Team schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ...shared.validators import require_text, validate_email, validate_hex_color


class TeamMemberCreate(BaseModel):
    name: str = Field(max_length=255)
    email: Optional[str] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    role: str = Field(default="cleaner", max_length=50)
    color: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return require_text(v, "Name")

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v) if v else None

    @field_validator("color")
    @classmethod
    def check_color(cls, v):
        return validate_hex_color(v)


class TeamMemberUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    role: Optional[str] = Field(default=None, max_length=50)
    color: Optional[str] = None
    isActive: Optional[bool] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v) if v else None

    @field_validator("color")
    @classmethod
    def check_color(cls, v):
        return validate_hex_color(v)


class TeamMemberResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    color: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
