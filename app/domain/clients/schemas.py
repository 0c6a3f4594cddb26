"""Client domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ...shared.validators import require_text, validate_email


class ClientCreate(BaseModel):
    """Schema for creating a new client"""

    name: str = Field(max_length=255)
    email: Optional[str] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return require_text(v, "Name")

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v) if v else None


class ClientUpdate(BaseModel):
    """Schema for updating an existing client"""

    name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return require_text(v, "Name") if v is not None else v

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v) if v else None


class ClientResponse(BaseModel):
    """Schema for client response"""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
