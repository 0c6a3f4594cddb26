"""Checklist schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ...shared.validators import require_text


class ChecklistRoom(BaseModel):
    name: str = Field(max_length=255)
    tasks: list[str] = Field(default_factory=list)


class ChecklistTemplateCreate(BaseModel):
    name: str = Field(max_length=255)
    rooms: list[ChecklistRoom] = Field(default_factory=list)
    isDefault: bool = False

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return require_text(v, "Name")


class ChecklistTemplateUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=255)
    rooms: Optional[list[ChecklistRoom]] = None
    isDefault: Optional[bool] = None


class ChecklistTemplateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    rooms: list[ChecklistRoom]
    is_default: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class QuoteChecklistAttach(BaseModel):
    templateId: Optional[int] = None
    rooms: Optional[list[ChecklistRoom]] = None


class QuoteChecklistProgress(BaseModel):
    completedTasks: list[str]


class QuoteChecklistResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    quote_id: int
    template_id: Optional[int] = None
    rooms: list[ChecklistRoom]
    completed_tasks: list[str]
    updated_at: Optional[datetime] = None


class QuoteChecklistEnvelope(BaseModel):
    checklist: Optional[QuoteChecklistResponse] = None
