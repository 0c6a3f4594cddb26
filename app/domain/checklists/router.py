"""Checklist router - template CRUD and per-quote checklists"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ..quotes.schemas import MessageResponse
from .schemas import (
    ChecklistTemplateCreate,
    ChecklistTemplateResponse,
    ChecklistTemplateUpdate,
    QuoteChecklistAttach,
    QuoteChecklistEnvelope,
    QuoteChecklistProgress,
)
from .service import ChecklistService

router = APIRouter(tags=["Checklists"])


def get_checklist_service(db: Session = Depends(get_db)) -> ChecklistService:
    return ChecklistService(db)


# ============================================================================
# TEMPLATES
# ============================================================================


@router.get("/checklist-templates", response_model=list[ChecklistTemplateResponse])
async def get_checklist_templates(
    current_user: User = Depends(get_current_user),
    service: ChecklistService = Depends(get_checklist_service),
):
    return service.get_templates(current_user)


@router.post("/checklist-templates", response_model=ChecklistTemplateResponse, status_code=201)
async def create_checklist_template(
    data: ChecklistTemplateCreate,
    current_user: User = Depends(get_current_user),
    service: ChecklistService = Depends(get_checklist_service),
):
    return service.create_template(data, current_user)


@router.get("/checklist-templates/{template_id}", response_model=ChecklistTemplateResponse)
async def get_checklist_template(
    template_id: int,
    current_user: User = Depends(get_current_user),
    service: ChecklistService = Depends(get_checklist_service),
):
    return service.get_template(template_id, current_user)


@router.put("/checklist-templates/{template_id}", response_model=ChecklistTemplateResponse)
async def update_checklist_template(
    template_id: int,
    data: ChecklistTemplateUpdate,
    current_user: User = Depends(get_current_user),
    service: ChecklistService = Depends(get_checklist_service),
):
    return service.update_template(template_id, data, current_user)


@router.delete("/checklist-templates/{template_id}", response_model=MessageResponse)
async def delete_checklist_template(
    template_id: int,
    current_user: User = Depends(get_current_user),
    service: ChecklistService = Depends(get_checklist_service),
):
    return service.delete_template(template_id, current_user)


# ============================================================================
# QUOTE CHECKLIST
# ============================================================================


@router.get("/quotes/{quote_id}/checklist", response_model=QuoteChecklistEnvelope)
async def get_quote_checklist(
    quote_id: int,
    current_user: User = Depends(get_current_user),
    service: ChecklistService = Depends(get_checklist_service),
):
    return {"checklist": service.get_quote_checklist(quote_id, current_user)}


@router.post("/quotes/{quote_id}/checklist", response_model=QuoteChecklistEnvelope)
async def attach_quote_checklist(
    quote_id: int,
    data: QuoteChecklistAttach,
    current_user: User = Depends(get_current_user),
    service: ChecklistService = Depends(get_checklist_service),
):
    return {"checklist": service.attach_checklist(quote_id, data, current_user)}


@router.put("/quotes/{quote_id}/checklist", response_model=QuoteChecklistEnvelope)
async def update_quote_checklist(
    quote_id: int,
    data: QuoteChecklistProgress,
    current_user: User = Depends(get_current_user),
    service: ChecklistService = Depends(get_checklist_service),
):
    """Save which tasks are done"""
    return {"checklist": service.update_progress(quote_id, data, current_user)}


@router.delete("/quotes/{quote_id}/checklist", response_model=MessageResponse)
async def delete_quote_checklist(
    quote_id: int,
    current_user: User = Depends(get_current_user),
    service: ChecklistService = Depends(get_checklist_service),
):
    return service.remove_checklist(quote_id, current_user)


__all__ = ["router"]
