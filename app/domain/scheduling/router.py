"""Scheduling router - calendar endpoints"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ..quotes.schemas import QuoteEnvelope, QuoteStatusUpdate
from ..quotes.service import QuoteService
from .schemas import ScheduleCreate, ScheduleListResponse
from .service import SchedulingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schedule", tags=["Scheduling"])


def get_scheduling_service(db: Session = Depends(get_db)) -> SchedulingService:
    """Dependency injection for SchedulingService"""
    return SchedulingService(db)


def get_quote_service(db: Session = Depends(get_db)) -> QuoteService:
    return QuoteService(db)


@router.get("", response_model=ScheduleListResponse)
async def get_schedule(
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Scheduled jobs in a date range"""
    return {"jobs": service.get_schedule(current_user, start, end)}


@router.post("/{quote_id}", response_model=QuoteEnvelope)
async def schedule_quote(
    quote_id: int,
    data: ScheduleCreate,
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return {"quote": service.schedule_quote(quote_id, data, current_user)}


@router.put("/{quote_id}/status", response_model=QuoteEnvelope)
async def update_job_status(
    quote_id: int,
    data: QuoteStatusUpdate,
    current_user: User = Depends(get_current_user),
    service: QuoteService = Depends(get_quote_service),
):
    """Set a job's status (e.g. completed, cancelled)"""
    return {"quote": service.update_status(quote_id, data.status, current_user)}


@router.delete("/{quote_id}", response_model=QuoteEnvelope)
async def unschedule_quote(
    quote_id: int,
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return {"quote": service.unschedule_quote(quote_id, current_user)}


__all__ = ["router"]
