"""Quote router - FastAPI endpoints for quote operations"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import (
    MessageResponse,
    QuoteCreate,
    QuoteCreateResponse,
    QuoteEnvelope,
    QuoteListResponse,
    QuoteUpdate,
    SendQuoteResponse,
)
from .service import QuoteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quotes", tags=["Quotes"])


def get_quote_service(db: Session = Depends(get_db)) -> QuoteService:
    """Dependency injection for QuoteService"""
    return QuoteService(db)


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("", response_model=QuoteListResponse)
async def get_quotes(
    current_user: User = Depends(get_current_user),
    service: QuoteService = Depends(get_quote_service),
):
    """Get all quotes for the current user"""
    return {"quotes": service.get_quotes(current_user)}


@router.post("", response_model=QuoteCreateResponse, status_code=201)
async def create_quote(
    data: QuoteCreate,
    current_user: User = Depends(get_current_user),
    service: QuoteService = Depends(get_quote_service),
):
    """Create a quote (free plan: 3 quotes in total)"""
    return service.create_quote(data, current_user)


@router.get("/{quote_id}", response_model=QuoteEnvelope)
async def get_quote(
    quote_id: int,
    current_user: User = Depends(get_current_user),
    service: QuoteService = Depends(get_quote_service),
):
    return {"quote": service.get_quote(quote_id, current_user)}


@router.put("/{quote_id}", response_model=QuoteEnvelope)
async def update_quote(
    quote_id: int,
    data: QuoteUpdate,
    current_user: User = Depends(get_current_user),
    service: QuoteService = Depends(get_quote_service),
):
    """Update a quote; omitted fields keep their current values"""
    return {"quote": service.update_quote(quote_id, data, current_user)}


@router.delete("/{quote_id}", response_model=MessageResponse)
async def delete_quote(
    quote_id: int,
    current_user: User = Depends(get_current_user),
    service: QuoteService = Depends(get_quote_service),
):
    return service.delete_quote(quote_id, current_user)


# ============================================================================
# SEND TO CLIENT
# ============================================================================


@router.post("/{quote_id}/send", response_model=SendQuoteResponse)
async def send_quote(
    quote_id: int,
    current_user: User = Depends(get_current_user),
    service: QuoteService = Depends(get_quote_service),
):
    """Email the quote to the client and mark it sent"""
    return await service.send_quote(quote_id, current_user)


__all__ = ["router"]
