"""Checklist service - templates and the checklist attached to a quote"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...models import ChecklistTemplate, Quote, QuoteChecklist, User
from ...shared.errors import InvalidInput, NotFound
from ..quotes.repository import QuoteRepository
from .schemas import (
    ChecklistTemplateCreate,
    ChecklistTemplateUpdate,
    QuoteChecklistAttach,
    QuoteChecklistProgress,
)

logger = logging.getLogger(__name__)


class ChecklistService:
    def __init__(self, db: Session):
        self.db = db

    # ========================================================================
    # TEMPLATES
    # ========================================================================

    def _clear_default(self, user: User) -> None:
        self.db.query(ChecklistTemplate).filter(
            ChecklistTemplate.user_id == user.id, ChecklistTemplate.is_default.is_(True)
        ).update({ChecklistTemplate.is_default: False}, synchronize_session=False)

    def get_templates(self, user: User) -> list[ChecklistTemplate]:
        return (
            self.db.query(ChecklistTemplate)
            .filter(ChecklistTemplate.user_id == user.id)
            .order_by(ChecklistTemplate.is_default.desc(), ChecklistTemplate.name)
            .all()
        )

    def get_template(self, template_id: int, user: User) -> ChecklistTemplate:
        template = (
            self.db.query(ChecklistTemplate)
            .filter(ChecklistTemplate.id == template_id, ChecklistTemplate.user_id == user.id)
            .first()
        )
        if not template:
            raise NotFound("Checklist template not found")
        return template

    def create_template(self, data: ChecklistTemplateCreate, user: User) -> ChecklistTemplate:
        # One default template per user
        if data.isDefault:
            self._clear_default(user)
        template = ChecklistTemplate(
            user_id=user.id,
            name=data.name,
            rooms=[room.model_dump() for room in data.rooms],
            is_default=data.isDefault,
        )
        self.db.add(template)
        self.db.commit()
        self.db.refresh(template)
        return template

    def update_template(
        self, template_id: int, data: ChecklistTemplateUpdate, user: User
    ) -> ChecklistTemplate:
        template = self.get_template(template_id, user)
        if data.name is not None:
            if not data.name.strip():
                raise InvalidInput("Name is required")
            template.name = data.name.strip()
        if data.rooms is not None:
            template.rooms = [room.model_dump() for room in data.rooms]
        if data.isDefault is not None:
            if data.isDefault:
                self._clear_default(user)
            template.is_default = data.isDefault
        self.db.commit()
        self.db.refresh(template)
        return template

    def delete_template(self, template_id: int, user: User) -> dict:
        """Delete a template; checklists already attached keep their room snapshot"""
        template = self.get_template(template_id, user)
        self.db.query(QuoteChecklist).filter(QuoteChecklist.template_id == template.id).update(
            {QuoteChecklist.template_id: None}, synchronize_session=False
        )
        self.db.delete(template)
        self.db.commit()
        return {"message": "Checklist template deleted"}

    # ========================================================================
    # QUOTE CHECKLIST
    # ========================================================================

    def _get_quote(self, quote_id: int, user: User) -> Quote:
        quote = QuoteRepository.get_quote_by_id(self.db, quote_id, user.id)
        if not quote:
            raise NotFound("Quote not found")
        return quote

    def get_quote_checklist(self, quote_id: int, user: User) -> Optional[QuoteChecklist]:
        return self._get_quote(quote_id, user).checklist

    def attach_checklist(self, quote_id: int, data: QuoteChecklistAttach, user: User) -> QuoteChecklist:
        """
        Attach (or replace) the quote's checklist.

        Rooms are copied from the template, or taken from the request when no
        template is given. Progress always starts over.
        """
        quote = self._get_quote(quote_id, user)
        if data.templateId is not None:
            rooms = list(self.get_template(data.templateId, user).rooms or [])
        elif data.rooms is not None:
            rooms = [room.model_dump() for room in data.rooms]
        else:
            raise InvalidInput("templateId or rooms is required")

        checklist = quote.checklist
        if checklist is None:
            checklist = QuoteChecklist(quote_id=quote.id)
            self.db.add(checklist)
        checklist.template_id = data.templateId
        checklist.rooms = rooms
        checklist.completed_tasks = []

        self.db.commit()
        self.db.refresh(checklist)
        logger.info(f"📋 Checklist attached to quote {quote_id}")
        return checklist

    def update_progress(
        self, quote_id: int, data: QuoteChecklistProgress, user: User
    ) -> QuoteChecklist:
        checklist = self.get_quote_checklist(quote_id, user)
        if checklist is None:
            raise NotFound("Checklist not found")
        # Keep order, drop duplicates
        checklist.completed_tasks = list(dict.fromkeys(data.completedTasks))
        self.db.commit()
        self.db.refresh(checklist)
        return checklist

    def remove_checklist(self, quote_id: int, user: User) -> dict:
        checklist = self.get_quote_checklist(quote_id, user)
        if checklist is None:
            raise NotFound("Checklist not found")
        self.db.delete(checklist)
        self.db.commit()
        return {"message": "Checklist removed"}
