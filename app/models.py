import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Time,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

QUOTE_STATUSES = (
    "draft",
    "sent",
    "scheduled",
    "approved",
    "changes_requested",
    "completed",
    "cancelled",
)

USER_ROLES = ("owner", "admin")


def generate_share_token():
    """Generate an unguessable share token (uuid4: 122 random bits from the OS CSPRNG)"""
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)  # stored lower-cased
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)
    business_name = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    # owner (default) or admin; replaces a hard-coded admin email list
    role = Column(String(20), default="owner", nullable=False)

    # Stripe linkage; subscription_status is the only source of entitlement
    stripe_customer_id = Column(String(255), unique=True, index=True, nullable=True)
    subscription_id = Column(String(255), nullable=True)
    subscription_status = Column(
        String(50), default="free", nullable=False
    )  # free, active, past_due, canceled, or any Stripe status

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    quotes = relationship("Quote", back_populates="user", cascade="all, delete-orphan")
    clients = relationship("Client", back_populates="user", cascade="all, delete-orphan")
    team_members = relationship("TeamMember", back_populates="user", cascade="all, delete-orphan")
    checklist_templates = relationship(
        "ChecklistTemplate", back_populates="user", cascade="all, delete-orphan"
    )

    @property
    def display_business_name(self):
        return self.business_name or self.name or "Your cleaning company"


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="clients")


class TeamMember(Base):
    __tablename__ = "team_members"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    role = Column(String(50), default="cleaner")
    color = Column(String(7), default="#14b8a6")  # calendar colour, #RRGGBB
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="team_members")
    quotes = relationship("Quote", back_populates="assignee")


class ChecklistTemplate(Base):
    __tablename__ = "checklist_templates"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    rooms = Column(JSON, default=list, nullable=False)  # [{"name": "Kitchen", "tasks": [...]}]
    is_default = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="checklist_templates")


class Quote(Base):
    __tablename__ = "quotes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True)

    # Client contact
    client_name = Column(String(255), nullable=True)
    client_email = Column(String(255), nullable=True)
    client_phone = Column(String(50), nullable=True)

    # Property / service
    property_type = Column(String(50), nullable=True)  # residential, commercial
    property_address = Column(Text, nullable=True)
    service_type = Column(String(50), nullable=True)  # standard, deep, move-out
    bedrooms = Column(Integer, nullable=True)
    bathrooms = Column(Numeric(3, 1), nullable=True)
    square_feet = Column(Integer, nullable=True)
    services = Column(JSON, default=list, nullable=True)
    frequency = Column(String(50), nullable=True)

    # Pricing - fixed-point, persisted exactly as supplied
    base_price = Column(Numeric(10, 2), default=0, nullable=False)
    addons_price = Column(Numeric(10, 2), default=0, nullable=False)
    discount_percent = Column(Numeric(5, 2), default=0, nullable=False)
    discount_amount = Column(Numeric(10, 2), default=0, nullable=False)
    tax_rate = Column(Numeric(5, 2), default=0, nullable=False)
    tax_amount = Column(Numeric(10, 2), default=0, nullable=False)
    total_price = Column(Numeric(10, 2), default=0, nullable=False)

    notes = Column(Text, nullable=True)
    status = Column(String(30), default="draft", nullable=False, index=True)
    sent_at = Column(DateTime, nullable=True)

    # Scheduling
    scheduled_date = Column(Date, nullable=True, index=True)
    scheduled_time = Column(Time, nullable=True)
    recurring = Column(String(20), default="none", nullable=False)  # none, weekly, biweekly, monthly
    assigned_to = Column(
        Integer, ForeignKey("team_members.id", ondelete="SET NULL"), nullable=True
    )

    # Share link - share_token is the only credential for the public proposal page
    share_token = Column(
        String(36), unique=True, index=True, nullable=False, default=generate_share_token
    )
    share_expires_at = Column(DateTime, nullable=True)  # null = never expires
    client_approved = Column(Boolean, default=False, nullable=False)
    client_approved_at = Column(DateTime, nullable=True)
    change_request = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="quotes")
    assignee = relationship("TeamMember", back_populates="quotes")
    checklist = relationship(
        "QuoteChecklist",
        back_populates="quote",
        uselist=False,
        cascade="all, delete-orphan",
    )


class QuoteChecklist(Base):
    """Checklist instance attached to a quote (at most one per quote)"""

    __tablename__ = "quote_checklists"

    id = Column(Integer, primary_key=True, index=True)
    quote_id = Column(
        Integer, ForeignKey("quotes.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    template_id = Column(
        Integer, ForeignKey("checklist_templates.id", ondelete="SET NULL"), nullable=True
    )
    rooms = Column(JSON, default=list, nullable=False)  # snapshot of the template's rooms
    completed_tasks = Column(JSON, default=list, nullable=False)  # ["Kitchen:Wipe counters", ...]
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    quote = relationship("Quote", back_populates="checklist")
