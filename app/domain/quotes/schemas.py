"""Quote domain schemas - Pydantic models for validation and the quote projections"""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ...models import QUOTE_STATUSES
from ...shared.validators import validate_email

# Request field name -> Quote column
QUOTE_FIELD_MAP = {
    "clientId": "client_id",
    "clientName": "client_name",
    "clientEmail": "client_email",
    "clientPhone": "client_phone",
    "propertyType": "property_type",
    "propertyAddress": "property_address",
    "serviceType": "service_type",
    "bedrooms": "bedrooms",
    "bathrooms": "bathrooms",
    "squareFeet": "square_feet",
    "services": "services",
    "frequency": "frequency",
    "basePrice": "base_price",
    "addonsPrice": "addons_price",
    "discountPercent": "discount_percent",
    "discountAmount": "discount_amount",
    "taxRate": "tax_rate",
    "taxAmount": "tax_amount",
    "totalPrice": "total_price",
    "notes": "notes",
    "status": "status",
}


def validate_quote_status(value: Optional[str]) -> Optional[str]:
    if value is not None and value not in QUOTE_STATUSES:
        raise ValueError(f"Invalid status. Must be one of: {', '.join(QUOTE_STATUSES)}")
    return value


class QuoteBase(BaseModel):
    clientId: Optional[int] = None
    clientName: Optional[str] = Field(default=None, max_length=255)
    clientEmail: Optional[str] = None
    clientPhone: Optional[str] = Field(default=None, max_length=50)
    propertyType: Optional[str] = Field(default=None, max_length=50)
    propertyAddress: Optional[str] = None
    serviceType: Optional[str] = Field(default=None, max_length=50)
    bedrooms: Optional[int] = Field(default=None, ge=0)
    bathrooms: Optional[Decimal] = Field(default=None, ge=0, max_digits=3, decimal_places=1)
    squareFeet: Optional[int] = Field(default=None, ge=0)
    services: Optional[list] = None
    frequency: Optional[str] = Field(default=None, max_length=50)
    basePrice: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    addonsPrice: Optional[Decimal] = Field(
        default=None,
        ge=0,
        max_digits=10,
        decimal_places=2,
        validation_alias=AliasChoices("addonsPrice", "addonTotal"),
    )
    discountPercent: Optional[Decimal] = Field(default=None, ge=0, max_digits=5, decimal_places=2)
    discountAmount: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    taxRate: Optional[Decimal] = Field(default=None, ge=0, max_digits=5, decimal_places=2)
    taxAmount: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    totalPrice: Optional[Decimal] = Field(
        default=None,
        ge=0,
        max_digits=10,
        decimal_places=2,
        validation_alias=AliasChoices("totalPrice", "total"),
    )
    notes: Optional[str] = None
    status: Optional[str] = None

    @field_validator("clientEmail")
    @classmethod
    def check_client_email(cls, v):
        return validate_email(v) if v else None

    @field_validator("status")
    @classmethod
    def check_status(cls, v):
        return validate_quote_status(v)

    def to_columns(self) -> dict:
        """Supplied (non-null) fields keyed by Quote column name"""
        data = self.model_dump(exclude_none=True)
        return {QUOTE_FIELD_MAP[key]: value for key, value in data.items()}


class QuoteCreate(QuoteBase):
    """Schema for creating a quote; unspecified prices default to 0 and status to draft"""


class QuoteUpdate(QuoteBase):
    """Partial update; null or missing fields are left unchanged"""


class QuoteStatusUpdate(BaseModel):
    status: str

    @field_validator("status")
    @classmethod
    def check_status(cls, v):
        return validate_quote_status(v)


# ============================================================================
# PROJECTIONS
# The public view is a strict subset of the owner view: QuoteResponse extends
# PublicQuoteView, so a field exposed to link holders is never defined twice.
# ============================================================================


class PublicQuoteView(BaseModel):
    """What a share-link holder may see"""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    client_name: Optional[str] = None
    property_type: Optional[str] = None
    property_address: Optional[str] = None
    service_type: Optional[str] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[Decimal] = None
    square_feet: Optional[int] = None
    services: Optional[list] = None
    frequency: Optional[str] = None
    base_price: Decimal
    addons_price: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total_price: Decimal
    notes: Optional[str] = None
    status: str
    scheduled_date: Optional[date] = None
    scheduled_time: Optional[time] = None
    recurring: Optional[str] = None
    client_approved: bool
    client_approved_at: Optional[datetime] = None
    share_expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class QuoteResponse(PublicQuoteView):
    """Owner view of a quote"""

    client_id: Optional[int] = None
    client_email: Optional[str] = None
    client_phone: Optional[str] = None
    assigned_to: Optional[int] = None
    sent_at: Optional[datetime] = None
    share_token: str
    change_request: Optional[str] = None
    updated_at: Optional[datetime] = None


class QuoteCreateResponse(BaseModel):
    quote: QuoteResponse
    quoteCount: int
    quotesRemaining: Union[int, str]


class QuoteEnvelope(BaseModel):
    quote: QuoteResponse


class QuoteListResponse(BaseModel):
    quotes: list[QuoteResponse]


class SendQuoteResponse(BaseModel):
    success: bool
    message: str
    quote: QuoteResponse
    emailId: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
