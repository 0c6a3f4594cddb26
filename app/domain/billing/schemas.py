"""Billing domain schemas"""

from typing import Literal, Union

from pydantic import BaseModel


class SubscriptionStatusResponse(BaseModel):
    status: str
    isActive: bool
    quoteCount: int
    quotesRemaining: Union[int, str]
    canCreateQuote: bool


class CheckoutRequest(BaseModel):
    plan: Literal["monthly", "yearly"] = "monthly"


class CheckoutResponse(BaseModel):
    sessionId: str
    url: str


class PortalResponse(BaseModel):
    url: str


class WebhookAck(BaseModel):
    received: bool
