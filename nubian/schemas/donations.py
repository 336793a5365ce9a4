"""Schemas for payment provider webhooks."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class PaystackCustomer(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: str


class PaystackCharge(BaseModel):
    """The ``data`` object of a Paystack charge event."""

    model_config = ConfigDict(extra="ignore")

    reference: str
    amount: int
    currency: str
    paid_at: datetime | None = None
    customer: PaystackCustomer


class PaystackEvent(BaseModel):
    """Paystack webhook envelope; ``data`` is only parsed for charge events."""

    model_config = ConfigDict(extra="ignore")

    event: str
    data: dict


class WebhookAck(BaseModel):
    message: str = "ack"
