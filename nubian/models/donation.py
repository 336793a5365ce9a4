"""Donation records ingested from payment provider webhooks."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, ForeignKey, Integer, String, Text, TIMESTAMP, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from nubian.database import Base


class PaystackDonation(Base):
    """Successful Paystack charge recorded as a donation."""

    __tablename__ = "paystack_donations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Paystack transaction reference, one row per payment
    payment_reference: Mapped[str] = mapped_column(Text, unique=True, index=True)

    donor_id: Mapped[str | None] = mapped_column(
        Text, ForeignKey("users.id", ondelete="SET NULL"), index=True
    )
    donor_email: Mapped[str] = mapped_column(String(255))

    # Amount in the currency's minor unit (kobo for NGN)
    amount: Mapped[int] = mapped_column(BigInteger)
    currency: Mapped[str] = mapped_column(String(10))
    paid_at: Mapped[datetime | None] = mapped_column(TIMESTAMP(timezone=True))

    payload: Mapped[dict | None] = mapped_column(JSONB)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now()
    )

    def __repr__(self):
        return f"<PaystackDonation(reference='{self.payment_reference}', amount={self.amount})>"
