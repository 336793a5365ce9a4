"""Repository for donation records."""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import exists, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from nubian.models.donation import PaystackDonation
from nubian.utils.logger import get_logger

log = get_logger(__name__)


class DonationRepository:
    """Repository for Paystack donation records."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists_by_reference(self, payment_reference: str) -> bool:
        result = await self.session.execute(
            select(exists().where(PaystackDonation.payment_reference == payment_reference))
        )
        return bool(result.scalar_one())

    async def record_paystack_donation(
        self,
        payment_reference: str,
        donor_email: str,
        amount: int,
        currency: str,
        paid_at: Optional[datetime],
        donor_id: Optional[str] = None,
        payload: Optional[dict[str, Any]] = None,
    ) -> bool:
        """
        Insert a donation unless one with the same reference exists.

        Caller is responsible for committing the transaction.

        Returns:
            True if a new row was inserted
        """
        result = await self.session.execute(
            pg_insert(PaystackDonation)
            .values(
                payment_reference=payment_reference,
                donor_id=donor_id,
                donor_email=donor_email,
                amount=amount,
                currency=currency,
                paid_at=paid_at,
                payload=payload,
            )
            .on_conflict_do_nothing(index_elements=[PaystackDonation.payment_reference])
            .returning(PaystackDonation.id)
        )
        inserted = result.scalar_one_or_none() is not None
        log.debug("donation recorded", reference=payment_reference, inserted=inserted)
        return inserted
