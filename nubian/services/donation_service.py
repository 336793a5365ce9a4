"""Paystack webhook verification and donation recording."""

import hashlib
import hmac
from typing import Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from nubian.exceptions import InvalidSignatureError, ValidationError
from nubian.repositories.donation_repository import DonationRepository
from nubian.repositories.user_repository import UserRepository
from nubian.schemas.donations import PaystackCharge, PaystackEvent
from nubian.utils.logger import get_logger

log = get_logger(__name__)

CHARGE_SUCCESS_EVENT = "charge.success"


def compute_paystack_signature(secret_key: str, body: bytes) -> str:
    """Hex HMAC-SHA512 of the raw request body."""
    return hmac.new(secret_key.encode(), body, hashlib.sha512).hexdigest()


def verify_paystack_signature(secret_key: str, body: bytes, signature: Optional[str]) -> bool:
    """Constant-time comparison against the ``x-paystack-signature`` header."""
    if not secret_key or not signature:
        return False
    return hmac.compare_digest(compute_paystack_signature(secret_key, body), signature)


class DonationService:
    """Records successful Paystack charges as donations."""

    def __init__(
        self,
        session: AsyncSession,
        donation_repository: DonationRepository,
        user_repository: UserRepository,
        secret_key: str,
    ):
        self.session = session
        self.donation_repository = donation_repository
        self.user_repository = user_repository
        self.secret_key = secret_key

    async def handle_paystack_webhook(self, body: bytes, signature: Optional[str]) -> bool:
        """
        Verify and ingest a Paystack webhook delivery.

        Args:
            body: Raw request body, exactly as received
            signature: Value of the ``x-paystack-signature`` header

        Returns:
            True if a new donation was recorded

        Raises:
            InvalidSignatureError: If the signature does not match
            ValidationError: If a charge event is malformed
        """
        if not verify_paystack_signature(self.secret_key, body, signature):
            log.warning("webhook signature mismatch", provider="paystack")
            raise InvalidSignatureError()

        try:
            event = PaystackEvent.model_validate_json(body)
        except PydanticValidationError as e:
            raise ValidationError(message="Malformed webhook payload") from e

        if event.event != CHARGE_SUCCESS_EVENT:
            log.info("webhook event ignored", provider="paystack", event_type=event.event)
            return False

        try:
            charge = PaystackCharge.model_validate(event.data)
        except PydanticValidationError as e:
            raise ValidationError(message="Malformed charge payload") from e

        if await self.donation_repository.exists_by_reference(charge.reference):
            log.info("donation already recorded", reference=charge.reference)
            return False

        donor = await self.user_repository.get_by_email(charge.customer.email)
        inserted = await self.donation_repository.record_paystack_donation(
            payment_reference=charge.reference,
            donor_email=charge.customer.email.strip(),
            amount=charge.amount,
            currency=charge.currency,
            paid_at=charge.paid_at,
            donor_id=donor.id if donor else None,
            payload=event.data,
        )
        await self.session.commit()

        log.info(
            "donation recorded",
            reference=charge.reference,
            amount=charge.amount,
            currency=charge.currency,
            linked_user=donor is not None,
            inserted=inserted,
        )
        return inserted
