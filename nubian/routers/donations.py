"""Payment provider webhooks."""

from typing import Annotated, Optional

from fastapi import APIRouter, Header, Request

from nubian.schemas.donations import WebhookAck
from nubian.dependencies import DonationServiceDep

router = APIRouter()


@router.post("/donate/paystack", response_model=WebhookAck)
async def paystack_webhook(
    request: Request,
    donation_service: DonationServiceDep,
    x_paystack_signature: Annotated[Optional[str], Header()] = None,
) -> WebhookAck:
    """
    Ingest a Paystack webhook.

    The signature covers the raw body, so the body is read unparsed.
    Every verified delivery is acknowledged, recorded or not.
    """
    body = await request.body()
    await donation_service.handle_paystack_webhook(body, x_paystack_signature)
    return WebhookAck()
