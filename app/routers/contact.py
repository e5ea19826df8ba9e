"""
Contact form: forwards the submission to the site owner's inbox.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.models.schemas import ContactRequest, Envelope
from app.services.mailer import MailDeliveryError, SMTPMailer, get_mailer

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=Envelope)
async def send_contact_message(
    body: ContactRequest,
    mailer: SMTPMailer = Depends(get_mailer),
) -> Envelope:
    try:
        await mailer.send_contact(body)
    except MailDeliveryError as exc:
        logger.error("Contact mail from %s failed: %s", body.email, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send email",
        )

    return Envelope(message="Email sent successfully")
