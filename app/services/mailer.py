"""
Contact-form mail delivery over SMTP.

smtplib is blocking, so sends run in a worker thread.
"""
from __future__ import annotations

import html
import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

from starlette.concurrency import run_in_threadpool

from app.config import Settings, settings as default_settings
from app.models.schemas import ContactRequest

logger = logging.getLogger(__name__)


class MailDeliveryError(RuntimeError):
    """Raised when the SMTP server rejects or cannot receive a message."""


def render_contact_html(form: ContactRequest) -> str:
    """HTML body for a contact-form submission (user input escaped)."""
    message_html = html.escape(form.message).replace("\n", "<br>")
    return (
        "<h2>New Contact Form Submission</h2>"
        f"<p><strong>Name:</strong> {html.escape(form.name)}</p>"
        f"<p><strong>Email:</strong> {html.escape(str(form.email))}</p>"
        f"<p><strong>Subject:</strong> {html.escape(form.subject)}</p>"
        f"<p><strong>Budget:</strong> {html.escape(form.budget or 'Not specified')}</p>"
        f"<p><strong>Timeline:</strong> {html.escape(form.timeline or 'Not specified')}</p>"
        "<br><h3>Message:</h3>"
        f"<p>{message_html}</p>"
    )


class SMTPMailer:
    """Sends contact-form messages to the site owner's inbox."""

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or default_settings

    def build_message(self, form: ContactRequest) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.config.SMTP_USER
        message["To"] = self.config.contact_recipient
        message["Reply-To"] = str(form.email)
        message["Subject"] = f"New Contact Form Submission: {form.subject}"
        message.set_content(
            f"{form.name} <{form.email}> wrote:\n\n{form.message}\n\n"
            f"Budget: {form.budget or 'Not specified'}\n"
            f"Timeline: {form.timeline or 'Not specified'}\n"
        )
        message.add_alternative(render_contact_html(form), subtype="html")
        return message

    def _send_blocking(self, message: EmailMessage) -> None:
        cfg = self.config
        if cfg.SMTP_SECURE:
            with smtplib.SMTP_SSL(cfg.SMTP_HOST, cfg.SMTP_PORT, timeout=cfg.SMTP_TIMEOUT) as smtp:
                if cfg.SMTP_USER:
                    smtp.login(cfg.SMTP_USER, cfg.SMTP_PASSWORD)
                smtp.send_message(message)
        else:
            with smtplib.SMTP(cfg.SMTP_HOST, cfg.SMTP_PORT, timeout=cfg.SMTP_TIMEOUT) as smtp:
                smtp.starttls()
                if cfg.SMTP_USER:
                    smtp.login(cfg.SMTP_USER, cfg.SMTP_PASSWORD)
                smtp.send_message(message)

    async def send_contact(self, form: ContactRequest) -> None:
        if not self.config.contact_recipient:
            raise MailDeliveryError("No CONTACT_EMAIL or SMTP_USER configured")

        message = self.build_message(form)
        try:
            await run_in_threadpool(self._send_blocking, message)
        except (smtplib.SMTPException, OSError) as exc:
            raise MailDeliveryError(str(exc)) from exc

        logger.info("Contact message from %s sent to %s", form.email, self.config.contact_recipient)


def get_mailer() -> SMTPMailer:
    """FastAPI dependency; override in tests."""
    return SMTPMailer()
