"""
Resend Mailer - delivers contact form submissions to the site admin.

Calls the Resend REST API directly:
    POST {email_api_base_url}/emails
    Authorization: Bearer <email_api_key>

Without an API key the mailer is "not configured": submissions are logged
only and send_contact() returns None.
"""
from html import escape
from typing import Optional

import httpx
import structlog

from jobportal.core.config import Settings
from jobportal.core.exceptions import UpstreamServiceError
from jobportal.schemas.schemas import ContactRequest
from jobportal.utils.http_utils import json_or_empty

logger = structlog.get_logger(__name__)

SERVICE = "resend"

CONTACT_TEMPLATE = """
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #667eea;">New Contact Form Submission</h2>
  <div style="background: #f5f5f5; padding: 20px; border-radius: 8px; margin: 20px 0;">
    <p><strong>From:</strong> {name}</p>
    <p><strong>Email:</strong> {email}</p>
    <p><strong>Subject:</strong> {subject}</p>
  </div>
  <div style="background: white; padding: 20px; border-radius: 8px; border: 1px solid #e0e0e0;">
    <h3 style="color: #333; margin-top: 0;">Message:</h3>
    <p style="color: #666; line-height: 1.6; white-space: pre-wrap;">{message}</p>
  </div>
  <div style="margin-top: 20px; padding: 15px; background: #f0f7ff; border-radius: 8px; border-left: 4px solid #667eea;">
    <p style="margin: 0; color: #666; font-size: 14px;">
      <strong>Reply to:</strong> <a href="mailto:{email}" style="color: #667eea;">{email}</a>
    </p>
  </div>
</div>
"""


def render_contact_html(contact: ContactRequest) -> str:
    """Fill the admin notification template; all user input is escaped."""
    return CONTACT_TEMPLATE.format(
        name=escape(contact.name),
        email=escape(contact.email),
        subject=escape(contact.subject),
        message=escape(contact.message),
    )


class ResendMailer:
    """
    Wrapper for the Resend send-email endpoint.
    """

    def __init__(self, http: httpx.AsyncClient, settings: Settings):
        self.http = http
        self.api_key = settings.email_api_key
        self.base_url = settings.email_api_base_url.rstrip("/")
        self.sender = settings.email_from
        self.recipient = settings.admin_email
        self.timeout = settings.email_timeout_seconds

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def send_contact(self, contact: ContactRequest) -> Optional[str]:
        """
        Email a contact submission to the admin.

        Returns:
            Resend message id, or None when the mailer is not configured

        Raises:
            UpstreamServiceError if Resend rejects the request or is unreachable
        """
        if not self.configured:
            logger.warning("Email API not configured, contact form submission logged only")
            return None

        payload = {
            "from": self.sender,
            "to": [self.recipient],
            "subject": f"Contact Form: {contact.subject}",
            "html": render_contact_html(contact),
            "reply_to": contact.email,
        }

        try:
            response = await self.http.post(
                f"{self.base_url}/emails",
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            logger.error("Email sending error", error=str(e))
            raise UpstreamServiceError(
                SERVICE, "Failed to send message. Please try again later.", detail=str(e)
            ) from e

        if response.is_error:
            detail = json_or_empty(response).get("message") or f"HTTP {response.status_code}"
            logger.error("Resend API error", status_code=response.status_code, error=detail)
            raise UpstreamServiceError(
                SERVICE, "Failed to send message. Please try again later.", detail=detail
            )

        message_id = json_or_empty(response).get("id")
        logger.info("Contact form email sent successfully", message_id=message_id)
        return message_id
