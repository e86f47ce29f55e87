"""
Contact Routes

POST /contact - Submit the contact form (emailed to the site admin)
"""

import json
import re
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
import structlog

from jobportal.api.deps import get_mailer
from jobportal.core.exceptions import ValidationError
from jobportal.services.mailer import ResendMailer
from jobportal.schemas.schemas import ContactRequest, MessageResponse, error_responses

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/contact", tags=["Contact"], responses=error_responses(400, 500))

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
REQUIRED_FIELDS = ("name", "email", "subject", "message")


def validate_contact(contact: ContactRequest) -> ContactRequest:
    """Reject missing/blank fields and malformed emails before any email is sent."""
    if any(not (getattr(contact, f) or "").strip() for f in REQUIRED_FIELDS):
        raise ValidationError("Please provide all required fields")

    if not EMAIL_RE.match(contact.email.strip()):
        raise ValidationError("Please provide a valid email address")

    return contact


async def read_contact(request: Request) -> ContactRequest:
    """
    Read the submission from a JSON or form-encoded body.

    An empty body, a non-object payload or a non-string field counts as
    missing, so it is rejected by validate_contact() with a 400.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        try:
            data = dict(form.items())
        finally:
            await form.close()
    else:
        raw = await request.body()
        try:
            data = json.loads(raw) if raw.strip() else {}
        except ValueError:
            raise ValidationError("Request body must be valid JSON")

    if not isinstance(data, dict):
        data = {}
    return ContactRequest(**{
        field: data[field] for field in REQUIRED_FIELDS if isinstance(data.get(field), str)
    })


@router.post(
    "",
    response_model=MessageResponse,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": ContactRequest.model_json_schema()},
                "application/x-www-form-urlencoded": {"schema": ContactRequest.model_json_schema()},
            },
        }
    },
)
async def send_contact_message(
    contact: ContactRequest = Depends(read_contact),
    mailer: ResendMailer = Depends(get_mailer),
):
    """
    Handle a contact form submission.

    The submission is always logged. When the mail provider is configured
    a failed send is reported as an error (500); without a provider the
    log entry is the only record and the user still gets a success.
    """
    validate_contact(contact)

    logger.info(
        "Contact form submission received",
        name=contact.name,
        email=contact.email,
        subject=contact.subject,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )

    await mailer.send_contact(contact)

    return MessageResponse(message="Thank you for contacting us! We will get back to you soon.")
