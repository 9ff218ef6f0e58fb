import logging

import aiosmtplib
import jinja2

from src.common.config import Settings
from src.common.utils.email_service import build_message, render_template, send_email
from src.modules.demo_request.schemas import SubmissionForm

logger = logging.getLogger(__name__)


def render_demo_request(template: jinja2.Template, form: SubmissionForm) -> str:
    """
    Fill the demo request template with the submitted fields.

    Args:
        template (jinja2.Template): The layout loaded at startup.
        form (SubmissionForm): A validated submission.

    Returns:
        str: The HTML body of the notification email.
    """
    return render_template(template, form.model_dump())


async def send_demo_request(settings: Settings, html_body: str) -> bool:
    """
    Send a rendered demo request to every configured recipient, once.

    Delivery failures are logged and swallowed; nothing is retried.

    Returns:
        bool: True if the relay accepted the message.
    """
    recipients = settings.to_emails
    message = build_message(settings.GOOGLE_EMAIL, recipients, settings.EMAIL_SUBJECT, html_body)
    try:
        await send_email(message, settings)
    except (aiosmtplib.SMTPException, OSError) as e:
        logger.error("smtp error sending demo request to %s: %s", recipients, e)
        return False

    logger.info("Demo request sent to %s", recipients)
    return True
