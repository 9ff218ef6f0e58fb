import os
from email.message import EmailMessage
from typing import Any, Dict, List

import aiosmtplib
import jinja2

from src.common.config import ConfigurationError, Settings


def load_email_template(path: str) -> jinja2.Template:
    """
    Load and compile an HTML email template once, at startup.

    Placeholders left undefined at render time raise instead of rendering blank.
    Autoescaping is off: the mail goes to trusted operators and field values are
    inserted as submitted.

    Raises:
        ConfigurationError: if the file is missing or is not a valid template.
    """
    template_dir, template_name = os.path.split(os.path.abspath(path))
    template_env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(searchpath=template_dir),
        autoescape=False,
        undefined=jinja2.StrictUndefined,
    )
    try:
        return template_env.get_template(template_name)
    except jinja2.TemplateNotFound as e:
        raise ConfigurationError(f"Email template not found: {path}") from e
    except jinja2.TemplateSyntaxError as e:
        raise ConfigurationError(f"Invalid email template {path}: {e}") from e


def render_template(template: jinja2.Template, context: Dict[str, Any]) -> str:
    return template.render(**context)


def build_message(sender: str, recipients: List[str], subject: str, html_body: str) -> EmailMessage:
    """
    Build an HTML-only MIME message.

    The stdlib email policy refuses CR or LF in header values, so a header can
    never be split by its contents.
    """
    message = EmailMessage()
    message["From"] = sender
    message["To"] = ", ".join(recipients)
    message["Subject"] = subject
    message.set_content(html_body, subtype="html", charset="utf-8")
    return message


async def send_email(message: EmailMessage, settings: Settings) -> None:
    """
    Submit a message to the configured relay in a single SMTP transaction.

    Args:
        message (EmailMessage): The fully built message.
        settings (Settings): Relay host, port, credentials and timeout.
    """
    await aiosmtplib.send(
        message,
        hostname=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        username=settings.GOOGLE_EMAIL,
        password=settings.GOOGLE_PASS,
        use_tls=settings.SMTP_USE_TLS,
        start_tls=not settings.SMTP_USE_TLS,
        timeout=settings.SMTP_TIMEOUT,
    )
