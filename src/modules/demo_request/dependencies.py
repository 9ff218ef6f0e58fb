# src/modules/demo_request/dependencies.py

import ipaddress
import logging
from typing import Dict

import jinja2
from fastapi import Depends, Request
from starlette.datastructures import FormData
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.modules.demo_request.mail_dispatcher import MailDispatcher
from src.modules.demo_request.schemas import SubmissionForm

logger = logging.getLogger(__name__)

# form key -> SubmissionForm field
FORM_FIELDS = {
    "firstname": "first_name",
    "lastname": "last_name",
    "email": "email",
    "company": "company",
    "position": "position",
    "number": "contact_number",
    "reason": "reason",
}


def get_email_template(request: Request) -> jinja2.Template:
    return request.app.state.email_template


def get_mail_dispatcher(request: Request) -> MailDispatcher:
    return request.app.state.mail_dispatcher


def cors_headers(request: Request) -> Dict[str, str]:
    """Access-Control-Allow-Origin for a response, whether or not the request sent an Origin."""
    allowed_origins = request.app.state.settings.allowed_origins
    if "*" in allowed_origins:
        return {"Access-Control-Allow-Origin": "*"}
    origin = request.headers.get("Origin")
    if origin in allowed_origins:
        return {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
    return {}


def get_origin_ip(request: Request) -> str:
    """
    Describe where a submission came from as "<peer ip> [<X-Forwarded-For>]".

    The forwarded part is only set when the site is reached through a
    non-anonymous proxy. Returns an empty string when the peer is not an IP.
    """
    host = request.client.host if request.client else ""
    try:
        peer_ip = ipaddress.ip_address(host)
    except ValueError:
        return ""
    forwarded_for = request.headers.get("X-Forwarded-For", "")
    return f"{peer_ip} [{forwarded_for}]"


async def get_submission_form(request: Request, origin_ip: str = Depends(get_origin_ip)) -> SubmissionForm:
    """
    Build a SubmissionForm from the body fields, falling back to the query string.

    Extraction never fails: a missing field, a file part in place of a text
    field or an unparseable body all leave the field empty, and the validator
    reports the result as missing parameters.
    """
    try:
        body = await request.form()
    except StarletteHTTPException as e:
        logger.info("Unreadable form body: %s", e.detail)
        body = FormData()

    values = {}
    for key, field in FORM_FIELDS.items():
        value = body.get(key)
        if value is None:
            value = request.query_params.get(key, "")
        values[field] = value if isinstance(value, str) else ""

    return SubmissionForm(**values, origin_ip=origin_ip)
