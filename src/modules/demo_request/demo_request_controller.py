# src/modules/demo_request/demo_request_controller.py

import jinja2
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from src.common.utils.global_messages import GlobalMessages
from src.modules.demo_request import demo_request_service
from src.modules.demo_request.dependencies import (
    cors_headers,
    get_email_template,
    get_mail_dispatcher,
    get_submission_form,
)
from src.modules.demo_request.mail_dispatcher import MailDispatcher
from src.modules.demo_request.schemas import SubmissionForm
from src.modules.demo_request.validator import validate_form

router = APIRouter(tags=["demo request"])

@router.post("/email", response_class=HTMLResponse)
async def submit_demo_request(
    request: Request,
    form: SubmissionForm = Depends(get_submission_form),
    template: jinja2.Template = Depends(get_email_template),
    dispatcher: MailDispatcher = Depends(get_mail_dispatcher),
):
    """
    Accept a demo request and email it to the sales recipients.

    The email is sent by the mail dispatcher after the response is returned;
    the caller never sees the delivery outcome.

    Form fields (body, or query string as a fallback):
    - **firstname**, **lastname**, **email**, **company**, **number**, **reason**: required.
    - **position**: optional.
    """
    # FormValidationError is turned into a 400 by the registered exception handler
    validate_form(form)

    html_body = demo_request_service.render_demo_request(template, form)
    dispatcher.submit(html_body)
    return HTMLResponse(GlobalMessages.DEMO_REQUEST_SENT, headers=cors_headers(request))
