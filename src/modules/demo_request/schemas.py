# src/modules/demo_request/schemas.py

from pydantic import BaseModel


class SubmissionForm(BaseModel):
    """
    One demo-request submission. Every field is plain text and defaults to an
    empty string, so building a form from request data never fails.
    """
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    company: str = ""
    position: str = ""
    contact_number: str = ""
    reason: str = ""
    origin_ip: str = ""

    class Config:
        frozen = True


class HealthResponse(BaseModel):
    status: str = "ok"
    message: str
    queued_emails: int
