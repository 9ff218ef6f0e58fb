# src/modules/demo_request/validator.py

import re
from enum import Enum
from typing import List, Optional

from src.common.utils.global_messages import GlobalMessages
from src.modules.demo_request.schemas import SubmissionForm

EMAIL_VALIDATION_REGEX = re.compile(r"([\w.\-]+)@([\w\-]+)((\.(\w){2,3})+)", re.ASCII)

REQUIRED_FIELDS = ("first_name", "last_name", "email", "company", "contact_number", "reason")


class ValidationErrorKind(str, Enum):
    MISSING_FIELDS = "missing_fields"
    INVALID_EMAIL = "invalid_email"


class FormValidationError(Exception):
    """A submission was rejected. `kind` tells callers why; the message is user-facing."""

    def __init__(self, kind: ValidationErrorKind, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.fields = fields or []


def missing_fields(form: SubmissionForm) -> List[str]:
    return [name for name in REQUIRED_FIELDS if not getattr(form, name)]


def has_required_parameters(form: SubmissionForm) -> bool:
    return not missing_fields(form)


def has_valid_email(form: SubmissionForm) -> bool:
    return EMAIL_VALIDATION_REGEX.fullmatch(form.email) is not None


def validate_form(form: SubmissionForm) -> None:
    """
    Accept or reject a submission as a whole.

    Required fields are checked first; the email format is only checked once
    every required field is present.

    Raises:
        FormValidationError: MISSING_FIELDS or INVALID_EMAIL.
    """
    if not has_required_parameters(form):
        raise FormValidationError(
            ValidationErrorKind.MISSING_FIELDS,
            GlobalMessages.MISSING_REQUIRED_PARAMETERS,
            fields=missing_fields(form),
        )

    if not has_valid_email(form):
        raise FormValidationError(
            ValidationErrorKind.INVALID_EMAIL,
            GlobalMessages.INVALID_EMAIL,
            fields=["email"],
        )
