from src.common.config import Settings
from src.modules.demo_request.schemas import SubmissionForm


def make_settings(**overrides) -> Settings:
    values = {
        "GOOGLE_EMAIL": "demo-bot@example.com",
        "GOOGLE_PASS": "app-password",
        "TO_EMAILS": "sales@example.com, founders@example.com",
        "SMTP_HOST": "smtp.example.com",
        "SMTP_PORT": 587,
        "SMTP_USE_TLS": False,
        "SMTP_TIMEOUT": 5,
        "ALLOWED_ORIGINS": "*",
        "DISPATCH_WORKERS": 2,
        "DISPATCH_QUEUE_SIZE": 10,
    }
    values.update(overrides)
    return Settings(**values)


def make_form(**overrides) -> SubmissionForm:
    values = {
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane@example.com",
        "company": "Acme",
        "position": "CTO",
        "contact_number": "555",
        "reason": "trial",
        "origin_ip": "10.0.0.1 []",
    }
    values.update(overrides)
    return SubmissionForm(**values)
