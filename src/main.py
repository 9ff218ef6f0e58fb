# src/main.py

import logging
import sys

import jinja2
import uvicorn
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from src.common.config import ConfigurationError, Settings, load_settings
from src.common.error_handling import register_exception_handlers
from src.common.utils.email_service import load_email_template
from src.common.utils.global_messages import GlobalMessages
from src.modules.demo_request.mail_dispatcher import MailDispatcher
from src.modules.demo_request.schemas import HealthResponse
from src.router.routers import include_routers

logger = logging.getLogger(__name__)

def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

def create_app(settings: Settings, email_template: jinja2.Template) -> FastAPI:
    """
    Build the API around an already loaded configuration and template.

    Handlers reach both through `app.state`; the mail dispatcher lives for the
    lifetime of the app.
    """
    # Lifespan context manager for startup and shutdown events
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        dispatcher = MailDispatcher(settings)
        dispatcher.start()
        app.state.mail_dispatcher = dispatcher
        yield
        await dispatcher.stop(timeout=settings.SMTP_TIMEOUT)

    app = FastAPI(
        title="Demo Request API",
        description="Receives demo request forms and forwards them by email.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.email_template = email_template

    register_exception_handlers(app)

    # Browsers post the form cross-origin from the marketing site
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    include_routers(app)

    # Health check endpoint
    @app.get("/health", tags=["Health"], response_model=HealthResponse)
    async def health_check(request: Request):
        dispatcher = request.app.state.mail_dispatcher
        return HealthResponse(message=GlobalMessages.API_RUNNING, queued_emails=dispatcher.pending)

    return app

def build_app() -> FastAPI:
    """Factory for `uvicorn --factory src.main:build_app`."""
    settings = load_settings()
    configure_logging(settings.LOG_LEVEL)
    return create_app(settings, load_email_template(settings.EMAIL_TEMPLATE_PATH))

def main() -> int:
    configure_logging("info")
    try:
        settings = load_settings()
        email_template = load_email_template(settings.EMAIL_TEMPLATE_PATH)
    except ConfigurationError as e:
        logger.error("%s", e)
        return 1

    logging.getLogger().setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    app = create_app(settings, email_template)

    logger.info("starting server at %s:%d", settings.SERVER_HOST, settings.SERVER_PORT)
    uvicorn.run(app, host=settings.SERVER_HOST, port=settings.SERVER_PORT, log_level=settings.LOG_LEVEL.lower())
    return 0

if __name__ == "__main__":
    sys.exit(main())
