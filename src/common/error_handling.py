# src/common/error_handling.py

import logging

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse

from src.modules.demo_request.dependencies import cors_headers
from src.modules.demo_request.validator import FormValidationError

logger = logging.getLogger(__name__)

def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(FormValidationError)
    async def form_validation_exception_handler(request: Request, exc: FormValidationError):
        logger.info("Invalid form: %s (%s)", exc.message, ", ".join(exc.fields))
        return HTMLResponse(exc.message, status_code=400, headers=cors_headers(request))
