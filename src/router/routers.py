# src/router/routers.py

from fastapi import FastAPI
from src.modules.demo_request.demo_request_controller import router as demo_request_router

def include_routers(app: FastAPI) -> None:
    app.include_router(demo_request_router)
