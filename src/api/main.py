"""
FastAPI application entry point.

Serves the rewrite form at ``/``, the plain-text rewrite proxy at
``/api/rewrite`` and the health probes under ``/health``.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from . import API_VERSION
from .routers import health, rewrite, ui
from src.models.manager import ModelManager

# Global application state
app_state = {}

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Loads the YAML config and prompt templates once at startup. A missing
    credential is not a startup failure; it surfaces per request.
    """
    print("1. Starting Say It Better server...")

    model_manager = ModelManager()
    app_state["model_manager"] = model_manager

    print("2. ModelManager initialized successfully")
    print("3. API server ready to accept requests")

    yield  # Server runs here

    print("4. Shutting down Say It Better server...")
    app_state.clear()

def create_app() -> FastAPI:
    """Factory function to create and configure the FastAPI application."""

    app = FastAPI(
        title="Say It Better",
        description="Rewrite a message for a chosen tone, length, audience and goals",
        version=API_VERSION,
        lifespan=lifespan
    )

    # Configure CORS middleware for frontend communication
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173"],  # Common frontend ports
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(rewrite.router, prefix="/api", tags=["rewrite"])
    app.include_router(ui.router, tags=["ui"])

    return app

# Create the FastAPI app instance
app = create_app()
