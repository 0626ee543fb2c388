# src/coordkit/api/app.py
"""
FastAPI application wiring.

This file creates the `FastAPI` instance and applies CORS from settings.
Endpoints live in `coordkit.api.routes`; all geometry lives in `coordkit.geometry`.

Run locally with: `uvicorn coordkit.api.app:app --reload`
"""

from __future__ import annotations

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from coordkit import __version__
from coordkit.config.settings import get_settings
from coordkit.core.logging import configure_logging

from .routes import router

configure_logging()

app = FastAPI(title="coordkit API", version=__version__)

# CORS is off unless origins are configured (`api.cors_origins` in the settings YAML).
cors_origins = get_settings().api.cors_origins
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

app.include_router(router)
