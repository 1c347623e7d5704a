"""FastAPI application — Time Report API."""

from __future__ import annotations

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import router
from timesheet_report import __version__
from timesheet_report.logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(
        os.environ.get("TIMESHEET_LOG_LEVEL", "INFO"),
        json_output=os.environ.get("TIMESHEET_JSON_LOGS", "").lower() in ("1", "true", "yes"),
    )
    yield


app = FastAPI(
    title="Time Report API",
    description="Total hours worked per employee, ranked, from a time entries feed.",
    version=__version__,
    lifespan=lifespan,
)

# CORS: allow frontend origins
# Set ALLOWED_ORIGINS="*" to allow any origin
_origins_env = os.environ.get("ALLOWED_ORIGINS", "")
_origins_list = [o.strip() for o in _origins_env.split(",") if o.strip()]

_allow_all = "*" in _origins_list

if _allow_all:
    ALLOWED_ORIGINS: list[str] = ["*"]
elif _origins_list:
    ALLOWED_ORIGINS = _origins_list
else:
    ALLOWED_ORIGINS = [
        "http://localhost:8080",
        "http://localhost:8501",
        "http://127.0.0.1:8080",
    ]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=not _allow_all,  # credentials not allowed with wildcard
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=3600,
)

app.include_router(router)


@app.get("/")
async def root():
    return {
        "name": "Time Report API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/v1/health",
    }
