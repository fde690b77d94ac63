"""FastAPI application entry point."""

from fastapi import FastAPI

from app import __version__
from app.api import health, revisions
from app.logging_config import setup_logging

setup_logging()

app = FastAPI(
    title="Revision Diff Service",
    description="Formatted field-level diffs of entity revisions",
    version=__version__,
)

app.include_router(health.router, tags=["health"])
app.include_router(revisions.router, prefix="/revisions", tags=["revisions"])
