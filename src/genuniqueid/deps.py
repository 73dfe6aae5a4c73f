"""FastAPI dependencies for genuniqueid routes."""

from __future__ import annotations

from fastapi import Request

from genuniqueid.filter import UniqueIdFilter


def get_filter(request: Request) -> UniqueIdFilter:
    """Get the configured filter from app state."""
    return request.app.state.filter
