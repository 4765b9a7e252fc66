"""
Health endpoint.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request

from folio import __version__

router = APIRouter()


@router.get("/health", summary="Health check")
def health(request: Request) -> dict[str, Any]:
    """Basic liveness plus whether rules were loaded."""
    return {
        "status": "healthy",
        "version": __version__,
        "rules_loaded": getattr(request.app.state, "rules", None) is not None,
    }
