"""
Portable Text API Routes.

Renders CMS Portable Text bodies to HTML for previews and SSR callers.
The endpoint never fails on content problems: malformed nodes are dropped
or suppressed and reported in ``errors``.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from folio.api.deps import PortableTextRulesAdapter, get_portable_text_rules
from folio.components.portable_text import (
    ExtractPlainTextInput,
    RenderPortableTextInput,
    run_extract_text,
    run_render,
)

router = APIRouter()


# --- Request/Response Models ---


class RenderRequest(BaseModel):
    """Request to render a Portable Text body."""

    body: list[Any] = Field(..., description="Portable Text nodes in document order")
    fallback_image_alt: str | None = Field(
        default=None, description="Alt text for images that have none"
    )


class RenderedBlockResponse(BaseModel):
    key: str | None
    type: str | None
    disposition: str


class ValidationErrorResponse(BaseModel):
    code: str
    message: str
    path: str | None = None


class RenderResponse(BaseModel):
    """Rendered HTML with per-node outcomes."""

    html: str
    plain_text: str
    blocks: list[RenderedBlockResponse]
    errors: list[ValidationErrorResponse]


# --- Endpoints ---


@router.post(
    "/render",
    response_model=RenderResponse,
    summary="Render Portable Text",
    description="Render a Portable Text body to sanitized HTML.",
)
def render_portable_text_body(
    request: RenderRequest,
    rules: PortableTextRulesAdapter | None = Depends(get_portable_text_rules),
) -> RenderResponse:
    """Render a Portable Text body."""
    result = run_render(
        RenderPortableTextInput(body=request.body, fallback_image_alt=request.fallback_image_alt),
        rules=rules,
    )
    text = run_extract_text(ExtractPlainTextInput(body=request.body), rules=rules)

    return RenderResponse(
        html=result.html,
        plain_text=text.text,
        blocks=[
            RenderedBlockResponse(
                key=block.key,
                type=block.type,
                disposition=block.disposition.value,
            )
            for block in result.blocks
        ],
        errors=[
            ValidationErrorResponse(code=e.code, message=e.message, path=e.path)
            for e in result.errors
        ],
    )
