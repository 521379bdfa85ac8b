"""Identifier and text routes: ISBN checks, normalization, kana groups."""

from __future__ import annotations

import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ehonlend.core.config import get_settings
from ehonlend.core.isbn import IsbnVariant, isbn10_to_isbn13, normalize_isbn, parse_isbn
from ehonlend.core.kana import classify, to_hiragana
from ehonlend.core.metrics import record_isbn_validation, record_kana_classification
from ehonlend.core.text import NormalizationMode, SymbolPolicy, normalize
from ehonlend.core.tracing import get_trace_id

router = APIRouter(prefix="/api")
logger = structlog.get_logger("ehonlend.routes.text")


class NormalizeRequest(BaseModel):
    """Text normalization request."""

    text: str = Field(description="Raw text to normalize")
    mode: NormalizationMode = Field(
        default=NormalizationMode.GENERIC,
        description="Normalization mode (generic, title, author)",
    )
    symbols: SymbolPolicy | None = Field(
        default=None,
        description="Symbol policy; the mode's default when omitted",
    )


class ClassifyRequest(BaseModel):
    """Kana classification request."""

    text: str = Field(description="Title (or any text) to classify")
    symbols: SymbolPolicy | None = Field(
        default=None,
        description="Symbol policy applied before classification; settings default when omitted",
    )


@router.get("/isbn/{raw}")
async def check_isbn(raw: str) -> JSONResponse:
    """Validate an ISBN and report its normalized form and variant."""
    trace_id = get_trace_id()
    parsed = parse_isbn(raw)

    isbn13: str | None = None
    if parsed is not None:
        isbn13 = (
            parsed.value if parsed.variant is IsbnVariant.ISBN_13 else isbn10_to_isbn13(parsed.value)
        )

    result = parsed.variant.value.replace("_", "").lower() if parsed else "invalid"
    record_isbn_validation(result)
    logger.debug("ISBN checked", raw=raw, result=result, trace_id=trace_id)

    return JSONResponse(
        {
            "input": raw,
            "normalized": normalize_isbn(raw),
            "valid": parsed is not None,
            "variant": parsed.variant.value if parsed else None,
            "isbn13": isbn13,
            "trace_id": trace_id,
        }
    )


@router.post("/text/normalize")
async def normalize_text(request: NormalizeRequest) -> JSONResponse:
    """Normalize a string in the requested mode."""
    trace_id = get_trace_id()
    normalized = normalize(request.text, request.mode, request.symbols)
    logger.debug("Text normalized", mode=request.mode.value, trace_id=trace_id)

    return JSONResponse(
        {
            "text": request.text,
            "mode": request.mode.value,
            "normalized": normalized,
            "trace_id": trace_id,
        }
    )


@router.post("/kana/classify")
async def classify_text(request: ClassifyRequest) -> JSONResponse:
    """Classify a title into its kana row."""
    trace_id = get_trace_id()
    symbols = request.symbols or get_settings().kana_symbol_policy
    group = classify(request.text, symbols)
    record_kana_classification(group)
    logger.debug("Text classified", group=group.name, symbols=symbols.value, trace_id=trace_id)

    return JSONResponse(
        {
            "text": request.text,
            "reading": to_hiragana(request.text),
            "group": group.name.lower(),
            "label": group.display_name,
            "sort_order": group.sort_order,
            "trace_id": trace_id,
        }
    )
