"""Book list routes - kana-sectioned browsing of a collection."""

from __future__ import annotations

import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ehonlend.core.catalog import BookRecord, BookSortType, section_books
from ehonlend.core.config import get_settings
from ehonlend.core.kana import KanaGroup
from ehonlend.core.text import SymbolPolicy
from ehonlend.core.tracing import bind_request_fields, get_trace_id

router = APIRouter(prefix="/api")
logger = structlog.get_logger("ehonlend.routes.books")


class BookModel(BaseModel):
    """A book in the collection."""

    title: str
    author: str | None = None
    management_number: str | None = None
    kana_group: KanaGroup | None = Field(
        default=None,
        description='Pre-assigned kana row ("あ" ... "わ", "他"); derived from the title when omitted',
    )

    def to_record(self) -> BookRecord:
        return BookRecord(
            title=self.title,
            author=self.author,
            management_number=self.management_number,
            kana_group=self.kana_group,
        )


class SectionsRequest(BaseModel):
    """Group, filter and sort a list of books."""

    books: list[BookModel] = Field(default_factory=list)
    search_text: str = Field(default="", description="Case-insensitive title/author filter")
    kana_filter: KanaGroup | None = Field(default=None, description="Only return this kana row")
    sort_type: BookSortType = Field(default=BookSortType.TITLE)
    symbols: SymbolPolicy | None = Field(
        default=None,
        description="Symbol policy for title classification; settings default when omitted",
    )


@router.post("/books/sections")
async def book_sections(request: SectionsRequest) -> JSONResponse:
    """Return books grouped into kana sections."""
    trace_id = get_trace_id()
    symbols = request.symbols or get_settings().kana_symbol_policy
    bind_request_fields(
        sort_type=request.sort_type.value,
        kana_filter=request.kana_filter.name.lower() if request.kana_filter else None,
    )

    sections = section_books(
        (book.to_record() for book in request.books),
        search_text=request.search_text,
        kana_filter=request.kana_filter,
        sort_type=request.sort_type,
        symbols=symbols,
    )
    logger.debug(
        "Books sectioned",
        book_count=len(request.books),
        section_count=len(sections),
        trace_id=trace_id,
    )

    return JSONResponse(
        {
            "sections": [
                {
                    "group": section.kana_group.name.lower(),
                    "title": section.display_title,
                    "books": [
                        {
                            "title": book.title,
                            "author": book.author,
                            "management_number": book.management_number,
                        }
                        for book in section.books
                    ],
                }
                for section in sections
            ],
            "trace_id": trace_id,
        }
    )
