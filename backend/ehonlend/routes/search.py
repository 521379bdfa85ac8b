"""Search routes - score and rank catalog candidates against a query."""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ehonlend.core.catalog import (
    CandidateRecord,
    build_catalog_query,
    candidates_from_response,
    resolve_candidates,
)
from ehonlend.core.config import get_settings
from ehonlend.core.isbn import parse_isbn
from ehonlend.core.matching import SearchQuery, evaluate_candidate, get_scoring_config
from ehonlend.core.metrics import record_ranking
from ehonlend.core.tracing import bind_request_fields, get_trace_id

router = APIRouter(prefix="/api")
logger = structlog.get_logger("ehonlend.routes.search")


class QueryModel(BaseModel):
    """Title/author search query."""

    title: str = Field(default="", description="Title being searched for")
    author: str | None = Field(default=None, description="Author being searched for")

    def to_query(self) -> SearchQuery:
        return SearchQuery(title=self.title, author=self.author)


class CandidateModel(BaseModel):
    """A catalog candidate."""

    title: str
    author: str | None = None
    isbn13: str | None = None
    isbn10: str | None = None
    publisher: str | None = None
    published_date: str | None = None
    thumbnail: str | None = None
    small_thumbnail: str | None = None

    def to_record(self) -> CandidateRecord:
        return CandidateRecord(**self.model_dump())


class ScoreRequest(BaseModel):
    """Score one candidate against a query."""

    query: QueryModel
    candidate: CandidateModel


class RankRequest(BaseModel):
    """Rank candidates against a query.

    Candidates are given either directly or as a raw catalog response
    (Google Books ``volumes`` format); both lists are combined.
    """

    query: QueryModel
    candidates: list[CandidateModel] = Field(default_factory=list)
    catalog_response: dict[str, Any] | None = Field(
        default=None,
        description="Raw catalog search response to read candidates from",
    )
    isbn: str | None = Field(
        default=None,
        description="ISBN supplied by the user; exact identifier matches rank first",
    )
    limit: int | None = Field(default=None, ge=1, description="Return at most this many results")


def _candidate_payload(candidate: CandidateRecord) -> dict[str, Any]:
    return {
        "title": candidate.title,
        "author": candidate.author,
        "isbn13": candidate.isbn13,
        "isbn10": candidate.isbn10,
        "publisher": candidate.publisher,
        "published_date": candidate.published_date,
        "thumbnail": candidate.thumbnail,
        "small_thumbnail": candidate.small_thumbnail,
    }


@router.post("/search/score")
async def score_candidate(request: ScoreRequest) -> JSONResponse:
    """Score a single candidate and explain each criterion."""
    trace_id = get_trace_id()
    result = evaluate_candidate(
        request.query.to_query(),
        request.candidate.title,
        request.candidate.author,
        get_scoring_config(),
    )
    logger.debug("Candidate scored", score=result.score, trace_id=trace_id)

    return JSONResponse(
        {
            "score": result.score,
            "details": result.details,
            "trace_id": trace_id,
        }
    )


@router.post("/search/rank")
async def rank_candidates(request: RankRequest) -> JSONResponse:
    """Rank candidates by relevance, exact ISBN matches first."""
    trace_id = get_trace_id()
    settings = get_settings()

    candidates = [candidate.to_record() for candidate in request.candidates]
    if request.catalog_response is not None:
        candidates.extend(candidates_from_response(request.catalog_response))

    bind_request_fields(
        query_title=request.query.title,
        query_author=request.query.author,
        isbn=request.isbn,
        candidate_count=len(candidates),
    )

    if len(candidates) > settings.max_candidates:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Too many candidates: {len(candidates)} (maximum {settings.max_candidates})",
        )

    query = request.query.to_query()
    ranked = resolve_candidates(query, candidates, request.isbn, get_scoring_config())
    if request.limit is not None:
        ranked = ranked[: request.limit]

    isbn_resolved = parse_isbn(request.isbn) is not None
    record_ranking(len(candidates), isbn_resolved=isbn_resolved)
    logger.info(
        "Candidates ranked",
        returned=len(ranked),
        isbn_resolved=isbn_resolved,
        trace_id=trace_id,
    )

    return JSONResponse(
        {
            "catalog_query": build_catalog_query(query.title, query.author),
            "results": [
                {"score": scored.score, "candidate": _candidate_payload(scored.candidate)}
                for scored in ranked
            ],
            "trace_id": trace_id,
        }
    )
