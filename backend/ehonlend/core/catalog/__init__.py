"""Catalog-facing helpers: candidate records, identifier resolution, sections."""

from .candidates import (
    build_catalog_query,
    candidate_from_volume,
    candidates_from_response,
    select_best_isbn_match,
)
from .models import BookRecord, CandidateRecord
from .resolution import resolve_candidates
from .sections import (
    BookSection,
    BookSortType,
    build_sections,
    filter_sections,
    section_books,
    sort_sections,
)

__all__ = [
    "build_catalog_query",
    "candidate_from_volume",
    "candidates_from_response",
    "select_best_isbn_match",
    "BookRecord",
    "CandidateRecord",
    "resolve_candidates",
    "BookSection",
    "BookSortType",
    "build_sections",
    "filter_sections",
    "section_books",
    "sort_sections",
]
