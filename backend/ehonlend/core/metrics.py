"""Prometheus metrics configuration."""

from __future__ import annotations

import structlog
from fastapi import FastAPI
from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram
from prometheus_fastapi_instrumentator import Instrumentator

from ehonlend.core.kana import KanaGroup

logger = structlog.get_logger("ehonlend.metrics")

# Application info
app_info = Gauge(
    "app_info",
    "Application information",
    ["version"],
)

# Ranking metrics
rankings_total = Counter(
    "rankings_total",
    "Total number of candidate rankings performed",
    ["resolution"],  # resolution: isbn, score
)
ranked_candidates = Histogram(
    "ranked_candidates",
    "Number of candidates per ranking request",
    buckets=(0, 1, 5, 10, 20, 40, 100, 250),
)

# Identifier metrics
isbn_validations_total = Counter(
    "isbn_validations_total",
    "Total number of ISBN validations",
    ["result"],  # result: isbn13, isbn10, invalid
)

# Kana metrics
kana_classifications_total = Counter(
    "kana_classifications_total",
    "Total number of kana group classifications",
    ["group"],
)

DOMAIN_COLLECTORS = (
    app_info,
    rankings_total,
    ranked_candidates,
    isbn_validations_total,
    kana_classifications_total,
)


def register_domain_metrics(registry: CollectorRegistry = REGISTRY) -> None:
    """Register the application's own collectors if they are missing.

    Tests reset the default registry between app instances, which drops
    these module-level collectors; this puts them back.

    Args:
        registry: Registry to register into
    """
    for collector in DOMAIN_COLLECTORS:
        try:
            registry.register(collector)
        except ValueError:
            logger.debug("Collector already registered", collector=type(collector).__name__)


def record_ranking(candidate_count: int, isbn_resolved: bool = False) -> None:
    """Count one ranking request and its candidate count."""
    rankings_total.labels(resolution="isbn" if isbn_resolved else "score").inc()
    ranked_candidates.observe(candidate_count)


def record_isbn_validation(result: str) -> None:
    """Count one ISBN validation ("isbn13", "isbn10" or "invalid")."""
    isbn_validations_total.labels(result=result).inc()


def record_kana_classification(group: KanaGroup) -> None:
    kana_classifications_total.labels(group=group.name.lower()).inc()


def setup_metrics(app: FastAPI, app_version: str) -> None:
    """Setup Prometheus metrics using prometheus-fastapi-instrumentator.

    Args:
        app: FastAPI application instance
        app_version: Application version
    """
    if getattr(app.state, "_metrics_initialized", False):
        logger.debug("Metrics already initialized for this app instance, skipping")
        return

    register_domain_metrics()

    instrumentator = Instrumentator(
        should_group_status_codes=False,
        should_ignore_untemplated=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=[
            "/metrics",
            "/docs",
            "/openapi.json",
            "/redoc",
        ],
    )

    # Instrument the app (this adds middleware automatically)
    instrumentator.instrument(app).expose(app, endpoint="/metrics")

    app.state._metrics_initialized = True

    app_info.labels(version=app_version).set(1)

    logger.info("Metrics initialized", version=app_version)
