"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from prometheus_client import REGISTRY

from ehonlend.core.config import get_settings
from ehonlend.core.matching import reload_scoring_config


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point the data directory at a per-test temporary directory.

    Settings and the scoring config are cached process-wide, so both caches
    are reset for each test.
    """
    data_dir = tmp_path / "data"
    monkeypatch.setenv("EHONLEND_DATA_DIR", str(data_dir))
    get_settings.cache_clear()
    reload_scoring_config()

    yield data_dir

    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_prometheus_registry():
    """Reset Prometheus registry before each test to avoid duplicate metric registration.

    setup_metrics() registers the instrumentator's metrics in the global
    Prometheus registry, so creating an app per test would otherwise fail
    with "Duplicated timeseries" errors.
    """
    collectors = list(REGISTRY._collector_to_names.keys())
    for collector in collectors:
        REGISTRY.unregister(collector)

    yield

    collectors = list(REGISTRY._collector_to_names.keys())
    for collector in collectors:
        REGISTRY.unregister(collector)
