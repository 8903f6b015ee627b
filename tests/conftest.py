"""Shared test fixtures for all test modules."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from singer_metrics.core.models import Measurement, Timer

# 2021-06-25T00:00:00Z
JUNE_25_NS = 1_624_579_200_000_000_000


@pytest.fixture
def june_25_ns() -> int:
    """Nanosecond timestamp of 2021-06-25T00:00:00Z."""
    return JUNE_25_NS


@pytest.fixture
def timer_measurement() -> Callable[..., Measurement]:
    """Factory fixture for timer measurements at 2021-06-25T00:00:00Z.

    Used in tests to build the reference `test` timer with custom tags.
    """

    def _measurement(
        tags: dict[str, Any] | None = None,
        metric: str = "test",
        value: float = 1.23,
    ) -> Measurement:
        return Measurement(
            point=Timer(metric=metric, value=value, tags=tags or {}),
            timestamp=JUNE_25_NS,
        )

    return _measurement


@pytest.fixture
def metric_line() -> Callable[..., str]:
    """Factory fixture for Singer metric log lines.

    Usage:
        def test_something(metric_line):
            line = metric_line("counter", "record_count", 5, {"endpoint": "users"})
    """

    def _line(
        metric_type: str = "timer",
        metric: str = "test",
        value: float = 1.0,
        tags: dict[str, Any] | None = None,
        timestamp: str | None = "2021-06-25 00:00:00,000",
    ) -> str:
        payload = json.dumps(
            {
                "type": metric_type,
                "metric_type": metric_type,
                "metric": metric,
                "value": value,
                "tags": tags if tags is not None else {},
            }
        )
        prefix = f"{timestamp} " if timestamp is not None else ""
        return f"{prefix}INFO METRIC: {payload}"

    return _line


@pytest.fixture
def metrics_log_path(tmp_path: Path, metric_line: Callable[..., str]) -> Path:
    """Provide a temporary Singer log with two metric lines."""
    path = tmp_path / "tap.log"
    path.write_text(
        "\n".join(
            [
                metric_line("timer", "http_request_duration", 0.5, {"status": "succeeded"}),
                metric_line("counter", "record_count", 10, {"endpoint": "users"}),
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    return path
