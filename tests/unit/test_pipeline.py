"""Tests for line-at-a-time conversion."""

import logging
from collections.abc import Callable

import pytest

from singer_metrics.core.encoding.line_protocol import LineProtocol
from singer_metrics.core.errors import InvalidPayloadError, UnrecognizedLineError
from singer_metrics.core.models import LineProtocolConfig, Precision
from singer_metrics.core.pipeline import convert_lines


@pytest.fixture
def seconds_protocol() -> LineProtocol:
    """Encoder with second precision for short expected lines."""
    return LineProtocol(LineProtocolConfig(Precision.SECONDS))


class TestConvertLines:
    """Tests for convert_lines()."""

    @pytest.mark.core
    def test_converts_in_input_order(
        self, metric_line: Callable[..., str], seconds_protocol: LineProtocol
    ) -> None:
        """One output line per input line, same order."""
        lines = [
            metric_line("timer", "a", 0.5, {"x": "1"}),
            metric_line("counter", "b", 3),
        ]

        result = list(convert_lines(lines, seconds_protocol))

        assert result == [
            "a,x=1 value=0.5 1624579200",
            "b value=3 1624579200",
        ]

    @pytest.mark.core
    def test_skips_blank_lines(
        self, metric_line: Callable[..., str], seconds_protocol: LineProtocol
    ) -> None:
        """Blank and whitespace-only lines produce no output."""
        result = list(convert_lines(["\n", metric_line(), "   \n"], seconds_protocol))

        assert result == ["test value=1.0 1624579200"]

    @pytest.mark.core
    def test_first_error_aborts_by_default(
        self, metric_line: Callable[..., str], seconds_protocol: LineProtocol
    ) -> None:
        """Without skip_invalid the first bad line raises after earlier output."""
        converted = convert_lines(
            [metric_line(), "garbage", metric_line()], seconds_protocol
        )

        assert next(converted) == "test value=1.0 1624579200"
        with pytest.raises(UnrecognizedLineError):
            next(converted)

    @pytest.mark.core
    def test_skip_invalid_logs_and_continues(
        self,
        metric_line: Callable[..., str],
        seconds_protocol: LineProtocol,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """With skip_invalid bad lines are logged and skipped."""
        lines = [
            "garbage",
            metric_line(metric="kept"),
            "INFO METRIC: {}",
        ]

        with caplog.at_level(logging.WARNING, logger="singer_metrics.core.pipeline"):
            result = list(convert_lines(lines, seconds_protocol, skip_invalid=True))

        assert result == ["kept value=1.0 1624579200"]
        messages = [r.getMessage() for r in caplog.records]
        assert len(messages) == 2
        assert messages[0].startswith("Skipping line 1: Invalid line")
        assert messages[1].startswith("Skipping line 3: Invalid payload")

    @pytest.mark.core
    def test_payload_error_propagates(self, seconds_protocol: LineProtocol) -> None:
        """Invalid payloads raise InvalidPayloadError in abort mode."""
        with pytest.raises(InvalidPayloadError):
            list(convert_lines(["INFO METRIC: {}"], seconds_protocol))
