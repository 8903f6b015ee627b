"""Parser for Singer metric log lines.

A Singer metric line is an optional timestamp, the ``INFO METRIC:`` marker
and a JSON payload describing a timer or counter point::

    2021-06-25 00:00:00,000 INFO METRIC: {"metric_type": "timer", ...}
"""

import json
import math
import re
import time
from collections.abc import Iterable, Iterator
from datetime import UTC, datetime
from typing import Any

from singer_metrics.core.errors import (
    InvalidPayloadError,
    InvalidTimestampError,
    UnrecognizedLineError,
)
from singer_metrics.core.models import Counter, Measurement, Point, Timer

SINGER_METRIC_PATTERN = re.compile(
    r"^(?P<timestamp>.+?)?\s*?INFO METRIC: (?P<metric_json>.*)$"
)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_FRACTION_PATTERN = re.compile(r"[0-9]{1,9}")

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_NANOS_PER_SECOND = 1_000_000_000


def _reject_constant(name: str) -> float:
    raise ValueError(f"{name} is not valid JSON")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"{text} is out of range")
    return value


def parse_timestamp(text: str) -> int:
    """Parse a ``YYYY-MM-DD HH:MM:SS,fff`` timestamp as UTC.

    The fraction after the comma holds 1 to 9 digits and is read as a
    decimal fraction of a second.

    Args:
        text: Timestamp text with no surrounding whitespace.

    Returns:
        Nanoseconds since the Unix epoch.

    Raises:
        InvalidTimestampError: If the text does not match the format.
    """
    whole, sep, fraction = text.partition(",")
    if not sep or not _FRACTION_PATTERN.fullmatch(fraction):
        raise InvalidTimestampError(text)
    try:
        parsed = datetime.strptime(whole, TIMESTAMP_FORMAT).replace(tzinfo=UTC)
    except ValueError as e:
        raise InvalidTimestampError(text) from e

    # Whole seconds only, so the float timestamp is exact
    seconds = int(parsed.timestamp())
    return seconds * _NANOS_PER_SECOND + int(fraction.ljust(9, "0"))


def parse_payload(text: str) -> Point:
    """Decode a metric JSON payload into a Timer or Counter.

    Unknown fields are ignored.

    Raises:
        InvalidPayloadError: If the JSON is malformed or does not describe
            a timer or counter point.
    """
    try:
        obj = json.loads(
            text, parse_constant=_reject_constant, parse_float=_parse_finite_float
        )
    except ValueError as e:
        raise InvalidPayloadError(text, str(e)) from e

    if not isinstance(obj, dict):
        raise InvalidPayloadError(text, "expected a JSON object")

    metric_type = obj.get("metric_type")
    if metric_type not in ("timer", "counter"):
        raise InvalidPayloadError(text, f"unknown metric_type {metric_type!r}")

    metric = _required(obj, "metric", text)
    if not isinstance(metric, str):
        raise InvalidPayloadError(text, "metric must be a string")

    tags = _required(obj, "tags", text)
    if not isinstance(tags, dict):
        raise InvalidPayloadError(text, "tags must be an object")

    value = _required(obj, "value", text)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidPayloadError(text, "value must be a number")

    if metric_type == "counter":
        if not isinstance(value, int):
            raise InvalidPayloadError(text, "counter value must be an integer")
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise InvalidPayloadError(text, "counter value out of range")
        return Counter(metric=metric, value=value, tags=tags)

    # Integer literals too large for a double
    try:
        value = float(value)
    except OverflowError as e:
        raise InvalidPayloadError(text, "timer value out of range") from e
    return Timer(metric=metric, value=value, tags=tags)


def _required(obj: dict[str, Any], key: str, text: str) -> Any:
    if key not in obj:
        raise InvalidPayloadError(text, f"missing field {key!r}")
    return obj[key]


def parse_line(line: str) -> Measurement:
    """Parse one Singer metric log line.

    Args:
        line: The log line. A trailing newline is ignored.

    Returns:
        Measurement stamped with the line's timestamp, or with the current
        time when the line has none.

    Raises:
        UnrecognizedLineError: If the line has no ``INFO METRIC:`` marker.
        InvalidTimestampError: If the timestamp cannot be parsed.
        InvalidPayloadError: If the JSON payload is invalid.
    """
    line = line.rstrip("\r\n")
    match = SINGER_METRIC_PATTERN.match(line)
    if match is None:
        raise UnrecognizedLineError(line)

    timestamp_text = (match.group("timestamp") or "").rstrip()
    if timestamp_text:
        try:
            timestamp = parse_timestamp(timestamp_text)
        except InvalidTimestampError as e:
            e.line = line
            raise
    else:
        timestamp = time.time_ns()

    try:
        point = parse_payload(match.group("metric_json"))
    except InvalidPayloadError as e:
        e.line = line
        raise

    return Measurement(point=point, timestamp=timestamp)


def read_measurements(lines: Iterable[str]) -> Iterator[Measurement]:
    """Lazily parse lines into measurements, in input order.

    Errors propagate at the offending line.
    """
    for line in lines:
        yield parse_line(line)
