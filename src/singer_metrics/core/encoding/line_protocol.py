"""InfluxDB line protocol encoder for measurements.

https://docs.influxdata.com/influxdb/v2.6/reference/syntax/line-protocol/
"""

from collections.abc import Iterable
from typing import assert_never

from singer_metrics.core.models import (
    Counter,
    LineProtocolConfig,
    Measurement,
    Precision,
    Tags,
    TagScalar,
    TagValue,
    Timer,
)

# Nanoseconds per unit of each precision
_PRECISION_DIVISORS = {
    Precision.NANOSECONDS: 1,
    Precision.MICROSECONDS: 1_000,
    Precision.MILLISECONDS: 1_000_000,
    Precision.SECONDS: 1_000_000_000,
}


def _escape(text: str) -> str:
    return text.replace(" ", "\\ ")


def _flatten_value(key: str, value: TagValue) -> list[tuple[str, TagScalar]]:
    if value is None:
        return []
    if isinstance(value, dict):
        return flatten_tags(value, prefix=key)
    if isinstance(value, list):
        pairs: list[tuple[str, TagScalar]] = []
        for index, item in enumerate(value):
            pairs.extend(_flatten_value(f"{key}_{index}", item))
        return pairs
    return [(key, value)]


def flatten_tags(tags: Tags, prefix: str | None = None) -> list[tuple[str, TagScalar]]:
    """Flatten nested tags into ordered (key, scalar) pairs.

    Nested objects join keys with ``__`` and list elements are suffixed with
    ``_<index>``, recursively. Null values are dropped. Keys are returned
    unescaped.

    Args:
        tags: Tag mapping, possibly nested.
        prefix: Key of the enclosing object, if any.

    Returns:
        Flat list of (key, scalar) pairs in insertion order.
    """
    pairs: list[tuple[str, TagScalar]] = []
    for key, value in tags.items():
        full_key = f"{prefix}__{key}" if prefix is not None else key
        pairs.extend(_flatten_value(full_key, value))
    return pairs


def _format_scalar(value: TagScalar) -> str:
    # bool first, it is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return _escape(value)
    return repr(value) if isinstance(value, float) else str(value)


def format_tags(tags: Tags, extra_tags: Tags | None = None) -> str:
    """Format own tags followed by extra tags as a line protocol tag set.

    Returns:
        The tag set with a leading comma, or an empty string when no
        entries remain after flattening.
    """
    pairs = flatten_tags(tags) + flatten_tags(extra_tags or {})
    if not pairs:
        return ""
    return "," + ",".join(f"{_escape(k)}={_format_scalar(v)}" for k, v in pairs)


def format_timestamp(timestamp: int, precision: Precision) -> str:
    """Convert nanoseconds since the epoch to an integer in the precision's unit."""
    return str(timestamp // _PRECISION_DIVISORS[precision])


class LineProtocol:
    """InfluxDB line protocol encoder.

    Example:
        ```python
        from singer_metrics import LineProtocol, LineProtocolConfig, Precision

        protocol = LineProtocol(
            LineProtocolConfig(Precision.MILLISECONDS, {"host": "localhost"})
        )
        line = protocol.dump(measurement)
        ```
    """

    def __init__(self, config: LineProtocolConfig | None = None) -> None:
        """Initialize the encoder.

        Args:
            config: Precision and extra tags. Defaults to nanosecond
                precision with no extra tags.
        """
        self.config = config or LineProtocolConfig()

    def dump(self, measurement: Measurement) -> str:
        """Dump a measurement to one line of line protocol.

        Args:
            measurement: The measurement to dump.

        Returns:
            ``<metric>[,<tags>] value=<value> <timestamp>`` with no
            trailing newline.
        """
        point = measurement.point
        match point:
            case Timer():
                value = repr(point.value)
            case Counter():
                value = str(point.value)
            case _:
                assert_never(point)

        tag_set = format_tags(point.tags, self.config.extra_tags)
        timestamp = format_timestamp(measurement.timestamp, self.config.precision)
        return f"{point.metric}{tag_set} value={value} {timestamp}"


def encode_measurements(
    measurements: Iterable[Measurement], protocol: LineProtocol | None = None
) -> str:
    """Encode measurements to newline-delimited line protocol.

    Args:
        measurements: An iterable of Measurement objects.
        protocol: Encoder to use. Defaults to nanosecond precision.

    Returns:
        One line per measurement, each ending in a newline.
        Empty string if no measurements.
    """
    protocol = protocol or LineProtocol()
    lines = [protocol.dump(measurement) for measurement in measurements]

    if not lines:
        return ""

    return "\n".join(lines) + "\n"
