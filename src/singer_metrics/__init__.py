"""Convert Singer metric log lines to InfluxDB line protocol."""

from singer_metrics.adapters.logging import LineProtocolHandler
from singer_metrics.core.encoding.line_protocol import (
    LineProtocol,
    encode_measurements,
)
from singer_metrics.core.errors import (
    InvalidPayloadError,
    InvalidTimestampError,
    ParseError,
    UnrecognizedLineError,
)
from singer_metrics.core.models import (
    Counter,
    LineProtocolConfig,
    Measurement,
    Point,
    Precision,
    Tags,
    Timer,
)
from singer_metrics.core.parser import parse_line, read_measurements
from singer_metrics.core.pipeline import convert_lines

__all__ = [
    "Counter",
    "InvalidPayloadError",
    "InvalidTimestampError",
    "LineProtocol",
    "LineProtocolConfig",
    "LineProtocolHandler",
    "Measurement",
    "ParseError",
    "Point",
    "Precision",
    "Tags",
    "Timer",
    "UnrecognizedLineError",
    "convert_lines",
    "encode_measurements",
    "parse_line",
    "read_measurements",
]
