"""Output encoders for measurements."""

from singer_metrics.core.encoding.line_protocol import (
    LineProtocol,
    encode_measurements,
    flatten_tags,
    format_tags,
    format_timestamp,
)

__all__ = [
    "LineProtocol",
    "encode_measurements",
    "flatten_tags",
    "format_tags",
    "format_timestamp",
]
