"""Python logging handler adapter for singer_metrics.

This adapter lets a process that emits Singer metrics through the standard
library logging module (``logger.info("METRIC: %s", payload)``) write them
straight out as line protocol.
"""

import logging
import sys
from typing import TextIO

from singer_metrics.core.encoding.line_protocol import LineProtocol
from singer_metrics.core.models import Measurement
from singer_metrics.core.parser import parse_payload
from singer_metrics.core.ports import ProtocolPort

METRIC_PREFIX = "METRIC: "


def _created_ns(record: logging.LogRecord) -> int:
    # created_ns exists from Python 3.13
    created_ns = getattr(record, "created_ns", None)
    if created_ns is not None:
        return created_ns
    return int(record.created * 1_000_000_000)


class LineProtocolHandler(logging.StreamHandler):
    """Logging handler that writes Singer metric records as line protocol.

    Records whose message does not start with ``METRIC: `` are ignored.

    Example:
        ```python
        from singer_metrics import LineProtocolHandler

        handler = LineProtocolHandler(sys.stdout)
        logging.getLogger("singer").addHandler(handler)
        ```
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        protocol: ProtocolPort | None = None,
    ) -> None:
        """Initialize the handler with an output stream.

        Args:
            stream: Stream to write to. Defaults to sys.stdout.
            protocol: Encoder for measurements. Defaults to LineProtocol().
        """
        super().__init__(stream if stream is not None else sys.stdout)
        self._protocol = protocol or LineProtocol()

    def format(self, record: logging.LogRecord) -> str:
        """Format a metric record as one line of the output protocol.

        Raises:
            InvalidPayloadError: If the metric payload is invalid.
        """
        payload = record.getMessage()[len(METRIC_PREFIX) :]
        measurement = Measurement(
            point=parse_payload(payload),
            timestamp=_created_ns(record),
        )
        return self._protocol.dump(measurement)

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a record if it carries a Singer metric.

        Args:
            record: The log record to emit.
        """
        try:
            is_metric = record.getMessage().startswith(METRIC_PREFIX)
        except Exception:
            self.handleError(record)
            return
        if is_metric:
            super().emit(record)
