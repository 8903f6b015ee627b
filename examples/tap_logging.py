"""Example tap that writes its Singer metrics as line protocol.

Run with:
    python examples/tap_logging.py | influx write --bucket taps --precision ms

Singer taps log metrics as ``METRIC: <json>`` through the standard logging
module. Attaching LineProtocolHandler turns those records into line
protocol on stdout while regular log messages keep going to stderr.
"""

import json
import logging
import sys
import time

from singer_metrics import LineProtocol, LineProtocolConfig, Precision
from singer_metrics.adapters.logging import LineProtocolHandler

logging.basicConfig(stream=sys.stderr, level=logging.INFO)
logger = logging.getLogger("tap_example")

metrics_handler = LineProtocolHandler(
    sys.stdout,
    LineProtocol(LineProtocolConfig(Precision.MILLISECONDS, {"tap": "tap-example"})),
)
logger.addHandler(metrics_handler)


def emit_metric(metric_type: str, metric: str, value: float, tags: dict) -> None:
    payload = {
        "type": metric_type,
        "metric_type": metric_type,
        "metric": metric,
        "value": value,
        "tags": tags,
    }
    logger.info("METRIC: %s", json.dumps(payload))


def sync_stream(stream: str, pages: int) -> None:
    """Pretend to page through an API, emitting Singer metrics."""
    records = 0
    for page in range(pages):
        start = time.perf_counter()
        time.sleep(0.05)
        records += 100
        emit_metric(
            "timer",
            "http_request_duration",
            time.perf_counter() - start,
            {"endpoint": stream, "http_status_code": 200, "context": {"page": page}},
        )
    emit_metric("counter", "record_count", records, {"endpoint": stream})


if __name__ == "__main__":
    logger.info("Starting sync")
    sync_stream("users", 3)
    sync_stream("orders", 2)
    logger.info("Sync finished")
