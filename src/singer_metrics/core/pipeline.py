"""Line-at-a-time conversion of Singer metric lines to an output protocol."""

import logging
from collections.abc import Iterable, Iterator

from singer_metrics.core.errors import ParseError
from singer_metrics.core.parser import parse_line
from singer_metrics.core.ports import ProtocolPort

logger = logging.getLogger(__name__)


def convert_lines(
    lines: Iterable[str],
    protocol: ProtocolPort,
    skip_invalid: bool = False,
) -> Iterator[str]:
    """Parse and dump each line, preserving input order.

    Blank lines are skipped.

    Args:
        lines: Input lines, with or without trailing newlines.
        protocol: Encoder used to dump each measurement.
        skip_invalid: Log and skip lines that fail to parse instead of
            raising (default False, the first error ends the run).

    Yields:
        One output line per input metric line, without newline.

    Raises:
        ParseError: On the first invalid line when skip_invalid is False.
    """
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            measurement = parse_line(line)
        except ParseError as e:
            if not skip_invalid:
                raise
            logger.warning("Skipping line %d: %s", lineno, e)
            continue
        yield protocol.dump(measurement)
