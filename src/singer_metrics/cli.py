"""Command line entry point: ``singer-metrics line-protocol``."""

import argparse
import logging
import sys
from collections.abc import Iterable, Sequence
from typing import TextIO

from singer_metrics.core.encoding.line_protocol import LineProtocol
from singer_metrics.core.errors import ParseError
from singer_metrics.core.models import LineProtocolConfig, Precision, Tags
from singer_metrics.core.pipeline import convert_lines

logger = logging.getLogger(__name__)


def _parse_precision(token: str) -> Precision:
    try:
        return Precision.from_string(token)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _parse_tag(option: str) -> tuple[str, str]:
    key, sep, value = option.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Invalid tag {option!r}, expected KEY=VALUE")
    return key, value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="singer-metrics",
        description="Convert Singer metric log lines to other formats.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug messages to stderr.",
    )
    subparsers = parser.add_subparsers(dest="cmd", required=True)

    lp = subparsers.add_parser(
        "line-protocol",
        help="Convert Singer metrics to InfluxDB line protocol",
    )
    lp.add_argument(
        "-i",
        "--input",
        metavar="FILE",
        default=None,
        help="The input file to read from (default: stdin).",
    )
    lp.add_argument(
        "-p",
        "--precision",
        type=_parse_precision,
        default=Precision.NANOSECONDS,
        metavar="{ns,us,ms,s}",
        help="The timestamp precision to use (default: ns).",
    )
    lp.add_argument(
        "-t",
        "--tag",
        dest="tags",
        type=_parse_tag,
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Extra tag added to every measurement. May be repeated.",
    )
    lp.add_argument(
        "--skip-invalid",
        action="store_true",
        help="Log and skip lines that fail to parse instead of aborting.",
    )
    return parser


def run_line_protocol(args: argparse.Namespace, stdin: TextIO, stdout: TextIO) -> int:
    """Convert input lines to line protocol on stdout.

    Returns:
        0 on success, 1 on a parse error or unreadable input.
    """
    extra_tags: Tags = dict(args.tags)
    protocol = LineProtocol(LineProtocolConfig(args.precision, extra_tags))
    logger.debug(
        "Converting %s with precision=%s, %d extra tags",
        args.input or "stdin",
        args.precision.value,
        len(extra_tags),
    )

    try:
        source = stdin if args.input is None else open(args.input, encoding="utf-8")
    except OSError as e:
        logger.error("Cannot read %s: %s", args.input, e)
        return 1

    try:
        _write_lines(convert_lines(source, protocol, args.skip_invalid), stdout)
    except ParseError as e:
        logger.error("%s", e)
        return 1
    except UnicodeDecodeError as e:
        logger.error("Cannot read %s: %s", args.input or "stdin", e)
        return 1
    finally:
        if source is not stdin:
            source.close()
    return 0


def _write_lines(lines: Iterable[str], stdout: TextIO) -> None:
    for line in lines:
        stdout.write(line + "\n")
    stdout.flush()


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    return run_line_protocol(args, sys.stdin, sys.stdout)


if __name__ == "__main__":
    sys.exit(main())
