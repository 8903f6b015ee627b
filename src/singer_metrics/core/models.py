"""Core domain models for Singer metric measurements."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum

TagScalar = bool | int | float | str
TagValue = TagScalar | None | dict[str, "TagValue"] | list["TagValue"]
Tags = dict[str, TagValue]

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


@dataclass(frozen=True)
class Timer:
    """A timer point.

    Attributes:
        metric: Metric name (e.g., http_request_duration).
        value: Elapsed time reported by the tap.
        tags: Ordered tag mapping, possibly nested.
    """

    metric: str
    value: float
    tags: Tags = field(default_factory=dict)


@dataclass(frozen=True)
class Counter:
    """A counter point.

    Attributes:
        metric: Metric name (e.g., record_count).
        value: Signed 64-bit count.
        tags: Ordered tag mapping, possibly nested.
    """

    metric: str
    value: int
    tags: Tags = field(default_factory=dict)


Point = Timer | Counter


@dataclass(frozen=True)
class Measurement:
    """A point observed at an instant.

    Attributes:
        point: The timer or counter point.
        timestamp: Nanoseconds since the Unix epoch, UTC.
    """

    point: Point
    timestamp: int

    @property
    def utc_datetime(self) -> datetime:
        """Timestamp as an aware UTC datetime, truncated to microseconds."""
        return _EPOCH + timedelta(microseconds=self.timestamp // 1_000)


class Precision(Enum):
    """Unit of the timestamp written to line protocol."""

    NANOSECONDS = "ns"
    MICROSECONDS = "us"
    MILLISECONDS = "ms"
    SECONDS = "s"

    @classmethod
    def from_string(cls, token: str) -> "Precision":
        """Look up a precision by its token (ns, us, ms, s).

        Raises:
            ValueError: If the token is not a known precision.
        """
        for precision in cls:
            if precision.value == token:
                return precision
        raise ValueError(f"Invalid precision: {token}")


@dataclass(frozen=True)
class LineProtocolConfig:
    """Formatting options held for the duration of a run.

    Attributes:
        precision: Timestamp precision (default: nanoseconds).
        extra_tags: Tags appended after each measurement's own tags.
    """

    precision: Precision = Precision.NANOSECONDS
    extra_tags: Tags = field(default_factory=dict)
