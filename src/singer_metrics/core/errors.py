"""Errors raised while parsing Singer metric lines."""


class ParseError(ValueError):
    """A line could not be turned into a Measurement.

    Attributes:
        line: The offending input line.
    """

    def __init__(self, message: str, line: str) -> None:
        super().__init__(message)
        self.line = line


class UnrecognizedLineError(ParseError):
    """The line carries no ``INFO METRIC:`` marker."""

    def __init__(self, line: str) -> None:
        super().__init__(f"Invalid line: {line}", line)


class InvalidTimestampError(ParseError):
    """The timestamp before the marker could not be parsed.

    Attributes:
        timestamp: The timestamp text that failed to parse.
    """

    def __init__(self, timestamp: str, line: str = "") -> None:
        super().__init__(f"Invalid timestamp: {timestamp!r}", line)
        self.timestamp = timestamp


class InvalidPayloadError(ParseError):
    """The JSON payload is malformed or is not a timer/counter point.

    Attributes:
        payload: The payload text that failed to decode.
        reason: Short description of what was wrong.
    """

    def __init__(self, payload: str, reason: str, line: str = "") -> None:
        super().__init__(f"Invalid payload ({reason}): {payload}", line)
        self.payload = payload
        self.reason = reason
