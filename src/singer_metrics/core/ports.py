"""Port interfaces for output protocols.

Encoders implementing this protocol turn measurements into text. The
pipeline, CLI and logging handler depend only on this interface.
"""

from typing import Protocol, runtime_checkable

from singer_metrics.core.models import Measurement


@runtime_checkable
class ProtocolPort(Protocol):
    """Port for dumping a measurement to one line of text.

    Examples: LineProtocol.
    """

    def dump(self, measurement: Measurement) -> str:
        """Dump a measurement to a string.

        Args:
            measurement: The measurement to dump.

        Returns:
            A single line with no trailing newline.
        """
        ...
