"""
Log event records queued by the consumer.

An event is the unit CloudWatch Logs ingests: a message plus a millisecond
timestamp. Events are immutable once created.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# CloudWatch Logs charges 26 bytes of framing per event on top of the UTF-8
# message length when enforcing batch size limits.
EVENT_OVERHEAD_BYTES = 26


@dataclass(frozen=True)
class LogEvent:
    """A single queued log line."""

    message: str
    timestamp: int  # milliseconds since the epoch

    @property
    def size(self) -> int:
        return event_size(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Shape expected by ``PutLogEvents``."""
        return {"timestamp": self.timestamp, "message": self.message}


def event_size(message: str) -> int:
    """Byte cost of a message as accounted by the remote sink."""
    return len(message.encode("utf-8")) + EVENT_OVERHEAD_BYTES
