"""
Error hierarchy for the log shipper.

Every failure surfaced by the consumer derives from ``LogShipError`` and
carries an ``ErrorCategory`` plus the original cause (also chained through
``__cause__``). Delivery is best-effort: a ``SendError`` hands the dropped
batch back to the caller, who decides whether to resubmit it.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:
    from .events import LogEvent


class ErrorCategory(str, Enum):
    """Coarse classification used by diagnostics and metrics labels."""

    PROVISIONING = "provisioning"
    DELIVERY = "delivery"
    RESOURCE = "resource"
    REMOTE = "remote"
    CONFIG = "config"


class LogShipError(Exception):
    """Base class for all shipper errors."""

    category: ErrorCategory = ErrorCategory.REMOTE

    def __init__(
        self,
        message: str,
        *,
        cause: BaseException | None = None,
        category: ErrorCategory | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if category is not None:
            self.category = category
        if cause is not None:
            self.__cause__ = cause

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__

    def to_dict(self) -> dict[str, Any]:
        """Serialize for diagnostics output."""
        data: dict[str, Any] = {
            "error_type": type(self).__name__,
            "category": self.category.value,
            "message": self.message,
        }
        if self.__cause__ is not None:
            data["cause"] = f"{type(self.__cause__).__name__}: {self.__cause__}"
        return data


class AlreadyExistsError(LogShipError):
    """The group or stream being created already exists on the remote sink."""

    def __init__(self, resource: str, name: str, **kwargs: Any) -> None:
        super().__init__(f"{resource} already exists: {name}", **kwargs)
        self.resource = resource
        self.name = name


class SequenceTokenConflictError(LogShipError):
    """The remote sink rejected the presented sequence token.

    ``expected_sequence_token`` is whatever the sink reported as current; it
    is informational only and is never adopted automatically.
    """

    def __init__(
        self,
        message: str,
        *,
        expected_sequence_token: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.expected_sequence_token = expected_sequence_token


class ProvisioningError(LogShipError):
    """Creating the group/stream or applying retention failed.

    Provisioning is attempted once per consumer; after this error it is not
    retried by later flushes.
    """

    category = ErrorCategory.PROVISIONING

    def __init__(self, step: str, group: str, **kwargs: Any) -> None:
        super().__init__(f"{step} failed for log group {group!r}", **kwargs)
        self.step = step
        self.group = group

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["step"] = self.step
        data["group"] = self.group
        return data


class SendError(LogShipError):
    """Sending a batch failed and the batch was dropped.

    The consumer never requeues or retries. ``dropped_events`` holds the exact
    batch that was lost so callers needing at-least-once delivery can resubmit
    the messages themselves.
    """

    category = ErrorCategory.DELIVERY

    def __init__(
        self,
        group: str,
        stream: str,
        dropped_events: Sequence[LogEvent],
        *,
        sequence_conflict: bool = False,
        **kwargs: Any,
    ) -> None:
        reason = "sequence token conflict" if sequence_conflict else "send failed"
        super().__init__(
            f"{reason} for {group}/{stream}; dropped {len(dropped_events)} events",
            **kwargs,
        )
        self.group = group
        self.stream = stream
        self.dropped_events: tuple[LogEvent, ...] = tuple(dropped_events)
        self.sequence_conflict = sequence_conflict

    @property
    def dropped_count(self) -> int:
        return len(self.dropped_events)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["group"] = self.group
        data["stream"] = self.stream
        data["dropped"] = self.dropped_count
        data["sequence_conflict"] = self.sequence_conflict
        return data


class ResourceExhaustedError(LogShipError):
    """Too many flushes are already waiting for the send permit."""

    category = ErrorCategory.RESOURCE


__all__ = [
    "AlreadyExistsError",
    "ErrorCategory",
    "LogShipError",
    "ProvisioningError",
    "ResourceExhaustedError",
    "SendError",
    "SequenceTokenConflictError",
]
