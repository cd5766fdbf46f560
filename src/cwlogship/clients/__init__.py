from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable

from .cloudwatch import Boto3LogsClient


@runtime_checkable
class LogsClient(Protocol):
    """Async contract of the remote append-only log sink.

    ``create_log_group``/``create_log_stream`` raise ``AlreadyExistsError``
    when the resource exists. ``put_log_events`` returns the next sequence
    token and raises ``SequenceTokenConflictError`` when the presented token
    is stale. Any other exception is a transport or service failure.
    """

    async def create_log_group(self, group: str) -> None: ...

    async def create_log_stream(self, group: str, stream: str) -> None: ...

    async def put_retention_policy(self, group: str, days: int) -> None: ...

    async def put_log_events(
        self,
        group: str,
        stream: str,
        events: Sequence[dict[str, Any]],
        sequence_token: str | None = None,
    ) -> str | None: ...


__all__ = ["Boto3LogsClient", "LogsClient"]
