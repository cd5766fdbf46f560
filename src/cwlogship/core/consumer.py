"""
Batching consumer that ships text lines to one CloudWatch Logs stream.

Lines accumulate in an in-memory batch until one of the CloudWatch limits
(record count, payload size) or the staleness window is exceeded, at which
point the accepting call performs the flush itself before returning.

Flushes detach the batch synchronously and only then wait for the send
permit, so writers never block on network latency and lines accepted while a
send is in flight start a fresh batch. Provisioning, the send and the
sequence-token update all run under the permit, which keeps tokens threaded
send-after-send in permit order.

Delivery is best-effort: a failed batch is dropped and handed back on the
raised ``SendError``; nothing is requeued or retried here.
"""

from __future__ import annotations

import time
import types
from typing import TYPE_CHECKING, Any, Callable

from . import diagnostics
from .concurrency import DEFAULT_MAX_WAITERS, BoundedPermit
from .errors import (
    AlreadyExistsError,
    LogShipError,
    ProvisioningError,
    SendError,
    SequenceTokenConflictError,
)
from .events import LogEvent, event_size
from .settings import CloudWatchLogsConsumerConfig, parse_config

if TYPE_CHECKING:
    from ..clients import LogsClient
    from ..metrics.metrics import MetricsCollector

MAX_RECORDS = 25_000
MAX_SIZE = 1024 * 8000  # 8000 KB
MAX_DELAY_MS = 5000


class CloudWatchLogsConsumer:
    """Buffer lines and flush them, in order, to a single group/stream."""

    name = "cloudwatch-consumer"

    def __init__(
        self,
        config: CloudWatchLogsConsumerConfig | dict[str, Any] | None = None,
        *,
        client: LogsClient | None = None,
        metrics: MetricsCollector | None = None,
        clock: Callable[[], float] = time.time,
        max_waiters: int = DEFAULT_MAX_WAITERS,
        **kwargs: Any,
    ) -> None:
        cfg = parse_config(CloudWatchLogsConsumerConfig, config, **kwargs)
        self._config = cfg
        if client is None:
            from ..clients.cloudwatch import Boto3LogsClient

            client = Boto3LogsClient.from_config(cfg)
        self._client = client
        self._metrics = metrics
        self._clock = clock
        self._permit = BoundedPermit(1, max_waiters=max_waiters)

        self._flushed_at = self._now_ms()
        self._initialized = False
        self._sequence_token: str | None = None

        self._buffer: list[LogEvent] = []
        self._buffer_size = 0

    @property
    def config(self) -> CloudWatchLogsConsumerConfig:
        return self._config

    @property
    def group(self) -> str:
        return self._config.group

    @property
    def stream(self) -> str:
        return self._config.stream

    @property
    def retention_in_days(self) -> int | None:
        return self._config.retention_in_days

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def sequence_token(self) -> str | None:
        return self._sequence_token

    @property
    def flushed_at(self) -> int:
        return self._flushed_at

    @property
    def buffer(self) -> tuple[LogEvent, ...]:
        """Snapshot of the pending batch in delivery order."""
        return tuple(self._buffer)

    @property
    def buffer_size(self) -> int:
        return self._buffer_size

    @property
    def flushable(self) -> bool:
        return len(self._buffer) > 0

    @property
    def should_flush(self) -> bool:
        if len(self._buffer) > MAX_RECORDS:
            return True

        if self._buffer_size > MAX_SIZE:
            return True

        return self._now_ms() - self._flushed_at > MAX_DELAY_MS

    async def accept(self, line: str) -> None:
        """Queue a line, flushing first-hand when the batch is due.

        Empty lines are ignored. Raises whatever the triggered flush raises.
        """
        if len(line) > 0:
            self._queue(line)
            due = self.should_flush
            if self._metrics is not None:
                await self._metrics.record_line_accepted()

            if due:
                await self.flush()

    async def flush(self) -> None:
        """Send everything buffered so far; a no-op when the buffer is empty.

        Raises:
            ProvisioningError: first-use group/stream/retention setup failed.
            SendError: the batch could not be delivered and was dropped.
            ResourceExhaustedError: too many flushes are waiting already.
        """
        if not self.flushable:
            return

        events = self._buffer
        self._buffer = []
        self._buffer_size = 0
        started = time.perf_counter()

        try:
            async with self._permit:
                await self._prepare_stream()
                await self._send(events)
        except LogShipError as exc:
            await self._record_failure(exc, len(events))
            raise

        if self._metrics is not None:
            await self._metrics.record_flush(
                batch_size=len(events),
                latency_seconds=time.perf_counter() - started,
            )

    async def _send(self, events: list[LogEvent]) -> None:
        try:
            token = await self._client.put_log_events(
                self.group,
                self.stream,
                [e.to_dict() for e in events],
                self._sequence_token,
            )
        except SequenceTokenConflictError as e:
            raise SendError(
                self.group, self.stream, events, sequence_conflict=True, cause=e
            ) from e
        except Exception as e:
            raise SendError(self.group, self.stream, events, cause=e) from e

        self._flushed_at = self._now_ms()
        self._sequence_token = token

    async def _prepare_stream(self) -> None:
        if self._initialized:
            return
        # Set before any call: provisioning is attempted once even if it fails
        self._initialized = True

        try:
            await self._client.create_log_group(self.group)
        except AlreadyExistsError:
            diagnostics.debug(self.name, "log group already exists", group=self.group)
        except Exception as e:
            raise ProvisioningError("create_log_group", self.group, cause=e) from e

        if self.retention_in_days is not None:
            try:
                await self._client.put_retention_policy(
                    self.group, self.retention_in_days
                )
            except Exception as e:
                raise ProvisioningError(
                    "put_retention_policy", self.group, cause=e
                ) from e

        try:
            await self._client.create_log_stream(self.group, self.stream)
        except AlreadyExistsError:
            diagnostics.debug(
                self.name,
                "log stream already exists",
                group=self.group,
                stream=self.stream,
            )
        except Exception as e:
            raise ProvisioningError("create_log_stream", self.group, cause=e) from e

    async def _record_failure(self, exc: LogShipError, dropped: int) -> None:
        diagnostics.warn(
            self.name,
            "flush failed; batch dropped",
            group=self.group,
            stream=self.stream,
            dropped=dropped,
            error=exc.to_dict(),
        )
        if self._metrics is None:
            return
        if isinstance(exc, ProvisioningError):
            await self._metrics.record_provisioning_error()
        elif isinstance(exc, SendError):
            await self._metrics.record_send_error()
        await self._metrics.record_events_dropped(dropped)

    def _queue(self, line: str) -> None:
        size = event_size(line)

        self._buffer.append(LogEvent(message=line, timestamp=self._now_ms()))
        self._buffer_size += size

    def _now_ms(self) -> int:
        return round(self._clock() * 1000)

    async def __aenter__(self) -> CloudWatchLogsConsumer:
        return self

    async def __aexit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc: BaseException | None,
        _tb: types.TracebackType | None,
    ) -> None:
        # Drain whatever is left on the way out
        await self.flush()
