"""
Public entrypoints for cwlogship.

Provides ``create_consumer()`` for environment-driven wiring plus the
consumer, configuration and error types embedders catch.
"""

from __future__ import annotations

from typing import Any

from ._version import __version__
from .core.consumer import CloudWatchLogsConsumer
from .core.errors import (
    LogShipError,
    ProvisioningError,
    ResourceExhaustedError,
    SendError,
)
from .core.settings import CloudWatchLogsConsumerConfig, Settings
from .metrics.metrics import MetricsCollector

__all__ = [
    "CloudWatchLogsConsumer",
    "CloudWatchLogsConsumerConfig",
    "LogShipError",
    "MetricsCollector",
    "ProvisioningError",
    "ResourceExhaustedError",
    "SendError",
    "Settings",
    "VERSION",
    "__version__",
    "create_consumer",
]

VERSION = __version__


def create_consumer(
    *,
    settings: Settings | None = None,
    **overrides: Any,
) -> CloudWatchLogsConsumer:
    """Build a consumer from ``Settings`` (environment) plus keyword overrides.

    Example:
        consumer = create_consumer(group="/app/api", stream="web-1")
        await consumer.accept("started")
        await consumer.flush()
    """
    settings = settings or Settings()
    client = overrides.pop("client", None)
    config = settings.consumer.merged(**overrides)
    return CloudWatchLogsConsumer(
        config,
        client=client,
        metrics=MetricsCollector(enabled=settings.core.enable_metrics),
    )
