from .errors import (
    AlreadyExistsError,
    ErrorCategory,
    LogShipError,
    ProvisioningError,
    ResourceExhaustedError,
    SendError,
    SequenceTokenConflictError,
)
from .events import EVENT_OVERHEAD_BYTES, LogEvent, event_size
from .settings import (
    CloudWatchLogsConsumerConfig,
    ConsumerSettings,
    CoreSettings,
    Settings,
)

__all__ = [
    "AlreadyExistsError",
    "CloudWatchLogsConsumerConfig",
    "ConsumerSettings",
    "CoreSettings",
    "EVENT_OVERHEAD_BYTES",
    "ErrorCategory",
    "LogEvent",
    "LogShipError",
    "ProvisioningError",
    "ResourceExhaustedError",
    "SendError",
    "SequenceTokenConflictError",
    "Settings",
    "event_size",
]
