"""
Configuration models for cwlogship using Pydantic v2 Settings.

``CloudWatchLogsConsumerConfig`` is what a consumer is constructed from;
``Settings`` layers environment variables (``CWLOGSHIP_`` prefix, ``__`` as
the nested delimiter) on top for process-level wiring such as the CLI.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import (  # type: ignore[import-not-found]
    BaseSettings,
    SettingsConfigDict,
)

# Retention periods accepted by PutRetentionPolicy
VALID_RETENTION_DAYS: frozenset[int] = frozenset(
    {
        1,
        3,
        5,
        7,
        14,
        30,
        60,
        90,
        120,
        150,
        180,
        365,
        400,
        545,
        731,
        1096,
        1827,
        2192,
        2557,
        2922,
        3288,
        3653,
    }
)

ModelT = TypeVar("ModelT", bound=BaseModel)


class CloudWatchLogsConsumerConfig(BaseModel):
    """Destination and provisioning options for one consumer."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    region: str | None = Field(
        default=None,
        description="AWS region of the endpoint; None defers to boto3 resolution",
    )
    group: str = Field(description="Destination log group name")
    stream: str = Field(description="Destination log stream name")
    retention_in_days: int | None = Field(
        default=None,
        description="Retention applied once at provisioning; None keeps the service default",
    )

    @field_validator("group", "stream")
    @classmethod
    def _ensure_name_non_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("log group and stream names must not be empty")
        return value

    @field_validator("retention_in_days")
    @classmethod
    def _ensure_valid_retention(cls, value: int | None) -> int | None:
        if value is not None and value not in VALID_RETENTION_DAYS:
            allowed = ", ".join(str(v) for v in sorted(VALID_RETENTION_DAYS))
            raise ValueError(f"retention_in_days must be one of: {allowed}")
        return value


class ConsumerSettings(BaseModel):
    """Partial consumer options read from the environment.

    Every field is optional so the environment may supply only some of them;
    the rest come from explicit overrides before the full config is validated.
    """

    region: str | None = None
    group: str | None = None
    stream: str | None = None
    retention_in_days: int | None = None

    def merged(self, **overrides: Any) -> CloudWatchLogsConsumerConfig:
        """Layer non-None ``overrides`` over these values and validate."""
        data = self.model_dump(exclude_none=True)
        data.update({k: v for k, v in overrides.items() if v is not None})
        return CloudWatchLogsConsumerConfig.model_validate(data)


class CoreSettings(BaseModel):
    """Ambient toggles shared by every consumer in the process."""

    # Structured internal diagnostics for tolerated and dropped-batch events
    internal_logging_enabled: bool = Field(
        default=False, description="Emit DEBUG/WARN diagnostics to stderr"
    )
    enable_metrics: bool = Field(
        default=False, description="Enable Prometheus-compatible metrics"
    )


class Settings(BaseSettings):
    """Top-level configuration model."""

    core: CoreSettings = Field(default_factory=CoreSettings)
    consumer: ConsumerSettings = Field(default_factory=ConsumerSettings)

    model_config = SettingsConfigDict(
        env_prefix="CWLOGSHIP_",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )


def parse_config(
    model: type[ModelT],
    config: ModelT | dict[str, Any] | None = None,
    **kwargs: Any,
) -> ModelT:
    """Coerce a model instance, mapping, or keyword overrides into ``model``.

    Keyword arguments win over values already present in ``config``.
    """
    if isinstance(config, model) and not kwargs:
        return config
    data: dict[str, Any] = {}
    if isinstance(config, BaseModel):
        data.update(config.model_dump())
    elif config is not None:
        data.update(config)
    data.update(kwargs)
    return model.model_validate(data)


# Mark Pydantic validators as used for vulture
_VULTURE_USED: tuple[object, ...] = (
    CloudWatchLogsConsumerConfig._ensure_name_non_empty,
    CloudWatchLogsConsumerConfig._ensure_valid_retention,
)
