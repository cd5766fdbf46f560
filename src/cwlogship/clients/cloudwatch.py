"""
AWS CloudWatch Logs adapter backed by boto3.

boto3 is synchronous; every call is pushed to a worker thread with
``asyncio.to_thread`` so the event loop keeps accepting lines while a batch
is in flight. ``ClientError`` codes the consumer reacts to are translated
into the shipper's own error types; everything else propagates unchanged.
"""

from __future__ import annotations

import asyncio
from typing import Any, Sequence

import boto3
from botocore.exceptions import ClientError

from ..core.errors import AlreadyExistsError, SequenceTokenConflictError
from ..core.settings import CloudWatchLogsConsumerConfig

_ALREADY_EXISTS = "ResourceAlreadyExistsException"
_SEQUENCE_CONFLICTS = (
    "InvalidSequenceTokenException",
    "DataAlreadyAcceptedException",
)


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


class Boto3LogsClient:
    """Async facade over a boto3 ``logs`` client."""

    name = "cloudwatch"

    def __init__(self, client: Any) -> None:
        self._client = client

    @classmethod
    def from_config(cls, config: CloudWatchLogsConsumerConfig) -> Boto3LogsClient:
        return cls(boto3.client("logs", region_name=config.region))

    async def create_log_group(self, group: str) -> None:
        try:
            await asyncio.to_thread(self._client.create_log_group, logGroupName=group)
        except ClientError as e:
            if _error_code(e) == _ALREADY_EXISTS:
                raise AlreadyExistsError("log group", group, cause=e) from e
            raise

    async def create_log_stream(self, group: str, stream: str) -> None:
        try:
            await asyncio.to_thread(
                self._client.create_log_stream,
                logGroupName=group,
                logStreamName=stream,
            )
        except ClientError as e:
            if _error_code(e) == _ALREADY_EXISTS:
                raise AlreadyExistsError("log stream", stream, cause=e) from e
            raise

    async def put_retention_policy(self, group: str, days: int) -> None:
        await asyncio.to_thread(
            self._client.put_retention_policy,
            logGroupName=group,
            retentionInDays=days,
        )

    async def put_log_events(
        self,
        group: str,
        stream: str,
        events: Sequence[dict[str, Any]],
        sequence_token: str | None = None,
    ) -> str | None:
        kwargs: dict[str, Any] = {
            "logGroupName": group,
            "logStreamName": stream,
            "logEvents": list(events),
        }
        if sequence_token is not None:
            kwargs["sequenceToken"] = sequence_token

        try:
            response = await asyncio.to_thread(self._client.put_log_events, **kwargs)
        except ClientError as e:
            code = _error_code(e)
            if code in _SEQUENCE_CONFLICTS:
                raise SequenceTokenConflictError(
                    f"{code} on {group}/{stream}",
                    expected_sequence_token=e.response.get("Error", {}).get(
                        "expectedSequenceToken"
                    ),
                    cause=e,
                ) from e
            raise
        token = response.get("nextSequenceToken")
        return str(token) if token is not None else None
