"""
Testing utilities for code embedding cwlogship.

Example:
    from cwlogship import CloudWatchLogsConsumer
    from cwlogship.testing import InMemoryLogsClient

    async def test_ships_lines():
        client = InMemoryLogsClient()
        consumer = CloudWatchLogsConsumer(group="g", stream="s", client=client)
        await consumer.accept("hello")
        await consumer.flush()
        assert client.messages() == ["hello"]
"""

from .mocks import InMemoryLogsClient, LogsCall

__all__ = ["InMemoryLogsClient", "LogsCall"]
