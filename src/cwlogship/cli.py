"""
Command-line entry point: ship stdin to CloudWatch Logs.

Each stdin line (trailing newline stripped) is handed to a consumer; the
remaining buffer is flushed at EOF. Flags override ``CWLOGSHIP_CONSUMER__*``
environment settings.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Any, Sequence, TextIO

from botocore.exceptions import BotoCoreError
from pydantic import ValidationError

from . import create_consumer
from .core.errors import LogShipError
from .core.settings import Settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cwlogship",
        description="Forward stdin lines to an AWS CloudWatch Logs stream.",
    )
    parser.add_argument("--region", help="AWS region")
    parser.add_argument("--group", help="destination log group")
    parser.add_argument("--stream", help="destination log stream")
    parser.add_argument(
        "--retention-in-days",
        type=int,
        dest="retention_in_days",
        help="retention applied when the group is first provisioned",
    )
    return parser


async def ship(
    source: TextIO,
    *,
    settings: Settings | None = None,
    **overrides: Any,
) -> None:
    consumer = create_consumer(settings=settings, **overrides)
    async with consumer:
        for raw in source:
            await consumer.accept(raw.rstrip("\r\n"))


async def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    try:
        await ship(
            sys.stdin,
            region=args.region,
            group=args.group,
            stream=args.stream,
            retention_in_days=args.retention_in_days,
        )
        return 0
    except ValidationError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1
    except (LogShipError, BotoCoreError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cli_main() -> int:
    """CLI main function for non-async entry."""
    return asyncio.run(main())


if __name__ == "__main__":
    sys.exit(cli_main())
