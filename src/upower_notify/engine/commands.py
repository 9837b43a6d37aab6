"""
CommandRunner — fire-and-forget shell hooks.

Each command is spawned with ``sh -c``. A command that fails to spawn
is logged and skipped; it never stops the commands after it nor the
event being handled.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Sequence

logger = logging.getLogger(__name__)

Spawner = Callable[[str], Awaitable[Any]]


class CommandRunner:
    """Spawns shell commands without waiting for them."""

    def __init__(self, spawner: Optional[Spawner] = None) -> None:
        self._spawner = spawner or self._spawn_shell
        self._reapers: set[asyncio.Task[None]] = set()

    async def run_all(self, commands: Sequence[str]) -> int:
        """Spawn every command in order; return how many were started."""
        started = 0
        for cmd in commands:
            logger.info("Executing: %s", cmd)
            try:
                await self._spawner(cmd)
            except Exception:
                logger.exception("Failed to spawn command %r", cmd)
                continue
            started += 1
        return started

    async def _spawn_shell(self, cmd: str) -> asyncio.subprocess.Process:
        proc = await asyncio.create_subprocess_shell(cmd)
        task = asyncio.create_task(self._reap(cmd, proc))
        self._reapers.add(task)
        task.add_done_callback(self._reapers.discard)
        return proc

    async def _reap(self, cmd: str, proc: asyncio.subprocess.Process) -> None:
        returncode = await proc.wait()
        logger.debug("Command %r exited with status %s", cmd, returncode)
