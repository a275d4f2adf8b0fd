"""
Command runner for the shadcn MCP server.

Runs one external process per call:
- Argument-vector execution (no shell)
- Working directory per call
- Optional timeout, process always reaped
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
import logging
from pathlib import Path
import shlex
from typing import Protocol

logger = logging.getLogger("shadcn-mcp.runner")


class CommandExecutionError(Exception):
    """Raised when a command exits non-zero, cannot be spawned, or times out."""

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.message = message
        self.returncode = returncode


@dataclass
class CommandResult:
    """Captured output of a successful command."""

    stdout: str
    stderr: str
    returncode: int = 0


class CommandRunner(Protocol):
    async def __call__(self, argv: Sequence[str], cwd: str | Path) -> CommandResult: ...


def _decode(data: bytes | None) -> str:
    return data.decode("utf-8", errors="replace") if data else ""


async def run_command(
    argv: Sequence[str],
    cwd: str | Path,
    timeout: float | None = None,
) -> CommandResult:
    """
    Execute ``argv`` in ``cwd`` and wait for it to finish.

    The directory is not checked up front; a missing one surfaces as a
    spawn failure.

    Args:
        argv: Program followed by its arguments
        cwd: Working directory for execution
        timeout: Max execution time in seconds (None waits indefinitely)

    Returns:
        CommandResult with stdout and stderr

    Raises:
        CommandExecutionError: non-zero exit (message is stderr), spawn
            failure, or timeout
    """
    if not argv:
        raise CommandExecutionError("Empty command")

    display = shlex.join(argv)
    logger.debug(f"Running {display} in {cwd}")

    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=str(cwd),
        )
    except OSError as e:
        logger.warning(f"Failed to spawn {display}: {e}")
        raise CommandExecutionError(str(e)) from e

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise CommandExecutionError(f"Command timed out after {timeout}s") from None
    except BaseException:
        # Cancellation: do not leave a child behind.
        if process.returncode is None:
            process.kill()
            await process.wait()
        raise

    returncode = process.returncode if process.returncode is not None else -1
    out_text = _decode(stdout)
    err_text = _decode(stderr)

    if returncode != 0:
        logger.debug(f"{display} exited with {returncode}")
        message = err_text or f"Command failed with exit code {returncode}"
        raise CommandExecutionError(message, returncode=returncode)

    return CommandResult(stdout=out_text, stderr=err_text, returncode=returncode)


def make_runner(timeout: float | None = None) -> CommandRunner:
    """Bind a timeout into a runner usable by the dispatcher."""

    async def runner(argv: Sequence[str], cwd: str | Path) -> CommandResult:
        return await run_command(argv, cwd, timeout=timeout)

    return runner
