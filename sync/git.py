"""Thin async wrapper around the git binary."""

from __future__ import annotations

import asyncio
import shlex
from typing import Sequence

from utils import get_logger

logger = get_logger(__name__)


class ProcessError(Exception):
    """A git invocation could not start or exited non-zero."""

    def __init__(self, command: Sequence[str], returncode: int | None, output: str):
        self.command = list(command)
        self.returncode = returncode
        self.output = output
        detail = output or "no output"
        super().__init__(f"`{shlex.join(self.command)}` failed ({returncode}): {detail}")


class GitRunner:
    """Run git commands and return their combined stdout/stderr.

    There is no timeout: the call blocks until git exits.
    """

    def __init__(self, git_binary: str = "git") -> None:
        self.git_binary = git_binary

    async def run(self, args: Sequence[str], cwd: str) -> str:
        """Execute ``git <args>`` in ``cwd``.

        Args:
            args: Git command arguments (without the 'git' prefix)
            cwd: Working directory

        Returns:
            Stripped combined output

        Raises:
            ProcessError: If git is missing, cwd does not exist, or the exit code is non-zero
        """
        command = [self.git_binary, *args]
        logger.debug(f"Running {shlex.join(command)} in {cwd}")
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                cwd=cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except FileNotFoundError as e:
            raise ProcessError(
                command, None, f"git command not found or missing directory {cwd}: {e}"
            ) from e
        except OSError as e:
            raise ProcessError(command, None, str(e)) from e

        stdout, _ = await process.communicate()
        output = stdout.decode(errors="replace").strip() if stdout else ""

        if process.returncode != 0:
            raise ProcessError(command, process.returncode, output)
        return output
