"""Git-backed synchronization of the skills directory.

The skills directory is used as a git working tree. ``push`` bootstraps the
repository if needed, points ``origin`` at the configured remote, stages
everything plus the metadata file, and commits and pushes when something
changed. ``pull`` rebase-pulls the primary branch.

Both operations re-run the bootstrap and remote configuration every time, so
a failed attempt can simply be retried. Conflicts are left to git.
"""

from __future__ import annotations

import asyncio
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import aiofiles
import aiofiles.os

from config import Config
from skills.errors import SyncError
from utils import get_logger

from .git import GitRunner, ProcessError

logger = get_logger(__name__)

ORIGIN = "origin"
IGNORE_FILE = ".gitignore"
# Tracked copy of a metadata file that lives outside the skills directory
MIRROR_FILE = ".skill_meta.json"


class SyncStatus(Enum):
    """Terminal state of a sync operation."""

    PUSHED = "pushed"
    NOTHING_TO_PUSH = "nothing_to_push"
    PULLED = "pulled"


@dataclass
class SyncResult:
    """Outcome of a push or pull, with human-readable log lines."""

    action: str
    status: SyncStatus
    lines: list[str] = field(default_factory=list)
    output: str = ""


class SyncEngine:
    """Reconcile a skills directory with a git remote."""

    def __init__(
        self,
        commands_dir: str | Path,
        meta_file: str | Path,
        remote: str = "",
        branch: str | None = None,
        commit_message: str | None = None,
        runner: GitRunner | None = None,
    ) -> None:
        self.commands_dir = Path(commands_dir).expanduser()
        self.meta_file = Path(meta_file).expanduser()
        self.remote = (remote or "").strip()
        self.branch = branch or Config.GIT_BRANCH
        self.commit_message = commit_message or Config.GIT_COMMIT_MESSAGE
        self.runner = runner or GitRunner()

    async def _git(self, *args: str) -> str:
        return await self.runner.run(list(args), cwd=str(self.commands_dir))

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    async def push(self) -> SyncResult:
        """Commit local changes and push them to ``origin``.

        Raises:
            SyncError: If any git step fails
        """
        lines: list[str] = []
        try:
            await self._bootstrap(lines, write_ignore=True)
            await self._configure_remote(lines)

            await self._git("add", "--all", ".")
            await self._stage_metadata()

            staged = await self._git("diff", "--cached", "--name-only")
            if staged:
                await self._git("commit", "-m", self.commit_message)
                lines.append(f"Committed {len(staged.splitlines())} file(s)")
            else:
                # Commits left behind by an earlier failed push still need to go out
                ahead = await self._unpushed_commits()
                if not ahead:
                    lines.append("Nothing to push (no changes)")
                    return SyncResult("push", SyncStatus.NOTHING_TO_PUSH, lines)
                lines.append(f"Pushing {ahead} unpushed commit(s)")

            output = await self._git("push", "-u", ORIGIN, self.branch)
            lines.append(f"Pushed: {output}" if output else "Pushed")
        except ProcessError as e:
            raise self._failure("push", e.output or str(e), lines) from e
        except OSError as e:
            raise self._failure("push", str(e), lines) from e

        logger.info(f"Pushed to {ORIGIN}/{self.branch}")
        return SyncResult("push", SyncStatus.PUSHED, lines, output)

    async def pull(self) -> SyncResult:
        """Rebase-pull the primary branch from ``origin``.

        Raises:
            SyncError: If any git step fails, including rebase conflicts
        """
        lines: list[str] = []
        try:
            # No ignore file here: a fresh directory must not collide with the remote's copy
            await self._bootstrap(lines, write_ignore=False)
            await self._configure_remote(lines)

            mirror_before = await self._read_mirror()
            output = await self._git("pull", "--rebase", ORIGIN, self.branch)
            lines.append(f"Pulled: {output}" if output else "Pulled")

            if await self._restore_metadata(mirror_before):
                lines.append(f"Updated metadata file {self.meta_file}")
        except ProcessError as e:
            raise self._failure("pull", e.output or str(e), lines) from e
        except OSError as e:
            raise self._failure("pull", str(e), lines) from e

        logger.info(f"Pulled {ORIGIN}/{self.branch}")
        return SyncResult("pull", SyncStatus.PULLED, lines, output)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def _bootstrap(self, lines: list[str], write_ignore: bool) -> None:
        if not await aiofiles.os.path.exists(self.commands_dir / ".git"):
            await aiofiles.os.makedirs(self.commands_dir, exist_ok=True)
            await self._git("init")
            lines.append("Initialized git repo")

        # An unborn HEAD is (re)pointed at the primary branch, which also repairs
        # a previous bootstrap that stopped right after `git init`.
        if not await self._has_commits():
            await self._git("symbolic-ref", "HEAD", f"refs/heads/{self.branch}")

        if write_ignore:
            ignore_path = self.commands_dir / IGNORE_FILE
            if not await aiofiles.os.path.exists(ignore_path):
                async with aiofiles.open(ignore_path, "w", encoding="utf-8") as f:
                    await f.write("\n".join(Config.GIT_IGNORE_PATTERNS) + "\n")
                lines.append(f"Created {IGNORE_FILE}")

    async def _has_commits(self) -> bool:
        try:
            await self._git("rev-parse", "--verify", "--quiet", "HEAD")
        except ProcessError:
            return False
        return True

    async def _unpushed_commits(self) -> int:
        """Count local commits not yet on ``origin/<branch>``.

        Without a remote-tracking branch every local commit counts as unpushed.
        """
        if not await self._has_commits():
            return 0
        try:
            count = await self._git("rev-list", "--count", f"{ORIGIN}/{self.branch}..HEAD")
        except ProcessError:
            count = await self._git("rev-list", "--count", "HEAD")
        return int(count or 0)

    async def _configure_remote(self, lines: list[str]) -> None:
        if not self.remote:
            return
        try:
            current = await self._git("remote", "get-url", ORIGIN)
        except ProcessError:
            await self._git("remote", "add", ORIGIN, self.remote)
            lines.append(f"Added remote {ORIGIN}: {self.remote}")
            return

        await self._git("remote", "set-url", ORIGIN, self.remote)
        if current != self.remote:
            lines.append(f"Updated remote {ORIGIN}: {self.remote}")

    async def _stage_metadata(self) -> None:
        if not await aiofiles.os.path.exists(self.meta_file):
            return

        relative = self._metadata_in_tree()
        if relative is None:
            # git cannot track paths outside the working tree, so a copy is tracked instead
            mirror = self._mirror_path()
            await asyncio.to_thread(shutil.copyfile, self.meta_file, mirror)
            relative = mirror.name
        await self._git("add", "--", relative)

    async def _read_mirror(self) -> bytes | None:
        if self._metadata_in_tree() is not None:
            return None
        mirror = self._mirror_path()
        if not await aiofiles.os.path.exists(mirror):
            return None
        async with aiofiles.open(mirror, "rb") as f:
            return await f.read()

    async def _restore_metadata(self, mirror_before: bytes | None) -> bool:
        """Copy a mirror changed by the pull back to the metadata path."""
        if self._metadata_in_tree() is not None:
            return False
        mirror_after = await self._read_mirror()
        if mirror_after is None or mirror_after == mirror_before:
            return False

        await aiofiles.os.makedirs(self.meta_file.parent, exist_ok=True)
        await asyncio.to_thread(shutil.copyfile, self._mirror_path(), self.meta_file)
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _metadata_in_tree(self) -> str | None:
        """Return the metadata path relative to the working tree, or None if outside."""
        try:
            return self.meta_file.resolve().relative_to(self.commands_dir.resolve()).as_posix()
        except ValueError:
            return None

    def _mirror_path(self) -> Path:
        return self.commands_dir / MIRROR_FILE

    def _failure(self, action: str, detail: str, lines: list[str]) -> SyncError:
        lines.append(f"Error: {detail}")
        logger.error(f"Sync {action} failed: {detail}")
        return SyncError(f"git {action} failed: {detail}", output=detail, lines=lines)
