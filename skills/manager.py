"""Skill manager: the entry point used by the CLI and other front ends."""

from __future__ import annotations

from typing import Iterable

from sync.engine import SyncEngine, SyncResult
from utils import get_logger

from .metadata import load_metadata
from .repository import SkillRepository
from .search import filter_skills
from .settings import SettingsStore, SkillSettings
from .types import Skill

logger = get_logger(__name__)


class SkillManager:
    """Bundle settings, the repository and the sync engine behind one API."""

    def __init__(
        self,
        settings: SkillSettings,
        settings_store: SettingsStore | None = None,
    ) -> None:
        self.settings = settings
        self.settings_store = settings_store

    @classmethod
    async def load(
        cls,
        settings_store: SettingsStore | None = None,
        commands_dir: str | None = None,
        meta_file: str | None = None,
    ) -> SkillManager:
        """Create a manager from persisted settings.

        When the settings carry no remote, the one stored in the metadata
        file is used instead, so the remote survives a lost settings file.

        Args:
            settings_store: Where settings are read and saved
            commands_dir: One-off override of the skills directory
            meta_file: One-off override of the metadata file
        """
        settings_store = settings_store or SettingsStore()
        settings = settings_store.load()
        if commands_dir:
            settings.commands_dir = commands_dir
        if meta_file:
            settings.meta_file = meta_file

        if not settings.remote:
            meta = await load_metadata(settings.meta_file)
            if meta.remote:
                logger.info("Using remote from metadata file")
                settings.remote = meta.remote

        return cls(settings, settings_store)

    @property
    def repository(self) -> SkillRepository:
        return SkillRepository(self.settings.commands_dir, self.settings.meta_file)

    def sync_engine(self) -> SyncEngine:
        return SyncEngine(
            self.settings.commands_dir,
            self.settings.meta_file,
            remote=self.settings.remote,
        )

    async def list_skills(self, query: str = "") -> list[Skill]:
        return filter_skills(await self.repository.list_skills(), query)

    async def get_skill(self, name: str) -> Skill | None:
        return await self.repository.get_skill(name)

    async def create_skill(
        self,
        name: str,
        description: str = "",
        argument_hint: str = "",
        body: str = "",
    ) -> Skill:
        return await self.repository.create_skill(name, description, argument_hint, body)

    async def update_skill(self, skill: Skill) -> Skill:
        return await self.repository.update_skill(skill)

    async def delete_skill(self, name: str) -> None:
        await self.repository.delete_skill(name)

    async def set_tags(self, name: str, tags: str | Iterable[str]) -> list[str]:
        return await self.repository.set_tags(name, tags)

    async def set_remote(self, url: str) -> None:
        """Store the remote in the settings and mirror it into the metadata file."""
        url = url.strip()
        self.settings.remote = url
        if self.settings_store is not None:
            self.settings_store.save(self.settings)
        await self.repository.set_remote(url)

    async def sync_push(self) -> SyncResult:
        return await self.sync_engine().push()

    async def sync_pull(self) -> SyncResult:
        return await self.sync_engine().pull()
