"""Skill repository: skill files on disk joined with the metadata store."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Iterable

import aiofiles
import aiofiles.os

from config import Config
from utils import get_logger

from .errors import SkillIOError, ValidationError
from .frontmatter import ARGUMENT_HINT_KEY, DESCRIPTION_KEY, build_frontmatter, parse_frontmatter
from .metadata import load_metadata, save_metadata
from .types import Skill

logger = get_logger(__name__)


def parse_tags(value: str | Iterable[str]) -> list[str]:
    """Normalize tag input: split on commas, trim, drop empties.

    Order and duplicates are kept.
    """
    items = value.split(",") if isinstance(value, str) else value
    return [tag.strip() for tag in items if tag.strip()]


async def read_text(path: Path) -> str:
    # Undecodable bytes become U+FFFD so one bad file cannot hide the others
    async with aiofiles.open(path, encoding="utf-8", errors="replace") as handle:
        return await handle.read()


def validate_name(name: str) -> str:
    """Return the trimmed skill name.

    Raises:
        ValidationError: If the name is empty or contains a path separator
    """
    name = name.strip()
    if not name:
        raise ValidationError("Skill name cannot be empty")
    if "/" in name or (os.sep != "/" and os.sep in name):
        raise ValidationError(f"Skill name cannot contain a path separator: {name!r}")
    return name


async def list_skill_files(commands_dir: Path, extension: str) -> list[Path]:
    if not await aiofiles.os.path.exists(commands_dir):
        return []

    def _collect() -> list[Path]:
        return sorted(
            (p for p in commands_dir.iterdir() if p.name.endswith(extension) and p.is_file()),
            key=lambda p: p.name,
        )

    return await asyncio.to_thread(_collect)


class SkillRepository:
    """List, create, update, delete and tag skills.

    Nothing is cached: every call re-reads the directory and the metadata
    file, and every mutation writes through immediately.
    """

    def __init__(
        self,
        commands_dir: str | Path,
        meta_file: str | Path,
        extension: str | None = None,
    ) -> None:
        self.commands_dir = Path(commands_dir).expanduser()
        self.meta_file = str(Path(meta_file).expanduser())
        self.extension = extension or Config.SKILL_EXTENSION

    def skill_path(self, name: str) -> Path:
        return self.commands_dir / f"{name}{self.extension}"

    def _name_from_path(self, path: Path) -> str:
        return path.name[: -len(self.extension)]

    async def list_skills(self) -> list[Skill]:
        """Return all skills sorted by file name, with tags from metadata."""
        files = await list_skill_files(self.commands_dir, self.extension)
        if not files:
            return []

        meta = await load_metadata(self.meta_file)
        skills: list[Skill] = []
        for skill_file in files:
            try:
                content = await read_text(skill_file)
            except OSError as e:
                logger.warning(f"Skipping unreadable skill file {skill_file}: {e}")
                continue
            fields, body = parse_frontmatter(content)
            name = self._name_from_path(skill_file)
            skills.append(
                Skill(
                    name=name,
                    path=skill_file.resolve(),
                    description=fields.get(DESCRIPTION_KEY, ""),
                    argument_hint=fields.get(ARGUMENT_HINT_KEY, ""),
                    body=body,
                    tags=meta.tags_for(name),
                )
            )
        return skills

    async def get_skill(self, name: str) -> Skill | None:
        for skill in await self.list_skills():
            if skill.name == name:
                return skill
        return None

    async def create_skill(
        self,
        name: str,
        description: str = "",
        argument_hint: str = "",
        body: str = "",
    ) -> Skill:
        """Write a new skill file, replacing any file with the same name.

        Raises:
            ValidationError: If the name is empty or contains a path separator
            SkillIOError: If the file could not be written
        """
        name = validate_name(name)
        skill = Skill(
            name=name,
            path=self.skill_path(name).resolve(),
            description=description.strip(),
            argument_hint=argument_hint.strip(),
            body=body,
        )
        try:
            await aiofiles.os.makedirs(self.commands_dir, exist_ok=True)
        except OSError as e:
            raise SkillIOError(
                f"Cannot create skills directory {self.commands_dir}: {e}",
                path=str(self.commands_dir),
            ) from e
        await self._write(skill)

        meta = await load_metadata(self.meta_file)
        skill.tags = meta.tags_for(name)
        logger.info(f"Created skill '{name}' at {skill.path}")
        return skill

    async def update_skill(self, skill: Skill) -> Skill:
        """Overwrite the skill's backing file with its current fields."""
        await self._write(skill)
        logger.info(f"Updated skill '{skill.name}'")
        return skill

    async def delete_skill(self, name: str) -> None:
        """Remove the skill file, then its metadata entry.

        Raises:
            ValidationError: If the name is empty or contains a path separator
            SkillIOError: If the file could not be removed; metadata is left as is
        """
        name = validate_name(name)
        path = self.skill_path(name)
        try:
            await aiofiles.os.remove(path)
        except OSError as e:
            raise SkillIOError(f"Failed to delete {path}: {e}", path=str(path)) from e

        meta = await load_metadata(self.meta_file)
        if meta.remove(name):
            await save_metadata(self.meta_file, meta)
        logger.info(f"Deleted skill '{name}'")

    async def set_tags(self, name: str, tags: str | Iterable[str]) -> list[str]:
        """Replace the tags stored for ``name`` and return them."""
        name = validate_name(name)
        normalized = parse_tags(tags)
        meta = await load_metadata(self.meta_file)
        meta.set_tags(name, normalized)
        await save_metadata(self.meta_file, meta)
        logger.info(f"Set tags for '{name}': {normalized}")
        return normalized

    async def get_remote(self) -> str:
        meta = await load_metadata(self.meta_file)
        return meta.remote

    async def set_remote(self, url: str) -> None:
        meta = await load_metadata(self.meta_file)
        meta.remote = url
        await save_metadata(self.meta_file, meta)

    async def _write(self, skill: Skill) -> None:
        try:
            async with aiofiles.open(skill.path, "w", encoding="utf-8") as handle:
                await handle.write(build_frontmatter(skill))
        except OSError as e:
            raise SkillIOError(f"Failed to write {skill.path}: {e}", path=str(skill.path)) from e
