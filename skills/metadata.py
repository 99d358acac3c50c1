"""JSON side-car metadata store for skills.

The metadata file holds what does not live in the skill files themselves:
tags per skill name and the configured git remote::

    {"skills": {"<name>": {"tags": ["t1", "t2"]}}, "remote": "<url-or-empty>"}

Metadata is auxiliary. A missing, unreadable or malformed file loads as an
empty document so listing skills keeps working; the skill files stay the
source of truth for which skills exist.
"""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
from contextlib import suppress
from dataclasses import dataclass, field
from typing import Any, Iterable

import aiofiles
import aiofiles.os

from utils import get_logger

from .errors import MetadataCorruptError, SkillIOError

logger = get_logger(__name__)


@dataclass
class MetadataDocument:
    """In-memory form of the metadata file.

    Per-skill records and top-level keys this code does not know about are
    carried through unchanged so a save never drops them.
    """

    skills: dict[str, dict[str, Any]] = field(default_factory=dict)
    remote: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    def tags_for(self, name: str) -> list[str]:
        entry = self.skills.get(name) or {}
        return list(entry.get("tags") or [])

    def set_tags(self, name: str, tags: Iterable[str]) -> None:
        entry = self.skills.setdefault(name, {})
        entry["tags"] = list(tags)

    def remove(self, name: str) -> bool:
        return self.skills.pop(name, None) is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MetadataDocument:
        raw_skills = data.get("skills")
        if not isinstance(raw_skills, dict):
            if raw_skills is not None:
                logger.warning("Invalid metadata format: 'skills' should be a mapping")
            raw_skills = {}

        skills: dict[str, dict[str, Any]] = {}
        for name, entry in raw_skills.items():
            if not isinstance(entry, dict):
                logger.warning(f"Invalid metadata entry for '{name}', ignoring it")
                skills[str(name)] = {}
                continue
            record = dict(entry)
            tags = record.get("tags")
            if tags is not None and not isinstance(tags, list):
                logger.warning(f"Invalid tags for '{name}', expected a list")
                record.pop("tags")
            elif isinstance(tags, list):
                record["tags"] = [t for t in tags if isinstance(t, str)]
            skills[str(name)] = record

        remote = data.get("remote")
        extra = {k: v for k, v in data.items() if k not in {"skills", "remote"}}
        return cls(
            skills=skills,
            remote=remote if isinstance(remote, str) else "",
            extra=extra,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"skills": self.skills, "remote": self.remote}
        result.update(self.extra)
        return result


async def _read_metadata(path: str) -> MetadataDocument:
    if not await aiofiles.os.path.exists(path):
        return MetadataDocument()

    try:
        async with aiofiles.open(path, encoding="utf-8") as f:
            content = await f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise MetadataCorruptError(f"cannot read {path}: {e}") from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise MetadataCorruptError(f"invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise MetadataCorruptError(f"expected a JSON object in {path}")

    return MetadataDocument.from_dict(data)


async def load_metadata(path: str) -> MetadataDocument:
    """Load the metadata document, falling back to an empty one.

    Never raises for a missing or corrupt file.
    """
    try:
        return await _read_metadata(path)
    except MetadataCorruptError as e:
        logger.warning(f"Ignoring metadata file: {e}")
        return MetadataDocument()


async def save_metadata(path: str, doc: MetadataDocument) -> None:
    """Replace the metadata file with the serialized document.

    Raises:
        SkillIOError: If the file could not be written
    """
    content = json.dumps(doc.to_dict(), indent=2, ensure_ascii=False) + "\n"
    directory = os.path.dirname(path) or "."
    tmp_path = None
    try:
        await aiofiles.os.makedirs(directory, exist_ok=True)
        fd, tmp_path = await asyncio.to_thread(
            tempfile.mkstemp, prefix=".skill_meta.", suffix=".tmp", dir=directory
        )
        os.close(fd)
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(content)
        await asyncio.to_thread(os.replace, tmp_path, path)
    except OSError as e:
        raise SkillIOError(f"Failed to write metadata file {path}: {e}", path=path) from e
    finally:
        if tmp_path is not None:
            with suppress(OSError):
                await aiofiles.os.remove(tmp_path)
