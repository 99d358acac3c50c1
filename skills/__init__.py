"""Skill storage for skillsync: front-matter files plus a JSON metadata side-car."""

from .errors import (
    MetadataCorruptError,
    SkillError,
    SkillIOError,
    SyncError,
    ValidationError,
)
from .frontmatter import build_frontmatter, parse_frontmatter
from .metadata import MetadataDocument, load_metadata, save_metadata
from .repository import SkillRepository, parse_tags
from .search import filter_skills
from .settings import SettingsStore, SkillSettings
from .types import Skill

__all__ = [
    "MetadataCorruptError",
    "MetadataDocument",
    "SettingsStore",
    "Skill",
    "SkillError",
    "SkillIOError",
    "SkillRepository",
    "SkillSettings",
    "SyncError",
    "ValidationError",
    "build_frontmatter",
    "filter_skills",
    "load_metadata",
    "parse_frontmatter",
    "parse_tags",
    "save_metadata",
]
