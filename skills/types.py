"""Data models for the skills repository."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Skill:
    name: str
    path: Path
    description: str = ""
    argument_hint: str = ""
    body: str = ""
    tags: list[str] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return f"/{self.name}"
