"""Filtering of skill listings."""

from __future__ import annotations

from typing import Iterable

from .types import Skill


def matches(skill: Skill, query: str) -> bool:
    q = query.lower()
    return (
        q in skill.name.lower()
        or q in skill.description.lower()
        or any(q in tag.lower() for tag in skill.tags)
    )


def filter_skills(skills: Iterable[Skill], query: str = "") -> list[Skill]:
    """Keep skills whose name, description or a tag contains ``query``.

    Matching is case-insensitive. A blank query keeps everything.
    """
    query = query.strip()
    if not query:
        return list(skills)
    return [skill for skill in skills if matches(skill, query)]
