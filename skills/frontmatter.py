"""Parsing and building of skill files with a front-matter preamble.

A skill file looks like::

    ---
    description: Draft a blog post
    argument-hint: [topic] [tone]
    ---

    Write a blog post about $ARGUMENTS.

Values are plain strings split on the first colon; no YAML typing is applied.
Only ``description`` and ``argument-hint`` are written back, so other keys do
not survive a parse/build round trip.
"""

from __future__ import annotations

from .types import Skill

DELIMITER = "---"
DESCRIPTION_KEY = "description"
ARGUMENT_HINT_KEY = "argument-hint"


def _is_delimiter(line: str) -> bool:
    return line.rstrip("\r") == DELIMITER


def parse_frontmatter(text: str) -> tuple[dict[str, str], str]:
    """Split a skill document into its front-matter fields and body.

    Args:
        text: Full file content

    Returns:
        (fields, body). Without a leading ``---`` line, or without a closing
        one, fields is empty and body is the original text unchanged.
    """
    lines = text.split("\n")
    if not lines or not _is_delimiter(lines[0]):
        return {}, text

    end_idx = None
    for i in range(1, len(lines)):
        if _is_delimiter(lines[i]):
            end_idx = i
            break

    if end_idx is None:
        return {}, text

    fields: dict[str, str] = {}
    for line in lines[1:end_idx]:
        if not line.strip():
            continue
        key, sep, value = line.partition(":")
        key = key.strip()
        if not sep or not key:
            continue
        fields[key] = value.strip()

    body = "\n".join(lines[end_idx + 1 :]).strip()
    return fields, body


def build_frontmatter(skill: Skill) -> str:
    """Serialize a skill to file content.

    The front-matter block is always emitted, empty or not.
    """
    lines = [DELIMITER]
    if skill.description:
        lines.append(f"{DESCRIPTION_KEY}: {skill.description}")
    if skill.argument_hint:
        lines.append(f"{ARGUMENT_HINT_KEY}: {skill.argument_hint}")
    lines.extend([DELIMITER, "", skill.body])
    return "\n".join(lines)
