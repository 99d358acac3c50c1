"""Exception hierarchy for skill storage and sync."""

from __future__ import annotations


class SkillError(Exception):
    """Base class for all errors reported to skillsync callers."""


class ValidationError(SkillError):
    """Caller-supplied input violates a precondition (e.g. an empty skill name)."""


class SkillIOError(SkillError):
    """A file-system write or delete failed.

    The originating ``OSError`` is chained as ``__cause__``.
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class MetadataCorruptError(SkillError):
    """The metadata file exists but could not be read or parsed.

    Never escapes ``load_metadata``; it is collapsed to the default document.
    """


class SyncError(SkillError):
    """A git command failed during push or pull.

    Attributes:
        output: Captured git output of the failing command
        lines: Log lines produced before the failure
    """

    def __init__(self, message: str, output: str = "", lines: list[str] | None = None):
        super().__init__(message)
        self.output = output
        self.lines = list(lines or [])
