"""Git synchronization of the skills directory."""

from .engine import SyncEngine, SyncResult, SyncStatus
from .git import GitRunner, ProcessError

__all__ = [
    "GitRunner",
    "ProcessError",
    "SyncEngine",
    "SyncResult",
    "SyncStatus",
]
