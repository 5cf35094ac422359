"""Data models for reviewer selection."""

import enum
from dataclasses import dataclass, asdict
from typing import Dict, Optional


class FileStatus(str, enum.Enum):
    """Change status of a file in a pull request."""
    ADDED = 'added'
    MODIFIED = 'modified'
    DELETED = 'deleted'
    RENAMED = 'renamed'


# GitHub reports a few statuses the selection treats as one of the above
STATUS_ALIASES = {
    'removed': FileStatus.DELETED,
    'copied': FileStatus.MODIFIED,
    'changed': FileStatus.MODIFIED,
    'unchanged': FileStatus.MODIFIED,
}


@dataclass(frozen=True)
class ChangedFile:
    """A file changed by the pull request."""
    filename: str
    status: FileStatus
    changes: int
    additions: Optional[int] = None
    deletions: Optional[int] = None

    @property
    def counts_toward_line_load(self) -> bool:
        """Added and deleted files carry no reviewable prior history."""
        return self.status not in (FileStatus.ADDED, FileStatus.DELETED)

    @property
    def line_load(self) -> int:
        """Lines a reviewer has to read for this file."""
        if self.additions is None or self.deletions is None:
            return self.changes
        return self.additions + self.deletions


@dataclass(frozen=True)
class BlameEntry:
    """Lines of a file attributed to one author."""
    login: str
    count: int
    age: int  # smaller is more recent


@dataclass(frozen=True)
class Commit:
    """A commit inside the pull request."""
    author_login: Optional[str]

    @classmethod
    def from_api(cls, data: Dict) -> 'Commit':
        """Build from a GitHub commit object (``author`` may be null)."""
        author = data.get('author')
        if not isinstance(author, dict):
            return cls(author_login=None)
        return cls(author_login=author.get('login'))


@dataclass
class Candidate:
    """A reviewer chosen for the pull request, tagged with its provenance."""
    login: str
    count: int = 0
    source: str = 'blame'

    def to_dict(self) -> Dict:
        return asdict(self)
