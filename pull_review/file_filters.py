"""File filtering utilities: validating changed files, review load and fallback paths."""

import fnmatch
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .errors import MissingFileDataError
from .models import ChangedFile, FileStatus, STATUS_ALIASES

REQUIRED_FILE_FIELDS = ('filename', 'status', 'changes')


@dataclass(frozen=True)
class FileLoad:
    """Validated files of a pull request and the review load they represent."""
    files: List[ChangedFile]
    distinct_file_count: int
    total_line_load: int

    @property
    def blame_files(self) -> List[ChangedFile]:
        """Files with a base revision to blame (added files have none)."""
        return [f for f in self.files if f.status != FileStatus.ADDED]


class FileFilter:
    """Handles validation and filtering of the files changed by a pull request."""

    def __init__(self, excluded_file_patterns: Sequence[str] = None,
                 fallback_paths: Dict[str, Tuple[str, ...]] = None):
        """Initialize the file filter.

        Args:
            excluded_file_patterns: File patterns to leave out of review entirely
            fallback_paths: Mapping from path pattern to designated reviewer logins
        """
        self.excluded_file_patterns = list(excluded_file_patterns or [])
        self.fallback_paths = dict(fallback_paths or {})

    def match_pattern(self, filename: str, pattern: str) -> bool:
        """Check if a filename matches a pattern (supports * wildcards).

        A pattern naming a directory also matches every file below it.

        Args:
            filename: The filename to check
            pattern: The pattern to match against

        Returns:
            True if the filename matches the pattern, False otherwise
        """
        if fnmatch.fnmatchcase(filename, pattern):
            return True
        directory = pattern.rstrip('/')
        return bool(directory) and filename.startswith(directory + '/')

    def is_excluded(self, filename: str) -> bool:
        """Check if a file should be excluded based on patterns."""
        return any(
            self.match_pattern(filename, pattern)
            for pattern in self.excluded_file_patterns
        )

    def validate_files(self, files: Optional[Iterable]) -> List[ChangedFile]:
        """Validate raw file entries from the GitHub API.

        Every entry must carry filename, status and changes; a single bad
        entry rejects the whole list.

        Args:
            files: File objects (mappings or ChangedFile instances)

        Returns:
            List of ChangedFile in input order

        Raises:
            MissingFileDataError: If any entry is incomplete or malformed
        """
        validated = []
        for entry in files or []:
            if isinstance(entry, ChangedFile):
                validated.append(entry)
            else:
                validated.append(self._validate_entry(entry))
        return validated

    @staticmethod
    def _validate_entry(entry) -> ChangedFile:
        if not isinstance(entry, dict) or any(entry.get(key) is None for key in REQUIRED_FILE_FIELDS):
            raise MissingFileDataError(f"Missing file data: {entry!r}")

        filename = entry['filename']
        raw_status = entry['status']
        changes = entry['changes']

        if not isinstance(filename, str) or not filename:
            raise MissingFileDataError(f"Missing file data: invalid filename {filename!r}")

        if not isinstance(raw_status, str):
            raise MissingFileDataError(f"Missing file data: unknown status {raw_status!r} for {filename}")
        try:
            status = STATUS_ALIASES.get(raw_status) or FileStatus(raw_status)
        except ValueError:
            raise MissingFileDataError(f"Missing file data: unknown status {raw_status!r} for {filename}")

        line_counts = [changes, entry.get('additions'), entry.get('deletions')]
        for value in line_counts:
            if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 0):
                raise MissingFileDataError(f"Missing file data: invalid line count {value!r} for {filename}")

        return ChangedFile(
            filename=filename,
            status=status,
            changes=changes,
            additions=entry.get('additions'),
            deletions=entry.get('deletions'),
        )

    def calculate_load(self, files: List[ChangedFile]) -> FileLoad:
        """Calculate the review load of validated files.

        Files matching an excluded pattern are dropped. Added and deleted
        files still count as files but not toward the line load.

        Args:
            files: Validated changed files

        Returns:
            FileLoad with the remaining files, distinct file count and line load
        """
        kept = []
        total_line_load = 0
        excluded_files_count = 0

        for file in files:
            if self.is_excluded(file.filename):
                excluded_files_count += 1
                logging.debug(f"Excluding file: {file.filename} ({file.changes} changes)")
                continue

            kept.append(file)
            if file.counts_toward_line_load:
                total_line_load += file.line_load
            else:
                logging.debug(f"Not counting lines of {file.status.value} file: {file.filename}")

        if excluded_files_count > 0:
            logging.info(f"Excluded {excluded_files_count} file(s) matching excluded patterns")

        return FileLoad(
            files=kept,
            distinct_file_count=len({f.filename for f in kept}),
            total_line_load=total_line_load,
        )

    def fallback_pattern_for(self, filename: str) -> Optional[str]:
        """Find the most specific fallback pattern matching a file.

        Longer patterns win; equally long patterns are ordered lexicographically,
        so the result does not depend on configuration order.
        """
        matches = [p for p in self.fallback_paths if self.match_pattern(filename, p)]
        if not matches:
            return None
        return min(matches, key=lambda p: (-len(p), p))

    def fallback_reviewers(self, files: List[ChangedFile]) -> List[str]:
        """Designated fallback reviewers for the files, in file order, without duplicates."""
        logins = []
        for file in files:
            pattern = self.fallback_pattern_for(file.filename)
            if pattern is None:
                continue
            for login in self.fallback_paths[pattern]:
                if login not in logins:
                    logins.append(login)
        return logins
