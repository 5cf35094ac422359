"""
Unit tests for data models
"""

import pytest
from pull_review.models import ChangedFile, FileStatus, BlameEntry, Commit, Candidate


class TestChangedFile:
    """Test cases for ChangedFile dataclass."""

    def test_line_load_uses_additions_and_deletions(self):
        """Test that line load sums additions and deletions."""
        file = ChangedFile('a.py', FileStatus.MODIFIED, changes=50, additions=20, deletions=30)
        assert file.line_load == 50

    def test_line_load_falls_back_to_changes(self):
        """Test that line load uses changes when additions/deletions are missing."""
        file = ChangedFile('a.py', FileStatus.MODIFIED, changes=7)
        assert file.line_load == 7

    @pytest.mark.parametrize('status,expected', [
        (FileStatus.ADDED, False),
        (FileStatus.DELETED, False),
        (FileStatus.MODIFIED, True),
        (FileStatus.RENAMED, True),
    ])
    def test_counts_toward_line_load(self, status, expected):
        """Test that added and deleted files do not count toward line load."""
        file = ChangedFile('a.py', status, changes=1)
        assert file.counts_toward_line_load is expected


class TestCommit:
    """Test cases for Commit.from_api."""

    def test_from_api_with_author(self):
        """Test reading the author login of a GitHub commit."""
        commit = Commit.from_api({'author': {'login': 'charlie'}})
        assert commit.author_login == 'charlie'

    def test_from_api_without_author(self):
        """Test commits whose author has no GitHub account."""
        assert Commit.from_api({'author': None}).author_login is None
        assert Commit.from_api({}).author_login is None

    def test_from_api_with_malformed_author(self):
        """Test that an author that is not a mapping has no login."""
        assert Commit.from_api({'author': 'b'}).author_login is None


class TestCandidate:
    """Test cases for Candidate dataclass."""

    def test_defaults(self):
        """Test that Candidate defaults to a blame source with no count."""
        candidate = Candidate('bob')
        assert candidate.count == 0
        assert candidate.source == 'blame'

    def test_to_dict(self):
        """Test conversion to the public record shape."""
        candidate = Candidate('bob', 13, 'blame')
        assert candidate.to_dict() == {'login': 'bob', 'count': 13, 'source': 'blame'}

    def test_blame_entry_keeps_age(self):
        """Test that BlameEntry preserves age."""
        entry = BlameEntry('bob', 5, 3)
        assert entry.age == 3
