"""
Unit tests for fallback selection
"""

import random

import pytest
from pull_review.file_filters import FileFilter
from pull_review.models import Candidate, ChangedFile, FileStatus
from pull_review.selection.eligibility import EligibilityFilter, RosterPolicy, CommitAuthorPolicy
from pull_review.selection.fallback import FallbackSelector

ROSTER = {'alice': {}, 'bob': {}, 'charlie': {}, 'dee': {}}
FILES = [
    ChangedFile('app/web/index.js', FileStatus.MODIFIED, 1),
    ChangedFile('app/api/index.js', FileStatus.MODIFIED, 1),
]


def make_selector(fallback_paths=None, author='alice', policy=None, seed=1):
    eligibility = EligibilityFilter(policy or RosterPolicy(), author, ROSTER)
    return FallbackSelector(FileFilter(fallback_paths=fallback_paths), eligibility, random.Random(seed))


class TestFallbackSelector:
    """Test cases for FallbackSelector.fill."""

    def test_fallback_paths_first(self):
        """Test that path fallback reviewers fill slots before random ones."""
        selector = make_selector({'app/web': ('bob',), 'app/api': ('charlie',)})
        result = selector.fill([], FILES, 1)
        assert result == [Candidate('bob', 0, 'fallback')]

    def test_random_after_fallback(self):
        """Test that random selection fills what fallback paths cannot."""
        selector = make_selector({'app/web': ('bob',)})
        result = selector.fill([], FILES, 2)
        assert result[0] == Candidate('bob', 0, 'fallback')
        assert result[1].source == 'random'
        assert result[1].login in ('charlie', 'dee')

    def test_skips_selected_and_ineligible(self):
        """Test that fallback never duplicates or picks ineligible logins."""
        selector = make_selector({'app/web': ('alice', 'bob', 'outsider'), 'app/api': ('charlie',)})
        result = selector.fill([Candidate('bob', 3)], FILES, 2)
        assert [(c.login, c.source) for c in result] == [('bob', 'blame'), ('charlie', 'fallback')]

    def test_does_not_mutate_selection(self):
        """Test that the given selection is left untouched."""
        selected = [Candidate('bob', 3)]
        make_selector().fill(selected, FILES, 2)
        assert selected == [Candidate('bob', 3)]

    def test_target_already_met(self):
        """Test that nothing is added when the target is met."""
        selected = [Candidate('bob', 3), Candidate('charlie', 1)]
        assert make_selector({'app/web': ('dee',)}).fill(selected, FILES, 2) == selected

    def test_exhausted_pool_under_assigns(self):
        """Test that an exhausted roster returns fewer reviewers instead of failing."""
        result = make_selector().fill([], [], 10)
        assert sorted(c.login for c in result) == ['bob', 'charlie', 'dee']
        assert len({c.login for c in result}) == 3

    def test_random_is_deterministic_with_seed(self):
        """Test that a seeded random source yields repeatable picks."""
        first = make_selector(seed=42).fill([], [], 2)
        second = make_selector(seed=42).fill([], [], 2)
        assert first == second

    def test_commit_policy_allows_fallback_outside_roster(self):
        """Test that version 2 fallback reviewers need not be in the roster."""
        selector = make_selector({'app/web': ('outsider',)}, policy=CommitAuthorPolicy())
        assert selector.fill([], FILES, 1) == [Candidate('outsider', 0, 'fallback')]
