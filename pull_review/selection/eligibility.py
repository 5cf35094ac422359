"""Eligibility rules deciding who may never be assigned as a reviewer."""

import logging
from typing import Dict, FrozenSet, Iterable, List, Optional, Set

from ..models import Commit


class EligibilityPolicy:
    """Rule set for one configuration version.

    The pull request author is excluded by every policy.
    """
    version = None

    def is_eligible(self, login: str, author_login: str, roster: Dict[str, Dict],
                    commit_authors: FrozenSet[str]) -> bool:
        return bool(login) and login != author_login


class RosterPolicy(EligibilityPolicy):
    """Version 1: only logins configured in the reviewer roster are reachable."""
    version = 1

    def is_eligible(self, login, author_login, roster, commit_authors):
        return super().is_eligible(login, author_login, roster, commit_authors) and login in roster


class CommitAuthorPolicy(EligibilityPolicy):
    """Version 2: anyone who authored a commit in the pull request is excluded."""
    version = 2

    def is_eligible(self, login, author_login, roster, commit_authors):
        return super().is_eligible(login, author_login, roster, commit_authors) and login not in commit_authors


POLICIES = {
    1: RosterPolicy(),
    2: CommitAuthorPolicy(),
}


def policy_for_version(version: int) -> EligibilityPolicy:
    """Return the eligibility policy for a configuration version."""
    return POLICIES[version]


class EligibilityFilter:
    """Removes ineligible logins from the candidate pool for one selection."""

    def __init__(self, policy: EligibilityPolicy, author_login: str, roster: Dict[str, Dict],
                 commits: Optional[Iterable[Commit]] = None):
        """Initialize the filter.

        Args:
            policy: Eligibility policy selected from the configuration version
            author_login: Login of the pull request author
            roster: Configured reviewers, keyed by login
            commits: Commits of the pull request (only consulted by version 2)
        """
        self.policy = policy
        self.author_login = author_login
        self.roster = roster
        self.commit_authors = frozenset(
            commit.author_login for commit in (commits or []) if commit.author_login
        )
        self.excluded: Set[str] = set()

    def exclude(self, logins: Iterable[str]) -> None:
        """Mark additional logins as ineligible for the rest of this selection."""
        self.excluded.update(logins)

    def is_eligible(self, login: str) -> bool:
        if login in self.excluded:
            return False
        return self.policy.is_eligible(login, self.author_login, self.roster, self.commit_authors)

    def filter_weights(self, weights: Dict[str, int]) -> Dict[str, int]:
        """Drop ineligible logins from an aggregate-weight mapping, keeping order.

        Args:
            weights: Mapping from login to aggregate blame weight

        Returns:
            New mapping containing eligible logins only
        """
        eligible = {}
        for login, weight in weights.items():
            if self.is_eligible(login):
                eligible[login] = weight
            else:
                logging.debug(f"Excluding ineligible blame author: {login}")
        return eligible

    def eligible_roster(self) -> List[str]:
        """Eligible roster logins, sorted so random draws depend only on the rng."""
        return sorted(login for login in self.roster if self.is_eligible(login))
