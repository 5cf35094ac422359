"""Main reviewer selector."""

import logging
import random
from typing import Dict, Iterable, List, Optional, Sequence, Union

from ..config import ConfigResolver, ReviewerSettings
from ..errors import ConfigurationError, PolicySatisfiedError
from ..file_filters import FileFilter
from ..models import Candidate, Commit
from .blame import BlameAggregator, BlameLookup
from .eligibility import EligibilityFilter
from .fallback import FallbackSelector
from .scoring import rank_candidates
from .sizing import ReviewerSizer


class ReviewerSelector:
    """Selects reviewers for a pull request from blame, fallback paths and the roster.

    Usage:
        selector = ReviewerSelector({'reviewers': {'alice': {}, 'bob': {}}})
        reviewers = selector.select('carol', blame_lookup, files=files)
    """

    def __init__(
        self,
        config: Union[ReviewerSettings, Dict, None] = None,
        rng: random.Random = None,
        max_workers: int = 10
    ):
        """Initialize the selector.

        Args:
            config: Resolved settings or a raw configuration mapping
            rng: Random source for random fallback (fresh Random() if None)
            max_workers: Maximum number of concurrent blame lookups

        Raises:
            ConfigurationError: If the configuration is malformed
        """
        if isinstance(config, ReviewerSettings):
            self.settings = config
        else:
            self.settings = ConfigResolver().resolve(config)
        self.rng = rng or random.Random()
        self.max_workers = max_workers
        self.file_filter = FileFilter(
            self.settings.excluded_file_patterns,
            self.settings.fallback_paths
        )
        self.sizer = ReviewerSizer(self.settings)

    def check_assignees(self, assignees: Optional[Sequence]) -> None:
        """Stop early when existing assignees already satisfy the bounds.

        Raises:
            PolicySatisfiedError: 'maximum' if there are more assignees than
                max_reviewers, 'minimum' if min_reviewers is already met
        """
        if assignees is None:
            return
        if len(assignees) > self.settings.max_reviewers:
            raise PolicySatisfiedError('maximum')
        if len(assignees) >= self.settings.min_reviewers:
            raise PolicySatisfiedError('minimum')

    def select(
        self,
        author_login: str,
        blame_lookup: BlameLookup,
        files: Optional[Iterable] = None,
        commits: Optional[Iterable] = None,
        assignees: Optional[Sequence] = None
    ) -> List[Candidate]:
        """Select reviewers for a pull request.

        Args:
            author_login: Login of the pull request author
            blame_lookup: Callable returning blame ranges for a ChangedFile
            files: Changed files (GitHub file objects or ChangedFile)
            commits: Commits of the pull request (GitHub commit objects or Commit)
            assignees: Reviewers already assigned, if any

        Returns:
            Ordered reviewers tagged with source 'blame', 'fallback' or 'random'

        Raises:
            ConfigurationError: If the author or the blame lookup is missing
            PolicySatisfiedError: If the assignees already satisfy the bounds
            MissingFileDataError: If a changed file is incomplete
            MissingBlameDataError: If a blame range is incomplete
        """
        if not author_login:
            raise ConfigurationError("Missing pull request author login")
        if not callable(blame_lookup):
            raise ConfigurationError("Missing blame lookup")

        self.check_assignees(assignees)

        load = self.file_filter.calculate_load(self.file_filter.validate_files(files))
        logging.debug(f"Review load: {load.distinct_file_count} file(s), {load.total_line_load} line(s)")

        aggregate = BlameAggregator(blame_lookup, self.max_workers).aggregate(load.blame_files)

        eligibility = EligibilityFilter(
            self.settings.eligibility,
            author_login,
            self.settings.reviewers,
            [c if isinstance(c, Commit) else Commit.from_api(c) for c in commits or []]
        )

        weights = aggregate.weights
        if not self.sizer.has_enough_authors(aggregate.distinct_authors):
            logging.info(f"Only {aggregate.distinct_authors} distinct author(s) of changed files, "
                         f"need {self.settings.min_authors_of_changed_files}; ignoring blame")
            eligibility.exclude(weights)
            weights = {}

        eligible = eligibility.filter_weights(weights)
        ranked = rank_candidates({login: count for login, count in eligible.items() if count > 0})

        target = self.sizer.target_count(load, len(ranked))
        selected = ranked[:target]

        fallback = FallbackSelector(self.file_filter, eligibility, self.rng)
        reviewers = fallback.fill(selected, load.files, target)

        logging.info(f"Selected {len(reviewers)} reviewer(s) for {author_login}'s pull request: "
                     f"{', '.join(f'{r.login} ({r.source})' for r in reviewers) or 'none'}")
        return reviewers


def get_reviewers(
    author_login: str = None,
    blame_lookup: BlameLookup = None,
    files: Optional[Iterable] = None,
    commits: Optional[Iterable] = None,
    assignees: Optional[Sequence] = None,
    config: Union[ReviewerSettings, Dict, None] = None,
    rng: random.Random = None
) -> List[Candidate]:
    """Select reviewers in one call; see ReviewerSelector.select."""
    selector = ReviewerSelector(config, rng=rng)
    return selector.select(author_login, blame_lookup, files=files, commits=commits, assignees=assignees)
