"""Reviewer count computation."""

import logging
import math
from typing import Optional

from ..config import ReviewerSettings
from ..file_filters import FileLoad


class ReviewerSizer:
    """Decides how many reviewers a pull request needs."""

    def __init__(self, settings: ReviewerSettings):
        self.settings = settings

    def load_cap(self, load: FileLoad) -> Optional[int]:
        """Reviewers needed for the review load, or None when no cap is configured.

        Args:
            load: Review load of the pull request

        Returns:
            Minimum of the configured files-based and lines-based caps
        """
        caps = []
        if self.settings.max_files_per_reviewer > 0:
            caps.append(math.ceil(load.distinct_file_count / self.settings.max_files_per_reviewer))
        if self.settings.max_lines_per_reviewer > 0:
            caps.append(math.ceil(load.total_line_load / self.settings.max_lines_per_reviewer))
        return min(caps) if caps else None

    def clamp(self, count: int) -> int:
        return max(self.settings.min_reviewers, min(self.settings.max_reviewers, count))

    def target_count(self, load: FileLoad, blame_candidates: int) -> int:
        """Compute the number of reviewers to assign.

        Without a configured cap the blame candidates decide the count;
        either way the result is kept within [min_reviewers, max_reviewers].

        Args:
            load: Review load of the pull request
            blame_candidates: Number of eligible blame-ranked candidates

        Returns:
            Target reviewer count
        """
        cap = self.load_cap(load)
        if cap is None:
            target = self.clamp(blame_candidates)
        else:
            target = self.clamp(cap)
        logging.debug(f"Reviewer target: {target} (load cap: {cap}, blame candidates: {blame_candidates})")
        return target

    def has_enough_authors(self, distinct_authors: int) -> bool:
        """Check the minimum-distinct-authors safeguard (0 disables it)."""
        threshold = self.settings.min_authors_of_changed_files
        return threshold == 0 or distinct_authors >= threshold
