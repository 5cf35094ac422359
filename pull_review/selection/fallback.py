"""Fallback selection when blame does not supply enough reviewers."""

import logging
import random
from typing import List

from ..file_filters import FileFilter
from ..models import Candidate, ChangedFile
from .eligibility import EligibilityFilter


class FallbackSelector:
    """Fills remaining reviewer slots from fallback paths, then at random."""

    def __init__(self, file_filter: FileFilter, eligibility: EligibilityFilter,
                 rng: random.Random):
        self.file_filter = file_filter
        self.eligibility = eligibility
        self.rng = rng

    def fill(self, selected: List[Candidate], files: List[ChangedFile], target: int) -> List[Candidate]:
        """Complete a selection up to the target count.

        Path-based fallback reviewers come first, then a uniform random draw
        without replacement from the rest of the eligible roster. Returns
        fewer than ``target`` reviewers when the eligible pool runs out.

        Args:
            selected: Reviewers chosen so far (not modified)
            files: Changed files, used for fallback path matching
            target: Desired number of reviewers

        Returns:
            New list with the selected reviewers followed by the fill-ins
        """
        result = list(selected)
        taken = {candidate.login for candidate in result}

        for login in self.file_filter.fallback_reviewers(files):
            if len(result) >= target:
                return result
            if login in taken or not self.eligibility.is_eligible(login):
                continue
            logging.debug(f"Adding fallback reviewer: {login}")
            result.append(Candidate(login=login, count=0, source='fallback'))
            taken.add(login)

        slots = target - len(result)
        if slots <= 0:
            return result

        pool = [login for login in self.eligibility.eligible_roster() if login not in taken]
        if len(pool) < slots:
            logging.warning(f"Only {len(pool)} eligible reviewer(s) left for {slots} open slot(s)")

        for login in self.rng.sample(pool, min(slots, len(pool))):
            logging.debug(f"Adding random reviewer: {login}")
            result.append(Candidate(login=login, count=0, source='random'))

        return result
