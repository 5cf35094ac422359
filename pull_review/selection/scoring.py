"""Ranking of eligible blame authors."""

from typing import Dict, List

from ..models import Candidate


def rank_candidates(weights: Dict[str, int]) -> List[Candidate]:
    """Rank logins by aggregate blame weight, highest first.

    The sort is stable, so equal weights keep the order in which the
    authors were first encountered.

    Args:
        weights: Mapping from eligible login to aggregate weight

    Returns:
        Candidates tagged with source 'blame'
    """
    ranked = sorted(weights.items(), key=lambda item: item[1], reverse=True)
    return [Candidate(login=login, count=count, source='blame') for login, count in ranked]
