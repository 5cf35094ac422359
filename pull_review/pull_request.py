"""Loading pull request data from GitHub for reviewer selection."""

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .api_client import API_URL, GitHubAPIClient
from .config import DEFAULT_CONFIG_FILE, ReviewerSettings, parse_config
from .errors import ConfigurationError
from .models import Candidate, ChangedFile
from .selection.core import ReviewerSelector
from .url import PullRequestRef, parse_pull_request_url


@dataclass
class PullRequestData:
    """The parts of a pull request that reviewer selection needs."""
    author_login: str
    base_sha: str
    html_url: str = ''
    assignees: List[str] = field(default_factory=list)
    files: List[Dict] = field(default_factory=list)
    commits: List[Dict] = field(default_factory=list)


class PullRequestLoader:
    """Fetches pull request metadata, files, commits, config and blame."""

    def __init__(self, api_client: GitHubAPIClient, ref: PullRequestRef):
        """Initialize the loader.

        Args:
            api_client: Client used for all GitHub requests
            ref: Pull request to load
        """
        self.api_client = api_client
        self.ref = ref
        self.repo_url = f"{API_URL}/repos/{ref.owner}/{ref.repo}"
        self.pull_url = f"{self.repo_url}/pulls/{ref.number}"

    def load(self) -> PullRequestData:
        """Fetch pull request details, changed files and commits."""
        logging.info(f"Loading pull request {self.ref.full_name}#{self.ref.number}")
        details = self.api_client.get_json(self.pull_url)
        files = self.api_client.get_paginated(f"{self.pull_url}/files")
        commits = self.api_client.get_paginated(f"{self.pull_url}/commits")

        data = PullRequestData(
            author_login=details['user']['login'],
            base_sha=details['base']['sha'],
            html_url=details.get('html_url', ''),
            assignees=[a['login'] for a in details.get('assignees') or []],
            files=files,
            commits=commits,
        )
        logging.debug(f"Pull request by {data.author_login}: {len(files)} file(s), "
                      f"{len(commits)} commit(s), {len(data.assignees)} assignee(s)")
        return data

    def load_config(self, ref: str) -> ReviewerSettings:
        """Fetch and parse the repository's .pull-review file at a revision.

        Raises:
            ConfigurationError: If the file is missing or invalid
        """
        response = self.api_client.get(
            f"{self.repo_url}/contents/{DEFAULT_CONFIG_FILE}",
            params={'ref': ref},
            headers={'Accept': 'application/vnd.github.raw+json'},
        )
        if response.status_code == 404:
            raise ConfigurationError(f"No {DEFAULT_CONFIG_FILE} found in {self.ref.full_name} at {ref}")
        response.raise_for_status()
        return parse_config(response.text)

    def blame_lookup(self, base_sha: str) -> Callable[[ChangedFile], List[Dict]]:
        """Build a blame lookup that blames files at the base revision."""

        def lookup(file: ChangedFile) -> List[Dict]:
            entries = []
            ranges = self.api_client.get_blame_ranges(self.ref.owner, self.ref.repo, base_sha, file.filename)
            for blame_range in ranges:
                author = (blame_range.get('commit') or {}).get('author') or {}
                login = (author.get('user') or {}).get('login')
                if not login:
                    # Commits by authors without a GitHub account
                    logging.debug(f"Skipping blame range without GitHub user in {file.filename}")
                    continue
                start, end = blame_range.get('startingLine'), blame_range.get('endingLine')
                entries.append({
                    'login': login,
                    # Incomplete ranges keep a None count and are rejected by blame validation
                    'count': end - start + 1 if isinstance(start, int) and isinstance(end, int) else None,
                    'age': blame_range.get('age'),
                })
            return entries

        return lookup

    def request_reviewers(self, logins: List[str]) -> Dict:
        """Request reviews from the given logins on the pull request."""
        logging.info(f"Requesting reviews from {', '.join(logins)}")
        return self.api_client.post(f"{self.pull_url}/requested_reviewers", {'reviewers': logins})


def review_pull_request(
    pull_request_url: str,
    api_client: GitHubAPIClient,
    again: bool = False,
    settings: Optional[ReviewerSettings] = None,
    assign: bool = False,
    rng: random.Random = None
) -> List[Candidate]:
    """Select (and optionally request) reviewers for a pull request URL.

    Args:
        pull_request_url: URL of the pull request on github.com
        api_client: GitHub API client
        again: Re-select reviewers even if some are already assigned
        settings: Settings to use instead of the repository's .pull-review file
        assign: Request reviews from the selected reviewers on GitHub
        rng: Random source for random fallback

    Returns:
        Selected reviewers
    """
    loader = PullRequestLoader(api_client, parse_pull_request_url(pull_request_url))
    data = loader.load()
    if settings is None:
        settings = loader.load_config(data.base_sha)

    selector = ReviewerSelector(settings, rng=rng)
    reviewers = selector.select(
        data.author_login,
        loader.blame_lookup(data.base_sha),
        files=data.files,
        commits=data.commits,
        assignees=None if again else data.assignees,
    )

    if assign and reviewers:
        loader.request_reviewers([r.login for r in reviewers])
    return reviewers
