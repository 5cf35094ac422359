"""Parsing of GitHub pull request URLs and chat review commands."""

import re
from typing import List, NamedTuple, Optional
from urllib.parse import urlparse

URL_RE = re.compile(r"https?://[^\s<>|]+", re.IGNORECASE)
PULL_PATH_RE = re.compile(r"^/([^/]+)/([^/]+)/pull/(\d+)(?:/.*)?$")
# Slack wraps links as <url> or <url|label>
SLACK_LINK_RE = re.compile(r"<(https?://[^>|\s]+)(?:\|[^>]*)?>", re.IGNORECASE)


class PullRequestRef(NamedTuple):
    owner: str
    repo: str
    number: int

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


class ReviewRequest(NamedTuple):
    url: str
    again: bool


def extract_urls(text: str) -> List[str]:
    """Find all http(s) URLs in a piece of text.

    Trailing punctuation and Slack-style ``<url>`` brackets are stripped.
    """
    return [match.rstrip('.,;:!?)>') for match in URL_RE.findall(text or '')]


def parse_pull_request_url(url: str) -> PullRequestRef:
    """Split a GitHub pull request URL into owner, repository and number.

    Raises:
        ValueError: If the URL does not point to a github.com pull request
    """
    parsed = urlparse(url)
    if parsed.hostname != 'github.com':
        raise ValueError(f"Not a GitHub URL: {url}")

    match = PULL_PATH_RE.match(parsed.path)
    if not match:
        raise ValueError(f"Not a pull request URL: {url}")

    owner, repo, number = match.groups()
    return PullRequestRef(owner, repo, int(number))


def parse_review_command(text: str) -> Optional[ReviewRequest]:
    """Find a ``review <url>`` or ``review <url> again`` command in a message.

    Only github.com URLs are considered; the first one preceded by
    ``review`` wins.

    Returns:
        ReviewRequest, or None if the message holds no review command
    """
    normalized = re.sub(r"\s+", ' ', text or '')
    normalized = SLACK_LINK_RE.sub(r"\1", normalized)
    normalized = re.sub(r"\breview |\bagain\b", lambda m: m.group(0).lower(), normalized, flags=re.IGNORECASE)

    for url in extract_urls(normalized):
        if urlparse(url).hostname != 'github.com':
            continue
        index = normalized.find('review ' + url)
        if index != -1:
            again = normalized.find('review ' + url + ' again') == index
            return ReviewRequest(url=url, again=again)
    return None
