"""
Unit tests for URL and review command parsing
"""

import pytest
from pull_review.url import (
    PullRequestRef, ReviewRequest, extract_urls, parse_pull_request_url, parse_review_command
)

PR_URL = 'https://github.com/octo/widgets/pull/42'


class TestExtractUrls:
    """Test cases for extract_urls."""

    def test_extracts_all_urls(self):
        """Test extraction of several URLs from text."""
        text = f"see {PR_URL}, and https://example.com/page."
        assert extract_urls(text) == [PR_URL, 'https://example.com/page']

    def test_no_urls(self):
        """Test text without URLs."""
        assert extract_urls('nothing here') == []
        assert extract_urls(None) == []


class TestParsePullRequestUrl:
    """Test cases for parse_pull_request_url."""

    def test_parse(self):
        """Test splitting a pull request URL."""
        ref = parse_pull_request_url(PR_URL)
        assert ref == PullRequestRef('octo', 'widgets', 42)
        assert ref.full_name == 'octo/widgets'

    def test_parse_with_subpage(self):
        """Test URLs pointing to a pull request tab."""
        assert parse_pull_request_url(PR_URL + '/files').number == 42

    @pytest.mark.parametrize('url', [
        'https://gitlab.com/octo/widgets/pull/42',
        'https://github.com/octo/widgets/issues/42',
        'https://github.com/octo/widgets',
    ])
    def test_rejects_other_urls(self, url):
        """Test that non pull request URLs raise ValueError."""
        with pytest.raises(ValueError):
            parse_pull_request_url(url)


class TestParseReviewCommand:
    """Test cases for parse_review_command."""

    def test_review(self):
        """Test a plain review command."""
        assert parse_review_command(f"review {PR_URL}") == ReviewRequest(PR_URL, False)

    def test_review_again(self):
        """Test a review-again command with odd spacing and case."""
        assert parse_review_command(f"hey bot,  REVIEW   {PR_URL}  Again") == ReviewRequest(PR_URL, True)

    def test_slack_formatted_link(self):
        """Test links wrapped in Slack angle brackets."""
        assert parse_review_command(f"review <{PR_URL}|#42>") == ReviewRequest(PR_URL, False)

    def test_url_without_review(self):
        """Test that a bare URL is not a command."""
        assert parse_review_command(f"look at {PR_URL}") is None

    def test_non_github_url(self):
        """Test that non-GitHub URLs are ignored."""
        assert parse_review_command("review https://example.com/a/b/pull/1") is None
