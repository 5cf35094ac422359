"""
Unit tests for output formatting
"""

from pull_review.models import Candidate
from pull_review.output import OutputFormatter, GREEN, RESET

PR_URL = 'https://github.com/octo/widgets/pull/42'


class TestOutputFormatter:
    """Test cases for OutputFormatter."""

    def test_format_reviewers(self):
        """Test the reviewer table without colors."""
        formatter = OutputFormatter(PR_URL, use_color=False)
        lines = formatter.format_reviewers([
            Candidate('bob', 13, 'blame'),
            Candidate('charlie', 0, 'random'),
        ])
        assert lines[0].split() == ['#', 'Reviewer', 'Lines', 'Source']
        assert lines[2].split() == ['1', 'bob', '13', 'blame']
        assert lines[3].split() == ['2', 'charlie', '-', 'random']

    def test_format_with_colors(self):
        """Test that sources are colorized."""
        formatter = OutputFormatter(PR_URL)
        lines = formatter.format_reviewers([Candidate('bob', 1, 'blame')])
        assert f"{GREEN}blame{RESET}" in lines[2]

    def test_no_reviewers(self):
        """Test output without reviewers."""
        formatter = OutputFormatter(PR_URL, use_color=False)
        assert formatter.format_reviewers([]) == ["No eligible reviewers found."]
        assert formatter.summary_line([]) == f"No reviewers assigned to {PR_URL}"

    def test_summary_line(self):
        """Test the mention summary."""
        formatter = OutputFormatter(PR_URL, use_color=False)
        summary = formatter.summary_line([Candidate('bob', 3), Candidate('dee', 0, 'fallback')])
        assert summary == f"@bob, @dee: please review {PR_URL}"

    def test_print_reviewers(self, capsys):
        """Test printing the full report."""
        formatter = OutputFormatter(PR_URL, use_color=False)
        formatter.print_reviewers([Candidate('bob', 3)])
        captured = capsys.readouterr()
        assert f"REVIEWERS FOR {PR_URL}" in captured.out
        assert "@bob: please review" in captured.out
