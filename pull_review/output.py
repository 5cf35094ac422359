"""Output formatting and display for selected reviewers."""

from typing import List

from .models import Candidate


# ANSI color codes
GREEN = '\033[92m'
YELLOW = '\033[93m'
CYAN = '\033[96m'
BOLD = '\033[1m'
RESET = '\033[0m'

SOURCE_COLORS = {
    'blame': GREEN,
    'fallback': CYAN,
    'random': YELLOW,
}


class OutputFormatter:
    """Formats and prints the reviewers selected for a pull request."""

    def __init__(self, pull_request_url: str, use_color: bool = True):
        """Initialize the output formatter.

        Args:
            pull_request_url: URL of the reviewed pull request
            use_color: Whether to use ANSI colors for the source column
        """
        self.pull_request_url = pull_request_url
        self.use_color = use_color

    def _colorize(self, text: str, color: str) -> str:
        if not self.use_color:
            return text
        return f"{color}{text}{RESET}"

    def format_reviewers(self, reviewers: List[Candidate]) -> List[str]:
        """Build the table lines for the selected reviewers."""
        if not reviewers:
            return ["No eligible reviewers found."]

        login_width = max(len('Reviewer'), max(len(r.login) for r in reviewers))
        lines = [
            f"{'#':<3} {'Reviewer':<{login_width}} {'Lines':>7}  Source",
            "-" * (login_width + 22),
        ]
        for index, reviewer in enumerate(reviewers, 1):
            count = str(reviewer.count) if reviewer.source == 'blame' else '-'
            source = self._colorize(reviewer.source, SOURCE_COLORS.get(reviewer.source, ''))
            lines.append(f"{index:<3} {reviewer.login:<{login_width}} {count:>7}  {source}")
        return lines

    def summary_line(self, reviewers: List[Candidate]) -> str:
        """One-line summary mentioning every reviewer."""
        if not reviewers:
            return f"No reviewers assigned to {self.pull_request_url}"
        mentions = ', '.join(f"@{r.login}" for r in reviewers)
        return f"{mentions}: please review {self.pull_request_url}"

    def print_reviewers(self, reviewers: List[Candidate]):
        """Print the selected reviewers table and summary."""
        print("\n" + "="*80)
        print(self._colorize(f"REVIEWERS FOR {self.pull_request_url}", BOLD))
        print("="*80)
        for line in self.format_reviewers(reviewers):
            print(line)
        print()
        print(self.summary_line(reviewers))
