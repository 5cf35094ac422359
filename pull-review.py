#!/usr/bin/env python3
"""
Pull Review
Selects reviewers for a GitHub pull request from the blame of its changed files.
"""

import os
import sys
import logging
from dotenv import load_dotenv

from pull_review.api_client import GitHubAPIClient
from pull_review.config import load_config_file
from pull_review.errors import PolicySatisfiedError, PullReviewError
from pull_review.output import OutputFormatter
from pull_review.pull_request import review_pull_request
from pull_review.url import parse_review_command

# Configure logging (can be overridden by LOG_LEVEL environment variable)
log_level = os.environ.get('LOG_LEVEL', 'INFO').upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format='%(asctime)s %(levelname)s: %(message)s',
    datefmt='%m/%d/%Y %I:%M:%S %p'
)


def env_flag(name: str, default: str = 'false') -> bool:
    return os.environ.get(name, default).lower() in ('true', '1', 'yes')


def main():
    """Main entry point for the script."""
    # Load environment variables from .env file if it exists
    load_dotenv()

    print("Pull Review")
    print("="*80)

    # Accept either a plain URL or a chat-style "review <url> [again]" command
    request_text = os.environ.get('PULL_REQUEST_URL') or ' '.join(sys.argv[1:])
    if not request_text:
        request_text = input("\nEnter pull request URL: ").strip()

    if not request_text:
        logging.error("Pull request URL is required")
        sys.exit(1)

    command = parse_review_command(request_text)
    if command is None:
        command = parse_review_command(f"review {request_text}")
    if command is None:
        logging.error(f"No GitHub pull request URL found in: {request_text}")
        sys.exit(1)

    again = command.again or env_flag('REVIEW_AGAIN')
    if again:
        logging.info("Reviewing again: existing assignees are ignored")

    assign = env_flag('ASSIGN_REVIEWERS')
    if assign:
        logging.info("Selected reviewers will be requested on GitHub")

    try:
        settings = None
        config_path = os.environ.get('PULL_REVIEW_CONFIG')
        if config_path:
            settings = load_config_file(config_path)

        api_client = GitHubAPIClient(os.environ.get('GITHUB_TOKEN'))
        reviewers = review_pull_request(
            command.url,
            api_client,
            again=again,
            settings=settings,
            assign=assign,
        )
    except PolicySatisfiedError as e:
        logging.info(f"No action needed: {e}")
        sys.exit(0)
    except PullReviewError as e:
        logging.error(f"Could not select reviewers: {e}")
        sys.exit(1)
    except Exception as e:
        logging.error(f"Error reviewing {command.url}: {e}", exc_info=True)
        sys.exit(1)

    output_formatter = OutputFormatter(command.url, use_color=sys.stdout.isatty())
    output_formatter.print_reviewers(reviewers)


if __name__ == "__main__":
    main()
