"""Pull Review - assigns reviewers to GitHub pull requests based on blame."""

from .errors import (
    PullReviewError,
    ConfigurationError,
    PolicySatisfiedError,
    MissingFileDataError,
    MissingBlameDataError,
)
from .models import FileStatus, ChangedFile, BlameEntry, Commit, Candidate
from .config import ConfigResolver, ReviewerSettings, parse_config, load_config_file
from .file_filters import FileFilter, FileLoad
from .selection.core import ReviewerSelector, get_reviewers
from .url import parse_pull_request_url, parse_review_command

__all__ = [
    'PullReviewError',
    'ConfigurationError',
    'PolicySatisfiedError',
    'MissingFileDataError',
    'MissingBlameDataError',
    'FileStatus',
    'ChangedFile',
    'BlameEntry',
    'Commit',
    'Candidate',
    'ConfigResolver',
    'ReviewerSettings',
    'parse_config',
    'load_config_file',
    'FileFilter',
    'FileLoad',
    'ReviewerSelector',
    'get_reviewers',
    'parse_pull_request_url',
    'parse_review_command',
]
