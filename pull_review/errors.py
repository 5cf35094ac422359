"""Error kinds raised while selecting reviewers."""


class PullReviewError(Exception):
    """Base class for all pull-review errors."""


class ConfigurationError(PullReviewError):
    """Required input is missing or the policy configuration is malformed."""


class PolicySatisfiedError(PullReviewError):
    """Existing assignees already satisfy the reviewer bounds.

    This is a control signal rather than a fault: the caller should take
    no action on the pull request.
    """

    def __init__(self, bound: str):
        self.bound = bound
        super().__init__(f"Pull request has {bound} reviewers assigned")


class MissingFileDataError(PullReviewError):
    """A changed-file entry lacks filename, status or changes."""


class MissingBlameDataError(PullReviewError):
    """A blame entry lacks login, count or age."""
