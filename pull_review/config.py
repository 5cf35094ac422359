"""
Policy configuration for reviewer selection.

Turns the (possibly partial) configuration mapping into a fully defaulted,
validated ReviewerSettings record. The configuration is usually kept in a
``.pull-review`` YAML file at the repository root, e.g.::

    version: 2
    min_reviewers: 1
    max_reviewers: 2
    max_lines_per_reviewer: 300
    reviewers:
      alice: {}
      bob: {}
    fallback_paths:
      'app/web/*': [alice]
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import yaml

from .errors import ConfigurationError
from .selection.eligibility import EligibilityPolicy, policy_for_version

DEFAULT_CONFIG_FILE = '.pull-review'

DEFAULT_SETTINGS = {
    'version': 1,
    'min_reviewers': 1,
    'max_reviewers': 2,
    'max_files_per_reviewer': 0,
    'max_lines_per_reviewer': 0,
    'min_authors_of_changed_files': 0,
}

NUMERIC_LIMITS = (
    'min_reviewers',
    'max_reviewers',
    'max_files_per_reviewer',
    'max_lines_per_reviewer',
    'min_authors_of_changed_files',
)


@dataclass(frozen=True)
class ReviewerSettings:
    """Resolved reviewer-selection policy.

    A per-reviewer cap of 0 means the cap is not applied.
    """
    version: int = 1
    reviewers: Dict[str, Dict] = field(default_factory=dict)
    min_reviewers: int = 1
    max_reviewers: int = 2
    max_files_per_reviewer: int = 0
    max_lines_per_reviewer: int = 0
    min_authors_of_changed_files: int = 0
    fallback_paths: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    excluded_file_patterns: Tuple[str, ...] = ()
    eligibility: EligibilityPolicy = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if self.eligibility is None:
            object.__setattr__(self, 'eligibility', policy_for_version(self.version))

    def is_reachable(self, login: str) -> bool:
        """Check whether a login is part of the configured reviewer roster."""
        return login in self.reviewers


class ConfigResolver:
    """Validates a raw configuration mapping and applies defaults."""

    def resolve(self, config: Optional[Dict[str, Any]] = None) -> ReviewerSettings:
        """Build typed settings from a raw configuration mapping.

        Args:
            config: Raw configuration (missing keys take their defaults)

        Returns:
            Fully defaulted ReviewerSettings

        Raises:
            ConfigurationError: If any configured value is malformed
        """
        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ConfigurationError("Configuration must be a mapping")

        values = dict(DEFAULT_SETTINGS)
        for key in DEFAULT_SETTINGS:
            if config.get(key) is not None:
                values[key] = config[key]

        version = values['version']
        if isinstance(version, bool) or version not in (1, 2):
            raise ConfigurationError(f"Unsupported configuration version: {version!r}")

        for key in NUMERIC_LIMITS:
            value = values[key]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigurationError(f"'{key}' must be a non-negative integer, got {value!r}")

        if values['max_reviewers'] < 1:
            raise ConfigurationError("'max_reviewers' must be at least 1")
        if values['min_reviewers'] > values['max_reviewers']:
            raise ConfigurationError(
                f"'min_reviewers' ({values['min_reviewers']}) exceeds "
                f"'max_reviewers' ({values['max_reviewers']})"
            )

        settings = ReviewerSettings(
            reviewers=self._resolve_reviewers(config.get('reviewers')),
            fallback_paths=self._resolve_fallback_paths(config.get('fallback_paths')),
            excluded_file_patterns=self._resolve_patterns(config.get('excluded_file_patterns')),
            **values
        )
        logging.debug(f"Resolved config v{settings.version} with {len(settings.reviewers)} reviewer(s)")
        return settings

    @staticmethod
    def _resolve_reviewers(reviewers: Any) -> Dict[str, Dict]:
        if reviewers is None:
            return {}
        if not isinstance(reviewers, dict):
            raise ConfigurationError("'reviewers' must be a mapping of logins to settings")

        resolved = {}
        for login, settings in reviewers.items():
            if not isinstance(login, str) or not login:
                raise ConfigurationError(f"Reviewer login must be a non-empty string, got {login!r}")
            if settings is None:
                settings = {}
            if not isinstance(settings, dict):
                raise ConfigurationError(f"Settings for reviewer '{login}' must be a mapping")
            resolved[login] = dict(settings)
        return resolved

    @staticmethod
    def _resolve_fallback_paths(fallback_paths: Any) -> Dict[str, Tuple[str, ...]]:
        if fallback_paths is None:
            return {}
        if not isinstance(fallback_paths, dict):
            raise ConfigurationError("'fallback_paths' must be a mapping of path patterns to logins")

        resolved = {}
        for pattern, logins in fallback_paths.items():
            if not isinstance(pattern, str) or not pattern:
                raise ConfigurationError(f"Fallback path pattern must be a non-empty string, got {pattern!r}")
            if isinstance(logins, str):
                logins = [logins]
            if not isinstance(logins, list) or not all(isinstance(login, str) for login in logins):
                raise ConfigurationError(f"Fallback reviewers for '{pattern}' must be a login or list of logins")
            resolved[pattern] = tuple(logins)
        return resolved

    @staticmethod
    def _resolve_patterns(patterns: Any) -> Tuple[str, ...]:
        if patterns is None:
            return ()
        if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
            raise ConfigurationError("'excluded_file_patterns' must be a list of patterns")
        return tuple(patterns)


def parse_config(yaml_content: str) -> ReviewerSettings:
    """Parse ``.pull-review`` YAML content into settings.

    An empty document yields the default settings.

    Raises:
        ConfigurationError: If the YAML is invalid or the values are malformed
    """
    try:
        data = yaml.safe_load(yaml_content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML: {e}") from e

    return ConfigResolver().resolve(data)


def load_config_file(config_path: str = DEFAULT_CONFIG_FILE) -> ReviewerSettings:
    """Load and resolve settings from a local YAML file."""
    if not os.path.exists(config_path):
        raise ConfigurationError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        settings = parse_config(f.read())
    logging.info(f"Loaded reviewer config from {config_path}")
    return settings
