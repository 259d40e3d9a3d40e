"""
Per-repository settings loader.

Reads the reviewer settings file from a revision of the local clone and applies
it on top of the service defaults.
"""

import logging

import git  # GitPython
import yaml

from reviewers_by_blame.core.config import ReviewersConfig, config
from reviewers_by_blame.integrations.git.repository import RepositoryCache

logger = logging.getLogger(__name__)


def load_repo_settings(repo: git.Repo, revision: str, defaults: ReviewersConfig) -> ReviewersConfig:
    """
    Return the reviewer settings in effect for a repository at ``revision``.

    A missing file means the defaults apply. A malformed file is logged and
    ignored rather than failing the change.
    """
    settings_path = config.repo_config.file_path
    content = RepositoryCache.read_file(repo, revision, settings_path)
    if content is None:
        logger.debug(f"No {settings_path} at {revision}, using service defaults")
        return defaults

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        logger.warning(f"Ignoring malformed {settings_path} at {revision}: {e}")
        return defaults

    if data is None:
        return defaults
    if not isinstance(data, dict):
        logger.warning(f"Ignoring {settings_path} at {revision}: expected a mapping, got {type(data).__name__}")
        return defaults

    try:
        settings = defaults.with_overrides(data)
    except (TypeError, ValueError) as e:
        logger.warning(f"Ignoring invalid values in {settings_path} at {revision}: {e}")
        return defaults

    logger.info(f"Loaded reviewer settings from {settings_path} at {revision}: {settings}")
    return settings
