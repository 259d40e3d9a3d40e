"""
Configuration package - unified access point.

This package provides all configuration classes and the global config instance.
"""

from reviewers_by_blame.core.config.reviewers_config import ReviewersConfig
from reviewers_by_blame.core.config.settings import Config, config

__all__ = [
    "Config",
    "ReviewersConfig",
    "config",
]
