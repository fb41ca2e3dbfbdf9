"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, optional_env_var
from .errors import ConfigurationError, InvalidConfigurationError
from .settings import CollectionSettings, DuplicateRegistrationPolicy

__all__ = [
    "CollectionSettings",
    "ConfigurationError",
    "DuplicateRegistrationPolicy",
    "InvalidConfigurationError",
    "env_flag",
    "optional_env_var",
]
