from __future__ import annotations

import pytest

from equivmap.config import (
    CollectionSettings,
    DuplicateRegistrationPolicy,
    InvalidConfigurationError,
    env_flag,
)
from equivmap.config.settings import DUPLICATE_REGISTRATION_ENV, REMOVE_UNMATCHED_ENV


def test_env_flag_parses_common_spellings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLAG_VAR", "Yes")
    assert env_flag("FLAG_VAR", default=False) is True

    monkeypatch.setenv("FLAG_VAR", "off")
    assert env_flag("FLAG_VAR", default=True) is False

    monkeypatch.setenv("FLAG_VAR", "   ")
    assert env_flag("FLAG_VAR", default=True) is True


def test_env_flag_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLAG_VAR", "maybe")

    with pytest.raises(InvalidConfigurationError, match="FLAG_VAR"):
        env_flag("FLAG_VAR", default=True)


def test_collection_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(REMOVE_UNMATCHED_ENV, raising=False)
    monkeypatch.delenv(DUPLICATE_REGISTRATION_ENV, raising=False)

    settings = CollectionSettings.from_environment()

    assert settings == CollectionSettings()
    assert settings.remove_unmatched is True
    assert settings.duplicate_registration is DuplicateRegistrationPolicy.IGNORE


def test_collection_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(REMOVE_UNMATCHED_ENV, "false")
    monkeypatch.setenv(DUPLICATE_REGISTRATION_ENV, "RAISE")

    settings = CollectionSettings.from_environment()

    assert settings.remove_unmatched is False
    assert settings.duplicate_registration is DuplicateRegistrationPolicy.RAISE


def test_collection_settings_rejects_unknown_policy(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(DUPLICATE_REGISTRATION_ENV, "merge")

    with pytest.raises(InvalidConfigurationError, match="one of ignore, raise"):
        CollectionSettings.from_environment()
