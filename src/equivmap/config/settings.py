"""Runtime settings for the collection reconciliation strategies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from .env import env_flag, optional_env_var
from .errors import InvalidConfigurationError

REMOVE_UNMATCHED_ENV: Final[str] = "EQUIVMAP_REMOVE_UNMATCHED"
DUPLICATE_REGISTRATION_ENV: Final[str] = "EQUIVMAP_DUPLICATE_REGISTRATION"


class DuplicateRegistrationPolicy(StrEnum):
    """What to do when collection mappers are registered twice on one builder."""

    IGNORE = "ignore"
    RAISE = "raise"


@dataclass(frozen=True, slots=True)
class CollectionSettings:
    """Holds reconciliation behaviour switches.

    ``remove_unmatched`` controls whether destination elements without an
    equivalent source element are dropped from the destination collection.
    """

    remove_unmatched: bool = True
    duplicate_registration: DuplicateRegistrationPolicy = DuplicateRegistrationPolicy.IGNORE

    @classmethod
    def from_environment(cls) -> CollectionSettings:
        remove_unmatched = env_flag(REMOVE_UNMATCHED_ENV, default=True)
        raw_policy = optional_env_var(DUPLICATE_REGISTRATION_ENV)
        if raw_policy is None:
            return cls(remove_unmatched=remove_unmatched)
        try:
            policy = DuplicateRegistrationPolicy(raw_policy.lower())
        except ValueError as exc:
            choices = ", ".join(member.value for member in DuplicateRegistrationPolicy)
            raise InvalidConfigurationError(
                DUPLICATE_REGISTRATION_ENV, raw_policy, f"one of {choices}"
            ) from exc
        return cls(remove_unmatched=remove_unmatched, duplicate_registration=policy)
