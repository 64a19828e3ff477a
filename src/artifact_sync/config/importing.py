"""Import pass configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from .env import optional_positive_int
from .errors import ConfigurationError

DENIAL_POLICY_ENV: Final[str] = "ARTIFACT_SYNC_DENIAL_POLICY"
STREAM_BATCH_SIZE_ENV: Final[str] = "ARTIFACT_SYNC_STREAM_BATCH_SIZE"
DEFAULT_STREAM_BATCH_SIZE: Final[int] = 500


class DenialPolicy(StrEnum):
    """What an import pass does when the permission gate rejects a resource."""

    # only the denied resource is rejected, the pass continues
    REJECT_RESOURCE = "reject"
    # the access-denied error propagates and the caller rolls back everything
    ABORT_IMPORT = "abort"


@dataclass(frozen=True, slots=True)
class ImportConfig:
    denial_policy: DenialPolicy = DenialPolicy.REJECT_RESOURCE
    stream_batch_size: int = DEFAULT_STREAM_BATCH_SIZE


def get_import_config() -> ImportConfig:
    raw_policy = os.getenv(DENIAL_POLICY_ENV)
    if raw_policy is None or not raw_policy.strip():
        policy = DenialPolicy.REJECT_RESOURCE
    else:
        try:
            policy = DenialPolicy(raw_policy.strip().lower())
        except ValueError as exc:
            allowed = ", ".join(member.value for member in DenialPolicy)
            raise ConfigurationError(
                f"{DENIAL_POLICY_ENV} must be one of: {allowed}; got {raw_policy!r}"
            ) from exc
    batch_size = optional_positive_int(STREAM_BATCH_SIZE_ENV, DEFAULT_STREAM_BATCH_SIZE)
    return ImportConfig(denial_policy=policy, stream_batch_size=batch_size)
