"""Data models for the engineer directory."""

import logging
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator

logger = logging.getLogger(__name__)


class CommentFrequency(str, Enum):
    """How often an engineer wants to hear about PR/issue discussion."""
    ALL_DISCUSSION = "all_discussion"  # Comments on own PRs + @mentions
    ONLY_MENTIONS = "only_mentions"  # Only explicit @mentions
    OFF = "off"
    UNSET = "unset"


class PingLocation(str, Enum):
    """Where comment notifications are delivered."""
    DIRECT_MESSAGE = "dm"
    SHARED_CHANNEL = "eng-pr"  # Pings in #eng-pr
    UNSET = "unset"


class BuildFrequency(str, Enum):
    """Which CI build outcomes an engineer wants to hear about."""
    ONLY_PASSES = "only_passes"
    ONLY_FAILURES = "only_failures"
    EVERYTHING = "everything"
    OFF = "off"
    UNSET = "unset"


def _normalize_token(value):
    """Lower-case a config token, mapping missing values to 'unset'."""
    if value is None:
        return "unset"
    if isinstance(value, Enum):
        return value
    # YAML reads a bare `off` as False
    if isinstance(value, bool):
        if value:
            raise ValueError("expected a preference name, got true; quote the value in the roster")
        return "off"
    return str(value).strip().lower() or "unset"


class PrPreference(BaseModel):
    """GitHub comment notification preferences."""
    model_config = ConfigDict(frozen=True)

    frequency: CommentFrequency = CommentFrequency.UNSET
    location: PingLocation = PingLocation.UNSET

    @field_validator("frequency", mode="before")
    @classmethod
    def _parse_frequency(cls, value):
        return _normalize_token(value)

    @field_validator("location", mode="before")
    @classmethod
    def _parse_location(cls, value):
        value = _normalize_token(value)
        if isinstance(value, str):
            # "eng_pr" and "eng-pr" both name the shared channel
            value = value.replace("_", "-")
        return value


class BuildPreference(BaseModel):
    """CI build notification preferences."""
    model_config = ConfigDict(frozen=True)

    frequency: BuildFrequency = BuildFrequency.UNSET

    @field_validator("frequency", mode="before")
    @classmethod
    def _parse_frequency(cls, value):
        value = _normalize_token(value)
        if value == "all_discussion":
            logger.warning(
                "Build frequency 'all_discussion' is not a build setting, treating it as 'everything'"
            )
            return BuildFrequency.EVERYTHING
        return value


class EngineerRecord(BaseModel):
    """An engineer's identities and notification preferences."""
    model_config = ConfigDict(frozen=True)

    name: str  # Canonical name, unique
    chat_handle: Optional[str] = None  # Slack username
    github_handle: Optional[str] = None
    pr_preference: PrPreference = PrPreference()
    build_preference: BuildPreference = BuildPreference()
