"""Engineer directory for ghping - who is who across Slack and GitHub."""

from ghping.directory.models import (
    EngineerRecord,
    PrPreference,
    BuildPreference,
    CommentFrequency,
    PingLocation,
    BuildFrequency,
)
from ghping.directory.directory import EngineerDirectory
from ghping.directory.config import load_engineers, ConfigError

__all__ = [
    "EngineerRecord",
    "PrPreference",
    "BuildPreference",
    "CommentFrequency",
    "PingLocation",
    "BuildFrequency",
    "EngineerDirectory",
    "load_engineers",
    "ConfigError",
]
