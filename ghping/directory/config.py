"""
Engineer roster loading.

The roster is a YAML file keyed by canonical name:

    engineers:
      "Taylor Lapeyre":
        usernames:
          slack: taylor
          github: taylorlapeyre
        github_preferences:
          frequency: only_mentions    # all_discussion | only_mentions | off
          ping_location: dm           # dm | eng-pr
        travis_preferences:
          frequency: only_failures    # only_passes | only_failures | everything | off

Every preference is optional; missing values fall back to the defaults in
ghping.policy.preferences.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union
import yaml
from pydantic import ValidationError
from ghping.directory.models import EngineerRecord, PrPreference, BuildPreference

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when the engineer roster is missing or invalid."""


def load_engineers(path: Union[str, Path]) -> List[EngineerRecord]:
    """Load engineer records from a roster YAML file."""
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Engineer roster not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse engineer roster {path}: {e}") from e

    engineers = parse_engineers(data.get("engineers") if isinstance(data, dict) else None)
    logger.info(f"Loaded {len(engineers)} engineers from {path}")
    return engineers


def parse_engineers(config: Any) -> List[EngineerRecord]:
    """Build engineer records from the `engineers` mapping of the roster."""
    if not isinstance(config, dict) or not config:
        raise ConfigError("Roster must contain a non-empty 'engineers' mapping")

    engineers = []
    for name, entry in config.items():
        try:
            engineers.append(_record_from_config(str(name), entry or {}))
        except (ValidationError, TypeError, AttributeError) as e:
            raise ConfigError(f"Invalid roster entry for {name}: {e}") from e

    return engineers


def _record_from_config(name: str, entry: Dict[str, Any]) -> EngineerRecord:
    usernames = entry.get("usernames") or {}
    github_prefs = entry.get("github_preferences") or {}
    travis_prefs = entry.get("travis_preferences") or {}

    record = EngineerRecord(
        name=name,
        chat_handle=usernames.get("slack"),
        github_handle=usernames.get("github"),
        pr_preference=PrPreference(
            frequency=github_prefs.get("frequency"),
            location=github_prefs.get("ping_location"),
        ),
        build_preference=BuildPreference(
            frequency=travis_prefs.get("frequency"),
        ),
    )

    if not record.chat_handle or not record.github_handle:
        logger.warning(f"{name} is missing a Slack or GitHub username and will not get every notification")

    return record
