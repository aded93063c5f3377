"""
Runtime settings, read from the environment.

A `.env` file in the project root is loaded first when present.
"""

import os
import logging
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel

logger = logging.getLogger(__name__)

project_root = Path(__file__).resolve().parent.parent


class Settings(BaseModel):
    """ghping configuration."""
    slack_bot_token: Optional[str] = None
    engineers_file: Path = Path("engineers.yaml")  # Relative to the working directory
    shared_channel: str = "eng-pr"
    operator_channel: str = "eng-pr"  # Where configuration problems are reported
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Load settings from environment variables (and .env)."""
    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    else:
        load_dotenv()

    shared_channel = os.getenv("GHPING_SHARED_CHANNEL", "eng-pr").lstrip("#")
    settings = Settings(
        slack_bot_token=os.getenv("SLACK_BOT_TOKEN"),
        engineers_file=Path(os.getenv("GHPING_ENGINEERS_FILE") or Path.cwd() / "engineers.yaml"),
        shared_channel=shared_channel,
        operator_channel=os.getenv("GHPING_OPERATOR_CHANNEL", shared_channel).lstrip("#"),
        log_level=os.getenv("GHPING_LOG_LEVEL", "INFO").upper(),
    )

    if not settings.slack_bot_token:
        logger.error("SLACK_BOT_TOKEN not found in environment!")

    return settings
