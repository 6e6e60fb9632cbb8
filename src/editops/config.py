"""Configuration management for editops."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    """Read a true/false environment variable."""
    return os.getenv(name, default).lower() == "true"


class Settings(BaseModel):
    """Application settings."""

    # Logging level name for the command-line tool
    log_level: str = os.getenv("EDITOPS_LOG_LEVEL", "WARNING").upper()

    # Diff defaults used by the command-line tool
    include_input_text: bool = _env_flag("EDITOPS_INCLUDE_INPUT_TEXT", "true")
    adjust_moves: bool = _env_flag("EDITOPS_ADJUST_MOVES", "true")
    insert_only: bool = _env_flag("EDITOPS_INSERT_ONLY", "false")

    # Fail on the first unparsable operation instead of skipping it
    strict_parsing: bool = _env_flag("EDITOPS_STRICT_PARSING", "true")


settings = Settings()
