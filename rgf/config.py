"""Runtime settings resolved once per invocation."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_USER_AGENT = "rgf"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    """Settings passed explicitly to the clients of a single run."""

    token: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, token: Optional[str] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            token: GitHub token given on the command line. If None, uses
                the GITHUB_TOKEN env var.
        """
        if token is None:
            token = os.getenv("GITHUB_TOKEN") or None

        log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"Unknown LOG_LEVEL: '{log_level}'")

        return cls(
            token=token,
            api_url=os.getenv("GITHUB_API_URL", DEFAULT_API_URL).rstrip("/"),
            user_agent=os.getenv("RGF_USER_AGENT", DEFAULT_USER_AGENT),
            log_level=log_level,
        )
