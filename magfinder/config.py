"""
MagFinder configuration.

All settings come from environment variables (a local .env is loaded first
via python-dotenv). Invalid numbers fall back to the default.

    MAGFINDER_USER_AGENT        browser User-Agent sent with every request
    MAGFINDER_REQUEST_TIMEOUT   per-request timeout, seconds (20)
    MAGFINDER_SOCIAL_DELAY      pause after each subreddit (2)
    MAGFINDER_LIBRARY_DELAY     pause after each library site (2)
    MAGFINDER_WEB_DELAY         pause after each search engine (3)
    MAGFINDER_LOG_LEVEL         INFO
    MAGFINDER_LOG_FILE          rotating log file path (unset = no file)
    MAGFINDER_DISABLED_SOURCES  comma-separated fetcher ids to skip
"""

import logging
import math
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from dotenv import load_dotenv

from sources.base import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        value = None
    if value is None or not math.isfinite(value):
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default
    return value


def _env_list(name: str) -> List[str]:
    raw = os.environ.get(name, "")
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = 20.0
    social_delay: float = 2.0
    library_delay: float = 2.0
    web_delay: float = 3.0
    log_level: str = "INFO"
    log_file: Optional[str] = None
    disabled_sources: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.social_delay = max(0.0, self.social_delay)
        self.library_delay = max(0.0, self.library_delay)
        self.web_delay = max(0.0, self.web_delay)
        self.log_level = (self.log_level or "INFO").upper()

    @property
    def pace_delays(self) -> Dict[str, float]:
        """Inter-unit delay keyed by fetcher id."""
        return {
            "reddit": self.social_delay,
            "digital-libraries": self.library_delay,
            "general-web": self.web_delay,
        }

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv()

        return cls(
            user_agent=os.environ.get("MAGFINDER_USER_AGENT", "").strip() or DEFAULT_USER_AGENT,
            request_timeout=_env_float("MAGFINDER_REQUEST_TIMEOUT", 20.0),
            social_delay=_env_float("MAGFINDER_SOCIAL_DELAY", 2.0),
            library_delay=_env_float("MAGFINDER_LIBRARY_DELAY", 2.0),
            web_delay=_env_float("MAGFINDER_WEB_DELAY", 3.0),
            log_level=os.environ.get("MAGFINDER_LOG_LEVEL", "INFO"),
            log_file=os.environ.get("MAGFINDER_LOG_FILE") or None,
            disabled_sources=_env_list("MAGFINDER_DISABLED_SOURCES"),
        )
