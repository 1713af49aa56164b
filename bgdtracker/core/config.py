"""Runtime settings resolved from Streamlit secrets, env vars, or secrets/bgd.env."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from bgdtracker.core.schema import DEFAULT_EMAIL_PREFILL, DEFAULT_LOGIN_PASSWORD
from bgdtracker.core.utils import get_config_value, load_env_file

DEFAULT_ENV_FILE = Path("secrets/bgd.env")
DEFAULT_DATA_FILE = Path("data/bgd_records.json")
_ENV_LOADED = False

logger = logging.getLogger(__name__)


def _ensure_env() -> None:
    """Populate settings env vars from secrets/bgd.env once per process."""

    global _ENV_LOADED
    if _ENV_LOADED:
        return
    _ENV_LOADED = True

    env_path = Path(os.getenv("BGD_ENV_FILE", DEFAULT_ENV_FILE))
    load_env_file(env_path)


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one process."""

    data_file: Path = DEFAULT_DATA_FILE
    admin_secret: str = DEFAULT_LOGIN_PASSWORD
    default_login_password: str = DEFAULT_LOGIN_PASSWORD
    default_email: str = DEFAULT_EMAIL_PREFILL
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Read settings, falling back to the defaults the browser tool used."""

    _ensure_env()
    settings = Settings(
        data_file=Path(get_config_value("BGD_DATA_FILE", str(DEFAULT_DATA_FILE))),
        admin_secret=get_config_value("BGD_ADMIN_SECRET", DEFAULT_LOGIN_PASSWORD),
        default_login_password=get_config_value("BGD_DEFAULT_LOGIN_PASSWORD", DEFAULT_LOGIN_PASSWORD),
        default_email=get_config_value("BGD_DEFAULT_EMAIL", DEFAULT_EMAIL_PREFILL),
        log_level=get_config_value("LOG_LEVEL", "INFO"),
    )
    logger.debug("Resolved settings with data file %s", settings.data_file)
    return settings
