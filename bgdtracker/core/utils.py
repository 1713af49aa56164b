"""Shared utility functions for the bgdtracker package."""
import logging
import os
import re
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def get_config_value(key: str, default: str = "") -> str:
    """Get configuration value from Streamlit secrets or environment variables.

    Checks Streamlit secrets first (for hosted deployments), then falls back
    to environment variables (for local use and the CLI).
    """
    try:
        import streamlit as st
        from streamlit.errors import StreamlitAPIException
    except ImportError:
        return os.getenv(key, default)

    try:
        if hasattr(st, "secrets") and key in st.secrets:
            return str(st.secrets[key])
    except (FileNotFoundError, KeyError, StreamlitAPIException):
        pass

    return os.getenv(key, default)


def load_env_file(path: Path) -> None:
    """Load environment variables from a file if it exists."""
    if not path.exists():
        return

    try:
        with path.open(encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                key = key.strip()
                if not key or key in os.environ:
                    continue
                os.environ[key] = value.strip().strip('"').strip("'")
    except OSError as exc:
        logger.debug("Could not load env file %s: %s", path, exc)


def parse_int_prefix(text: str) -> Optional[int]:
    """Parse the leading integer of ``text`` ("12abc" -> 12), or None."""
    match = _LEADING_INT.match(text or "")
    return int(match.group(1)) if match else None


def strip_non_digits(value: str) -> str:
    return re.sub(r"[^0-9]", "", value or "")
