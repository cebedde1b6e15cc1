"""Directory discovery for mason-gcp configuration and log files."""

import os
import sys
from pathlib import Path


def in_virtualenv() -> bool:
    """Check if running in a virtual environment."""
    return sys.prefix != sys.base_prefix


def get_config_location() -> Path:
    """Get config location.

    Priority:
    1. MASON_CONFIG_DIR environment variable
    2. Development: ./config next to the nearest pyproject.toml
    3. Virtualenv: sibling to the venv
    4. Fallback: ./config
    """
    if env_dir := os.environ.get("MASON_CONFIG_DIR"):
        return Path(env_dir)

    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        if (parent / "pyproject.toml").exists():
            return parent / "config"

    if in_virtualenv():
        return Path(sys.prefix).parent / "config"

    return cwd / "config"


def get_logs_location() -> Path:
    """MASON_LOG_DIR, or ``logs`` next to the config directory."""
    if env_dir := os.environ.get("MASON_LOG_DIR"):
        return Path(env_dir)
    return get_config_location().parent / "logs"

