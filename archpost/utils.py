#!/usr/bin/env python3
"""
Utility functions for archpost
"""

import os
from datetime import datetime
from pathlib import Path
from typing import Optional

REMOTE_SCHEMES = ("http://", "https://", "file://")


def get_app_dir() -> Path:
    """Get the archpost directory path (environment variable aware)

    Returns:
        Path: archpost directory (absolute, resolved)

    Note:
        Uses ARCHPOST_DIR when set, ~/.config/archpost otherwise.
    """
    return Path(os.getenv("ARCHPOST_DIR", "~/.config/archpost")).expanduser().resolve()


def set_app_dir(app_dir: str) -> None:
    """Point ARCHPOST_DIR at the given directory for the current process."""
    os.environ["ARCHPOST_DIR"] = str(Path(app_dir).expanduser().resolve())


def is_remote_source(source: str) -> bool:
    """
    Check whether a checklist source must be fetched as a URL

    Args:
        source: path or URL given on the command line

    Returns:
        True for http://, https:// and file:// sources
    """
    return source.startswith(REMOTE_SCHEMES)


def build_script_name(name_format: str, now: Optional[datetime] = None) -> str:
    """
    Build a timestamped script file name

    Args:
        name_format: strftime format, e.g. "generated-script_%d_%m_%Y_%H%M%S.sh"
        now: timestamp to use (defaults to the current local time)

    Returns:
        File name
    """
    if now is None:
        now = datetime.now()
    return now.strftime(name_format)
