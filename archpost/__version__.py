#!/usr/bin/env python3
"""
Version information for archpost
"""

from importlib import metadata
from typing import Optional

# Static version (fallback)
__version__ = "0.3.0"


def get_installed_version() -> Optional[str]:
    """
    Get version from the installed distribution metadata

    Returns:
        Installed version if the package is installed, None otherwise
    """
    try:
        return metadata.version("archpost")
    except metadata.PackageNotFoundError:
        return None


def get_version() -> str:
    """
    Get the application version

    Always returns the static version for consistency.
    The installed version is available via get_version_info() for reference.

    Returns:
        Version string
    """
    return __version__


def get_version_info() -> dict:
    """
    Get detailed version information

    Returns:
        Dictionary with version details
    """
    installed_version = get_installed_version()

    return {
        "version": get_version(),
        "installed_version": installed_version,
        "static_version": __version__,
        "source": "metadata" if installed_version else "static",
    }


if __name__ == "__main__":
    print(get_version())
