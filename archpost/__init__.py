"""
archpost - interactive post-install checklist for Arch-based systems
"""

from .__version__ import __version__

__all__ = ["__version__"]
