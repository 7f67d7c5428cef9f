"""
Checklist document loading (local file or URL).
"""

import logging
import urllib.error
import urllib.request
from pathlib import Path
from typing import Any

import yaml

from ..__version__ import __version__
from ..utils import is_remote_source

logger = logging.getLogger(__name__)


class ChecklistLoadError(Exception):
    """The checklist document could not be read or parsed."""


NUMERIC_TAGS = ("tag:yaml.org,2002:int", "tag:yaml.org,2002:float")


class ChecklistLoader(yaml.SafeLoader):
    """SafeLoader that keeps unquoted numbers as written (``1.10`` stays ``1.10``).

    Package names and labels are text; resolving them as numbers would
    lose leading zeros and trailing decimals.
    """

    yaml_implicit_resolvers = {
        first: [(tag, regexp) for tag, regexp in resolvers if tag not in NUMERIC_TAGS]
        for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }


def fetch_text(url: str, timeout: float = 30) -> str:
    """Download a document from an http(s):// or file:// URL.

    Args:
        url: Source URL.
        timeout: Socket timeout in seconds.

    Returns:
        Decoded document text.

    Raises:
        ChecklistLoadError: On any network or decoding failure.
    """
    request = urllib.request.Request(
        url, headers={"User-Agent": f"archpost/{__version__}"}
    )
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            return response.read().decode("utf-8")
    except (urllib.error.URLError, OSError) as e:
        raise ChecklistLoadError(f"Failed to download {url}: {e}") from e
    except UnicodeDecodeError as e:
        raise ChecklistLoadError(f"{url} is not valid UTF-8: {e}") from e


def read_text(path: str) -> str:
    """Read a local document."""
    file_path = Path(path).expanduser()
    if not file_path.exists():
        raise ChecklistLoadError(f"Checklist file not found: {file_path}")
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ChecklistLoadError(f"Failed to read {file_path}: {e}") from e


def parse_document(text: str, source: str = "<string>") -> Any:
    """Parse YAML text into plain dicts, lists and scalars (numbers stay text)."""
    try:
        return yaml.load(text, Loader=ChecklistLoader)
    except yaml.YAMLError as e:
        raise ChecklistLoadError(f"Failed to load YAML from {source}: {e}") from e


def load_checklist(source: str, timeout: float = 30) -> Any:
    """
    Load and parse a checklist document

    Args:
        source: local path, or http://, https:// or file:// URL
        timeout: download timeout in seconds (URLs only)

    Returns:
        Parsed YAML root (None for an empty document)

    Raises:
        ChecklistLoadError: if the document cannot be read or parsed
    """
    if is_remote_source(source):
        logger.debug("fetching checklist from %s", source)
        text = fetch_text(source, timeout=timeout)
    else:
        logger.debug("reading checklist from %s", source)
        text = read_text(source)
    return parse_document(text, source)
