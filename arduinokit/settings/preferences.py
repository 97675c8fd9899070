"""
Arduino IDE preferences file handling.

The IDE stores its preferences in ``<package dir>/preferences.txt`` as
``key=value`` lines. The file is owned by the IDE; ArduinoKit only reads it.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)

SKETCHBOOK_KEY = "sketchbook.path"


def normalize_newlines(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def parse_config_text(text: str, filter_comments: bool = True) -> Dict[str, str]:
    """
    Parse ``key=value`` lines.

    Lines are stripped before parsing. Blank lines, ``#`` comments (when
    filter_comments is True) and lines without a key before the first ``=``
    are ignored. Later duplicates win.

    Example:
        >>> parse_config_text("sketchbook.path = /home/me/Arduino\\n# note\\n")
        {'sketchbook.path': '/home/me/Arduino'}
    """
    result: Dict[str, str] = {}

    for line in normalize_newlines(text).split("\n"):
        line = line.strip()
        if not line:
            continue
        if filter_comments and line.startswith("#"):
            continue

        separator = line.find("=")
        if separator > 0:
            key = line[:separator].strip()
            value = line[separator + 1 :].strip()
            result[key] = value

    return result


def parse_config_file(
    config_file: Union[str, Path], filter_comments: bool = True
) -> Dict[str, str]:
    """
    Parse a ``key=value`` file.

    Returns:
        Parsed mapping, or an empty mapping if the file is missing or unreadable
    """
    path = Path(config_file)

    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug(f"Preferences unavailable at {path}: {e}")
        return {}

    return parse_config_text(text, filter_comments=filter_comments)


class PreferencesStore:
    """
    Lazily loaded view of the Arduino IDE preferences file.

    The mapping is read on first access and replaced wholesale by reload().
    It is never modified in place.
    """

    def __init__(self, preference_path: Optional[str]):
        self.preference_path = preference_path
        self._preferences: Optional[Dict[str, str]] = None

    @property
    def loaded(self) -> bool:
        return self._preferences is not None

    @property
    def preferences(self) -> Dict[str, str]:
        if self._preferences is None:
            self._preferences = self.load()
        return self._preferences

    def load(self) -> Dict[str, str]:
        """Read the preferences file without touching the cached mapping."""
        if not self.preference_path:
            return {}

        preferences = parse_config_file(self.preference_path)
        logger.debug(
            f"Loaded {len(preferences)} preferences from {self.preference_path}"
        )
        return preferences

    def reload(self) -> Dict[str, str]:
        """Re-read the preferences file and replace the cached mapping."""
        self._preferences = self.load()
        return self._preferences

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.preferences.get(key, default)

    def sketchbook_override(self) -> Optional[str]:
        """Get the sketchbook.path preference if it is set and non-empty."""
        return self.preferences.get(SKETCHBOOK_KEY) or None


__all__ = [
    "SKETCHBOOK_KEY",
    "normalize_newlines",
    "parse_config_text",
    "parse_config_file",
    "PreferencesStore",
]
