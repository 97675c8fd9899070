"""
arduinokit/settings/installation.py

Arduino IDE installation discovery - finds the IDE root directory.

Sources are consulted in strict priority order and the first one that yields
a path wins:

1. The explicit ``arduino.path`` user setting (used verbatim when non-blank)
2. The directory of the ``arduino`` executable found on PATH
3. Conventional per-platform installation directories

A path obtained this way is then validated by checking that the platform's
executable marker exists under it.
"""

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional

from ..core.exceptions import (
    ArduinoPathNotFoundError,
    InstallationError,
    InvalidArduinoPathError,
)
from ..core.interfaces import SettingsProvider
from ..core.platform import PlatformProfile

logger = logging.getLogger(__name__)


@dataclass
class InstallationResult:
    """
    Outcome of installation path resolution.

    Attributes:
        path: Resolved installation root, or None if nothing was found
        source: Where the path came from ('settings', 'path', 'standard_location')
        error: ArduinoPathNotFoundError, InvalidArduinoPathError, or None
    """

    path: Optional[str]
    source: Optional[str] = None
    error: Optional[InstallationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        if self.path is None:
            return "Arduino installation not found"
        status = "valid" if self.ok else "invalid"
        return f"{self.path} ({self.source}, {status})"


class PathSearcher:
    """
    Search PATH for the Arduino executable.

    The installation root is the directory holding the resolved executable
    (symlinks are followed, so /usr/local/bin/arduino pointing into
    /opt/arduino-1.8.19 yields /opt/arduino-1.8.19). On macOS the root is
    the directory containing Arduino.app.
    """

    source = "path"

    def __init__(self, profile: PlatformProfile, environ: Optional[Mapping[str, str]] = None):
        self.profile = profile
        self.environ = os.environ if environ is None else environ

    def search(self) -> List[str]:
        executable = self._find_in_path(self.profile.executable_name)
        if executable is None:
            logger.debug(f"{self.profile.executable_name} not found in PATH")
            return []

        root = self._installation_root(executable)
        logger.debug(f"Found {executable} in PATH, installation root {root}")
        return [str(root)]

    def _find_in_path(self, executable: str) -> Optional[Path]:
        path_str = shutil.which(executable, path=self.environ.get("PATH", os.defpath))
        return Path(path_str).resolve() if path_str else None

    def _installation_root(self, executable: Path) -> Path:
        if self.profile.os == "macos":
            for parent in executable.parents:
                if parent.name == self.profile.validation_marker:
                    return parent.parent
        return executable.parent


class StandardLocationSearcher:
    """
    List conventional installation directories.

    - Windows: %ProgramFiles(x86)%\\Arduino, %ProgramFiles%\\Arduino
    - Linux: /opt/arduino, /usr/local/share/arduino, /usr/share/arduino
    - macOS: /Applications
    """

    source = "standard_location"

    def __init__(self, profile: PlatformProfile, environ: Mapping[str, str]):
        self.profile = profile
        self.environ = environ

    def search(self) -> List[str]:
        return self._get_standard_locations()

    def _get_standard_locations(self) -> List[str]:
        if self.profile.os == "windows":
            locations = []
            for variable in ("ProgramFiles(x86)", "ProgramFiles"):
                program_files = self.environ.get(variable)
                if program_files:
                    locations.append(self.profile.join(program_files, "Arduino"))
            return locations
        elif self.profile.os == "macos":
            return ["/Applications"]
        else:
            return [
                "/opt/arduino",
                "/usr/local/share/arduino",
                "/usr/share/arduino",
            ]


class InstallationProber:
    """
    Probe the environment and conventional directories for an installation.

    Searchers run in order; the first candidate that is an existing
    directory wins.
    """

    def __init__(self, profile: PlatformProfile, environ: Optional[Mapping[str, str]] = None):
        self.profile = profile
        environ = os.environ if environ is None else environ
        self.searchers = [
            PathSearcher(profile, environ),
            StandardLocationSearcher(profile, environ),
        ]

    def probe(self) -> Optional[InstallationResult]:
        """
        Find the first existing candidate directory.

        Returns:
            InstallationResult with path and source, or None if nothing exists
        """
        for searcher in self.searchers:
            logger.debug(f"Running {searcher.__class__.__name__}")
            for candidate in searcher.search():
                if os.path.isdir(candidate):
                    logger.info(f"Found Arduino installation candidate: {candidate}")
                    return InstallationResult(path=candidate, source=searcher.source)
                logger.debug(f"Candidate does not exist: {candidate}")
        return None


def validate_arduino_path(arduino_path: str, profile: PlatformProfile) -> bool:
    """
    Check that an Arduino executable exists under the installation root.

    Only existence is checked; the executable is never run.
    """
    return os.path.exists(profile.validation_path(arduino_path))


class InstallationPathResolver:
    """
    Resolve the Arduino IDE installation root.

    Args:
        profile: Layout profile of the running platform
        settings: Store holding the explicit arduino.path override
        prober: Platform prober (defaults to PATH and standard locations)
    """

    def __init__(
        self,
        profile: PlatformProfile,
        settings: Optional[SettingsProvider] = None,
        prober: Optional[InstallationProber] = None,
    ):
        self.profile = profile
        self.settings = settings
        self.prober = prober or InstallationProber(profile)

    def resolve(self) -> InstallationResult:
        """
        Run the priority chain and validate the outcome.

        Returns:
            InstallationResult; its error is set when nothing was found or the
            path is not a valid installation
        """
        configured = self.settings.get_arduino_path() if self.settings else None

        if configured and configured.strip():
            result = InstallationResult(path=configured, source="settings")
            logger.debug(f"Using configured arduino.path: {configured}")
        else:
            result = self.prober.probe()
            if result is None:
                logger.error("Cannot find the Arduino installation path")
                return InstallationResult(path=None, error=ArduinoPathNotFoundError())

        if not validate_arduino_path(result.path, self.profile):
            logger.error(
                f"No {self.profile.validation_marker} under {result.path}, "
                "installation path is invalid"
            )
            result.error = InvalidArduinoPathError(result.path)
        else:
            logger.info(f"Arduino installation: {result.path} (from {result.source})")

        return result


__all__ = [
    "InstallationResult",
    "PathSearcher",
    "StandardLocationSearcher",
    "InstallationProber",
    "validate_arduino_path",
    "InstallationPathResolver",
]
