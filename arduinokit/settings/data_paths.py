"""
User data directory resolution.

| Platform | Package directory          | Default sketchbook          |
|----------|----------------------------|-----------------------------|
| Linux    | $HOME/.arduino15           | $HOME/Arduino               |
| macOS    | $HOME/Library/Arduino15    | $HOME/Documents/Arduino     |
| Windows  | ArduinoData or Arduino15   | <Documents>\\Arduino        |

The Windows package directory depends on the installation flavour, see
``WindowsShellFolderResolver.resolve_package_path``.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from ..core.platform import PlatformProfile
from ..core.shell_folder import RegistryReader, WindowsShellFolderResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataPaths:
    """Package directory and default sketchbook for one installation."""

    package_path: str
    default_sketchbook_path: str


class DataPathResolver:
    """
    Compute the package/data directory and the default sketchbook.

    Args:
        profile: Layout profile of the running platform
        environ: Environment variables (defaults to os.environ)
        registry_reader: Registry lookup used on Windows
    """

    def __init__(
        self,
        profile: PlatformProfile,
        environ: Optional[Mapping[str, str]] = None,
        registry_reader: Optional[RegistryReader] = None,
    ):
        self.profile = profile
        self.environ = os.environ if environ is None else environ
        self.registry_reader = registry_reader

    def resolve(self, arduino_path: Optional[str]) -> DataPaths:
        if self.profile.package_dir is None or self.profile.sketchbook_dir is None:
            return self._resolve_from_shell_folder(arduino_path)

        home = self._home()
        paths = DataPaths(
            package_path=self.profile.join(home, *self.profile.package_dir),
            default_sketchbook_path=self.profile.join(home, *self.profile.sketchbook_dir),
        )
        logger.debug(f"Package directory: {paths.package_path}")
        return paths

    def _resolve_from_shell_folder(self, arduino_path: Optional[str]) -> DataPaths:
        shell = WindowsShellFolderResolver(self.environ, self.registry_reader)
        documents = shell.resolve_documents_folder()
        paths = DataPaths(
            package_path=shell.resolve_package_path(arduino_path, documents),
            default_sketchbook_path=self.profile.join(documents, "Arduino"),
        )
        logger.debug(f"Package directory: {paths.package_path}")
        return paths

    def _home(self) -> str:
        home = self.environ.get("HOME")
        if home:
            return home
        return str(Path.home())


__all__ = [
    "DataPaths",
    "DataPathResolver",
]
