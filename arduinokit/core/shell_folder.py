"""
Windows shell folder resolution.

Users can relocate their Documents folder, and the Windows Store build of
the Arduino IDE keeps its data under it. The effective location is read from
the per-user "User Shell Folders" registry key, whose values are stored
unexpanded (for example ``%USERPROFILE%\\Documents``).
"""

import logging
import os
import re
import sys
from pathlib import PureWindowsPath
from typing import Callable, Mapping, Optional

logger = logging.getLogger(__name__)

HKEY_CURRENT_USER = "HKCU"
USER_SHELL_FOLDERS_KEY = (
    r"Software\Microsoft\Windows\CurrentVersion\Explorer\User Shell Folders"
)
PERSONAL_VALUE = "Personal"
STORE_MANIFEST = "AppxManifest.xml"

# (hive, key path, value name) -> value, or None when unavailable
RegistryReader = Callable[[str, str, str], Optional[str]]

_ENV_TOKEN = re.compile(r"%([^%]+)%")


def read_registry_value(hive: str, key_path: str, value_name: str) -> Optional[str]:
    """
    Read a string value from the Windows registry.

    Args:
        hive: Hive abbreviation ('HKCU' or 'HKLM')
        key_path: Key path below the hive
        value_name: Name of the value to read

    Returns:
        The raw (unexpanded) value, or None if the key or value is missing,
        access is denied, or the registry is not available on this OS
    """
    if sys.platform != "win32":
        return None

    import winreg

    hives = {
        "HKCU": winreg.HKEY_CURRENT_USER,
        "HKLM": winreg.HKEY_LOCAL_MACHINE,
    }

    try:
        with winreg.OpenKey(hives[hive], key_path) as key:
            value, _ = winreg.QueryValueEx(key, value_name)
    except (OSError, KeyError) as e:
        logger.debug(f"Registry lookup {hive}\\{key_path}\\{value_name} failed: {e}")
        return None

    return str(value) if value else None


def expand_environment_tokens(value: str, environ: Mapping[str, str]) -> str:
    """
    Replace ``%VAR%`` tokens with environment variable values.

    Unknown variables are left as literal ``%VAR%`` text.
    """

    def _substitute(match):
        name = match.group(1)
        if name in environ:
            return environ[name]
        logger.debug(f"Environment variable {name} is not set, leaving token as-is")
        return match.group(0)

    return _ENV_TOKEN.sub(_substitute, value)


class WindowsShellFolderResolver:
    """
    Resolve the user's Documents folder and the Arduino package directory.

    Args:
        environ: Environment variables (defaults to os.environ)
        registry_reader: Callable used for the registry lookup
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        registry_reader: Optional[RegistryReader] = None,
    ):
        self.environ = os.environ if environ is None else environ
        self.registry_reader = registry_reader or read_registry_value

    def resolve_documents_folder(self) -> str:
        """
        Resolve the effective Documents folder.

        Returns:
            The registry 'Personal' folder if set, else <USERPROFILE>\\Documents,
            with %VAR% tokens expanded
        """
        folder = self._read_personal_folder()
        if not folder:
            folder = str(
                PureWindowsPath(self.environ.get("USERPROFILE", ""), "Documents")
            )
            logger.debug(f"Using default Documents folder: {folder}")

        return expand_environment_tokens(folder, self.environ)

    def resolve_package_path(self, arduino_path: Optional[str], documents: str) -> str:
        """
        Resolve the package/data directory.

        Store installations ship AppxManifest.xml in the installation root and
        keep their data in <Documents>\\ArduinoData. Classic installations use
        <LOCALAPPDATA>\\Arduino15.

        Args:
            arduino_path: Installation root, or None if unresolved
            documents: Resolved Documents folder
        """
        if arduino_path and os.path.isfile(os.path.join(arduino_path, STORE_MANIFEST)):
            logger.debug("Detected Windows Store installation")
            return str(PureWindowsPath(documents, "ArduinoData"))

        return str(PureWindowsPath(self.environ.get("LOCALAPPDATA", ""), "Arduino15"))

    def _read_personal_folder(self) -> Optional[str]:
        try:
            return self.registry_reader(
                HKEY_CURRENT_USER, USER_SHELL_FOLDERS_KEY, PERSONAL_VALUE
            )
        except Exception as e:
            # Registry failures fall back to the profile default
            logger.debug(f"Shell folder lookup failed: {e}")
            return None


__all__ = [
    "RegistryReader",
    "read_registry_value",
    "expand_environment_tokens",
    "WindowsShellFolderResolver",
]
