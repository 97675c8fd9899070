"""
Runtime tool registry.

Build tools (avr-gcc, avrdude, bossac, ...) come from two places: the tools
bundled with the IDE, listed in ``builtin_tools_versions.txt``, and the
tools installed by the boards manager under
``<package dir>/packages/<package>/tools/<name>/<version>``.

Every discovered (name, version) pair is registered under two keys:

    runtime.tools.<name>.path            "current" version of the tool
    runtime.tools.<name>-<version>.path  that exact version

Pairs are registered in scan order (built-in tools first, then packages,
tool names and versions in sorted order). The unversioned key therefore
points at the last version scanned, while each versioned key stays
addressable.
"""

import logging
import os
from collections.abc import Mapping
from typing import Dict, Iterator, List, NamedTuple, Optional

from .preferences import normalize_newlines

logger = logging.getLogger(__name__)

TOOL_KEY_PREFIX = "runtime.tools."
BUILTIN_TOOLS_MANIFEST = "builtin_tools_versions.txt"


class BuiltinTool(NamedTuple):
    """One record of the built-in tools manifest."""

    package: str
    name: str
    version: str


class ToolProperties(Mapping):
    """
    Mapping of runtime tool keys to installation directories.

    Entries are added with register() while scanning; the mapping interface
    itself is read-only.
    """

    def __init__(self):
        self._properties: Dict[str, str] = {}
        self._versions: Dict[str, List[str]] = {}

    def __getitem__(self, key: str) -> str:
        return self._properties[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def __repr__(self) -> str:
        return f"ToolProperties({self._properties!r})"

    def register(self, name: str, version: str, path: str) -> None:
        """Point both the current and the versioned key of a tool at path."""
        self._properties[tool_key(name)] = path
        self._properties[tool_key(name, version)] = path
        versions = self._versions.setdefault(name, [])
        if version not in versions:
            versions.append(version)

    def tool_path(self, name: str, version: Optional[str] = None) -> Optional[str]:
        """
        Get the directory of a tool.

        Args:
            name: Tool name (e.g., 'avrdude')
            version: Exact version, or None for the current version

        Example:
            >>> props.tool_path("avrdude")
            '/home/me/.arduino15/packages/arduino/tools/avrdude/6.3.0-arduino17'
        """
        return self.get(tool_key(name, version))

    def tool_names(self) -> List[str]:
        """Get the names of all registered tools in registration order."""
        return list(self._versions)

    def versions(self, name: str) -> List[str]:
        """Get the registered versions of a tool in registration order."""
        return list(self._versions.get(name, []))


def tool_key(name: str, version: Optional[str] = None) -> str:
    """Build the registry key for a tool, optionally pinned to a version."""
    if version is None:
        return f"{TOOL_KEY_PREFIX}{name}.path"
    return f"{TOOL_KEY_PREFIX}{name}-{version}.path"


def parse_builtin_tools(text: str) -> List[BuiltinTool]:
    """
    Parse ``package.name=version`` records of the built-in tools manifest.

    Blank lines are skipped silently. Lines without both a ``.`` and a
    following ``=`` are skipped with a warning.

    Example:
        >>> parse_builtin_tools("arduino.avrdude=6.0.1-arduino5\\n")
        [BuiltinTool(package='arduino', name='avrdude', version='6.0.1-arduino5')]
    """
    tools = []

    for line in normalize_newlines(text).split("\n"):
        if not line.strip():
            continue

        dot = line.find(".")
        equals = line.find("=")
        if dot < 0 or equals < 0 or dot > equals:
            logger.warning(f"Skipping malformed built-in tools record: {line!r}")
            continue

        tools.append(
            BuiltinTool(
                package=line[:dot].strip(),
                name=line[dot + 1 : equals].strip(),
                version=line[equals + 1 :].strip(),
            )
        )

    return tools


def list_directories(path: str) -> Optional[List[str]]:
    """
    List subdirectory names in sorted order.

    Returns:
        Directory names, or None if path is not a readable directory
    """
    try:
        entries = os.listdir(path)
    except OSError:
        return None

    return sorted(name for name in entries if os.path.isdir(os.path.join(path, name)))


class ToolRegistryBuilder:
    """
    Scan built-in and installed tools into a ToolProperties registry.

    Args:
        default_package_path: The IDE's bundled hardware directory
        package_path: The user package/data directory
    """

    def __init__(self, default_package_path: Optional[str], package_path: Optional[str]):
        self.default_package_path = default_package_path
        self.package_path = package_path

    @property
    def builtin_tools_dir(self) -> Optional[str]:
        if not self.default_package_path:
            return None
        return os.path.join(self.default_package_path, "tools", "avr")

    def scan(self) -> ToolProperties:
        """
        Scan all tool sources.

        Returns:
            A new ToolProperties registry
        """
        properties = ToolProperties()
        self._scan_builtin(properties)
        self._scan_packages(properties)
        logger.info(f"Registered {len(properties.tool_names())} runtime tools")
        return properties

    def _scan_builtin(self, properties: ToolProperties) -> None:
        tools_dir = self.builtin_tools_dir
        if tools_dir is None:
            return

        manifest = os.path.join(tools_dir, BUILTIN_TOOLS_MANIFEST)
        try:
            with open(manifest, "r", encoding="utf-8", errors="replace") as f:
                content = f.read()
        except OSError as e:
            logger.debug(f"Built-in tools manifest unavailable: {e}")
            return

        for tool in parse_builtin_tools(content):
            self.runtime_tool(properties, tool.name, tool.version, tools_dir)

    def _scan_packages(self, properties: ToolProperties) -> None:
        if not self.package_path:
            return

        packages_dir = os.path.join(self.package_path, "packages")
        packages = list_directories(packages_dir)
        if packages is None:
            logger.debug(f"No packages directory at {packages_dir}")
            return

        for package in packages:
            tools_dir = os.path.join(packages_dir, package, "tools")
            names = list_directories(tools_dir)
            if names is None:
                logger.debug(f"Package {package} contains no tools")
                continue

            for name in names:
                tool_dir = os.path.join(tools_dir, name)
                for version in list_directories(tool_dir) or []:
                    self.runtime_tool(
                        properties, name, version, os.path.join(tool_dir, version)
                    )

    def runtime_tool(
        self, properties: ToolProperties, name: str, version: str, path: str
    ) -> None:
        """Register a tool version under its versioned and unversioned keys."""
        properties.register(name, version, path)
        logger.debug(f"Registered {name} {version} at {path}")


__all__ = [
    "TOOL_KEY_PREFIX",
    "BUILTIN_TOOLS_MANIFEST",
    "BuiltinTool",
    "ToolProperties",
    "tool_key",
    "parse_builtin_tools",
    "list_directories",
    "ToolRegistryBuilder",
]
