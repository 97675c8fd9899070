"""
Platform detection and Arduino IDE layout profiles.

The Arduino IDE lays out its installation and user data differently on each
operating system. Instead of branching on the OS in every accessor, the
running platform is detected once and mapped to a frozen ``PlatformProfile``
that knows every relative path the rest of ArduinoKit needs.

Each profile also carries the path flavour of its OS, so deriving a Windows
path is the same pure string operation whether the code runs on Windows or
on a Linux CI box.

Usage:
    from arduinokit.core.platform import detect_platform, get_platform_profile

    profile = get_platform_profile(detect_platform().os)
    print(profile.command_path("/opt/arduino"))  # /opt/arduino/arduino
"""

import functools
import platform
from dataclasses import dataclass
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Dict, Optional, Tuple, Type

from .exceptions import UnsupportedPlatformError


@dataclass
class PlatformInfo:
    """
    Running platform information.

    Attributes:
        os: Operating system ('windows', 'linux', 'macos')
        arch: CPU architecture ('x64', 'arm64', 'x86', 'arm')
        os_version: OS version string (e.g., '10.0.19041', '5.15.0', '14.1')
    """

    os: str
    arch: str
    os_version: str

    def platform_string(self) -> str:
        """
        Get canonical platform string (e.g., 'linux-x64', 'macos-arm64').

        Example:
            >>> PlatformInfo('linux', 'x64', '5.15').platform_string()
            'linux-x64'
        """
        return f"{self.os}-{self.arch}"

    def __str__(self) -> str:
        return f"{self.platform_string()} v{self.os_version}"


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.

    Raises:
        UnsupportedPlatformError: If the OS is not Windows, Linux or macOS
    """
    return PlatformInfo(
        os=_detect_os(), arch=_detect_architecture(), os_version=_detect_os_version()
    )


def _detect_os() -> str:
    """
    Detect operating system.

    Returns:
        Normalized OS name: 'windows', 'linux', 'macos'
    """
    system = platform.system().lower()

    if system == "windows":
        return "windows"
    elif system == "linux":
        return "linux"
    elif system == "darwin":
        return "macos"
    else:
        raise UnsupportedPlatformError(system)


def _detect_architecture() -> str:
    """
    Detect CPU architecture.

    Returns:
        Normalized architecture: 'x64', 'arm64', 'x86', 'arm'
    """
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "x64"
    elif machine in ("aarch64", "arm64"):
        return "arm64"
    elif machine in ("i386", "i686", "x86"):
        return "x86"
    elif machine.startswith("arm"):
        return "arm"
    else:
        return machine


def _detect_os_version() -> str:
    system = platform.system().lower()

    if system == "darwin":
        version = platform.mac_ver()[0]
        return version if version else "unknown"
    elif system == "linux":
        return platform.release()
    else:
        return platform.version()


def clear_platform_cache():
    """
    Clear the platform detection cache.

    This forces the next call to detect_platform() to re-detect.
    """
    detect_platform.cache_clear()


# ============================================================================
# Arduino IDE Layout Profiles
# ============================================================================


@dataclass(frozen=True)
class PlatformProfile:
    """
    Arduino IDE directory layout for one operating system.

    Attributes:
        os: Operating system the profile describes
        path_flavour: Pure path class used to join paths for this OS
        resources: Parts between the installation root and the IDE resources
            (examples, hardware, libraries, builder)
        command: Parts from the root to the IDE executable
        builder: Parts from the root to the arduino-builder executable
        validation_marker: Entry that must exist under a valid installation root
        executable_name: Executable looked up on PATH when probing
        package_dir: Parts from the home directory to the package/data
            directory, or None when it is resolved from the shell folder
        sketchbook_dir: Parts from the home directory to the default
            sketchbook, or None when it is resolved from the shell folder
    """

    os: str
    path_flavour: Type[PurePath]
    resources: Tuple[str, ...]
    command: Tuple[str, ...]
    builder: Tuple[str, ...]
    validation_marker: str
    executable_name: str
    package_dir: Optional[Tuple[str, ...]] = None
    sketchbook_dir: Optional[Tuple[str, ...]] = None

    def join(self, base: str, *parts: str) -> str:
        """Join path parts using this platform's separator rules."""
        return str(self.path_flavour(base, *parts))

    def command_path(self, root: str) -> str:
        return self.join(root, *self.command)

    def builder_path(self, root: str) -> str:
        return self.join(root, *self.builder)

    def example_path(self, root: str) -> str:
        return self.join(root, *self.resources, "examples")

    def hardware_path(self, root: str) -> str:
        return self.join(root, *self.resources, "hardware")

    def libraries_path(self, root: str) -> str:
        return self.join(root, *self.resources, "libraries")

    def validation_path(self, root: str) -> str:
        return self.join(root, self.validation_marker)


_MACOS_JAVA = ("Arduino.app", "Contents", "Java")

PLATFORM_PROFILES: Dict[str, PlatformProfile] = {
    "macos": PlatformProfile(
        os="macos",
        path_flavour=PurePosixPath,
        resources=_MACOS_JAVA,
        command=("Arduino.app", "Contents", "MacOS", "Arduino"),
        builder=_MACOS_JAVA + ("arduino-builder",),
        validation_marker="Arduino.app",
        executable_name="arduino",
        package_dir=("Library", "Arduino15"),
        sketchbook_dir=("Documents", "Arduino"),
    ),
    "linux": PlatformProfile(
        os="linux",
        path_flavour=PurePosixPath,
        resources=(),
        command=("arduino",),
        builder=("arduino-builder",),
        validation_marker="arduino",
        executable_name="arduino",
        package_dir=(".arduino15",),
        sketchbook_dir=("Arduino",),
    ),
    "windows": PlatformProfile(
        os="windows",
        path_flavour=PureWindowsPath,
        resources=(),
        command=("arduino_debug.exe",),
        builder=("arduino-builder.exe",),
        validation_marker="arduino_debug.exe",
        executable_name="arduino",
    ),
}


def get_platform_profile(os_name: Optional[str] = None) -> PlatformProfile:
    """
    Get the Arduino IDE layout profile for an operating system.

    Args:
        os_name: 'windows', 'linux' or 'macos'. If None, detects current platform.

    Raises:
        UnsupportedPlatformError: If no profile exists for the OS
    """
    if os_name is None:
        os_name = detect_platform().os

    profile = PLATFORM_PROFILES.get(os_name)
    if profile is None:
        raise UnsupportedPlatformError(os_name)
    return profile


__all__ = [
    "PlatformInfo",
    "PlatformProfile",
    "PLATFORM_PROFILES",
    "detect_platform",
    "get_platform_profile",
    "clear_platform_cache",
]
