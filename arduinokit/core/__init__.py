"""
Core functionality for ArduinoKit.

This package contains the foundational modules that other components depend on.
"""

from .platform import (
    PlatformInfo,
    PlatformProfile,
    PLATFORM_PROFILES,
    detect_platform,
    get_platform_profile,
    clear_platform_cache,
)

from .shell_folder import (
    WindowsShellFolderResolver,
    expand_environment_tokens,
    read_registry_value,
)

from .interfaces import (
    SettingsProvider,
    FailureReporter,
)

from .exceptions import (
    ArduinoKitError,
    UnsupportedPlatformError,
    InstallationError,
    ArduinoPathNotFoundError,
    InvalidArduinoPathError,
    SettingsFileError,
)

__all__ = [
    "PlatformInfo",
    "PlatformProfile",
    "PLATFORM_PROFILES",
    "detect_platform",
    "get_platform_profile",
    "clear_platform_cache",
    "WindowsShellFolderResolver",
    "expand_environment_tokens",
    "read_registry_value",
    "SettingsProvider",
    "FailureReporter",
    "ArduinoKitError",
    "UnsupportedPlatformError",
    "InstallationError",
    "ArduinoPathNotFoundError",
    "InvalidArduinoPathError",
    "SettingsFileError",
]
