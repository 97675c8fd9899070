"""
Arduino IDE settings facade.

``ArduinoSettings`` is the single configuration object the rest of an
application queries for Arduino paths. It is built once by
``ArduinoSettings.initialize()`` and passed around explicitly; there is no
process-wide instance.

Usage:
    from arduinokit.settings import ArduinoSettings

    result = ArduinoSettings.initialize()
    if not result.ok:
        print(result.error)

    settings = result.settings
    print(settings.builder_path)
    print(settings.tool_properties.tool_path("avrdude"))
"""

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from ..core.exceptions import InstallationError
from ..core.interfaces import FailureReporter, SettingsProvider
from ..core.platform import PlatformProfile, get_platform_profile
from ..core.shell_folder import RegistryReader
from .data_paths import DataPathResolver
from .installation import InstallationPathResolver, InstallationProber, InstallationResult
from .preferences import PreferencesStore
from .tool_registry import ToolProperties, ToolRegistryBuilder

logger = logging.getLogger(__name__)


@dataclass
class InitializationResult:
    """
    Outcome of ArduinoSettings.initialize().

    The settings object is always returned. When error is set, getters
    derived from the installation root may return None.
    """

    settings: "ArduinoSettings"
    error: Optional[InstallationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ArduinoSettings:
    """
    Resolved Arduino IDE paths, preferences and runtime tools.

    Installation-derived paths are fixed at construction. Preferences and the
    tool registry are read on first access; preferences can be re-read with
    reload_preferences(), the tool registry is never rebuilt.
    """

    def __init__(
        self,
        profile: PlatformProfile,
        installation: InstallationResult,
        package_path: str,
        default_sketchbook_path: str,
        tool_registry_builder: Optional[ToolRegistryBuilder] = None,
    ):
        self._profile = profile
        self._installation = installation
        self._package_path = package_path
        self._preferences = PreferencesStore(self.preference_path)
        self._tool_registry_builder = tool_registry_builder or ToolRegistryBuilder(
            self.default_package_path, package_path
        )
        self._tool_properties: Optional[ToolProperties] = None
        self._sketchbook_path: Optional[str] = None
        self._default_sketchbook_path = default_sketchbook_path

    @classmethod
    def initialize(
        cls,
        settings: Optional[SettingsProvider] = None,
        reporter: Optional[FailureReporter] = None,
        profile: Optional[PlatformProfile] = None,
        environ: Optional[Mapping[str, str]] = None,
        registry_reader: Optional[RegistryReader] = None,
        prober: Optional[InstallationProber] = None,
    ) -> InitializationResult:
        """
        Resolve the installation and data directories once.

        Args:
            settings: Store with the explicit arduino.path override
            reporter: Receives installation failures; also asked to open the
                settings editor
            profile: Layout profile (defaults to the running platform)
            environ: Environment variables (defaults to os.environ)
            registry_reader: Registry lookup used on Windows
            prober: Installation prober (defaults to PATH and standard locations)

        Returns:
            InitializationResult holding the settings and any installation error
        """
        profile = profile or get_platform_profile()
        if prober is None:
            prober = InstallationProber(profile, environ)

        installation = InstallationPathResolver(profile, settings, prober).resolve()
        if installation.error is not None and reporter is not None:
            reporter.report(installation.error)
            reporter.request_settings()

        data_paths = DataPathResolver(profile, environ, registry_reader).resolve(
            installation.path
        )

        instance = cls(
            profile,
            installation,
            data_paths.package_path,
            data_paths.default_sketchbook_path,
        )
        return InitializationResult(settings=instance, error=installation.error)

    @property
    def platform(self) -> PlatformProfile:
        return self._profile

    @property
    def installation(self) -> InstallationResult:
        return self._installation

    @property
    def arduino_path(self) -> Optional[str]:
        return self._installation.path

    @property
    def command_path(self) -> Optional[str]:
        if self.arduino_path is None:
            return None
        return self._profile.command_path(self.arduino_path)

    @property
    def builder_path(self) -> Optional[str]:
        if self.arduino_path is None:
            return None
        return self._profile.builder_path(self.arduino_path)

    @property
    def default_example_path(self) -> Optional[str]:
        if self.arduino_path is None:
            return None
        return self._profile.example_path(self.arduino_path)

    @property
    def default_package_path(self) -> Optional[str]:
        if self.arduino_path is None:
            return None
        return self._profile.hardware_path(self.arduino_path)

    @property
    def default_lib_path(self) -> Optional[str]:
        if self.arduino_path is None:
            return None
        return self._profile.libraries_path(self.arduino_path)

    @property
    def package_path(self) -> str:
        return self._package_path

    @property
    def preference_path(self) -> str:
        return self._profile.join(self._package_path, "preferences.txt")

    @property
    def preferences(self) -> Dict[str, str]:
        return self._preferences.preferences

    @property
    def sketchbook_path(self) -> str:
        if self._sketchbook_path is None:
            self._sketchbook_path = (
                self._preferences.sketchbook_override() or self._default_sketchbook_path
            )
        return self._sketchbook_path

    @property
    def tool_properties(self) -> ToolProperties:
        if self._tool_properties is None:
            self._tool_properties = self._tool_registry_builder.scan()
        return self._tool_properties

    def reload_preferences(self) -> Dict[str, str]:
        """
        Re-read preferences.txt and recompute the sketchbook path.

        The previous sketchbook path is kept when the fresh preferences have
        no sketchbook.path override.
        """
        previous = self._sketchbook_path or self._default_sketchbook_path
        self._preferences.reload()
        self._sketchbook_path = self._preferences.sketchbook_override() or previous
        logger.debug(f"Reloaded preferences, sketchbook at {self._sketchbook_path}")
        return self._preferences.preferences

    def describe(self) -> Dict[str, Optional[str]]:
        """Get the derived path surface as a dictionary."""
        return {
            "arduino_path": self.arduino_path,
            "command_path": self.command_path,
            "builder_path": self.builder_path,
            "default_example_path": self.default_example_path,
            "package_path": self.package_path,
            "default_package_path": self.default_package_path,
            "default_lib_path": self.default_lib_path,
            "sketchbook_path": self.sketchbook_path,
            "preference_path": self.preference_path,
        }


__all__ = [
    "InitializationResult",
    "ArduinoSettings",
]
