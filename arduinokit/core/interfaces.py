"""
Core interfaces for ArduinoKit.

This module defines the abstract collaborators the settings facade depends
on. Hosts (the CLI, an editor extension, tests) implement these to supply
the explicit installation override and to present resolution failures,
without the core having direct knowledge of them.
"""

from abc import ABC, abstractmethod
from typing import Optional

from .exceptions import InstallationError


class SettingsProvider(ABC):
    """
    Abstract interface for the store holding user-configured overrides.
    """

    @abstractmethod
    def get_arduino_path(self) -> Optional[str]:
        """
        Get the explicitly configured Arduino installation path.

        Returns:
            The configured path (possibly blank), or None if not configured
        """
        pass


class FailureReporter(ABC):
    """
    Abstract interface for presenting installation failures to the user.
    """

    @abstractmethod
    def report(self, error: InstallationError) -> None:
        """
        Show an actionable error message to the user.

        Args:
            error: ArduinoPathNotFoundError or InvalidArduinoPathError
        """
        pass

    @abstractmethod
    def request_settings(self) -> None:
        """
        Ask the host to present its settings editor so the user can fix the path.
        """
        pass


__all__ = [
    "SettingsProvider",
    "FailureReporter",
]
