"""
Pytest configuration and shared fixtures for ArduinoKit tests.
"""

import pytest
from pathlib import Path
from typing import Dict
from unittest.mock import Mock

from arduinokit.core.platform import PLATFORM_PROFILES, clear_platform_cache
from arduinokit.settings.arduino_settings import ArduinoSettings
from arduinokit.settings.user_config import StaticSettings


@pytest.fixture(autouse=True)
def _reset_platform_cache():
    """Ensure platform detection does not leak between tests."""
    clear_platform_cache()
    yield
    clear_platform_cache()


@pytest.fixture
def linux_profile():
    return PLATFORM_PROFILES["linux"]


@pytest.fixture
def macos_profile():
    return PLATFORM_PROFILES["macos"]


@pytest.fixture
def windows_profile():
    return PLATFORM_PROFILES["windows"]


@pytest.fixture
def home_dir(tmp_path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def linux_environ(home_dir) -> Dict[str, str]:
    return {"HOME": str(home_dir)}


@pytest.fixture
def linux_install(tmp_path) -> Path:
    """
    Create a Linux Arduino IDE installation.

    Layout:
        arduino-1.8.19/
            arduino
            arduino-builder
            examples/
            libraries/
            hardware/tools/avr/builtin_tools_versions.txt
    """
    root = tmp_path / "arduino-1.8.19"
    (root / "examples").mkdir(parents=True)
    (root / "libraries").mkdir()
    (root / "arduino").write_text("#!/bin/sh\n")
    (root / "arduino").chmod(0o755)
    (root / "arduino-builder").write_text("")

    tools_dir = root / "hardware" / "tools" / "avr"
    tools_dir.mkdir(parents=True)
    (tools_dir / "builtin_tools_versions.txt").write_text(
        "arduino.avrdude=6.0\n"
        "arduino.avr-gcc=4.9.2-atmel3.5.4-arduino2\n"
        "arduino.arduinoOTA=1.2.1\n"
    )
    return root


@pytest.fixture
def package_dir(home_dir) -> Path:
    """
    Create a populated ~/.arduino15 package directory.

    packages/arduino has avrdude 6.3 and avr-gcc 7.3.0, packages/esp32 has
    xtensa-esp32-elf-gcc, packages/empty has no tools directory.
    """
    root = home_dir / ".arduino15"
    packages = root / "packages"
    (packages / "arduino" / "tools" / "avrdude" / "6.3.0-arduino17").mkdir(parents=True)
    (packages / "arduino" / "tools" / "avr-gcc" / "7.3.0-atmel3.6.1-arduino7").mkdir(
        parents=True
    )
    (packages / "arduino" / "hardware" / "avr" / "1.8.6").mkdir(parents=True)
    (packages / "empty" / "hardware").mkdir(parents=True)
    (packages / "esp32" / "tools" / "xtensa-esp32-elf-gcc" / "1.22.0-97-gc752ad5-5.2.0").mkdir(
        parents=True
    )
    return root


def write_preferences(package_path: Path, preferences: Dict[str, str]) -> Path:
    """Write a preferences.txt into a package directory."""
    package_path.mkdir(parents=True, exist_ok=True)
    path = package_path / "preferences.txt"
    path.write_text("".join(f"{key}={value}\n" for key, value in preferences.items()))
    return path


@pytest.fixture
def preferences_writer():
    return write_preferences


@pytest.fixture
def initialized_settings(linux_install, linux_profile, linux_environ, package_dir):
    """InitializationResult for a resolved Linux installation with packages."""
    return ArduinoSettings.initialize(
        settings=StaticSettings(str(linux_install)),
        profile=linux_profile,
        environ=linux_environ,
    )


@pytest.fixture
def unresolved_settings(linux_profile, linux_environ):
    """InitializationResult for a machine without an Arduino installation."""
    prober = Mock()
    prober.probe.return_value = None
    return ArduinoSettings.initialize(
        profile=linux_profile, environ=linux_environ, prober=prober
    )
