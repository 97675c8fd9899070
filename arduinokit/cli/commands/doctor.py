"""
Doctor command for diagnosing Arduino environment issues.

Reports the running platform, checks that the Arduino IDE installation can
be found and is valid, and that the user data directory, preferences and
built-in tools manifest are present.
"""

import logging
import os
from dataclasses import dataclass
from typing import List, Optional

from arduinokit.cli.utils import initialize_settings, safe_print
from arduinokit.core.exceptions import UnsupportedPlatformError
from arduinokit.core.interfaces import FailureReporter
from arduinokit.core.platform import detect_platform
from arduinokit.settings.arduino_settings import ArduinoSettings, InitializationResult
from arduinokit.settings.tool_registry import BUILTIN_TOOLS_MANIFEST

logger = logging.getLogger(__name__)

# Checks that only warn when they fail
OPTIONAL_CHECKS = ["Preferences", "Built-in Tools", "Sketchbook"]


class _SilentReporter(FailureReporter):
    def report(self, error) -> None:
        logger.debug(f"Installation error: {error}")

    def request_settings(self) -> None:
        pass


@dataclass
class CheckResult:
    """Result of a health check."""

    name: str
    passed: bool
    message: str
    fix_command: Optional[str] = None


class EnvironmentChecker:
    """Check Arduino environment health."""

    def __init__(self, result: InitializationResult):
        self.result = result
        self.settings: ArduinoSettings = result.settings

    def check_platform(self) -> CheckResult:
        """Report the running platform and the IDE layout in use."""
        try:
            info = detect_platform()
        except UnsupportedPlatformError as e:
            return CheckResult(name="Platform", passed=False, message=str(e))

        return CheckResult(
            name="Platform",
            passed=True,
            message=f"{info} ({self.settings.platform.os} layout)",
        )

    def check_installation(self) -> CheckResult:
        """
        Check that an installation path was found and holds the IDE executable.
        """
        installation = self.settings.installation

        if installation.path is None:
            return CheckResult(
                name="Installation",
                passed=False,
                message="Arduino installation not found",
                fix_command="Set arduino.path in the settings file or pass --arduino-path",
            )

        if not installation.ok:
            return CheckResult(
                name="Installation",
                passed=False,
                message=f"No {self.settings.platform.validation_marker} under {installation.path}",
                fix_command="Point arduino.path at the Arduino IDE installation directory",
            )

        return CheckResult(
            name="Installation",
            passed=True,
            message=f"{installation.path} (from {installation.source})",
        )

    def check_package_dir(self) -> CheckResult:
        package_path = self.settings.package_path

        if os.path.isdir(package_path):
            return CheckResult(
                name="Package Directory", passed=True, message=package_path
            )
        return CheckResult(
            name="Package Directory",
            passed=False,
            message=f"Package directory not found: {package_path}",
            fix_command="Start the Arduino IDE once to create it",
        )

    def check_preferences(self) -> CheckResult:
        preference_path = self.settings.preference_path

        if not os.path.isfile(preference_path):
            return CheckResult(
                name="Preferences",
                passed=False,
                message=f"Preferences file not found: {preference_path}",
            )
        return CheckResult(
            name="Preferences",
            passed=True,
            message=f"{len(self.settings.preferences)} preferences in {preference_path}",
        )

    def check_builtin_tools(self) -> CheckResult:
        default_package_path = self.settings.default_package_path
        if default_package_path is None:
            return CheckResult(
                name="Built-in Tools",
                passed=False,
                message="Skipped, no installation path",
            )

        manifest = os.path.join(default_package_path, "tools", "avr", BUILTIN_TOOLS_MANIFEST)
        if not os.path.isfile(manifest):
            return CheckResult(
                name="Built-in Tools",
                passed=False,
                message=f"Manifest not found: {manifest}",
            )
        return CheckResult(name="Built-in Tools", passed=True, message=manifest)

    def check_sketchbook(self) -> CheckResult:
        sketchbook_path = self.settings.sketchbook_path

        if os.path.isdir(sketchbook_path):
            return CheckResult(name="Sketchbook", passed=True, message=sketchbook_path)
        return CheckResult(
            name="Sketchbook",
            passed=False,
            message=f"Sketchbook directory not found: {sketchbook_path}",
        )

    def run_all_checks(self) -> List[CheckResult]:
        """Run all health checks."""
        return [
            self.check_platform(),
            self.check_installation(),
            self.check_package_dir(),
            self.check_preferences(),
            self.check_builtin_tools(),
            self.check_sketchbook(),
        ]


def run(args) -> int:
    """
    Run doctor command.

    Args:
        args: Parsed arguments from argparse

    Returns:
        Exit code (0 if all required checks pass, 1 otherwise)
    """
    quiet = getattr(args, "quiet", False)

    if not quiet:
        safe_print("Running ArduinoKit diagnostics...\n")

    # Failures are listed by the checks below
    result = initialize_settings(args, reporter=_SilentReporter())
    checks = EnvironmentChecker(result).run_all_checks()

    passed = 0
    failed = 0
    warnings = 0

    for check in checks:
        if check.passed:
            passed += 1
            if not quiet:
                safe_print(f"✓ {check.name}: {check.message}")
        elif check.name in OPTIONAL_CHECKS:
            warnings += 1
            if not quiet:
                safe_print(f"! {check.name}: {check.message}")
            logger.warning(f"{check.name}: {check.message}")
        else:
            failed += 1
            safe_print(f"✗ {check.name}: {check.message}")
            logger.error(f"{check.name}: {check.message}")

        if not check.passed and check.fix_command:
            safe_print(f"  Fix: {check.fix_command}")

    if not quiet:
        safe_print(f"\nSummary: {passed} passed, {failed} failed, {warnings} warnings")

    return 0 if failed == 0 else 1
