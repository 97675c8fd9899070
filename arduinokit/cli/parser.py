"""
ArduinoKit CLI argument parser.

This module implements the command-line interface for ArduinoKit using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from arduinokit.core.exceptions import ArduinoKitError

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("arduinokit")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """ArduinoKit command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="arduinokit",
            description="ArduinoKit - Arduino IDE installation and tool discovery",
            epilog='Use "arduinokit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"ArduinoKit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--arduino-path",
            metavar="PATH",
            help="Arduino IDE installation directory (overrides arduino.path)",
        )
        parser.add_argument(
            "--settings",
            type=Path,
            metavar="PATH",
            help="Path to settings file (default: ~/.arduinokit/settings.yaml)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_paths_command(subparsers)
        self._add_tools_command(subparsers)
        self._add_preferences_command(subparsers)
        self._add_doctor_command(subparsers)

        return parser

    def _add_paths_command(self, subparsers):
        """Add 'paths' subcommand."""
        parser = subparsers.add_parser(
            "paths",
            help="Show resolved Arduino paths",
            description="Show the installation, data and sketchbook paths",
        )
        parser.add_argument("--json", action="store_true", help="Output as JSON")

    def _add_tools_command(self, subparsers):
        """Add 'tools' subcommand."""
        parser = subparsers.add_parser(
            "tools",
            help="List runtime tools",
            description="List built-in and installed runtime tools with their versions",
        )
        parser.add_argument("--name", metavar="NAME", help="Only show this tool")
        parser.add_argument("--json", action="store_true", help="Output as JSON")

    def _add_preferences_command(self, subparsers):
        """Add 'preferences' subcommand."""
        parser = subparsers.add_parser(
            "preferences",
            help="Show Arduino IDE preferences",
            description="Show all preferences or the value of one key",
        )
        parser.add_argument("key", nargs="?", help="Preference key (e.g., sketchbook.path)")

    def _add_doctor_command(self, subparsers):
        """Add 'doctor' subcommand."""
        subparsers.add_parser(
            "doctor",
            help="Diagnose Arduino environment issues",
            description="Check the Arduino installation and user data directories",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130
        except ArduinoKitError as e:
            logger.error(f"Error: {e}")
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.WARNING
            format_str = "%(levelname)s: %(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "paths": "arduinokit.cli.commands.paths",
            "tools": "arduinokit.cli.commands.tools",
            "preferences": "arduinokit.cli.commands.preferences",
            "doctor": "arduinokit.cli.commands.doctor",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
