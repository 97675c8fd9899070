"""
Tools command implementation.

Lists the runtime tools registered from the IDE bundle and installed packages.
"""

import json
import logging

from arduinokit.cli.utils import initialize_settings, safe_print
from arduinokit.settings.tool_registry import tool_key

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the tools command.

    Args:
        args: Parsed command-line arguments (name, json)

    Returns:
        Exit code (0 for success, 1 on failure)
    """
    result = initialize_settings(args)
    properties = result.settings.tool_properties

    name = getattr(args, "name", None)
    names = [name] if name else properties.tool_names()

    if name and name not in properties.tool_names():
        logger.error(f"Tool not found: {name}")
        return 1

    if getattr(args, "json", False):
        entries = {}
        for tool in names:
            entries[tool_key(tool)] = properties.tool_path(tool)
            for version in properties.versions(tool):
                entries[tool_key(tool, version)] = properties.tool_path(tool, version)
        print(json.dumps(entries, indent=2))
    else:
        for tool in names:
            safe_print(f"{tool}: {properties.tool_path(tool)}")
            for version in properties.versions(tool):
                safe_print(f"  {version}: {properties.tool_path(tool, version)}")

    if not names:
        logger.info("No runtime tools found")

    return 0 if result.ok else 1
