"""
Paths command implementation.

Prints the paths derived from the Arduino installation.
"""

import json
import logging

from arduinokit.cli.utils import initialize_settings, safe_print

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the paths command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 if the installation could not be resolved)
    """
    result = initialize_settings(args)
    paths = result.settings.describe()

    if getattr(args, "json", False):
        print(json.dumps(paths, indent=2))
    else:
        width = max(len(name) for name in paths)
        for name, value in paths.items():
            safe_print(f"{name:<{width}}  {value if value is not None else '-'}")

    return 0 if result.ok else 1
