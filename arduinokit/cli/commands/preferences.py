"""
Preferences command implementation.

Shows the Arduino IDE preferences, or a single preference value.
"""

import logging

from arduinokit.cli.utils import initialize_settings, safe_print

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the preferences command.

    Args:
        args: Parsed command-line arguments (key)

    Returns:
        Exit code (0 for success, 1 if the key is not set)
    """
    result = initialize_settings(args)
    preferences = result.settings.preferences

    key = getattr(args, "key", None)
    if key:
        value = preferences.get(key)
        if value is None:
            logger.error(f"Preference not set: {key}")
            return 1
        safe_print(value)
        return 0

    if not preferences:
        logger.info(f"No preferences found at {result.settings.preference_path}")

    for name in sorted(preferences):
        safe_print(f"{name}={preferences[name]}")

    return 0
