"""
ArduinoKit - Arduino IDE installation discovery and path resolution.

Locates an installed Arduino IDE, derives the paths needed to invoke it and
builds the registry of installed build tools.
"""

__version__ = "0.1.0"

from .settings import ArduinoSettings, InitializationResult

__all__ = ["ArduinoSettings", "InitializationResult", "__version__"]
