"""
Entry point for running ArduinoKit CLI as a module.

Usage: python -m arduinokit [command] [options]
"""

from arduinokit.cli.parser import main

if __name__ == "__main__":
    main()
