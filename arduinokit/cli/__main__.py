"""
Entry point for running ArduinoKit CLI as a module.

Usage: python -m arduinokit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
