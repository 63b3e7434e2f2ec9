#!/usr/bin/env python3
"""
Convenience entry point for running timefilters directly.

Usage: python timefilters_cli.py [command] [options]
"""

from timefilters.cli.app import app

if __name__ == "__main__":
    app()
