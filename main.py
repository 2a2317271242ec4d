"""CLI entrypoint for the fuel simulation engine."""

from __future__ import annotations

import sys

from drive_engine.console import main

if __name__ == "__main__":
    sys.exit(main())
