#!/usr/bin/env python3
"""Allow running the CLI with ``python -m template_inventory``."""

from template_inventory.cli import main

if __name__ == "__main__":
    main()
