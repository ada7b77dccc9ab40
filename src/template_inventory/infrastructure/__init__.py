#!/usr/bin/env python3
"""
Infrastructure layer for template-inventory.

Handles AWS SDK calls, filesystem access, configuration, logging and manifest output.
"""

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "infrastructure.__init__",
        "description": "Infrastructure layer initialization",
        "version": __version__,
        "author": __author__,
        "last_updated": "2025-12-07",
    }
