#!/usr/bin/env python3
"""
template-inventory: CLI tool to build inventory manifests of hosted templates.

This package lists every object stored under an S3 prefix (or a local directory),
normalizes the listing into a sorted catalog and renders it as deterministic
JSON and text manifests.
"""

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "__init__",
        "description": "Package initialization for template-inventory",
        "version": __version__,
        "author": __author__,
        "last_updated": "2025-12-07",
    }
