#!/usr/bin/env python3
"""
Configuration management for template-inventory.

Handles loading and validation of configuration from the environment.
"""

import os
from dataclasses import dataclass
from typing import Optional

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "config",
        "description": "Configuration management",
        "version": __version__,
        "author": __author__,
        "last_updated": "2025-12-07",
    }


# S3 returns at most 1000 keys per list call
MAX_PAGE_SIZE = 1000

TRUE_VALUES = {"true", "1", "yes"}
FALSE_VALUES = {"false", "0", "no", ""}


def _parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be true or false, got {value!r}")


@dataclass
class InventoryConfig:
    """Inventory run settings.

    Attributes:
        region: AWS region for the S3 client (optional, boto3 default chain if unset)
        profile: AWS named profile (optional)
        output_dir: Directory manifests are written to
        page_size: Maximum number of entries requested per listing call
        include_versions: List every object version instead of current objects only
        dry_run: Whether to skip writing manifests
    """

    region: Optional[str] = None
    profile: Optional[str] = None
    output_dir: str = "outputs"
    page_size: int = MAX_PAGE_SIZE
    include_versions: bool = False
    dry_run: bool = False

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}, got {self.page_size}")
        if not self.output_dir:
            raise ValueError("output_dir cannot be empty")

    @classmethod
    def from_env(cls) -> "InventoryConfig":
        """Load configuration from environment variables.

        Returns:
            InventoryConfig instance

        Raises:
            ValueError: If an environment variable has an invalid value
        """
        page_size_raw = os.getenv("INVENTORY_PAGE_SIZE", str(MAX_PAGE_SIZE))
        try:
            page_size = int(page_size_raw)
        except ValueError as e:
            raise ValueError(f"INVENTORY_PAGE_SIZE must be an integer, got {page_size_raw!r}") from e

        return cls(
            region=os.getenv("INVENTORY_REGION") or os.getenv("AWS_REGION"),
            profile=os.getenv("AWS_PROFILE") or None,
            output_dir=os.getenv("INVENTORY_OUTPUT_DIR", "outputs"),
            page_size=page_size,
            include_versions=_parse_bool(
                "INVENTORY_INCLUDE_VERSIONS", os.getenv("INVENTORY_INCLUDE_VERSIONS", "false")
            ),
            dry_run=_parse_bool("DRY_RUN", os.getenv("DRY_RUN", "false")),
        )


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
