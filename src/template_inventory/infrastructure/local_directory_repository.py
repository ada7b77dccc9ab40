#!/usr/bin/env python3
"""
Local directory listing repository.

Serves a directory tree through the ObjectListingBackend protocol so a
template checkout can be inventoried the same way as a bucket.
"""

import hashlib
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from template_inventory.application.inventory_service import ListingPage
from template_inventory.domain.errors import BackendUnavailable
from template_inventory.infrastructure.config import MAX_PAGE_SIZE

__version__ = "0.1.0"
__author__ = "John Ayers"

logger = logging.getLogger(__name__)

HASH_CHUNK_SIZE = 1024 * 1024


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "local_directory_repository",
        "description": "Local directory listing repository",
        "version": __version__,
        "author": __author__,
        "last_updated": "2025-12-07",
    }


def md5_hexdigest(path: Path) -> str:
    """Compute the MD5 digest of a file.

    Matches the S3 ETag of a single-part upload.

    Args:
        path: File to hash

    Returns:
        Hex digest string
    """
    digest = hashlib.md5()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(HASH_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def _raise_walk_error(error: OSError) -> None:
    # os.walk skips unreadable directories unless the error is re-raised
    raise error


class LocalDirectoryRepository:
    """Repository listing files below a local directory.

    The bucket argument of fetch_page is the root directory. Keys are
    POSIX paths relative to it.
    """

    def __init__(self, page_size: int = MAX_PAGE_SIZE) -> None:
        """Initialize local directory repository.

        Args:
            page_size: Maximum entries returned per page
        """
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.page_size = page_size

    def _list_keys(self, root: Path, prefix: str) -> list[str]:
        """List every file key under root matching the prefix.

        Args:
            root: Root directory
            prefix: Key prefix

        Returns:
            Sorted list of keys
        """
        if not root.is_dir():
            raise BackendUnavailable(
                f"Directory not found: {root}", bucket=str(root), operation="list_keys"
            )

        keys = []
        for dirpath, _, filenames in os.walk(root, onerror=_raise_walk_error):
            for filename in filenames:
                keys.append((Path(dirpath) / filename).relative_to(root).as_posix())
        return sorted(key for key in keys if key.startswith(prefix))

    def _describe(self, root: Path, key: str) -> dict[str, Any]:
        """Build an S3-shaped listing entry for one file.

        Args:
            root: Root directory
            key: Relative key of the file

        Returns:
            Listing entry with Key, Size, LastModified and ETag
        """
        path = root / key
        stat = path.stat()
        return {
            "Key": key,
            "Size": stat.st_size,
            "LastModified": datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            "ETag": md5_hexdigest(path),
        }

    def fetch_page(
        self, bucket: str, prefix: str, continuation_token: str | None
    ) -> ListingPage:
        """Fetch one page of files under a prefix.

        Args:
            bucket: Root directory path
            prefix: Key prefix, empty for every file
            continuation_token: Last key of the previous page, None for the first page

        Returns:
            ListingPage with S3-shaped entries

        Raises:
            BackendUnavailable: If the directory or a file cannot be read
        """
        root = Path(bucket)
        try:
            keys = self._list_keys(root, prefix)
            if continuation_token is not None:
                keys = [key for key in keys if key > continuation_token]

            batch = keys[: self.page_size]
            entries = tuple(self._describe(root, key) for key in batch)
        except OSError as e:
            raise BackendUnavailable(
                f"Failed to list {root}/{prefix}: {e}",
                bucket=bucket,
                operation="fetch_page",
                cause_code=type(e).__name__,
            ) from e

        next_token = batch[-1] if len(keys) > self.page_size else None
        logger.debug(f"Listed {len(entries)} files from {root} (more={next_token is not None})")
        return ListingPage(entries=entries, next_token=next_token)


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
