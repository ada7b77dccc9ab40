#!/usr/bin/env python3
"""
Service for building an inventory catalog.

Pages through a listing backend until it is exhausted and turns the
result into a sorted Catalog. Any failure aborts the run.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from template_inventory.domain.catalog import Catalog
from template_inventory.domain.errors import BackendUnavailable, InventoryError
from template_inventory.domain.object_record import ObjectRecord

__version__ = "0.1.0"
__author__ = "John Ayers"

logger = logging.getLogger(__name__)


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "inventory_service",
        "description": "Service for building inventory catalogs",
        "version": __version__,
        "author": __author__,
        "last_updated": "2025-12-07",
    }


@dataclass(frozen=True)
class ListingPage:
    """One page of listing results.

    Attributes:
        entries: Raw listing entries (S3 field names)
        next_token: Token for the next page, or None when the listing is complete
    """

    entries: tuple[Mapping[str, Any], ...] = ()
    next_token: str | None = None

    @property
    def is_last(self) -> bool:
        """True if no further pages follow."""
        return self.next_token is None


class ObjectListingBackend(Protocol):
    """Protocol defining interface for paginated object listing.

    Infrastructure layer must implement this protocol.
    """

    def fetch_page(
        self, bucket: str, prefix: str, continuation_token: str | None
    ) -> ListingPage:
        """Fetch one page of objects under a prefix.

        Args:
            bucket: Bucket (or container) to list
            prefix: Key prefix, empty for the whole bucket
            continuation_token: Token from the previous page, None for the first page

        Returns:
            ListingPage with entries and the next token

        Raises:
            BackendUnavailable: If the backend cannot be listed
        """
        ...


class InventoryService:
    """Application service for inventory operations."""

    def __init__(self, backend: ObjectListingBackend) -> None:
        """Initialize the inventory service.

        Args:
            backend: Listing backend to read objects from
        """
        self.backend = backend

    def build_inventory(self, bucket: str, prefix: str = "") -> Catalog:
        """List every object under a prefix and build a catalog.

        Args:
            bucket: Bucket (or container) to list
            prefix: Key prefix, empty for the whole bucket

        Returns:
            Fully populated, sorted Catalog

        Raises:
            BackendUnavailable: If any page cannot be fetched
            MalformedRecord: If any entry is invalid or repeated
        """
        records: list[ObjectRecord] = []
        token: str | None = None
        page_count = 0

        while True:
            page = self._fetch(bucket, prefix, token)
            page_count += 1

            for entry in page.entries:
                records.append(ObjectRecord.from_listing_entry(entry))

            logger.debug(
                f"Fetched page {page_count} of {bucket}/{prefix} "
                f"({len(page.entries)} entries)"
            )

            if page.is_last:
                break
            if page.next_token == token:
                raise BackendUnavailable(
                    f"Listing of {bucket}/{prefix} repeated continuation token {token!r}",
                    bucket=bucket,
                    operation="fetch_page",
                )
            token = page.next_token

        catalog = Catalog.from_records(records, bucket=bucket, prefix=prefix)
        logger.info(
            f"Built inventory of {catalog.count} objects ({catalog.total_size} bytes) "
            f"from {page_count} page(s)"
        )
        return catalog

    def _fetch(self, bucket: str, prefix: str, token: str | None) -> ListingPage:
        """Fetch a page, wrapping unexpected backend failures.

        Args:
            bucket: Bucket to list
            prefix: Key prefix
            token: Continuation token

        Returns:
            ListingPage from the backend
        """
        try:
            return self.backend.fetch_page(bucket, prefix, token)
        except InventoryError:
            raise
        except Exception as e:
            raise BackendUnavailable(
                f"Failed to list {bucket}/{prefix}: {e}",
                bucket=bucket,
                operation="fetch_page",
            ) from e


def build_inventory(backend: ObjectListingBackend, bucket: str, prefix: str = "") -> Catalog:
    """Build a catalog of every object under a prefix.

    Args:
        backend: Listing backend
        bucket: Bucket (or container) to list
        prefix: Key prefix, empty for the whole bucket

    Returns:
        Sorted Catalog
    """
    return InventoryService(backend).build_inventory(bucket, prefix)


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
