"""Shared pytest fixtures for template-inventory tests."""

from datetime import datetime, timezone
from typing import Any

import pytest

from template_inventory.application.inventory_service import ListingPage
from template_inventory.domain.catalog import Catalog
from template_inventory.domain.object_record import ObjectRecord


class FakeListingBackend:
    """In-memory listing backend serving pre-built pages.

    Page N is returned for token "page-N" (page 0 for no token). An
    exception placed in the page list is raised when that page is requested.
    """

    def __init__(self, pages: list[Any]) -> None:
        self.pages = pages
        self.calls: list[tuple[str, str, str | None]] = []

    def fetch_page(self, bucket: str, prefix: str, continuation_token: str | None) -> ListingPage:
        self.calls.append((bucket, prefix, continuation_token))
        index = 0 if continuation_token is None else int(continuation_token.split("-")[1])
        page = self.pages[index]
        if isinstance(page, Exception):
            raise page
        next_token = f"page-{index + 1}" if index + 1 < len(self.pages) else None
        return ListingPage(entries=tuple(page), next_token=next_token)


def make_entry(
    key: str,
    size: int = 100,
    version_id: str | None = None,
    etag: str = '"d41d8cd98f00b204e9800998ecf8427e"',
    last_modified: datetime | None = None,
) -> dict[str, Any]:
    """Build an S3-shaped listing entry."""
    entry: dict[str, Any] = {
        "Key": key,
        "Size": size,
        "LastModified": last_modified or datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc),
        "ETag": etag,
    }
    if version_id is not None:
        entry["VersionId"] = version_id
    return entry


@pytest.fixture
def entry_factory():
    """Factory for S3-shaped listing entries.

    Returns:
        Callable building a listing entry dictionary
    """
    return make_entry


@pytest.fixture
def fake_backend_factory():
    """Factory for in-memory listing backends.

    Returns:
        Callable building a FakeListingBackend from a list of pages
    """
    return FakeListingBackend


@pytest.fixture
def sample_record() -> ObjectRecord:
    """Create a sample object record for testing.

    Returns:
        ObjectRecord instance
    """
    return ObjectRecord(
        key="atlantis/templates/v2/storage/template-storage-s3-devops.yml",
        size=2048,
        last_modified=datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc),
        etag="9b2cf535f27731c974343645a3985328",
        version_id="3sL4kqtJlcpXroDTDmJ-rmSpXd3dIbrHY",
    )


@pytest.fixture
def sample_catalog() -> Catalog:
    """Create a small catalog for testing.

    Returns:
        Catalog with three records
    """
    when = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    return Catalog.from_records(
        [
            ObjectRecord("templates/v2/pipeline/template-pipeline-two-stage.yml", 5120, when, "aaa", "v1"),
            ObjectRecord("templates/v2/network/template-network.yml", 1024, when, "bbb", "v1"),
            ObjectRecord("templates/v2/network/template-network.yml", 1000, when, "ccc", "v0"),
        ],
        bucket="host-bucket",
        prefix="templates/v2",
    )


@pytest.fixture
def empty_catalog() -> Catalog:
    """Create an empty catalog for testing.

    Returns:
        Catalog with no records
    """
    return Catalog.empty(bucket="host-bucket", prefix="templates/v2")
