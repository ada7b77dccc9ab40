#!/usr/bin/env python3
"""
Domain model for an inventory catalog.

A catalog is the sorted, immutable result of one inventory run.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from template_inventory.domain.errors import MalformedRecord
from template_inventory.domain.object_record import ObjectRecord

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "catalog",
        "description": "Domain model for inventory catalogs",
        "version": __version__,
        "author": __author__,
        "last_updated": "2025-12-07",
    }


@dataclass(frozen=True)
class Catalog:
    """Immutable, ordered collection of object records.

    Records are sorted by key, then version id. Totals are always derived
    from the records and never stored.

    Attributes:
        records: Records in catalog order
        bucket: Bucket or directory the records were listed from
        prefix: Key prefix that was listed
    """

    records: tuple[ObjectRecord, ...] = ()
    bucket: str = ""
    prefix: str = ""

    @classmethod
    def from_records(
        cls, records: Iterable[ObjectRecord], bucket: str = "", prefix: str = ""
    ) -> "Catalog":
        """Build a sorted catalog.

        Args:
            records: Records in any order
            bucket: Bucket or directory the records came from
            prefix: Key prefix that was listed

        Returns:
            Catalog with records in deterministic order

        Raises:
            MalformedRecord: If the same key and version appear twice
        """
        ordered = sorted(records, key=ObjectRecord.sort_key)

        for previous, current in zip(ordered, ordered[1:]):
            if previous.sort_key() == current.sort_key():
                raise MalformedRecord(
                    f"duplicate entry for version {current.version_id!r}", current.key
                )

        return cls(records=tuple(ordered), bucket=bucket, prefix=prefix)

    @classmethod
    def empty(cls, bucket: str = "", prefix: str = "") -> "Catalog":
        """Create a catalog with no records.

        Returns:
            Empty catalog
        """
        return cls(records=(), bucket=bucket, prefix=prefix)

    @property
    def count(self) -> int:
        """Number of records in the catalog."""
        return len(self.records)

    @property
    def total_size(self) -> int:
        """Sum of all record sizes in bytes."""
        return sum(record.size for record in self.records)

    def is_empty(self) -> bool:
        """Check if the catalog holds no records.

        Returns:
            True if there are no records
        """
        return not self.records

    def keys(self) -> list[str]:
        """Get record keys in catalog order.

        Returns:
            List of keys (a key repeats once per listed version)
        """
        return [record.key for record in self.records]

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[ObjectRecord]:
        return iter(self.records)


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
