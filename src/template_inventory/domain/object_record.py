#!/usr/bin/env python3
"""
Domain model for stored template objects.

Represents one object (or one object version) found in a listing and
normalizes raw listing entries into that shape.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from template_inventory.domain.errors import MalformedRecord

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "object_record",
        "description": "Domain model for stored objects",
        "version": __version__,
        "author": __author__,
        "last_updated": "2025-12-07",
    }


def _to_utc(value: Any, key: str) -> datetime:
    if isinstance(value, str):
        text = value.strip()
        # fromisoformat only accepts a trailing Z from 3.11 on
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(text)
        except ValueError as e:
            raise MalformedRecord(f"unparseable LastModified {value!r}", key) from e

    if not isinstance(value, datetime):
        raise MalformedRecord(f"LastModified must be a datetime, got {type(value).__name__}", key)

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _format_timestamp(value: datetime) -> str:
    if value.microsecond:
        return value.strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass(frozen=True)
class ObjectRecord:
    """Immutable domain model representing one stored object.

    Attributes:
        key: Full object key
        size: Size in bytes
        last_modified: Last modification time (UTC)
        etag: Backend content fingerprint, compared as an opaque token
        version_id: Version identifier (None when the listing is not versioned)
    """

    key: str
    size: int
    last_modified: datetime
    etag: str
    version_id: str | None = None

    @classmethod
    def from_listing_entry(cls, entry: Mapping[str, Any]) -> "ObjectRecord":
        """Build a record from a raw listing entry.

        Entries use the S3 field names: Key, Size, LastModified, ETag and the
        optional VersionId.

        Args:
            entry: Raw listing entry

        Returns:
            Normalized ObjectRecord

        Raises:
            MalformedRecord: If a required field is missing or invalid
        """
        if not isinstance(entry, Mapping):
            raise MalformedRecord(f"entry must be a mapping, got {type(entry).__name__}")

        key = entry.get("Key")
        if not isinstance(key, str) or not key:
            raise MalformedRecord("missing Key")

        for required in ("Size", "LastModified", "ETag"):
            if entry.get(required) is None:
                raise MalformedRecord(f"missing {required}", key)

        size = entry["Size"]
        if isinstance(size, bool) or not isinstance(size, int) or size < 0:
            raise MalformedRecord(f"Size must be a non-negative integer, got {size!r}", key)

        etag = entry["ETag"]
        if not isinstance(etag, str):
            raise MalformedRecord(f"ETag must be a string, got {type(etag).__name__}", key)

        version_id = entry.get("VersionId")
        if version_id is not None and not isinstance(version_id, str):
            raise MalformedRecord(
                f"VersionId must be a string, got {type(version_id).__name__}", key
            )

        return cls(
            key=key,
            size=size,
            last_modified=_to_utc(entry["LastModified"], key),
            etag=etag.strip('"'),
            version_id=version_id or None,
        )

    def sort_key(self) -> tuple[str, str]:
        """Get the catalog ordering key.

        Returns:
            Tuple of (key, version_id) with a missing version sorting first
        """
        return (self.key, self.version_id or "")

    def to_dict(self) -> dict[str, Any]:
        """Convert to the manifest representation.

        Field order is part of the manifest format.

        Returns:
            Dictionary with key, size, lastModified, versionId and etag
        """
        return {
            "key": self.key,
            "size": self.size,
            "lastModified": self.last_modified_iso(),
            "versionId": self.version_id,
            "etag": self.etag,
        }

    def last_modified_iso(self) -> str:
        """Get the last modification time as an ISO-8601 UTC string.

        Returns:
            Timestamp such as 2025-01-01T12:00:00Z
        """
        return _format_timestamp(self.last_modified)


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
