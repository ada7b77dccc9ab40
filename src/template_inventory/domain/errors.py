#!/usr/bin/env python3
"""
Error taxonomy for template-inventory.

Every failure aborts the whole inventory run; there is no partial-success mode.
"""

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "errors",
        "description": "Inventory error taxonomy",
        "version": __version__,
        "author": __author__,
        "last_updated": "2025-12-07",
    }


class InventoryError(Exception):
    """Base class for all inventory failures."""


class BackendUnavailable(InventoryError):
    """Listing the storage backend failed (connectivity, auth or service error).

    Attributes:
        bucket: Bucket or directory being listed
        operation: Backend operation that failed
        cause_code: Backend error code, if one was reported
    """

    def __init__(
        self,
        message: str,
        bucket: str = "",
        operation: str = "",
        cause_code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.bucket = bucket
        self.operation = operation
        self.cause_code = cause_code


class MalformedRecord(InventoryError):
    """A listing entry could not be turned into an ObjectRecord.

    Attributes:
        reason: What was wrong with the entry
        entry_key: Key of the offending entry, if it had one
    """

    def __init__(self, reason: str, entry_key: str | None = None) -> None:
        where = f" (key={entry_key!r})" if entry_key is not None else ""
        super().__init__(f"Malformed listing entry{where}: {reason}")
        self.reason = reason
        self.entry_key = entry_key


class WriteFailure(InventoryError):
    """A manifest file could not be written.

    Attributes:
        path: Path of the manifest that failed
    """

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
