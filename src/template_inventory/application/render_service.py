#!/usr/bin/env python3
"""
Service for rendering inventory catalogs.

Produces the JSON and text manifest bodies. Rendering is pure: it returns
strings and never touches the filesystem.
"""

import json
import re
from enum import Enum

from template_inventory.domain.catalog import Catalog
from template_inventory.domain.object_record import ObjectRecord

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "render_service",
        "description": "Service for rendering inventory manifests",
        "version": __version__,
        "author": __author__,
        "last_updated": "2025-12-07",
    }


class OutputFormat(Enum):
    """Supported manifest formats."""

    JSON = "json"
    TEXT = "text"

    @property
    def extension(self) -> str:
        """File extension used for this format."""
        return "json" if self is OutputFormat.JSON else "txt"


TEXT_HEADERS = ("Key", "VersionId", "Size", "LastModified", "ETag")
COLUMN_SEPARATOR = "  "
NO_VERSION = "-"

# Characters that would split or shift a text row
CONTROL_CHARACTERS = re.compile(r"[\x00-\x1f\x7f\x85\u2028\u2029]")


def format_summary(catalog: Catalog) -> str:
    """Format the summary line for a catalog.

    Args:
        catalog: Catalog to summarize

    Returns:
        Summary line, e.g. "Total objects: 3, Total size: 1024 bytes"
    """
    return f"Total objects: {catalog.count}, Total size: {catalog.total_size} bytes"


def render_json(catalog: Catalog) -> str:
    """Render a catalog as a JSON array.

    Args:
        catalog: Catalog to render

    Returns:
        JSON text ending in a newline
    """
    return json.dumps([record.to_dict() for record in catalog], indent=2, ensure_ascii=False) + "\n"


def escape_cell(value: str) -> str:
    """Escape control characters so a value fits on one table line.

    A newline in a key becomes the two characters "\\n". JSON output is
    not affected.

    Args:
        value: Cell text

    Returns:
        Text without line breaks, tabs or other control characters
    """
    return CONTROL_CHARACTERS.sub(
        lambda match: match.group().encode("unicode_escape").decode("ascii"), value
    )


def _text_row(record: ObjectRecord) -> tuple[str, ...]:
    return (
        escape_cell(record.key),
        escape_cell(record.version_id or NO_VERSION),
        str(record.size),
        record.last_modified_iso(),
        escape_cell(record.etag),
    )


def render_text(catalog: Catalog) -> str:
    """Render a catalog as a fixed-width table with a summary line.

    Args:
        catalog: Catalog to render

    Returns:
        Table text ending in a newline
    """
    rows = [TEXT_HEADERS] + [_text_row(record) for record in catalog]
    widths = [max(len(row[i]) for row in rows) for i in range(len(TEXT_HEADERS))]
    size_column = TEXT_HEADERS.index("Size")

    lines = []
    for row in rows:
        cells = []
        for i, cell in enumerate(row):
            if i == size_column:
                cells.append(cell.rjust(widths[i]))
            else:
                cells.append(cell.ljust(widths[i]))
        lines.append(COLUMN_SEPARATOR.join(cells).rstrip())

    lines.append(format_summary(catalog))
    return "\n".join(lines) + "\n"


def render(catalog: Catalog, output_format: OutputFormat | str) -> str:
    """Render a catalog in the requested format.

    Args:
        catalog: Catalog to render
        output_format: OutputFormat or its string value ("json", "text")

    Returns:
        Rendered manifest body

    Raises:
        ValueError: If the format is not supported
    """
    fmt = OutputFormat(output_format)
    if fmt is OutputFormat.JSON:
        return render_json(catalog)
    return render_text(catalog)


def render_all(catalog: Catalog) -> dict[OutputFormat, str]:
    """Render a catalog in every supported format.

    Args:
        catalog: Catalog to render

    Returns:
        Mapping of format to rendered body
    """
    return {fmt: render(catalog, fmt) for fmt in OutputFormat}


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
