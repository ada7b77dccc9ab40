#!/usr/bin/env python3
"""
Manifest writer for template-inventory.

Writes rendered manifests to the output directory as
inventory_<namespace>.json and inventory_<namespace>.txt.
"""

import logging
import re
from pathlib import Path

from template_inventory.application.render_service import OutputFormat
from template_inventory.domain.errors import WriteFailure

__version__ = "0.1.0"
__author__ = "John Ayers"

logger = logging.getLogger(__name__)

UNSAFE_CHARACTERS = re.compile(r"[^A-Za-z0-9._-]")


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "manifest_writer",
        "description": "Manifest file writer",
        "version": __version__,
        "author": __author__,
        "last_updated": "2025-12-07",
    }


def manifest_namespace(bucket: str, prefix: str) -> str:
    """Derive the manifest namespace from a bucket and prefix.

    "atlantis/templates" becomes "atlantis_templates". An empty prefix
    falls back to the bucket name (the resolved directory name for a
    local path such as ".").

    Args:
        bucket: Bucket name or directory path
        prefix: Key prefix

    Returns:
        Filename-safe namespace
    """
    base = _sanitize(prefix.strip("/"))
    if not base:
        base = _sanitize(Path(bucket).resolve().name)
    return base or "root"


def _sanitize(name: str) -> str:
    # Leading and trailing dots would produce names like inventory_..json
    return UNSAFE_CHARACTERS.sub("_", name.replace("/", "_")).strip(".")


def manifest_filename(namespace: str, output_format: OutputFormat) -> str:
    """Get the filename of a manifest.

    Args:
        namespace: Manifest namespace
        output_format: Manifest format

    Returns:
        Filename such as inventory_atlantis_templates.json
    """
    return f"inventory_{namespace}.{output_format.extension}"


class ManifestWriter:
    """Writes rendered manifests to disk."""

    def __init__(self, output_dir: str | Path, dry_run: bool = False) -> None:
        """Initialize the manifest writer.

        Args:
            output_dir: Directory to write manifests to
            dry_run: If True, log what would be written without writing
        """
        self.output_dir = Path(output_dir)
        self.dry_run = dry_run

    def write(self, namespace: str, renderings: dict[OutputFormat, str]) -> list[Path]:
        """Write every rendering for a namespace.

        Args:
            namespace: Manifest namespace
            renderings: Mapping of format to rendered body

        Returns:
            Paths written (or that would be written in dry-run mode)

        Raises:
            WriteFailure: If a file cannot be written
        """
        targets = [
            (self.output_dir / manifest_filename(namespace, output_format), renderings[output_format])
            for output_format in OutputFormat
            if output_format in renderings
        ]

        if self.dry_run:
            for path, _ in targets:
                logger.info(f"[DRY RUN] Would write {path}")
            return [path for path, _ in targets]

        # All temp files are written before any rename
        staged: list[tuple[Path, Path]] = []
        backups: list[tuple[Path, Path]] = []
        installed: list[Path] = []
        current = self.output_dir
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            for path, content in targets:
                current = path
                temp_file = path.with_name(path.name + ".tmp")
                staged.append((temp_file, path))
                # newline="" keeps LF endings on every platform
                with open(temp_file, "w", encoding="utf-8", newline="") as f:
                    f.write(content)

            # Previous manifests are kept aside until every new file is in place
            for temp_file, path in staged:
                current = path
                if path.exists():
                    backup = path.with_name(path.name + ".bak")
                    path.replace(backup)
                    backups.append((backup, path))
                temp_file.replace(path)
                installed.append(path)
        except OSError as e:
            self._roll_back(staged, backups, installed)
            raise WriteFailure(f"Failed to write {current}: {e}", path=str(current)) from e

        for backup, _ in backups:
            _discard(backup)
        for path in installed:
            logger.info(f"Wrote {path}")
        return installed

    def _roll_back(
        self,
        staged: list[tuple[Path, Path]],
        backups: list[tuple[Path, Path]],
        installed: list[Path],
    ) -> None:
        """Restore the manifests that existed before a failed write.

        Args:
            staged: (temp file, destination) pairs
            backups: (backup file, destination) pairs
            installed: Destinations already replaced by new content
        """
        restored = set()
        for backup, path in backups:
            try:
                backup.replace(path)
                restored.add(path)
            except OSError as e:
                logger.warning(f"Could not restore {path} from {backup}: {e}")
        for path in installed:
            if path not in restored:
                _discard(path)
        for temp_file, _ in staged:
            _discard(temp_file)


def _discard(path: Path) -> None:
    """Remove a leftover file, logging instead of raising on failure.

    Args:
        path: File to remove
    """
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Could not remove {path}: {e}")


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
