"""Unit tests for ManifestWriter."""

from pathlib import Path
from unittest.mock import patch

import pytest

from template_inventory.application.render_service import OutputFormat, render_all
from template_inventory.domain.catalog import Catalog
from template_inventory.domain.errors import WriteFailure
from template_inventory.infrastructure.manifest_writer import (
    ManifestWriter,
    manifest_filename,
    manifest_namespace,
)


@pytest.mark.parametrize(
    ("bucket", "prefix", "expected"),
    [
        ("host-bucket", "atlantis/templates", "atlantis_templates"),
        ("host-bucket", "atlantis/utilities/", "atlantis_utilities"),
        ("host-bucket", "/atlantis/", "atlantis"),
        ("host-bucket", "", "host-bucket"),
        ("/srv/checkout/templates", "", "templates"),
        ("host-bucket", "v2/my templates", "v2_my_templates"),
    ],
)
def test_manifest_namespace(bucket: str, prefix: str, expected: str) -> None:
    """Test namespace derivation from bucket and prefix."""
    assert manifest_namespace(bucket, prefix) == expected


def test_manifest_filename() -> None:
    """Test manifest filenames per format."""
    assert manifest_filename("atlantis_templates", OutputFormat.JSON) == "inventory_atlantis_templates.json"
    assert manifest_filename("atlantis_templates", OutputFormat.TEXT) == "inventory_atlantis_templates.txt"


def test_write_creates_both_manifests(tmp_path: Path, sample_catalog: Catalog) -> None:
    """Test that both manifests are written with the rendered content."""
    output_dir = tmp_path / "outputs"
    writer = ManifestWriter(output_dir)
    renderings = render_all(sample_catalog)

    paths = writer.write("atlantis_templates", renderings)

    assert paths == [
        output_dir / "inventory_atlantis_templates.json",
        output_dir / "inventory_atlantis_templates.txt",
    ]
    assert paths[0].read_bytes() == renderings[OutputFormat.JSON].encode("utf-8")
    assert paths[1].read_bytes() == renderings[OutputFormat.TEXT].encode("utf-8")
    assert not list(output_dir.glob("*.tmp"))


def test_write_empty_catalog(tmp_path: Path, empty_catalog: Catalog) -> None:
    """Test that an empty catalog still produces both manifests."""
    writer = ManifestWriter(tmp_path)

    writer.write("empty", render_all(empty_catalog))

    assert (tmp_path / "inventory_empty.json").read_text(encoding="utf-8") == "[]\n"
    assert "Total objects: 0, Total size: 0 bytes" in (tmp_path / "inventory_empty.txt").read_text(
        encoding="utf-8"
    )


def test_dry_run_writes_nothing(tmp_path: Path, sample_catalog: Catalog) -> None:
    """Test that dry-run mode reports paths without writing."""
    output_dir = tmp_path / "outputs"
    writer = ManifestWriter(output_dir, dry_run=True)

    paths = writer.write("atlantis_templates", render_all(sample_catalog))

    assert len(paths) == 2
    assert not output_dir.exists()


def test_failed_write_keeps_previous_manifests(tmp_path: Path, sample_catalog: Catalog) -> None:
    """Test that a failure leaves existing manifests untouched."""
    json_path = tmp_path / "inventory_ns.json"
    text_path = tmp_path / "inventory_ns.txt"
    json_path.write_text("previous json", encoding="utf-8")
    text_path.write_text("previous text", encoding="utf-8")
    writer = ManifestWriter(tmp_path)

    real_open = open

    def failing_open(file, *args, **kwargs):
        if str(file).endswith(".txt.tmp"):
            raise OSError("disk full")
        return real_open(file, *args, **kwargs)

    with patch("builtins.open", side_effect=failing_open):
        with pytest.raises(WriteFailure) as exc_info:
            writer.write("ns", render_all(sample_catalog))

    assert exc_info.value.path == str(text_path)
    assert json_path.read_text(encoding="utf-8") == "previous json"
    assert text_path.read_text(encoding="utf-8") == "previous text"
    assert not list(tmp_path.glob("*.tmp"))


def test_output_dir_is_a_file(tmp_path: Path, sample_catalog: Catalog) -> None:
    """Test that an unusable output directory raises WriteFailure."""
    blocker = tmp_path / "outputs"
    blocker.write_text("not a directory", encoding="utf-8")
    writer = ManifestWriter(blocker)

    with pytest.raises(WriteFailure):
        writer.write("ns", render_all(sample_catalog))


def test_manifest_namespace_of_current_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that "." resolves to the directory name."""
    checkout = tmp_path / "checkout"
    checkout.mkdir()
    monkeypatch.chdir(checkout)

    assert manifest_namespace(".", "") == "checkout"
    assert manifest_namespace("./", "") == "checkout"


@pytest.mark.parametrize(
    ("bucket", "prefix", "expected"),
    [
        ("my.bucket", "", "my.bucket"),
        ("...", "", "root"),
        ("host-bucket", "..", "host-bucket"),
        ("host-bucket", ".hidden/", "hidden"),
    ],
)
def test_manifest_namespace_strips_dots(bucket: str, prefix: str, expected: str) -> None:
    """Test that namespaces never start or end with a dot."""
    assert manifest_namespace(bucket, prefix) == expected


def test_write_leaves_no_backups(tmp_path: Path, sample_catalog: Catalog) -> None:
    """Test that replaced manifests leave no backup files behind."""
    (tmp_path / "inventory_ns.json").write_text("previous json", encoding="utf-8")
    (tmp_path / "inventory_ns.txt").write_text("previous text", encoding="utf-8")
    writer = ManifestWriter(tmp_path)

    writer.write("ns", render_all(sample_catalog))

    assert sorted(p.name for p in tmp_path.iterdir()) == ["inventory_ns.json", "inventory_ns.txt"]


def test_failed_rename_restores_both_manifests(tmp_path: Path, sample_catalog: Catalog) -> None:
    """Test that a failure renaming the second manifest restores the first one too."""
    json_path = tmp_path / "inventory_ns.json"
    text_path = tmp_path / "inventory_ns.txt"
    json_path.write_text("previous json", encoding="utf-8")
    text_path.write_text("previous text", encoding="utf-8")
    writer = ManifestWriter(tmp_path)

    real_replace = Path.replace

    def failing_replace(self, target):
        if str(self).endswith(".txt.tmp"):
            raise OSError("rename failed")
        return real_replace(self, target)

    with patch.object(Path, "replace", autospec=True, side_effect=failing_replace):
        with pytest.raises(WriteFailure) as exc_info:
            writer.write("ns", render_all(sample_catalog))

    assert exc_info.value.path == str(text_path)
    assert json_path.read_text(encoding="utf-8") == "previous json"
    assert text_path.read_text(encoding="utf-8") == "previous text"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["inventory_ns.json", "inventory_ns.txt"]


def test_failed_rename_without_previous_manifests(tmp_path: Path, sample_catalog: Catalog) -> None:
    """Test that a failed first run leaves no half-written manifest pair."""
    writer = ManifestWriter(tmp_path)

    real_replace = Path.replace

    def failing_replace(self, target):
        if str(self).endswith(".txt.tmp"):
            raise OSError("rename failed")
        return real_replace(self, target)

    with patch.object(Path, "replace", autospec=True, side_effect=failing_replace):
        with pytest.raises(WriteFailure):
            writer.write("ns", render_all(sample_catalog))

    assert not list(tmp_path.iterdir())


def test_cleanup_failure_keeps_original_error(
    tmp_path: Path, sample_catalog: Catalog, caplog: pytest.LogCaptureFixture
) -> None:
    """Test that an error while cleaning up does not replace the write error."""
    writer = ManifestWriter(tmp_path)

    real_open = open

    def failing_open(file, *args, **kwargs):
        if str(file).endswith(".txt.tmp"):
            raise OSError("disk full")
        return real_open(file, *args, **kwargs)

    with patch("builtins.open", side_effect=failing_open):
        with patch.object(Path, "unlink", autospec=True, side_effect=OSError("read-only")):
            with pytest.raises(WriteFailure) as exc_info:
                writer.write("ns", render_all(sample_catalog))

    assert "disk full" in str(exc_info.value)
    assert exc_info.value.path == str(tmp_path / "inventory_ns.txt")
    assert "Could not remove" in caplog.text
