#!/usr/bin/env python3
"""
CLI entry point for template-inventory.

Lists every object under a bucket prefix (or local directory) and writes
inventory_<namespace>.json and inventory_<namespace>.txt manifests.
"""

import argparse
import sys
from typing import NoReturn

from template_inventory.application.inventory_service import InventoryService, ObjectListingBackend
from template_inventory.application.render_service import OutputFormat, format_summary, render_all
from template_inventory.domain.errors import InventoryError
from template_inventory.infrastructure.config import InventoryConfig
from template_inventory.infrastructure.local_directory_repository import LocalDirectoryRepository
from template_inventory.infrastructure.logger import log_operation, setup_logger
from template_inventory.infrastructure.manifest_writer import ManifestWriter, manifest_namespace
from template_inventory.infrastructure.s3_object_repository import S3ObjectRepository

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "cli",
        "description": "Command-line interface for template-inventory",
        "version": __version__,
        "author": __author__,
        "last_updated": "2025-12-07",
    }


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="template-inventory",
        description="Generate inventory manifests of objects stored under a bucket prefix",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "example:\n"
            "  template-inventory my-host-bucket atlantis/templates --output-dir outputs\n"
            "  -> outputs/inventory_atlantis_templates.json\n"
            "     outputs/inventory_atlantis_templates.txt"
        ),
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "bucket",
        help="S3 bucket name (or directory path with --backend local)",
    )

    parser.add_argument(
        "prefix",
        nargs="?",
        default="",
        help="Key prefix to inventory (default: entire bucket)",
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to write manifests to (default: outputs, or $INVENTORY_OUTPUT_DIR)",
    )

    parser.add_argument(
        "--backend",
        choices=["s3", "local"],
        default="s3",
        help="Storage backend to list (default: s3)",
    )

    parser.add_argument(
        "--include-versions",
        action="store_true",
        default=None,
        help="List every object version instead of current objects only",
    )

    parser.add_argument(
        "--region",
        default=None,
        help="AWS region (default: $INVENTORY_REGION, $AWS_REGION or boto3 default)",
    )

    parser.add_argument(
        "--profile",
        default=None,
        help="AWS named profile (default: $AWS_PROFILE or default credentials)",
    )

    parser.add_argument(
        "--page-size",
        type=int,
        default=None,
        help="Maximum objects per listing call, 1-1000 (default: 1000)",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Build the inventory but do not write manifest files",
    )

    parser.add_argument(
        "--print",
        dest="print_format",
        choices=[fmt.value for fmt in OutputFormat],
        default=None,
        help="Also print the rendered manifest to stdout",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    return parser


def load_config(args: argparse.Namespace) -> InventoryConfig:
    """Merge environment configuration with command-line overrides.

    Args:
        args: Parsed command-line arguments

    Returns:
        Effective InventoryConfig

    Raises:
        ValueError: If a setting is invalid
    """
    env = InventoryConfig.from_env()
    return InventoryConfig(
        region=args.region if args.region is not None else env.region,
        profile=args.profile if args.profile is not None else env.profile,
        output_dir=args.output_dir if args.output_dir is not None else env.output_dir,
        page_size=args.page_size if args.page_size is not None else env.page_size,
        include_versions=(
            args.include_versions if args.include_versions is not None else env.include_versions
        ),
        dry_run=args.dry_run if args.dry_run is not None else env.dry_run,
    )


def create_backend(backend_name: str, config: InventoryConfig) -> ObjectListingBackend:
    """Create the listing backend selected on the command line.

    Args:
        backend_name: "s3" or "local"
        config: Effective configuration

    Returns:
        Listing backend
    """
    if backend_name == "local":
        return LocalDirectoryRepository(page_size=config.page_size)
    return S3ObjectRepository(
        region=config.region,
        profile=config.profile,
        page_size=config.page_size,
        include_versions=config.include_versions,
    )


def cmd_inventory(args: argparse.Namespace) -> int:
    """Execute the inventory run.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    logger = setup_logger(verbose=args.verbose)

    try:
        config = load_config(args)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    namespace = manifest_namespace(args.bucket, args.prefix)
    log_operation(
        logger,
        "Building inventory",
        {
            "backend": args.backend,
            "bucket": args.bucket,
            "prefix": args.prefix or "<all>",
            "versions": config.include_versions,
            "namespace": namespace,
        },
    )
    if config.dry_run:
        logger.info("  [DRY RUN] manifests will not be written")

    try:
        backend = create_backend(args.backend, config)
        catalog = InventoryService(backend).build_inventory(args.bucket, args.prefix)
        renderings = render_all(catalog)

        writer = ManifestWriter(config.output_dir, dry_run=config.dry_run)
        writer.write(namespace, renderings)

        if args.print_format:
            sys.stdout.write(renderings[OutputFormat(args.print_format)])

        logger.info(format_summary(catalog))
        return 0

    except InventoryError as e:
        logger.error(f"Inventory failed, no manifest published: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


def main() -> NoReturn:
    """Main entry point for the CLI.

    Parses arguments and runs the inventory.
    """
    parser = create_parser()
    args = parser.parse_args()

    exit_code = cmd_inventory(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
