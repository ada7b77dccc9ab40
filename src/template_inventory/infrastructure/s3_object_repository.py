#!/usr/bin/env python3
"""
S3 object listing repository.

Provides a concrete ObjectListingBackend using boto3. Lists either the
current objects under a prefix or every stored version of them.
"""

import json
import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from template_inventory.application.inventory_service import ListingPage
from template_inventory.domain.errors import BackendUnavailable
from template_inventory.infrastructure.config import MAX_PAGE_SIZE

__version__ = "0.1.0"
__author__ = "John Ayers"

logger = logging.getLogger(__name__)


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "s3_object_repository",
        "description": "S3 object listing repository",
        "version": __version__,
        "author": __author__,
        "last_updated": "2025-12-07",
    }


class S3ObjectRepository:
    """Repository for S3 object listings using boto3.

    Implements the ObjectListingBackend protocol.
    """

    def __init__(
        self,
        region: str | None = None,
        profile: str | None = None,
        page_size: int = MAX_PAGE_SIZE,
        include_versions: bool = False,
        client: Any = None,
    ) -> None:
        """Initialize S3 object repository.

        Args:
            region: AWS region (boto3 default chain if None)
            profile: AWS named profile (default credentials if None)
            page_size: Maximum keys requested per call
            include_versions: If True, list every object version
            client: Pre-built S3 client, mainly for tests
        """
        self.region = region
        self.profile = profile
        self.page_size = page_size
        self.include_versions = include_versions
        self._client = client

    def _get_s3_client(self) -> Any:
        """Get (and cache) the boto3 S3 client.

        Returns:
            boto3 S3 client
        """
        if self._client is None:
            session = boto3.Session(profile_name=self.profile, region_name=self.region)
            self._client = session.client("s3")
        return self._client

    def fetch_page(
        self, bucket: str, prefix: str, continuation_token: str | None
    ) -> ListingPage:
        """Fetch one page of objects under a prefix.

        Args:
            bucket: S3 bucket name
            prefix: Key prefix, empty for the whole bucket
            continuation_token: Token from the previous page, None for the first page

        Returns:
            ListingPage with raw S3 entries

        Raises:
            BackendUnavailable: If the S3 call fails
        """
        operation = "ListObjectVersions" if self.include_versions else "ListObjectsV2"
        try:
            if self.include_versions:
                return self._fetch_versions_page(bucket, prefix, continuation_token)
            return self._fetch_objects_page(bucket, prefix, continuation_token)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            raise BackendUnavailable(
                f"Failed to list s3://{bucket}/{prefix}: {e}",
                bucket=bucket,
                operation=operation,
                cause_code=code or None,
            ) from e
        except BotoCoreError as e:
            raise BackendUnavailable(
                f"Failed to list s3://{bucket}/{prefix}: {e}",
                bucket=bucket,
                operation=operation,
                cause_code=type(e).__name__,
            ) from e

    def _fetch_objects_page(
        self, bucket: str, prefix: str, continuation_token: str | None
    ) -> ListingPage:
        params: dict[str, Any] = {"Bucket": bucket, "Prefix": prefix, "MaxKeys": self.page_size}
        if continuation_token:
            params["ContinuationToken"] = continuation_token

        response = self._get_s3_client().list_objects_v2(**params)

        next_token = None
        if response.get("IsTruncated"):
            next_token = response.get("NextContinuationToken")
            if not next_token:
                raise BackendUnavailable(
                    f"Truncated listing of s3://{bucket}/{prefix} without a continuation token",
                    bucket=bucket,
                    operation="ListObjectsV2",
                )

        entries = tuple(response.get("Contents", []))
        logger.debug(f"ListObjectsV2 returned {len(entries)} objects (truncated={next_token is not None})")
        return ListingPage(entries=entries, next_token=next_token)

    def _fetch_versions_page(
        self, bucket: str, prefix: str, continuation_token: str | None
    ) -> ListingPage:
        params: dict[str, Any] = {"Bucket": bucket, "Prefix": prefix, "MaxKeys": self.page_size}
        if continuation_token:
            params.update(json.loads(continuation_token))

        response = self._get_s3_client().list_object_versions(**params)

        next_token = None
        if response.get("IsTruncated"):
            markers = {"KeyMarker": response.get("NextKeyMarker", "")}
            if response.get("NextVersionIdMarker"):
                markers["VersionIdMarker"] = response["NextVersionIdMarker"]
            next_token = json.dumps(markers, sort_keys=True)

        # Delete markers are tombstones, not stored objects
        entries = tuple(response.get("Versions", []))
        logger.debug(
            f"ListObjectVersions returned {len(entries)} versions, "
            f"skipped {len(response.get('DeleteMarkers', []))} delete markers"
        )
        return ListingPage(entries=entries, next_token=next_token)


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
