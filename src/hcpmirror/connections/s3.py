"""
S3 connection for the remote dataset.

Provides a boto3 client and a one-way, non-deleting tree sync from a bucket
prefix into a local directory.
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator, Optional

from hcpmirror.utils.logging import FSOPS_LOGGER, get_logger

logger = get_logger("hcpmirror.connections.s3")
ops_logger = get_logger(FSOPS_LOGGER)


class S3Connection:
    """
    S3 connection wrapper for the remote dataset.

    Provides lazy-initialized boto3 client with credential management.
    Supports AWS credentials from config, a named profile, environment, or
    IAM role.

    Config example:
        remote:
          bucket: hcp-openaccess
          base_path: HCP_1200       # prefix holding one directory per subject
          region: us-east-1
          profile: hcp              # Optional named profile
          access_key_id: AKIA...    # Optional, uses env/IAM if not set
          secret_access_key: ...    # Optional
          session_token: ...        # Optional (for temp creds)
          endpoint_url: ...         # Optional (for S3-compatible services)
    """

    def __init__(self, config: dict[str, Any]):
        self.config = config
        self._client = None
        if not config.get("bucket"):
            raise ValueError("S3 connection requires 'bucket' in the remote config")

    @property
    def bucket(self) -> str:
        """Get S3 bucket name from config."""
        return self.config["bucket"]

    @property
    def base_path(self) -> str:
        """Key prefix under which subject directories live."""
        return (self.config.get("base_path") or "").strip("/")

    @property
    def region(self) -> Optional[str]:
        """Get AWS region from config."""
        return self.config.get("region")

    @property
    def endpoint_url(self) -> Optional[str]:
        """Get custom endpoint URL (for S3-compatible services like MinIO)."""
        return self.config.get("endpoint_url")

    def _get_client_kwargs(self) -> dict[str, Any]:
        """Build kwargs for boto3 client initialization."""
        kwargs: dict[str, Any] = {}

        if self.region:
            kwargs["region_name"] = self.region

        if self.endpoint_url:
            kwargs["endpoint_url"] = self.endpoint_url

        # Explicit credentials from config (override env/IAM)
        access_key = self.config.get("access_key_id")
        secret_key = self.config.get("secret_access_key")
        session_token = self.config.get("session_token")

        if access_key and secret_key:
            kwargs["aws_access_key_id"] = access_key
            kwargs["aws_secret_access_key"] = secret_key
            if session_token:
                kwargs["aws_session_token"] = session_token

        return kwargs

    @property
    def client(self):
        """
        Get boto3 S3 client (lazy initialization).

        Returns:
            boto3.client('s3') instance
        """
        if self._client is None:
            import boto3

            kwargs = self._get_client_kwargs()
            profile = self.config.get("profile")
            if profile and "aws_access_key_id" not in kwargs:
                session = boto3.Session(profile_name=profile)
                self._client = session.client("s3", **kwargs)
            else:
                self._client = boto3.client("s3", **kwargs)
        return self._client

    def _full_key(self, key: str) -> str:
        """Prepend base_path to key if configured."""
        if self.base_path:
            return f"{self.base_path}/{key.lstrip('/')}"
        return key.lstrip("/")

    def uri(self, key: str = "") -> str:
        return f"s3://{self.bucket}/{self._full_key(key)}"

    def list_objects(self, prefix: str = "", *, max_keys: int = 1000) -> Iterator[dict[str, Any]]:
        """
        List objects in the bucket under a prefix.

        Args:
            prefix: Key prefix to filter objects (combined with base_path)
            max_keys: Maximum number of keys to return per request

        Yields:
            Dict with object metadata (Key, Size, LastModified, ETag, etc.)
        """
        full_prefix = self._full_key(prefix)
        paginator = self.client.get_paginator("list_objects_v2")

        for page in paginator.paginate(Bucket=self.bucket, Prefix=full_prefix, MaxKeys=max_keys):
            for obj in page.get("Contents", []):
                yield obj

    def download_file(self, full_key: str, local_path: str | Path) -> Path:
        """
        Download an object to a local file.

        Args:
            full_key: Complete S3 object key (base_path already applied)
            local_path: Local file path to save to

        Returns:
            Path to the downloaded file
        """
        local_path = Path(local_path)
        local_path.parent.mkdir(parents=True, exist_ok=True)

        # Download to temp file first for atomicity
        tmp_path = local_path.with_name(local_path.name + ".part")
        try:
            self.client.download_file(self.bucket, full_key, str(tmp_path))
            os.replace(tmp_path, local_path)
        except Exception:
            if tmp_path.exists():
                tmp_path.unlink()
            raise

        return local_path

    def sync_tree(self, remote_path: str, local_path: str | Path) -> int:
        """
        Mirror every object under ``remote_path`` into ``local_path``.

        An object is transferred when the local file is missing, has a
        different size, or is older than the object. Local files are never
        deleted. Downloaded files take the object's LastModified as their
        mtime, so repeating a sync with no remote changes transfers nothing.

        Args:
            remote_path: Path below base_path, e.g. ``100307/unprocessed``
            local_path: Local directory receiving the tree

        Returns:
            Number of files transferred
        """
        local_root = Path(local_path)
        local_root.mkdir(parents=True, exist_ok=True)
        prefix = remote_path.strip("/") + "/"
        full_prefix = self._full_key(prefix)

        transferred = 0
        for obj in self.list_objects(prefix):
            key = obj["Key"]
            if key.endswith("/"):
                continue
            relative = key[len(full_prefix):]
            target = local_root / relative
            if not _needs_transfer(target, obj):
                logger.debug(f"Up to date: {target}")
                continue

            ops_logger.info(f"download: s3://{self.bucket}/{key} to {target}")
            self.download_file(key, target)
            modified = _timestamp(obj.get("LastModified"))
            if modified is not None:
                os.utime(target, (modified, modified))
            transferred += 1

        return transferred

    def close(self) -> None:
        """Reset the cached client."""
        self._client = None

    def __enter__(self) -> "S3Connection":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(uri='{self.uri()}')"


def _timestamp(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.timestamp()
    return float(value)


def _needs_transfer(target: Path, obj: dict[str, Any]) -> bool:
    try:
        stat = target.stat()
    except FileNotFoundError:
        return True
    if stat.st_size != obj.get("Size", stat.st_size):
        return True
    modified = _timestamp(obj.get("LastModified"))
    return modified is not None and stat.st_mtime < modified
