"""S3 object storage adapter: put and head-metadata against one bucket."""
import logging
import secrets
import string
import time
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from image_report.config import get_settings
from image_report.errors import ObjectStoreError

logger = logging.getLogger(__name__)

_KEY_ALPHABET = string.ascii_lowercase + string.digits


@dataclass
class ObjectMetadata:
    size_bytes: int
    last_modified: datetime
    content_type: Optional[str]


class ObjectStore:
    """Thin wrapper around a boto3 S3 client bound to a single bucket."""

    def __init__(self, client, bucket: str, public_base_url: str):
        self._client = client
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{key}"

    def put(self, key: str, data: bytes, content_type: str) -> str:
        """Store *data* under *key* and return its public URL."""
        try:
            self._client.put_object(
                Bucket=self.bucket, Key=key, Body=data, ContentType=content_type
            )
        except (ClientError, BotoCoreError) as exc:
            raise ObjectStoreError(str(exc)) from exc
        logger.info("Stored %s in bucket %s (%d bytes)", key, self.bucket, len(data))
        return self.public_url(key)

    def head_metadata(self, key: str) -> ObjectMetadata:
        try:
            resp = self._client.head_object(Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as exc:
            raise ObjectStoreError(str(exc)) from exc
        return ObjectMetadata(
            size_bytes=resp["ContentLength"],
            last_modified=resp["LastModified"],
            content_type=resp.get("ContentType"),
        )


def build_object_key(
    tag: str = "snowebs", now_ms: Optional[int] = None, suffix: Optional[str] = None
) -> str:
    """``{epoch_ms}-{tag}-{random}.jpg``.

    The extension is always ``.jpg`` whatever the detected format; the stored
    content-type still reflects the real image type.
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    if suffix is None:
        suffix = "".join(secrets.choice(_KEY_ALPHABET) for _ in range(8))
    return f"{now_ms}-{tag}-{suffix}.jpg"


def extract_storage_key(url: str, marker: str) -> str:
    """Return the part of a public storage URL that follows *marker*.

    Raises ``ValueError`` if *marker* does not occur or nothing follows it.
    """
    _, sep, key = url.partition(marker)
    if not sep:
        raise ValueError(f"URL does not contain {marker!r}")
    if not key:
        raise ValueError(f"No object key after {marker!r}")
    return key


def default_public_base_url(bucket: str, region: str) -> str:
    return f"https://{bucket}.s3.{region}.amazonaws.com"


@lru_cache()
def get_object_store() -> ObjectStore:
    settings = get_settings()
    client = boto3.client(
        "s3",
        endpoint_url=settings.AWS_S3_ENDPOINT_URL,
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        region_name=settings.AWS_REGION,
    )
    public_base_url = settings.AWS_S3_PUBLIC_BASE_URL or default_public_base_url(
        settings.AWS_S3_BUCKET, settings.AWS_REGION
    )
    return ObjectStore(client, settings.AWS_S3_BUCKET, public_base_url)
