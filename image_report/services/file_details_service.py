"""Object-store metadata lookup for a stored image's public URL."""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from image_report.errors import MetadataLookupError, ObjectStoreError, ValidationError
from image_report.services.storage_service import ObjectStore, extract_storage_key

logger = logging.getLogger(__name__)

IST_OFFSET = timedelta(milliseconds=19_800_000)


@dataclass
class FileDetails:
    size_bytes: int
    content_type: Optional[str]
    ist_date: str


def convert_to_ist(utc_date: datetime) -> str:
    """Add the fixed +05:30 offset to a UTC instant and return ISO-8601 with a ``Z``.

    ``2024-01-01T00:00:00Z`` becomes ``2024-01-01T05:30:00.000Z``. This is a
    static offset, not a timezone-database lookup, so the result must never be
    converted a second time. Naive values are taken to be UTC.
    """
    if utc_date.tzinfo is None:
        utc_date = utc_date.replace(tzinfo=timezone.utc)
    shifted = utc_date.astimezone(timezone.utc) + IST_OFFSET
    return shifted.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def get_file_details(file_key: str, store: ObjectStore, marker: str) -> FileDetails:
    if not file_key or not file_key.strip():
        raise ValidationError("File key is required")
    try:
        key = extract_storage_key(file_key.strip(), marker)
    except ValueError as exc:
        logger.warning("Rejected file key %r: %s", file_key, exc)
        raise ValidationError(f"File key must be a storage URL containing {marker!r}") from exc

    logger.info("Extracted file key: %s", key)
    try:
        meta = store.head_metadata(key)
    except ObjectStoreError as exc:
        logger.error("Error fetching file metadata for %s: %s", key, exc)
        raise MetadataLookupError(details=str(exc)) from exc

    return FileDetails(
        size_bytes=meta.size_bytes,
        content_type=meta.content_type,
        ist_date=convert_to_ist(meta.last_modified),
    )
