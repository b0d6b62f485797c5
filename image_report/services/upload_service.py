"""Upload pipeline: fetch -> inspect -> store -> record.

There is no rollback between the last two steps: if the record insert fails
the object stays in the bucket without a matching row.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from image_report.errors import (
    FetchError,
    ImageMetadataError,
    MetadataError,
    ObjectStoreError,
    PersistenceError,
    StorageError,
    UpstreamFetchError,
    ValidationError,
)
from image_report.models.upload_record import UploadRecord
from image_report.services.fetch_service import RemoteFetcher
from image_report.services.image_service import format_size_label, mime_type_for, read_metadata
from image_report.services.record_service import insert_upload_record
from image_report.services.storage_service import ObjectStore, build_object_key

logger = logging.getLogger(__name__)


def upload_image(
    image_url: str,
    fetcher: RemoteFetcher,
    store: ObjectStore,
    db: Session,
    key_tag: str = "snowebs",
) -> UploadRecord:
    if not image_url or not image_url.strip():
        raise ValidationError("Image URL is required")

    try:
        fetched = fetcher.fetch_bytes(image_url)
    except FetchError as exc:
        logger.error("Error fetching image %s: %s", image_url, exc)
        raise UpstreamFetchError() from exc

    size_label = format_size_label(len(fetched.content))

    try:
        meta = read_metadata(fetched.content)
    except ImageMetadataError as exc:
        logger.error("Error reading metadata for %s: %s", image_url, exc)
        raise MetadataError() from exc

    key = build_object_key(tag=key_tag)
    content_type = fetched.content_type or mime_type_for(meta.format)
    try:
        public_url = store.put(key, fetched.content, content_type)
    except ObjectStoreError as exc:
        logger.error("Error storing %s as %s: %s", image_url, key, exc)
        raise StorageError() from exc

    try:
        record = insert_upload_record(
            db, public_url, size_label, meta.width, meta.height, meta.format
        )
    except SQLAlchemyError as exc:
        logger.error("Error saving upload record for %s (object %s left in storage): %s",
                     public_url, key, exc)
        raise PersistenceError() from exc

    logger.info("Uploaded %s -> %s (%s, %dx%d %s)",
                image_url, public_url, size_label, meta.width, meta.height, meta.format)
    return record
