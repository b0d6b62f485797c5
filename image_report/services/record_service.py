"""Append-only access to the ``fileupload`` table."""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from image_report.models.upload_record import UploadRecord

logger = logging.getLogger(__name__)


def insert_upload_record(
    db: Session, url: str, size_label: str, width: int, height: int, fmt: str
) -> UploadRecord:
    record = UploadRecord(imageurl=url, size=size_label, width=width, height=height, format=fmt)
    db.add(record)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(record)
    return record


def list_upload_records(db: Session) -> list[UploadRecord]:
    """All records in insertion order."""
    return db.query(UploadRecord).order_by(UploadRecord.id.asc()).all()
