from datetime import datetime
from sqlalchemy import String, func
from sqlalchemy.orm import Mapped, mapped_column
from image_report.database import Base


class UploadRecord(Base):
    """One stored image: its public URL plus the metadata read at upload time.

    Rows are append-only; nothing in the service updates or deletes them.
    """

    __tablename__ = "fileupload"

    id: Mapped[int] = mapped_column(primary_key=True)
    imageurl: Mapped[str] = mapped_column(String(1000))
    size: Mapped[str] = mapped_column(String(50))
    width: Mapped[int]
    height: Mapped[int]
    format: Mapped[str] = mapped_column(String(20))
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
