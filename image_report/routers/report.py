import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from image_report.database import get_db
from image_report.errors import GenerationError, ServiceError
from image_report.services.record_service import list_upload_records
from image_report.services.report_service import (
    ReportGenerator,
    get_report_generator,
    iter_chunks,
)

router = APIRouter()
logger = logging.getLogger(__name__)

REPORT_FILENAME = "image-upload-report.pdf"


@router.get("/generatepdf")
def generate_pdf(
    db: Session = Depends(get_db),
    generator: ReportGenerator = Depends(get_report_generator),
):
    """Download every upload record as a paginated PDF with thumbnails."""
    try:
        records = list_upload_records(db)
        pdf_bytes = generator.render(records)
    except ServiceError:
        raise
    except Exception as exc:
        logger.error("Error generating PDF: %s", exc)
        raise GenerationError() from exc

    return StreamingResponse(
        iter_chunks(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{REPORT_FILENAME}"'},
    )
