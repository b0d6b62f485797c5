from fastapi import APIRouter, Depends

from image_report.config import get_settings
from image_report.schemas.upload import FileDetailsRequest, FileDetailsResponse
from image_report.services.file_details_service import get_file_details
from image_report.services.storage_service import ObjectStore, get_object_store

router = APIRouter()


@router.post("/getfiledetails", response_model=FileDetailsResponse)
def file_details(
    payload: FileDetailsRequest,
    store: ObjectStore = Depends(get_object_store),
):
    """Look up size, content-type and upload time (UTC+05:30) of a stored image."""
    details = get_file_details(payload.fileKey, store, get_settings().STORAGE_URL_MARKER)
    return FileDetailsResponse(
        fileSize=details.size_bytes,
        contentType=details.content_type,
        istDate=details.ist_date,
    )
