"""Upload an image by URL: fetch it, read its metadata, store it, record it."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from image_report.config import get_settings
from image_report.database import get_db
from image_report.schemas.upload import UploadRequest, UploadResponse
from image_report.services.fetch_service import RemoteFetcher, get_fetcher
from image_report.services.storage_service import ObjectStore, get_object_store
from image_report.services.upload_service import upload_image

router = APIRouter()


@router.post("/upload", response_model=UploadResponse)
def upload(
    payload: UploadRequest,
    db: Session = Depends(get_db),
    fetcher: RemoteFetcher = Depends(get_fetcher),
    store: ObjectStore = Depends(get_object_store),
):
    record = upload_image(
        payload.imageUrl, fetcher, store, db, key_tag=get_settings().OBJECT_KEY_TAG
    )
    return UploadResponse(
        url=record.imageurl,
        size=record.size,
        width=record.width,
        height=record.height,
        format=record.format,
    )
