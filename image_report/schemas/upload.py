from typing import Optional
from pydantic import BaseModel


class UploadRequest(BaseModel):
    imageUrl: Optional[str] = None


class UploadResponse(BaseModel):
    message: str = "Image uploaded successfully"
    url: str
    size: str
    width: int
    height: int
    format: str


class FileDetailsRequest(BaseModel):
    fileKey: Optional[str] = None


class FileDetailsResponse(BaseModel):
    message: str = "File metadata retrieved successfully"
    fileSize: int
    contentType: Optional[str] = None
    istDate: str
