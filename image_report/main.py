import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from image_report.config import get_settings
from image_report.errors import (
    ServiceError,
    request_validation_handler,
    service_error_handler,
)
from image_report.routers import file_details, health, report, upload
from image_report.models import upload_record as upload_record_models  # noqa: F401 - ensures models are registered

settings = get_settings()
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Image Upload Report", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_exception_handler(ServiceError, service_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)

app.include_router(upload.router, tags=["upload"])
app.include_router(report.router, tags=["report"])
app.include_router(file_details.router, tags=["files"])
app.include_router(health.router, tags=["health"])
