import os

# Set a dummy DATABASE_URL before any imports so the lazy engine doesn't need psycopg2
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("AWS_S3_BUCKET", "test-bucket")
os.environ.setdefault("AWS_REGION", "us-east-1")

from sqlalchemy.orm import configure_mappers  # noqa: E402

# Import all models to register them with the mapper
from image_report.models.upload_record import UploadRecord  # noqa: E402, F401

configure_mappers()
