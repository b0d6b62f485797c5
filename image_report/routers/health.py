import logging

from fastapi import APIRouter
from sqlalchemy import text

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
def health_check():
    """Check service health including DB connectivity."""
    db_ok = False

    try:
        from image_report.database import engine
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        db_ok = True
    except Exception as exc:
        logger.warning("Health check: database unreachable: %s", exc)

    return {"status": "ok", "db": db_ok}
