"""Health check endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from city_sentinel.config import get_settings
from city_sentinel.infrastructure.database import get_db
from city_sentinel.utils import now_in_app_timezone

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health_check() -> dict[str, object]:
    """Return 200 while the service is running."""

    return {
        "status": "healthy",
        "email_enabled": get_settings().email_enabled,
        "timestamp": now_in_app_timezone().isoformat(),
    }


@router.get("/db")
def database_health(db: Session = Depends(get_db)) -> dict[str, object]:
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Entity store is not reachable",
        ) from exc
    return {"status": "healthy", "connected": True}
