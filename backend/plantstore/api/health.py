from datetime import datetime, timezone

from fastapi import APIRouter
from sqlalchemy import text

from plantstore.config import settings
from plantstore.db import store

router = APIRouter()


@router.get("/health", tags=["health"])
def health():
    db_ok = False
    try:
        with store.connect().connect() as conn:
            conn.execute(text("SELECT 1"))
            db_ok = True
    except Exception:
        db_ok = False

    return {
        "success": db_ok,
        "message": "Plant Store API is running!" if db_ok else "Plant Store API is degraded",
        "status": "ok" if db_ok else "degraded",
        "db": db_ok,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.ENVIRONMENT,
    }
