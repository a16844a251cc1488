from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from inventory.database import Database, get_database

router = APIRouter(prefix="/health", tags=["Health"])


@router.get(
    "",
    summary="Health check",
    description="Basic health check endpoint."
)
def health_check():
    """Simple health check."""
    return {"status": "healthy"}


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check if the database is reachable."
)
def readiness_check(database: Database = Depends(get_database)):
    checks = {"database": False}

    try:
        database.ping()
        checks["database"] = True
    except SQLAlchemyError as e:
        checks["database_error"] = str(e)

    return {
        "status": "ready" if checks["database"] else "not_ready",
        "checks": checks
    }
