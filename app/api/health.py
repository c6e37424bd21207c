"""Health check endpoint with database and image-store checks."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.upload import get_object_store
from app.core.config import settings
from app.core.database import check_db_connected, get_db
from app.schemas.common import ApiResponse, ok
from app.schemas.health import HealthResponse
from app.services.storage import ObjectStore

router = APIRouter()


@router.get("", response_model=ApiResponse[HealthResponse], response_model_exclude_unset=True)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    store: Annotated[ObjectStore, Depends(get_object_store)],
) -> ApiResponse:
    """
    Return service health, database connectivity and image-store availability.
    Used by load balancers and monitoring.
    """
    db_connected = check_db_connected(db)
    store_available = store.is_writable()
    return ok(
        HealthResponse(
            status="ok" if db_connected and store_available else "degraded",
            environment=settings.APP_ENV,
            database="connected" if db_connected else "disconnected",
            image_store="available" if store_available else "unavailable",
        )
    )
