from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from tunebox.domain.library import LibraryStore, health_status

from ..deps import get_store
from ..schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health_check(store: LibraryStore = Depends(get_store)):
    try:
        status = health_status(store)
    except Exception:
        logger.exception("Error reading health status")
        raise HTTPException(500, "Failed to read health status")

    return HealthResponse.from_status(status)
