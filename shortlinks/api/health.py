from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from shortlinks.db import database, repository

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(db: Session = Depends(database.get_db)):
    if not repository.health_check(db):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "service": "shortlinks"},
        )
    return {"status": "healthy", "service": "shortlinks"}
