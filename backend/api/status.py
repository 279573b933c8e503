from fastapi import APIRouter, Depends

from services.db import Db
from ._resp import get_db

router = APIRouter(prefix="/status", tags=["status"])


@router.get("/health")
def health(db: Db = Depends(get_db)):
    return {
        "status": "healthy",
        "instances": len(db.instances),
        "bks": db.bks_count,
    }
