# api/history_routes.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from core.exceptions import AppError
from services.db import Db
from ._resp import fail, get_db, ok, text

router = APIRouter(tags=["history"])


@router.get("/history/{name}")
def get_history(name: str, db: Db = Depends(get_db)):
    """Best-known solutions of an instance, oldest first, one per line."""
    try:
        history = db.bks(name)
    except AppError as e:
        return text(str(e), status=400)
    return text("\n".join(str(b) for b in history))


@router.get("/json/history/{name}")
def get_history_json(name: str, db: Db = Depends(get_db)):
    try:
        history = db.bks(name)
    except AppError as e:
        fail(400, str(e))
    return ok([b.model_dump(mode="json") for b in history])
