# api/instance_routes.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from core.exceptions import AppError
from file_handler.sintef_writer import write_instance_text
from services.db import Db
from ._resp import fail, get_db, ok, text

router = APIRouter(tags=["instances"])


@router.get("/instance/{name}")
def get_instance(name: str, db: Db = Depends(get_db)):
    try:
        inst = db.instance(name)
    except AppError as e:
        return text(str(e), status=400)
    return text(write_instance_text(inst))


@router.get("/json/instance/{name}")
def get_instance_json(name: str, db: Db = Depends(get_db)):
    try:
        inst = db.instance(name)
    except AppError as e:
        fail(400, str(e))
    return ok(inst.model_dump(mode="json"))
