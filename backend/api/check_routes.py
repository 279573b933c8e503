# api/check_routes.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool

from core.exceptions import AppError
from file_handler.solution_loader import parse_solution
from models.solution import Solution
from models.verification import VerificationWithComparison
from services.db import Db
from ._resp import fail, get_db, ok, text

router = APIRouter(tags=["check"])


def _check_text(db: Db, body: str) -> VerificationWithComparison:
    return db.check(parse_solution(body))


@router.post("/check")
async def check_text(request: Request, db: Db = Depends(get_db)):
    """SINTEF solution text in, one summary line out (400 with the error text)."""
    body = (await request.body()).decode("utf-8", errors="replace")
    try:
        result = await run_in_threadpool(_check_text, db, body)
    except AppError as e:
        return text(str(e), status=400)
    return text(str(result))


@router.post("/json/check")
def check_json(sol: Solution, db: Db = Depends(get_db)):
    try:
        result = db.check(sol)
    except AppError as e:
        fail(400, str(e))
    return ok(result.model_dump(mode="json"))
