# api/_resp.py
from fastapi import HTTPException, Request
from fastapi.responses import PlainTextResponse

from services.db import Db


def ok(data: dict | list | str | int | float | None = None, **extras):
    payload = {"status": "success"}
    if data is not None:
        payload["data"] = data
    if extras:
        payload.update(extras)
    return payload


def fail(status: int, message: str):
    raise HTTPException(status, message)


def text(body: str, status: int = 200) -> PlainTextResponse:
    return PlainTextResponse(body, status_code=status)


def get_db(request: Request) -> Db:
    """The Db built by the lifespan handler."""
    db = getattr(request.app.state, "db", None)
    if db is None:
        fail(503, "instance database is not loaded")
    return db
