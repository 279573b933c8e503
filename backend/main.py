from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from api.check_routes import router as check_router
from api.instance_routes import router as instance_router
from api.history_routes import router as history_router
from api.status import router as status_router
from config import get_bks_dir, get_instances_dir, get_settings
from core.logging_setup import configure_logging
from services.db import Db
from contextlib import asynccontextmanager
import logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(get_settings().LOG_LEVEL)
    instances_dir, bks_dir = get_instances_dir(), get_bks_dir()
    logger.info("loading instances from %s, bks from %s", instances_dir, bks_dir)
    app.state.db = Db.load(instances_dir, bks_dir)
    yield


app = FastAPI(title="VRPTW Solution Verifier", lifespan=lifespan)

# CORS (adjust for your frontend)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def bad_request(request: Request, exc: RequestValidationError):
    # every rejected body is a 400, as for text requests
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


# Register API routes
app.include_router(check_router)
app.include_router(instance_router)
app.include_router(history_router)
app.include_router(status_router)

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=True)
