# backend/config.py
from __future__ import annotations
from pathlib import Path
import os
from dotenv import load_dotenv

# Load exactly backend/.env (do NOT call load_dotenv() without a path)
ENV_FILE = Path(__file__).with_name(".env")
load_dotenv(ENV_FILE, override=False)


def get_instances_dir() -> Path:
    # Fallback to backend/data/instances when INSTANCES_DIR is not set
    default = Path(__file__).with_name("data") / "instances"
    return Path(os.getenv("INSTANCES_DIR", str(default))).resolve()


def get_bks_dir() -> Path | None:
    raw = os.getenv("BKS_DIR", "")
    return Path(raw).resolve() if raw else None


# Runtime overrides, read back by the next get_*_dir() call
def set_instances_dir(path: str | Path) -> Path:
    p = Path(path).resolve()
    os.environ["INSTANCES_DIR"] = str(p)
    return p


def set_bks_dir(path: str | Path) -> Path:
    p = Path(path).resolve()
    os.environ["BKS_DIR"] = str(p)
    return p


def get_settings():
    return Settings


class Settings:
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", "8000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ALLOW_ORIGINS: list[str] = os.getenv(
        "CORS_ALLOW_ORIGINS", "http://localhost:3000"
    ).split(",")


settings = Settings
