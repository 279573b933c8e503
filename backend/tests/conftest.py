# backend/tests/conftest.py
import os
import sys
from pathlib import Path
import pytest
from fastapi.testclient import TestClient

# Make /Project/backend importable as top-level
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

DATA_DIR = Path(__file__).with_name("data")
INSTANCES_DIR = DATA_DIR / "instances"
BKS_DIR = DATA_DIR / "bks"

# Point the app at the test data before it is imported
os.environ["INSTANCES_DIR"] = str(INSTANCES_DIR)
os.environ["BKS_DIR"] = str(BKS_DIR)

from main import app  # noqa: E402
from file_handler.file_factory import load_instance_file  # noqa: E402


@pytest.fixture(scope="session")
def client():
    # Use context manager so FastAPI lifespan (startup/shutdown) runs
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="session")
def ring():
    """Depot at the origin, six clients on a unit ring, 3 vehicles of capacity 10."""
    return load_instance_file(INSTANCES_DIR / "ring.txt")


@pytest.fixture(scope="session")
def ring_pdp():
    """The ring as three pickup/delivery pairs: (1, 2), (3, 4), (5, 6)."""
    return load_instance_file(INSTANCES_DIR / "ring_pdp.txt")


@pytest.fixture
def solution_text():
    def make(name, routes):
        lines = [
            f"Instance name: {name}",
            "Authors: tests",
            "Date: 2024-01-01",
            "Reference: none",
            "Solution",
        ]
        lines += [
            f"Route {i}: " + " ".join(str(p) for p in r)
            for i, r in enumerate(routes, start=1)
        ]
        return "\n".join(lines) + "\n"

    return make
