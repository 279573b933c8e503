# file_handler/file_factory.py
from __future__ import annotations
from pathlib import Path
from typing import Callable, Optional, Tuple, TypeVar

from core.exceptions import AppError
from models.instance import Instance
from models.solution import Solution
from .dataset_indexer import find_instance_file
from .instance_loader import parse_instance
from .solution_loader import parse_solution

T = TypeVar("T")


def read(path: str | Path, parser: Callable[[str], T]) -> T:
    """Read a text file and hand it to a parser; I/O errors carry the path."""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise AppError(f"{p}: {e.strerror or e}") from e
    return parser(text)


def load_instance_file(path: str | Path, name: Optional[str] = None) -> Instance:
    return read(path, lambda text: parse_instance(text, name=name))


def load_solution_file(path: str | Path) -> Solution:
    return read(path, parse_solution)


def load_pair(
    solution_path: str | Path, instances_location: str | Path
) -> Tuple[Solution, Instance]:
    """
    Load a solution and the instance it names. `instances_location` is either
    the instance file itself or a directory holding instances by name.
    """
    sol = load_solution_file(solution_path)
    inst_path = find_instance_file(instances_location, sol.instance_name)
    return sol, load_instance_file(inst_path)
