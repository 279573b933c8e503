# services/bks.py
from __future__ import annotations
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Mapping, Optional, Tuple
import logging

from core.exceptions import AppError, NotFoundError, ParseError
from core.numeric import EPSILON, fl, precise
from file_handler.dataset_indexer import FileEntry, list_bks_files
from file_handler.file_factory import load_solution_file
from models.instance import Instance
from models.verification import Bks, Comparison
from services.verifier import verify

logger = logging.getLogger(__name__)

BksDb = Dict[str, List[Bks]]


@precise
def compare(routes: int, distance: Decimal, best: Optional[Bks]) -> Comparison:
    """
    Rank a verified (routes, distance) against a best-known solution.
    Fewer routes always wins; equal route counts compare distances within EPSILON.
    """
    if best is None:
        return Comparison.BETTER
    if routes != best.routes:
        return Comparison.BETTER if routes < best.routes else Comparison.WORSE
    diff = best.distance - distance
    if diff > EPSILON:
        return Comparison.BETTER
    if diff < -EPSILON:
        return Comparison.WORSE
    return Comparison.EQUAL


def parse_bks_file_name(file_name: str) -> Tuple[str, int, Decimal]:
    """
    Empty BKS files carry their result in the name:
        '<instance>.<routes>_<distance>.<ext>' -> (instance, routes, distance)
    """
    try:
        inst, rest = file_name.split(".", 1)
        routes_quality, _ = rest.rsplit(".", 1)
        routes, quality = routes_quality.split("_", 1)
        distance = fl(quality)
        if not distance.is_finite():
            raise ValueError(quality)
        return inst.lower(), int(routes), distance
    except (ValueError, InvalidOperation):
        raise ParseError(
            f"can't parse bks file name `{file_name}': expected "
            "<instance>.<routes>_<distance>.<ext>"
        ) from None


def _date_of(entry: FileEntry) -> date:
    try:
        return date.fromisoformat(entry.parent_name)
    except ValueError:
        raise ParseError(
            f"{entry.abspath}: parent directory `{entry.parent_name}' is not a date"
        ) from None


def create_bks(entry: FileEntry, instances: Mapping[str, Instance]) -> Tuple[str, Bks]:
    when = _date_of(entry)
    if entry.size == 0:
        name, routes, distance = parse_bks_file_name(entry.name)
        return name, Bks(routes=routes, distance=distance, date=when)

    sol = load_solution_file(entry.path)
    inst = instances.get(sol.instance_name)
    if inst is None:
        raise NotFoundError(f"No such instance: `{sol.instance_name}'")
    distance = verify(inst, sol)
    return sol.instance_name, Bks(
        routes=len(sol.routes), distance=distance, date=when, solution=sol
    )


def read_bks(instances: Mapping[str, Instance], bks_dir: Optional[str]) -> BksDb:
    """History per instance, oldest first. Broken entries are logged and skipped."""
    db: BksDb = {}
    if not bks_dir:
        return db

    for entry in list_bks_files(bks_dir):
        try:
            name, best = create_bks(entry, instances)
        except AppError as e:
            logger.warning("skipping bks %s: %s", entry.relpath, e)
            continue
        db.setdefault(name, []).append(best)

    for history in db.values():
        history.sort(key=lambda b: b.date)

    logger.info("read %d bks", len(db))
    for name, history in sorted(db.items()):
        latest = history[-1]
        logger.info("%s %-10s : %3d %s", latest.date, name, latest.routes, latest.distance)
    return db
