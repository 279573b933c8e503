# services/db.py
from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Optional
import logging

from core.exceptions import AppError, NotFoundError
from file_handler.dataset_indexer import instance_key, list_instance_files
from file_handler.file_factory import load_instance_file
from models.instance import Instance
from models.solution import Solution
from models.verification import Bks, Verification, VerificationWithComparison
from services.bks import BksDb, compare, read_bks
from services.verifier import verify

logger = logging.getLogger(__name__)

Instances = Dict[str, Instance]


def read_instances(instances_dir: str | Path) -> Instances:
    """Parse every file of the directory; unreadable or insane instances are skipped."""
    db: Instances = {}
    for entry in list_instance_files(instances_dir):
        key = instance_key(entry.name)
        if key in db:
            logger.warning("duplicate instance %s ignored (%s)", key, entry.relpath)
            continue
        try:
            inst = load_instance_file(entry.path)
        except AppError as e:
            logger.warning("%s: %s", entry.abspath, e)
            continue
        db[key] = inst if inst.name else inst.model_copy(update={"name": key})

    logger.info("read %d instances", len(db))
    return db


class Db:
    """Instances and BKS history, built once and read-only afterwards."""

    def __init__(self, instances: Instances, bks: Optional[BksDb] = None):
        self.instances = instances
        self._bks = bks or {}

    @classmethod
    def load(cls, instances_dir: str | Path, bks_dir: Optional[str | Path] = None) -> "Db":
        instances = read_instances(instances_dir)
        bks = read_bks(instances, str(bks_dir) if bks_dir else None)
        return cls(instances, bks)

    @property
    def bks_count(self) -> int:
        return sum(len(h) for h in self._bks.values())

    def instance(self, name: str) -> Instance:
        inst = self.instances.get(name.lower())
        if inst is None:
            raise NotFoundError(f"No such instance: `{name}'")
        return inst

    def bks(self, name: str) -> List[Bks]:
        key = name.lower()
        if key not in self.instances and key not in self._bks:
            raise NotFoundError(f"No such instance: `{name}'")
        return list(self._bks.get(key, []))

    def check(self, sol: Solution) -> VerificationWithComparison:
        inst = self.instance(sol.instance_name)
        history = self.bks(sol.instance_name)
        best = history[-1] if history else None

        distance = verify(inst, sol)
        verification = Verification(
            instance_name=inst.name,
            routes=len(sol.routes),
            distance=distance,
        )
        return VerificationWithComparison(
            verification=verification,
            comparison=compare(verification.routes, distance, best),
            bks=best,
        )
