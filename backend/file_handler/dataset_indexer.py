# file_handler/dataset_indexer.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import List


@dataclass
class FileEntry:
    name: str
    relpath: str
    abspath: str
    size: int

    @classmethod
    def from_path(cls, root: Path, p: Path) -> "FileEntry":
        return cls(
            name=p.name,
            relpath=str(p.relative_to(root)),
            abspath=str(p),
            size=p.stat().st_size if p.exists() else 0,
        )

    @property
    def path(self) -> Path:
        return Path(self.abspath)

    @property
    def parent_name(self) -> str:
        return Path(self.abspath).parent.name


def instance_key(p: str | Path) -> str:
    """Database key of an instance file: 'RC1_4_10.TXT' -> 'rc1_4_10'."""
    return Path(p).stem.lower()


def list_instance_files(root: str | Path) -> List[FileEntry]:
    """Regular files directly under `root`, sorted by name."""
    base = Path(root).resolve()
    return [
        FileEntry.from_path(base, p)
        for p in sorted(base.iterdir(), key=lambda p: p.name.lower())
        if p.is_file() and not p.name.startswith(".")
    ]


def list_bks_files(root: str | Path) -> List[FileEntry]:
    """All regular files below `root`; each sits in a directory named by its date."""
    base = Path(root).resolve()
    return sorted(
        (FileEntry.from_path(base, p) for p in base.rglob("*") if p.is_file()),
        key=lambda f: f.relpath,
    )


def find_instance_file(location: str | Path, name: str) -> Path:
    """
    `location` may be the instance file itself or a directory of instances.
    In a directory, look for `name` first, then for a case-insensitive stem match.
    """
    loc = Path(location)
    if not loc.is_dir():
        return loc
    exact = loc / name
    if exact.is_file():
        return exact
    target = name.lower()
    for p in sorted(loc.iterdir()):
        if p.is_file() and instance_key(p) == target:
            return p
    return exact
