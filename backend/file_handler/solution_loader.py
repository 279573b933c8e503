# file_handler/solution_loader.py
from __future__ import annotations
from typing import Iterator, List, Tuple
import logging
import re

from core.exceptions import ParseError
from models.solution import Solution
from .grammar import LineCursor, Pair, Rule

logger = logging.getLogger(__name__)

_NAME = re.compile(r"\s*Instance\s+name\s*:(.*)")
_AUTHORS = re.compile(r"\s*Authors\s*:(.*)")
_DATE = re.compile(r"\s*Date\s*:(.*)")
_REFERENCE = re.compile(r"\s*Reference\s*:(.*)")
_SOLUTION = re.compile(r"\s*Solution\s*")
# the label is informative only; routes are identified by their position
_ROUTE = re.compile(r"\s*Route(?:\s*\d+)?\s*:(.*)")
_ID = re.compile(r"[0-9]+")


def tokenize(text: str) -> Iterator[Pair]:
    cur = LineCursor(text)
    yield cur.expect(_NAME, Rule.SOLUTION_NAME, group=1)
    yield cur.expect(_AUTHORS, Rule.AUTHORS, group=1)
    yield cur.expect(_DATE, Rule.DATE, group=1)
    yield cur.expect(_REFERENCE, Rule.REFERENCE, group=1)
    yield cur.expect(_SOLUTION, Rule.SOLUTION)
    while not cur.at_end():
        yield cur.expect(_ROUTE, Rule.ROUTE, group=1)


def normalize_instance_name(raw: str) -> str:
    """'RC 1 _ 4_10' -> 'rc1_4_10'."""
    return "".join(raw.split()).lower()


def _node_id(tok: str) -> int:
    if not _ID.fullmatch(tok):
        return 0
    try:
        return int(tok)
    except ValueError:
        # longer than the interpreter's int conversion limit
        return 0


def parse_route(body: str) -> Tuple[int, ...]:
    # Tokens that are not plain non-negative integers become 0 (the depot),
    # which the verifier then reports as a depot visit mid-route.
    return tuple(_node_id(tok) for tok in body.split())


def parse_solution(text: str) -> Solution:
    """Parse a SINTEF-style solution. Raises ParseError on a malformed structure."""
    instance_name = ""
    routes: List[Tuple[int, ...]] = []
    try:
        for pair in tokenize(text):
            if pair.rule is Rule.SOLUTION_NAME:
                instance_name = normalize_instance_name(pair.text)
            elif pair.rule is Rule.ROUTE:
                routes.append(parse_route(pair.text))
    except ParseError as e:
        raise ParseError(f"solution parsing problem: {e}") from None

    logger.debug("parsed solution for %r with %d routes", instance_name, len(routes))
    return Solution(instance_name=instance_name, routes=tuple(routes))
