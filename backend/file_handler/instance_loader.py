# file_handler/instance_loader.py
from __future__ import annotations
from typing import Iterator, List, Optional, Tuple
import logging
import re

from core.exceptions import ParseError
from models.instance import Instance, Point
from .grammar import LineCursor, Pair, Rule

logger = logging.getLogger(__name__)

_INT = re.compile(r"[+-]?[0-9]+")
_INT32 = range(-(2**31), 2**31)
_VEHICLE = re.compile(r"\s*VEHICLES?\s*", re.I)
_NUMBER_CAPACITY = re.compile(r"\s*NUMBER\s+CAPACITY\s*", re.I)
_VEHICLES_CAPACITY = re.compile(r"\s*[+-]?[0-9]+\s+[+-]?[0-9]+(?:\s+[+-]?[0-9]+)?\s*")
_CUSTOMER = re.compile(r"\s*CUSTOMER\s*", re.I)
_CUSTOMER_HEADER = re.compile(r"\s*CUST\s*NO\..*", re.I)


def _is_classic(text: str) -> bool:
    return any(_VEHICLE.fullmatch(ln.rstrip("\r")) for ln in text.split("\n"))


def tokenize(text: str) -> Iterator[Pair]:
    """
    Yield the rule stream of an instance file.

    Classic (Solomon / Gehring-Homberger):
        [name] VEHICLE / NUMBER CAPACITY / <vehicles> <capacity> /
        CUSTOMER / CUST NO. ... / rows
    Pickup-delivery (Li-Lim):
        <vehicles> <capacity> [<speed>] / rows
    """
    cur = LineCursor(text)
    if _is_classic(text):
        if not cur.at_end() and not cur.matches(_VEHICLE):
            yield cur.take(Rule.INSTANCE_NAME)
        yield cur.expect(_VEHICLE, Rule.VEHICLE)
        yield cur.expect(_NUMBER_CAPACITY, Rule.NUMBER_CAPACITY)
        yield cur.expect(_VEHICLES_CAPACITY, Rule.VEHICLES_CAPACITY)
        yield cur.expect(_CUSTOMER, Rule.CUSTOMER)
        yield cur.expect(_CUSTOMER_HEADER, Rule.CUSTOMER_HEADER)
    else:
        yield cur.expect(_VEHICLES_CAPACITY, Rule.VEHICLES_CAPACITY)

    if cur.at_end():
        raise cur.error(Rule.ROW)
    while not cur.at_end():
        yield cur.take(Rule.ROW)


def _int32(tok: str) -> Optional[int]:
    if not _INT.fullmatch(tok):
        return None
    try:
        value = int(tok)
    except ValueError:
        # longer than the interpreter's int conversion limit
        return None
    return value if value in _INT32 else None


def _parse_header(line: str) -> Tuple[int, int]:
    values = [_int32(tok) for tok in line.split()[:2]]
    if None in values:
        raise ParseError(f"can't parse vehicles and capacity in line `{line}'")
    return values[0], values[1]


def parse_point(line: str) -> Point:
    """A row is exactly 7 (classic) or 9 (pickup-delivery) 32-bit integers."""
    nums: List[int] = []
    for i, tok in enumerate(line.split()):
        value = _int32(tok)
        if value is None:
            raise ParseError(
                f"can't parse line `{line}': error in trying to parse field {i}: "
                f"`{tok}' can not be parsed"
            )
        nums.append(value)

    if len(nums) not in (7, 9):
        raise ParseError(
            f"expected 7 or 9 integers in line `{line}', have {len(nums)} numbers"
        )

    pid, x, y, demand, start, due, service = nums[:7]
    return Point(
        id=pid,
        x=x,
        y=y,
        demand=demand,
        start=start,
        due=due,
        service=service,
        pickup_delivery=(nums[7], nums[8]) if len(nums) == 9 else None,
    )


def parse_instance(text: str, name: Optional[str] = None) -> Instance:
    """Parse instance text (either dialect) and run the sanity checks.

    Raises ParseError on malformed text and SanityError on an invalid instance.
    """
    parsed_name = ""
    vehicles = capacity = 0
    points: List[Point] = []

    try:
        pairs = list(tokenize(text))
    except ParseError as e:
        raise ParseError(f"instance parsing problem: {e}") from None

    for pair in pairs:
        if pair.rule is Rule.INSTANCE_NAME:
            parsed_name = pair.text
        elif pair.rule is Rule.VEHICLES_CAPACITY:
            vehicles, capacity = _parse_header(pair.text)
        elif pair.rule is Rule.ROW:
            points.append(parse_point(pair.text))

    inst = Instance(
        name=name if name is not None else parsed_name,
        vehicles=vehicles,
        max_capacity=capacity,
        points=tuple(points),
    )
    logger.debug(
        "parsed instance %r: %d points, %d vehicles, capacity %d, pdp=%s",
        inst.name,
        len(inst.points),
        inst.vehicles,
        inst.max_capacity,
        inst.is_pdp,
    )
    return inst
