# file_handler/grammar.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Pattern, Tuple

from core.exceptions import ParseError


class Rule(str, Enum):
    # instance files
    INSTANCE_NAME = "instance_name"
    VEHICLE = "vehicle"
    NUMBER_CAPACITY = "number_capacity"
    VEHICLES_CAPACITY = "vehicles_capacity"
    CUSTOMER = "customer"
    CUSTOMER_HEADER = "customer_header"
    ROW = "row"
    # SINTEF solution files
    SOLUTION_NAME = "solution_name"
    AUTHORS = "authors"
    DATE = "date"
    REFERENCE = "reference"
    SOLUTION = "solution"
    ROUTE = "route"


@dataclass(frozen=True)
class Pair:
    """One matched line: the rule it satisfied and its captured payload."""

    rule: Rule
    text: str


class LineCursor:
    """Walks the non-blank lines of a text blob, keeping 1-based line numbers."""

    def __init__(self, text: str):
        self._lines: List[Tuple[int, str]] = [
            (i, ln.rstrip("\r"))
            for i, ln in enumerate(text.split("\n"), start=1)
            if ln.strip()
        ]
        self._pos = 0
        self._last_line = text.count("\n") + 1

    def peek(self) -> Optional[Tuple[int, str]]:
        if self._pos < len(self._lines):
            return self._lines[self._pos]
        return None

    def advance(self) -> Tuple[int, str]:
        item = self._lines[self._pos]
        self._pos += 1
        return item

    def at_end(self) -> bool:
        return self._pos >= len(self._lines)

    def matches(self, pattern: Pattern[str]) -> bool:
        nxt = self.peek()
        return nxt is not None and pattern.fullmatch(nxt[1]) is not None

    def expect(self, pattern: Pattern[str], rule: Rule, group: int = 0) -> Pair:
        nxt = self.peek()
        if nxt is None:
            raise self.error(rule)
        m = pattern.fullmatch(nxt[1])
        if m is None:
            raise self.error(rule)
        self._pos += 1
        return Pair(rule=rule, text=m.group(group) or "")

    def take(self, rule: Rule) -> Pair:
        _, raw = self.advance()
        return Pair(rule=rule, text=raw.strip())

    def error(self, expected: Rule) -> ParseError:
        nxt = self.peek()
        if nxt is None:
            return ParseError(
                f"{self._last_line}:1: expected {expected.value}, found end of input"
            )
        line_no, raw = nxt
        col = len(raw) - len(raw.lstrip()) + 1
        return ParseError(
            f"{line_no}:{col}: expected {expected.value}, found `{raw.strip()}'"
        )
