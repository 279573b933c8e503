from __future__ import annotations
import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_serializer

from core.numeric import to_str
from models.solution import Solution


class Comparison(str, Enum):
    BETTER = "better"
    EQUAL = "equal"
    WORSE = "worse"


class Verification(BaseModel):
    model_config = ConfigDict(frozen=True)

    instance_name: str
    routes: int
    distance: Decimal

    @field_serializer("distance")
    def _distance(self, v: Decimal) -> str:
        return to_str(v)

    def __str__(self) -> str:
        return f"{self.instance_name} {self.routes} {to_str(self.distance)}"


class Bks(BaseModel):
    """One best-known-solution record for an instance."""

    model_config = ConfigDict(frozen=True)

    routes: int
    distance: Decimal
    date: datetime.date
    solution: Optional[Solution] = None

    @field_serializer("distance")
    def _distance(self, v: Decimal) -> str:
        return to_str(v)

    def __str__(self) -> str:
        return f"{self.date.isoformat()} {self.routes} {to_str(self.distance)}"


class VerificationWithComparison(BaseModel):
    model_config = ConfigDict(frozen=True)

    verification: Verification
    comparison: Comparison
    bks: Optional[Bks] = None

    def __str__(self) -> str:
        best = str(self.bks) if self.bks is not None else "none"
        return f"{self.verification} {self.comparison.value} (bks: {best})"
