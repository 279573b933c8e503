from __future__ import annotations
from decimal import Decimal
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, computed_field, model_validator

from core.logic.constraints import check_sanity
from core.numeric import dist


class Point(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    x: int
    y: int
    demand: int
    start: int
    due: int
    service: int
    # (pickup, delivery): exactly one slot names the partner point
    pickup_delivery: Optional[Tuple[int, int]] = None

    def dist(self, other: "Point") -> Decimal:
        return dist(self.x, self.y, other.x, other.y)

    def partner(self) -> Optional[int]:
        if self.pickup_delivery is None:
            return None
        pickup, delivery = self.pickup_delivery
        return pickup if pickup != 0 else delivery


class Instance(BaseModel):
    """A VRPTW / PDPTW instance. Points form a dense arena indexed by id, 0 is the depot.

    Construction runs the load-time sanity checks and raises SanityError,
    so an insane Instance never exists.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    vehicles: int
    max_capacity: int
    points: Tuple[Point, ...]

    @computed_field  # type: ignore[misc]
    @property
    def is_pdp(self) -> bool:
        return any(pt.pickup_delivery is not None for pt in self.points)

    @property
    def depot(self) -> Point:
        return self.points[0]

    @model_validator(mode="after")
    def _sanity(self) -> "Instance":
        check_sanity(self)
        return self
