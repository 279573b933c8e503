# core/logic/cost_functions.py
from __future__ import annotations
from decimal import Decimal
from typing import TYPE_CHECKING, Sequence

from core.numeric import fl, precise

if TYPE_CHECKING:
    from models.instance import Instance


@precise
def calc_route_distance(inst: "Instance", route: Sequence[int]) -> Decimal:
    """depot -> route[0] -> ... -> route[-1] -> depot, in working precision."""
    pts = inst.points
    depot = inst.depot
    total = depot.dist(pts[route[0]])
    for a, b in zip(route, route[1:]):
        total += pts[a].dist(pts[b])
    return total + pts[route[-1]].dist(depot)


@precise
def calc_total_distance(inst: "Instance", routes: Sequence[Sequence[int]]) -> Decimal:
    total = fl(0)
    for route in routes:
        total += calc_route_distance(inst, route)
    return total
