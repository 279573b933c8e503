# services/verifier.py
from __future__ import annotations
from decimal import Decimal
from typing import Dict, List, Optional, Sequence
import logging

from core.exceptions import VerificationError
from core.logic.cost_functions import calc_route_distance
from core.numeric import fl, precise, to_str
from models.instance import Instance
from models.solution import Solution

logger = logging.getLogger(__name__)


def check_basic_sanity(inst: Instance, sol: Solution) -> None:
    """Every client visited exactly once, ids in range, depot never listed."""
    owner: List[Optional[int]] = [None] * len(inst.points)
    owner[0] = 0

    for route_id, route in enumerate(sol.routes, start=1):
        if not route:
            raise VerificationError(f"route {route_id} is empty")
        for pos, pt in enumerate(route):
            if pt == 0:
                raise VerificationError(
                    f"route {route_id} visits depot at non-terminal position {pos}"
                )
            if pt >= len(owner):
                raise VerificationError(
                    f"node {pt} in route {route_id} at position {pos} is not described "
                    "in the instance"
                )
            if owner[pt] is not None:
                raise VerificationError(
                    f"node {pt} visited at least two times (in routes {route_id} "
                    f"and {owner[pt]})"
                )
            owner[pt] = route_id

    for pt, route_id in enumerate(owner):
        if route_id is None:
            raise VerificationError(f"node {pt} not visited in any route")


def check_pdp(inst: Instance, sol: Solution) -> None:
    """Pickup and delivery share a route, pickup first. Needs check_basic_sanity."""
    route_of: Dict[int, int] = {}
    position: Dict[int, int] = {}
    for route_id, route in enumerate(sol.routes, start=1):
        for pos, pt in enumerate(route):
            route_of[pt] = route_id
            position[pt] = pos

    for pt in inst.points[1:]:
        partner = pt.partner()
        is_delivery = pt.pickup_delivery[0] != 0
        pickup, delivery = (partner, pt.id) if is_delivery else (pt.id, partner)

        if route_of[pickup] != route_of[delivery]:
            raise VerificationError(
                f"pickup {pickup} and delivery {delivery} are not in the same routes "
                f"(are in routes {route_of[pickup]} and {route_of[delivery]})"
            )
        if position[pickup] > position[delivery]:
            raise VerificationError(
                f"delivery {delivery} is before its pickup {pickup} (are on positions "
                f"{position[delivery]} and {position[pickup]})"
            )


def check_fleet_size(inst: Instance, sol: Solution) -> None:
    if len(sol.routes) > inst.vehicles:
        raise VerificationError(
            f"more vehicles than allowed ({len(sol.routes)} > {inst.vehicles})"
        )


def check_route_load(inst: Instance, route_id: int, route: Sequence[int]) -> None:
    load = 0
    for pos, p in enumerate(route):
        pt = inst.points[p]
        load += pt.demand
        if load < 0:
            raise VerificationError(
                f"current load is negative at {pt.id} in route {route_id} at position {pos}"
            )
        if load > inst.max_capacity:
            raise VerificationError(
                f"load is greater than max load ({load} > {inst.max_capacity}) at "
                f"{pt.id} in route {route_id} at position {pos}"
            )


@precise
def check_route_time(inst: Instance, route_id: int, route: Sequence[int]) -> None:
    """Simulate one vehicle: travel, fail if late, wait until start, serve."""
    pts = inst.points
    depot = inst.depot
    time = fl(depot.start + depot.service)
    prev = depot

    for pos, p in enumerate(route):
        pt = pts[p]
        time += prev.dist(pt)
        if time > pt.due:
            raise VerificationError(
                f"arrived too late ({to_str(time)}) at {pt.id} in route {route_id} "
                f"at position {pos}"
            )
        time = max(time, fl(pt.start)) + pt.service
        prev = pt

    time += prev.dist(depot)
    if time > depot.due:
        raise VerificationError(
            f"arrived too late ({to_str(time)}) in route {route_id} at depot"
        )


@precise
def verify(inst: Instance, sol: Solution) -> Decimal:
    """Return the total distance of a feasible solution.

    Checks run fail-fast in a fixed order: basic sanity, pickup/delivery
    pairing (pdp only), fleet size, then load and time per route. The first
    violation is raised as VerificationError.
    """
    try:
        check_basic_sanity(inst, sol)
        if inst.is_pdp:
            check_pdp(inst, sol)
        check_fleet_size(inst, sol)

        total = fl(0)
        for route_id, route in enumerate(sol.routes, start=1):
            check_route_load(inst, route_id, route)
            check_route_time(inst, route_id, route)
            total += calc_route_distance(inst, route)
    except VerificationError as e:
        logger.debug("solution for %r rejected: %s", sol.instance_name, e)
        raise

    return total
