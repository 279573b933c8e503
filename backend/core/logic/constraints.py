# core/logic/constraints.py
from __future__ import annotations
from typing import TYPE_CHECKING, List

from core.exceptions import SanityError
from core.numeric import fl, precise, to_str

if TYPE_CHECKING:
    from models.instance import Instance, Point


def check_point_count(inst: "Instance") -> None:
    n = len(inst.points)
    if n < 2:
        raise SanityError(
            "the instance needs at least two points (depot and one client to visit), "
            f"it has {n}"
        )


def check_ids_sequential(inst: "Instance") -> None:
    wrong: List[int] = [i for i, pt in enumerate(inst.points) if pt.id != i]
    if wrong:
        raise SanityError(f"points {wrong} do not have correct ids")


def _check_pdp_pair(inst: "Instance", pt: "Point") -> None:
    if pt.pickup_delivery is None:
        raise SanityError(
            f"point {pt.id} has no pickup and delivery but the instance is pdp"
        )

    p, d = pt.pickup_delivery
    if pt.id == 0:
        return
    if p == 0 and d == 0:
        raise SanityError(
            f"point {pt.id} has pickup and delivery pair (0, 0) but is not the depot"
        )
    if p != 0 and d != 0:
        raise SanityError(
            f"point {pt.id} has nonzero both pickup ({p}) and delivery ({d})"
        )

    other_idx = pt.partner()
    if other_idx < 0 or other_idx >= len(inst.points):
        raise SanityError(
            f"points {pt.id} pdp pair {other_idx} does not refer to any legal point"
        )

    other = inst.points[other_idx]
    if other.pickup_delivery is None:
        raise SanityError(f"point {pt.id} pdp pair {other_idx} is not pdp")

    # a pickup (0, d) must be answered by a delivery (pickup_id, 0) and vice versa
    expected = (pt.id, 0) if p == 0 else (0, pt.id)
    if other.pickup_delivery != expected:
        raise SanityError(
            f"point {pt.id} and {other_idx} are a pdp pair but their pickup and "
            "deliveries do not match"
        )

    if pt.demand + other.demand != 0:
        raise SanityError(
            f"point {pt.id} demands {pt.demand} does not sum to 0 with ther pdp pair "
            f"{other_idx} demands {other.demand}"
        )


def check_demands(inst: "Instance") -> None:
    is_pdp = inst.is_pdp
    for pt in inst.points:
        if pt.demand > inst.max_capacity:
            raise SanityError(
                f"point {pt.id} can not be visited because its demands are greater "
                "than vehicle capacity"
            )
        if pt.demand < 0 and not is_pdp:
            raise SanityError(
                f"point {pt.id} has negative demands and this is not pdp"
            )
        if is_pdp:
            _check_pdp_pair(inst, pt)

    depot = inst.depot
    if is_pdp and depot.pickup_delivery != (0, 0):
        raise SanityError("depots pdp pair is not (0, 0)")
    if depot.demand != 0:
        raise SanityError(f"depots demand is non-zero ({depot.demand})")


@precise
def check_time(inst: "Instance") -> None:
    """Static, route independent reachability: depot -> point -> depot."""
    depot = inst.depot
    for pt in inst.points:
        if pt.start > pt.due:
            raise SanityError(
                f"point {pt.id} can not be visited because the due time ({pt.due}) "
                f"is before start ({pt.start})"
            )

        earliest_arrival = depot.start + depot.dist(pt)
        if earliest_arrival > pt.due:
            raise SanityError(
                f"earliest possible arrival ({to_str(earliest_arrival)}) from depot "
                f"to point {pt.id} is after the points due time {pt.due}"
            )

        earliest_return = max(fl(pt.start), earliest_arrival) + pt.service + pt.dist(depot)
        if earliest_return > depot.due:
            raise SanityError(
                f"earliest possible return to depot ({to_str(earliest_return)}) to "
                f"point {pt.id} is after the depot due time {depot.due}"
            )


def check_sanity(inst: "Instance") -> None:
    """Raise SanityError with the first violated instance invariant."""
    check_point_count(inst)
    check_ids_sequential(inst)
    check_demands(inst)
    check_time(inst)
