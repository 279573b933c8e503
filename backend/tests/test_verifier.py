# backend/tests/test_verifier.py
import pytest

from core.exceptions import VerificationError
from core.logic.cost_functions import calc_route_distance, calc_total_distance
from models.solution import Solution
from services.verifier import (
    check_basic_sanity,
    check_pdp,
    check_route_load,
    check_route_time,
    verify,
)


def _sol(*routes):
    return Solution(instance_name="ring", routes=routes)


def _error(fn, *args):
    with pytest.raises(VerificationError) as e:
        fn(*args)
    return str(e.value)


def test_feasible_solution_distance(ring):
    assert verify(ring, _sol((1, 2, 3), (4, 5, 6))) == 8


def test_route_distance(ring):
    assert calc_route_distance(ring, (1, 2, 3)) == 4
    assert calc_total_distance(ring, [(1, 2, 3), (4, 5, 6)]) == 8


def test_too_many_vehicles(ring):
    routes = tuple((i,) for i in range(1, 7))
    assert _error(verify, ring, _sol(*routes)) == "more vehicles than allowed (6 > 3)"


# ---------------------------------
# Basic sanity
# ---------------------------------


@pytest.mark.parametrize(
    "routes,message",
    [
        (((1, 2, 0, 3), (4, 5, 6)), "route 1 visits depot at non-terminal position 2"),
        (
            ((1, 2, 3), (4, 5, 60)),
            "node 60 in route 2 at position 2 is not described in the instance",
        ),
        (((1, 2, 3), (4, 5, 7, 6)), "node 7 in route 2 at position 2 is not described in the instance"),
        (((1, 2, 3), (4, 5, 3, 6)), "node 3 visited at least two times (in routes 2 and 1)"),
        (((1, 2, 3, 1), (4, 5, 6)), "node 1 visited at least two times (in routes 1 and 1)"),
        (((1, 2, 3), (4, 6)), "node 5 not visited in any route"),
        (((1, 2, 3), (), (4, 5, 6)), "route 2 is empty"),
    ],
)
def test_basic_sanity_errors(ring, routes, message):
    assert _error(check_basic_sanity, ring, _sol(*routes)) == message


# ---------------------------------
# Load and time
# ---------------------------------


def test_route_over_capacity(ring):
    assert _error(check_route_load, ring, 1, list(range(1, 7))) == (
        "load is greater than max load (12 > 10) at 6 in route 1 at position 5"
    )


def test_late_return_to_depot(ring):
    assert _error(check_route_time, ring, 1, [1, 2, 3, 6, 5, 4]) == (
        "arrived too late (68.00000000000000000000000000000000000000) in route 1 at depot"
    )


def test_late_at_client(ring):
    assert _error(check_route_time, ring, 2, [3, 2, 1]) == (
        "arrived too late (23.00000000000000000000000000000000000000) at 1 in route 2 "
        "at position 2"
    )


def test_load_is_checked_before_time(ring):
    assert _error(verify, ring, _sol((1, 2, 3, 6, 5, 4))) == (
        "load is greater than max load (12 > 10) at 4 in route 1 at position 5"
    )


def test_waiting_for_ready_time(ring):
    late_start = ring.points[3].model_copy(update={"start": 40})
    inst = ring.model_copy(
        update={"points": ring.points[:3] + (late_start,) + ring.points[4:]}
    )
    # service at 3 ends at 50, back at the depot at 51 > 48
    assert _error(check_route_time, inst, 1, [1, 2, 3]) == (
        "arrived too late (51.00000000000000000000000000000000000000) in route 1 at depot"
    )


# ---------------------------------
# Pickup and delivery
# ---------------------------------


def test_pdp_feasible(ring_pdp):
    assert verify(ring_pdp, _sol((1, 2, 3, 4), (5, 6))) == calc_total_distance(
        ring_pdp, [(1, 2, 3, 4), (5, 6)]
    )


def test_pdp_pair_split_over_routes(ring_pdp):
    assert _error(check_pdp, ring_pdp, _sol((1, 2, 3), (4, 5, 6))) == (
        "pickup 3 and delivery 4 are not in the same routes (are in routes 1 and 2)"
    )


def test_pdp_delivery_before_pickup(ring_pdp):
    assert _error(check_pdp, ring_pdp, _sol((1, 2, 3, 4), (6, 5))) == (
        "delivery 6 is before its pickup 5 (are on positions 0 and 1)"
    )


def test_pdp_negative_load(ring_pdp):
    assert _error(check_route_load, ring_pdp, 1, [3, 2, 6, 5, 4, 1]) == (
        "current load is negative at 6 in route 1 at position 2"
    )
    check_route_load(ring_pdp, 1, [3, 6, 5, 4])


def test_pdp_is_checked_before_fleet(ring_pdp):
    assert _error(verify, ring_pdp, _sol((1,), (2,), (3, 4), (5, 6))) == (
        "pickup 1 and delivery 2 are not in the same routes (are in routes 1 and 2)"
    )
