# file_handler/sintef_writer.py
from __future__ import annotations
from datetime import date as Date
from typing import List, Optional

from models.instance import Instance, Point
from models.solution import Solution

_CUSTOMER_HEADER = (
    "CUST NO.  XCOORD.    YCOORD.    DEMAND   READY TIME  DUE DATE   SERVICE TIME"
)


def _point_line(pt: Point) -> str:
    if pt.pickup_delivery is None:
        return (
            f"{pt.id:5d} {pt.x:7d} {pt.y:10d} {pt.demand:10d} "
            f"{pt.start:10d} {pt.due:10d} {pt.service:10d}"
        )
    pickup, delivery = pt.pickup_delivery
    fields = [pt.id, pt.x, pt.y, pt.demand, pt.start, pt.due, pt.service, pickup, delivery]
    return "\t".join(str(v) for v in fields)


def write_instance_text(inst: Instance) -> str:
    """
    Render an instance in the dialect it came from:
      - pdp instances: Li-Lim style, "<vehicles>\t<capacity>\t0" then 9-field rows
      - otherwise: Solomon / Gehring-Homberger style with VEHICLE and CUSTOMER blocks
    """
    lines: List[str] = []
    if inst.is_pdp:
        lines.append(f"{inst.vehicles}\t{inst.max_capacity}\t0")
    else:
        lines += [
            inst.name,
            "",
            "VEHICLE",
            "NUMBER     CAPACITY",
            f"{inst.vehicles:4d}{inst.max_capacity:13d}",
            "",
            "CUSTOMER",
            _CUSTOMER_HEADER,
            "",
        ]
    lines += [_point_line(pt) for pt in inst.points]
    return "\n".join(lines) + "\n"


def write_solution_text(sol: Solution, date: Optional[Date] = None) -> str:
    """SINTEF format; routes are relabelled 1..N in order."""
    stamp = (date or Date.today()).isoformat()
    lines = [
        f"Instance name: {sol.instance_name}",
        "Authors: ",
        f"Date: {stamp}",
        "Reference: ",
        "Solution",
    ]
    for i, route in enumerate(sol.routes, start=1):
        lines.append(f"Route {i}: " + " ".join(str(p) for p in route))
    return "\n".join(lines) + "\n"
