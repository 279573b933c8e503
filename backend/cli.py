# backend/cli.py
from __future__ import annotations
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from config import get_settings, set_bks_dir, set_instances_dir
from core.exceptions import AppError
from core.logging_setup import configure_logging
from file_handler.file_factory import load_pair
from file_handler.sintef_writer import write_solution_text
from models.verification import Verification
from services.verifier import verify


def cmd_check(args: argparse.Namespace) -> int:
    try:
        sol, inst = load_pair(args.solution, args.instances)
        distance = verify(inst, sol)
    except AppError as e:
        print(e, file=sys.stderr)
        return 1

    if args.show:
        print(write_solution_text(sol), end="")
    print(
        Verification(
            instance_name=sol.instance_name, routes=len(sol.routes), distance=distance
        )
    )
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    # the lifespan reads the directories from the environment
    set_instances_dir(args.instances_dir)
    if args.bks_dir:
        set_bks_dir(args.bks_dir)
    uvicorn.run("main:app", host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="vrptw-verifier",
        description="Verify VRPTW / PDPTW solutions in SINTEF format.",
    )
    parser.add_argument("--log-level", default=settings.LOG_LEVEL)
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="verify one solution file")
    check.add_argument("solution", type=Path, help="SINTEF solution file")
    check.add_argument(
        "instances",
        nargs="?",
        type=Path,
        default=Path("."),
        help="instance file, or a directory holding instances by name",
    )
    check.add_argument(
        "--show", action="store_true", help="print the parsed solution as well"
    )
    check.set_defaults(func=cmd_check)

    serve = sub.add_parser("serve", help="run the HTTP verifier")
    serve.add_argument("--instances-dir", type=Path, required=True)
    serve.add_argument("--bks-dir", type=Path, default=None)
    serve.add_argument("--host", default=settings.HOST)
    serve.add_argument("--port", type=int, default=settings.PORT)
    serve.set_defaults(func=cmd_serve)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
