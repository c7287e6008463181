"""Command-line interface for storeroute."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, List, Optional, Tuple

import jsonschema
import yaml

from storeroute.exceptions import IntegrityError
from storeroute.logging import get_logger, set_global_log_level
from storeroute.model.floor import FloorPlan
from storeroute.render import render_floor

logger = get_logger(__name__)

# Errors that describe bad input rather than a bug; reported without traceback.
_INPUT_ERRORS = (
    IntegrityError,
    ValueError,
    jsonschema.ValidationError,
    yaml.YAMLError,
)


def _format_table(
    headers: List[str],
    rows: List[List[Any]],
    min_width: int = 6,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    all_data = [headers] + [[str(item) for item in row] for row in rows]
    col_widths = []
    for col_idx in range(len(headers)):
        max_width = max(len(str(row[col_idx])) for row in all_data)
        col_widths.append(max(max_width, min_width))

    def format_row(row_data: List[Any]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    for row in all_data[1:]:
        lines.append(format_row(row))
    return "\n".join(lines)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _parse_cell(text: str) -> Tuple[int, int]:
    """Parse an ``X,Y`` command-line value into a coordinate pair."""
    parts = text.split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected X,Y but got '{text}'")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"coordinates must be integers, got '{text}'"
        ) from None


def _load_floor(path: Path) -> FloorPlan:
    yaml_text = path.read_text(encoding="utf-8")
    floor = FloorPlan.from_yaml(yaml_text)
    logger.debug("Floor plan loaded: %r", floor)
    return floor


def _route_floor(
    path: Path,
    block: List[Tuple[int, int]],
    free: List[Tuple[int, int]],
    render: bool = False,
    as_json: bool = False,
    output: Optional[Path] = None,
) -> None:
    """Load a floor plan, apply edits, and print its optimal route.

    Args:
        path: Floor-plan YAML file.
        block: Cells to block before routing.
        free: Cells to free before routing (applied after ``block``).
        render: Whether to print the floor with the route drawn on it.
        as_json: Whether to print the route as JSON instead of a summary.
        output: Optional file to write the JSON route to.
    """
    logger.info(f"Loading floor plan from: {path}")
    _start_time = perf_counter()

    try:
        floor = _load_floor(path)
        for cell in block:
            floor.block(cell)
        for cell in free:
            floor.free(cell)

        route = floor.compute_optimal_route()
    except FileNotFoundError:
        logger.error(f"Floor plan file not found: {path}")
        print(f"❌ ERROR: Floor plan file not found: {path}", file=sys.stderr)
        sys.exit(1)
    except _INPUT_ERRORS as e:
        logger.error(f"Failed to compute route: {type(e).__name__}: {e}")
        print(
            f"❌ ERROR: Failed to compute route: {type(e).__name__}: {e}",
            file=sys.stderr,
        )
        sys.exit(1)

    route_dict = route.to_dict()
    json_str = json.dumps(route_dict, indent=2)

    if render:
        print(render_floor(floor, route), end="")

    if as_json:
        print(json_str)
    else:
        print(f"✅ Route found: {route.cost} steps, {len(route)} cells")
        if route.labels:
            print("   Order: " + " -> ".join(route.labels))

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json_str)
        logger.info(f"Route written to: {output}")

    _elapsed = perf_counter() - _start_time
    logger.info(f"Route computed in {_format_duration(_elapsed)}")


def _inspect_floor(path: Path) -> None:
    """Validate a floor-plan file and show its characteristics.

    Args:
        path: Floor-plan YAML file.
    """
    logger.info(f"Inspecting floor plan from: {path}")

    try:
        floor = _load_floor(path)
    except FileNotFoundError:
        logger.error(f"Floor plan file not found: {path}")
        print(f"❌ ERROR: Floor plan file not found: {path}", file=sys.stderr)
        sys.exit(1)
    except _INPUT_ERRORS as e:
        logger.error(f"Failed to inspect floor plan: {type(e).__name__}: {e}")
        print(
            f"❌ ERROR: Failed to inspect floor plan: {type(e).__name__}: {e}",
            file=sys.stderr,
        )
        sys.exit(1)

    blocked_count = int(floor.to_array().sum())
    print("=" * 60)
    print("STOREROUTE FLOOR INSPECTION")
    print("=" * 60)
    print(f"   Size: {floor.width} x {floor.height} cells ({floor.row_bytes} row bytes)")
    print(f"   Blocked cells: {blocked_count}")
    print(f"   Entrance: {floor.entrance}")
    print(f"   Exit: {floor.exit}")
    print(f"   Articles: {len(floor.articles)}")

    rows = [[label, cell.x, cell.y] for cell, label in floor.articles.items()]
    if rows:
        print()
        print(_format_table(["Article", "X", "Y"], rows))
    print()
    print(render_floor(floor, draw_route=False), end="")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``storeroute`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="storeroute",
        description="Plan shortest shopping routes through store floor plans.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{route,inspect}",
        help="Available commands",
    )

    route_parser = subparsers.add_parser(
        "route", help="Compute the optimal route through a floor plan"
    )
    route_parser.add_argument("floor", type=Path, help="Path to floor-plan YAML")
    route_parser.add_argument(
        "--block",
        type=_parse_cell,
        action="append",
        default=[],
        metavar="X,Y",
        help="Block a cell before routing (repeatable)",
    )
    route_parser.add_argument(
        "--free",
        type=_parse_cell,
        action="append",
        default=[],
        metavar="X,Y",
        help="Free a cell before routing (repeatable, applied after --block)",
    )
    route_parser.add_argument(
        "--render",
        action="store_true",
        help="Print the floor with the route drawn on it",
    )
    route_parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Print the route as JSON",
    )
    route_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write the route as JSON to this file",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Validate a floor plan and show its layout"
    )
    inspect_parser.add_argument("floor", type=Path, help="Path to floor-plan YAML")

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    if args.command == "route":
        _route_floor(
            path=args.floor,
            block=args.block,
            free=args.free,
            render=args.render,
            as_json=args.as_json,
            output=args.output,
        )
    elif args.command == "inspect":
        _inspect_floor(args.floor)


if __name__ == "__main__":
    main()
