"""YAML loader + schema validation for floor-plan documents.

Provides a single entrypoint to parse a YAML string, run early shape checks
that give friendlier messages, validate against the packaged JSON schema, and
return a canonical dictionary that ``FloorPlan.from_dict`` can consume.

Document shape::

    floor:
      rows: [".#......", ".#..#...", ".#..#...", "....#..."]
    entrance: [0, 0]
    exit: [7, 3]
    articles:
      - {name: Cheese, at: [0, 2]}
    edits:
      - {block: [2, 2]}
      - {free: [1, 1]}
"""

from __future__ import annotations

import json
from importlib import resources
from typing import Any, Dict

import jsonschema
import yaml

RECOGNIZED_KEYS = {"floor", "entrance", "exit", "articles", "edits"}


def _load_schema() -> Dict[str, Any]:
    with (
        resources.files("storeroute.schemas")
        .joinpath("floor.json")
        .open("r", encoding="utf-8")
    ) as f:
        return json.load(f)


def load_floor_yaml(yaml_str: str) -> Dict[str, Any]:
    """Load and validate a floor-plan YAML string.

    Args:
        yaml_str: YAML document text.

    Returns:
        The validated document as a dictionary.

    Raises:
        ValueError: If the document is not a mapping, has unrecognized
            top-level keys, or has obviously malformed sections.
        jsonschema.ValidationError: If the document violates the schema.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")

    extra = set(data.keys()) - RECOGNIZED_KEYS
    if extra:
        raise ValueError(
            f"Unrecognized top-level key(s) in floor plan: {', '.join(sorted(map(str, extra)))}. "
            f"Allowed keys are {sorted(RECOGNIZED_KEYS)}"
        )

    # Early shape checks helpful for better error messages prior to schema validation
    floor_section = data.get("floor")
    if isinstance(floor_section, dict) and isinstance(floor_section.get("rows"), list):
        widths = {len(row) for row in floor_section["rows"] if isinstance(row, str)}
        if len(widths) > 1:
            raise ValueError(
                f"All floor rows must have the same length, got lengths {sorted(widths)}"
            )
    if isinstance(data.get("articles"), list):
        for entry in data["articles"]:
            if not isinstance(entry, dict) or "name" not in entry or "at" not in entry:
                raise ValueError("Each article must be a mapping with 'name' and 'at'")

    jsonschema.validate(data, _load_schema())
    return data
