"""Tests for floor-plan YAML loading and schema validation."""

import textwrap

import jsonschema
import pytest
import yaml

from storeroute.dsl.loader import RECOGNIZED_KEYS, load_floor_yaml
from storeroute.model.floor import FloorPlan
from storeroute.types.base import Cell

MINIMAL = """
floor:
  rows: ["....", "...."]
entrance: [0, 0]
exit: [3, 1]
"""


def _doc(text: str) -> str:
    return textwrap.dedent(text)


def test_reference_file_loads(store_yaml_path, store_floor):
    floor = FloorPlan.from_yaml(store_yaml_path.read_text())
    assert floor.to_bytes() == store_floor.to_bytes()
    assert dict(floor.articles) == dict(store_floor.articles)
    assert floor.entrance == Cell(0, 0)
    assert floor.exit == Cell(7, 3)


def test_bitmap_form_applies_edits(store_yaml_path):
    floor = FloorPlan.from_yaml(
        (store_yaml_path.parent / "store_1_bitmap.yaml").read_text()
    )
    assert floor.is_blocked((2, 2)) and floor.is_blocked((3, 2))
    assert not floor.is_blocked((1, 1))
    assert len(floor.compute_optimal_route()) == 21


def test_minimal_document_returns_dict():
    data = load_floor_yaml(MINIMAL)
    assert data["entrance"] == [0, 0]
    assert "articles" not in data
    floor = FloorPlan.from_dict(data)
    assert floor.width == 4 and floor.height == 2
    assert len(floor.articles) == 0


def test_custom_blocked_char():
    floor = FloorPlan.from_yaml(
        _doc(
            """
            floor:
              rows: ["oXo", "ooo"]
              blocked_char: X
            entrance: [0, 0]
            exit: [2, 0]
            """
        )
    )
    assert floor.is_blocked((1, 0))
    assert not floor.is_blocked((0, 0))


def test_bitmap_width_trims_padding():
    floor = FloorPlan.from_yaml(
        _doc(
            """
            floor: {bitmap: [0, 0], row_bytes: 1, width: 3}
            entrance: [0, 0]
            exit: [2, 1]
            """
        )
    )
    assert floor.width == 3
    assert floor.is_blocked((3, 0))


@pytest.mark.parametrize("text", ["- a\n- b\n", "just text\n", "42\n"])
def test_non_mapping_document(text):
    with pytest.raises(ValueError, match="dictionary"):
        load_floor_yaml(text)


def test_unrecognized_top_level_key():
    with pytest.raises(ValueError, match="Unrecognized top-level key") as exc_info:
        load_floor_yaml(MINIMAL + "shelves: []\n")
    assert "shelves" in str(exc_info.value)
    for key in RECOGNIZED_KEYS:
        assert key in str(exc_info.value)


def test_rows_of_different_length():
    with pytest.raises(ValueError, match="same length"):
        load_floor_yaml(
            _doc(
                """
                floor:
                  rows: ["....", "..."]
                entrance: [0, 0]
                exit: [2, 1]
                """
            )
        )


def test_article_without_position():
    with pytest.raises(ValueError, match="'name' and 'at'"):
        load_floor_yaml(MINIMAL + "articles:\n  - {name: Milk}\n")


@pytest.mark.parametrize(
    "extra",
    [
        "articles:\n  - {name: Milk, at: [1]}\n",
        "articles:\n  - {name: '', at: [1, 1]}\n",
        "edits:\n  - {block: [1, 1], free: [1, 1]}\n",
        "edits:\n  - {}\n",
        "edits:\n  - {move: [1, 1]}\n",
    ],
)
def test_schema_violations(extra):
    with pytest.raises(jsonschema.ValidationError):
        load_floor_yaml(MINIMAL + extra)


def test_missing_required_section():
    with pytest.raises(jsonschema.ValidationError):
        load_floor_yaml("floor:\n  rows: ['..']\nentrance: [0, 0]\n")


def test_floor_section_must_pick_one_form():
    with pytest.raises(jsonschema.ValidationError):
        load_floor_yaml(
            _doc(
                """
                floor: {rows: [".."], bitmap: [0], row_bytes: 1}
                entrance: [0, 0]
                exit: [1, 0]
                """
            )
        )


def test_bitmap_bytes_out_of_range():
    with pytest.raises(jsonschema.ValidationError):
        load_floor_yaml("floor: {bitmap: [256], row_bytes: 1}\nentrance: [0, 0]\nexit: [1, 0]\n")


def test_invalid_yaml_syntax():
    with pytest.raises(yaml.YAMLError):
        load_floor_yaml("floor: [unclosed\n")


def test_edit_outside_floor_raises_value_error():
    with pytest.raises(ValueError, match="outside"):
        FloorPlan.from_yaml(MINIMAL + "edits:\n  - {block: [9, 9]}\n")


def test_two_articles_on_one_cell_raise():
    with pytest.raises(ValueError, match="assigned to both 'Milk' and 'Eggs'"):
        FloorPlan.from_yaml(
            MINIMAL
            + "articles:\n  - {name: Milk, at: [1, 1]}\n  - {name: Eggs, at: [1, 1]}\n"
        )


def test_repeated_identical_article_is_kept_once():
    floor = FloorPlan.from_yaml(
        MINIMAL + "articles:\n  - {name: Milk, at: [1, 1]}\n  - {name: Milk, at: [1, 1]}\n"
    )
    assert dict(floor.articles) == {Cell(1, 1): "Milk"}
