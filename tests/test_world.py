import pytest

from raycaster.defs import DEFAULT_MAP
from raycaster.world import GridWorld, MapError, load_map, parse_map


def test_default_world_dimensions(default_world) -> None:
    assert default_world.rows == 16
    assert default_world.cols == 16
    assert default_world.width == 16 * 64
    assert default_world.grid == DEFAULT_MAP


def test_virtual_y_is_flipped_against_storage_rows(default_world) -> None:
    # virtual row 3 is storage row 12: "1001000000001001"
    assert default_world.grid[12] == "1001000000001001"
    assert default_world.cell_is_wall(3, 3)
    assert not default_world.cell_is_wall(1, 3)
    assert default_world.cell_is_wall(12, 3)
    assert default_world.is_wall(12, 3)


def test_out_of_range_cells_clamp_to_edge(open_world) -> None:
    assert open_world.clamp_cell(-4, 99) == (0, 15)
    assert open_world.clamp_cell(20, -1) == (15, 0)
    # every edge cell is wall, so clamped lookups report wall
    assert open_world.cell_is_wall(-1, 5)
    assert open_world.cell_is_wall(5, 300)


def test_cell_of_and_point_lookup(open_world) -> None:
    assert open_world.cell_of(544, 224) == (8, 3)
    assert open_world.cell_of(63.9, 64.0) == (0, 1)
    assert not open_world.point_is_wall(544, 224)
    assert open_world.point_is_wall(10, 10)


def test_parse_map_ignores_blank_lines_and_indentation() -> None:
    rows = parse_map("\n  111\n  101\n\n  111  \n")
    assert rows == ("111", "101", "111")


@pytest.mark.parametrize(
    "rows, message",
    [
        ([], "empty"),
        (["111", "10", "111"], "row 1"),
        (["111", "1x1", "111"], "invalid"),
        (["101", "101", "111"], "border"),
        (["111", "100", "111"], "border"),
        (["11", "11"], "3x3"),
    ],
)
def test_invalid_maps_are_rejected_at_load(rows, message) -> None:
    with pytest.raises(MapError, match=message):
        GridWorld.from_rows(rows)


def test_map_error_is_a_value_error() -> None:
    assert issubclass(MapError, ValueError)


def test_load_map_from_file(tmp_path) -> None:
    path = tmp_path / "small.map"
    path.write_text("11111\n10001\n10101\n10001\n11111\n")
    world = load_map(str(path))
    assert world.rows == 5
    assert world.cell_is_wall(2, 2)
    assert not world.cell_is_wall(1, 1)


def test_load_map_missing_file(tmp_path) -> None:
    with pytest.raises(MapError, match="not found"):
        load_map(str(tmp_path / "nope.map"))


def test_bundled_maps_load() -> None:
    from pathlib import Path

    maps = Path(__file__).resolve().parents[1] / "maps"
    assert load_map(str(maps / "original.map")).grid == DEFAULT_MAP
    assert load_map(str(maps / "open.map")).rows == 16


def test_world_is_immutable(open_world) -> None:
    with pytest.raises(AttributeError):
        open_world.grid = ()
