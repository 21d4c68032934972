import pytest

import raycaster.caster as caster
from raycaster.caster import RayHit, cast_ray, search_horizontal, search_vertical
from raycaster.defs import HIT_HORIZONTAL, HIT_VERTICAL
from raycaster.world import GridWorld

from conftest import OPEN_ROWS

EAST, NORTH, WEST, SOUTH = 0, 480, 960, 1440

# centre of virtual cell (8, 3)
CX, CY = 8 * 64 + 32, 3 * 64 + 32


def test_east_hits_border_as_vertical_boundary(open_world, tables) -> None:
    hit = cast_ray(open_world, tables, CX, CY, EAST)
    assert hit.side == HIT_VERTICAL
    assert hit.vertical
    # (15 - 8) * 64 minus the 32-unit sub-cell offset
    assert hit.distance == pytest.approx(416.0, abs=0.01)
    assert hit.intercept == pytest.approx(CY, abs=1.0)
    assert hit.angle == EAST


def test_north_hits_border_as_horizontal_boundary(open_world, tables) -> None:
    hit = cast_ray(open_world, tables, CX, CY, NORTH)
    assert hit.side == HIT_HORIZONTAL
    assert hit.distance == pytest.approx(15 * 64 - CY, abs=0.01)
    assert hit.intercept == pytest.approx(CX, abs=2.0)


def test_west_and_south_borders(open_world, tables) -> None:
    west = cast_ray(open_world, tables, CX, CY, WEST)
    assert west.side == HIT_VERTICAL
    assert west.distance == pytest.approx(CX - 64, abs=0.01)

    south = cast_ray(open_world, tables, CX, CY, SOUTH)
    assert south.side == HIT_HORIZONTAL
    assert south.distance == pytest.approx(CY - 64, abs=0.01)


def test_interior_wall_stops_the_ray_early(tables) -> None:
    rows = list(OPEN_ROWS)
    # wall at virtual cell (10, 3) -> storage row 12, column 10
    rows[12] = rows[12][:10] + "1" + rows[12][11:]
    world = GridWorld.from_rows(rows)

    hit = cast_ray(world, tables, CX, CY, EAST)
    assert hit.side == HIT_VERTICAL
    assert hit.distance == pytest.approx(10 * 64 - CX, abs=0.01)


def test_both_searches_find_a_hit(open_world, tables) -> None:
    v_hit = search_vertical(open_world, tables, CX, CY, NORTH)
    h_hit = search_horizontal(open_world, tables, CX, CY, NORTH)
    assert v_hit is not None and h_hit is not None
    assert v_hit.side == HIT_VERTICAL
    assert h_hit.side == HIT_HORIZONTAL
    assert h_hit.distance < v_hit.distance


def test_steep_ray_intercept_far_outside_grid_clamps_to_edge(open_world, tables) -> None:
    # Looking almost straight up, the first vertical line is crossed ~20000
    # units above the map; the lookup clamps to the top row instead of failing.
    v_hit = search_vertical(open_world, tables, CX, CY, NORTH)
    assert v_hit.intercept > open_world.height
    assert v_hit.distance > 10000


def test_angle_index_full_turn_matches_zero(open_world, tables) -> None:
    assert cast_ray(open_world, tables, CX, CY, 1920) == cast_ray(open_world, tables, CX, CY, 0)


def test_default_map_pillar_from_start_position(default_world, tables) -> None:
    # Start of the built-in level, looking east along virtual row 3:
    # storage row 12 has a wall at column 12.
    hit = cast_ray(default_world, tables, 8 * 64 + 25, 3 * 64 + 25, EAST)
    assert hit.side == HIT_VERTICAL
    assert hit.distance == pytest.approx(12 * 64 - (8 * 64 + 25), abs=0.01)


def _fixed(hit):
    return lambda *args: hit


def test_equal_distances_resolve_to_horizontal(monkeypatch, open_world, tables) -> None:
    v = RayHit(HIT_VERTICAL, 100.0, 10.0, 5)
    h = RayHit(HIT_HORIZONTAL, 100.0, 20.0, 5)
    monkeypatch.setattr(caster, "search_vertical", _fixed(v))
    monkeypatch.setattr(caster, "search_horizontal", _fixed(h))
    assert cast_ray(open_world, tables, CX, CY, 5) is h


def test_strictly_nearer_vertical_wins(monkeypatch, open_world, tables) -> None:
    v = RayHit(HIT_VERTICAL, 99.5, 10.0, 5)
    h = RayHit(HIT_HORIZONTAL, 100.0, 20.0, 5)
    monkeypatch.setattr(caster, "search_vertical", _fixed(v))
    monkeypatch.setattr(caster, "search_horizontal", _fixed(h))
    assert cast_ray(open_world, tables, CX, CY, 5) is v


def test_single_missing_search_uses_the_other(monkeypatch, open_world, tables) -> None:
    h = RayHit(HIT_HORIZONTAL, 100.0, 20.0, 5)
    monkeypatch.setattr(caster, "search_vertical", _fixed(None))
    monkeypatch.setattr(caster, "search_horizontal", _fixed(h))
    assert cast_ray(open_world, tables, CX, CY, 5) is h


def test_no_hit_on_either_axis_raises(monkeypatch, open_world, tables) -> None:
    monkeypatch.setattr(caster, "search_vertical", _fixed(None))
    monkeypatch.setattr(caster, "search_horizontal", _fixed(None))
    with pytest.raises(RuntimeError, match="left the grid"):
        cast_ray(open_world, tables, CX, CY, 5)
