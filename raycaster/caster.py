"""
Grid boundary marching: find the nearest wall along one ray.

Two searches run independently for each ray:

  vertical-boundary search   - walks the x = k*cell grid lines the ray crosses
                               and tests the cell just past each line.
  horizontal-boundary search - same for the y = k*cell grid lines.

Both stop at their first wall.  The nearer of the two hits is the wall the ray
actually sees.  The map's wall border guarantees both searches terminate.

Looking right from P, the first vertical line is the right edge of P's cell:

    xBound = cell + cell * floor(x / cell)
           |
    |¯¯¯¯¯¯¯¯|¯¯¯¯¯¯¯¯|
    |      ↗ |        |
    |  P     |        |
    |________|________|

and the ray crosses it at  yi = tan(angle) * (xBound - x) + y.
"""
from dataclasses import dataclass
from typing import Optional

from raycaster.defs import HIT_HORIZONTAL, HIT_VERTICAL
from raycaster.tables import TrigTables
from raycaster.world import GridWorld


@dataclass(frozen=True)
class RayHit:
    """Result of casting one ray."""
    side:      int      # HIT_VERTICAL or HIT_HORIZONTAL
    distance:  float    # length along the ray from the viewer to the hit
    intercept: float    # yi for vertical hits, xi for horizontal hits
    angle:     int      # table index the ray was cast at

    @property
    def vertical(self) -> bool:
        return self.side == HIT_VERTICAL


def _search_limit(world: GridWorld) -> int:
    # Enough boundaries to cross the whole grid on either axis
    return world.rows + world.cols + 2


def search_vertical(
    world:  GridWorld,
    tables: TrigTables,
    x:      float,
    y:      float,
    angle:  int,
) -> Optional[RayHit]:
    """March x = const boundaries until a wall cell is found."""
    cell = world.cell_size

    if tables.facing_right(angle):
        x_bound = cell + cell * (x // cell)
        x_delta = cell
        next_cell = 0       # cell to the right of the line
    else:
        x_bound = cell * (x // cell)
        x_delta = -cell
        next_cell = -1      # cell to the left of the line

    yi = tables.tan[angle] * (x_bound - x) + y
    y_step = tables.y_step[angle]

    for _ in range(_search_limit(world)):
        cell_x = int((x_bound + next_cell) // cell)
        cell_y = int(yi // cell)
        if world.cell_is_wall(cell_x, cell_y):
            #        hyp   *
            #          *   * opp = yi - y
            #       *      *
            #    * θ       *
            #   ************
            # hyp = opp / sin(θ)
            return RayHit(
                side=HIT_VERTICAL,
                distance=(yi - y) * tables.recip_sin[angle],
                intercept=yi,
                angle=angle,
            )
        yi += y_step
        x_bound += x_delta

    return None


def search_horizontal(
    world:  GridWorld,
    tables: TrigTables,
    x:      float,
    y:      float,
    angle:  int,
) -> Optional[RayHit]:
    """March y = const boundaries until a wall cell is found."""
    cell = world.cell_size

    if tables.facing_up(angle):
        y_bound = cell + cell * (y // cell)
        y_delta = cell
        next_cell = 0       # cell above the line
    else:
        y_bound = cell * (y // cell)
        y_delta = -cell
        next_cell = -1      # cell below the line

    # xi = M^-1 (yi - yp) + xp
    xi = tables.recip_tan[angle] * (y_bound - y) + x
    x_step = tables.x_step[angle]

    for _ in range(_search_limit(world)):
        cell_x = int(xi // cell)
        cell_y = int((y_bound + next_cell) // cell)
        if world.cell_is_wall(cell_x, cell_y):
            # hyp = adj / cos(θ), adj = xi - x
            return RayHit(
                side=HIT_HORIZONTAL,
                distance=(xi - x) * tables.recip_cos[angle],
                intercept=xi,
                angle=angle,
            )
        xi += x_step
        y_bound += y_delta

    return None


def cast_ray(
    world:  GridWorld,
    tables: TrigTables,
    x:      float,
    y:      float,
    angle:  int,
) -> RayHit:
    """Return the nearer of the vertical and horizontal boundary hits.

    The vertical hit wins only when strictly closer; equal distances resolve
    to the horizontal hit.
    """
    angle %= tables.angle_steps

    v_hit = search_vertical(world, tables, x, y, angle)
    h_hit = search_horizontal(world, tables, x, y, angle)

    if v_hit is None and h_hit is None:
        raise RuntimeError(
            f"Ray at angle index {angle} from ({x}, {y}) left the grid without a hit"
        )
    if h_hit is None:
        return v_hit
    if v_hit is None:
        return h_hit
    if v_hit.distance < h_hit.distance:
        return v_hit
    return h_hit
