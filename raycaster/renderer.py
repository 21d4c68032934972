"""
Frame renderer: turns the ray fan for one viewer into screen columns.

For a 60 degree FOV over 320 columns the fan runs from view - 30 degrees to
view + 30 degrees, one table step (0.1875 degrees) per column.  Angles grow
counter-clockwise, i.e. to the viewer's left, so ray 0 lands in the rightmost
screen column:

    ray index    319 ...... 160 ...... 0
    screen x       0 ...... 159 ...... 319
    offset        30 ......   0 ...... 30   (degrees from the view centre)
"""
import math
from dataclasses import dataclass
from typing import Iterator, List

from raycaster.caster import RayHit, cast_ray
from raycaster.defs import RaycasterConfig
from raycaster.surface import RenderSurface
from raycaster.tables import TrigTables
from raycaster.world import GridWorld

# Smallest corrected distance projected; a zero-distance wall fills the column
MIN_DISTANCE = 1e-6


@dataclass(frozen=True)
class Column:
    """One wall sliver ready for drawing."""
    x:      int
    top:    int
    bottom: int
    color:  tuple
    hit:    RayHit


# ---------------------------------------------------------------------------
# Projection helpers
# ---------------------------------------------------------------------------

def fisheye_correct(distance: float, relative_angle: float) -> float:
    """Scale a ray length by the cosine of its offset from the view centre."""
    return distance * math.cos(relative_angle)


def projected_height(scale: float, corrected_distance: float) -> float:
    """Sliver height in pixels: inversely proportional to distance."""
    return scale / max(corrected_distance, MIN_DISTANCE)


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------

class Renderer:
    """
    Casts the ray fan and emits wall slivers.

    Usage:
        renderer = Renderer(config, world, tables)
        columns  = renderer.cast_frame(player.viewer())
        renderer.draw(columns, surface)
    """

    def __init__(
        self,
        config: RaycasterConfig,
        world:  GridWorld,
        tables: TrigTables,
    ) -> None:
        if tables.angle_steps != config.angle_steps:
            raise ValueError(
                f"Trig tables have {tables.angle_steps} steps, config expects {config.angle_steps}"
            )
        if tables.cell_size != world.cell_size:
            raise ValueError(
                f"Trig tables were built for cell size {tables.cell_size}, "
                f"world uses {world.cell_size}"
            )
        self.config = config
        self.world = world
        self.tables = tables

        self.width = config.screen_width
        self.height = config.screen_height
        self.columns = config.columns

        # Radians per table step, for the fisheye offset of each column
        self._step_rad = (2.0 * math.pi) / config.angle_steps
        self._center = config.columns // 2

    # ------------------------------------------------------------------
    # Per-column math
    # ------------------------------------------------------------------

    def relative_angle(self, ray_index: int) -> float:
        """Offset (radians) of *ray_index* from the centre column."""
        return abs(self._center - ray_index) * self._step_rad

    def screen_x(self, ray_index: int) -> int:
        return (self.columns - 1) - ray_index

    def project(self, distance: float, ray_index: int) -> tuple:
        """Return ``(top, bottom)`` for a ray of raw length *distance*."""
        corrected = fisheye_correct(distance, self.relative_angle(ray_index))
        height = projected_height(self.config.projection_scale, corrected)

        top = int(self.height / 2 - height / 2)
        if top < 0:
            top = 0
        bottom = int(top + height)
        if bottom >= self.height:
            bottom = self.height - 1
        return top, bottom

    def shade(self, hit: RayHit) -> tuple:
        """Pick the sliver colour: axis tone, or the boundary tone near an edge.

            |¯¯¯¯¯¯¯¯|<- intercept % cell == 0
            |        |
            |________|<- intercept % cell <= epsilon
        """
        palette = self.config.palette
        if int(hit.intercept) % self.world.cell_size <= self.config.boundary_epsilon:
            return palette.boundary
        return palette.vertical if hit.vertical else palette.horizontal

    # ------------------------------------------------------------------
    # Frame
    # ------------------------------------------------------------------

    def fan_start(self, view_angle: int) -> int:
        return (view_angle - self.config.half_fov_steps) % self.config.angle_steps

    def iter_columns(self, viewer) -> Iterator[Column]:
        """Yield one Column per ray, left edge of the fan first.

        The viewer is read once, so abandoning the generator mid-frame is safe.
        """
        x, y = viewer.x, viewer.y
        steps = self.config.angle_steps
        angle = self.fan_start(viewer.angle)

        for ray_index in range(self.columns):
            hit = cast_ray(self.world, self.tables, x, y, angle)
            top, bottom = self.project(hit.distance, ray_index)
            yield Column(
                x=self.screen_x(ray_index),
                top=top,
                bottom=bottom,
                color=self.shade(hit),
                hit=hit,
            )
            angle += 1
            if angle >= steps:
                angle = 0

    def cast_frame(self, viewer) -> List[Column]:
        return list(self.iter_columns(viewer))

    def draw(self, columns, surface: RenderSurface) -> None:
        """Emit background fills and the sliver for every column."""
        background = self.config.palette.background
        last = self.height - 1
        for col in columns:
            if col.top > 0:
                surface.draw_vertical_line(col.x, 0, col.top - 1, background)
            if col.bottom < last:
                surface.draw_vertical_line(col.x, col.bottom + 1, last, background)
            surface.draw_vertical_line(col.x, col.top, col.bottom, col.color)

    def render(self, viewer, surface: RenderSurface) -> List[Column]:
        """Cast and draw one frame; returns the columns for inspection."""
        columns = self.cast_frame(viewer)
        self.draw(columns, surface)
        return columns
