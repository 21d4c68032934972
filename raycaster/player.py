"""Player controller: view angle, position and wall-clearance collision.

Position is kept in integral world units; each move truncates its delta toward
zero, so small components (e.g. the X part of a near-vertical step) are dropped.
"""
import math
from dataclasses import dataclass
from typing import Optional

from raycaster.defs import RaycasterConfig
from raycaster.tables import index_to_radians
from raycaster.world import GridWorld

# Discrete input commands
TURN_LEFT = "turn_left"
TURN_RIGHT = "turn_right"
MOVE_FORWARD = "move_forward"
MOVE_BACKWARD = "move_backward"

COMMANDS = (TURN_LEFT, TURN_RIGHT, MOVE_FORWARD, MOVE_BACKWARD)


@dataclass(frozen=True)
class Viewer:
    """Immutable per-frame snapshot of the player."""
    x:     int
    y:     int
    angle: int


class Player:
    """
    Holds the viewer state and applies turn / move commands.

    Angles are table indices:
      0         = +X (east)
      N / 4     = +Y (north)
      N / 2     = -X (west)
      3 * N / 4 = -Y (south)
    Index N (a full turn) is a valid resting value after turning right from 0.
    """

    def __init__(
        self,
        config: RaycasterConfig,
        world:  GridWorld,
        x:      Optional[int] = None,
        y:      Optional[int] = None,
        angle:  Optional[int] = None,
    ) -> None:
        self.config = config
        self.world = world
        self.x = int(config.start_x if x is None else x)
        self.y = int(config.start_y if y is None else y)
        self.angle = config.start_angle if angle is None else int(angle)

        if not 0 <= self.angle <= config.angle_steps:
            raise ValueError(
                f"angle index {self.angle} outside [0, {config.angle_steps}]"
            )
        if not (0 <= self.x < world.width and 0 <= self.y < world.height):
            raise ValueError(f"start position ({self.x}, {self.y}) is outside the map")
        if world.point_is_wall(self.x, self.y):
            raise ValueError(f"start position ({self.x}, {self.y}) is inside a wall")

    def viewer(self) -> Viewer:
        return Viewer(self.x, self.y, self.angle)

    # ------------------------------------------------------------------
    # Turning
    # ------------------------------------------------------------------

    def turn_left(self) -> None:
        """Counter-clockwise by the configured turn step."""
        self.angle += self.config.turn_steps
        if self.angle >= self.config.angle_steps:
            self.angle = 0

    def turn_right(self) -> None:
        """Clockwise by the configured turn step."""
        self.angle -= self.config.turn_steps
        if self.angle < 0:
            self.angle = self.config.angle_steps

    # ------------------------------------------------------------------
    # Moving
    # ------------------------------------------------------------------

    def move_forward(self) -> None:
        self._move(forwards=True)

    def move_backward(self) -> None:
        self._move(forwards=False)

    def apply(self, command: str) -> None:
        """Apply one discrete input command."""
        if command == TURN_LEFT:
            self.turn_left()
        elif command == TURN_RIGHT:
            self.turn_right()
        elif command == MOVE_FORWARD:
            self.move_forward()
        elif command == MOVE_BACKWARD:
            self.move_backward()
        else:
            raise ValueError(f"Unknown command: {command!r}")

    def _move(self, forwards: bool) -> None:
        rad = index_to_radians(self.angle, self.config.angle_steps)
        dx = math.cos(rad) * self.config.move_speed
        dy = math.sin(rad) * self.config.move_speed
        if not forwards:
            dx = -dx
            dy = -dy

        # Neighbours are looked up from the cell the viewer stood in
        cell_x, cell_y = self.world.cell_of(self.x, self.y)

        self.x += int(dx)
        self.y += int(dy)

        self.x = self._clamp_axis(self.x, dx, cell_x, (cell_x + 1, cell_y), (cell_x - 1, cell_y))
        self.y = self._clamp_axis(self.y, dy, cell_y, (cell_x, cell_y + 1), (cell_x, cell_y - 1))

    def _clamp_axis(
        self,
        pos:        int,
        delta:      float,
        cell:       int,
        ahead_pos:  tuple,
        ahead_neg:  tuple,
    ) -> int:
        """Keep *pos* at least min_clearance away from a wall on one axis.

            cell * size          cell * size + size
            |  clearance |            | clearance |
            |<---------->|  free      |<--------->|
        """
        size = self.world.cell_size
        clearance = self.config.min_clearance
        origin = cell * size

        if delta > 0:
            limit = origin + size - clearance
            if self.world.cell_is_wall(*ahead_pos) and pos > limit:
                return limit
        elif delta < 0:
            limit = origin + clearance
            if self.world.cell_is_wall(*ahead_neg) and pos < limit:
                return limit
        return pos
