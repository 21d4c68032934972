"""Shared constants, configuration and the built-in level for the raycaster."""
import math
from dataclasses import dataclass, field

# Screen dimensions
SCREENWIDTH = 320
SCREENHEIGHT = 200

# World geometry
CELL_SIZE = 64          # world units per cell edge (square cells)
WALL = "1"
EMPTY = "0"

# Angle table resolution: 320 columns * (360 / 60) fields of view
ANGLE_STEPS = 1920      # index 1920 == 360 degrees
FIELDOFVIEW = 60.0      # degrees

# Projection / shading
PROJECTION_SCALE = 15000.0
BOUNDARY_EPSILON = 1    # intercept within this many units of a cell edge gets the boundary tone

# Movement
MOVE_SPEED = 10         # world units per command
TURN_DEGREES = 5.625     # 30 table steps at 1920 steps per turn
MIN_WALL_CLEARANCE = 15

# Shell frame rate (50 ms per frame)
TICRATE = 20

# Which grid line family produced a hit
HIT_VERTICAL = 0        # x = const boundary
HIT_HORIZONTAL = 1      # y = const boundary

# Built-in level, row 0 is north. Virtual Y grows towards row 0.
DEFAULT_MAP = (
    "1111111111111111",
    "1000000000000001",
    "1001111100000001",
    "1001000101010101",
    "1001001100000001",
    "1001000100000001",
    "1000000000000001",
    "1000000000000001",
    "1000000000000001",
    "1001100111111001",
    "1001000000001001",
    "1001110000001001",
    "1001000000001001",
    "1001111111101001",
    "1000000000000001",
    "1111111111111111",
)


@dataclass(frozen=True)
class Palette:
    """RGB tones used for slivers and the fill above/below them."""
    vertical:   tuple = (0, 128, 0)        # green
    horizontal: tuple = (0, 100, 0)        # dark green
    boundary:   tuple = (255, 255, 255)    # cell-edge highlight
    background: tuple = (240, 240, 240)    # form back colour


@dataclass(frozen=True)
class RaycasterConfig:
    """Every tunable the engine and shell read.

    Defaults give a 320x200 view, 60 degree FOV swept by 320 rays, 64-unit
    cells and a 1920-step angle table (0.1875 degrees per step, so exactly one
    table step per screen column).
    """
    screen_width:     int   = SCREENWIDTH
    screen_height:    int   = SCREENHEIGHT
    fov_degrees:      float = FIELDOFVIEW
    columns:          int   = SCREENWIDTH
    cell_size:        int   = CELL_SIZE
    angle_steps:      int   = ANGLE_STEPS
    projection_scale: float = PROJECTION_SCALE
    boundary_epsilon: int   = BOUNDARY_EPSILON
    min_clearance:    int   = MIN_WALL_CLEARANCE
    move_speed:       int   = MOVE_SPEED
    turn_degrees:     float = TURN_DEGREES
    tic_rate:         int   = TICRATE
    window_scale:     int   = 3
    start_x:          int   = 8 * CELL_SIZE + 25
    start_y:          int   = 3 * CELL_SIZE + 25
    start_degrees:    float = 60.0
    palette:          Palette = field(default_factory=Palette)

    def __post_init__(self) -> None:
        for name in ("screen_width", "screen_height", "columns", "cell_size",
                     "angle_steps", "move_speed", "tic_rate", "window_scale"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)!r}")
        if self.projection_scale <= 0:
            raise ValueError(f"projection_scale must be positive, got {self.projection_scale!r}")
        # (i + 0.5) * 360/N hits a multiple of 90 degrees unless N % 4 == 0
        if self.angle_steps % 4:
            raise ValueError(
                f"angle_steps must be a multiple of 4, got {self.angle_steps}"
            )
        if not 0 < self.fov_degrees < 180:
            raise ValueError(f"fov_degrees must be in (0, 180), got {self.fov_degrees!r}")
        # one table step per column
        if not math.isclose(self.columns * 360.0, self.fov_degrees * self.angle_steps):
            raise ValueError(
                f"{self.columns} columns do not cover {self.fov_degrees} degrees "
                f"at {self.angle_steps} steps per turn"
            )
        # one ray per screen column, no undrawn columns
        if self.columns != self.screen_width:
            raise ValueError(
                f"columns ({self.columns}) must equal screen_width ({self.screen_width})"
            )
        if not 0 <= self.min_clearance < self.cell_size / 2:
            raise ValueError(
                f"min_clearance must be in [0, {self.cell_size / 2}), got {self.min_clearance}"
            )
        if self.move_speed >= self.cell_size - self.min_clearance:
            raise ValueError("move_speed must be smaller than one cell minus the clearance")
        if self.boundary_epsilon < 0:
            raise ValueError(f"boundary_epsilon must be >= 0, got {self.boundary_epsilon}")
        if self.turn_steps <= 0:
            raise ValueError(f"turn_degrees {self.turn_degrees} is below one table step")

    # ── Derived angle quantities ──────────────────────────────────────────────

    @property
    def step_degrees(self) -> float:
        """Degrees covered by one angle-table step (0.1875 by default)."""
        return 360.0 / self.angle_steps

    @property
    def half_fov_steps(self) -> int:
        return self.columns // 2

    @property
    def turn_steps(self) -> int:
        return round(self.turn_degrees / self.step_degrees)

    @property
    def start_angle(self) -> int:
        return round(self.start_degrees / self.step_degrees) % self.angle_steps

    def degrees_to_index(self, degrees: float) -> int:
        """Nearest table index for *degrees* (0 = +X, counter-clockwise)."""
        return round((degrees % 360.0) / self.step_degrees) % self.angle_steps
