"""Grid world: the static wall map the rays are cast against.

Map text format (one row per line, row 0 is north):

    1111
    1001
    1111

'1' is a wall, '0' is empty.  The outer ring must be wall, otherwise a ray
can march off the grid without ever meeting a wall.
"""
import os
from dataclasses import dataclass

from raycaster.defs import CELL_SIZE, DEFAULT_MAP, EMPTY, WALL


class MapError(ValueError):
    """Raised when a map is malformed or not enclosed by walls."""


# ---------------------------------------------------------------------------
# Parsing / loading
# ---------------------------------------------------------------------------

def parse_map(text: str) -> tuple:
    """Split map text into rows, dropping blank lines and surrounding spaces."""
    rows = tuple(line.strip() for line in text.splitlines() if line.strip())
    _validate(rows)
    return rows


def load_map(path: str, cell_size: int = CELL_SIZE) -> "GridWorld":
    """Read a map file and return a validated GridWorld."""
    if not os.path.exists(path):
        raise MapError(f"Map file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    return GridWorld(parse_map(text), cell_size)


def _validate(rows: tuple) -> None:
    if not rows:
        raise MapError("Map is empty")

    width = len(rows[0])
    for r, row in enumerate(rows):
        if len(row) != width:
            raise MapError(
                f"Map row {r} has {len(row)} cells, expected {width}"
            )
        bad = set(row) - {WALL, EMPTY}
        if bad:
            raise MapError(
                f"Map row {r} contains invalid cells {''.join(sorted(bad))!r}"
            )

    if len(rows) < 3 or width < 3:
        raise MapError(f"Map must be at least 3x3, got {width}x{len(rows)}")

    # Border ring: first/last rows fully wall, first/last column of every row
    for r in (0, len(rows) - 1):
        if EMPTY in rows[r]:
            raise MapError(f"Map border is open in row {r}")
    for r, row in enumerate(rows):
        if row[0] != WALL or row[-1] != WALL:
            raise MapError(f"Map border is open in row {r}")


# ---------------------------------------------------------------------------
# GridWorld
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GridWorld:
    """
    Immutable wall grid.

    Storage is row-major with row 0 at the top.  The virtual coordinate system
    has Y growing upward, so virtual cell ``cell_y`` lives in storage row
    ``(rows - 1) - cell_y``.
    """
    grid:      tuple
    cell_size: int = CELL_SIZE

    def __post_init__(self) -> None:
        # Normalise lists (e.g. from tests) to an immutable tuple of strings
        object.__setattr__(self, "grid", tuple("".join(row) for row in self.grid))
        _validate(self.grid)
        if self.cell_size <= 0:
            raise MapError(f"cell_size must be positive, got {self.cell_size}")

    @classmethod
    def from_rows(cls, rows, cell_size: int = CELL_SIZE) -> "GridWorld":
        return cls(tuple(rows), cell_size)

    @classmethod
    def default(cls, cell_size: int = CELL_SIZE) -> "GridWorld":
        return cls(DEFAULT_MAP, cell_size)

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def cols(self) -> int:
        return len(self.grid[0])

    @property
    def width(self) -> int:
        """World extent along X in world units."""
        return self.cols * self.cell_size

    @property
    def height(self) -> int:
        """World extent along Y in world units."""
        return self.rows * self.cell_size

    # ------------------------------------------------------------------
    # Cell queries
    # ------------------------------------------------------------------

    def is_wall(self, row: int, col: int) -> bool:
        """Storage-coordinate lookup.  Indices must already be in range."""
        return self.grid[row][col] == WALL

    def clamp_cell(self, cell_x: int, cell_y: int) -> tuple:
        """Pull a virtual cell index back onto the nearest edge cell."""
        cell_x = min(max(cell_x, 0), self.cols - 1)
        cell_y = min(max(cell_y, 0), self.rows - 1)
        return cell_x, cell_y

    def cell_is_wall(self, cell_x: int, cell_y: int) -> bool:
        """Virtual-coordinate lookup (Y up) that clamps instead of failing."""
        cell_x, cell_y = self.clamp_cell(cell_x, cell_y)
        return self.is_wall((self.rows - 1) - cell_y, cell_x)

    def cell_of(self, x: float, y: float) -> tuple:
        """Virtual cell containing world point (x, y)."""
        return int(x // self.cell_size), int(y // self.cell_size)

    def point_is_wall(self, x: float, y: float) -> bool:
        return self.cell_is_wall(*self.cell_of(x, y))
