"""Precomputed per-angle trig tables for grid boundary marching.

Angles follow the virtual coordinate system (+X right, +Y up):

            90
            .+y
            .
     -x     .     +x
    180 ........... 0
            .
            .-y
           270

Index ``i`` covers the angle ``(i + 0.5) * 360 / N`` degrees.  The half-step
offset keeps every entry away from 0, 90, 180 and 270 degrees, where tan, cos
or sin would be zero or undefined.
"""
import math
from dataclasses import dataclass


def index_to_radians(index: int, angle_steps: int) -> float:
    """Unoffset angle of *index* in radians (used by movement and fisheye)."""
    return index * (2.0 * math.pi) / angle_steps


@dataclass(frozen=True)
class TrigTables:
    """Six parallel tables of length ``angle_steps + 1``.

    x_step / y_step are the intercept increments for advancing one cell along
    the horizontal / vertical boundary search, already signed for the quadrant
    the angle points into.
    """
    angle_steps: int
    cell_size:   int
    tan:         tuple
    recip_tan:   tuple
    recip_cos:   tuple
    recip_sin:   tuple
    x_step:      tuple
    y_step:      tuple

    @classmethod
    def build(cls, angle_steps: int, cell_size: int) -> "TrigTables":
        half = angle_steps // 2
        quarter = angle_steps // 4
        step = (2.0 * math.pi) / angle_steps

        tan = []
        recip_tan = []
        recip_cos = []
        recip_sin = []
        x_step = []
        y_step = []

        for i in range(angle_steps + 1):
            rad = (i + 0.5) * step
            t = math.tan(rad)
            tan.append(t)
            recip_tan.append(1.0 / t)
            recip_cos.append(1.0 / math.cos(rad))
            recip_sin.append(1.0 / math.sin(rad))

            # Upper half-plane: marching up, so Y intercepts grow
            if i < half:
                y_step.append(abs(t * cell_size))
            else:
                y_step.append(-abs(t * cell_size))

            # Left half-plane: marching left, so X intercepts shrink
            if quarter <= i < 3 * quarter:
                x_step.append(-abs(cell_size / t))
            else:
                x_step.append(abs(cell_size / t))

        return cls(
            angle_steps=angle_steps,
            cell_size=cell_size,
            tan=tuple(tan),
            recip_tan=tuple(recip_tan),
            recip_cos=tuple(recip_cos),
            recip_sin=tuple(recip_sin),
            x_step=tuple(x_step),
            y_step=tuple(y_step),
        )

    def __len__(self) -> int:
        return self.angle_steps + 1

    def facing_right(self, angle: int) -> bool:
        """True if the ray at *angle* points towards +X."""
        quarter = self.angle_steps // 4
        return angle < quarter or angle >= 3 * quarter

    def facing_up(self, angle: int) -> bool:
        """True if the ray at *angle* points towards +Y."""
        return angle < self.angle_steps // 2
