"""Render surfaces: the single drawing primitive the renderer emits into."""
from typing import List, Protocol, Tuple

import pygame


class RenderSurface(Protocol):
    """Anything that can draw a one-pixel-wide vertical line."""

    def draw_vertical_line(self, x: int, y1: int, y2: int, color) -> None:
        ...


class PygameSurface:
    """
    Draws onto an off-screen ``pygame.Surface`` sized to the view.

    Usage:
        target = PygameSurface(320, 200)
        renderer.render(viewer, target)
        window.blit(pygame.transform.scale(target.surface, window.get_size()), (0, 0))
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.surface = pygame.Surface((width, height))

    def draw_vertical_line(self, x: int, y1: int, y2: int, color) -> None:
        if x < 0 or x >= self.width or y1 > y2:
            return
        y1 = max(0, y1)
        y2 = min(self.height - 1, y2)
        pygame.draw.line(self.surface, color, (x, y1), (x, y2))

    def fill(self, color) -> None:
        self.surface.fill(color)

    def scaled(self, size: Tuple[int, int]) -> pygame.Surface:
        """Nearest-neighbour upscale for presenting in a larger window."""
        return pygame.transform.scale(self.surface, size)

    def save(self, path: str) -> None:
        pygame.image.save(self.surface, path)


class CommandBuffer:
    """Records draw commands instead of painting them.

    Each entry is ``(x, y1, y2, color)`` in emission order.
    """

    def __init__(self) -> None:
        self.commands: List[tuple] = []

    def draw_vertical_line(self, x: int, y1: int, y2: int, color) -> None:
        self.commands.append((x, y1, y2, color))

    def clear(self) -> None:
        self.commands.clear()

    def for_column(self, x: int) -> List[tuple]:
        return [c for c in self.commands if c[0] == x]

    def __len__(self) -> int:
        return len(self.commands)
