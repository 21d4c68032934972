"""Window shell for the raycaster.

Fixed-rate loop: keyboard -> discrete commands -> player update -> render.
Every key press (and key repeat while held) issues one command, so a held key
turns or moves at the repeat rate.
"""
import logging
from typing import Optional

import pygame

from lib.config import console, debug_logger
from lib.perf import perf
from raycaster.defs import RaycasterConfig
from raycaster.player import MOVE_BACKWARD, MOVE_FORWARD, TURN_LEFT, TURN_RIGHT, Player
from raycaster.renderer import Renderer
from raycaster.surface import PygameSurface
from raycaster.tables import TrigTables
from raycaster.world import GridWorld

# key -> command
KEYMAP = {
    pygame.K_a:     TURN_LEFT,
    pygame.K_LEFT:  TURN_LEFT,
    pygame.K_d:     TURN_RIGHT,
    pygame.K_RIGHT: TURN_RIGHT,
    pygame.K_w:     MOVE_FORWARD,
    pygame.K_UP:    MOVE_FORWARD,
    pygame.K_s:     MOVE_BACKWARD,
    pygame.K_DOWN:  MOVE_BACKWARD,
}

# pygame.key.set_repeat(delay_ms, interval_ms)
KEY_REPEAT = (200, 50)


class Game:
    """Top-level game object.  Create once, then call game.run() or game.snapshot()."""

    def __init__(
        self,
        world:  GridWorld,
        config: Optional[RaycasterConfig] = None,
        debug:  bool = False,
    ) -> None:
        self.config = config or RaycasterConfig()
        self.world = world

        perf.stage("startup")
        with perf.timer("build_tables", steps=self.config.angle_steps):
            self.tables = TrigTables.build(self.config.angle_steps, world.cell_size)

        self.player = Player(self.config, world)
        self.renderer = Renderer(self.config, world, self.tables)
        self.target = PygameSurface(self.config.screen_width, self.config.screen_height)
        self.target.fill(self.config.palette.background)

        self._dbg = debug_logger(debug)
        self._pending: list = []
        self.running = False

        # Display objects are created lazily so snapshot() works headless
        self.screen = None
        self.clock = None
        self._hud_font = None

    # ── Window setup ──────────────────────────────────────────────────────────

    def _open_window(self) -> None:
        pygame.init()
        scale = self.config.window_scale
        size = (self.config.screen_width * scale, self.config.screen_height * scale)
        self.screen = pygame.display.set_mode(size)
        pygame.display.set_caption("Raycaster")
        pygame.key.set_repeat(*KEY_REPEAT)
        self.clock = pygame.time.Clock()
        self._hud_font = pygame.font.SysFont("monospace", 14)
        console.print(
            f"[bold]Raycaster[/bold] {self.world.cols}x{self.world.rows} map, "
            f"{self.config.columns} columns, {self.config.fov_degrees:g}° FOV, "
            f"window {size[0]}x{size[1]}"
        )
        console.print("  W/S or Up/Down move, A/D or Left/Right turn, Esc quits")

    # ── Input ─────────────────────────────────────────────────────────────────

    def handle_event(self, event) -> None:
        """Translate one pygame event into a queued command or a quit."""
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.key in KEYMAP:
                self._pending.append(KEYMAP[event.key])

    def apply_pending(self) -> None:
        """Apply queued commands between frames."""
        for command in self._pending:
            self.player.apply(command)
        self._pending.clear()

    # ── Frame ─────────────────────────────────────────────────────────────────

    def render_frame(self) -> list:
        viewer = self.player.viewer()
        with perf.timer("cast_frame", columns=self.config.columns):
            columns = self.renderer.render(viewer, self.target)
        if self._dbg.isEnabledFor(logging.DEBUG):
            mid = columns[len(columns) // 2]
            self._dbg.debug(
                "viewer=(%d, %d) angle=%d centre hit side=%d dist=%.2f",
                viewer.x, viewer.y, viewer.angle, mid.hit.side, mid.hit.distance,
            )
        return columns

    def snapshot(self, path: str) -> str:
        """Render a single frame without opening a window and save it."""
        self.render_frame()
        self.target.save(path)
        console.print(f"  Frame saved: {path}")
        return path

    # ── Main loop ─────────────────────────────────────────────────────────────

    def run(self) -> None:
        """Main loop.  Returns when the user quits."""
        self._open_window()
        perf.stage("play")
        self.running = True

        while self.running:
            self.clock.tick(self.config.tic_rate)

            for event in pygame.event.get():
                self.handle_event(event)
            if not self.running:
                break

            self.apply_pending()
            self.render_frame()

            with perf.timer("present"):
                self.screen.blit(self.target.scaled(self.screen.get_size()), (0, 0))
                self._draw_hud()
                pygame.display.flip()

        perf.finish()
        pygame.quit()

    def _draw_hud(self) -> None:
        """Debug HUD: FPS, position, angle."""
        fps = self.clock.get_fps()
        angle_deg = self.player.angle * self.config.step_degrees
        text = (
            f"FPS: {fps:5.1f}  "
            f"X: {self.player.x:5d}  "
            f"Y: {self.player.y:5d}  "
            f"ANG: {angle_deg:6.2f}"
        )
        surf = self._hud_font.render(text, True, (255, 255, 0))
        # Drop-shadow for legibility
        shadow = self._hud_font.render(text, True, (0, 0, 0))
        self.screen.blit(shadow, (6, 6))
        self.screen.blit(surf, (5, 5))

