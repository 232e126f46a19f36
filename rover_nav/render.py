from __future__ import annotations

from typing import List, Optional, Tuple

import pygame

from .grid import Grid
from .rover import RoverState
from .types import Coordinate, Heading, Status


Color = Tuple[int, int, int]

THEME = {
    "bg": (18, 22, 32),
    "grid": (40, 48, 66),
    "obstacle_fill": (45, 52, 70),
    "obstacle_edge": (85, 95, 120),
    "trail": (60, 160, 200),
    "rover_fill": (100, 220, 255),
    "rover_outline": (40, 140, 200),
    "rover_blocked": (255, 90, 90),
    "hud_bg": (28, 34, 48),
    "hud_border": (55, 65, 88),
    "hud_text": (200, 220, 255),
}

# Triangle tip / back corners as fractions of a cell, per heading.
_ROVER_SHAPES = {
    Heading.NORTH: ((0.5, 0.85), (0.2, 0.2), (0.8, 0.2)),
    Heading.EAST: ((0.85, 0.5), (0.2, 0.8), (0.2, 0.2)),
    Heading.SOUTH: ((0.5, 0.15), (0.8, 0.8), (0.2, 0.8)),
    Heading.WEST: ((0.15, 0.5), (0.8, 0.2), (0.8, 0.8)),
}


class PygameRenderer:
    """Top-down view of the grid, obstacles, trail and rover.

    Coordinates:
    - Cell (0, 0) is drawn at the bottom-left of the window.
    - Y axis is flipped so that grid +y is up while screen y increases downward.
    """

    def __init__(
        self,
        grid: Grid,
        window_size: int = 600,
        show_trail: bool = True,
    ) -> None:
        pygame.init()
        pygame.display.set_caption("Rover Navigation")
        self.screen = pygame.display.set_mode((window_size, window_size))
        self.clock = pygame.time.Clock()

        self.grid = grid
        self.window_size = window_size
        self.show_trail = show_trail
        self.trail: List[Coordinate] = []
        self.cell_px = window_size / grid.size

    # ------------------------------------------------------------------
    # Coordinate transforms
    # ------------------------------------------------------------------
    def _cell_to_screen(self, x: float, y: float) -> Tuple[int, int]:
        """Convert fractional grid coordinates to screen pixels."""
        sx = int(x * self.cell_px)
        sy = int(self.window_size - y * self.cell_px)
        return sx, sy

    def _cell_rect(self, x: int, y: int) -> pygame.Rect:
        sx, sy = self._cell_to_screen(x, y + 1)
        size = int(self.cell_px) + 1
        return pygame.Rect(sx, sy, size, size)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _draw_grid(self) -> None:
        for i in range(self.grid.size + 1):
            pygame.draw.line(
                self.screen, THEME["grid"], self._cell_to_screen(i, 0), self._cell_to_screen(i, self.grid.size), 1
            )
            pygame.draw.line(
                self.screen, THEME["grid"], self._cell_to_screen(0, i), self._cell_to_screen(self.grid.size, i), 1
            )

    def draw(self, state: RoverState, step: int = 0, status: Status = Status.SUCCESS) -> None:
        """Render one frame."""
        self.screen.fill(THEME["bg"])
        self._draw_grid()

        for x, y in self.grid.obstacles:
            if not self.grid.in_bounds((x, y)):
                continue
            rect = self._cell_rect(x, y)
            pygame.draw.rect(self.screen, THEME["obstacle_fill"], rect)
            pygame.draw.rect(self.screen, THEME["obstacle_edge"], rect, 2)

        if self.show_trail:
            if not self.trail or self.trail[-1] != state.position:
                self.trail.append(state.position)
            if len(self.trail) >= 2:
                pts = [self._cell_to_screen(x + 0.5, y + 0.5) for x, y in self.trail]
                pygame.draw.lines(self.screen, THEME["trail"], False, pts, 2)

        self._draw_rover(state, blocked=status is not Status.SUCCESS)
        self._draw_hud(f"  step={step}  pos=({state.x},{state.y})  {state.heading.value}  {status.value}  ")
        pygame.display.flip()

    def _draw_rover(self, state: RoverState, blocked: bool) -> None:
        if not self.grid.in_bounds(state.position):
            return
        tri = [self._cell_to_screen(state.x + fx, state.y + fy) for fx, fy in _ROVER_SHAPES[state.heading]]
        fill = THEME["rover_blocked"] if blocked else THEME["rover_fill"]
        pygame.draw.polygon(self.screen, fill, tri)
        pygame.draw.polygon(self.screen, THEME["rover_outline"], tri, 2)

    def _draw_hud(self, text: str) -> None:
        pad = 10
        font = pygame.font.SysFont("monospace", 13)
        surf = font.render(text, True, THEME["hud_text"])
        r = surf.get_rect(topleft=(pad, pad))
        panel = r.inflate(pad, pad)
        pygame.draw.rect(self.screen, THEME["hud_bg"], panel)
        pygame.draw.rect(self.screen, THEME["hud_border"], panel, 1)
        self.screen.blit(surf, (panel.x + 4, panel.y + 4))

    def tick(self, target_fps: int) -> float:
        """Cap frame rate and return achieved FPS."""
        fps = self.clock.get_fps()
        self.clock.tick(target_fps)
        return fps

    def wait_for_close(self, target_fps: int = 30, timeout_s: Optional[float] = None) -> None:
        """Keep the last frame on screen until the window is closed or ESC is pressed."""
        elapsed = 0.0
        while timeout_s is None or elapsed < timeout_s:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    return
            self.clock.tick(target_fps)
            elapsed += 1.0 / target_fps

    def close(self) -> None:
        pygame.quit()
