"""
Arcade front-end for the orbit game
-----------------------------------
OrbitWindow only draws a GameSession. OrbitGameWindow adds the input and
frame-tick side so the game can be played by hand:

    SPACE / mouse click  start, then reverse direction
    R                    restart after game over

Run:
    python -m game.orbit.window
"""

from __future__ import annotations

import math

import arcade

from .entities import GameState
from .session import GameSession
from .utils import TWO_PI


class OrbitWindow(arcade.Window):
    """Arcade window that renders a session without mutating it"""

    def __init__(self, session: GameSession, width: int, height: int,
                 title: str = "Orbit - Arcade", resizable: bool = False):
        # Set before the window exists; pyglet may dispatch on_resize during init
        self.session = session
        super().__init__(width, height, title, resizable=resizable)

        # Colors
        self.BG = (135, 206, 235)
        self.ISLAND_C = (255, 228, 181)
        self.SHORE_C = (255, 165, 0)
        self.TURRET_C = (85, 85, 85)
        self.PATH_C = (255, 182, 193)
        self.COIN_C = (255, 215, 0)
        self.BULLET_C = (85, 85, 85)
        self.SHIP_C = (139, 69, 19)
        self.TRAIL_C = (255, 255, 255)
        self.HUD_C = (30, 30, 30)

        self.background_color = self.BG

    def on_draw(self):
        """Draw the current game state"""
        self.clear()
        cfg = self.session.config

        self._draw_island(cfg.center_x, cfg.center_y, cfg.island_radius)
        self._draw_path(cfg.center_x, cfg.center_y, cfg.orbit_radius)

        for c in self.session.coins:
            if c.collected:
                continue
            arcade.draw_circle_filled(c.x, c.y, cfg.coin_size, self.COIN_C)
            arcade.draw_circle_outline(c.x, c.y, cfg.coin_size, self.TRAIL_C, 2)

        for b in self.session.bullets:
            arcade.draw_circle_filled(b.x, b.y, cfg.bullet_radius, self.BULLET_C)
            # Trail points back towards the turret
            tx = b.x - math.cos(b.angle) * 15
            ty = b.y - math.sin(b.angle) * 15
            arcade.draw_line(b.x, b.y, tx, ty, self.TRAIL_C, 2)

        if self.session.ship is not None:
            self._draw_ship()

        self._draw_hud()

    def _draw_island(self, cx: float, cy: float, radius: float):
        arcade.draw_circle_filled(cx, cy, radius, self.ISLAND_C)
        arcade.draw_circle_filled(cx, cy, radius - 10, self.SHORE_C)
        arcade.draw_circle_filled(cx, cy, 25, self.TURRET_C)
        for i in range(8):
            a = i * TWO_PI / 8
            arcade.draw_line(cx + math.cos(a) * 25, cy + math.sin(a) * 25,
                             cx + math.cos(a) * 35, cy + math.sin(a) * 35,
                             self.TURRET_C, 8)
        arcade.draw_circle_filled(cx, cy, 8, (0, 0, 0))

    def _draw_path(self, cx: float, cy: float, radius: float, segments: int = 120):
        # Dashed circle: draw every other segment
        for i in range(0, segments, 2):
            a0 = i * TWO_PI / segments
            a1 = (i + 1) * TWO_PI / segments
            arcade.draw_line(cx + math.cos(a0) * radius, cy + math.sin(a0) * radius,
                             cx + math.cos(a1) * radius, cy + math.sin(a1) * radius,
                             self.PATH_C, 2)

    def _draw_ship(self):
        s = self.session
        cfg = s.config
        ship = s.ship
        x, y = s.ship_position()
        r = cfg.ship_radius

        # Heading is tangential to the orbit
        heading = ship.angle + (math.pi / 2 if ship.direction > 0 else -math.pi / 2)
        hx, hy = math.cos(heading), math.sin(heading)
        px, py = -hy, hx

        nose = (x + hx * r, y + hy * r)
        left = (x - hx * r * 0.6 + px * r * 0.6, y - hy * r * 0.6 + py * r * 0.6)
        right = (x - hx * r * 0.6 - px * r * 0.6, y - hy * r * 0.6 - py * r * 0.6)
        arcade.draw_triangle_filled(*nose, *left, *right, self.SHIP_C)

        prev_angle = ship.angle - ship.direction * ship.speed * 2
        prev_x = cfg.center_x + math.cos(prev_angle) * cfg.orbit_radius
        prev_y = cfg.center_y + math.sin(prev_angle) * cfg.orbit_radius
        arcade.draw_line(x, y, prev_x, prev_y, self.TRAIL_C, 2)

    def _draw_hud(self):
        s = self.session
        arcade.draw_text(f"Score: {s.score}  Level: {s.level}",
                         12, self.height - 28, self.HUD_C, 14)

        if s.state is GameState.WAITING:
            msg = "Press SPACE to start"
        elif s.is_over:
            msg = f"Game over - final score {s.score}. Press R to restart"
        else:
            return
        arcade.draw_text(msg, self.width / 2, 40, self.HUD_C, 16, anchor_x="center")


class OrbitGameWindow(OrbitWindow):
    """Playable window: forwards keys, clicks, resizes and frame ticks to the session"""

    def __init__(self, width: int = 800, height: int = 600, session: GameSession = None):
        if session is None:
            session = GameSession(width=width, height=height)
        super().__init__(session, width, height, title="Orbit", resizable=True)

    def press_control(self):
        """The single control button: start when waiting, reverse while playing"""
        if self.session.state is GameState.WAITING:
            self.session.start()
        elif self.session.state is GameState.PLAYING:
            self.session.reverse_direction()

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.SPACE:
            self.press_control()
        elif symbol == arcade.key.R:
            self.session.restart()
        elif symbol == arcade.key.ESCAPE:
            self.close()

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.press_control()

    def on_update(self, delta_time: float):
        # One simulation step per frame tick
        if self.session.is_playing:
            self.session.step()

    def on_resize(self, width: int, height: int):
        super().on_resize(width, height)
        self.session.resize(width, height)


def play(width: int = 800, height: int = 600):
    """Open a window and play by hand"""
    OrbitGameWindow(width, height)
    arcade.run()


if __name__ == "__main__":
    play()
