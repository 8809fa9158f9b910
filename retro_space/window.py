"""
Arcade window for playing Retro Space
"""

from __future__ import annotations

import logging

import arcade

from . import drawing
from .drawing import Circle, Clear, DrawCommand, Rect, flip_y, rect_lrbt
from .game import GameState, HudSnapshot, RetroSpaceGame

logger = logging.getLogger(__name__)

# Keyboard -> named game keys
KEY_BINDINGS = {
    arcade.key.LEFT: "left",
    arcade.key.A: "left",
    arcade.key.RIGHT: "right",
    arcade.key.D: "right",
    arcade.key.UP: "up",
    arcade.key.W: "up",
    arcade.key.DOWN: "down",
    arcade.key.S: "down",
    arcade.key.SPACE: "fire",
}


def _rgba(color: drawing.Color, alpha: float = 1.0):
    return (color[0], color[1], color[2], int(round(255 * alpha)))


class RetroSpaceWindow(arcade.Window):
    """
    Replays the game's draw list every frame and feeds input back into it.

    The game works in y-down playfield coordinates; arcade's origin is the
    bottom-left corner, so every y goes through ``flip_y`` on the way in and out.
    """

    def __init__(self, game: RetroSpaceGame, title: str = "Retro Space", fps: int = 60):
        super().__init__(int(game.width), int(game.height), title, update_rate=1 / fps)
        self.game = game

        h = self.height
        self.score_text = arcade.Text("SCORE: 0", 12, h - 24, drawing.HUD, 14)
        self.lives_text = arcade.Text("LIVES: 0", 200, h - 24, drawing.HUD, 14)
        self.level_text = arcade.Text("LEVEL: 1", 360, h - 24, drawing.HUD, 14)
        self.banner_text = arcade.Text(
            "", self.width / 2, h / 2, drawing.GREEN, 28, anchor_x="center"
        )
        self.hint_text = arcade.Text(
            "", self.width / 2, h / 2 - 40, drawing.HUD, 14, anchor_x="center"
        )
        game.add_listener(self.on_hud_change)

    # ----------------------------
    # HUD
    # ----------------------------

    def on_hud_change(self, snap: HudSnapshot):
        self.score_text.text = f"SCORE: {snap.score}"
        self.lives_text.text = f"LIVES: {snap.lives}"
        self.level_text.text = f"LEVEL: {snap.level}"

        if snap.state is GameState.MENU:
            self.banner_text.text = "RETRO SPACE"
            self.hint_text.text = "ENTER to start  |  arrows/WASD or mouse to move  |  SPACE/click to fire"
        elif snap.state is GameState.PAUSED:
            self.banner_text.text = "PAUSED"
            self.hint_text.text = "P to resume"
        elif snap.state is GameState.GAME_OVER:
            self.banner_text.text = "GAME OVER"
            self.hint_text.text = f"Final score: {snap.score}  |  ENTER to restart"
        else:
            self.banner_text.text = ""
            self.hint_text.text = ""

    # ----------------------------
    # Frame loop
    # ----------------------------

    def on_update(self, delta_time: float):
        # One tick per refresh; ticks are a no-op unless playing
        self.game.tick()

    def on_draw(self):
        self.clear()
        for command in self.game.draw_list():
            self.draw_command(command)

        self.score_text.draw()
        self.lives_text.draw()
        self.level_text.draw()
        if self.banner_text.text:
            self.banner_text.draw()
            self.hint_text.draw()

    def draw_command(self, command: DrawCommand):
        h = self.height
        if isinstance(command, Clear):
            arcade.draw_lrbt_rectangle_filled(0, command.width, 0, command.height, command.color)
        elif isinstance(command, Circle):
            arcade.draw_circle_filled(command.x, flip_y(command.y, h), command.radius, command.color)
        elif isinstance(command, Rect):
            if command.glow > 0:
                arcade.draw_lrbt_rectangle_filled(
                    *rect_lrbt(command, h, grow=command.glow / 2),
                    _rgba(command.color, 0.25 * command.alpha),
                )
            arcade.draw_lrbt_rectangle_filled(
                *rect_lrbt(command, h), _rgba(command.color, command.alpha)
            )
        else:
            raise TypeError(f"Unknown draw command: {command!r}")

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        state = self.game.state
        if symbol in (arcade.key.ENTER, arcade.key.RETURN):
            if state is GameState.GAME_OVER:
                self.game.restart()
            self.game.start()
        elif symbol in (arcade.key.P, arcade.key.ESCAPE):
            self.game.toggle_pause()
        elif symbol == arcade.key.R:
            self.game.restart()
        elif symbol in KEY_BINDINGS:
            self.game.controls.key_down(KEY_BINDINGS[symbol])

    def on_key_release(self, symbol: int, modifiers: int):
        if symbol in KEY_BINDINGS:
            self.game.controls.key_up(KEY_BINDINGS[symbol])

    def on_mouse_motion(self, x: int, y: int, dx: int, dy: int):
        self.game.controls.move_pointer(x, flip_y(y, self.height))

    def on_mouse_drag(self, x: int, y: int, dx: int, dy: int, buttons: int, modifiers: int):
        self.game.controls.move_pointer(x, flip_y(y, self.height))

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int):
        if button == arcade.MOUSE_BUTTON_LEFT and self.game.state is GameState.PLAYING:
            self.game.controls.press_pointer()

    def on_mouse_release(self, x: int, y: int, button: int, modifiers: int):
        if button == arcade.MOUSE_BUTTON_LEFT:
            self.game.controls.release_pointer()


def play(game: RetroSpaceGame, fps: int = 60):
    """Open a window and run until it is closed"""
    window = RetroSpaceWindow(game, fps=fps)
    logger.info("Window opened %dx%d", window.width, window.height)
    arcade.run()
    return window
