# -*- coding: utf-8 -*-
"""
Play the tile-merge puzzle.
"""
import logging
import time
from typing import Any

from tilemerge.envs import TileMerge
from tilemerge.utils import WindowBoard, command_for_key

# ##: Period of the engine tick, in milliseconds.
TICK_INTERVAL = 50


class Session:
    """
    Glue between the window and the engine: key presses queue commands, the window timer ticks the engine.
    """

    def __init__(self, envs: TileMerge, window: WindowBoard):
        self.envs = envs
        self.window = window
        self._last_tick = time.monotonic()

    def redraw(self):
        """
        Redraw the game board and report the animations as played.
        """
        self.window.show_image(self.envs.observation)
        self.envs.acknowledge()

    def tick(self):
        """
        Apply queued commands and advance removal timers. Redraw after any command or animation.
        """
        now = time.monotonic()
        had_commands = self.envs.pending_commands > 0
        updates = self.envs.tick(now - self._last_tick)
        self._last_tick = now
        if had_commands or updates:
            self.redraw()

    def key_handler(self, event: Any):
        """
        Handle the keyboard.

        Parameters
        ----------
        event: Any
            event to handle
        """
        if event.key == "escape":
            self.window.close()
            return None

        command = command_for_key(event.key)
        if command is not None:
            self.envs.submit(command)
        return None


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    env = TileMerge()
    window_board = WindowBoard(title="Tile Merge", size=env.size, base_value=env.config.base_value)
    session = Session(env, window_board)

    window_board.register_key_handler(session.key_handler)
    timer = window_board.add_timer(TICK_INTERVAL, session.tick)
    session.redraw()

    # Blocking event loop
    window_board.show(block=True)
