# -*- coding: utf-8 -*-
"""
This module provides presentation helpers around the engine.

It includes the reference key bindings that turn key presses into commands, and a `WindowBoard` class
drawing the board with Matplotlib.
"""

from .controls import KEY_BINDINGS, command_for_key
from .windows import WindowBoard

__all__ = ["KEY_BINDINGS", "command_for_key", "WindowBoard"]
