# -*- coding: utf-8 -*-
"""
Python implementation of a sliding tile-merge board.

This module provides the `TileMerge` class, which holds the board state and applies move and reset commands,
and the command types it accepts.
"""

from .commands import Command, CommandQueue, Move, Reset
from .tilemerge import TileMerge

__all__ = ["TileMerge", "Command", "CommandQueue", "Move", "Reset"]
