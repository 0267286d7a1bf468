# -*- coding: utf-8 -*-
"""
This module provides the rules of a sliding tile-merge board.

It includes the tile registry and the board grid that references it, move resolution with slide and merge,
random tile spawning, board reset, delayed removal of merged tiles, and move legality queries.
"""

from .despawn import DespawnScheduler
from .gamemove import can_move, illegal_directions, legal_directions
from .grid import BoardGrid, verify
from .registry import TileRegistry
from .resolver import MoveResult, lines, merge_line, resolve
from .spawn import create_tile, reset_board, spawn_if
from .types import ACKNOWLEDGED, EMPTY, Cell, Direction, InvariantViolation, Phase, PhaseUpdate, Tile, TileId

__all__ = [
    "ACKNOWLEDGED",
    "EMPTY",
    "BoardGrid",
    "Cell",
    "DespawnScheduler",
    "Direction",
    "InvariantViolation",
    "MoveResult",
    "Phase",
    "PhaseUpdate",
    "Tile",
    "TileId",
    "TileRegistry",
    "can_move",
    "create_tile",
    "illegal_directions",
    "legal_directions",
    "lines",
    "merge_line",
    "reset_board",
    "resolve",
    "spawn_if",
    "verify",
]
