# -*- coding: utf-8 -*-
"""
Types shared by the board, the tile registry and the move resolver.
"""
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

# ##: Tile identities are positive integers, 0 marks an empty cell on the grid.
TileId = int
EMPTY: TileId = 0


class InvariantViolation(RuntimeError):
    """The board and the tile registry disagree. Raised instead of repairing the state."""


class Cell(NamedTuple):
    """A board coordinate, 0-indexed. Row 0 is the bottom row."""

    column: int
    row: int

    def inside(self, size: int) -> bool:
        """Check whether the cell lies on a board of the given size."""
        return 0 <= self.column < size and 0 <= self.row < size


class Direction(Enum):
    """Move directions, each mapped to a unit vector (delta column, delta row)."""

    UP = (0, 1)
    DOWN = (0, -1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def delta(self) -> tuple[int, int]:
        """Unit vector (delta column, delta row) of the move."""
        return self.value

    @property
    def horizontal(self) -> bool:
        """Check whether the move runs along rows."""
        return self.value[1] == 0


class Phase(str, Enum):
    """
    Presentation state of a tile.

    IDLE: nothing to animate.
    MOVING: the tile slid to a new cell.
    SPAWNING: the tile was just created.
    MERGED: the tile absorbed another tile and doubled its value.
    MERGING_INTO: the tile was absorbed and slides into its target.
    PENDING_REMOVAL: the absorbed tile waits for its removal timer.
    """

    IDLE = 'idle'
    MOVING = 'moving'
    SPAWNING = 'spawning'
    MERGED = 'merged'
    MERGING_INTO = 'merging_into'
    PENDING_REMOVAL = 'pending_removal'


# ##: Transitions applied when a renderer reports it finished an animation.
ACKNOWLEDGED = {
    Phase.IDLE: Phase.IDLE,
    Phase.MOVING: Phase.IDLE,
    Phase.SPAWNING: Phase.IDLE,
    Phase.MERGED: Phase.IDLE,
    Phase.MERGING_INTO: Phase.PENDING_REMOVAL,
    Phase.PENDING_REMOVAL: Phase.PENDING_REMOVAL,
}


@dataclass
class Tile:
    """
    A numbered tile.

    Attributes
    ----------
    id : TileId
        Stable identity, never reused.
    value : int
        Displayed value, only ever doubled by a merge.
    cell : Cell
        Current cell, or the cell it slides into when retiring.
    phase : Phase
        Current animation phase.
    target : TileId | None
        Tile this one merged into, set only while retiring.
    remaining : float | None
        Seconds before removal, set only while retiring.
    """

    id: TileId
    value: int
    cell: Cell
    phase: Phase = Phase.IDLE
    target: TileId | None = None
    remaining: float | None = None

    @property
    def retiring(self) -> bool:
        return self.remaining is not None


class PhaseUpdate(NamedTuple):
    """What a renderer needs to animate one tile."""

    tile_id: TileId
    phase: Phase
    value: int
    cell: Cell
    target: TileId | None = None
    remaining: float | None = None
