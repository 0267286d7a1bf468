# -*- coding: utf-8 -*-
"""
Configuration of the tile-merge engine.
"""
from dataclasses import dataclass


@dataclass
class EngineConfig:
    """
    Rules and timings of a tile-merge board.

    Attributes
    ----------
    size : int
        Side of the square grid.
    base_value : int
        Value of every freshly created tile.
    initial_tiles : int
        Number of tiles placed by a reset.
    despawn_delay : float
        Seconds a merged-away tile stays around for its animation. A value of zero or less removes it immediately.
    animate_reset : bool
        Whether tiles placed by a reset start in the spawning phase.
    """

    size: int = 4
    base_value: int = 1
    initial_tiles: int = 2
    despawn_delay: float = 0.2
    animate_reset: bool = False

    def __post_init__(self):
        if self.size < 2:
            raise ValueError(f'size must be >= 2, got {self.size}')
        if self.base_value < 1:
            raise ValueError(f'base_value must be >= 1, got {self.base_value}')
        if not 0 <= self.initial_tiles <= self.size**2:
            raise ValueError(f'initial_tiles must be in [0, {self.size ** 2}], got {self.initial_tiles}')
