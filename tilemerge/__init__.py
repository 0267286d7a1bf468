# -*- coding: utf-8 -*-
"""Rule engine of a sliding tile-merge puzzle."""

from tilemerge.config import EngineConfig
from tilemerge.core import Cell, Direction, InvariantViolation, Phase, PhaseUpdate
from tilemerge.envs import Move, Reset, TileMerge

__all__ = ["EngineConfig", "Cell", "Direction", "InvariantViolation", "Phase", "PhaseUpdate", "Move", "Reset", "TileMerge"]
