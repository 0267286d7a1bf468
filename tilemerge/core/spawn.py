# -*- coding: utf-8 -*-
"""
Tile creation: random spawns after a move and the two seed tiles of a reset.
"""
import logging

from numpy.random import Generator

from tilemerge.core.grid import BoardGrid
from tilemerge.core.registry import TileRegistry
from tilemerge.core.types import Cell, Phase, Tile

# ##>: Module logger.
_logger = logging.getLogger(__name__)


def create_tile(grid: BoardGrid, registry: TileRegistry, cell: Cell, value: int, phase: Phase) -> Tile:
    """
    Register a tile and place it on the grid.

    Parameters
    ----------
    grid : BoardGrid
        The board, the cell must be empty.
    registry : TileRegistry
        The tiles.
    cell : Cell
        Where the tile goes.
    value : int
        Tile value.
    phase : Phase
        Initial animation phase.

    Returns
    -------
    Tile
        The new tile.
    """
    tile = registry.create(value=value, cell=cell, phase=phase)
    grid.place(cell, tile.id)
    return tile


def spawn_if(
    changed: bool, grid: BoardGrid, registry: TileRegistry, rng: Generator, value: int, phase: Phase = Phase.SPAWNING
) -> Tile | None:
    """
    Spawn one tile in a uniformly chosen empty cell, only after a move that changed the board.

    Parameters
    ----------
    changed : bool
        Whether the preceding move changed the board.
    grid : BoardGrid
        The board.
    registry : TileRegistry
        The tiles.
    rng : Generator
        Randomness source.
    value : int
        Value of the new tile.
    phase : Phase, optional
        Phase of the new tile (default is SPAWNING).

    Returns
    -------
    Tile | None
        The spawned tile, or None when nothing changed or the board is full.

    Notes
    -----
    A full board is not a game over: a merge may still be possible on the next move.
    """
    if not changed:
        return None

    available_cells = grid.empty_cells()
    if not available_cells:
        _logger.debug('Board is full, no tile spawned')
        return None

    cell = available_cells[int(rng.choice(len(available_cells)))]
    tile = create_tile(grid, registry, cell, value, phase)
    _logger.debug('Spawned tile %d at %s', tile.id, tuple(cell))
    return tile


def reset_board(
    grid: BoardGrid, registry: TileRegistry, rng: Generator, number_tile: int, value: int, phase: Phase
) -> list[Tile]:
    """
    Destroy every tile and seed the board with fresh ones.

    Parameters
    ----------
    grid : BoardGrid
        The board.
    registry : TileRegistry
        The tiles, retiring ones included, are all destroyed without delay.
    rng : Generator
        Randomness source.
    number_tile : int
        Number of tiles to place, on distinct cells drawn from the whole board.
    value : int
        Value of the new tiles.
    phase : Phase
        Phase of the new tiles.

    Returns
    -------
    list[Tile]
        The new tiles.
    """
    registry.clear()
    grid.clear()

    chosen = rng.choice(grid.size * grid.size, size=number_tile, replace=False)
    cells = [Cell(*divmod(int(index), grid.size)) for index in chosen]
    return [create_tile(grid, registry, cell, value, phase) for cell in cells]
