# -*- coding: utf-8 -*-
"""
Move resolution: slide every tile towards a wall, merge equal neighbours and tag animation phases.
"""
import logging
from typing import NamedTuple

from tilemerge.core.grid import BoardGrid
from tilemerge.core.registry import TileRegistry
from tilemerge.core.types import EMPTY, Cell, Direction, InvariantViolation, Phase, Tile, TileId

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class MoveResult(NamedTuple):
    """
    Outcome of a resolved move.

    Attributes
    ----------
    changed : bool
        Whether any tile moved or merged.
    score : int
        Sum of the values produced by merges.
    merges : list[tuple[TileId, TileId]]
        Pairs of (surviving tile, absorbed tile).
    """

    changed: bool
    score: int
    merges: list[tuple[TileId, TileId]]


def lines(size: int, direction: Direction) -> list[list[Cell]]:
    """
    Cut the board into the lines a move travels along.

    Parameters
    ----------
    size : int
        Side of the board.
    direction : Direction
        Move direction.

    Returns
    -------
    list[list[Cell]]
        One list per row (horizontal moves) or column (vertical moves), each ordered from the wall the
        tiles travel towards to the opposite wall.
    """
    towards_origin = sum(direction.delta) < 0
    steps = range(size) if towards_origin else range(size - 1, -1, -1)
    if direction.horizontal:
        return [[Cell(column, row) for column in steps] for row in range(size)]
    return [[Cell(column, row) for row in steps] for column in range(size)]


def _tiles_on(line: list[Cell], grid: BoardGrid, registry: TileRegistry) -> list[Tile]:
    """Tiles sitting on a line, in line order."""
    tiles = []
    for cell in line:
        tile_id = grid[cell]
        if tile_id == EMPTY:
            continue
        if tile_id not in registry:
            raise InvariantViolation(f'cell {tuple(cell)} references unknown tile {tile_id}')
        tiles.append(registry.get(tile_id))
    return tiles


def merge_line(tiles: list[Tile]) -> list[tuple[Tile, Tile | None]]:
    """
    Pair equal neighbours of a packed line.

    Parameters
    ----------
    tiles : list[Tile]
        The tiles of one line, ordered from the far wall.

    Returns
    -------
    list[tuple[Tile, Tile | None]]
        The surviving tiles in order, each with the tile it absorbs (or None).

    Notes
    -----
    - A tile takes part in at most one merge, as survivor or as absorbed tile.
    - Merging starts at the far wall, so ``[2, 2, 2]`` yields ``[4, 2]``.
    """
    result: list[tuple[Tile, Tile | None]] = []
    i = 0
    while i < len(tiles):
        if i + 1 < len(tiles) and tiles[i].value == tiles[i + 1].value:
            result.append((tiles[i], tiles[i + 1]))
            i += 2
        else:
            result.append((tiles[i], None))
            i += 1
    return result


def resolve(grid: BoardGrid, registry: TileRegistry, direction: Direction, despawn_delay: float) -> MoveResult:
    """
    Slide and merge every line of the board in the given direction.

    Parameters
    ----------
    grid : BoardGrid
        The board, updated in place.
    registry : TileRegistry
        The tiles, updated in place.
    direction : Direction
        Move direction.
    despawn_delay : float
        Seconds an absorbed tile is kept for its animation. Zero or less destroys it at once.

    Returns
    -------
    MoveResult
        Whether the board changed, the merge score and the merged pairs.

    Notes
    -----
    - Tiles that change cell are tagged MOVING; survivors of a merge are tagged MERGED and absorbed tiles
      MERGING_INTO, which supersedes MOVING.
    - Absorbed tiles leave the grid immediately and slide to their survivor's cell.
    - Tiles that stay put keep whatever phase the renderer has not consumed yet.
    """
    changed = False
    score = 0
    merges: list[tuple[TileId, TileId]] = []

    for line in lines(grid.size, direction):
        tiles = _tiles_on(line, grid, registry)
        if not tiles:
            continue

        # ##: Lift the line, then put the survivors back packed against the far wall.
        for cell in line:
            grid.vacate(cell)

        for destination, (survivor, absorbed) in zip(line, merge_line(tiles)):
            if survivor.cell != destination:
                survivor.cell = destination
                survivor.phase = Phase.MOVING
                changed = True
            grid.place(destination, survivor.id)

            if absorbed is None:
                continue

            survivor.value *= 2
            survivor.phase = Phase.MERGED
            score += survivor.value
            merges.append((survivor.id, absorbed.id))
            changed = True

            if despawn_delay <= 0:
                registry.destroy(absorbed.id)
            else:
                absorbed.cell = destination
                absorbed.phase = Phase.MERGING_INTO
                absorbed.target = survivor.id
                absorbed.remaining = despawn_delay

    _logger.debug('Resolved %s: changed=%s, merges=%d, score=%d', direction.name, changed, len(merges), score)
    return MoveResult(changed=changed, score=score, merges=merges)
