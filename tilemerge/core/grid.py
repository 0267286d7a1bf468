# -*- coding: utf-8 -*-
"""
Board grid: an N x N array of tile ids kept in step with the tile registry.
"""
from numpy import argwhere, int64, ndarray, unique, zeros

from tilemerge.core.registry import TileRegistry
from tilemerge.core.types import EMPTY, Cell, InvariantViolation, TileId


class BoardGrid:
    """
    Grid of optional tile ids, indexed ``[column, row]``.

    The grid only references tiles, the registry owns them. An empty cell holds ``EMPTY``.
    """

    def __init__(self, size: int):
        self.size = size
        self._cells: ndarray = zeros((size, size), dtype=int64)

    def _check(self, cell: Cell) -> None:
        if not cell.inside(self.size):
            raise InvariantViolation(f'cell {tuple(cell)} is outside a {self.size}x{self.size} board')

    def __getitem__(self, cell: Cell) -> TileId:
        self._check(cell)
        return int(self._cells[cell.column, cell.row])

    @property
    def ids(self) -> ndarray:
        """Copy of the id array."""
        return self._cells.copy()

    @property
    def full(self) -> bool:
        return bool(self._cells.all())

    def place(self, cell: Cell, tile_id: TileId) -> None:
        """Put a tile id into an empty cell."""
        self._check(cell)
        occupant = self._cells[cell.column, cell.row]
        if occupant != EMPTY:
            raise InvariantViolation(f'cell {tuple(cell)} already holds tile {occupant}, cannot place {tile_id}')
        self._cells[cell.column, cell.row] = tile_id

    def vacate(self, cell: Cell) -> TileId:
        """Empty a cell and return the id it held."""
        self._check(cell)
        tile_id = int(self._cells[cell.column, cell.row])
        self._cells[cell.column, cell.row] = EMPTY
        return tile_id

    def clear(self) -> None:
        self._cells[:] = EMPTY

    def empty_cells(self) -> list[Cell]:
        """Empty cells in column-major order."""
        return [Cell(int(column), int(row)) for column, row in argwhere(self._cells == EMPTY)]

    def occupied(self) -> list[tuple[Cell, TileId]]:
        """Occupied cells with their tile ids, in column-major order."""
        return [
            (Cell(int(column), int(row)), int(self._cells[column, row]))
            for column, row in argwhere(self._cells != EMPTY)
        ]


def verify(grid: BoardGrid, registry: TileRegistry) -> None:
    """
    Check that the grid and the registry describe the same board.

    Parameters
    ----------
    grid : BoardGrid
        The board grid.
    registry : TileRegistry
        The tile registry.

    Raises
    ------
    InvariantViolation
        If a cell references a dead or retiring tile, a placed tile is missing from its cell, a tile sits
        outside the board, or an id appears in more than one cell.
    """
    ids = grid.ids
    present = ids[ids != EMPTY]
    values, counts = unique(present, return_counts=True)
    duplicated = values[counts > 1]
    if len(duplicated):
        raise InvariantViolation(f'tile ids {duplicated.tolist()} appear in more than one cell')

    for cell, tile_id in grid.occupied():
        if tile_id not in registry:
            raise InvariantViolation(f'cell {tuple(cell)} references unknown tile {tile_id}')
        tile = registry.get(tile_id)
        if tile.retiring:
            raise InvariantViolation(f'cell {tuple(cell)} references retiring tile {tile_id}')
        if tile.cell != cell:
            raise InvariantViolation(f'tile {tile_id} thinks it is at {tuple(tile.cell)} but sits at {tuple(cell)}')

    for tile in registry:
        if not tile.cell.inside(grid.size):
            raise InvariantViolation(f'tile {tile.id} lies outside the board at {tuple(tile.cell)}')
        if not tile.retiring and grid[tile.cell] != tile.id:
            raise InvariantViolation(f'tile {tile.id} is missing from cell {tuple(tile.cell)}')
