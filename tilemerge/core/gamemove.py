# -*- coding: utf-8 -*-
"""
Move legality queries over a board of values, without touching any tile.
"""

from numpy import ndarray

from tilemerge.core.types import Direction


def _destination_and_source(values: ndarray, direction: Direction) -> tuple[ndarray, ndarray]:
    """
    Split the board into aligned neighbour pairs along the move axis.

    Parameters
    ----------
    values : ndarray
        Board values indexed ``[column, row]``, 0 for an empty cell.
    direction : Direction
        Move direction.

    Returns
    -------
    tuple[ndarray, ndarray]
        The cells a tile would move into and the cells it would come from.
    """
    if direction.horizontal:
        lower, upper = values[:-1, :], values[1:, :]
    else:
        lower, upper = values[:, :-1], values[:, 1:]
    if sum(direction.delta) < 0:
        return lower, upper
    return upper, lower


def can_move(values: ndarray, direction: Direction) -> bool:
    """
    Check if a move in the given direction would change the board.

    Parameters
    ----------
    values : ndarray
        Board values indexed ``[column, row]``.
    direction : Direction
        Move direction.

    Returns
    -------
    bool
        True if a tile can slide into an empty neighbour or merge with an equal one.
    """
    destination, source = _destination_and_source(values, direction)
    can_slide = (destination == 0) & (source != 0)
    can_merge = (destination != 0) & (destination == source)
    return bool(can_slide.any() or can_merge.any())


def legal_directions(values: ndarray) -> list[Direction]:
    """Directions that would change the board."""
    return [direction for direction in Direction if can_move(values, direction)]


def illegal_directions(values: ndarray) -> list[Direction]:
    """Directions that would leave the board untouched."""
    return [direction for direction in Direction if not can_move(values, direction)]
