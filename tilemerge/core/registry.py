# -*- coding: utf-8 -*-
"""
Tile registry: the only owner and writer of tile state.
"""
from collections.abc import Iterator

from tilemerge.core.types import Cell, Phase, Tile, TileId


class TileRegistry:
    """
    Slot map of live tiles keyed by a stable identity.

    Identities come from a counter that never goes backwards, so an id is never handed out twice,
    not even across a reset.
    """

    def __init__(self):
        self._tiles: dict[TileId, Tile] = {}
        self._next_id: TileId = 1

    def __len__(self) -> int:
        return len(self._tiles)

    def __contains__(self, tile_id: TileId) -> bool:
        return tile_id in self._tiles

    def __iter__(self) -> Iterator[Tile]:
        # ##>: Ids are increasing, so insertion order is id order.
        return iter(list(self._tiles.values()))

    def create(self, value: int, cell: Cell, phase: Phase = Phase.IDLE) -> Tile:
        """
        Register a new tile.

        Parameters
        ----------
        value : int
            Tile value.
        cell : Cell
            Cell the tile occupies.
        phase : Phase, optional
            Initial animation phase (default is IDLE).

        Returns
        -------
        Tile
            The registered tile.
        """
        tile = Tile(id=self._next_id, value=value, cell=cell, phase=phase)
        self._tiles[tile.id] = tile
        self._next_id += 1
        return tile

    def get(self, tile_id: TileId) -> Tile:
        """Return the tile with this id, raise ``KeyError`` if it is not alive."""
        try:
            return self._tiles[tile_id]
        except KeyError:
            raise KeyError(f'no live tile with id {tile_id}') from None

    def destroy(self, tile_id: TileId) -> Tile:
        """Remove a tile and return it."""
        tile = self.get(tile_id)
        del self._tiles[tile_id]
        return tile

    def clear(self) -> None:
        """Destroy every tile. The id counter keeps running."""
        self._tiles.clear()

    def placed(self) -> list[Tile]:
        """Tiles that occupy a cell of the board."""
        return [tile for tile in self._tiles.values() if not tile.retiring]

    def retiring(self) -> list[Tile]:
        """Merged-away tiles waiting for removal."""
        return [tile for tile in self._tiles.values() if tile.retiring]
