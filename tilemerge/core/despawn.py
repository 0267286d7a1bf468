# -*- coding: utf-8 -*-
"""
Delayed removal of merged-away tiles.
"""
import logging
from collections.abc import Collection

from tilemerge.core.registry import TileRegistry
from tilemerge.core.types import TileId

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class DespawnScheduler:
    """
    Count down the removal timer of every retiring tile and destroy it when the timer runs out.

    A merge is resolved instantly, the absorbed tile lingers so a renderer can slide it into its target.
    Retiring tiles are off the grid already, so only the registry is touched here.
    """

    def __init__(self, registry: TileRegistry):
        self._registry = registry

    @property
    def pending(self) -> list[TileId]:
        """Ids of the tiles waiting for removal, oldest first."""
        return [tile.id for tile in self._registry.retiring()]

    def advance(self, elapsed: float, spared: Collection[TileId] = ()) -> list[TileId]:
        """
        Move every removal timer forward.

        Parameters
        ----------
        elapsed : float
            Seconds since the previous call.
        spared : Collection[TileId], optional
            Tiles merged away during ``elapsed``. Their timer starts on the next call.

        Returns
        -------
        list[TileId]
            Ids of the tiles destroyed by this call.
        """
        if elapsed < 0:
            raise ValueError(f'elapsed must be >= 0, got {elapsed}')

        removed = []
        for tile in self._registry.retiring():
            if tile.id in spared:
                continue
            tile.remaining -= elapsed
            if tile.remaining <= 0:
                self._registry.destroy(tile.id)
                removed.append(tile.id)

        if removed:
            _logger.debug('Removed retired tiles %s', removed)
        return removed
