# -*- coding: utf-8 -*-
"""Tile-merge engine: board state transitions driven by move and reset commands."""

import logging
from collections.abc import Collection

from numpy import int64, ndarray, zeros
from numpy.random import default_rng

from tilemerge.config import EngineConfig
from tilemerge.core.despawn import DespawnScheduler
from tilemerge.core.gamemove import legal_directions
from tilemerge.core.grid import BoardGrid, verify
from tilemerge.core.registry import TileRegistry
from tilemerge.core.resolver import MoveResult, resolve
from tilemerge.core.spawn import create_tile, reset_board, spawn_if
from tilemerge.core.types import ACKNOWLEDGED, Cell, Direction, Phase, PhaseUpdate, Tile, TileId
from tilemerge.envs.commands import Command, CommandQueue, Move, Reset

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class TileMerge:
    """
    Tile-merge board engine.

    This class owns the tiles, the grid that references them and the random generator. Commands are either
    applied at once (`step`, `reset`) or queued and applied on the next `tick`. Every call leaves the grid and
    the tiles consistent, a renderer never sees a half-applied command.
    """

    # ##: All Actions.
    ACTIONS = {'left': Direction.LEFT, 'up': Direction.UP, 'right': Direction.RIGHT, 'down': Direction.DOWN}

    def __init__(self, config: EngineConfig | None = None, seed: int | None = None):
        """
        Initialize the board and place the seed tiles.

        Parameters
        ----------
        config : EngineConfig, optional
            Board rules and timings (default is a 4x4 board with base value 1).
        seed : int, optional
            Seed of the random generator, for reproducible games.
        """
        self.config = config if config is not None else EngineConfig()
        self.size = self.config.size

        self._rng = default_rng(seed)
        self._registry = TileRegistry()
        self._grid = BoardGrid(self.size)
        self._despawner = DespawnScheduler(self._registry)
        self._commands = CommandQueue()
        self._score = 0

        self.reset()

    @classmethod
    def from_values(cls, values: ndarray, config: EngineConfig | None = None, seed: int | None = None) -> 'TileMerge':
        """
        Build an engine holding a given position.

        Parameters
        ----------
        values : ndarray
            Square array of tile values indexed ``[column, row]``, 0 for an empty cell.
        config : EngineConfig, optional
            Board rules, its size must match ``values`` (default derives the size from ``values``).
        seed : int, optional
            Seed of the random generator.

        Returns
        -------
        TileMerge
            An engine whose tiles are all idle.
        """
        if config is None:
            config = EngineConfig(size=len(values))
        engine = cls(config=config, seed=seed)
        engine.load(values)
        return engine

    @property
    def observation(self) -> ndarray:
        """
        Get the values on the board.

        Returns
        -------
        ndarray
            Tile values indexed ``[column, row]``, 0 for an empty cell. Retiring tiles are not included.
        """
        values = zeros((self.size, self.size), dtype=int64)
        for tile in self._registry.placed():
            values[tile.cell.column, tile.cell.row] = tile.value
        return values

    @property
    def tiles(self) -> list[Tile]:
        """Tiles occupying a cell, in id order."""
        return self._registry.placed()

    @property
    def score(self) -> int:
        """Sum of the values produced by merges since the last reset."""
        return self._score

    @property
    def pending_commands(self) -> int:
        return len(self._commands)

    def tile(self, tile_id: TileId) -> Tile:
        """Look up a live tile, retiring ones included."""
        return self._registry.get(tile_id)

    def load(self, values: ndarray) -> None:
        """
        Replace the board with the given values.

        Parameters
        ----------
        values : ndarray
            Square array of tile values indexed ``[column, row]``, 0 for an empty cell.

        Raises
        ------
        ValueError
            If the array does not match the board size or holds negative values.
        """
        if getattr(values, 'shape', None) != (self.size, self.size):
            raise ValueError(f'expected a {self.size}x{self.size} array, got shape {getattr(values, "shape", None)}')
        if (values < 0).any():
            raise ValueError('tile values must be positive, 0 marks an empty cell')

        self._registry.clear()
        self._grid.clear()
        self._commands.clear()
        self._score = 0
        for column in range(self.size):
            for row in range(self.size):
                if values[column, row]:
                    create_tile(self._grid, self._registry, Cell(column, row), int(values[column, row]), Phase.IDLE)
        self.check_invariants()

    def reset(self, seed: int | None = None) -> ndarray:
        """
        Destroy every tile and place the seed tiles on distinct random cells.

        Parameters
        ----------
        seed : int, optional
            Re-seed the random generator before placing the tiles.

        Returns
        -------
        ndarray
            The new board values.

        Notes
        -----
        - Retiring tiles are destroyed too, without waiting for their timer.
        - Commands still queued are dropped.
        """
        if seed is not None:
            self._rng = default_rng(seed)

        phase = Phase.SPAWNING if self.config.animate_reset else Phase.IDLE
        seeded = reset_board(
            self._grid, self._registry, self._rng, self.config.initial_tiles, self.config.base_value, phase
        )
        self._commands.clear()
        self._score = 0
        self.check_invariants()

        _logger.info('Board reset with tiles at %s', [tuple(tile.cell) for tile in seeded])
        return self.observation

    def step(self, direction: Direction) -> bool:
        """
        Apply a move at once.

        This method slides and merges the tiles, then spawns one tile in a random empty cell if anything changed.

        Parameters
        ----------
        direction : Direction
            Move direction.

        Returns
        -------
        bool
            Whether the move changed the board.
        """
        return self._apply(direction).changed

    def _apply(self, direction: Direction) -> MoveResult:
        """Resolve a move, spawn if it changed the board and check the invariants."""
        result = resolve(self._grid, self._registry, direction, self.config.despawn_delay)
        self._score += result.score
        spawn_if(result.changed, self._grid, self._registry, self._rng, self.config.base_value)
        self.check_invariants()
        return result

    def advance(self, elapsed: float, spared: Collection[TileId] = ()) -> list[TileId]:
        """
        Move the removal timers of merged-away tiles forward.

        Parameters
        ----------
        elapsed : float
            Seconds since the previous call.
        spared : Collection[TileId], optional
            Tiles merged away during ``elapsed``, their timer starts on the next call.

        Returns
        -------
        list[TileId]
            Ids of the tiles removed.
        """
        removed = self._despawner.advance(elapsed, spared)
        self.check_invariants()
        return removed

    def submit(self, command: Command) -> None:
        """Queue a command for the next tick."""
        self._commands.push(command)

    def move(self, direction: Direction) -> None:
        """Queue a move for the next tick."""
        self.submit(Move(direction))

    def request_reset(self) -> None:
        """Queue a reset for the next tick."""
        self.submit(Reset())

    def tick(self, elapsed: float) -> list[PhaseUpdate]:
        """
        Process the commands received since the previous tick.

        Parameters
        ----------
        elapsed : float
            Seconds since the previous tick.

        Returns
        -------
        list[PhaseUpdate]
            The tiles a renderer has to animate.

        Notes
        -----
        - A queued reset wins, the moves queued in the same tick are dropped.
        - Otherwise the moves are applied in arrival order, each with its own spawn.
        - Removal timers advance after the commands. Tiles merged away by this tick keep their full delay, so
          every absorbed tile is exposed at least once.
        """
        merged_away = set()
        for command in self._commands.drain():
            if isinstance(command, Reset):
                self.reset()
            else:
                merged_away.update(absorbed for _, absorbed in self._apply(command.direction).merges)
        self.advance(elapsed, spared=merged_away)
        return self.animations()

    def animations(self) -> list[PhaseUpdate]:
        """
        Get every tile that is not idle.

        Returns
        -------
        list[PhaseUpdate]
            One entry per tile in id order, merged-away tiles included.
        """
        return [
            PhaseUpdate(
                tile_id=tile.id,
                phase=tile.phase,
                value=tile.value,
                cell=tile.cell,
                target=tile.target,
                remaining=tile.remaining,
            )
            for tile in self._registry
            if tile.phase is not Phase.IDLE
        ]

    def acknowledge(self, tile_id: TileId | None = None) -> None:
        """
        Mark animations as played.

        Moving, spawning and merged tiles go back to idle, merged-away tiles wait for their removal timer.

        Parameters
        ----------
        tile_id : TileId, optional
            Tile whose animation finished (default acknowledges every tile).
        """
        tiles = list(self._registry) if tile_id is None else [self._registry.get(tile_id)]
        for tile in tiles:
            tile.phase = ACKNOWLEDGED[tile.phase]

    def legal_directions(self) -> list[Direction]:
        """Directions that would change the board. The engine itself never ends a game."""
        return legal_directions(self.observation)

    def check_invariants(self) -> None:
        """Raise ``InvariantViolation`` if the grid and the tiles disagree."""
        verify(self._grid, self._registry)

    def render(self) -> None:
        """
        Render the game board. This method prints the board to the console, top row first.
        """
        values = self.observation
        for row in range(self.size - 1, -1, -1):
            print(' \t'.join(map(str, values[:, row].tolist())))
