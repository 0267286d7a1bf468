"""
Comprehensive tests for the tile-merge engine.

Tests cover the engine interface, command queueing and tick ordering, determinism, phase exposure and
acknowledgement, delayed removal and invariant checks.
"""

import io
from contextlib import redirect_stdout
from unittest import TestCase, main

import numpy as np

from tilemerge.config import EngineConfig
from tilemerge.core import Cell, Direction, InvariantViolation, Phase
from tilemerge.envs import Move, Reset, TileMerge


def bottom_row(cells: list[int], size: int = 4) -> np.ndarray:
    """A board whose only tiles sit on the bottom row."""
    board = np.zeros((size, size), dtype=np.int64)
    board[:, 0] = cells
    return board


class TestEngineInterface(TestCase):
    """Test TileMerge API and state management."""

    def setUp(self):
        """Initialize a fresh engine before each test."""
        self.env = TileMerge(seed=42)

    def test_initial_board(self):
        """A new engine holds two idle base tiles on distinct cells."""
        obs = self.env.observation

        self.assertEqual(obs.shape, (4, 4))
        self.assertEqual(np.count_nonzero(obs), 2)
        self.assertTrue(np.all(obs[obs != 0] == 1))
        self.assertEqual(len({tile.cell for tile in self.env.tiles}), 2)
        self.assertEqual(self.env.animations(), [])
        self.assertEqual(self.env.score, 0)

    def test_animated_reset(self):
        """With animate_reset the seed tiles are exposed as spawning."""
        env = TileMerge(EngineConfig(animate_reset=True), seed=1)
        phases = [update.phase for update in env.animations()]

        self.assertEqual(phases, [Phase.SPAWNING, Phase.SPAWNING])

    def test_parametric_size(self):
        """The board size comes from the configuration."""
        env = TileMerge(EngineConfig(size=6, base_value=2, initial_tiles=3), seed=0)
        obs = env.observation

        self.assertEqual(obs.shape, (6, 6))
        self.assertEqual(np.count_nonzero(obs), 3)
        self.assertTrue(np.all(obs[obs != 0] == 2))

    def test_invalid_config(self):
        """Bad configuration values are rejected."""
        with self.assertRaises(ValueError):
            EngineConfig(size=1)
        with self.assertRaises(ValueError):
            EngineConfig(base_value=0)
        with self.assertRaises(ValueError):
            EngineConfig(size=2, initial_tiles=5)

    def test_from_values(self):
        """An engine can start from a given position."""
        env = TileMerge.from_values(bottom_row([2, 0, 4, 0]))

        np.testing.assert_array_equal(env.observation, bottom_row([2, 0, 4, 0]))
        self.assertTrue(all(tile.phase is Phase.IDLE for tile in env.tiles))

    def test_from_values_rejects_bad_input(self):
        """Wrong shapes and negative values are rejected."""
        with self.assertRaises(ValueError):
            TileMerge.from_values(np.zeros((4, 4), dtype=np.int64), config=EngineConfig(size=5))
        with self.assertRaises(ValueError):
            TileMerge.from_values(bottom_row([-1, 0, 0, 0]))

    def test_render(self):
        """Render prints the top row first."""
        env = TileMerge.from_values(bottom_row([1, 2, 0, 4]))
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            env.render()
        lines = buffer.getvalue().splitlines()

        self.assertEqual(len(lines), 4)
        self.assertEqual(lines[-1].split(), ['1', '2', '0', '4'])
        self.assertEqual(lines[0].split(), ['0', '0', '0', '0'])


class TestStep(TestCase):
    """Test synchronous moves."""

    def test_merge_and_spawn(self):
        """[2, _, _, 2] left merges into a 4 and spawns one base tile elsewhere."""
        env = TileMerge.from_values(bottom_row([2, 0, 0, 2]), seed=5)
        changed = env.step(Direction.LEFT)
        obs = env.observation

        self.assertTrue(changed)
        self.assertEqual(obs[0, 0], 4)
        self.assertEqual(np.count_nonzero(obs), 2)
        self.assertEqual(obs.sum(), 4 + 1)
        self.assertEqual(env.score, 4)

        spawned = [update for update in env.animations() if update.phase is Phase.SPAWNING]
        self.assertEqual(len(spawned), 1)
        self.assertEqual(spawned[0].value, 1)
        self.assertNotEqual(spawned[0].cell, Cell(0, 0))

    def test_no_change_no_spawn(self):
        """A move that changes nothing spawns nothing."""
        board = bottom_row([2, 4, 2, 4])
        env = TileMerge.from_values(board, seed=5)

        self.assertFalse(env.step(Direction.LEFT))
        np.testing.assert_array_equal(env.observation, board)
        self.assertEqual(env.animations(), [])

    def test_full_board_without_spawn_room(self):
        """A merge on a full board leaves room for exactly one spawn."""
        board = np.arange(1, 17, dtype=np.int64).reshape(4, 4) * 4
        board[0, 0] = board[1, 0] = 2
        env = TileMerge.from_values(board, seed=5)

        self.assertTrue(env.step(Direction.LEFT))
        self.assertTrue(np.all(env.observation != 0))

    def test_score_accumulates(self):
        """Score sums the values produced by merges."""
        env = TileMerge.from_values(bottom_row([2, 2, 4, 4]), seed=5)
        env.step(Direction.LEFT)

        self.assertEqual(env.score, 4 + 8)

    def test_legal_directions(self):
        """Legal directions are reported without ending the game."""
        board = np.zeros((4, 4), dtype=np.int64)
        board[0, :] = [2, 4, 8, 16]
        env = TileMerge.from_values(board)

        self.assertEqual(env.legal_directions(), [Direction.RIGHT])


class TestTick(TestCase):
    """Test queued commands."""

    def test_moves_apply_in_order(self):
        """Queued moves give the same board as the same moves applied at once."""
        queued, direct = TileMerge(seed=9), TileMerge(seed=9)
        sequence = [Direction.LEFT, Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT]

        for direction in sequence:
            queued.move(direction)
        self.assertEqual(queued.pending_commands, len(sequence))
        queued.tick(0.0)

        for direction in sequence:
            direct.step(direction)
        direct.advance(0.0)

        self.assertEqual(queued.pending_commands, 0)
        np.testing.assert_array_equal(queued.observation, direct.observation)

    def test_reset_wins(self):
        """A reset drops the moves queued in the same tick, whatever the order."""
        for commands in ([Move(Direction.LEFT), Reset()], [Reset(), Move(Direction.LEFT)]):
            env = TileMerge.from_values(bottom_row([2, 2, 0, 0]), seed=3)
            for command in commands:
                env.submit(command)
            updates = env.tick(0.0)

            self.assertEqual(len(env.tiles), 2)
            self.assertTrue(np.all(env.observation[env.observation != 0] == 1))
            self.assertEqual(updates, [])
            self.assertEqual(env.score, 0)

    def test_unknown_command(self):
        """Only moves and resets are accepted."""
        env = TileMerge(seed=0)
        with self.assertRaises(ValueError):
            env.submit('left')
        with self.assertRaises(ValueError):
            env.submit(Move('left'))

    def test_tick_advances_removal(self):
        """Merged-away tiles linger for the despawn delay, then disappear."""
        env = TileMerge.from_values(bottom_row([2, 2, 0, 0]), seed=3)
        env.move(Direction.LEFT)
        updates = env.tick(0.0)

        merging = [update for update in updates if update.phase is Phase.MERGING_INTO]
        self.assertEqual(len(merging), 1)
        self.assertEqual(merging[0].cell, Cell(0, 0))
        self.assertAlmostEqual(merging[0].remaining, 0.2)

        updates = env.tick(0.25)

        self.assertFalse(any(update.tile_id == merging[0].tile_id for update in updates))
        with self.assertRaises(KeyError):
            env.tile(merging[0].tile_id)


    def test_long_tick_exposes_merged_away_tile(self):
        """A tick longer than the despawn delay still exposes the tile merged during it, once."""
        env = TileMerge.from_values(bottom_row([2, 2, 0, 0]), seed=3)
        env.move(Direction.LEFT)
        updates = env.tick(0.25)

        merging = [update for update in updates if update.phase is Phase.MERGING_INTO]
        self.assertEqual(len(merging), 1)
        self.assertAlmostEqual(merging[0].remaining, 0.2)

        # ##>: The timer starts on the following tick.
        updates = env.tick(0.25)

        self.assertFalse(any(update.tile_id == merging[0].tile_id for update in updates))
        with self.assertRaises(KeyError):
            env.tile(merging[0].tile_id)

    def test_earlier_merges_keep_counting(self):
        """Only tiles merged during the tick are spared, older ones keep counting down."""
        board = bottom_row([2, 2, 0, 0])
        board[:, 3] = [4, 4, 0, 0]
        env = TileMerge.from_values(board, seed=3)
        env.step(Direction.LEFT)
        earlier = [update.tile_id for update in env.animations() if update.phase is Phase.MERGING_INTO]
        self.assertEqual(len(earlier), 2)

        env.move(Direction.RIGHT)
        env.tick(0.25)

        for tile_id in earlier:
            with self.assertRaises(KeyError):
                env.tile(tile_id)


class TestDeterminism(TestCase):
    """Same seed and same commands, same game."""

    def play(self, seed: int) -> TileMerge:
        env = TileMerge(seed=seed)
        for index in range(60):
            env.move(list(Direction)[index % 4])
            env.tick(0.05)
        return env

    def test_same_seed_same_game(self):
        first, second = self.play(123), self.play(123)

        np.testing.assert_array_equal(first.observation, second.observation)
        self.assertEqual(
            [(tile.id, tile.cell, tile.value) for tile in first.tiles],
            [(tile.id, tile.cell, tile.value) for tile in second.tiles],
        )

    def test_reset_with_seed(self):
        """Reset with a seed reproduces the seed tiles."""
        env = TileMerge()
        board = env.reset(seed=7)

        np.testing.assert_array_equal(env.reset(seed=7), board)


class TestPhases(TestCase):
    """Test phase exposure and acknowledgement."""

    def setUp(self):
        self.env = TileMerge.from_values(bottom_row([2, 2, 0, 1]), seed=4)
        self.env.step(Direction.LEFT)

    def test_exposed_phases(self):
        """Survivor is merged, absorbed tile merging into it, sliding tile moving, new tile spawning."""
        phases = sorted(update.phase.value for update in self.env.animations())

        self.assertEqual(phases, ['merged', 'merging_into', 'moving', 'spawning'])

    def test_acknowledge_all(self):
        """Acknowledging returns transient phases to idle and keeps the absorbed tile pending."""
        self.env.acknowledge()
        updates = self.env.animations()

        self.assertEqual([update.phase for update in updates], [Phase.PENDING_REMOVAL])
        self.assertIsNotNone(updates[0].target)

    def test_acknowledge_one(self):
        """A single tile can be acknowledged."""
        spawned = [update for update in self.env.animations() if update.phase is Phase.SPAWNING][0]
        self.env.acknowledge(spawned.tile_id)

        self.assertEqual(self.env.tile(spawned.tile_id).phase, Phase.IDLE)
        self.assertEqual(len(self.env.animations()), 3)

    def test_acknowledge_unknown(self):
        with self.assertRaises(KeyError):
            self.env.acknowledge(999)


class TestInvariants(TestCase):
    """Desynchronization is reported, never repaired."""

    def test_stale_id_on_grid(self):
        env = TileMerge(seed=0)
        empty = env._grid.empty_cells()[0]
        env._grid.place(empty, 999)

        with self.assertRaises(InvariantViolation):
            env.check_invariants()
        with self.assertRaises(InvariantViolation):
            env.step(Direction.LEFT)


if __name__ == '__main__':
    main()
