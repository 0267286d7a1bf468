# -*- coding: utf-8 -*-
"""
Commands accepted by the engine and the queue that collects them between ticks.
"""
from dataclasses import dataclass
from typing import Union

from tilemerge.core.types import Direction


@dataclass(frozen=True)
class Move:
    """Slide every tile in a direction."""

    direction: Direction


@dataclass(frozen=True)
class Reset:
    """Clear the board and place fresh seed tiles."""


Command = Union[Move, Reset]


class CommandQueue:
    """
    Commands received since the last tick, in arrival order.

    A reset wins over every move queued in the same tick.
    """

    def __init__(self):
        self._pending: list[Command] = []

    def __len__(self) -> int:
        return len(self._pending)

    def push(self, command: Command) -> None:
        """Queue a command, rejecting anything that is not a Move or a Reset."""
        if not isinstance(command, (Move, Reset)):
            raise ValueError(f'unknown command {command!r}')
        if isinstance(command, Move) and not isinstance(command.direction, Direction):
            raise ValueError(f'unknown direction {command.direction!r}')
        self._pending.append(command)

    def drain(self) -> list[Command]:
        """
        Empty the queue.

        Returns
        -------
        list[Command]
            A single Reset when one was queued, otherwise the moves in arrival order.
        """
        pending, self._pending = self._pending, []
        if any(isinstance(command, Reset) for command in pending):
            return [Reset()]
        return pending

    def clear(self) -> None:
        self._pending.clear()
