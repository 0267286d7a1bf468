# -*- coding: utf-8 -*-
"""Reference key bindings: keyboard keys to engine commands."""

from tilemerge.core.types import Direction
from tilemerge.envs.commands import Command, Move, Reset

KEY_BINDINGS: dict[str, Command] = {
    'up': Move(Direction.UP),
    'w': Move(Direction.UP),
    'down': Move(Direction.DOWN),
    's': Move(Direction.DOWN),
    'left': Move(Direction.LEFT),
    'a': Move(Direction.LEFT),
    'right': Move(Direction.RIGHT),
    'd': Move(Direction.RIGHT),
    'r': Reset(),
}


def command_for_key(key: str | None) -> Command | None:
    """
    Translate a key name into a command.

    Parameters
    ----------
    key : str | None
        Key name as reported by the window toolkit, e.g. ``"left"`` or ``"W"``.

    Returns
    -------
    Command | None
        The bound command, or None for an unbound key.
    """
    if not key:
        return None
    return KEY_BINDINGS.get(key.lower())
