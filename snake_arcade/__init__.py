"""
Minimal Snake arcade game.

The game core (``Game``, ``Snake``, ``Food``) only deals with grid cells;
drawing and keyboard handling live in ``render`` and ``human_play``, and
``env`` exposes the same rules as a Gymnasium environment.
"""

from .config import CLASSIC, COMPACT, PRESETS, GameConfig
from .game import Direction, Food, Game, GameStatus, Point, Snake, TickResult

__all__ = [
    'CLASSIC', 'COMPACT', 'PRESETS', 'GameConfig',
    'Direction', 'Food', 'Game', 'GameStatus', 'Point', 'Snake', 'TickResult',
]
