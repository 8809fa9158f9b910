"""Retro Space - single-player 2D arcade shooter"""

from .config import GAME_CONFIG
from .game import GameState, HudSnapshot, InputState, RetroSpaceGame
from .env import RetroSpaceEnv, run_random_episode

__all__ = [
    'GAME_CONFIG',
    'GameState',
    'HudSnapshot',
    'InputState',
    'RetroSpaceGame',
    'RetroSpaceEnv',
    'run_random_episode',
]
