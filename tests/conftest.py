import pytest

from retro_space import GAME_CONFIG, RetroSpaceGame


def make_game(**overrides):
    config = dict(GAME_CONFIG)
    config.update({"base_spawn_rate": 0.0, "seed": 7})
    config.update(overrides)
    return RetroSpaceGame(**config)


@pytest.fixture
def game():
    g = make_game()
    g.start()
    return g
