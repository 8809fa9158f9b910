from retro_space.game import GameState
from retro_space.play import main, run_headless


def test_headless_run(capsys):
    game = run_headless(300, seed=3)
    assert game.tick_count <= 300
    assert game.state in (GameState.PLAYING, GameState.GAME_OVER)
    assert "Headless run finished" in capsys.readouterr().out


def test_cli_headless(capsys):
    assert main(["--headless", "--ticks", "50", "--seed", "1", "--lives", "3"]) == 0
    out = capsys.readouterr().out
    assert "Lives: 3" in out or "State: gameOver" in out
