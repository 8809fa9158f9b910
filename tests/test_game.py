import pytest

from retro_space import drawing
from retro_space.drawing import Circle, Clear
from retro_space.entities import Bullet, Enemy
from retro_space.game import GameState

from conftest import make_game


def test_new_game_starts_in_menu():
    g = make_game()
    assert g.state is GameState.MENU
    assert (g.score, g.lives, g.level) == (0, 5, 1)
    assert g.spawn_rate == pytest.approx(0.0)
    assert make_game(base_spawn_rate=0.005).spawn_rate == pytest.approx(0.005)


def test_tick_only_runs_while_playing():
    g = make_game()
    g.enemies.append(Enemy(x=0, y=0, speed_y=2))
    assert g.tick() is False
    assert g.enemies[0].y == 0

    g.start()
    assert g.tick() is True
    assert g.enemies[0].y == 2

    g.toggle_pause()
    assert g.state is GameState.PAUSED
    assert g.tick() is False
    assert g.enemies[0].y == 2

    g.toggle_pause()
    assert g.state is GameState.PLAYING


def test_invalid_control_signals_are_ignored():
    g = make_game()
    assert g.toggle_pause() is False
    assert g.state is GameState.MENU
    g.start()
    assert g.start() is False
    assert g.state is GameState.PLAYING


def test_enemy_escape_costs_one_life(game):
    escaping = Enemy(x=0, y=game.height, speed_y=1)
    staying = Enemy(x=200, y=100, speed_y=1)
    game.enemies.extend([escaping, staying])
    game.tick()
    assert game.lives == 4
    assert game.enemies == [staying]
    assert game.score == 0


def test_five_escapes_end_the_game(game):
    for i in range(5):
        game.enemies.append(Enemy(x=i * 40, y=game.height, speed_y=1))
    game.tick()
    assert game.lives == 0
    assert game.state is GameState.GAME_OVER
    assert game.score == 0
    assert game.tick() is False


def test_lives_never_go_negative(game):
    game.lives = 1
    for i in range(3):
        game.enemies.append(Enemy(x=i * 40, y=game.height, speed_y=1))
    game.tick()
    assert game.lives == 0
    assert game.state is GameState.GAME_OVER


def test_escape_game_over_skips_rest_of_tick():
    g = make_game(base_spawn_rate=1.0, lives=1)
    g.start()
    g.score = 2000
    target = Enemy(x=100, y=100, speed_y=1)
    bullet = Bullet(x=110, y=120, speed_y=-8)
    g.enemies.extend([Enemy(x=600, y=g.height, speed_y=1), target])
    g.bullets.append(bullet)
    g.tick()
    assert g.state is GameState.GAME_OVER
    # no spawn, no collision resolution, no level check
    assert g.enemies == [target]
    assert g.bullets == [bullet]
    assert g.particles == []
    assert g.score == 2000
    assert g.level == 1


def test_bullet_hit_destroys_both_and_scores(game):
    game.enemies.append(Enemy(x=100, y=100, speed_y=1))
    game.bullets.append(Bullet(x=110, y=120, speed_y=-8))
    game.tick()
    assert game.bullets == []
    assert game.enemies == []
    assert game.score == 100
    assert len(game.particles) == 8


def test_enemy_is_consumed_by_one_bullet_only(game):
    game.enemies.append(Enemy(x=100, y=100, speed_y=1))
    game.bullets.append(Bullet(x=105, y=120, speed_y=-8))
    game.bullets.append(Bullet(x=115, y=120, speed_y=-8))
    game.tick()
    assert game.enemies == []
    assert len(game.bullets) == 1
    assert game.score == 100
    assert len(game.particles) == 8


def test_bullet_over_two_enemies_kills_only_the_first(game):
    first = Enemy(x=100, y=100, speed_y=1)
    second = Enemy(x=110, y=100, speed_y=1)
    game.enemies.extend([first, second])
    game.bullets.append(Bullet(x=112, y=120, speed_y=-8))
    game.tick()
    assert game.enemies == [second]
    assert game.bullets == []
    assert game.score == 100
    assert len(game.particles) == 8


def test_bullet_leaves_the_top(game):
    bullet = Bullet(x=100, y=50, speed_y=-8)
    game.bullets.append(bullet)
    for _ in range(6):
        game.tick()
    assert game.bullets == [bullet]
    assert bullet.y == 2
    for _ in range(7):
        game.tick()
    assert game.bullets == []


def test_player_collision_costs_a_life(game):
    p = game.player
    game.enemies.append(Enemy(x=p.x, y=p.y - 1, speed_y=1))
    game.tick()
    assert game.lives == 4
    assert game.enemies == []
    assert len(game.particles) == 8
    assert game.state is GameState.PLAYING


def test_crash_particles_use_the_explosion_colour(game):
    p = game.player
    game.enemies.append(Enemy(x=p.x, y=p.y - 1, speed_y=1))
    game.tick()
    assert len(game.particles) == 8
    assert {particle.color for particle in game.particles} == {drawing.EXPLOSION_ENEMY}


def test_player_collision_on_last_life_ends_game(game):
    game.lives = 1
    p = game.player
    game.enemies.append(Enemy(x=p.x, y=p.y, speed_y=1))
    game.tick()
    assert game.lives == 0
    assert game.state is GameState.GAME_OVER


def _kill_one(game):
    game.enemies.append(Enemy(x=100, y=100, speed_y=1))
    game.bullets.append(Bullet(x=110, y=120, speed_y=-8))
    game.tick()


def test_level_up_at_threshold():
    g = make_game(base_spawn_rate=0.005)
    g.start()
    g.score = 1900
    _kill_one(g)
    assert g.score == 2000
    assert g.level == 2
    assert g.spawn_rate == pytest.approx(0.008)
    g.enemies.clear()
    g.tick()
    assert g.level == 2


def test_level_up_when_threshold_crossed_without_landing_on_it(game):
    game.score = 1950
    _kill_one(game)
    assert game.score == 2050
    assert game.level == 2
    assert game.spawn_rate == pytest.approx(0.003)


def test_level_tracks_every_threshold(game):
    game.score = 3950
    _kill_one(game)
    assert game.level == 3
    assert game.spawn_rate == pytest.approx(0.006)


def test_spawning_places_enemy_above_playfield():
    g = make_game(base_spawn_rate=1.0)
    g.start()
    g.tick()
    assert len(g.enemies) == 1
    assert g.enemies[0].y == -30


def test_same_seed_same_game():
    a = make_game(base_spawn_rate=0.5, seed=11)
    b = make_game(base_spawn_rate=0.5, seed=11)
    a.start()
    b.start()
    for _ in range(50):
        a.tick()
        b.tick()
    assert [(e.x, e.y) for e in a.enemies] == [(e.x, e.y) for e in b.enemies]
    assert [(s.x, s.y) for s in a.stars] == [(s.x, s.y) for s in b.stars]


def test_restart_resets_session(game):
    game.enemies.append(Enemy(x=0, y=game.height, speed_y=1))
    game.bullets.append(Bullet(x=100, y=300, speed_y=-8))
    game.score = 4000
    game.tick()
    game.restart()
    assert game.state is GameState.MENU
    assert (game.score, game.lives, game.level) == (0, 5, 1)
    assert game.bullets == [] and game.enemies == [] and game.particles == []
    assert game.start()


def test_restart_after_game_over(game):
    game.lives = 1
    game.enemies.append(Enemy(x=0, y=game.height, speed_y=1))
    game.tick()
    assert game.state is GameState.GAME_OVER
    assert game.start() is False
    game.restart()
    assert game.start()
    assert game.state is GameState.PLAYING


def test_player_fires_on_key_press(game):
    game.controls.key_down("fire")
    game.tick()
    assert len(game.bullets) == 1


def test_draw_list_order():
    g = make_game(star_count=3)
    g.start()
    g.bullets.append(Bullet(x=10, y=300, speed_y=-8))
    g.enemies.append(Enemy(x=300, y=10, speed_y=1))
    _kill_one(g)
    commands = g.draw_list()

    expected = [Clear(g.width, g.height)]
    for s in g.stars:
        expected += s.draw()
    expected += g.player.draw()
    for b in g.bullets:
        expected += b.draw()
    for e in g.enemies:
        expected += e.draw()
    for p in g.particles:
        expected += p.draw()

    assert commands == expected
    assert isinstance(commands[0], Clear)
    assert all(isinstance(c, Circle) for c in commands[1:4])
    assert len(g.particles) == 8


def test_listeners_receive_hud_updates(game):
    seen = []
    game.add_listener(seen.append)
    assert seen[-1].score == 0
    _kill_one(game)
    assert seen[-1].score == 100
    game.toggle_pause()
    assert seen[-1].state is GameState.PAUSED


def test_invalid_config():
    with pytest.raises(ValueError):
        make_game(lives=0)
    with pytest.raises(ValueError):
        make_game(level_score_step=0)
    with pytest.raises(ValueError):
        make_game(base_spawn_rate=-0.1)


def test_fire_pressed_while_paused_is_dropped(game):
    game.toggle_pause()
    game.controls.key_down("fire")
    game.controls.key_up("fire")
    game.toggle_pause()
    game.tick()
    assert game.bullets == []

    game.controls.key_down("fire")
    game.tick()
    assert len(game.bullets) == 1


def test_reseed_replays_session_after_play():
    g = make_game(base_spawn_rate=0.3)

    def run():
        g.reseed(5)
        g.restart()
        g.start()
        for _ in range(80):
            g.tick()
        return [(e.x, e.y) for e in g.enemies], [(s.x, s.y) for s in g.stars]

    assert run() == run()
