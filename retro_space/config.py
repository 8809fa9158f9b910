"""
Game configuration for Retro Space
"""

# Playfield and session parameters
GAME_CONFIG = {
    "width": 800,
    "height": 600,
    "lives": 5,
    "base_spawn_rate": 0.005,    # chance per tick at level 1
    "spawn_rate_step": 0.003,    # added per level
    "level_score_step": 2000,
    "kill_score": 100,
    # Player
    "player_width": 40.0,
    "player_height": 30.0,
    "player_speed": 6.0,
    "shoot_cooldown_ticks": 6,
    # Bullets
    "bullet_width": 3.0,
    "bullet_height": 10.0,
    "bullet_speed": 8.0,
    # Enemies
    "enemy_width": 30.0,
    "enemy_height": 25.0,
    "enemy_speed_range": (1.0, 2.5),
    "enemy_spawn_y": -30.0,
    # Explosions
    "particles_per_explosion": 8,
    "particle_spread": 3.0,
    "particle_life": 30,
    "particle_damping": 0.98,
    # Background
    "star_count": 100,
}
