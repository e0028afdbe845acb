"""
Game configuration for the dodge engine
Canvas geometry, player/bullet constants, scoring and the stage table
"""

from dodge.entities import StageConfig

# Core constants. All positions live in this fixed logical resolution.
GAME_CONFIG = {
    "canvas_width": 400,
    "canvas_height": 600,
    "player_width": 43,
    "player_height": 55,
    "player_bottom_offset": 20,   # gap between player and canvas bottom
    "player_speed": 6,            # px per update call
    "player_lives": 3,
    "bullet_size": 10,
    "offscreen_margin": 20,       # bullets die this far outside the canvas
    "invincible_duration": 2000,  # ms after taking a hit
    "grace_duration": 2000,       # ms granted at game/stage start
}

# ==============================================================================
# SPAWNER
# ==============================================================================

SPAWN_CONFIG = {
    "bullets_per_spawn": 2,       # pattern picks per burst
    "default_speed": 3.0,
    "default_interval": 800,      # ms
    "wave_count": 4,
    "burst_count": 8,
    "burst_x_scale": 0.5,
    "spiral_step": 0.3,           # radians added per spiral spawn
    "spiral_radius": 100,
    "spiral_x_scale": 0.3,
}

# ==============================================================================
# COLLISION
# Hitboxes are inset so grazes do not count
# ==============================================================================

HITBOX_CONFIG = {
    "player_side_padding": 12,    # left, right and top
    "player_bottom_padding": 8,
    "bullet_padding": 2,
}

# ==============================================================================
# SCORING
# ==============================================================================

SCORE_CONFIG = {
    "ms_per_point": 100,          # survival time per base point
    "progress_multiplier": 2.0,   # x1 at stage start, x3 at stage end
    "stage_multiplier": 0.3,      # +30% per stage index
    "stage_clear_bonus": 1000,    # times (stage index + 1)
}

# ==============================================================================
# STAGE TABLE
# Traversed strictly in order, one entry per day until new year
# ==============================================================================

STAGES = [
    StageConfig(
        day=26,
        name="December 26 is passing",
        bullet_speed=3.3,
        bullet_frequency=600,
        bullet_patterns=("random", "aimed"),
        duration=30000,
    ),
    StageConfig(
        day=27,
        name="December 27 is passing",
        bullet_speed=3.6,
        bullet_frequency=550,
        bullet_patterns=("random", "aimed"),
        duration=33000,
    ),
    StageConfig(
        day=28,
        name="December 28 is passing",
        bullet_speed=3.5,
        bullet_frequency=600,
        bullet_patterns=("random", "aimed", "wave"),
        duration=35000,
    ),
    StageConfig(
        day=29,
        name="December 29 is passing",
        bullet_speed=3.6,
        bullet_frequency=600,
        bullet_patterns=("random", "aimed", "wave"),
        duration=38000,
    ),
    StageConfig(
        day=30,
        name="December 30 is passing",
        bullet_speed=3.5,
        bullet_frequency=650,
        bullet_patterns=("random", "aimed", "wave", "burst"),
        duration=42000,
    ),
    StageConfig(
        day=31,
        name="December 31... the new year is coming!",
        bullet_speed=4.0,
        bullet_frequency=550,
        bullet_patterns=("random", "aimed", "wave", "burst", "spiral"),
        duration=45000,
        has_boss=True,
    ),
]

# ==============================================================================
# HEADLESS ENVIRONMENT
# ==============================================================================

ENV_CONFIG = {
    "frame_ms": 1000 / 60,
    "max_steps": 60 * 60 * 5,     # five minutes at 60 FPS
    "k_bullets": 8,
    "auto_advance": True,
    "reward_scale": 0.01,
    "death_penalty": 5.0,
}

# ==============================================================================
# PERSISTENCE
# ==============================================================================

STORAGE_CONFIG = {
    "high_score_file": "~/.dodge_high_score.json",
    "high_score_key": "high_score",
}
