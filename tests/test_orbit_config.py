from game.orbit import OrbitConfig
from rl.configs.orbit_config import GAME_CONFIG, REWARD_CONFIGS, make_env_kwargs


def test_game_config_matches_defaults():
    defaults = OrbitConfig()
    for key, value in GAME_CONFIG.items():
        assert getattr(defaults, key) == value


def test_env_kwargs_strip_preset_labels():
    kwargs = make_env_kwargs("survival")
    assert "name" not in kwargs["reward_config"]
    assert "description" not in kwargs["reward_config"]
    assert kwargs["reward_config"]["R_DEATH"] == REWARD_CONFIGS["survival"]["R_DEATH"]
    assert kwargs["game_config"] == GAME_CONFIG
