"""Tests for the game configuration dataclass."""

import json

import pytest

from torus_snake.config import GameConfig, InitializationError


class TestGameConfig:
    def test_defaults(self):
        cfg = GameConfig()
        assert cfg.tick_rate_ms == 500
        assert cfg.direction == "left"
        assert cfg.seed is None

    def test_validate_accepts_defaults(self):
        GameConfig().validate()

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"node_size": 0},
            {"surface_width": 8, "node_size": 16},
            {"surface_height": 0},
            {"tick_rate_ms": 0},
            {"direction": "north"},
        ],
    )
    def test_validate_rejects(self, kwargs):
        with pytest.raises(InitializationError):
            GameConfig(**kwargs).validate()

    def test_initialization_error_is_value_error(self):
        assert issubclass(InitializationError, ValueError)

    def test_to_dict_serializable(self):
        serialized = json.dumps(GameConfig().to_dict())
        assert isinstance(serialized, str)

    def test_save_and_load(self, tmp_path):
        cfg = GameConfig(surface_width=160, tick_rate_ms=250, seed=9)
        path = tmp_path / "nested" / "config.json"
        cfg.save(path)
        assert path.exists()
        assert GameConfig.load(path) == cfg

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(InitializationError, match="Cannot load"):
            GameConfig.load(tmp_path / "absent.json")

    def test_load_unknown_key(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"colour": "green"}))
        with pytest.raises(InitializationError):
            GameConfig.load(path)

    def test_load_invalid_values(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"node_size": -1}))
        with pytest.raises(InitializationError, match="node_size"):
            GameConfig.load(path)
