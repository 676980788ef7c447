"""Tests for MealMind config loading."""

import pytest

from mealmind.config import MealMindConfig, load_config


@pytest.fixture(autouse=True)
def clear_key_env(monkeypatch):
    for name in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "ANTHROPIC_API_KEY"):
        monkeypatch.delenv(name, raising=False)


def test_load_config_defaults():
    """Loading with no path returns all defaults."""
    config = load_config()
    assert isinstance(config, MealMindConfig)
    assert config.generation.backend == "gemini"
    assert config.generation.gemini.api_key == ""
    assert config.storage.path.endswith("mealmind.db")
    assert config.recommendation.expiring_within_days == 3
    assert config.recommendation.savings_per_item == 150.0
    assert config.recommendation.weigh_by_quantity is False
    assert config.recommendation.default_servings == 4
    assert config.recommendation.history_limit == 50
    assert config.profile.city == "Бишкек"
    assert config.profile.delivery_service == "glovo"


def test_load_config_nonexistent_file():
    config = load_config("/nonexistent/path.toml")
    assert config.generation.backend == "gemini"


def test_load_config_from_toml(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        """
[generation]
backend = "claude"

[generation.claude]
api_key = "sk-test"
model = "claude-test"

[storage]
path = "/tmp/mm.db"

[recommendation]
expiring_within_days = 5
savings_per_item = 200
weigh_by_quantity = true
default_servings = 2

[profile]
city = "Ош"
delivery_service = "nambafood"
""",
        encoding="utf-8",
    )
    config = load_config(config_file)

    assert config.generation.backend == "claude"
    assert config.generation.claude.api_key == "sk-test"
    assert config.generation.claude.model == "claude-test"
    assert config.storage.path == "/tmp/mm.db"
    assert config.recommendation.expiring_within_days == 5
    assert config.recommendation.savings_per_item == 200
    assert config.recommendation.weigh_by_quantity is True
    assert config.recommendation.default_servings == 2
    assert config.recommendation.history_limit == 50
    assert config.profile.city == "Ош"
    assert config.profile.delivery_service == "nambafood"


def test_api_keys_from_environment(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "google-key")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "anthropic-key")
    config = load_config()
    assert config.generation.gemini.api_key == "google-key"
    assert config.generation.claude.api_key == "anthropic-key"


def test_gemini_key_env_precedence(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "gemini-key")
    monkeypatch.setenv("GOOGLE_API_KEY", "google-key")
    assert load_config().generation.gemini.api_key == "gemini-key"


def test_config_file_key_wins_over_env(monkeypatch, tmp_path):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    config_file = tmp_path / "config.toml"
    config_file.write_text('[generation.gemini]\napi_key = "file-key"\n')
    assert load_config(config_file).generation.gemini.api_key == "file-key"
