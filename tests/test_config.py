"""Tests for configuration loading."""

import pytest

from unoengine.config import EngineConfig

ENV_VARS = (
    "UNO_HAND_SIZE",
    "UNO_MAX_TURNS",
    "UNO_SEED",
    "UNO_LOG_LEVEL",
    "UNO_STARTING_CARD_EFFECT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    config = EngineConfig.from_env(load_dotenv_file=False)
    assert config.hand_size == 7
    assert config.max_turns == 1000
    assert config.seed is None
    assert config.log_level == "WARNING"
    assert config.apply_starting_card_effect


def test_from_env(monkeypatch) -> None:
    monkeypatch.setenv("UNO_HAND_SIZE", "5")
    monkeypatch.setenv("UNO_MAX_TURNS", "200")
    monkeypatch.setenv("UNO_SEED", "17")
    monkeypatch.setenv("UNO_LOG_LEVEL", "debug")
    monkeypatch.setenv("UNO_STARTING_CARD_EFFECT", "off")
    config = EngineConfig.from_env(load_dotenv_file=False)
    assert config == EngineConfig(
        hand_size=5,
        max_turns=200,
        seed=17,
        log_level="DEBUG",
        apply_starting_card_effect=False,
    )


@pytest.mark.parametrize(
    "kwargs",
    [{"hand_size": 0}, {"max_turns": 0}, {"log_level": "LOUD"}],
)
def test_invalid_config(kwargs) -> None:
    with pytest.raises(ValueError):
        EngineConfig(**kwargs)


def test_bad_boolean(monkeypatch) -> None:
    monkeypatch.setenv("UNO_STARTING_CARD_EFFECT", "maybe")
    with pytest.raises(ValueError):
        EngineConfig.from_env(load_dotenv_file=False)
