"""Engine and match settings, overridable from the environment (or a .env file)."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


@dataclass
class EngineConfig:
    hand_size: int = 7
    max_turns: int = 1000
    seed: Optional[int] = None
    log_level: str = "WARNING"
    apply_starting_card_effect: bool = True

    def __post_init__(self) -> None:
        if self.hand_size < 1:
            raise ValueError(f"hand_size must be positive: {self.hand_size}")
        if self.max_turns < 1:
            raise ValueError(f"max_turns must be positive: {self.max_turns}")
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "EngineConfig":
        """Build a config from UNO_* environment variables."""
        if load_dotenv_file:
            load_dotenv()
        kwargs = {}
        if "UNO_HAND_SIZE" in os.environ:
            kwargs["hand_size"] = int(os.environ["UNO_HAND_SIZE"])
        if "UNO_MAX_TURNS" in os.environ:
            kwargs["max_turns"] = int(os.environ["UNO_MAX_TURNS"])
        if os.environ.get("UNO_SEED"):
            kwargs["seed"] = int(os.environ["UNO_SEED"])
        if "UNO_LOG_LEVEL" in os.environ:
            kwargs["log_level"] = os.environ["UNO_LOG_LEVEL"]
        if "UNO_STARTING_CARD_EFFECT" in os.environ:
            kwargs["apply_starting_card_effect"] = _parse_bool(os.environ["UNO_STARTING_CARD_EFFECT"])
        return cls(**kwargs)

    def configure_logging(self) -> None:
        logging.basicConfig(
            level=self.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"Not a boolean: {raw!r}")
