"""Configuration management for the natural language parser."""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .patterns import APPROXIMATE_TIME_MAP

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "~/.todo_nlp/config.yaml"

_CLOCK_TIME = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


class ConfigError(ValueError):
    """Raised when configuration values are invalid."""


@dataclass
class ScoringPolicy:
    """Tuning knobs for the confidence score.

    The score starts at 1.0, loses ``short_title_penalty`` when the cleaned
    title is shorter than ``short_title_length`` characters, loses
    ``unparsed_penalty`` when the title still covers more than
    ``unparsed_ratio`` of the input and nothing was extracted, and gains
    ``token_bonus`` per extracted token. The result is clamped to [0, 1].
    """
    short_title_length: int = 2
    short_title_penalty: float = 0.3
    unparsed_ratio: float = 0.9
    unparsed_penalty: float = 0.5
    token_bonus: float = 0.05

    def __post_init__(self):
        if self.short_title_length < 0:
            raise ConfigError("short_title_length must not be negative")
        if not 0.0 <= self.unparsed_ratio <= 1.0:
            raise ConfigError("unparsed_ratio must be between 0 and 1")
        for name in ("short_title_penalty", "unparsed_penalty", "token_bonus"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must not be negative")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "short_title_length": self.short_title_length,
            "short_title_penalty": self.short_title_penalty,
            "unparsed_ratio": self.unparsed_ratio,
            "unparsed_penalty": self.unparsed_penalty,
            "token_bonus": self.token_bonus,
        }


@dataclass
class ParserConfig:
    """Global configuration model for the parser."""

    # Date preferences
    first_day_of_week: int = 1  # 0=Sunday .. 6=Saturday, Monday by default

    # Canonical clock times for approximate words like 아침 or 저녁
    period_times: Dict[str, str] = field(default_factory=lambda: dict(APPROXIMATE_TIME_MAP))

    # Confidence scoring
    scoring: ScoringPolicy = field(default_factory=ScoringPolicy)

    def __post_init__(self):
        """Validate values after creation."""
        if isinstance(self.scoring, dict):
            self.scoring = ScoringPolicy(**self.scoring)

        if not 0 <= self.first_day_of_week <= 6:
            raise ConfigError(f"first_day_of_week must be 0-6, got {self.first_day_of_week}")

        unknown = set(self.period_times) - set(APPROXIMATE_TIME_MAP)
        if unknown:
            raise ConfigError(f"Unknown period words: {', '.join(sorted(unknown))}")
        period_times = {}
        for word, clock in self.period_times.items():
            # YAML 1.1 reads an unquoted 19:00 as the base-60 integer 1140
            if isinstance(clock, int) and not isinstance(clock, bool):
                clock = f"{clock // 60:02d}:{clock % 60:02d}"
            if not _CLOCK_TIME.match(str(clock)):
                raise ConfigError(f"Invalid time '{clock}' for '{word}', expected HH:MM")
            period_times[word] = clock

        # Words left out of the file keep their defaults
        self.period_times = {**APPROXIMATE_TIME_MAP, **period_times}

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data = {
            "first_day_of_week": self.first_day_of_week,
            "period_times": self.period_times,
            "scoring": self.scoring.to_dict(),
        }
        return yaml.safe_dump(data, default_flow_style=False, allow_unicode=True)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ParserConfig":
        """Deserialize config from YAML."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ConfigError("Configuration root must be a mapping")

        known = {"first_day_of_week", "period_times", "scoring"}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        try:
            return cls(**data)
        except TypeError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e


class Config:
    """Loads and saves parser configuration files."""

    @classmethod
    def default_path(cls) -> Path:
        return Path(os.path.expanduser(DEFAULT_CONFIG_PATH))

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> ParserConfig:
        """Load configuration from file, falling back to defaults."""
        if config_path is None:
            config_path = cls.default_path()

        if not config_path.exists():
            logger.debug(f"No configuration at {config_path}, using defaults")
            return ParserConfig()

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_content = f.read()
            config = ParserConfig.from_yaml(yaml_content)
            logger.debug(f"Loaded configuration from {config_path}")
            return config
        except (OSError, yaml.YAMLError, ConfigError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}. Using default configuration.")
            return ParserConfig()

    @classmethod
    def save(cls, config: ParserConfig, config_path: Optional[Path] = None) -> Path:
        """Save configuration to file."""
        if config_path is None:
            config_path = cls.default_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(config.to_yaml())
        logger.info(f"Configuration saved to {config_path}")
        return config_path


def load_config(config_path: Optional[Path] = None) -> ParserConfig:
    """Load configuration from file."""
    return Config.load(config_path)


def save_config(config: ParserConfig, config_path: Optional[Path] = None) -> Path:
    """Save configuration to file."""
    return Config.save(config, config_path)
