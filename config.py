"""
Central configuration for the checkers engine, AI and CLI.
Pydantic models give type-safe settings with environment and JSON overrides.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

_TRUE_STRINGS = {'true', '1', 'yes', 'on'}
_FALSE_STRINGS = {'false', '0', 'no', 'off', ''}


def _parse_bool(v: Any) -> bool:
    """Coerce a config value to bool; strings such as "false" or "0" are False."""
    if isinstance(v, str):
        text = v.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        raise ValueError(f"Cannot interpret {v!r} as a boolean")
    return bool(v)


class UISettings(BaseModel):
    """Terminal display settings used by the CLI."""

    use_unicode: bool = Field(default=True, description="Use Unicode characters for pieces")
    show_indices: bool = Field(default=True, description="Show row/column indices around the board")

    @field_validator('use_unicode', 'show_indices', mode='before')
    @classmethod
    def validate_bool_fields(cls, v):
        return _parse_bool(v)


class EngineSettings(BaseModel):
    """AI search configuration settings."""

    easy_depth: int = Field(default=2, ge=1, le=10, description="Search depth for Easy")
    medium_depth: int = Field(default=4, ge=1, le=10, description="Search depth for Medium")
    hard_depth: int = Field(default=6, ge=1, le=10, description="Search depth for Hard")
    max_depth: int = Field(default=8, ge=1, le=12, description="Hard cap applied to every difficulty")
    hard_second_best_probability: float = Field(
        default=0.1, ge=0.0, le=1.0,
        description="Chance that Hard plays its second best move",
    )
    seed: Optional[int] = Field(default=None, description="Seed for the AI random generator")

    @field_validator('easy_depth', 'medium_depth', 'hard_depth', 'max_depth', mode='before')
    @classmethod
    def validate_int_fields(cls, v):
        return int(v)

    def depth_for(self, difficulty: str) -> int:
        depth = {
            'easy': self.easy_depth,
            'medium': self.medium_depth,
            'hard': self.hard_depth,
        }[str(difficulty).lower()]
        return max(1, min(self.max_depth, depth))


class GameRulesSettings(BaseModel):
    """Rule choices left open by the standard game."""

    normal_backward_capture: bool = Field(default=False, description="Let normal pieces capture backwards")
    super_king_promotion: bool = Field(default=False, description="Promote a king reaching the far row to super king")
    allow_undo: bool = Field(default=True, description="Allow undoing moves in a match")

    @field_validator('normal_backward_capture', 'super_king_promotion', 'allow_undo', mode='before')
    @classmethod
    def validate_bool_fields(cls, v):
        return _parse_bool(v)


class LoggingSettings(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_to_file: bool = Field(default=False, description="Write logs to file")
    log_file_path: str = Field(default="checkers.log", description="Log file path")

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
        v_upper = v.upper() if isinstance(v, str) else str(v).upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper


class CheckersConfig(BaseModel):
    """Main configuration model for the checkers engine."""

    ui: UISettings = Field(default_factory=UISettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)
    rules: GameRulesSettings = Field(default_factory=GameRulesSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    version: str = Field(default="1.0.0", description="Configuration version")
    config_file: Optional[str] = Field(default=None, description="Path to config file")

    @classmethod
    def from_env(cls) -> 'CheckersConfig':
        """Create configuration from environment variables."""
        seed = os.getenv('CHECKERS_SEED')
        return cls(
            ui=UISettings(
                use_unicode=os.getenv('CHECKERS_UNICODE', 'true').lower() == 'true',
            ),
            engine=EngineSettings(
                easy_depth=int(os.getenv('CHECKERS_EASY_DEPTH', '2')),
                medium_depth=int(os.getenv('CHECKERS_MEDIUM_DEPTH', '4')),
                hard_depth=int(os.getenv('CHECKERS_HARD_DEPTH', '6')),
                max_depth=int(os.getenv('CHECKERS_MAX_DEPTH', '8')),
                seed=int(seed) if seed else None,
            ),
            rules=GameRulesSettings(
                normal_backward_capture=os.getenv('CHECKERS_BACKWARD_CAPTURE', 'false').lower() == 'true',
                super_king_promotion=os.getenv('CHECKERS_SUPER_KING', 'false').lower() == 'true',
            ),
            logging=LoggingSettings(
                log_level=os.getenv('CHECKERS_LOG_LEVEL', 'INFO'),
                log_to_file=os.getenv('CHECKERS_LOG_FILE', 'false').lower() == 'true',
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'ui': self.ui.model_dump(),
            'engine': self.engine.model_dump(),
            'rules': self.rules.model_dump(),
            'logging': self.logging.model_dump(),
            'version': self.version,
            'config_file': self.config_file,
        }

    def save_to_file(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        config_dict = self.to_dict()
        config_dict['config_file'] = filepath

        with open(filepath, 'w') as f:
            json.dump(config_dict, f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str) -> 'CheckersConfig':
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)

        return cls(
            ui=UISettings(**data.get('ui', {})),
            engine=EngineSettings(**data.get('engine', {})),
            rules=GameRulesSettings(**data.get('rules', {})),
            logging=LoggingSettings(**data.get('logging', {})),
            version=data.get('version', '1.0.0'),
            config_file=filepath,
        )

    def update_from_dict(self, updates: Dict[str, Any]) -> None:
        """Update configuration from dictionary."""
        for section, settings in updates.items():
            if hasattr(self, section) and isinstance(settings, dict):
                section_model = getattr(self, section)
                for key, value in settings.items():
                    if hasattr(section_model, key):
                        setattr(section_model, key, value)


# Global configuration instance
_config: Optional[CheckersConfig] = None


def get_config() -> CheckersConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = CheckersConfig.from_env()
    return _config


def load_config_from_file(filepath: str) -> CheckersConfig:
    """Load configuration from file and update global instance."""
    global _config
    _config = CheckersConfig.load_from_file(filepath)
    return _config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _config
    _config = None


def get_ui_settings() -> UISettings:
    return get_config().ui


def get_engine_settings() -> EngineSettings:
    return get_config().engine


def get_game_rules() -> GameRulesSettings:
    return get_config().rules


def get_logging_settings() -> LoggingSettings:
    return get_config().logging


def setup_logging() -> None:
    """Configure root logging once, controlled by the logging settings."""
    if getattr(setup_logging, "_configured", False):
        return
    settings = get_logging_settings()
    level: int = getattr(logging, settings.log_level, logging.INFO)
    kwargs: Dict[str, Any] = {}
    if settings.log_to_file:
        kwargs['filename'] = settings.log_file_path
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        **kwargs,
    )
    setup_logging._configured = True  # type: ignore[attr-defined]
