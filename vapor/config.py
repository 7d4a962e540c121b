"""
Runtime configuration for the vapor toolkit.
"""

from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from dataclasses import dataclass, field, asdict
from typing import List, Optional

from .address import MAX_ATTEMPTS

logger = logging.getLogger(__name__)


@dataclass
class DeriverConfig:
    """Point search configuration."""
    max_attempts: int = MAX_ATTEMPTS


@dataclass
class CondenseConfig:
    """Cosmetic condense progress configuration."""
    step_delay_sec: float = 1.5


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_size_mb: int = 10
    backup_count: int = 3


@dataclass
class VaporConfig:
    """Complete toolkit configuration."""
    deriver: DeriverConfig = field(default_factory=DeriverConfig)
    condense: CondenseConfig = field(default_factory=CondenseConfig)
    log: LogConfig = field(default_factory=LogConfig)

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        attempts = self.deriver.max_attempts
        if isinstance(attempts, bool) or not isinstance(attempts, int) or attempts < 1:
            errors.append("max_attempts must be an integer of at least 1")

        delay = self.condense.step_delay_sec
        if not isinstance(delay, (int, float)) or delay < 0:
            errors.append("step_delay_sec must be a non-negative number")

        level = self.log.level
        if not isinstance(level, str) or not isinstance(logging.getLevelName(level.upper()), int):
            errors.append(f"Unknown log level: {self.log.level}")

        return errors

    def to_dict(self) -> dict:
        """Export configuration as dictionary."""
        return {
            "deriver": asdict(self.deriver),
            "condense": asdict(self.condense),
            "log": asdict(self.log),
        }

    def save(self, path: str) -> None:
        """Save configuration to file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Configuration saved to {path}")

    @classmethod
    def load(cls, path: str) -> "VaporConfig":
        """Load configuration from file."""
        with open(path, 'r') as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"{path}: configuration must be a JSON object")

        config = cls()

        if "deriver" in data:
            config.deriver = DeriverConfig(**data["deriver"])

        if "condense" in data:
            config.condense = CondenseConfig(**data["condense"])

        if "log" in data:
            config.log = LogConfig(**data["log"])

        logger.info(f"Configuration loaded from {path}")
        return config


def _log_handlers(config: LogConfig) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if config.file:
        handlers.append(RotatingFileHandler(
            config.file,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        ))
    return handlers


def setup_logging(config: LogConfig) -> logging.Logger:
    """
    Route the ``vapor`` logger tree to stderr (and the rotating log file,
    if one is configured).  Calling it again replaces the handlers from
    the previous call, so the CLI can be driven repeatedly in-process.
    """
    root = logging.getLogger("vapor")
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    formatter = logging.Formatter(config.format)
    for handler in _log_handlers(config):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.setLevel(config.level.upper())
    return root
