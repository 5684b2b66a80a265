# pipecomp.config.config - Configuration management
"""
Configuration file loading and management.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging
import sys

# Use tomli for Python < 3.11, tomllib for 3.11+
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """
    pipecomp configuration.

    Configuration file locations (in order of precedence):
    1. --config argument
    2. .pipecomp.toml in current directory
    3. ~/.config/pipecomp/config.toml
    """

    # Completion settings
    stages_provider: bool = True
    stage_providers: list[str] = field(default_factory=lambda: ["$search"])

    # Parser settings
    recover: bool = True
    debug_parser: bool = False

    # Logging settings
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    # REPL settings
    history_file: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """
        Create config from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            Config instance
        """
        config = cls()

        # Completion settings
        completion = data.get("completion", {})
        if "stages_provider" in completion:
            config.stages_provider = bool(completion["stages_provider"])
        if "stage_providers" in completion:
            providers = completion["stage_providers"]
            if isinstance(providers, list):
                config.stage_providers = [str(p) for p in providers]

        # Parser settings
        parser = data.get("parser", {})
        if "recover" in parser:
            config.recover = bool(parser["recover"])
        if "debug" in parser:
            config.debug_parser = bool(parser["debug"])

        # Logging settings
        log = data.get("logging", {})
        if "level" in log:
            config.log_level = str(log["level"]).upper()
        if "file" in log:
            config.log_file = Path(log["file"]).expanduser()

        # REPL settings
        repl = data.get("repl", {})
        if "history_file" in repl:
            config.history_file = Path(repl["history_file"]).expanduser()

        return config

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "completion": {
                "stages_provider": self.stages_provider,
                "stage_providers": list(self.stage_providers),
            },
            "parser": {
                "recover": self.recover,
                "debug": self.debug_parser,
            },
            "logging": {
                "level": self.log_level,
                "file": str(self.log_file) if self.log_file else None,
            },
            "repl": {
                "history_file": str(self.history_file) if self.history_file else None,
            },
        }


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration.

    Args:
        config_path: Optional explicit config path

    Returns:
        Config instance
    """
    # Try explicit path first
    if config_path and config_path.exists():
        return _load_from_file(config_path)

    # Try current directory
    local_config = Path(".pipecomp.toml")
    if local_config.exists():
        return _load_from_file(local_config)

    # Try user config directory
    user_config = Path.home() / ".config" / "pipecomp" / "config.toml"
    if user_config.exists():
        return _load_from_file(user_config)

    # Return defaults
    return Config()


def _load_from_file(path: Path) -> Config:
    """Load config from TOML file."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return Config.from_dict(data)
    except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError) as e:
        logger.warning("Failed to load config from %s: %s", path, e)
        return Config()
