"""Configuration management using TOML + environment variables."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[no-redef]

import tomli_w

CONFIG_DIR = Path.home() / ".charsheet-terminal"
CONFIG_FILE = CONFIG_DIR / "config.toml"
LOG_FILE = CONFIG_DIR / "session.log"

DEFAULT_PROMPT = "> "

_TRUE_VALUES = ("true", "1", "yes", "on")


@dataclass
class OutputConfig:
    char_delay_ms: int = 20
    fast_delay_ms: int = 10
    slow_delay_ms: int = 100
    table_delay_ms: int = 5
    color: bool = True


@dataclass
class SessionConfig:
    character_file: str = "./character.json"
    prompt: str = DEFAULT_PROMPT
    fast_boot: bool = False


@dataclass
class StorageConfig:
    db_path: str = "~/.charsheet-terminal/history.db"
    history_enabled: bool = True


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    file: str = "~/.charsheet-terminal/session.log"


@dataclass
class AppConfig:
    output: OutputConfig = field(default_factory=OutputConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def sections(self) -> dict[str, object]:
        return {
            "output": self.output,
            "session": self.session,
            "storage": self.storage,
            "logging": self.logging,
        }


def ensure_config_dir() -> None:
    """Create config directory with secure permissions."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    os.chmod(CONFIG_DIR, 0o700)


def load_config() -> AppConfig:
    """Load configuration from TOML file with env var overrides."""
    config = AppConfig()

    if CONFIG_FILE.exists():
        with open(CONFIG_FILE, "rb") as f:
            data = tomllib.load(f)

        output = data.get("output", {})
        config.output.char_delay_ms = output.get("char_delay_ms", config.output.char_delay_ms)
        config.output.fast_delay_ms = output.get("fast_delay_ms", config.output.fast_delay_ms)
        config.output.slow_delay_ms = output.get("slow_delay_ms", config.output.slow_delay_ms)
        config.output.table_delay_ms = output.get("table_delay_ms", config.output.table_delay_ms)
        config.output.color = output.get("color", config.output.color)

        session = data.get("session", {})
        config.session.character_file = session.get("character_file", config.session.character_file)
        config.session.prompt = session.get("prompt", config.session.prompt)
        config.session.fast_boot = session.get("fast_boot", config.session.fast_boot)

        storage = data.get("storage", {})
        config.storage.db_path = storage.get("db_path", config.storage.db_path)
        config.storage.history_enabled = storage.get("history_enabled", config.storage.history_enabled)

        logging_cfg = data.get("logging", {})
        config.logging.level = logging_cfg.get("level", config.logging.level)
        config.logging.file = logging_cfg.get("file", config.logging.file)

    # Environment variable overrides
    if env_delay := os.environ.get("CHARSHEET_CHAR_DELAY_MS"):
        config.output.char_delay_ms = int(env_delay)
    if env_color := os.environ.get("CHARSHEET_COLOR"):
        config.output.color = env_color.lower() in _TRUE_VALUES
    if env_character := os.environ.get("CHARSHEET_CHARACTER_FILE"):
        config.session.character_file = env_character
    if env_fast_boot := os.environ.get("CHARSHEET_FAST_BOOT"):
        config.session.fast_boot = env_fast_boot.lower() in _TRUE_VALUES
    if env_db := os.environ.get("CHARSHEET_DB_PATH"):
        config.storage.db_path = env_db
    if env_log_level := os.environ.get("CHARSHEET_LOG_LEVEL"):
        config.logging.level = env_log_level

    return config


def save_config(config: AppConfig) -> None:
    """Save configuration to TOML file."""
    ensure_config_dir()

    data = {
        "output": {
            "char_delay_ms": config.output.char_delay_ms,
            "fast_delay_ms": config.output.fast_delay_ms,
            "slow_delay_ms": config.output.slow_delay_ms,
            "table_delay_ms": config.output.table_delay_ms,
            "color": config.output.color,
        },
        "session": {
            "character_file": config.session.character_file,
            "prompt": config.session.prompt,
            "fast_boot": config.session.fast_boot,
        },
        "storage": {
            "db_path": config.storage.db_path,
            "history_enabled": config.storage.history_enabled,
        },
        "logging": {
            "level": config.logging.level,
            "file": config.logging.file,
        },
    }

    with open(CONFIG_FILE, "wb") as f:
        tomli_w.dump(data, f)

    os.chmod(CONFIG_FILE, 0o600)


# Global singleton
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get or load the global config singleton."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the global config (for testing)."""
    global _config
    _config = None
