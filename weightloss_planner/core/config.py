from __future__ import annotations

"""Configuration utilities for the project."""

import json
import os
from pathlib import Path

__all__ = [
    "CONFIG_PATH",
    "load_config",
    "telegram_bot_token",
    "language",
    "log_level",
]

# Override with the monkeypatch fixture in tests.
CONFIG_PATH: Path = Path(__file__).resolve().parent.parent.parent / "config.json"


def load_config() -> dict:
    """Load configuration from ``config.json`` or environment variables."""
    if CONFIG_PATH.exists():
        with CONFIG_PATH.open("r", encoding="utf-8") as f:
            data = []
            for line in f:
                stripped = line.strip()
                if stripped.startswith("#") or stripped.startswith("//"):
                    continue
                if "#" in line:
                    line = line.split("#", 1)[0]
                if "//" in line:
                    line = line.split("//", 1)[0]
                data.append(line)
            return json.loads("".join(data))
    return {
        "telegram_bot_token": os.getenv("TELEGRAM_BOT_TOKEN", ""),
        "language": os.getenv("PLANNER_LANGUAGE", "ja"),
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
    }


def telegram_bot_token() -> str:
    """Return the configured Telegram bot token, if any.

    An empty value in ``config.json`` does not override a valid
    ``TELEGRAM_BOT_TOKEN`` environment variable.
    """
    cfg = load_config()
    return cfg.get("telegram_bot_token") or os.getenv("TELEGRAM_BOT_TOKEN", "")


def language() -> str:
    """Return the language used for bot replies."""
    cfg = load_config()
    return cfg.get("language") or os.getenv("PLANNER_LANGUAGE", "ja")


def log_level() -> str:
    cfg = load_config()
    return (cfg.get("log_level") or os.getenv("LOG_LEVEL", "INFO")).upper()
