"""Configuration helpers for the closet analytics app."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_DATABASE_PATH = "data/closet.db"
DEFAULT_WORN_LIST_LIMIT = 6


@dataclass
class ClosetConfig:
    """Configuration values for the closet analytics app.

    ``timezone`` decides which calendar day counts as "today" for streaks and
    week strips. ``worn_list_limit`` mirrors the ``limit`` query parameter the
    analytics screen sends when none is given.
    """

    database_path: str = DEFAULT_DATABASE_PATH
    timezone: str = "UTC"
    worn_list_limit: int = DEFAULT_WORN_LIST_LIMIT
    log_level: str = "INFO"
    environment: str | None = None

    @classmethod
    def from_env(cls) -> "ClosetConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default. Environment variables win over values from the file.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("CLOSET_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        database_path = get_value("database_path", DEFAULT_DATABASE_PATH)
        timezone = get_value("timezone", "UTC")
        raw_limit = get_value("worn_list_limit", str(DEFAULT_WORN_LIST_LIMIT))
        log_level = get_value("log_level", "INFO")

        try:
            worn_list_limit = int(raw_limit or DEFAULT_WORN_LIST_LIMIT)
        except ValueError as exc:
            raise ValueError(f"worn_list_limit must be an integer, got {raw_limit!r}") from exc
        if worn_list_limit < 1:
            raise ValueError("worn_list_limit must be positive")

        return cls(
            database_path=str(database_path or DEFAULT_DATABASE_PATH),
            timezone=str(timezone or "UTC"),
            worn_list_limit=worn_list_limit,
            log_level=str(log_level or "INFO").upper(),
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal YAML/INI-style config without external dependencies."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
