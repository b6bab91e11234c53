from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from votoclaro.config.schemas import AppConfig, raise_config_error

DEFAULT_CONFIG_PATH = Path("votoclaro.yaml")


class ConfigLoader:
    @staticmethod
    def load_yaml(path: Path | str) -> dict[str, Any]:
        source = Path(path)
        with source.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle) or {}
        if not isinstance(payload, dict):
            raise ValueError(f"YAML root must be a mapping: {source}")
        return payload

    @classmethod
    def load_app_config(cls, path: Path | str) -> AppConfig:
        payload = cls.load_yaml(path)
        try:
            return AppConfig.model_validate(payload)
        except ValidationError as error:
            raise raise_config_error(Path(path).name, error) from error

    @classmethod
    def load_or_default(cls, path: Path | str | None = None) -> AppConfig:
        source = Path(path) if path is not None else DEFAULT_CONFIG_PATH
        if path is None and not source.exists():
            return AppConfig()
        return cls.load_app_config(source)
