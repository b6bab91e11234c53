from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from votoclaro.core.repository import DEFAULT_STORAGE_KEY


class StorageBackend(str, Enum):
    FILE = "file"
    MEMORY = "memory"


class StorageConfig(BaseModel):
    backend: StorageBackend = StorageBackend.FILE
    directory: Path = Path("data")
    key: str = DEFAULT_STORAGE_KEY

    @field_validator("key")
    @classmethod
    def validate_key_not_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("storage.key cannot be empty")
        return value


class LoggingConfig(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


class AppConfig(BaseModel):
    version: int = 1
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("version")
    @classmethod
    def validate_version(cls, value: int) -> int:
        if value != 1:
            raise ValueError("Only config version=1 is supported")
        return value


def raise_config_error(context: str, error: ValidationError) -> ValueError:
    details = "; ".join(f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in error.errors())
    return ValueError(f"{context} validation failed: {details}")
