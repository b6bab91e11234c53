from __future__ import annotations

import logging
from dataclasses import dataclass, field

from votoclaro.config.schemas import AppConfig, StorageBackend
from votoclaro.config.validation import RuntimeValidator
from votoclaro.core.repository import ElectionRepository
from votoclaro.core.storage import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    config: AppConfig
    repository: ElectionRepository
    warnings: list[str] = field(default_factory=list)


def build_store(config: AppConfig) -> KeyValueStore:
    if config.storage.backend == StorageBackend.MEMORY:
        return MemoryKeyValueStore()
    return FileKeyValueStore(config.storage.directory)


def build_context(config: AppConfig) -> AppContext:
    report = RuntimeValidator.validate_storage(config)
    if not report.ok:
        raise ValueError("; ".join(report.errors))
    for warning in report.warnings:
        logger.warning(warning)

    repository = ElectionRepository(build_store(config), key=config.storage.key).init()
    return AppContext(config=config, repository=repository, warnings=list(report.warnings))
