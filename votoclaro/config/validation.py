from __future__ import annotations

import os
from dataclasses import dataclass, field

from votoclaro.config.schemas import AppConfig, StorageBackend


@dataclass
class ValidationReport:
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class RuntimeValidator:
    @staticmethod
    def validate_storage(config: AppConfig) -> ValidationReport:
        report = ValidationReport()
        storage = config.storage

        if storage.backend == StorageBackend.MEMORY:
            report.warnings.append("storage.backend is 'memory': data will not survive this process")
            return report

        directory = storage.directory
        if directory.exists() and not directory.is_dir():
            report.errors.append(f"storage.directory is not a directory: {directory}")
            return report

        if not directory.exists():
            report.warnings.append(f"storage.directory does not exist and will be created: {directory}")
        elif not os.access(directory, os.W_OK):
            report.warnings.append(f"storage.directory is not writable, changes will not be saved: {directory}")

        return report
