from pathlib import Path

import pytest

from votoclaro.config.loader import ConfigLoader
from votoclaro.config.schemas import AppConfig, StorageBackend
from votoclaro.config.validation import RuntimeValidator
from votoclaro.core.bootstrap import build_context, build_store
from votoclaro.core.storage import FileKeyValueStore, MemoryKeyValueStore


def test_app_config_parses(tmp_path: Path) -> None:
    path = tmp_path / "votoclaro.yaml"
    path.write_text(
        """
version: 1
storage:
  backend: file
  directory: "{directory}"
  key: eleccion_2026
logging:
  level: debug
""".format(directory=tmp_path / "data"),
        encoding="utf-8",
    )

    config = ConfigLoader.load_app_config(path)

    assert config.storage.backend == StorageBackend.FILE
    assert config.storage.directory == tmp_path / "data"
    assert config.storage.key == "eleccion_2026"
    assert config.logging.level == "DEBUG"


def test_defaults_apply_to_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "votoclaro.yaml"
    path.write_text("", encoding="utf-8")

    config = ConfigLoader.load_app_config(path)

    assert config == AppConfig()
    assert config.storage.key == "votoclaro_pro_v2"


def test_rejects_unknown_version(tmp_path: Path) -> None:
    path = tmp_path / "votoclaro.yaml"
    path.write_text("version: 2\n", encoding="utf-8")

    with pytest.raises(ValueError, match="version"):
        ConfigLoader.load_app_config(path)


def test_rejects_blank_storage_key(tmp_path: Path) -> None:
    path = tmp_path / "votoclaro.yaml"
    path.write_text("version: 1\nstorage:\n  key: '  '\n", encoding="utf-8")

    with pytest.raises(ValueError, match="storage.key"):
        ConfigLoader.load_app_config(path)


def test_rejects_non_mapping_root(tmp_path: Path) -> None:
    path = tmp_path / "votoclaro.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError):
        ConfigLoader.load_app_config(path)


def test_storage_directory_that_is_a_file_is_an_error(tmp_path: Path) -> None:
    blocker = tmp_path / "data"
    blocker.write_text("x", encoding="utf-8")
    config = AppConfig.model_validate({"storage": {"directory": str(blocker)}})

    report = RuntimeValidator.validate_storage(config)

    assert not report.ok
    with pytest.raises(ValueError):
        build_context(config)


def test_missing_storage_directory_is_a_warning(tmp_path: Path) -> None:
    config = AppConfig.model_validate({"storage": {"directory": str(tmp_path / "new")}})

    report = RuntimeValidator.validate_storage(config)

    assert report.ok
    assert len(report.warnings) == 1


def test_build_store_follows_backend(tmp_path: Path) -> None:
    file_config = AppConfig.model_validate({"storage": {"directory": str(tmp_path)}})
    memory_config = AppConfig.model_validate({"storage": {"backend": "memory"}})

    assert isinstance(build_store(file_config), FileKeyValueStore)
    assert isinstance(build_store(memory_config), MemoryKeyValueStore)

    context = build_context(memory_config)
    assert context.repository.get_candidates() == []
    assert context.warnings
