import json
from pathlib import Path

import pytest

from votoclaro.cli import main


@pytest.fixture()
def config_path(tmp_path: Path) -> str:
    path = tmp_path / "votoclaro.yaml"
    path.write_text(
        "version: 1\nstorage:\n  directory: \"{}\"\nlogging:\n  level: WARNING\n".format(tmp_path / "data"),
        encoding="utf-8",
    )
    return str(path)


def test_full_flow_produces_stats(config_path: str, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--config", config_path, "candidate", "add", "Ana", "--party", "Azul"]) == 0
    assert main(["--config", config_path, "candidate", "add", "Luis"]) == 0
    assert main(["--config", config_path, "station", "add", "Mesa 1", "--eligible", "100"]) == 0
    capsys.readouterr()

    code = main(
        [
            "--config",
            config_path,
            "result",
            "set",
            "mesa 1",
            "--vote",
            "Ana=40",
            "--vote",
            "luis=35",
            "--blank",
            "5",
            "--null",
            "2",
        ]
    )
    assert code == 0
    capsys.readouterr()

    assert main(["--config", config_path, "stats", "--json"]) == 0
    stats = json.loads(capsys.readouterr().out)
    assert stats["total_valid"] == 75
    assert stats["total_cast"] == 82
    assert stats["participation_pct"] == pytest.approx(82.0)
    assert [entry["name"] for entry in stats["ranking"]] == ["Ana", "Luis"]
    assert stats["stations_pending"] == 0


def test_duplicate_candidate_exits_with_error(config_path: str, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--config", config_path, "candidate", "add", "Ana"]) == 0
    assert main(["--config", config_path, "candidate", "add", "ANA"]) == 1
    assert "already exists" in capsys.readouterr().err


def test_invalid_votes_are_rejected(config_path: str, capsys: pytest.CaptureFixture[str]) -> None:
    main(["--config", config_path, "candidate", "add", "Ana"])
    main(["--config", config_path, "station", "add", "Mesa 1", "--eligible", "10"])

    assert main(["--config", config_path, "result", "set", "Mesa 1", "--vote", "Ana=-3"]) == 2
    assert main(["--config", config_path, "result", "set", "Mesa 1", "--vote", "Ana"]) == 2

    capsys.readouterr()
    main(["--config", config_path, "result", "show", "Mesa 1"])
    assert "No result recorded" in capsys.readouterr().out


def test_over_eligible_total_warns_but_saves(config_path: str, capsys: pytest.CaptureFixture[str]) -> None:
    main(["--config", config_path, "candidate", "add", "Ana"])
    main(["--config", config_path, "station", "add", "Mesa 1", "--eligible", "10"])

    assert main(["--config", config_path, "result", "set", "Mesa 1", "--vote", "Ana=12"]) == 0
    assert "warning" in capsys.readouterr().err

    main(["--config", config_path, "result", "show", "Mesa 1"])
    assert "Ana: 12" in capsys.readouterr().out


def test_reset_requires_confirmation(config_path: str, capsys: pytest.CaptureFixture[str]) -> None:
    main(["--config", config_path, "candidate", "add", "Ana"])

    assert main(["--config", config_path, "reset"]) == 2
    assert main(["--config", config_path, "reset", "--yes"]) == 0

    capsys.readouterr()
    main(["--config", config_path, "candidate", "list", "--json"])
    assert json.loads(capsys.readouterr().out) == []
