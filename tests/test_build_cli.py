"""Smoke tests for the build CLI with the builder stubbed out."""

from pathlib import Path
from unittest.mock import patch

import pytest

from scorepack.compiler.cli import build_artifact_main
from scorepack.compiler.errors import ServiceUnreachableError

ARGS = [
    "--project_id", "7",
    "--model_id", "42",
    "--model_name", "gbm_churn",
    "--artifact", "pywar",
    "--kind", "mojo",
    "--package", "churn_scoring",
    "--address", "builder:8080",
]


@pytest.fixture(autouse=True)
def no_dotenv(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def test_prints_artifact_path(tmp_path: Path, capsys) -> None:
    target = tmp_path / "model" / "42" / "gbm_churn-python.war"

    with patch("scorepack.compiler.cli.ArtifactBuilder") as builder_cls:
        builder_cls.return_value.build.return_value = target
        code = build_artifact_main(ARGS + ["--workdir", str(tmp_path)])

    assert code == 0
    assert capsys.readouterr().out.strip() == str(target)
    args, _ = builder_cls.call_args
    assert args == ("builder:8080", tmp_path)
    request = builder_cls.return_value.build.call_args[0][0]
    assert request.artifact_kind == "pywar"
    assert request.model_kind == "mojo"
    assert request.package_name == "churn_scoring"


def test_build_error_exits_nonzero(capsys) -> None:
    with patch("scorepack.compiler.cli.ArtifactBuilder") as builder_cls:
        builder_cls.return_value.build.side_effect = ServiceUnreachableError("service down")
        code = build_artifact_main(ARGS)

    assert code == 1
    assert "service down" in capsys.readouterr().err


def test_rejects_unknown_artifact() -> None:
    with pytest.raises(SystemExit):
        build_artifact_main(["--project_id", "1", "--model_id", "1", "--model_name", "m",
                             "--artifact", "ear", "--kind", "pojo"])


def test_missing_config_exits_nonzero(tmp_path: Path, capsys) -> None:
    code = build_artifact_main(ARGS + ["--config", str(tmp_path / "absent.yaml")])
    assert code == 1
    assert "Config not found" in capsys.readouterr().err


def test_invalid_log_level_exits_nonzero(capsys) -> None:
    code = build_artifact_main(ARGS + ["--log_level", "LOUD"])
    assert code == 1
    assert "Invalid log level" in capsys.readouterr().err
