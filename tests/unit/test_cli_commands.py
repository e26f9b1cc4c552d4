from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING

import pytest
from typer.testing import CliRunner

from subnet_groups.cli import _configure_logging, app, log_level

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

runner = CliRunner()

_YAML = """\
store:
  path: exports.json
vpc:
  name: Net
  vpc_id: vpc-0abc
  availability_zones: [az1, az2]
  subnets:
    - name: Web
      type: public
      subnet_ids: [sn-w1, sn-w2]
    - name: App
      type: private
      subnet_ids: [sn-a1, sn-a2]
"""


def _strip_ansi(text: str) -> str:
    return re.sub(r"\x1b\[[0-9;]*m", "", text)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "subnet-groups.yaml"
    path.write_text(_YAML)
    return path


class TestVersion:
    def test_version_flag(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "subnet-groups" in result.stdout
        assert "store format v1" in result.stdout
        assert "public, private, isolated" in result.stdout

    def test_short_version_flag(self) -> None:
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0
        assert "subnet-groups" in result.stdout


class TestExportCommand:
    def test_export(self, config_file: Path, tmp_path: Path) -> None:
        result = runner.invoke(app, ["export", "--no-color", "--config", str(config_file)])
        assert result.exit_code == 0, result.output
        assert "Exported:" in result.stdout
        assert "${ImportValue:NetPublicSubnetIDs:0}" in result.stdout
        assert "public_subnet_names" in result.stdout
        assert (tmp_path / "exports.json").exists()

    def test_export_out(self, config_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "props.json"
        result = runner.invoke(
            app, ["export", "--no-color", "-c", str(config_file), "--out", str(out)]
        )
        assert result.exit_code == 0, result.output
        assert "Props saved" in result.stdout
        data = json.loads(out.read_text())
        assert data["private_subnet_names"] == ["App"]
        assert data["public_subnet_names"] == ["Web"]

    def test_color_output(self, config_file: Path) -> None:
        result = runner.invoke(app, ["export", "-c", str(config_file)], color=True)
        assert result.exit_code == 0, result.output
        assert "Exported:" in _strip_ansi(result.stdout)

    def test_config_error_exits_1(self, tmp_path: Path) -> None:
        missing = tmp_path / "missing.yaml"
        result = runner.invoke(app, ["export", "--no-color", "-c", str(missing)])
        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestImportCommand:
    def _export(self, config_file: Path, tmp_path: Path) -> Path:
        out = tmp_path / "props.json"
        result = runner.invoke(
            app, ["export", "--no-color", "-c", str(config_file), "-o", str(out)]
        )
        assert result.exit_code == 0, result.output
        return out

    def test_import(self, config_file: Path, tmp_path: Path) -> None:
        props = self._export(config_file, tmp_path)
        result = runner.invoke(
            app,
            ["import", str(props), "--store", str(tmp_path / "exports.json"), "--no-color"],
        )
        assert result.exit_code == 0, result.output
        for subnet in ("sn-w1", "sn-w2", "sn-a1", "sn-a2"):
            assert subnet in result.stdout
        assert "vpc-0abc" in result.stdout

    def test_store_from_env(
        self, config_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        props = self._export(config_file, tmp_path)
        monkeypatch.setenv("SUBNET_GROUPS_STORE_PATH", str(tmp_path / "exports.json"))
        result = runner.invoke(app, ["import", str(props), "--no-color"])
        assert result.exit_code == 0, result.output
        assert "sn-a1" in result.stdout

    def test_unresolved_reference(self, config_file: Path, tmp_path: Path) -> None:
        props = self._export(config_file, tmp_path)
        empty_store = tmp_path / "empty.json"
        empty_store.write_text("{}")
        result = runner.invoke(app, ["import", str(props), "-s", str(empty_store), "--no-color"])
        assert result.exit_code == 1
        assert "Unresolved import" in result.output

    def test_layout_error(self, tmp_path: Path) -> None:
        props = tmp_path / "props.json"
        props.write_text(
            json.dumps(
                {
                    "vpc_id": "vpc-1",
                    "availability_zones": ["az1", "az2"],
                    "private_subnet_ids": ["s1", "s2", "s3"],
                }
            )
        )
        result = runner.invoke(app, ["import", str(props), "--no-color"])
        assert result.exit_code == 1
        assert "Invalid subnet layout" in result.output
        assert "private_subnet_ids" in result.output

    def test_invalid_group_name(self, tmp_path: Path) -> None:
        props = tmp_path / "props.json"
        props.write_text(
            json.dumps(
                {
                    "vpc_id": "vpc-1",
                    "availability_zones": ["az1"],
                    "public_subnet_ids": ["s1"],
                    "public_subnet_names": ["edge/a"],
                }
            )
        )
        result = runner.invoke(app, ["import", str(props), "--no-color"])
        assert result.exit_code == 1
        assert "Invalid subnet layout" in result.output
        assert "public_subnet_names" in result.output

    def test_invalid_props_file(self, tmp_path: Path) -> None:
        props = tmp_path / "props.json"
        props.write_text(json.dumps({"availability_zones": ["az1"]}))
        result = runner.invoke(app, ["import", str(props), "--no-color"])
        assert result.exit_code == 1
        assert "Invalid input" in result.output
        assert "vpc_id" in result.output


class TestLogging:
    @pytest.fixture(autouse=True)
    def _restore_logging(self) -> Iterator[None]:
        logger = logging.getLogger("subnet_groups")
        level, handlers, propagate = logger.level, logger.handlers[:], logger.propagate
        yield
        logger.setLevel(level)
        logger.handlers[:] = handlers
        logger.propagate = propagate

    def test_verbose_flags(self) -> None:
        _configure_logging(1)
        assert logging.getLogger("subnet_groups").level == logging.INFO
        _configure_logging(2)
        assert logging.getLogger("subnet_groups").level == logging.DEBUG

    def test_env_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUBNET_GROUPS_LOG", "warning")
        _configure_logging(0)
        assert logging.getLogger("subnet_groups").level == logging.WARNING

    def test_invalid_env_level_defaults_to_info(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("SUBNET_GROUPS_LOG", "chatty")
        _configure_logging(0)
        assert logging.getLogger("subnet_groups").level == logging.INFO
        assert "invalid SUBNET_GROUPS_LOG" in capsys.readouterr().err

    def test_no_flags_leaves_logging_alone(self) -> None:
        assert log_level(0) is None

    def test_env_level_beats_verbose_flags(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUBNET_GROUPS_LOG", "error")
        assert log_level(2) == logging.ERROR
