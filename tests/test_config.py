"""
Unit tests for config loading: defaults, YAML, .env and environment overrides.
"""
from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

from cblogger.core.exceptions import ConfigError
from cblogger.utils.config import LoggerConfig, load_config, load_config_or_defaults

ENV_KEYS = (
    "CBLOGGER_CONFIG",
    "CBLOGGER_DEPTH",
    "CBLOGGER_TIMESTAMPS",
    "CBLOGGER_REQUEST_ID_KEY",
    "CBLOGGER_SOURCE_ROOT",
    "CBLOGGER_TRACING",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # load_dotenv writes straight into os.environ; isolate it per test
    monkeypatch.setattr(os, "environ", os.environ.copy())
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "missing.yaml")
    assert cfg == LoggerConfig()
    assert cfg.option_defaults() == {"ts": True, "depth": 4}


def test_yaml_values(tmp_path: Path) -> None:
    path = tmp_path / "cblogger.yaml"
    path.write_text(
        "cblogger:\n"
        "  default_depth: 2\n"
        "  timestamps: false\n"
        "  request_id_key: rid\n"
        "  tracing: true\n",
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.default_depth == 2
    assert cfg.timestamps is False
    assert cfg.request_id_key == "rid"
    assert cfg.tracing is True


def test_env_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "cblogger.yaml"
    path.write_text("default_depth: 2\n", encoding="utf-8")
    monkeypatch.setenv("CBLOGGER_DEPTH", "6")
    monkeypatch.setenv("CBLOGGER_TIMESTAMPS", "no")
    monkeypatch.setenv("CBLOGGER_SOURCE_ROOT", "/srv/app")
    cfg = load_config(path)
    assert cfg.default_depth == 6
    assert cfg.timestamps is False
    assert cfg.source_root == "/srv/app"


def test_env_file_is_loaded(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("CBLOGGER_DEPTH=7\nCBLOGGER_TRACING=true\n", encoding="utf-8")
    cfg = load_config(tmp_path / "missing.yaml", env_file=env_file)
    assert cfg.default_depth == 7
    assert cfg.tracing is True


def test_malformed_yaml_raises(tmp_path: Path) -> None:
    path = tmp_path / "cblogger.yaml"
    path.write_text("default_depth: [1, 2\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_non_mapping_yaml_raises(tmp_path: Path) -> None:
    path = tmp_path / "cblogger.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


@pytest.mark.parametrize("depth", ["0", "-3", "deep"])
def test_invalid_depth_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, depth: str) -> None:
    monkeypatch.setenv("CBLOGGER_DEPTH", depth)
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml")


def test_with_overrides_ignores_none_and_unknown() -> None:
    cfg = LoggerConfig().with_overrides(default_depth=3, timestamps=None, bogus=1)
    assert cfg.default_depth == 3
    assert cfg.timestamps is True


@pytest.mark.parametrize("depth", ["abc", "0"])
def test_lenient_loader_falls_back_to_defaults(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture, depth: str
) -> None:
    monkeypatch.setenv("CBLOGGER_DEPTH", depth)
    with caplog.at_level("WARNING", logger="cblogger.utils.config"):
        cfg = load_config_or_defaults(tmp_path / "missing.yaml")
    assert cfg == LoggerConfig()
    assert "falling back to defaults" in caplog.text


def test_lenient_loader_keeps_valid_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CBLOGGER_DEPTH", "3")
    assert load_config_or_defaults(tmp_path / "missing.yaml").default_depth == 3


@pytest.mark.parametrize("depth", ["abc", "0"])
def test_package_imports_with_invalid_env(tmp_path: Path, depth: str) -> None:
    env = {**os.environ, "CBLOGGER_DEPTH": depth, "CBLOGGER_CONFIG": str(tmp_path / "missing.yaml")}
    result = subprocess.run(
        [sys.executable, "-c", "import cblogger; print(cblogger.logger.config.default_depth)"],
        env=env,
        cwd=Path(__file__).resolve().parents[1],
        capture_output=True,
        text=True,
        timeout=60,
    )
    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "4"
