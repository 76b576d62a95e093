"""Tests for TOML config file loading."""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from loxscan.cli import build_parser, load_config, resolve_options


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('[output]\nformat = "json"\n')
        result = load_config(cfg, tmp_path)
        assert result["output"] == {"format": "json"}

    def test_auto_discover_loxscan_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "loxscan.toml"
        cfg.write_text("[output]\neof = false\n")
        result = load_config(None, tmp_path)
        assert result["output"] == {"eof": False}


class TestConfigMerge:
    def _resolve(self, tmp_path: Path, *extra: str):
        src = tmp_path / "a.lox"
        src.write_text("")
        ns = build_parser().parse_args(["tokenize", str(src), *extra])
        return resolve_options(ns)

    def test_defaults(self, tmp_path: Path) -> None:
        opts = self._resolve(tmp_path)
        assert opts.format == "text"
        assert opts.eof is True
        assert opts.output_file is None
        assert opts.debug is False

    def test_config_format(self, tmp_path: Path) -> None:
        (tmp_path / "loxscan.toml").write_text('[output]\nformat = "json"\n')
        assert self._resolve(tmp_path).format == "json"

    def test_cli_overrides_config_format(self, tmp_path: Path) -> None:
        (tmp_path / "loxscan.toml").write_text('[output]\nformat = "json"\n')
        assert self._resolve(tmp_path, "--format", "text").format == "text"

    def test_config_eof(self, tmp_path: Path) -> None:
        (tmp_path / "loxscan.toml").write_text("[output]\neof = false\n")
        assert self._resolve(tmp_path).eof is False

    def test_cli_no_eof(self, tmp_path: Path) -> None:
        assert self._resolve(tmp_path, "--no-eof").eof is False

    def test_invalid_config_format(self, tmp_path: Path) -> None:
        (tmp_path / "loxscan.toml").write_text('[output]\nformat = "yaml"\n')
        with pytest.raises(argparse.ArgumentTypeError):
            self._resolve(tmp_path)

    def test_non_table_output_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "loxscan.toml").write_text('output = "json"\n')
        assert self._resolve(tmp_path).format == "text"

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "alt.toml"
        cfg.write_text('[output]\nformat = "json"\n')
        assert self._resolve(tmp_path, "--config", str(cfg)).format == "json"
