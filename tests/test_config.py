"""Tests for TOML config file loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from piolex.cli import build_parser, load_config, main, resolve_options
from piolex.errors import ConfigError
from piolex.styles import Style
from piolex.tokens import TokenCategory


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('format = "ansi"\n')
        assert load_config(cfg, tmp_path) == {"format": "ansi"}

    def test_auto_discover_piolex_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "piolex.toml"
        cfg.write_text('[styles]\nlabel = "#aa5500"\n')
        assert load_config(None, tmp_path) == {"styles": {"label": "#aa5500"}}

    def test_invalid_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "piolex.toml"
        cfg.write_text("format = \n")
        with pytest.raises(ConfigError, match="invalid TOML"):
            load_config(None, tmp_path)


def _options(tmp_path: Path, *argv: str):
    src = tmp_path / "prog.pio"
    src.write_text("")
    return resolve_options(build_parser().parse_args([str(src), *argv]))


class TestConfigMerge:
    def test_defaults(self, tmp_path: Path) -> None:
        opts = _options(tmp_path)
        assert opts.format == "html"
        assert opts.standalone is False

    def test_config_format(self, tmp_path: Path) -> None:
        (tmp_path / "piolex.toml").write_text('format = "tokens"\nstandalone = true\n')
        opts = _options(tmp_path)
        assert opts.format == "tokens"
        assert opts.standalone is True

    def test_cli_overrides_config_format(self, tmp_path: Path) -> None:
        (tmp_path / "piolex.toml").write_text('format = "tokens"\n')
        assert _options(tmp_path, "-f", "ansi").format == "ansi"

    def test_unknown_config_format(self, tmp_path: Path) -> None:
        (tmp_path / "piolex.toml").write_text('format = "pdf"\n')
        with pytest.raises(ConfigError, match="unknown output format 'pdf'"):
            _options(tmp_path)

    def test_config_styles(self, tmp_path: Path) -> None:
        (tmp_path / "piolex.toml").write_text('[styles]\nregister = "#111111 italic"\n')
        opts = _options(tmp_path)
        assert opts.styles[TokenCategory.REGISTER] == Style("#111111", italic=True)

    def test_cli_style_overrides_config_style(self, tmp_path: Path) -> None:
        (tmp_path / "piolex.toml").write_text('[styles]\nregister = "#111111"\n')
        opts = _options(tmp_path, "--style", "register=#222222")
        assert opts.styles[TokenCategory.REGISTER] == Style("#222222")

    def test_cli_style_keeps_other_config_styles(self, tmp_path: Path) -> None:
        (tmp_path / "piolex.toml").write_text('[styles]\nlabel = "#aa5500"\n')
        opts = _options(tmp_path, "--style", "register=#222222")
        assert opts.styles[TokenCategory.LABEL] == Style("#aa5500")
        assert opts.styles[TokenCategory.REGISTER] == Style("#222222")

    def test_styles_must_be_table(self, tmp_path: Path) -> None:
        (tmp_path / "piolex.toml").write_text('styles = "loud"\n')
        with pytest.raises(ConfigError, match="must be a table"):
            _options(tmp_path)

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "alt.toml"
        cfg.write_text('format = "ansi"\n')
        assert _options(tmp_path, "--config", str(cfg)).format == "ansi"

    def test_config_error_exit_code(self, tmp_path: Path, capsys) -> None:
        (tmp_path / "piolex.toml").write_text('[styles]\nlabel = "neon"\n')
        src = tmp_path / "prog.pio"
        src.write_text("")
        assert main([str(src)]) == 2
        err = capsys.readouterr().err
        assert "invalid style word 'neon'" in err
        assert "[styles.label]" in err
