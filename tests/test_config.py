"""Tests for headerlint.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from headerlint.config import ConfigError, HeaderLintConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, HeaderLintConfig)
    assert config.root == tmp_path.resolve()
    assert config.repository is None
    assert config.rules is None
    assert config.skip_files == ["LICENSE.md", "COPYRIGHT.md"]
    assert config.fixer.max_passes == 50
    assert config.licensing.regenerate is True
    assert config.licensing.holder is None
    assert config.licensing.templates_dir is None
    assert config.report.show_warnings is True


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".headerlint.yml"
    config_file.write_text(
        """
repository: "acme/widgets"
rules: [file-level-docblock]
skip_files:
  - "LICENSE.md"
  - "COPYRIGHT.md"
  - "bin/console.php"
fixer:
  max_passes: 5
licensing:
  regenerate: false
  holder: "Acme Corporation"
  templates_dir: "build/license-templates"
report:
  show_warnings: "no"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.repository == "acme/widgets"
    assert config.rules == ["file-level-docblock"]
    assert config.skip_files == ["LICENSE.md", "COPYRIGHT.md", "bin/console.php"]
    assert config.fixer.max_passes == 5
    assert config.licensing.regenerate is False
    assert config.licensing.holder == "Acme Corporation"
    assert config.licensing.templates_dir == tmp_path.resolve() / "build/license-templates"
    assert config.report.show_warnings is False


def test_load_config_accepts_file_next_to_config(tmp_path: Path) -> None:
    (tmp_path / ".headerlint.yml").write_text("repository: foo/bar\n", encoding="utf-8")

    config = load_config(tmp_path / "composer.json")

    assert config.repository == "foo/bar"


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".headerlint.yml").write_text("\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.fixer.max_passes == 50


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("- just\n- a list\n", "mapping"),
        ("fixer: {max_passes: 0}\n", "max_passes"),
        ("repository: [unclosed\n", "Failed to parse"),
        ("fixer: 3\n", "fixer must be a mapping"),
        ("fixer: {max_passes: many}\n", "fixer.max_passes must be an integer"),
        ("report: {show_warnings: maybe}\n", "report.show_warnings must be true or false"),
        ("skip_files: {LICENSE.md: 1}\n", "skip_files must be a string or a list"),
    ],
)
def test_invalid_config_raises(tmp_path: Path, text: str, message: str) -> None:
    (tmp_path / ".headerlint.yml").write_text(text, encoding="utf-8")

    with pytest.raises(ConfigError, match=message):
        load_config(tmp_path)
