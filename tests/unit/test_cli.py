#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the mdnorm command line interface."""

import io
import json
from pathlib import Path

import pytest

from mdnorm.cli import (
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    build_options,
    create_parser,
    main,
)
from mdnorm.cli.config import discover_config_file, load_config_file
from mdnorm.constants import CONFIG_ENV_VAR
from mdnorm.exceptions import ConfigError, ValidationError


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run each CLI test from an empty directory."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


@pytest.mark.unit
@pytest.mark.cli
class TestBuildOptions:
    """Test merging config values and flags."""

    def test_defaults_use_input_as_source_file(self) -> None:
        """Test the input path labels diagnostics when not configured."""
        args = create_parser().parse_args(["guide.md"])

        options = build_options(args, {})

        assert options.source_file == "guide.md"
        assert options.gfm is True

    def test_stdin_keeps_default_label(self) -> None:
        """Test reading stdin keeps the default nofile label."""
        args = create_parser().parse_args(["-"])
        assert build_options(args, {}).source_file == "nofile"

    def test_config_values_with_dashed_keys(self) -> None:
        """Test config keys may use dashes."""
        args = create_parser().parse_args(["guide.md"])

        options = build_options(args, {"breaks": True, "start-line": 4, "pure-links": False})

        assert options.breaks is True
        assert options.start_line == 4
        assert options.pure_links is False

    def test_flags_override_config(self) -> None:
        """Test command line flags win over config values."""
        args = create_parser().parse_args(["guide.md", "--no-gfm", "--source-file", "label.md"])

        options = build_options(args, {"gfm": True, "source_file": "config.md"})

        assert options.gfm is False
        assert options.source_file == "label.md"

    def test_unknown_config_key(self) -> None:
        """Test unknown config keys raise ValidationError."""
        args = create_parser().parse_args(["guide.md"])
        with pytest.raises(ValidationError):
            build_options(args, {"typographer": True})


@pytest.mark.unit
@pytest.mark.cli
class TestConfigFiles:
    """Test configuration file discovery and loading."""

    def test_load_toml(self, tmp_path: Path) -> None:
        """Test loading a TOML config."""
        path = tmp_path / ".mdnorm.toml"
        path.write_text("breaks = true\nstart_line = 3\n", encoding="utf-8")

        assert load_config_file(path) == {"breaks": True, "start_line": 3}

    def test_load_yaml(self, tmp_path: Path) -> None:
        """Test loading a YAML config."""
        path = tmp_path / ".mdnorm.yaml"
        path.write_text("gfm: false\n", encoding="utf-8")

        assert load_config_file(path) == {"gfm": False}

    def test_load_json(self, tmp_path: Path) -> None:
        """Test loading a JSON config."""
        path = tmp_path / "settings.json"
        path.write_text('{"math": false}', encoding="utf-8")

        assert load_config_file(path) == {"math": False}

    def test_load_pyproject_section(self, tmp_path: Path) -> None:
        """Test the [tool.mdnorm] table of pyproject.toml."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.mdnorm]\nbreaks = true\n', encoding="utf-8")

        assert load_config_file(path) == {"breaks": True}

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises ConfigError."""
        with pytest.raises(ConfigError):
            load_config_file(tmp_path / "nope.toml")

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        """Test unknown extensions raise ConfigError."""
        path = tmp_path / "config.ini"
        path.write_text("[x]\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Unsupported"):
            load_config_file(path)

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        """Test a config that is not a mapping raises ConfigError."""
        path = tmp_path / ".mdnorm.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="mapping"):
            load_config_file(path)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Test malformed TOML raises ConfigError."""
        path = tmp_path / ".mdnorm.toml"
        path.write_text("breaks = \n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid config file"):
            load_config_file(path)

    def test_discover_in_parent_directory(self, tmp_path: Path) -> None:
        """Test discovery walks up from the start directory."""
        config = tmp_path / ".mdnorm.yml"
        config.write_text("breaks: true\n", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert discover_config_file(nested) == config

    def test_discover_pyproject_only_with_section(self, tmp_path: Path) -> None:
        """Test a pyproject.toml without [tool.mdnorm] is skipped."""
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
        assert discover_config_file(tmp_path) is None

        (tmp_path / "pyproject.toml").write_text("[tool.mdnorm]\ngfm = false\n", encoding="utf-8")
        assert discover_config_file(tmp_path) == tmp_path / "pyproject.toml"


@pytest.mark.unit
@pytest.mark.cli
class TestMain:
    """Test running the command."""

    def test_writes_json_to_stdout(self, workdir: Path, capsys: pytest.CaptureFixture) -> None:
        """Test the normalized AST is printed as JSON."""
        source = workdir / "doc.md"
        source.write_text("Area $r^2$\n", encoding="utf-8")

        exit_code = main([str(source), "--indent", "2"])

        assert exit_code == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data[0]["tag"] == "p"
        assert data[0]["children"][1] == {"node_type": "Text", "content": "$r^2$"}

    def test_writes_json_to_file(self, workdir: Path) -> None:
        """Test --out writes the JSON to a file."""
        source = workdir / "doc.md"
        source.write_text("# Title\n", encoding="utf-8")
        out = workdir / "doc.json"

        assert main([str(source), "-o", str(out)]) == EXIT_SUCCESS
        assert json.loads(out.read_text(encoding="utf-8"))[0]["tag"] == "h1"

    def test_reads_stdin(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
        """Test '-' reads Markdown from stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO("plain\n"))

        assert main(["-"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)[0]["children"] == [{"node_type": "Text", "content": "plain"}]

    def test_diagnostics_logged_to_stderr(self, workdir: Path, capsys: pytest.CaptureFixture) -> None:
        """Test parser diagnostics appear as warnings on stderr and output is still written."""
        source = workdir / "broken.md"
        source.write_text("text\n\n```\nnever closed\n", encoding="utf-8")

        assert main([str(source)]) == EXIT_SUCCESS

        captured = capsys.readouterr()
        assert f"{source}:3: Fenced Code Block opened with ``` not closed" in captured.err
        assert json.loads(captured.out)[1]["tag"] == "pre"

    def test_discovered_config_applied(self, workdir: Path, capsys: pytest.CaptureFixture) -> None:
        """Test a config file in the working directory is picked up."""
        (workdir / ".mdnorm.toml").write_text("breaks = true\n", encoding="utf-8")
        source = workdir / "doc.md"
        source.write_text("a\nb\n", encoding="utf-8")

        assert main([str(source)]) == EXIT_SUCCESS
        children = json.loads(capsys.readouterr().out)[0]["children"]
        assert [child.get("tag") for child in children] == [None, "br", None]

    def test_no_config_flag(self, workdir: Path, capsys: pytest.CaptureFixture) -> None:
        """Test --no-config ignores discovered files."""
        (workdir / ".mdnorm.toml").write_text("breaks = true\n", encoding="utf-8")
        source = workdir / "doc.md"
        source.write_text("a\nb\n", encoding="utf-8")

        assert main([str(source), "--no-config"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)[0]["children"] == [{"node_type": "Text", "content": "a\nb"}]

    def test_config_from_environment(
        self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
    ) -> None:
        """Test MDNORM_CONFIG points at a config file."""
        config = workdir / "custom.json"
        config.write_text('{"math": false}', encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config))
        source = workdir / "doc.md"
        source.write_text("$x$\n", encoding="utf-8")

        assert main([str(source)]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)[0]["children"] == [{"node_type": "Text", "content": "$x$"}]

    def test_bad_config(self, workdir: Path, capsys: pytest.CaptureFixture) -> None:
        """Test an invalid config file is a validation error."""
        config = workdir / "bad.yaml"
        config.write_text("smart: true\n", encoding="utf-8")
        source = workdir / "doc.md"
        source.write_text("x\n", encoding="utf-8")

        assert main([str(source), "--config", str(config)]) == EXIT_VALIDATION_ERROR
        assert "smart" in capsys.readouterr().err

    def test_missing_input_argument(self, workdir: Path, capsys: pytest.CaptureFixture) -> None:
        """Test running without input is a validation error."""
        assert main([]) == EXIT_VALIDATION_ERROR
        assert "Input file is required" in capsys.readouterr().err

    def test_missing_input_file(self, workdir: Path, capsys: pytest.CaptureFixture) -> None:
        """Test a nonexistent input file is a file error."""
        assert main([str(workdir / "absent.md")]) == EXIT_FILE_ERROR
        assert "Could not read" in capsys.readouterr().err

    def test_check_deps(self, workdir: Path, capsys: pytest.CaptureFixture) -> None:
        """Test --check-deps reports mistune as available."""
        assert main(["--check-deps"]) == EXIT_SUCCESS
        assert "[OK] mistune" in capsys.readouterr().out
