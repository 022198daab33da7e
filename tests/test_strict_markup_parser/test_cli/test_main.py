"""Tests for the strict-markup command-line interface."""

import io
import json
import logging

import pytest

from strict_markup_parser.cli.main import build_config, create_argument_parser, main


@pytest.fixture
def good_file(tmp_path):
    """A well-formed markup file."""
    path = tmp_path / "good.html"
    path.write_text('<ul id="m"><li>one</li></ul>', encoding="utf-8")
    return path


@pytest.fixture
def bad_file(tmp_path):
    """A file with a mismatched closing tag."""
    path = tmp_path / "bad.html"
    path.write_text("<ul><li>one</ul>", encoding="utf-8")
    return path


class TestArgumentParser:
    """Tests for argument parsing and configuration building."""

    def test_defaults(self, good_file):
        """Test parse command defaults."""
        args = create_argument_parser().parse_args(["parse", str(good_file)])

        assert args.command == "parse"
        assert args.format == "tree"
        assert args.preset == "default"
        assert args.output is None

    def test_build_config_from_preset_and_flags(self):
        """Test preset selection and flag overrides."""
        args = create_argument_parser().parse_args(
            ["validate", "--preset", "strict", "--max-depth", "5", "--collapse-whitespace", "x"]
        )
        config = build_config(args)

        assert config.name == "strict"
        assert config.max_depth == 5
        assert config.collapse_whitespace_text is True
        assert config.max_input_length == 1024 * 1024

    def test_build_config_from_file(self, tmp_path):
        """Test configuration file values are used."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"max_depth": 3}), encoding="utf-8")
        args = create_argument_parser().parse_args(
            ["parse", "--config", str(config_path), "x"]
        )

        assert build_config(args).max_depth == 3

    def test_config_file_layered_over_preset(self, tmp_path):
        """Test configuration file keys override the chosen preset."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"max_depth": 3}), encoding="utf-8")
        args = create_argument_parser().parse_args(
            ["parse", "--preset", "untrusted_input", "--config", str(config_path), "x"]
        )
        config = build_config(args)

        assert config.max_depth == 3
        assert config.max_input_length == 64 * 1024
        assert config.name == "untrusted_input"

    def test_flags_override_config_file(self, tmp_path):
        """Test command-line flags win over the configuration file."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"max_depth": 3}), encoding="utf-8")
        args = create_argument_parser().parse_args(
            ["parse", "--config", str(config_path), "--max-depth", "9", "x"]
        )

        assert build_config(args).max_depth == 9

    def test_no_command(self, capsys):
        """Test running without a command prints help."""
        assert main([]) == 1
        assert "usage:" in capsys.readouterr().out


class TestParseCommand:
    """Tests for the parse command."""

    def test_tree_output(self, good_file, capsys):
        """Test the default tree outline."""
        assert main(["parse", str(good_file)]) == 0

        assert capsys.readouterr().out.splitlines() == [
            '<ul id="m">',
            "  <li>",
            "    #text 'one'",
        ]

    def test_json_output(self, good_file, capsys):
        """Test JSON records include the tree."""
        assert main(["parse", "--format", "json", str(good_file)]) == 0

        records = json.loads(capsys.readouterr().out)
        assert len(records) == 1
        assert records[0]["success"] is True
        assert records[0]["source"] == str(good_file)
        assert records[0]["tree"]["tag_name"] == "ul"
        assert records[0]["error"] is None

    def test_error_output(self, bad_file, capsys):
        """Test malformed input gives exit status 1 and the error."""
        assert main(["parse", str(bad_file)]) == 1

        out = capsys.readouterr().out
        assert out.startswith("error: Mismatched closing tag")

    def test_json_error_record(self, bad_file, capsys):
        """Test JSON records carry the error kind and position."""
        assert main(["parse", "-f", "json", str(bad_file)]) == 1

        record = json.loads(capsys.readouterr().out)[0]
        assert record["tree"] is None
        assert record["error"]["kind"] == "MISMATCHED_CLOSING_TAG"
        assert record["error"]["offset"] == 11
        assert record["diagnostics"][0]["severity"] == "ERROR"

    def test_multiple_inputs(self, good_file, bad_file, capsys):
        """Test each input gets a header and one failure fails the run."""
        assert main(["parse", str(good_file), str(bad_file)]) == 1

        out = capsys.readouterr().out
        assert f"== {good_file}" in out
        assert f"== {bad_file}" in out

    def test_stdin(self, monkeypatch, capsys):
        """Test '-' reads from stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO("<p>hi</p>"))

        assert main(["parse", "-f", "json", "-"]) == 0

        record = json.loads(capsys.readouterr().out)[0]
        assert record["source"] == "<stdin>"
        assert record["tree"]["children"] == [{"type": "text", "content": "hi"}]

    def test_output_file(self, good_file, tmp_path, capsys):
        """Test results can be written to a file."""
        output = tmp_path / "out.txt"

        assert main(["parse", "--output", str(output), str(good_file)]) == 0

        assert output.read_text(encoding="utf-8").startswith('<ul id="m">')
        assert "Results written to" in capsys.readouterr().err

    def test_missing_input(self, tmp_path, capsys):
        """Test unreadable input is reported."""
        assert main(["parse", str(tmp_path / "missing.html")]) == 1

        assert "error: Cannot read" in capsys.readouterr().out

    def test_max_depth_flag(self, tmp_path, capsys):
        """Test the depth limit can be set from the command line."""
        path = tmp_path / "deep.html"
        path.write_text("<a><b><c></c></b></a>", encoding="utf-8")

        assert main(["parse", "--max-depth", "2", str(path)]) == 1

        assert "Nesting too deep" in capsys.readouterr().out

    def test_unreachable_max_depth_rejected(self, good_file, capsys):
        """Test a depth limit beyond the interpreter stack is a configuration error."""
        assert main(["parse", "--max-depth", "5000", str(good_file)]) == 2

        assert "max_depth 5000 exceeds" in capsys.readouterr().err

    def test_output_write_failure(self, good_file, tmp_path, capsys, caplog):
        """Test an unwritable output path is reported and logged."""
        with caplog.at_level(logging.ERROR, logger="strict_markup_parser.cli.main"):
            assert main(["parse", "--output", str(tmp_path), str(good_file)]) == 1

        assert "Error writing output" in capsys.readouterr().err
        record = caplog.records[-1]
        assert record.getMessage() == "Cannot write output"
        assert record.output_path == str(tmp_path)
        assert record.exc_info is not None

    def test_invalid_config(self, tmp_path, capsys):
        """Test configuration errors give exit status 2."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"max_depth": 0}), encoding="utf-8")

        assert main(["parse", "--config", str(config_path), "x"]) == 2

        assert "Configuration error" in capsys.readouterr().err


class TestValidateCommand:
    """Tests for the validate command."""

    def test_text_summary(self, good_file, bad_file, capsys):
        """Test the summary and per-input marks."""
        assert main(["validate", str(good_file), str(bad_file)]) == 1

        out = capsys.readouterr().out
        assert "Validated 2 inputs, 1 well-formed" in out
        assert f"✓ {good_file}" in out
        assert f"✗ {bad_file}: Mismatched closing tag" in out

    def test_quiet_shows_failures_only(self, good_file, bad_file, capsys):
        """Test quiet mode prints only failures."""
        assert main(["-q", "validate", str(good_file), str(bad_file)]) == 1

        out = capsys.readouterr().out
        assert "Validated" not in out
        assert str(good_file) not in out
        assert f"✗ {bad_file}" in out

    def test_all_valid(self, good_file, capsys):
        """Test exit status 0 when every input is well-formed."""
        assert main(["validate", str(good_file)]) == 0

    def test_json_records(self, good_file, capsys):
        """Test JSON output omits trees."""
        assert main(["validate", "--format", "json", str(good_file)]) == 0

        record = json.loads(capsys.readouterr().out)[0]
        assert record["success"] is True
        assert "tree" not in record


class TestProfileCommand:
    """Tests for the profile command."""

    def test_profile_summary(self, good_file, capsys):
        """Test the JSON profiling summary."""
        assert main(["profile", "-n", "3", str(good_file)]) == 0

        summary = json.loads(capsys.readouterr().out)
        assert summary["session_count"] == 3
        assert summary["source"] == str(good_file)
        assert summary["input_characters"] == len(good_file.read_text(encoding="utf-8"))
        assert summary["all_succeeded"] is True

    def test_profile_failure(self, bad_file, capsys):
        """Test profiling malformed input fails the run."""
        assert main(["profile", "-n", "1", str(bad_file)]) == 1

        assert json.loads(capsys.readouterr().out)["all_succeeded"] is False

    def test_invalid_iterations(self, good_file, capsys):
        """Test non-positive iteration counts are rejected."""
        assert main(["profile", "-n", "0", str(good_file)]) == 1

        assert "--iterations must be > 0" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        """Test unreadable input is reported."""
        assert main(["profile", str(tmp_path / "missing.html")]) == 1

        assert "Cannot read" in capsys.readouterr().err
