"""Tests for the command line interface."""

import pandas as pd
import pytest
from click.testing import CliRunner

from circostools import __version__
from circostools.cli import binlinks, main

EXAMPLE = "L1 chrA 100 200 chrB 150 250"


@pytest.fixture
def runner():
    return CliRunner()


class TestMain:
    """Test the command group."""

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_binlinks_listed(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "binlinks" in result.output


class TestBinlinksCommand:
    """Test the binlinks command end to end."""

    def test_file_input(self, runner, write_links):
        path = write_links([EXAMPLE])
        result = runner.invoke(main, ["binlinks", "-i", str(path), "-b", "100"])
        assert result.exit_code == 0, result.output
        assert result.stdout == "chrA 100 199 100.0000\nchrA 200 299 1.0000\n"

    def test_stdin_input(self, runner):
        result = runner.invoke(binlinks, ["--bin-size", "100"], input=EXAMPLE + "\n")
        assert result.exit_code == 0, result.output
        assert result.stdout == "chrA 100 199 100.0000\nchrA 200 299 1.0000\n"

    def test_file_alias(self, runner, write_links):
        path = write_links(["L1 chrA 100 200", "L1 chrB 150 250"])
        result = runner.invoke(binlinks, ["--file", str(path), "-b", "100", "--link-end", "1"])
        assert result.exit_code == 0, result.output
        assert result.stdout == "chrB 100 199 50.0000\nchrB 200 299 51.0000\n"

    def test_missing_bin_size(self, runner, write_links):
        """Configuration errors exit non-zero before any output."""
        path = write_links([EXAMPLE])
        result = runner.invoke(binlinks, ["-i", str(path)])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "bin_size is required" in result.stderr

    def test_invalid_output_style(self, runner, write_links):
        path = write_links([EXAMPLE])
        result = runner.invoke(binlinks, ["-i", str(path), "-b", "100", "--output-style", "7"])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "output_style" in result.stderr

    def test_missing_input(self, runner, tmp_path):
        missing = tmp_path / "absent.txt"
        result = runner.invoke(binlinks, ["-i", str(missing), "-b", "100"])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "not found" in result.stderr
        assert str(missing) in result.stderr

    def test_stacked_style_header_on_stderr(self, runner, write_links):
        path = write_links([EXAMPLE])
        result = runner.invoke(binlinks, [
            "-i", str(path), "-b", "100", "--link-end", "2",
            "--output-style", "3", "--color-prefix", "c",
        ])
        assert result.exit_code == 0, result.output
        assert result.stderr.splitlines()[0] == "fill_color=cchrA,cchrB"
        assert result.stderr.count("fill_color=") == 1
        assert result.stdout.splitlines() == [
            "chrA 100 199 0.0000,100.0000",
            "chrA 200 299 0.0000,1.0000",
            "chrB 100 199 50.0000,0.0000",
            "chrB 200 299 51.0000,0.0000",
        ]

    def test_debug_does_not_change_output(self, runner, write_links):
        path = write_links([EXAMPLE, "L2 chrA 150 160 chrC 1 2"])
        args = ["-i", str(path), "-b", "100", "--output-style", "2"]
        plain = runner.invoke(binlinks, args)
        debug = runner.invoke(binlinks, args + ["--debug", "--debug"])
        assert plain.exit_code == 0 and debug.exit_code == 0
        assert debug.stdout == plain.stdout
        assert "debug" not in debug.stdout
        assert any(line.startswith("debug ") for line in debug.stderr.splitlines())
        assert not any(line.startswith("debug ") for line in plain.stderr.splitlines())

    def test_malformed_lines_skipped(self, runner, write_links):
        path = write_links(["L0 chrA one two", EXAMPLE])
        result = runner.invoke(binlinks, ["-i", str(path), "-b", "100"])
        assert result.exit_code == 0
        assert result.stdout == "chrA 100 199 100.0000\nchrA 200 299 1.0000\n"
        assert "warning Line 1" in result.stderr

    def test_nan_bin_size(self, runner, write_links):
        path = write_links([EXAMPLE])
        result = runner.invoke(binlinks, ["-i", str(path), "-b", "nan"])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "finite" in result.stderr

    def test_undecodable_line_skipped(self, runner, tmp_path):
        """Invalid UTF-8 costs one record, not the run."""
        path = tmp_path / "links.txt"
        path.write_bytes(b"L0 chr\xff 1 2 chrB 3 4\n" + EXAMPLE.encode() + b"\n")
        result = runner.invoke(binlinks, ["-i", str(path), "-b", "100"])
        assert result.exit_code == 0, result.output
        assert result.stdout == "chrA 100 199 100.0000\nchrA 200 299 1.0000\n"
        assert "warning Line 1" in result.stderr
        assert "undecodable" in result.stderr

    def test_config_file_with_override(self, runner, write_links, tmp_path):
        path = write_links([EXAMPLE])
        config = tmp_path / "binlinks.yaml"
        config.write_text(f"links: {path}\nbin_size: 100\nnum: true\n")
        result = runner.invoke(binlinks, ["-c", str(config), "-b", "200"])
        assert result.exit_code == 0, result.output
        assert result.stdout == "chrA 0 199 1.0000\nchrA 200 399 1.0000\n"

    def test_output_and_table_files(self, runner, write_links, tmp_path):
        path = write_links([EXAMPLE])
        track = tmp_path / "out" / "track.txt"
        table = tmp_path / "out" / "table.tsv"
        result = runner.invoke(binlinks, [
            "-i", str(path), "-b", "100", "-o", str(track), "--table", str(table),
        ])
        assert result.exit_code == 0, result.output
        assert result.stdout == ""
        assert track.read_text() == "chrA 100 199 100.0000\nchrA 200 299 1.0000\n"

        df = pd.read_csv(table, sep="\t")
        assert list(df["bin"]) == [1, 2]
        assert list(df["size"]) == [100, 1]
        assert list(df["n"]) == [1, 1]
        assert set(df["target"]) == {"chrB"}

    def test_log_file(self, runner, write_links, tmp_path):
        path = write_links([EXAMPLE])
        log_file = tmp_path / "run.log"
        result = runner.invoke(binlinks, [
            "-i", str(path), "-b", "100", "-v", "--log-file", str(log_file),
        ])
        assert result.exit_code == 0, result.output
        assert "Read 1 links" in log_file.read_text()
