"""
Unit tests for the command-line interface.

Tests flag handling, configuration layering, output formatting and exit
codes of the lrg command.
"""

import logging
import os
import tempfile
import shutil
from pathlib import Path
from unittest.mock import patch
import pytest

from lrg import __version__
from lrg.cli import main, build_parser, non_negative_int
from lrg.config.parser import ConfigParser


class TestCli:
    """Test cases for the main entry point."""

    def setup_method(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.test_root = Path(self.temp_dir) / "testdir"
        self._create_test_structure()

        # Keep a real ~/.lrg.yaml out of the tests
        self.search_patcher = patch.object(ConfigParser, 'get_search_paths', return_value=[])
        self.search_patcher.start()

    def teardown_method(self):
        """Clean up test fixtures."""
        self.search_patcher.stop()
        # main() leaves a root handler bound to the captured stderr
        logging.getLogger().handlers.clear()
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _create_test_structure(self):
        test_files = {
            "somefile": 1024000,
            "smallerfile": 51200,
            "evensmallerfile": 10240,
            "subdir/subsomefile": 102400,
            "subdir/subsmallerfile": 20480,
            "subdir/subsubdir/subsubsomefile": 204800,
        }
        for rel_path, size in test_files.items():
            full_path = self.test_root / rel_path
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_bytes(b"x" * size)

    def _run(self, capsys, *args):
        code = main([str(a) for a in args])
        captured = capsys.readouterr()
        return code, captured.out.splitlines(), captured.err

    def test_default_run(self, capsys):
        """Test that the five largest files are listed, largest first."""
        code, lines, _ = self._run(capsys, self.test_root)

        assert code == 0
        assert len(lines) == 5
        assert lines[0] == f"1000.0 KB: {self.test_root / 'somefile'}"
        assert lines[1].endswith("subsubsomefile")
        assert lines[4].startswith("20.0 KB: ")

    def test_number(self, capsys):
        """Test limiting the number of lines."""
        code, lines, _ = self._run(capsys, "-n", 2, self.test_root)

        assert code == 0
        assert len(lines) == 2

    def test_number_larger_than_results(self, capsys):
        """Test that asking for more entries than exist lists them all."""
        _, lines, _ = self._run(capsys, "--number", 100, self.test_root)

        assert len(lines) == 6

    def test_no_recursion(self, capsys):
        """Test that only direct children are listed."""
        _, lines, _ = self._run(capsys, "-r", "-d", 5, self.test_root)

        assert [line.rsplit(os.sep, 1)[-1] for line in lines] == [
            "somefile", "smallerfile", "evensmallerfile"
        ]

    def test_max_depth_zero_matches_no_recursion(self, capsys):
        """Test that max depth 0 matches --no-recursion."""
        _, depth_lines, _ = self._run(capsys, "-d", 0, self.test_root)
        _, flat_lines, _ = self._run(capsys, "--no-recursion", self.test_root)

        assert depth_lines == flat_lines

    def test_min_depth(self, capsys):
        """Test that shallow entries are hidden."""
        _, lines, _ = self._run(capsys, "-m", 2, self.test_root)

        assert len(lines) == 1
        assert lines[0].endswith("subsubsomefile")

    def test_ascending(self, capsys):
        """Test listing the smallest entries first."""
        _, lines, _ = self._run(capsys, "-a", "-n", 1, self.test_root)

        assert lines == [f"10.0 KB: {self.test_root / 'evensmallerfile'}"]

    def test_directories(self, capsys):
        """Test including directories."""
        _, lines, _ = self._run(capsys, "-i", "-a", "-n", 100, self.test_root)

        assert len(lines) == 8
        assert any(line.endswith(os.sep + "subdir") for line in lines)

    def test_follow_links(self, capsys):
        """Test that a followed link is ranked by its target."""
        os.symlink("somefile", self.test_root / "alias")

        _, lines, _ = self._run(capsys, "-l", "-n", 2, self.test_root)

        assert [line.split(": ")[0] for line in lines] == ["1000.0 KB", "1000.0 KB"]

    def test_file_root(self, capsys):
        """Test searching a single file."""
        code, lines, _ = self._run(capsys, self.test_root / "smallerfile")

        assert code == 0
        assert lines == [f"50.0 KB: {self.test_root / 'smallerfile'}"]

    def test_default_root_is_cwd(self, capsys):
        """Test that the current directory is searched by default."""
        with patch('lrg.cli.os.getcwd', return_value=str(self.test_root)):
            code, lines, _ = self._run(capsys, "-n", 1)

        assert code == 0
        assert lines == [f"1000.0 KB: {self.test_root / 'somefile'}"]

    def test_empty_directory(self, capsys):
        """Test that finding nothing is not an error."""
        empty = Path(self.temp_dir) / "empty"
        empty.mkdir()

        code, lines, _ = self._run(capsys, empty)

        assert code == 0
        assert lines == ["lrg: no files found"]

    def test_missing_root(self, capsys):
        """Test that a missing root exits with an error."""
        code, lines, err = self._run(capsys, self.test_root / "missing")

        assert code == 1
        assert lines == []
        assert err.startswith("lrg: cannot access")
        assert "No such file or directory" in err

    def test_root_below_a_file(self, capsys):
        """Test that a path nested under a regular file exits with an error."""
        code, lines, err = self._run(capsys, self.test_root / "somefile" / "child")

        assert code == 1
        assert lines == []
        assert err.startswith("lrg: cannot access")

    def test_empty_filepath_rejected(self, capsys):
        """Test that an empty FILEPATH is an argument error."""
        with pytest.raises(SystemExit) as exc_info:
            main([""])

        assert exc_info.value.code == 2
        assert "Root path cannot be empty" in capsys.readouterr().err

    def test_negative_number_rejected(self, capsys):
        """Test that a negative count is an argument error."""
        with pytest.raises(SystemExit) as exc_info:
            main(["-n", "-1", str(self.test_root)])

        assert exc_info.value.code == 2
        assert "must not be negative" in capsys.readouterr().err

    def test_non_integer_depth_rejected(self, capsys):
        """Test that a malformed depth is an argument error."""
        with pytest.raises(SystemExit) as exc_info:
            main(["-d", "deep", str(self.test_root)])

        assert exc_info.value.code == 2

    def test_conflicting_depths_rejected(self, capsys):
        """Test that an empty depth window is an argument error."""
        with pytest.raises(SystemExit) as exc_info:
            main(["-m", "3", "-d", "1", str(self.test_root)])

        assert exc_info.value.code == 2
        assert "cannot exceed max_depth" in capsys.readouterr().err

    def test_version(self, capsys):
        """Test the version flag."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip() == f"lrg {__version__}"

    def test_config_file(self, capsys):
        """Test that configuration values are used as defaults."""
        config_path = Path(self.temp_dir) / "lrg.yaml"
        config_path.write_text("output:\n  number: 1\n  order: ascending\n")

        _, lines, _ = self._run(capsys, "-c", config_path, self.test_root)

        assert lines == [f"10.0 KB: {self.test_root / 'evensmallerfile'}"]

    def test_flags_override_config_file(self, capsys):
        """Test that command-line flags win over the configuration."""
        config_path = Path(self.temp_dir) / "lrg.yaml"
        config_path.write_text("search:\n  no_recursion: false\noutput:\n  number: 1\n")

        _, lines, _ = self._run(capsys, "-c", config_path, "-n", 3, "-r", self.test_root)

        assert len(lines) == 3

    def test_invalid_config_file(self, capsys):
        """Test that a broken configuration is fatal."""
        config_path = Path(self.temp_dir) / "lrg.yaml"
        config_path.write_text("output: [1, 2\n")

        code, lines, err = self._run(capsys, "-c", config_path, self.test_root)

        assert code == 1
        assert lines == []
        assert "Invalid YAML syntax" in err

    def test_init_config(self, capsys):
        """Test writing a configuration template."""
        target = Path(self.temp_dir) / "conf" / ".lrg.yaml"

        code, lines, _ = self._run(capsys, "--init-config", target)

        assert code == 0
        assert target.exists()
        assert "wrote configuration template" in lines[0]

    def test_verbose_logs_summary(self, capsys):
        """Test that -v enables informational logging on stderr."""
        _, _, err = self._run(capsys, "-v", self.test_root)

        assert "Scanned 3 directories" in err


class TestArgumentParsing:
    """Test cases for argument parsing helpers."""

    def test_parser_defaults(self):
        """Test default argument values."""
        args = build_parser().parse_args([])

        assert args.filepath is None
        assert args.number is None
        assert args.max_depth is None
        assert args.min_depth is None
        assert args.no_recursion is False
        assert args.follow_links is False
        assert args.directories is False
        assert args.ascending is False
        assert args.verbose == 0

    def test_short_flags(self):
        """Test the short forms of every flag."""
        args = build_parser().parse_args(["-i", "-l", "-r", "-d", "2", "-n", "9", "-vv", "some/dir"])

        assert args.directories is True
        assert args.follow_links is True
        assert args.no_recursion is True
        assert args.max_depth == 2
        assert args.number == 9
        assert args.verbose == 2
        assert args.filepath == "some/dir"

    def test_non_negative_int(self):
        """Test the integer argument type."""
        import argparse

        assert non_negative_int("0") == 0
        assert non_negative_int("12") == 12
        with pytest.raises(argparse.ArgumentTypeError):
            non_negative_int("-4")
        with pytest.raises(argparse.ArgumentTypeError):
            non_negative_int("four")
