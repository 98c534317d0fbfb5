"""
Workflow tests for the CLI interface.

Tests the complete command-line interface including argument parsing,
config file merging, file handling, and exit codes.
"""
import sys

import pytest
from PIL import Image

from fweh.cli import main


def _run(*args):
    sys.argv = ["fweh", *[str(a) for a in args]]
    main()


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self, capsys):
        """CLI --help displays usage information."""
        with pytest.raises(SystemExit) as excinfo:
            _run("--help")
        assert excinfo.value.code == 0

        captured = capsys.readouterr()
        assert "usage" in captured.out.lower()
        assert "--roundness" in captured.out

    def test_cli_version(self, capsys):
        with pytest.raises(SystemExit):
            _run("--version")
        assert capsys.readouterr().out.startswith("fweh ")

    def test_cli_frames_image(self, red_square_png, tmp_path, capsys):
        """CLI writes the framed image and prints its path."""
        output_path = tmp_path / "framed.png"
        _run(red_square_png, "-o", output_path)

        assert output_path.exists()
        assert capsys.readouterr().out.strip() == str(output_path)
        with Image.open(output_path) as img:
            assert img.size == (110, 110)

    def test_cli_default_output_path(self, red_square_png, tmp_path, monkeypatch):
        """Without -o the result lands in output.png in the working directory."""
        monkeypatch.chdir(tmp_path)
        _run(red_square_png)
        assert (tmp_path / "output.png").exists()

    def test_cli_missing_input_argument(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            _run()
        assert excinfo.value.code == 2


class TestCLIOptions:
    """Test flags and their interaction with the config file."""

    def test_scale_ratio_and_background(self, red_square_png, tmp_path):
        output_path = tmp_path / "out.png"
        _run(red_square_png, "-o", output_path, "-s", "100", "-r", "16:9", "-b", "colr:white")
        with Image.open(output_path) as img:
            assert img.size == (177, 100)
            assert img.convert("RGBA").getpixel((0, 0)) == (255, 255, 255, 255)

    def test_roundness_flag(self, red_square_png, tmp_path):
        output_path = tmp_path / "out.png"
        _run(red_square_png, "-o", output_path, "-s", "100", "--roundness", "50",
             "-b", "colr:white")
        with Image.open(output_path) as img:
            rgba = img.convert("RGBA")
            assert rgba.getpixel((0, 0)) == (255, 255, 255, 255)
            assert rgba.getpixel((50, 50)) == (255, 0, 0, 255)

    def test_shadow_flags(self, red_square_png, tmp_path):
        output_path = tmp_path / "out.png"
        _run(red_square_png, "-o", output_path, "-s", "200", "-b", "colr:white",
             "--shadow-offset", "10,10", "--shadow-radius", "0", "--shadow-color", "blue")
        with Image.open(output_path) as img:
            assert img.convert("RGBA").getpixel((155, 155)) == (0, 0, 255, 255)

    def test_config_file(self, red_square_png, tmp_path, temp_config):
        output_path = tmp_path / "out.png"
        _run(red_square_png, "-o", output_path, "-c", temp_config)
        with Image.open(output_path) as img:
            # scale 100 from the config keeps the source size
            assert img.size == (100, 100)
            assert img.convert("RGBA").getpixel((0, 0)) == (255, 255, 255, 255)

    def test_flags_override_config(self, red_square_png, tmp_path, temp_config):
        output_path = tmp_path / "out.png"
        _run(red_square_png, "-o", output_path, "-c", temp_config, "-s", "150",
             "-b", "colr:red")
        with Image.open(output_path) as img:
            assert img.size == (150, 150)
            assert img.convert("RGBA").getpixel((0, 0)) == (255, 0, 0, 255)

    def test_verbose_logs_steps(self, red_square_png, tmp_path, capsys):
        _run(red_square_png, "-o", tmp_path / "out.png", "-v")
        err = capsys.readouterr().err
        assert "Processing image" in err
        assert "Creating background" in err


class TestCLIErrors:
    """Failures print a message and exit with status 1."""

    def test_unknown_colour(self, red_square_png, tmp_path, capsys):
        output_path = tmp_path / "out.png"
        with pytest.raises(SystemExit) as excinfo:
            _run(red_square_png, "-o", output_path, "-b", "colr:not-a-color")
        assert excinfo.value.code == 1
        assert "Error:" in capsys.readouterr().err
        assert not output_path.exists()

    def test_missing_input_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            _run(tmp_path / "missing.png", "-o", tmp_path / "out.png")
        assert excinfo.value.code == 1
        assert "Input file not found" in capsys.readouterr().err

    def test_malformed_ratio(self, red_square_png, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            _run(red_square_png, "-o", tmp_path / "out.png", "-r", "sixteen:nine")
        assert excinfo.value.code == 1
        assert "Invalid parameter" in capsys.readouterr().err

    def test_missing_output_directory(self, red_square_png, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            _run(red_square_png, "-o", tmp_path / "nope" / "out.png")
        assert excinfo.value.code == 1
        assert "Output directory not found" in capsys.readouterr().err
