"""
Tests for the command line and configuration.
"""

import json

import pytest

from ..cli import main, render_board
from ..config import EngineConfig
from ..engine_core.engine import MorrisEngine


class TestRender:
    """Tests for render_board()."""

    def test_empty_board(self):
        """An empty board shows 24 empty markers."""
        text = render_board(MorrisEngine())
        assert text.count(".") == 24
        assert len(text.splitlines()) == 7

    def test_corners_land_on_grid_corners(self):
        """Outer ring corner 7 is the top-left cell, inner ring 3 sits below-right of center."""
        engine = MorrisEngine()
        engine.place("0_7")
        engine.place("2_3")
        lines = render_board(engine).splitlines()
        # cells are separated by one space
        assert lines[0][0] == "W"
        assert lines[4][8] == "B"


class TestCommands:
    """Tests for main()."""

    def test_show_snapshot(self, tmp_path, capsys):
        """show renders a snapshot file."""
        path = tmp_path / "snap.json"
        path.write_text(json.dumps({"board": {"0_0": "white"}, "gameState": "gameOver",
                                    "winner": "white", "terminationReason": "no_moves"}))
        assert main(["show", str(path)]) == 0
        out = capsys.readouterr().out
        assert "W" in out
        assert "no_moves" in out

    def test_show_missing_file(self, tmp_path, capsys):
        """A missing file is reported, not raised."""
        assert main(["show", str(tmp_path / "missing.json")]) == 1
        assert "not found" in capsys.readouterr().out

    @pytest.mark.parametrize("content", ["[]", '"board"', "42", "null"])
    def test_show_non_object_json(self, tmp_path, capsys, content):
        """Valid JSON that is not an object is reported, not raised."""
        path = tmp_path / "snap.json"
        path.write_text(content)
        assert main(["show", str(path)]) == 1
        assert "must be a JSON object" in capsys.readouterr().out

    def test_play_until_quit(self, monkeypatch, capsys):
        """play accepts placements and quits on 'q'."""
        answers = iter(["0_0", "9_9", "q"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
        assert main(["play"]) == 0
        assert "Illegal action" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        """Running without a command shows usage."""
        assert main([]) == 1


class TestConfig:
    """Tests for EngineConfig.from_env()."""

    def test_defaults(self, monkeypatch):
        """Without overrides the standard rules apply."""
        monkeypatch.delenv("MORRIS_NO_CAPTURE_THRESHOLD", raising=False)
        config = EngineConfig.from_env()
        assert config.no_capture_threshold == 40
        assert config.history_window == 200

    def test_env_override(self, monkeypatch):
        """MORRIS_* variables override fields."""
        monkeypatch.setenv("MORRIS_NO_CAPTURE_THRESHOLD", "50")
        assert EngineConfig.from_env().no_capture_threshold == 50

    def test_bad_env_value_ignored(self, monkeypatch):
        """Non-integer values fall back to the default."""
        monkeypatch.setenv("MORRIS_REPETITION_THRESHOLD", "often")
        assert EngineConfig.from_env().repetition_threshold == 3

    def test_config_is_frozen(self):
        """Configs are immutable."""
        with pytest.raises(Exception):
            EngineConfig().starting_pieces = 5
