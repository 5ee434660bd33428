"""
Tests for the command-line interface.
"""

import logging

import pytest

from ..cli import build_parser, main, resolve_settings


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "cli.db")


def run(capsys, *argv):
    code = main(list(argv))
    captured = capsys.readouterr()
    return code, captured.out, captured.err


class TestCLI:
    """Tests for CLI commands."""

    def test_init_then_init_again(self, capsys, db_path):
        """init creates the database once and refuses to overwrite it."""
        code, out, _ = run(capsys, "--database", db_path, "init")
        assert code == 0
        assert "Created database" in out

        code, _, err = run(capsys, "--database", db_path, "init")
        assert code == 1
        assert "DATABASE_EXISTS" in err

    def test_requires_init(self, capsys, db_path):
        """Commands other than init need an existing database."""
        code, _, err = run(capsys, "--database", db_path, "new-game")
        assert code == 1
        assert "quarto init" in err

    def test_play_a_move(self, capsys, db_path):
        """pick and place print the board and pending piece."""
        run(capsys, "--database", db_path, "init")
        _, out, _ = run(capsys, "--database", db_path, "new-game")
        game_id = out.strip()

        code, out, _ = run(capsys, "--database", db_path, "pick", game_id, "BSCF")
        assert code == 0
        assert "Next piece: BSCF" in out

        code, out, _ = run(capsys, "--database", db_path, "place", game_id, "2", "1")
        assert code == 0
        assert "2 | .... BSCF .... ...." in out
        assert "Next piece: none" in out

        code, out, _ = run(capsys, "--database", db_path, "show", game_id)
        assert code == 0
        assert "Free pieces (15)" in out

    def test_rejected_move(self, capsys, db_path):
        """A protocol error exits 1 with the error code."""
        run(capsys, "--database", db_path, "init")
        _, out, _ = run(capsys, "--database", db_path, "new-game")
        game_id = out.strip()

        code, _, err = run(capsys, "--database", db_path, "place", game_id, "0", "0")
        assert code == 1
        assert "NO_PENDING_PIECE" in err

    def test_lowercase_piece_code_rejected(self, capsys, db_path):
        """Piece codes are uppercase only."""
        run(capsys, "--database", db_path, "init")
        _, out, _ = run(capsys, "--database", db_path, "new-game")
        game_id = out.strip()

        code, _, err = run(capsys, "--database", db_path, "pick", game_id, "bscf")
        assert code == 1
        assert "INVALID_PIECE_CODE" in err

    def test_join(self, capsys, db_path):
        """Each role can be joined once."""
        run(capsys, "--database", db_path, "init")
        _, out, _ = run(capsys, "--database", db_path, "new-game")
        game_id = out.strip()

        code, out, _ = run(capsys, "--database", db_path, "join", game_id, "second")
        assert code == 0
        code, _, err = run(capsys, "--database", db_path, "join", game_id, "second")
        assert code == 1
        assert "ROLE_ALREADY_ASSIGNED" in err

    def test_unknown_game(self, capsys, db_path):
        """Unknown game ids exit 1."""
        run(capsys, "--database", db_path, "init")
        code, _, err = run(capsys, "--database", db_path, "show", "missing")
        assert code == 1
        assert "GAME_NOT_FOUND" in err

    def test_no_command(self, capsys):
        """No subcommand exits 1."""
        assert main([]) == 1


class TestServe:
    """Tests for the serve command's settings."""

    def test_log_level_flag_overrides_environment(self, monkeypatch):
        """--log-level wins over QUARTO_LOG_LEVEL."""
        monkeypatch.setenv("QUARTO_LOG_LEVEL", "WARNING")
        args = build_parser().parse_args(["--log-level", "debug", "serve"])
        assert resolve_settings(args).log_level == "DEBUG"

        args = build_parser().parse_args(["serve"])
        assert resolve_settings(args).log_level == "WARNING"

    def test_serve_keeps_command_line_level(self, monkeypatch, db_path):
        """Building the app does not reset the level chosen on the command line."""
        served = {}
        monkeypatch.setenv("QUARTO_LOG_LEVEL", "WARNING")
        monkeypatch.setattr("uvicorn.run", lambda app, host, port: served.update(host=host, port=port))
        root = logging.getLogger()
        previous = root.level
        try:
            code = main(["--database", db_path, "--log-level", "DEBUG", "serve", "--port", "9001"])
            assert code == 0
            assert served["port"] == 9001
            assert root.level == logging.DEBUG
        finally:
            root.setLevel(previous)
