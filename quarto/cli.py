"""
Quarto CLI - Command-line interface for the engine.

Usage:
    quarto init                       Create the game database
    quarto new-game                   Create a game and print its id
    quarto show <game_id>             Print the board and pending piece
    quarto join <game_id> <role>      Bind the first or second player
    quarto pick <game_id> <piece>     Pick a piece for the opponent
    quarto place <game_id> <x> <y>    Place the pending piece
    quarto serve                      Run the HTTP API

The database comes from QUARTO_DATABASE_URL (or DATABASE_URL), or --database.
"""

import argparse
import dataclasses
import logging
import sys

from .config import Settings, get_settings
from .engine_core.errors import QuartoError
from .logging_config import configure_logging
from .session import GameView, MoveOutcome, SessionManager, describe_error
from .storage import GameStore, PlayerRole

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Quarto - board game rules engine",
        prog="quarto",
    )
    parser.add_argument("--database", "-d", help="Path to the SQLite database")
    parser.add_argument("--log-level", help="Logging level (default from QUARTO_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("init", help="Create the game database")
    subparsers.add_parser("new-game", help="Create a new game")

    show_parser = subparsers.add_parser("show", help="Show a game")
    show_parser.add_argument("game_id", help="Game id")

    join_parser = subparsers.add_parser("join", help="Bind a player seat")
    join_parser.add_argument("game_id", help="Game id")
    join_parser.add_argument("role", choices=[role.value for role in PlayerRole])

    pick_parser = subparsers.add_parser("pick", help="Pick a piece for the opponent")
    pick_parser.add_argument("game_id", help="Game id")
    pick_parser.add_argument("piece", help="Uppercase piece code, e.g. BSCF")

    place_parser = subparsers.add_parser("place", help="Place the pending piece")
    place_parser.add_argument("game_id", help="Game id")
    place_parser.add_argument("x", type=int, help="Row, 0-3")
    place_parser.add_argument("y", type=int, help="Column, 0-3")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", help="Bind host")
    serve_parser.add_argument("--port", type=int, help="Bind port")

    return parser


def resolve_settings(args) -> Settings:
    """Environment settings with command-line overrides applied."""
    settings = get_settings()
    if args.log_level:
        settings = dataclasses.replace(settings, log_level=args.log_level.upper())
    return settings


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = resolve_settings(args)
    configure_logging(settings.log_level)
    store = GameStore(args.database or settings.database_path)

    commands = {
        "init": cmd_init,
        "new-game": cmd_new_game,
        "show": cmd_show,
        "join": cmd_join,
        "pick": cmd_pick,
        "place": cmd_place,
        "serve": cmd_serve,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    if args.command not in ("init", "serve") and not store.exists():
        print(f"error: database {store.db_path} not found, run 'quarto init' first",
              file=sys.stderr)
        return 1

    try:
        return handler(args, store)
    except QuartoError as e:
        print(f"error: {describe_error(e)}", file=sys.stderr)
        return 1


def cmd_init(args, store: GameStore) -> int:
    """Create the database file and schema."""
    store.initialize(exist_ok=False)
    print(f"Created database: {store.db_path}")
    return 0


def cmd_new_game(args, store: GameStore) -> int:
    """Insert a new game and print its id."""
    game = SessionManager(store).create_game()
    print(game.game_id)
    return 0


def cmd_show(args, store: GameStore) -> int:
    print_game(SessionManager(store).get_game(args.game_id))
    return 0


def cmd_join(args, store: GameStore) -> int:
    game = SessionManager(store).join(args.game_id, PlayerRole(args.role))
    print(f"Joined game {game.game_id} as {args.role} player")
    return 0


def cmd_pick(args, store: GameStore) -> int:
    outcome = SessionManager(store).pick(args.game_id, args.piece)
    return report_move(outcome)


def cmd_place(args, store: GameStore) -> int:
    outcome = SessionManager(store).place(args.game_id, args.x, args.y)
    return report_move(outcome)


def cmd_serve(args, store: GameStore) -> int:
    """Run the HTTP API under uvicorn."""
    import uvicorn

    from .api import APIService, create_app

    settings = resolve_settings(args)
    store.initialize()
    app = create_app(
        service=APIService(session_manager=SessionManager(store)),
        settings=settings,
    )
    host = args.host or settings.host
    port = args.port or settings.port
    logger.info(f"Serving games from {store.db_path} on {host}:{port}")
    uvicorn.run(app, host=host, port=port)
    return 0


def report_move(outcome: MoveOutcome) -> int:
    result = outcome.result
    if not result.success:
        print(f"error: {result.error} ({result.error_code.value})", file=sys.stderr)
        return 1
    for change in result.state_changes:
        print(change)
    print_game(outcome.game)
    return 0


def print_game(game: GameView) -> None:
    state = game.state
    record = game.record
    print(f"Game: {game.game_id}")
    print(state.board.render())
    print(f"Next piece: {record.next_piece_label}")
    print(f"Free pieces ({len(state.free_pieces)}): "
          + " ".join(piece.code for piece in state.free_pieces))
    print(f"Players: first={'yes' if record.assigned_first else 'no'}"
          f" second={'yes' if record.assigned_second else 'no'}")
    if game.quarto:
        print("Quarto!")
    elif game.draw:
        print("Draw")


if __name__ == "__main__":
    sys.exit(main())
