"""
CLI entry point for the cat tournament.

Parses arguments, validates config, and wires components.
"""

import argparse
import random
import sys
from argparse import Namespace
from pathlib import Path
from typing import TypedDict

from prettytable import PrettyTable

from .catalogs.directory_catalog import DirectoryImageCatalog
from .constants import DEFAULT_CANDIDATE_COUNT, DEFAULT_DECISION_TIMEOUT
from .exceptions import ConfigurationError, StorageError, ValidationError
from .group_selectors.least_matchups_selector import LeastMatchupsSelector
from .interfaces import Presenter, RatingStore
from .leaderboard import LEADERBOARD_SIZE, top_entries
from .logging_config import get_logger, setup_logging
from .models import FinaleResult
from .orchestrator import GameSession, Orchestrator, RunConfig
from .presenters.console_presenter import ConsolePresenter
from .presenters.sim_presenter import SimulatedPresenter
from .storage.backup import load_backup, save_backup
from .storage.json_store import JSONRatingStore


class CLIArgs(TypedDict):
    """Typed representation of parsed CLI arguments."""
    command: str
    ratings_file: str
    photos_dir: str | None
    candidates: int
    timeout: float
    presenter: str
    noise: float
    timeout_rate: float
    seed: int | None
    play_again: bool
    limit: int
    backup_file: str | None
    yes: bool
    debug: bool
    log_level: str


def parse_args(argv: list[str] | None = None) -> Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="cat_tournament",
        description="Cat Tournament - Photo Bracket Game with Elo Ratings"
    )
    _ = parser.add_argument(
        "--ratings-file",
        default="ratings.json",
        help="JSON file holding photo ratings (default: ratings.json)"
    )
    _ = parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    _ = parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    play = subparsers.add_parser("play", help="Run a tournament")
    _ = play.add_argument(
        "--photos-dir",
        required=True,
        help="Directory of cat photos"
    )
    _ = play.add_argument(
        "--candidates",
        type=int,
        default=DEFAULT_CANDIDATE_COUNT,
        help=f"Photos per tournament (default: {DEFAULT_CANDIDATE_COUNT})"
    )
    _ = play.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_DECISION_TIMEOUT,
        help=f"Seconds to pick a winner (default: {DEFAULT_DECISION_TIMEOUT:g})"
    )
    _ = play.add_argument(
        "--presenter",
        choices=["console", "simulated"],
        default="console",
        help="Who picks winners (default: console)"
    )
    _ = play.add_argument(
        "--noise",
        type=float,
        default=0.1,
        help="Noise level for simulated presenter (0-1, default: 0.1)"
    )
    _ = play.add_argument(
        "--timeout-rate",
        type=float,
        default=0.0,
        help="Chance the simulated presenter lets a matchup time out (default: 0)"
    )
    _ = play.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible brackets"
    )
    _ = play.add_argument(
        "--play-again",
        action="store_true",
        help="Offer another tournament after each finale"
    )

    board = subparsers.add_parser("leaderboard", help="Show the top rated photos")
    _ = board.add_argument(
        "--limit",
        type=int,
        default=LEADERBOARD_SIZE,
        help=f"Rows to show (default: {LEADERBOARD_SIZE})"
    )

    export = subparsers.add_parser("export", help="Write all ratings to a backup file")
    _ = export.add_argument("backup_file", help="Destination JSON file")

    restore = subparsers.add_parser("import", help="Restore ratings from a backup file")
    _ = restore.add_argument("backup_file", help="Backup JSON file")

    reset = subparsers.add_parser("reset", help="Clear the whole leaderboard")
    _ = reset.add_argument("--yes", action="store_true", help="Do not ask for confirmation")

    return parser.parse_args(argv)


def args_to_typed(ns: Namespace) -> CLIArgs:
    """Convert argparse Namespace to typed CLIArgs."""
    return CLIArgs(
        command=ns.command,
        ratings_file=ns.ratings_file,
        photos_dir=getattr(ns, "photos_dir", None),
        candidates=getattr(ns, "candidates", DEFAULT_CANDIDATE_COUNT),
        timeout=getattr(ns, "timeout", DEFAULT_DECISION_TIMEOUT),
        presenter=getattr(ns, "presenter", "console"),
        noise=getattr(ns, "noise", 0.1),
        timeout_rate=getattr(ns, "timeout_rate", 0.0),
        seed=getattr(ns, "seed", None),
        play_again=getattr(ns, "play_again", False),
        limit=getattr(ns, "limit", LEADERBOARD_SIZE),
        backup_file=getattr(ns, "backup_file", None),
        yes=getattr(ns, "yes", False),
        debug=ns.debug,
        log_level=ns.log_level,
    )


def build_session(args: CLIArgs, store: RatingStore) -> tuple[GameSession, Presenter]:
    """Wire catalog, selector, presenter and config for the play command."""
    logger = get_logger("build_session")

    assert args["photos_dir"] is not None, "play requires --photos-dir"
    catalog = DirectoryImageCatalog(Path(args["photos_dir"]))
    rng = random.Random(args["seed"])
    selector = LeastMatchupsSelector(rng)
    config = RunConfig(
        candidate_count=args["candidates"],
        decision_timeout=args["timeout"],
    )

    presenter: Presenter
    if args["presenter"] == "simulated":
        # Simple ground truth: photos later in name order are cuter
        photos = sorted(catalog.list_photos(), key=lambda p: p.photo_id)
        ground_truth = {photo.photo_id: float(i + 1) for i, photo in enumerate(photos)}
        presenter = SimulatedPresenter(
            ground_truth,
            noise=args["noise"],
            timeout_rate=args["timeout_rate"],
            rng=rng,
        )
    else:
        presenter = ConsolePresenter(
            describe=lambda photo: str(catalog.get_photo_path(photo.photo_id)),
        )
    logger.info(f"Configuration: {config}, presenter={args['presenter']}")

    return GameSession(catalog, store, selector, config), presenter


def print_finale(finale: FinaleResult) -> None:
    print("\n" + "=" * 60)
    print(f"Champion: {finale.champion.photo_id} ({finale.champion.filename})")
    print(f"Rating: {finale.entry.rating}  Record: {finale.entry.wins}W-{finale.entry.losses}L")
    print(f"Leaderboard rank: #{finale.rank} of {finale.total_photos} photos")
    print("=" * 60)


def print_leaderboard(store: RatingStore, limit: int) -> None:
    entries = top_entries(store.get_all_ratings(), limit)
    if not entries:
        print("No ratings yet - play a tournament first.")
        return

    table = PrettyTable()
    table.field_names = ["Rank", "Photo", "Rating", "Wins", "Losses", "Matchups"]
    table.align["Photo"] = "l"
    for column in ("Rank", "Rating", "Wins", "Losses", "Matchups"):
        table.align[column] = "r"
    for i, entry in enumerate(entries, 1):
        table.add_row([i, entry.image_id, entry.rating, entry.wins, entry.losses, entry.matchups])
    print(table)


def run_play(args: CLIArgs, store: RatingStore) -> int:
    session, presenter = build_session(args, store)
    orchestrator = Orchestrator(session, presenter)

    while True:
        finale = orchestrator.run()
        if finale is None:
            if session.failure is not None:
                print(f"Could not start a tournament: {session.failure}")
            else:
                print("Not enough photos - add at least 2 cat photos to the photos directory.")
            return 1

        print_finale(finale)
        if not args["play_again"] or input("Play again? (y/N): ").strip().lower() not in ("y", "yes"):
            return 0


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = args_to_typed(parse_args(argv))
    setup_logging(level=args["log_level"], debug=args["debug"])
    logger = get_logger("main")

    try:
        store = JSONRatingStore(Path(args["ratings_file"]))
        command = args["command"]
        logger.info(f"Running command: {command}")

        if command == "play":
            sys.exit(run_play(args, store))
        elif command == "leaderboard":
            print_leaderboard(store, args["limit"])
        elif command == "export":
            assert args["backup_file"] is not None
            count = save_backup(store, Path(args["backup_file"]))
            print(f"Exported {count} ratings to {args['backup_file']}")
        elif command == "import":
            assert args["backup_file"] is not None
            count = load_backup(store, Path(args["backup_file"]))
            print(f"Imported {count} ratings from {args['backup_file']}")
        elif command == "reset":
            if not args["yes"]:
                confirm = input("Clear every rating? This cannot be undone. (y/N): ").strip().lower()
                if confirm not in ("y", "yes"):
                    print("Reset cancelled.")
                    return
            store.clear_all()
            print("Leaderboard cleared.")

    except (ConfigurationError, StorageError, ValidationError, FileNotFoundError, NotADirectoryError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"Error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        print("\nInterrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
