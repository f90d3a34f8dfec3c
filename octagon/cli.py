"""The ``octagon`` command line: bracket preview, cache, conflicts and rating biases."""

from __future__ import annotations

import argparse
import logging
import os
import re
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Sequence

from .bracket_view import render_rounds
from .brackets import create_bracket
from .cache import DEFAULT_PATH, Cache
from .config import Bias, ConfigStore, default_config_dir, load_environment
from .conflict_store import ConflictStore
from .lookup import PlayerNotFound, find_player, parse_duration
from .models import Conflict, ConflictPlayer, id_to_str

log = logging.getLogger(__name__)

VERSION = "v0.01"
DESCRIPTION = (
    "A CLI tool to help automate tournament organizing for 'The Octagon',\n"
    "an SSBU tournament hosted in Seattle every Tuesday at 7:00pm at the Octopus Bar."
)
PREVIEW_PLAYERS = 8
DATE_MINUTES = "%Y-%m-%d %H:%M"
DATE_SECONDS = "%Y-%m-%d %H:%M:%S"


class _CommandError(Exception):
    """A command failed; the message is shown to the user."""


@dataclass
class _Context:
    config_dir: Path
    cache: Cache


Handler = Callable[[argparse.Namespace, _Context], Optional[int]]


def _aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo is not None else moment.astimezone()


def _confirm(prompt: str) -> bool:
    try:
        answer = input(prompt).strip()
    except EOFError:
        raise _CommandError("failed to parse input") from None
    if not answer:
        raise _CommandError("failed to parse input")
    return answer in ("y", "Y")


def _expiration(text: Optional[str]) -> Optional[datetime]:
    if not text:
        return None
    try:
        duration = parse_duration(text)
    except ValueError as err:
        raise _CommandError(f"invalid expiration format: {err}") from None
    return datetime.now().astimezone() + duration


def _print_bracket(args: argparse.Namespace, ctx: _Context) -> None:
    print(render_rounds(create_bracket(PREVIEW_PLAYERS).winners_rounds))


def _clear_cache(args: argparse.Namespace, ctx: _Context) -> None:
    ctx.cache.clear()


def _list_cache(args: argparse.Namespace, ctx: _Context) -> None:
    players = ctx.cache.cached_players()
    if not players:
        print("No players in cache")
        return
    print(f"Found {len(players)} cached players:\n")
    for player in players:
        print(f"{player.name:<30} {id_to_str(player.id)}")


def _create_conflict(args: argparse.Namespace, ctx: _Context) -> None:
    if len(args.players) < 2:
        raise _CommandError("usage: octagon conflict create player1name player2name")
    name1, name2 = args.players[0], args.players[1]
    reason = args.reason or ""

    if not 1 <= args.priority <= 3:
        raise _CommandError("priority must be between 1 and 3")

    expiration = _expiration(args.expires)

    found = []
    for name in (name1, name2):
        try:
            found.append(find_player(ctx.cache, name))
        except PlayerNotFound as err:
            raise _CommandError(f"could not find player '{name}': {err}") from None
    player1, player2 = found

    print("Create conflict between:")
    print(f"  Player 1: {player1.name} (ID: {id_to_str(player1.id)})")
    print(f"  Player 2: {player2.name} (ID: {id_to_str(player2.id)})")
    print(f"  Priority: {args.priority}")
    if reason:
        print(f"  Reason: {reason}")
    if not _confirm("Confirm? (y/N): "):
        print("Cancelled")
        return

    conflict = Conflict(
        priority=args.priority,
        reason=reason,
        expiration=expiration,
        players=[
            ConflictPlayer(name=player1.name, id=player1.id),
            ConflictPlayer(name=player2.name, id=player2.id),
        ],
    )
    try:
        ConflictStore(ctx.config_dir).save_conflict(conflict)
    except OSError as err:
        raise _CommandError(f"failed to save conflict: {err}") from None
    print("Conflict created successfully")


def _list_conflicts(args: argparse.Namespace, ctx: _Context) -> None:
    conflicts = ConflictStore(ctx.config_dir).get_conflicts()
    if not conflicts:
        print("No conflicts found")
        return
    print(f"Found {len(conflicts)} conflicts:\n")
    now = datetime.now().astimezone()
    for number, conflict in enumerate(conflicts, start=1):
        players = ""
        if len(conflict.players) >= 2:
            players = f"{conflict.players[0].name:<20} vs {conflict.players[1].name:<20}"
        expiration = "Never"
        if conflict.expiration is not None:
            if _aware(conflict.expiration) < now:
                expiration = "EXPIRED"
            else:
                expiration = conflict.expiration.strftime(DATE_MINUTES)
        print(f"{number:2d}. {players} | P{conflict.priority} | {expiration} | {conflict.reason}")


def _resolve_player_input(cache: Cache, text: str) -> str:
    try:
        return id_to_str(find_player(cache, text).id)
    except PlayerNotFound:
        pass
    if re.fullmatch(r"[+-]?\d+", text):
        return text
    raise _CommandError(f"could not resolve player '{text}': not found as player name or valid ID")


def _add_bias(args: argparse.Namespace, ctx: _Context) -> None:
    if len(args.arguments) < 3:
        raise _CommandError("usage: octagon rating bias add playerId ratio reason")
    player_input, ratio_text = args.arguments[0], args.arguments[1]
    reason = " ".join(args.arguments[2:])

    player_id = _resolve_player_input(ctx.cache, player_input)

    try:
        ratio = float(ratio_text)
    except ValueError as err:
        raise _CommandError(f"invalid ratio: {err}") from None
    if ratio <= 0:
        raise _CommandError("ratio must be positive")

    expiration = _expiration(args.expires)

    bias = Bias(player_id=player_id, ratio=ratio, reason=reason, expiration=expiration)
    try:
        ConfigStore(ctx.config_dir).save_bias(bias)
    except OSError as err:
        raise _CommandError(f"failed to save bias: {err}") from None

    print(f"Added bias for player {player_id}: {ratio:.2f}x ({reason})")
    if expiration is not None:
        print(f"Expires: {expiration.strftime(DATE_SECONDS)}")


def _list_biases(args: argparse.Namespace, ctx: _Context) -> None:
    biases = ConfigStore(ctx.config_dir).biases()
    if not biases:
        print("No biases found")
        return
    print(f"{'Player ID':<15} {'Ratio':<10} {'Expires':<20} Reason")
    print("-" * 70)
    for bias in biases:
        expires = "Never"
        if bias.expiration is not None:
            expires = bias.expiration.strftime(DATE_MINUTES)
        print(f"{bias.player_id:<15} {bias.ratio:8.2f}x {expires:<20} {bias.reason}")


def _show_help(parser: argparse.ArgumentParser) -> Handler:
    def handler(args: argparse.Namespace, ctx: _Context) -> None:
        parser.print_help()

    return handler


def _expires_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-e", "--expires",
                        help="Expiration duration (e.g., '24h', '7d', '2w')")


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for every octagon command."""
    parser = argparse.ArgumentParser(
        prog="octagon",
        usage="octagon [subcommand]",
        description="TO automation tool for running SSBU tournaments. " + DESCRIPTION,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("--config-dir", type=Path, default=None,
                        help="configuration directory (default: ~/.config/octagon)")
    parser.add_argument("--cache-path", type=Path, default=DEFAULT_PATH,
                        help="cache file location")
    parser.set_defaults(handler=_show_help(parser))
    commands = parser.add_subparsers(title="commands", metavar="COMMAND")

    bracket = commands.add_parser("bracket", aliases=["b"], help="Manage tournament bracket",
                                  usage="octagon bracket [subcommand]")
    bracket.set_defaults(handler=_show_help(bracket))
    bracket_commands = bracket.add_subparsers(title="commands", metavar="COMMAND")
    bracket_print = bracket_commands.add_parser("print", aliases=["p"], help="print bracket")
    bracket_print.set_defaults(handler=_print_bracket)

    cache = commands.add_parser("cache", help="Manage the internal cache",
                                usage="octagon cache [subcommand]")
    cache.set_defaults(handler=_show_help(cache))
    cache_commands = cache.add_subparsers(title="commands", metavar="COMMAND")
    cache_commands.add_parser("clear", aliases=["c"], help="clears the entire cache") \
        .set_defaults(handler=_clear_cache)
    cache_commands.add_parser("list", aliases=["l", "ls"], help="List cached players") \
        .set_defaults(handler=_list_cache)

    conflicts = commands.add_parser("conflicts", aliases=["c", "conflict"],
                                    help="View and manage conflicts",
                                    usage="octagon conflicts [subcommand]")
    conflicts.set_defaults(handler=_show_help(conflicts))
    conflict_commands = conflicts.add_subparsers(title="commands", metavar="COMMAND")
    create = conflict_commands.add_parser(
        "create", aliases=["c", "add", "a"],
        help="creates a conflict: octagon conflict create player1name player2name")
    create.add_argument("players", nargs="*", help="two player names")
    _expires_option(create)
    create.add_argument("-p", "--priority", type=int, default=3, help="Priority level (1-3)")
    create.add_argument("-r", "--reason", default="", help="Reason for the conflict")
    create.set_defaults(handler=_create_conflict)
    conflict_commands.add_parser("list", aliases=["l"], help="lists all conflicts") \
        .set_defaults(handler=_list_conflicts)

    rating = commands.add_parser("rating", help="Player ratings",
                                 usage="octagon rating [subcommand]")
    rating.set_defaults(handler=_show_help(rating))
    rating_commands = rating.add_subparsers(title="commands", metavar="COMMAND")
    bias = rating_commands.add_parser("bias", help="Manage rating biases")
    bias.set_defaults(handler=_show_help(bias))
    bias_commands = bias.add_subparsers(title="commands", metavar="COMMAND")
    bias_add = bias_commands.add_parser(
        "add", help="Add a rating bias: octagon rating bias add playerId ratio reason")
    bias_add.add_argument("arguments", nargs="*", help="playerId ratio reason")
    _expires_option(bias_add)
    bias_add.set_defaults(handler=_add_bias)
    bias_commands.add_parser("list", help="List all rating biases") \
        .set_defaults(handler=_list_biases)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the octagon command line and return its exit status."""
    level = logging.DEBUG if os.environ.get("DEBUG") else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(message)s")

    parser = build_parser()
    args = parser.parse_args(argv)
    config_dir = args.config_dir if args.config_dir is not None else default_config_dir()

    try:
        load_environment(config_dir)
    except FileNotFoundError as err:
        print(f"error: {err}", file=sys.stderr)
        return 1

    try:
        with Cache(args.cache_path) as cache:
            return args.handler(args, _Context(config_dir=config_dir, cache=cache)) or 0
    except _CommandError as err:
        print(f"error: {err}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())