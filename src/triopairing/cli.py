"""Command-line interface for Trio Pairing.

``simulate`` plays a seeded tournament with generated results, ``interactive``
opens a prompt to run a real event round by round.
"""

# Trio Pairing
# Copyright (C) 2025  Trio Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from triopairing.constants import BYE_POLICIES, DEFAULT_BYE_POLICY
from triopairing.exceptions import TrioPairingException
from triopairing.models import RoundData, TournamentType
from triopairing.testing.rtg import (
    RandomTournamentGenerator,
    ResultPattern,
    RTGConfig,
    format_standings,
)
from triopairing.tournament import Tournament
from triopairing.utils import setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


# Command definitions with their usage
COMMANDS = {
    "new": {"description": "Start over with an empty tournament", "usage": "new <name>"},
    "add": {"description": "Register a player", "usage": "add <name>"},
    "remove": {"description": "Unregister a player", "usage": "remove <player id>"},
    "start": {"description": "Start the tournament and draw round 1", "usage": "start"},
    "show": {
        "description": "Show the current round or an earlier one",
        "usage": "show [round number]",
    },
    "win": {
        "description": "Mark the winner of a match in the current round",
        "usage": "win <match id> <player id>",
    },
    "next": {
        "description": "Submit the marked winners and plan the next round",
        "usage": "next",
    },
    "standings": {"description": "Show the standings", "usage": "standings"},
    "state": {"description": "Show what the next round will be", "usage": "state"},
    "save": {"description": "Save the tournament to a JSON file", "usage": "save <path>"},
    "load": {"description": "Load a tournament from a JSON file", "usage": "load <path>"},
    "help": {"description": "List the commands", "usage": "help"},
    "quit": {"description": "Leave interactive mode", "usage": "quit"},
}


def format_round(
    tournament: Tournament,
    round_data: RoundData,
    pending: Optional[Dict[int, int]] = None,
) -> str:
    """Human readable listing of a round's matches and byes."""
    pending = pending or {}

    def name_of(player_id: int) -> str:
        player = tournament.players.get(player_id)
        return f"{player.name} ({player_id})" if player else str(player_id)

    lines = [f"Round {round_data.round_number} ({round_data.round_type.value})"]
    for match in round_data.matches:
        line = f"  Match {match.match_id}: " + ", ".join(
            name_of(pid) for pid in match.player_ids
        )
        if match.winner_id is not None:
            line += f"  winner: {name_of(match.winner_id)}"
        elif match.match_id in pending:
            line += f"  marked: {name_of(pending[match.match_id])}"
        lines.append(line)
    if round_data.bye_player_ids:
        byes = ", ".join(
            f"{name_of(pid)} +{round_data.bye_points.get(pid, 0)}"
            for pid in round_data.bye_player_ids
        )
        lines.append(f"  Byes: {byes}")
    return "\n".join(lines)


class InteractiveSession:
    """Holds the tournament being run and the winners marked so far.

    ``run_command`` takes one line of input and returns the text to show, so
    the prompt loop and the tests drive the same code.
    """

    def __init__(self, tournament: Optional[Tournament] = None) -> None:
        self.tournament = tournament or Tournament("Trio Tournament")
        self.pending: Dict[int, int] = {}
        self.finished = False

    def run_command(self, line: str) -> str:
        parts = line.strip().split()
        if not parts:
            return ""
        command, args = parts[0].lstrip("/").lower(), parts[1:]
        if command in ("exit", "q"):
            command = "quit"
        if command == "?":
            command = "help"

        handler = getattr(self, f"_cmd_{command}", None)
        if handler is None:
            return f"Unknown command: {command}. Type help to see available commands"

        try:
            return handler(args)
        except TrioPairingException as e:
            logger.warning("Command '%s' rejected: %s", line.strip(), e)
            return f"Error: {e}"
        except (ValueError, IndexError):
            return f"Usage: {COMMANDS[command]['usage']}"

    # ========== Commands ==========

    def _cmd_help(self, args: List[str]) -> str:
        lines = ["Available Commands:"]
        for cmd, info in COMMANDS.items():
            lines.append(f"  {info['usage']:28} {info['description']}")
        return "\n".join(lines)

    def _cmd_quit(self, args: List[str]) -> str:
        self.finished = True
        return "Goodbye!"

    def _cmd_new(self, args: List[str]) -> str:
        if not args:
            raise ValueError("missing name")
        self.tournament = Tournament(" ".join(args))
        self.pending = {}
        return f"New tournament: {self.tournament.name}"

    def _cmd_add(self, args: List[str]) -> str:
        if not args:
            raise ValueError("missing name")
        player = self.tournament.add_player(" ".join(args))
        return f"Added {player.name} with id {player.id}"

    def _cmd_remove(self, args: List[str]) -> str:
        player = self.tournament.remove_player(int(args[0]))
        return f"Removed {player.name}"

    def _cmd_start(self, args: List[str]) -> str:
        round_data = self.tournament.start()
        return (
            f"Started with {len(self.tournament.players)} players, "
            f"target {self.tournament.target_matches} matches each\n"
            + format_round(self.tournament, round_data)
        )

    def _cmd_show(self, args: List[str]) -> str:
        if args:
            round_data = self.tournament.get_round(int(args[0]))
            return format_round(self.tournament, round_data)
        round_data = self.tournament.current_round
        if round_data is None:
            players = ", ".join(
                f"{p.name} ({p.id})" for p in self.tournament.get_player_list()
            )
            return f"Not started. Players: {players or 'none'}"
        return format_round(self.tournament, round_data, self.pending)

    def _cmd_win(self, args: List[str]) -> str:
        match_id, winner_id = int(args[0]), int(args[1])
        round_data = self.tournament.current_round
        match = round_data.get_match(match_id) if round_data else None
        if match is None:
            return f"Error: match {match_id} is not in the current round"
        if not match.has_player(winner_id):
            return f"Error: player {winner_id} did not play match {match_id}"
        self.pending[match_id] = winner_id
        open_matches = sum(
            1
            for m in round_data.matches
            if not m.is_decided and m.match_id not in self.pending
        )
        return f"Marked {winner_id} as winner of match {match_id}, {open_matches} open"

    def _cmd_next(self, args: List[str]) -> str:
        next_round = self.tournament.advance(self.pending)
        self.pending = {}
        if next_round is None:
            winner = self.tournament.winner
            return f"Tournament complete. Winner: {winner.name if winner else 'none'}"
        return format_round(self.tournament, next_round)

    def _cmd_standings(self, args: List[str]) -> str:
        return format_standings(self.tournament.standings())

    def _cmd_state(self, args: List[str]) -> str:
        return (
            f"Status: {self.tournament.status.value}, "
            f"next: {self.tournament.planner_state.value}, "
            f"rounds completed: {self.tournament.round_manager.completed_rounds_count}, "
            f"target: {self.tournament.target_matches} matches"
        )

    def _cmd_save(self, args: List[str]) -> str:
        path = self.tournament.save(args[0] if args else "tournament")
        return f"Saved to {path}"

    def _cmd_load(self, args: List[str]) -> str:
        if not args:
            raise ValueError("missing path")
        self.tournament = Tournament.load(args[0])
        self.pending = {}
        return f"Loaded {self.tournament.name}"


def print_banner():
    """Print the application banner."""
    banner = f"""
{Colors.OKBLUE}╔═══════════════════════════════════════════════════════════════╗
║                                                               ║
║                     TRIO PAIRING - CLI                        ║
║                                                               ║
║                 [Three players, one winner]                   ║
║                                                               ║
╚═══════════════════════════════════════════════════════════════╝{Colors.ENDC}

Type {Colors.BOLD}help{Colors.ENDC} to see all available commands
Type {Colors.BOLD}quit{Colors.ENDC} to leave interactive mode
"""
    print(banner)


def create_completer() -> NestedCompleter:
    """Create autocomplete completer for interactive mode."""
    completions = {}
    for cmd in COMMANDS:
        completions[cmd] = None
        completions[f"/{cmd}"] = None
    return NestedCompleter.from_nested_dict(completions)


def run_interactive_mode(args: argparse.Namespace) -> int:
    """Run in interactive mode with autocomplete."""
    print_banner()

    tournament = Tournament.load(args.file) if args.file else None
    state = InteractiveSession(tournament)
    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=Style.from_dict({"prompt": "#00aa00 bold"}),
    )

    while not state.finished:
        try:
            user_input = session.prompt("trio> ")
        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'quit' to leave{Colors.ENDC}")
            continue
        except EOFError:
            break

        output = state.run_command(user_input)
        if output:
            colour = Colors.FAIL if output.startswith("Error") else ""
            print(f"{colour}{output}{Colors.ENDC if colour else ''}")

    print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
    return 0


def run_simulate_command(args: argparse.Namespace) -> int:
    """Play a tournament with generated results and print it."""
    config = RTGConfig(
        num_players=args.players,
        seed=args.seed,
        result_pattern=ResultPattern(args.pattern),
        tournament_type=TournamentType(args.type),
        bye_point_policy=args.bye_policy,
    )
    generator = RandomTournamentGenerator(config)

    print(f"\n{Colors.BOLD}Simulating tournament...{Colors.ENDC}")
    try:
        tournament_data = generator.generate_complete_tournament()
    except TrioPairingException as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        return 1

    tournament = tournament_data["tournament"]
    for round_data in tournament_data["rounds"]:
        print(format_round(tournament, round_data))
    print(f"\n{Colors.BOLD}Final standings:{Colors.ENDC}")
    print(format_standings(tournament_data["standings"]))
    winner = tournament.winner
    print(f"\nWinner: {winner.name if winner else 'none'}")

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(
            generator.export_json_format(tournament_data), encoding="utf-8"
        )
        print(f"{Colors.OKGREEN}Saved to {output_path}{Colors.ENDC}")
    return 0


def create_main_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="triopairing",
        description="Three player tournament pairing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Play a 9 player tournament with seeded results
  triopairing simulate --players 9 --seed 7

  # Run an event by hand
  triopairing interactive
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    sim_parser = subparsers.add_parser("simulate", help="Simulate a tournament")
    sim_parser.add_argument("--players", type=int, default=9)
    sim_parser.add_argument("--seed", type=int)
    sim_parser.add_argument(
        "--pattern",
        choices=[p.value for p in ResultPattern],
        default=ResultPattern.REALISTIC.value,
    )
    sim_parser.add_argument(
        "--type",
        choices=[t.value for t in TournamentType],
        default=TournamentType.SWISS.value,
    )
    sim_parser.add_argument(
        "--bye-policy", choices=list(BYE_POLICIES), default=DEFAULT_BYE_POLICY
    )
    sim_parser.add_argument("--output", help="Write the tournament as JSON")
    sim_parser.set_defaults(func=run_simulate_command)

    int_parser = subparsers.add_parser("interactive", help="Run a tournament by hand")
    int_parser.add_argument("--file", help="Tournament file to resume")
    int_parser.set_defaults(func=run_interactive_mode)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the triopairing CLI."""
    parser = create_main_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
