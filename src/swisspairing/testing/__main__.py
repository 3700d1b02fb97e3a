"""Unified Testing CLI for Swiss Pairing.

This module provides an interactive command-line interface for simulating
tournaments, pairing snapshot files and benchmarking the pairing engine.
"""

# Swiss Pairing
# Copyright (C) 2025  Swiss Pairing developers
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
import json
import random
import sys
from typing import List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from swisspairing.constants import BYE_SELECTION_MODES, DEFAULT_BYE_SELECTION
from swisspairing.exceptions import SwissPairingException
from swisspairing.models import RoundPairing, Standing
from swisspairing.testing.simulator import (
    SimulationConfig,
    TournamentSimulator,
    simulation_summary,
)
from swisspairing.tournament import TournamentSnapshot, load_snapshot, save_snapshot
from swisspairing.utils import setup_logger

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


# Command definitions with their options
COMMANDS = {
    "simulate": {
        "description": "Simulate a random tournament and validate every round",
        "options": {
            "--participants": "Number of participants (default: 16)",
            "--rounds": "Number of rounds (default: suggested for the field)",
            "--seed": "Random seed for reproducibility",
            "--draw-percentage": "Chance of a draw in percent (default: 10)",
            "--timed-win-percentage": "Chance of a timed win in percent (default: 15)",
            "--drop-percentage": "Chance per round that a participant drops (default: 0)",
            "--bye-selection": "Bye selection mode (standings/matching)",
            "--output": "Save the final tournament snapshot (JSON)",
            "--standings": "Print the final standings",
        },
    },
    "pair": {
        "description": "Pair the next round of a tournament snapshot",
        "options": {
            "--file": "Tournament snapshot (JSON)",
            "--seed": "Random seed for a round 1 pairing",
            "--json": "Print the pairing as JSON",
        },
    },
    "standings": {
        "description": "Show the standings of a tournament snapshot",
        "options": {
            "--file": "Tournament snapshot (JSON)",
        },
    },
    "benchmark": {
        "description": "Performance benchmarking of the pairing engine",
        "options": {
            "--size": "Tournament size to benchmark (default: 64)",
            "--rounds": "Number of rounds (default: suggested for the field)",
            "--iterations": "Number of iterations (default: 5)",
            "--bye-selection": "Bye selection mode (standings/matching)",
        },
    },
    "help": {
        "description": "Show help for specific command",
        "options": {
            "<command>": "Command name to get help for",
        },
    },
    "exit": {"description": "Exit the interactive mode", "options": {}},
}


def print_banner():
    """Print the application banner."""
    banner = f"""
{Colors.OKBLUE}+---------------------------------------------------------------+
|                                                               |
|                     SWISS TEST - CLI                          |
|                                                               |
+---------------------------------------------------------------+{Colors.ENDC}

Type {Colors.BOLD}/help{Colors.ENDC} to see all available commands
Type {Colors.BOLD}exit{Colors.ENDC} or {Colors.BOLD}quit{Colors.ENDC} to leave interactive mode
"""
    print(banner)


def print_commands_list():
    """Print list of all available commands."""
    print(f"\n{Colors.BOLD}Available Commands:{Colors.ENDC}\n")
    for cmd, info in COMMANDS.items():
        print(f"  {Colors.OKGREEN}{cmd:15}{Colors.ENDC} - {info['description']}")
    print()


def print_command_help(command: str):
    """Print detailed help for a specific command."""
    if command not in COMMANDS:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        print_commands_list()
        return

    cmd_info = COMMANDS[command]
    print(f"\n{Colors.BOLD}{Colors.OKBLUE}Command: {command}{Colors.ENDC}")
    print(f"{Colors.BOLD}Description:{Colors.ENDC} {cmd_info['description']}\n")

    if cmd_info["options"]:
        print(f"{Colors.BOLD}Options:{Colors.ENDC}")
        for option, description in cmd_info["options"].items():
            print(f"  {Colors.OKCYAN}{option:24}{Colors.ENDC} {description}")
    print()


def create_completer() -> NestedCompleter:
    """Create autocomplete completer for interactive mode."""
    # Support both "/command" and "command" formats
    completions = {}
    for cmd, info in COMMANDS.items():
        options_completer = (
            WordCompleter(list(info["options"].keys())) if info["options"] else None
        )
        completions[cmd] = options_completer
        completions[f"/{cmd}"] = options_completer

    completions["/help"] = None
    completions["/list"] = None

    return NestedCompleter.from_nested_dict(completions)


def print_pairing(pairing: RoundPairing, names=None):
    """Print the matchups of a round, bye last."""
    names = names or {}
    print(f"\n{Colors.BOLD}Round {pairing.round_number}:{Colors.ENDC}")
    for table, matchup in enumerate(pairing.pairs, start=1):
        first = names.get(matchup.player1_id, matchup.player1_id)
        second = names.get(matchup.player2_id, matchup.player2_id)
        print(f"  {table:3d}. {first} vs {second}")
    if pairing.bye_participant_id is not None:
        bye = names.get(pairing.bye_participant_id, pairing.bye_participant_id)
        print(f"       {Colors.OKCYAN}Bye: {bye}{Colors.ENDC}")


def print_standings(standings: List[Standing], names=None):
    """Print a standings table."""
    names = names or {}
    print(f"\n{Colors.BOLD}{'#':>4}  {'Participant':24} {'Pts':>6} {'Diff':>5}{Colors.ENDC}")
    for rank, standing in enumerate(standings, start=1):
        name = names.get(standing.id, standing.id)
        print(
            f"{rank:4d}  {name:24} {standing.wins:6.1f} {standing.differential:5d}"
        )


def run_simulate_command(args: argparse.Namespace) -> int:
    """Run the simulate command."""
    print(f"\n{Colors.BOLD}Simulating tournament...{Colors.ENDC}")

    config = SimulationConfig(
        num_participants=args.participants,
        num_rounds=args.rounds,
        seed=args.seed,
        draw_percentage=args.draw_percentage,
        timed_win_percentage=args.timed_win_percentage,
        drop_percentage=args.drop_percentage,
        bye_selection=args.bye_selection,
    )
    simulator = TournamentSimulator(config)
    result = simulator.run()
    summary = simulation_summary(result)

    print(f"\n{Colors.BOLD}Tournament Simulated:{Colors.ENDC}")
    print(f"  Participants: {summary['participants']}")
    print(f"  Rounds: {summary['rounds']}")
    print(f"  Dropped: {summary['dropped']}")
    print(f"  Pairing time: {summary['pairing_seconds']:.3f}s")

    report = result.report
    if report.violations:
        print(f"  {Colors.FAIL}Violations: {len(report.violations)}{Colors.ENDC}")
        for violation in report.violations:
            print(f"    {violation.description}")
    if report.quality_warnings:
        print(f"  {Colors.WARNING}Rematches: {len(report.quality_warnings)}{Colors.ENDC}")
    print(f"  {report.summary}")

    if args.standings:
        print_standings(result.standings)

    if args.output:
        snapshot = TournamentSnapshot.from_store(
            simulator.store, simulator.manager.tournament_id
        )
        path = save_snapshot(snapshot, args.output)
        print(f"{Colors.OKGREEN}Tournament saved to: {path}{Colors.ENDC}")

    return 0 if report.is_valid else 1


def run_pair_command(args: argparse.Namespace) -> int:
    """Run the pair command."""
    try:
        snapshot = load_snapshot(args.file)
        rng = random.Random(args.seed) if args.seed is not None else None
        pairing = snapshot.next_round(rng=rng)
    except SwissPairingException as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        return 1

    if args.json:
        print(json.dumps(pairing.to_dict(), indent=2))
    else:
        names = {p.id: p.display_name for p in snapshot.participants}
        print_pairing(pairing, names)
    return 0


def run_standings_command(args: argparse.Namespace) -> int:
    """Run the standings command."""
    try:
        snapshot = load_snapshot(args.file)
    except SwissPairingException as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        return 1

    print(f"\n{Colors.BOLD}Standings after round {snapshot.last_round}{Colors.ENDC}")
    names = {p.id: p.display_name for p in snapshot.participants}
    print_standings(snapshot.standings(), names)
    return 0


def run_benchmark_command(args: argparse.Namespace) -> int:
    """Run performance benchmark."""
    print(f"\n{Colors.BOLD}Running performance benchmark...{Colors.ENDC}")
    print(f"Tournament size: {args.size} participants, rounds: {args.rounds or 'auto'}")
    print(f"Iterations: {args.iterations}\n")

    times = []

    for i in range(args.iterations):
        config = SimulationConfig(
            num_participants=args.size,
            num_rounds=args.rounds,
            seed=42 + i,
            bye_selection=args.bye_selection,
        )
        result = TournamentSimulator(config).run()
        times.append(result.pairing_seconds)

        print(
            f"  Iteration {i+1}/{args.iterations}: {result.pairing_seconds*1000:.2f}ms "
            f"({len(result.rounds)} rounds)"
        )

    avg_time = sum(times) / len(times)
    min_time = min(times)
    max_time = max(times)

    print(f"\n{Colors.BOLD}Results:{Colors.ENDC}")
    print(f"  Average: {avg_time*1000:.2f}ms")
    print(f"  Min: {min_time*1000:.2f}ms")
    print(f"  Max: {max_time*1000:.2f}ms")

    return 0


def add_simulate_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--participants", type=int, default=16)
    parser.add_argument("--rounds", type=int, default=0)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--draw-percentage", type=int, default=10)
    parser.add_argument("--timed-win-percentage", type=int, default=15)
    parser.add_argument("--drop-percentage", type=float, default=0.0)
    parser.add_argument(
        "--bye-selection", choices=BYE_SELECTION_MODES, default=DEFAULT_BYE_SELECTION
    )
    parser.add_argument("--output", help="Snapshot output path")
    parser.add_argument("--standings", action="store_true")


def add_pair_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--file", required=True, help="Tournament snapshot (JSON)")
    parser.add_argument("--seed", type=int)
    parser.add_argument("--json", action="store_true")


def add_standings_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--file", required=True, help="Tournament snapshot (JSON)")


def add_benchmark_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--size", type=int, default=64)
    parser.add_argument("--rounds", type=int, default=0)
    parser.add_argument("--iterations", type=int, default=5)
    parser.add_argument(
        "--bye-selection", choices=BYE_SELECTION_MODES, default=DEFAULT_BYE_SELECTION
    )


# command -> (argument builder, runner)
RUNNERS = {
    "simulate": (add_simulate_arguments, run_simulate_command),
    "pair": (add_pair_arguments, run_pair_command),
    "standings": (add_standings_arguments, run_standings_command),
    "benchmark": (add_benchmark_arguments, run_benchmark_command),
}


def create_command_parser(command: str) -> argparse.ArgumentParser:
    """Create a standalone parser for one command (interactive mode)."""
    add_arguments, _ = RUNNERS[command]
    parser = argparse.ArgumentParser(
        prog=command, description=COMMANDS[command]["description"]
    )
    add_arguments(parser)
    return parser


def execute_command(user_input: str) -> Optional[int]:
    """Execute one line of interactive input.

    Returns:
        The command's exit code, or None if nothing was run
    """
    parts = user_input.split()
    if not parts:
        return None

    # Strip leading "/" if present (support both "/command" and "command")
    command = parts[0].lstrip("/")
    args_list = parts[1:]

    if command in ("help", "list"):
        if args_list:
            print_command_help(args_list[0].lstrip("/"))
        else:
            print_commands_list()
        return None

    if command not in RUNNERS:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        print(f"Type {Colors.BOLD}/help{Colors.ENDC} to see available commands")
        return None

    _, run = RUNNERS[command]
    args = create_command_parser(command).parse_args(args_list)
    return run(args)


def run_interactive_mode() -> int:
    """Run in interactive mode with autocomplete."""
    print_banner()

    style = Style.from_dict(
        {
            "prompt": "#00aa00 bold",
        }
    )

    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=style,
    )

    while True:
        try:
            user_input = session.prompt("swiss-test> ").strip()

            if not user_input:
                continue

            if user_input in ["exit", "/exit", "quit", "q"]:
                print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
                break

            if user_input == "?":
                print_commands_list()
                continue

            try:
                execute_command(user_input)
            except SystemExit:
                # argparse calls sys.exit on error, catch it
                continue
            except Exception as e:
                print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
                logger.exception("Command execution failed")

        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
        except EOFError:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            break
    return 0


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="swiss-test",
        description="Unified testing CLI for Swiss Pairing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  swiss-test

  # Simulate a tournament
  swiss-test simulate --participants 24 --rounds 5 --seed 7

  # Pair the next round of a snapshot
  swiss-test pair --file tournament.json

  # Benchmark performance
  swiss-test benchmark --size 128 --iterations 3
        """,
    )

    parser.add_argument(
        "--interactive", "-i", action="store_true", help="Start in interactive mode"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    for command, (add_arguments, run) in RUNNERS.items():
        sub_parser = subparsers.add_parser(
            command, help=COMMANDS[command]["description"]
        )
        add_arguments(sub_parser)
        sub_parser.set_defaults(func=run)

    return parser


def run_standard_mode(argv: Optional[List[str]] = None) -> int:
    """Run in standard CLI mode (non-interactive)."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if args.interactive:
        return run_interactive_mode()

    if hasattr(args, "func"):
        return args.func(args)
    parser.print_help()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for swiss-test CLI."""
    if argv is None:
        argv = sys.argv[1:]

    # If no arguments, start interactive mode
    if not argv:
        return run_interactive_mode()

    return run_standard_mode(argv)


if __name__ == "__main__":
    sys.exit(main())
