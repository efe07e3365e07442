"""Unified Testing CLI for Bracketeer.

This module provides an interactive command-line interface for simulating
tournaments, running the unit tests and benchmarking match generation.
"""

# Bracketeer
# Copyright (C) 2025  Bracketeer developers
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
import shlex
import subprocess
import sys
import time
from pathlib import Path

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from bracketeer.constants import APP_NAME
from bracketeer.models.tournament import Format
from bracketeer.testing.simulator import (
    ResultPattern,
    SimulationConfig,
    TournamentSimulator,
)
from bracketeer.tournament import format_info
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)

FORMAT_CHOICES = [fmt.value for fmt in Format]
PATTERN_CHOICES = [pattern.value for pattern in ResultPattern]


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
        "description": "Simulate random tournaments to completion",
        "options": {
            "--format": f"Tournament format ({'/'.join(FORMAT_CHOICES)})",
            "--players": "Number of players (default: 8)",
            "--tournaments": "Number of tournaments to simulate (default: 1)",
            "--pattern": f"Result pattern ({'/'.join(PATTERN_CHOICES)})",
            "--seed": "Random seed for reproducibility",
            "--output": "Write the last report as JSON",
        },
    },
    "formats": {
        "description": "List supported formats and their limits",
        "options": {},
    },
    "unit": {
        "description": "Run unit tests (pytest)",
        "options": {
            "--module": "Specific test module, e.g. swiss or standings",
            "--verbose": "Verbose output",
        },
    },
    "benchmark": {
        "description": "Performance benchmarking",
        "options": {
            "--format": "Tournament format (default: swiss)",
            "--players": "Tournament size to benchmark (default: 32)",
            "--iterations": "Number of iterations (default: 10)",
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
{Colors.OKBLUE}╔═══════════════════════════════════════════════════════════════╗
║                                                               ║
║                    BRACKETEER TEST - CLI                      ║
║                                                               ║
╚═══════════════════════════════════════════════════════════════╝{Colors.ENDC}

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
            print(f"  {Colors.OKCYAN}{option:20}{Colors.ENDC} {description}")
    print()


def create_completer():
    """Create autocomplete completer for interactive mode."""
    # Support both "/command" and "command" formats
    completions = {}
    for cmd, info in COMMANDS.items():
        options_completer = (
            WordCompleter(list(info["options"].keys())) if info["options"] else None
        )
        completions[cmd] = options_completer
        completions[f"/{cmd}"] = options_completer

    completions["/list"] = None
    return NestedCompleter.from_nested_dict(completions)


def run_simulate_command(args: argparse.Namespace) -> int:
    """Run the simulate command."""
    fmt = Format(args.format)
    print(f"\n{Colors.BOLD}Simulating {args.tournaments} x {fmt.value} "
          f"({args.players} players)...{Colors.ENDC}")

    failures = 0
    report = None
    for index in range(args.tournaments):
        config = SimulationConfig(
            format=fmt,
            num_players=args.players,
            result_pattern=ResultPattern(args.pattern),
            seed=None if args.seed is None else args.seed + index,
        )
        simulator = TournamentSimulator(config)
        report = simulator.run()

        status = (
            f"{Colors.OKGREEN}OK{Colors.ENDC}"
            if report.passed
            else f"{Colors.FAIL}FAILED{Colors.ENDC}"
        )
        print(
            f"  #{index + 1}: {status} {report.matches_played} matches, "
            f"champion(s): {', '.join(report.champions)} "
            f"({report.elapsed * 1000:.1f}ms)"
        )
        for violation in report.violations:
            print(f"    {Colors.WARNING}- {violation}{Colors.ENDC}")
        if not report.passed:
            failures += 1

    if args.output and report is not None:
        output_path = Path(args.output)
        output_path.write_text(simulator.export_json(report), encoding="utf-8")
        print(f"{Colors.OKGREEN}Report saved to: {output_path}{Colors.ENDC}")

    print(f"\n{Colors.BOLD}Results:{Colors.ENDC} "
          f"{args.tournaments - failures}/{args.tournaments} passed")
    return 1 if failures else 0


def run_formats_command(args: argparse.Namespace) -> int:
    """List every format with its player limits."""
    print(f"\n{Colors.BOLD}Formats:{Colors.ENDC}\n")
    for fmt in Format:
        info = format_info(fmt)
        print(
            f"  {Colors.OKGREEN}{info['type']:20}{Colors.ENDC} {info['name']} "
            f"({info['min_players']}-{info['max_players']} players)"
        )
        print(f"  {'':20} {info['description']}")
    print()
    return 0


def run_unit_command(args: argparse.Namespace) -> int:
    """Run unit tests using pytest."""
    print(f"\n{Colors.BOLD}Running unit tests...{Colors.ENDC}")

    pytest_args = [sys.executable, "-m", "pytest"]
    if args.module:
        pytest_args.append(f"tests/test_{args.module}.py")
    else:
        pytest_args.append("tests/")
    if args.verbose:
        pytest_args.append("-v")

    result = subprocess.run(pytest_args)
    return result.returncode


def run_benchmark_command(args: argparse.Namespace) -> int:
    """Run performance benchmarks."""
    fmt = Format(args.format)
    print(f"\n{Colors.BOLD}Running performance benchmark...{Colors.ENDC}")
    print(f"Format: {fmt.value}, {args.players} players")
    print(f"Iterations: {args.iterations}\n")

    times = []
    for i in range(args.iterations):
        simulator = TournamentSimulator(
            SimulationConfig(format=fmt, num_players=args.players, seed=42 + i)
        )
        start = time.perf_counter()
        simulator.run()
        elapsed = time.perf_counter() - start
        times.append(elapsed)
        print(f"  Iteration {i+1}/{args.iterations}: {elapsed*1000:.2f}ms")

    print(f"\n{Colors.BOLD}Results:{Colors.ENDC}")
    print(f"  Average: {sum(times) / len(times) * 1000:.2f}ms")
    print(f"  Min: {min(times) * 1000:.2f}ms")
    print(f"  Max: {max(times) * 1000:.2f}ms")
    return 0


def add_simulate_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format", choices=FORMAT_CHOICES, default=Format.SWISS.value, help="Format"
    )
    parser.add_argument("--players", type=int, default=8, help="Number of players")
    parser.add_argument(
        "--tournaments", type=int, default=1, help="Number of tournaments"
    )
    parser.add_argument(
        "--pattern",
        choices=PATTERN_CHOICES,
        default=ResultPattern.RANDOM.value,
        help="Result pattern",
    )
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--output", help="Output file path")


def add_unit_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--module", help="Specific test module")
    parser.add_argument("--verbose", action="store_true", help="Verbose output")


def add_benchmark_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format", choices=FORMAT_CHOICES, default=Format.SWISS.value, help="Format"
    )
    parser.add_argument("--players", type=int, default=32, help="Tournament size")
    parser.add_argument(
        "--iterations", type=int, default=10, help="Number of iterations"
    )


SUBCOMMANDS = {
    "simulate": (add_simulate_arguments, run_simulate_command),
    "formats": (lambda parser: None, run_formats_command),
    "unit": (add_unit_arguments, run_unit_command),
    "benchmark": (add_benchmark_arguments, run_benchmark_command),
}


def create_command_parser(command: str) -> argparse.ArgumentParser:
    """Create a standalone parser for one command (interactive mode)."""
    add_arguments, _ = SUBCOMMANDS[command]
    parser = argparse.ArgumentParser(
        prog=command, description=COMMANDS[command]["description"]
    )
    add_arguments(parser)
    return parser


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="bracketeer-test",
        description=f"Unified testing CLI for {APP_NAME}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  bracketeer-test

  # Simulate ten double elimination tournaments
  bracketeer-test simulate --format double-elimination --players 13 --tournaments 10

  # Run unit tests
  bracketeer-test unit --module swiss --verbose

  # Benchmark Swiss pairing
  bracketeer-test benchmark --players 64 --iterations 20
        """,
    )
    parser.add_argument(
        "--interactive", "-i", action="store_true", help="Start in interactive mode"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    for command, (add_arguments, run) in SUBCOMMANDS.items():
        sub = subparsers.add_parser(command, help=COMMANDS[command]["description"])
        add_arguments(sub)
        sub.set_defaults(func=run)
    return parser


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
            user_input = session.prompt("bracketeer-test> ").strip()
            if not user_input:
                continue

            if user_input in ["exit", "quit", "q", "/exit"]:
                print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
                break

            if user_input in ["/help", "help", "?", "/list"]:
                print_commands_list()
                continue

            parts = shlex.split(user_input)
            # Strip leading "/" if present (support both "/command" and "command")
            command = parts[0].lstrip("/")
            args_list = parts[1:]

            if command == "help":
                if args_list:
                    print_command_help(args_list[0].lstrip("/"))
                else:
                    print_commands_list()
                continue

            if command not in SUBCOMMANDS:
                print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
                print(f"Type {Colors.BOLD}/help{Colors.ENDC} to see available commands")
                continue

            try:
                args = create_command_parser(command).parse_args(args_list)
                SUBCOMMANDS[command][1](args)
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


def run_standard_mode() -> int:
    """Run in standard CLI mode (non-interactive)."""
    parser = create_main_parser()
    args = parser.parse_args()

    if args.interactive:
        return run_interactive_mode()

    if hasattr(args, "func"):
        return args.func(args)
    parser.print_help()
    return 0


def main() -> int:
    """Main entry point for bracketeer-test CLI."""
    if len(sys.argv) == 1:
        return run_interactive_mode()
    return run_standard_mode()


if __name__ == "__main__":
    sys.exit(main())
