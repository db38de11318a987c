"""Developer CLI for Swiss Draw.

Run ``python -m swissdraw.testing`` (or ``swissdraw-test``) without arguments
for the interactive shell, or pass a subcommand for one-off runs.
"""

# Swiss Draw
# Copyright (C) 2025  Swiss Draw developers
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
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from swissdraw.exceptions import SwissDrawException
from swissdraw.models import (
    Bracket,
    DrawResult,
    Fixture,
    PlayoffRound,
    Team,
    TournamentRules,
)
from swissdraw.pairing import PairingEngine, SequentialDrawEngine
from swissdraw.testing.rtg import (
    CoefficientDistribution,
    CountryMode,
    RosterFactory,
    RTGConfig,
)
from swissdraw.tournament import StandingsCalculator
from swissdraw.utils import setup_logger
from swissdraw.utils.validation import validate_rules_strict
from swissdraw.validation import CriterionStatus, ScheduleValidator

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


ROSTER_OPTIONS = {
    "--teams": "Number of generated teams (default: 36)",
    "--matchdays": "Matchdays per team (default: 8)",
    "--seed": "Random seed for reproducibility",
    "--roster": "Roster JSON file instead of a generated roster",
    "--rules": "Rules JSON file (snake_case or camelCase keys)",
    "--country-pool": "Draw countries from a pool of this size",
    "--distribution": "Coefficient distribution (uniform/normal/elite)",
}

# Command definitions with their options
COMMANDS = {
    "draw": {
        "description": "Run a Swiss-phase draw and list the fixtures",
        "options": {
            **ROSTER_OPTIONS,
            "--sequential": "Use the ceremony-ordered random draw",
            "--steps": "Print every ceremony step (sequential draw only)",
            "--output": "Write the draw to a JSON file",
        },
    },
    "simulate": {
        "description": "Draw, simulate the Swiss phase and print the standings",
        "options": {**ROSTER_OPTIONS, "--sequential": "Use the sequential draw"},
    },
    "playoffs": {
        "description": "Run a whole competition through to the champion",
        "options": {**ROSTER_OPTIONS, "--sequential": "Use the sequential draw"},
    },
    "validate": {
        "description": "Validate a saved fixture list against its rules",
        "options": {
            "--file": "JSON file with teams, fixtures and optional rules",
            "--detailed": "Show offenders for every failed criterion",
        },
    },
    "benchmark": {
        "description": "Time draws over several seeds",
        "options": {
            "--size": "Teams per tournament (default: 36)",
            "--matchdays": "Matchdays per team (default: 8)",
            "--iterations": "Number of iterations (default: 10)",
            "--sequential": "Benchmark the sequential draw",
        },
    },
    "exit": {"description": "Exit the interactive mode", "options": {}},
}


def print_banner():
    """Print the application banner."""
    banner = f"""
{Colors.OKBLUE}+-------------------------------------------------+
|                                                 |
|               SWISS DRAW - DEV CLI              |
|                                                 |
+-------------------------------------------------+{Colors.ENDC}

Type {Colors.BOLD}/help{Colors.ENDC} to see all available commands
Type {Colors.BOLD}exit{Colors.ENDC} or {Colors.BOLD}quit{Colors.ENDC} to leave interactive mode
"""
    print(banner)


def print_commands_list():
    """Print list of all available commands."""
    print(f"\n{Colors.BOLD}Available Commands:{Colors.ENDC}\n")
    for cmd, info in COMMANDS.items():
        print(f"  {Colors.OKGREEN}{cmd:12}{Colors.ENDC} - {info['description']}")
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
            print(f"  {Colors.OKCYAN}{option:16}{Colors.ENDC} {description}")
    print()


def create_completer() -> NestedCompleter:
    """Create autocomplete completer for interactive mode."""
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


# ========== Input loading ==========


def load_rules(args: argparse.Namespace) -> TournamentRules:
    """Rules from ``--rules`` if given, with ``--matchdays`` applied on top."""
    data: Dict[str, Any] = {}
    if getattr(args, "rules", None):
        data = json.loads(Path(args.rules).read_text(encoding="utf-8"))
    rules = TournamentRules.from_dict(data)
    if getattr(args, "matchdays", None) is not None:
        rules.number_of_matchdays = args.matchdays
    validate_rules_strict(rules)
    return rules


def load_roster(args: argparse.Namespace, rules: TournamentRules) -> List[Team]:
    """Roster from ``--roster`` if given, otherwise a generated one."""
    if getattr(args, "roster", None):
        data = json.loads(Path(args.roster).read_text(encoding="utf-8"))
        if isinstance(data, dict):
            data = data.get("teams", [])
        return [Team.from_dict(team) for team in data]

    config = RTGConfig(
        num_teams=args.teams,
        rules=rules,
        coefficient_distribution=CoefficientDistribution(args.distribution),
        seed=args.seed,
    )
    if args.country_pool:
        config.country_mode = CountryMode.POOL
        config.country_pool_size = args.country_pool
    return RosterFactory(config).create_teams()


def run_draw(
    args: argparse.Namespace,
) -> Tuple[List[Team], TournamentRules, DrawResult]:
    rules = load_rules(args)
    teams = load_roster(args, rules)
    if args.sequential:
        engine = SequentialDrawEngine(seed=args.seed)
    else:
        engine = PairingEngine()
    return teams, rules, engine.conduct_draw(teams, rules)


# ========== Output ==========


def print_problems(draw: DrawResult):
    if draw.is_clean:
        print(f"{Colors.OKGREEN}Draw is clean{Colors.ENDC}")
        return
    print(f"{Colors.WARNING}{len(draw.problems)} problems:{Colors.ENDC}")
    for problem in draw.problems:
        print(f"  [{problem.kind.value}] {problem.message}")


def print_fixtures(fixtures: List[Fixture]):
    current = None
    for fixture in fixtures:
        if fixture.matchday != current:
            current = fixture.matchday
            print(f"\n{Colors.BOLD}Matchday {current}{Colors.ENDC}")
        print(f"  {fixture}")


def print_standings(teams: List[Team], fixtures: List[Fixture], rules: TournamentRules):
    calculator = StandingsCalculator()
    table = calculator.qualification_table(
        calculator.calculate(teams, fixtures), rules
    )
    print(
        f"\n{Colors.BOLD}{'Pos':>3} {'Team':20} {'P':>2} {'W':>2} {'D':>2} "
        f"{'L':>2} {'GF':>3} {'GA':>3} {'GD':>4} {'Pts':>4}  Status{Colors.ENDC}"
    )
    for entry, status in table:
        print(
            f"{entry.position:>3} {entry.team.name[:20]:20} {entry.played:>2} "
            f"{entry.won:>2} {entry.drawn:>2} {entry.lost:>2} {entry.goals_for:>3} "
            f"{entry.goals_against:>3} {entry.goal_difference:>+4} {entry.points:>4}  "
            f"{status.value}"
        )


def print_bracket(bracket: Bracket):
    if bracket.is_empty:
        for problem in bracket.problems:
            print(f"{Colors.WARNING}{problem}{Colors.ENDC}")
        return
    for playoff_round in PlayoffRound:
        print(f"\n{Colors.BOLD}{playoff_round.display_name}{Colors.ENDC}")
        for match in bracket.matches_in_round(playoff_round):
            home = match.home.name if match.home else "TBD"
            away = match.away.name if match.away else "TBD"
            if match.played:
                note = (
                    f" ({match.decided_by.value})"
                    if match.decided_by and match.decided_by.value != "regulation"
                    else ""
                )
                print(
                    f"  {match.id:8} {home} {match.home_score}-{match.away_score} "
                    f"{away}{note}"
                )
            else:
                print(f"  {match.id:8} {home} vs {away}")


# ========== Commands ==========


def run_draw_command(args: argparse.Namespace) -> int:
    """Run the draw command."""
    teams, rules, draw = run_draw(args)
    if args.steps and draw.steps:
        print(f"\n{Colors.BOLD}Ceremony{Colors.ENDC}")
        for number, step in enumerate(draw.steps, start=1):
            venue = "home" if step.is_home else "away"
            print(
                f"  {number:4}. MD{step.matchday} {step.team.name} draws "
                f"{step.opponent.name} ({venue})"
            )
    print_fixtures(draw.fixtures)
    print()
    print_problems(draw)

    if args.output:
        payload = {
            "rules": rules.to_dict(),
            "teams": [team.to_dict() for team in teams],
            "fixtures": [fixture.to_dict() for fixture in draw.fixtures],
            "problems": draw.errors,
        }
        Path(args.output).write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"\n{Colors.OKGREEN}Draw written to {args.output}{Colors.ENDC}")
    return 0 if not draw.problems else 1


def run_simulate_command(args: argparse.Namespace) -> int:
    """Run the simulate command."""
    from swissdraw.simulation import MatchSimulator

    teams, rules, draw = run_draw(args)
    print_problems(draw)
    fixtures = MatchSimulator(seed=args.seed).simulate_all(
        draw.fixtures, rules.allow_draws
    )
    print_standings(teams, fixtures, rules)
    return 0


def run_playoffs_command(args: argparse.Namespace) -> int:
    """Run the playoffs command."""
    from swissdraw.tournament import Tournament

    rules = load_rules(args)
    tournament = Tournament("CLI", load_roster(args, rules), rules, seed=args.seed)
    print_problems(tournament.conduct_draw(sequential=args.sequential))
    tournament.simulate_all()
    print_standings(tournament.teams, tournament.fixtures, rules)

    bracket = tournament.build_playoffs()
    champion = None if bracket.is_empty else tournament.play_out_playoffs()
    print_bracket(bracket)

    if champion is None:
        print(f"\n{Colors.WARNING}No champion decided{Colors.ENDC}")
        return 1
    print(f"\n{Colors.BOLD}{Colors.OKGREEN}Champion: {champion.name}{Colors.ENDC}")
    return 0


def run_validate_command(args: argparse.Namespace) -> int:
    """Run the validate command."""
    path = Path(args.file)
    if not path.exists():
        print(f"{Colors.FAIL}File not found: {path}{Colors.ENDC}")
        return 1

    data = json.loads(path.read_text(encoding="utf-8"))
    teams = [Team.from_dict(team) for team in data["teams"]]
    by_id = {team.id: team for team in teams}
    fixtures = [Fixture.from_dict(fixture, by_id) for fixture in data["fixtures"]]
    rules = TournamentRules.from_dict(data.get("rules", {}))

    report = ScheduleValidator().validate(fixtures, teams, rules)
    colour = Colors.OKGREEN if report.is_compliant else Colors.FAIL
    print(f"\n{colour}{report.summary}{Colors.ENDC}")
    print(f"Compliance: {report.compliance_percentage:.1f}%\n")
    for result in report.criteria_results:
        marker = {
            CriterionStatus.COMPLIANT: f"{Colors.OKGREEN}ok{Colors.ENDC}",
            CriterionStatus.VIOLATION: f"{Colors.FAIL}FAIL{Colors.ENDC}",
            CriterionStatus.NOT_APPLICABLE: "n/a",
        }[result.status]
        print(f"  {result.criterion:3} {marker:14} {result.description}")
        if args.detailed and result.details.get("offenders"):
            print(f"        {', '.join(result.details['offenders'])}")
    return 0 if report.is_compliant else 1


def run_benchmark_command(args: argparse.Namespace) -> int:
    """Run performance benchmarks."""
    rules = TournamentRules(number_of_matchdays=args.matchdays)
    print(f"\n{Colors.BOLD}Running draw benchmark...{Colors.ENDC}")
    print(f"Roster: {args.size} teams, {args.matchdays} matchdays")
    print(f"Iterations: {args.iterations}\n")

    times = []
    problem_counts = []
    for i in range(args.iterations):
        teams = RosterFactory(
            RTGConfig(num_teams=args.size, rules=rules, seed=42 + i)
        ).create_teams()
        engine = (
            SequentialDrawEngine(seed=42 + i) if args.sequential else PairingEngine()
        )
        start = time.perf_counter()
        draw = engine.conduct_draw(teams, rules)
        elapsed = time.perf_counter() - start
        times.append(elapsed)
        problem_counts.append(len(draw.problems))
        print(
            f"  Iteration {i + 1}/{args.iterations}: {elapsed * 1000:.2f}ms, "
            f"{len(draw.problems)} problems"
        )

    print(f"\n{Colors.BOLD}Results:{Colors.ENDC}")
    print(f"  Average: {sum(times) / len(times) * 1000:.2f}ms")
    print(f"  Min: {min(times) * 1000:.2f}ms")
    print(f"  Max: {max(times) * 1000:.2f}ms")
    print(f"  Draws with problems: {sum(1 for c in problem_counts if c)}")
    return 0


# ========== Parsers ==========


def add_roster_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--teams", type=int, default=36, help="Number of teams")
    parser.add_argument("--matchdays", type=int, help="Matchdays per team")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--roster", help="Roster JSON file")
    parser.add_argument("--rules", help="Rules JSON file")
    parser.add_argument("--country-pool", type=int, help="Country pool size")
    parser.add_argument(
        "--distribution",
        choices=[d.value for d in CoefficientDistribution],
        default=CoefficientDistribution.NORMAL.value,
    )
    parser.add_argument("--sequential", action="store_true")


def add_draw_arguments(parser: argparse.ArgumentParser):
    add_roster_arguments(parser)
    parser.add_argument("--steps", action="store_true", help="Print ceremony steps")
    parser.add_argument("--output", help="Write the draw to this JSON file")


def add_validate_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--file", required=True)
    parser.add_argument("--detailed", action="store_true")


def add_benchmark_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--size", type=int, default=36, help="Teams per tournament")
    parser.add_argument("--matchdays", type=int, default=8)
    parser.add_argument("--iterations", type=int, default=10)
    parser.add_argument("--sequential", action="store_true")


SUBCOMMANDS = {
    "draw": (add_draw_arguments, run_draw_command),
    "simulate": (add_roster_arguments, run_simulate_command),
    "playoffs": (add_roster_arguments, run_playoffs_command),
    "validate": (add_validate_arguments, run_validate_command),
    "benchmark": (add_benchmark_arguments, run_benchmark_command),
}


def create_command_parser(command: str) -> argparse.ArgumentParser:
    """Create a standalone parser for one subcommand (interactive mode)."""
    add_arguments, _ = SUBCOMMANDS[command]
    parser = argparse.ArgumentParser(
        prog=command, description=COMMANDS[command]["description"]
    )
    add_arguments(parser)
    return parser


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="swissdraw-test",
        description="Developer CLI for Swiss Draw",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  swissdraw-test

  # Deterministic draw for 36 generated teams
  swissdraw-test draw --teams 36 --seed 7

  # Ceremony draw with every step printed
  swissdraw-test draw --sequential --steps --seed 7

  # Whole competition through to the champion
  swissdraw-test playoffs --seed 3

  # Validate a saved draw
  swissdraw-test validate --file draw.json --detailed
        """,
    )
    parser.add_argument(
        "--interactive", "-i", action="store_true", help="Start in interactive mode"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    for command, (add_arguments, handler) in SUBCOMMANDS.items():
        subparser = subparsers.add_parser(
            command, help=COMMANDS[command]["description"]
        )
        add_arguments(subparser)
        subparser.set_defaults(func=handler)
    return parser


def execute(command: str, args_list: List[str]) -> int:
    """Parse ``args_list`` for ``command`` and run it."""
    _, handler = SUBCOMMANDS[command]
    args = create_command_parser(command).parse_args(args_list)
    return handler(args)


def run_interactive_mode() -> int:
    """Run in interactive mode with autocomplete."""
    print_banner()
    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=Style.from_dict({"prompt": "#00aa00 bold"}),
    )

    while True:
        try:
            user_input = session.prompt("swissdraw> ").strip()
            if not user_input:
                continue

            if user_input in ["exit", "quit", "q", "/exit"]:
                print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
                break
            if user_input in ["/help", "help", "?", "/list"]:
                print_commands_list()
                continue
            if user_input.startswith("/help ") or user_input.startswith("help "):
                print_command_help(user_input.split()[1].lstrip("/"))
                continue

            parts = user_input.split()
            command = parts[0].lstrip("/")
            if command not in SUBCOMMANDS:
                print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
                print(f"Type {Colors.BOLD}/help{Colors.ENDC} to see available commands")
                continue

            try:
                execute(command, parts[1:])
            except SystemExit:
                # argparse exits on bad arguments
                continue
            except (SwissDrawException, OSError, ValueError, KeyError) as e:
                print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
                logger.exception("Command execution failed")

        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
        except EOFError:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            break
    return 0


def run_standard_mode(argv: Optional[List[str]] = None) -> int:
    """Run in standard CLI mode (non-interactive)."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if args.interactive:
        return run_interactive_mode()
    if hasattr(args, "func"):
        try:
            return args.func(args)
        except SwissDrawException as e:
            print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
            return 1
    parser.print_help()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the swissdraw-test CLI."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv or "--interactive" in argv or "-i" in argv:
        return run_interactive_mode()
    return run_standard_mode(argv)


if __name__ == "__main__":
    sys.exit(main())
