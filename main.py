"""
quadmatch - Diagnostics Entry Point

Offline tooling for content authors: solve, validate, resolve and
generate boards from the command line. Prints a JSON summary on stdout.

Example:
    python main.py solve --board "[[1,0,1,0],[0,0,1,0],[1,0,0,1],[0,1,1,0]]"
    python main.py validate --board level_03.json --seed 7
    python main.py resolve --board board.json --swap 1 2 1 3 --seed 42
    python main.py generate --seed 7 --template template.json
    python main.py init-config --config config.json

Exit codes: 0 success, 1 negative outcome, 2 bad input.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

sys.path.insert(0, str(Path(__file__).parent / "src"))

from quadmatch.errors import QuadmatchError
from quadmatch.rules import RuleConfig
from quadmatch.settings import (
    DEFAULT_SETTINGS,
    load_settings,
    rule_config_from_settings,
    save_settings,
)
from quadmatch.solver import (
    BoardState,
    Move,
    SolutionContext,
    create_strategy,
    enumerate_valid_swaps,
    get_strategy_names,
)
from quadmatch.cascade import ResolveResult, resolve
from quadmatch.validator import validate_level
from quadmatch.generator import Template, generate_batch

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NEGATIVE = 1
EXIT_BAD_INPUT = 2


def configure_logging(level: str, log_file: Optional[str] = None) -> None:
    """Configure logging - output to stderr and optionally a file."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]  # Console output (stderr)
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )


def load_board(value: str) -> BoardState:
    """
    Parse a board from a JSON literal or a JSON file path.

    Accepts a plain 2D colour list or an object with "grid" and optional
    "heights"/"locked" layers.
    """
    if value.lstrip().startswith(("[", "{")):
        data = json.loads(value)
    else:
        with open(value, 'r', encoding='utf-8') as f:
            data = json.load(f)

    if isinstance(data, dict):
        return BoardState.from_2d_list(data["grid"], data.get("heights"), data.get("locked"))
    return BoardState.from_2d_list(data)


def load_template(value: str) -> Template:
    with open(value, 'r', encoding='utf-8') as f:
        return Template.from_dict(json.load(f))


def _resolve_summary(result: ResolveResult) -> Dict[str, Any]:
    return {
        "board": result.board.to_list(),
        "squares_matched": result.squares_matched,
        "cascade_depth": result.cascade_depth,
        "goal_squares": result.goal_squares,
        "events": [event.kind.value for event in result.events],
    }


class Application:
    """
    Command dispatcher.

    Holds the loaded settings and the effective rule config, and runs
    one command per invocation.
    """

    def __init__(self, args: argparse.Namespace):
        self.args = args
        self.settings = load_settings(args.config)
        self.config = rule_config_from_settings(self.settings)
        if args.ceiling is not None:
            self.config = self.config.with_overrides(move_ceiling=args.ceiling)
        if args.budget is not None:
            self.config = self.config.with_overrides(state_budget=args.budget)
        self.seed = args.seed if args.seed is not None else self.settings.get("seed")
        self.strategy_name = args.strategy or self.settings.get("strategy_name") or "bfs"

    def run(self) -> int:
        """
        Run the selected command.

        Returns:
            Exit code
        """
        handler = getattr(self, f"_on_{self.args.command.replace('-', '_')}")
        return handler()

    def _emit(self, payload: Dict[str, Any]) -> None:
        print(json.dumps(payload, indent=2))

    def _on_solve(self) -> int:
        board = load_board(self.args.board)
        context = SolutionContext.from_config(board, self.config, count_openings=self.args.openings)
        result = create_strategy(self.strategy_name).solve(context)
        self._emit({
            "outcome": result.outcome.value,
            "moves": [m.to_list() for m in result.moves],
            "shortest_length": result.shortest_length,
            "states_explored": result.states_explored,
            "openings": sorted(m.to_list() for m in result.openings),
            "time_ms": round(result.metrics.computation_time_ms, 2),
        })
        return EXIT_OK if result.solvable else EXIT_NEGATIVE

    def _on_validate(self) -> int:
        board = load_board(self.args.board)
        report = validate_level(board, self.config, seed=self.seed, strategy=self.strategy_name)
        self._emit(report.summary())
        return EXIT_OK if report.passed else EXIT_NEGATIVE

    def _on_resolve(self) -> int:
        board = load_board(self.args.board)
        if self.args.swap:
            r1, c1, r2, c2 = self.args.swap
            move = Move(r1, c1, r2, c2)
            valid = {m for m, _ in enumerate_valid_swaps(board, self.config.match_heights)}
            if move not in valid:
                logger.warning(f"Swap {move} does not create a square")
                self._emit({"valid_swap": False})
                return EXIT_NEGATIVE
            board = board.apply_move(move)
        result = resolve(board, self.config, seed=self.seed)
        self._emit(_resolve_summary(result))
        return EXIT_OK

    def _on_generate(self) -> int:
        templates = [load_template(self.args.template)] if self.args.template else None
        puzzles = generate_batch(self.config, self.args.count, templates=templates, seed=self.seed)
        self._emit({
            "puzzles": [
                {
                    "status": p.status.value,
                    "strategy": p.strategy,
                    "seed": p.seed,
                    "attempts": p.attempts,
                    "board": p.board.to_list() if p.board is not None else None,
                    "report": p.report.summary() if p.report is not None else None,
                }
                for p in puzzles
            ]
        })
        return EXIT_OK if all(p.validated for p in puzzles) else EXIT_NEGATIVE

    def _on_init_config(self) -> int:
        settings = dict(DEFAULT_SETTINGS)
        settings["rules"] = RuleConfig().to_dict()
        save_settings(settings, self.args.config)
        logger.info(f"Default settings written to {self.args.config or 'config.json'}")
        return EXIT_OK


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", "-c", default=None,
                        help="Settings file (default: config.json)")
    common.add_argument("--seed", "-s", type=int, default=None,
                        help="Seed for refill and generation")
    common.add_argument("--ceiling", type=int, default=None,
                        help="Override the move ceiling")
    common.add_argument("--budget", type=int, default=None,
                        help="Override the state budget")
    common.add_argument("--strategy", default=None, choices=get_strategy_names(),
                        help="Solver strategy")
    common.add_argument("--log-level", default=None,
                        help="Logging level (default from settings)")
    common.add_argument("--log-file", default=None,
                        help="Also write logs to this file")

    parser = argparse.ArgumentParser(
        description="quadmatch - Square-match puzzle solver, validator and generator"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    solve_cmd = commands.add_parser("solve", parents=[common], help="Find the shortest solution")
    solve_cmd.add_argument("--board", "-b", required=True, help="JSON board literal or file")
    solve_cmd.add_argument("--openings", action="store_true",
                           help="Count distinct opening moves of shortest solutions")

    validate_cmd = commands.add_parser("validate", parents=[common], help="Run the level validator")
    validate_cmd.add_argument("--board", "-b", required=True, help="JSON board literal or file")

    resolve_cmd = commands.add_parser("resolve", parents=[common], help="Resolve cascades on a board")
    resolve_cmd.add_argument("--board", "-b", required=True, help="JSON board literal or file")
    resolve_cmd.add_argument("--swap", type=int, nargs=4, metavar=("R1", "C1", "R2", "C2"),
                             help="Valid swap to play before resolving")

    generate_cmd = commands.add_parser("generate", parents=[common], help="Generate puzzles")
    generate_cmd.add_argument("--template", "-t", default=None, help="Template JSON file")
    generate_cmd.add_argument("--count", "-n", type=int, default=1, help="Number of puzzles")

    commands.add_parser("init-config", parents=[common], help="Write a default settings file")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, configure logging and run one command."""
    args = parse_args(argv)
    level = args.log_level or load_settings(args.config).get("log_level") or "INFO"
    configure_logging(level, args.log_file)

    try:
        return Application(args).run()
    except (QuadmatchError, ValueError, KeyError, OSError) as e:
        logger.error(f"Bad input: {e}")
        return EXIT_BAD_INPUT


if __name__ == "__main__":
    sys.exit(main())
