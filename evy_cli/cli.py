"""
CLI interface for evy.
Runs the genetic algorithm on built-in benchmarks and manages configuration.
"""

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from evy import GeneticAlgorithm, make_benchmark
from evy.errors import EvyError
from evy.logging_config import configure_logging
from evy.problems import BENCHMARKS, DEFAULT_BOUNDS
from evy_cli.config import DEFAULT_STATE_DIR, Config, get_config
from evy_cli.schemas import ProblemInput, RunReport
from monitoring import MetricsCollector

_EVOLUTION_OPTIONS = (
    "pop_number",
    "max_iterations",
    "k_tournament",
    "crossover_probability",
    "mutation_probability",
    "seed",
)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="evy",
        description="Real-valued genetic algorithm optimizer",
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Run command
    run_parser = subparsers.add_parser("run", help="Optimize a benchmark problem")
    run_parser.add_argument(
        "--problem", choices=sorted(BENCHMARKS), help="Benchmark to maximize"
    )
    run_parser.add_argument("--dimensions", "-d", type=int, help="Parameter count")
    run_parser.add_argument("--lower", type=float, help="Lower bound per parameter")
    run_parser.add_argument("--upper", type=float, help="Upper bound per parameter")
    run_parser.add_argument("--pop-number", type=int, help="Population size")
    run_parser.add_argument("--max-iterations", type=int, help="Generation count")
    run_parser.add_argument(
        "--k-tournament",
        type=int,
        help="Rivals per tournament (k + 1 competitors are drawn)",
    )
    run_parser.add_argument(
        "--crossover-probability", type=float, help="Per-pair crossover rate"
    )
    run_parser.add_argument(
        "--mutation-probability", type=float, help="Per-chromosome mutation rate"
    )
    run_parser.add_argument("--seed", type=int, help="Seed for a reproducible run")
    run_parser.add_argument(
        "--evaluate-final",
        action="store_true",
        help="Report the best of the final population instead of the last scored one",
    )
    run_parser.add_argument("--config", type=Path, help="Configuration file path")
    run_parser.add_argument("--output", "-o", type=Path, help="Write JSON report here")
    run_parser.add_argument(
        "--metrics", type=Path, help="Write per-generation metrics CSV here"
    )
    run_parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level",
    )
    run_parser.add_argument(
        "--json-logs", action="store_true", help="Emit JSON log lines"
    )

    # Problems command
    subparsers.add_parser("problems", help="List built-in benchmark problems")

    # Init command
    init_parser = subparsers.add_parser(
        "init", help="Write a default configuration into a state directory"
    )
    init_parser.add_argument(
        "--state-dir",
        type=Path,
        default=Path(DEFAULT_STATE_DIR),
        help="State directory path",
    )

    # Config command
    config_parser = subparsers.add_parser("config", help="Show configuration")
    config_parser.add_argument(
        "--show", action="store_true", help="Show current configuration"
    )
    config_parser.add_argument("--config", type=Path, help="Configuration file path")
    config_parser.add_argument(
        "--state-dir", type=Path, default=None, help="State directory path"
    )

    return parser


def _merge_run_args(config: Config, args: argparse.Namespace) -> None:
    """Apply command-line overrides on top of the loaded configuration."""
    for option in _EVOLUTION_OPTIONS:
        value = getattr(args, option)
        if value is not None:
            setattr(config.evolution, option, value)
    if args.evaluate_final:
        config.evolution.evaluate_final_population = True

    if args.problem is not None:
        config.problem.name = args.problem
    if args.dimensions is not None:
        config.problem.dimensions = args.dimensions
    if args.lower is not None:
        config.problem.lower = args.lower
    if args.upper is not None:
        config.problem.upper = args.upper

    if args.log_level is not None:
        config.logging.level = args.log_level
    if args.json_logs:
        config.logging.json_output = True


def cmd_run(args: argparse.Namespace) -> int:
    """Optimize a benchmark problem."""
    try:
        config = get_config(config_path=args.config)
    except EvyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    _merge_run_args(config, args)

    configure_logging(
        level=config.logging.level,
        json_output=config.logging.json_output,
        log_file=Path(config.logging.log_file) if config.logging.log_file else None,
        use_colors=config.logging.use_colors,
    )

    try:
        problem_input = ProblemInput(**asdict(config.problem))
    except ValidationError as e:
        print(f"Invalid problem: {e}", file=sys.stderr)
        return 1

    try:
        engine_config = config.evolution.to_engine_config()
        problem = make_benchmark(
            problem_input.name.value,
            problem_input.dimensions,
            problem_input.lower,
            problem_input.upper,
        )
        engine = GeneticAlgorithm(engine_config)
        collector = MetricsCollector()
        collector.attach(engine)
        result = engine.evolve(problem)
    except EvyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    report = RunReport.from_result(result, problem.name, engine_config.to_dict())

    print(f"Problem: {problem.name} ({problem.num_parameters} parameters)")
    print(f"Generations: {result.generations}")
    print(f"Best score: {result.best_score:.6g}")
    print(f"Best chromosome: {', '.join(f'{g:.6g}' for g in result.best_chromosome)}")
    print(f"Duration: {result.duration_seconds:.3f}s")

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with open(args.output, "w") as f:
            f.write(report.model_dump_json(indent=2))
        print(f"Report written to {args.output}")

    if args.metrics:
        args.metrics.parent.mkdir(parents=True, exist_ok=True)
        collector.export_to_csv(str(args.metrics), str(result.run_id))
        print(f"Metrics written to {args.metrics}")

    return 0


def cmd_problems(args: argparse.Namespace) -> int:
    """List built-in benchmark problems."""
    print(f"{'Name':<12} {'Default bounds'}")
    print("-" * 40)
    for name in sorted(BENCHMARKS):
        lower, upper = DEFAULT_BOUNDS[name]
        print(f"{name:<12} [{lower}, {upper}]")
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    """Write a default configuration into a state directory."""
    state_dir = args.state_dir
    config_file = state_dir / "config.json"

    if config_file.exists():
        print(f"Already initialized at {state_dir}")
        return 0

    Config(state_dir=str(state_dir)).save(config_file)
    print(f"Initialized evy at {state_dir}")
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Show the resolved configuration."""
    try:
        config = get_config(config_path=args.config, state_dir=args.state_dir)
    except EvyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(json.dumps(config.to_dict(), indent=2))
    return 0


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "run": cmd_run,
        "problems": cmd_problems,
        "init": cmd_init,
        "config": cmd_config,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
