#!/usr/bin/env python3
"""
Minesweeper solver - Main entry point.

Usage:
    python main.py play [--difficulty {beginner,intermediate,expert}]
    python main.py simulate [--difficulty ...] [--seed N]
    python main.py benchmark [--games N] [--difficulty ...]
"""
import argparse
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from solver import Board, DIFFICULTIES, PlayConfig, SurfaceError
from surfaces import BrowserConfig, SimulatedSurface, WebDriverSurface
from evaluation import EvaluationConfig, Evaluator


def print_result(result) -> None:
    """Print the counters of a finished run."""
    print(f"Result: {result.state.name}")
    print(f"  Resets: {result.resets}")
    print(f"  Guesses: {result.guesses}")
    print(f"  Flags: {result.flags}")
    print(f"  Steps: {result.steps}")
    print(f"  Time: {result.elapsed:.2f}s")


def play(args: argparse.Namespace) -> int:
    """Play on minesweeperonline.com in a browser."""
    config = DIFFICULTIES[args.difficulty]
    surface = WebDriverSurface(
        BrowserConfig(remote_url=args.remote_url, headless=args.headless)
    )
    board = Board(
        surface,
        config,
        PlayConfig(mark_flags=not args.no_flags, seed=args.seed),
    )

    try:
        board.launch()
        result = board.play()
        print_result(result)
        print(f"Surface reports win: {surface.is_won()}")
    except SurfaceError as e:
        print(f"Surface error: {e}", file=sys.stderr)
        return 1
    finally:
        surface.close()
    return 0


def simulate(args: argparse.Namespace) -> int:
    """Play one in-memory game and show the final board."""
    config = DIFFICULTIES[args.difficulty]
    surface = SimulatedSurface(seed=args.seed)
    board = Board(surface, config, PlayConfig(seed=args.seed))
    board.launch()
    result = board.play()

    print(board.render())
    print()
    print_result(result)
    return 0


def benchmark(args: argparse.Namespace) -> int:
    """Play many in-memory games and compare difficulties."""
    evaluator = Evaluator(
        EvaluationConfig(num_games=args.games, seed=args.seed)
    )
    names = [args.difficulty] if args.difficulty else list(DIFFICULTIES)
    results = evaluator.compare({name: DIFFICULTIES[name] for name in names})

    print("\n" + "=" * 64)
    print("Benchmark Results")
    print("=" * 64)
    print(
        f"{'Board':<14} {'Win Rate':<10} {'1st Try':<10} "
        f"{'Resets':<9} {'Guesses':<9} {'Time':<8}"
    )
    print("-" * 64)

    for name, metrics in results.items():
        print(
            f"{name:<14} {metrics['win_rate']:>8.1%} "
            f"{metrics['first_try_rate']:>9.1%} "
            f"{metrics['avg_resets']:>8.2f} "
            f"{metrics['avg_guesses']:>8.2f} "
            f"{metrics['avg_seconds']:>7.3f}s"
        )
    return 0


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper solver - deduce, flag, and guess"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log debug output"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in a browser")
    play_parser.add_argument(
        "--difficulty",
        choices=list(DIFFICULTIES),
        default="expert",
        help="Game to play",
    )
    play_parser.add_argument(
        "--remote-url",
        default=None,
        help="WebDriver endpoint, e.g. http://localhost:9515",
    )
    play_parser.add_argument(
        "--headless", action="store_true", help="Run Chrome without a window"
    )
    play_parser.add_argument(
        "--no-flags", action="store_true", help="Do not place flags on the page"
    )
    play_parser.add_argument("--seed", type=int, default=None, help="Guess seed")

    # Simulate command
    simulate_parser = subparsers.add_parser(
        "simulate", help="Play one in-memory game"
    )
    simulate_parser.add_argument(
        "--difficulty",
        choices=list(DIFFICULTIES),
        default="expert",
        help="Board to play",
    )
    simulate_parser.add_argument("--seed", type=int, default=None, help="Seed")

    # Benchmark command
    benchmark_parser = subparsers.add_parser(
        "benchmark", help="Play many in-memory games"
    )
    benchmark_parser.add_argument(
        "--games", type=int, default=100, help="Number of games per board"
    )
    benchmark_parser.add_argument(
        "--difficulty",
        choices=list(DIFFICULTIES),
        default=None,
        help="Only this board (default: all)",
    )
    benchmark_parser.add_argument("--seed", type=int, default=None, help="Seed")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        sys.exit(play(args))
    elif args.command == "simulate":
        sys.exit(simulate(args))
    elif args.command == "benchmark":
        sys.exit(benchmark(args))
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
