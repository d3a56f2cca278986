#!/usr/bin/env python3
"""Watch the solver play Minesweeper on a simulated board."""
import os
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from solver import Board, BoardConfig, PlayConfig
from surfaces import SimulatedSurface


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(delay: float = 0.3, games: int = 3, size: int = 9, mines: int = 10,
         seed: int = None):
    """Run demo games with visualization."""
    config = BoardConfig(width=size, height=size, num_mines=mines)

    print(f"Board: {size}x{size} with {mines} mines ({100*mines/(size*size):.1f}% density)")
    print("Starting in 2 seconds...")
    time.sleep(2)

    for game in range(games):
        game_seed = None if seed is None else seed + game
        surface = SimulatedSurface(seed=game_seed)
        board = Board(surface, config, PlayConfig(seed=game_seed))
        board.launch()

        step = 0
        resets = 0
        while board.is_playing:
            phase = board.step()
            step += 1
            if board.result.resets != resets:
                resets = board.result.resets
                phase = f"{phase} -> BOOM, reset"

            clear_screen()
            print(f"=== Game {game + 1}/{games} | Step {step} ===")
            print(f"Resets: {resets} | Guesses: {board.result.guesses}")
            print(f"Last phase: {phase}\n")
            print(board.render())
            time.sleep(delay)

        print(f"\n*** WIN after {resets} resets ***")
        time.sleep(1.0)  # Pause between games


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--games", type=int, default=3, help="Number of games")
    parser.add_argument("--size", type=int, default=9, help="Board size (NxN)")
    parser.add_argument("--mines", type=int, default=None, help="Number of mines (default: ~12%% of cells)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for mines and guesses")
    args = parser.parse_args()

    mines = args.mines if args.mines else int(args.size * args.size * 0.12)

    demo(delay=args.delay, games=args.games, size=args.size, mines=mines, seed=args.seed)
