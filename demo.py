#!/usr/bin/env python3
"""Watch the Logic agent hunt mines."""
import time
import os

from minehunt.agents import LogicAgent
from minehunt.game import LevelConfig, MinehuntEnv


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(delay: float = 0.3, games: int = 3, size: int = 8, mines: int = 5):
    """Run demo games with visualization."""
    level = LevelConfig(1, size, mines)
    env = MinehuntEnv(level=level, render_mode="ansi")
    agent = LogicAgent()

    print(f"Board: {size}x{size} with {mines} mines ({100 * level.density:.1f}% density)")
    print("Starting in 2 seconds...")
    time.sleep(2)

    total_clicks = 0

    for game in range(games):
        obs, _ = env.reset()
        agent.reset()

        clear_screen()
        print(f"=== Game {game + 1}/{games} ===\n")
        print(env.render())
        time.sleep(delay)

        done = False

        while not done:
            action = agent.select_action(obs, env.get_action_mask())
            row, col = divmod(int(action), size)

            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated

            clear_screen()
            print(f"=== Game {game + 1}/{games} | Click {info['clicks']} ===")
            print(f"Mines left: {info['remaining_mines']}")
            print(f"Last click: ({row}, {col}) {'MINE' if reward > 0 else ''}\n")
            print(env.render())

            time.sleep(delay)

        total_clicks += info["clicks"]
        print(f"\n*** Cleared in {info['clicks']} clicks ***")
        time.sleep(1.0)  # Pause between games

    print(f"\n=== Average: {total_clicks / games:.1f} clicks per game ===")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between clicks")
    parser.add_argument("--games", type=int, default=3, help="Number of games")
    parser.add_argument("--size", type=int, default=8, help="Board size (NxN)")
    parser.add_argument("--mines", type=int, default=None, help="Number of mines (default: ~8%% of cells)")
    args = parser.parse_args()

    mines = args.mines if args.mines else max(1, int(args.size * args.size * 0.08))

    demo(delay=args.delay, games=args.games, size=args.size, mines=mines)
