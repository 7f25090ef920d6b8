#!/usr/bin/env python3
"""
Minehunt - Main entry point.

Usage:
    python main.py evaluate [--agent {random,logic}] [--games N]
    python main.py compare [--games N]
    python main.py play [--agent {random,logic}] [--scores FILE]
"""
import argparse
import logging
from typing import Optional, Tuple

from minehunt.agents import BaseAgent, LogicAgent, RandomAgent
from minehunt.evaluation import EvaluationConfig, Evaluator
from minehunt.game import (
    LEVELS,
    GameState,
    JsonScoreReporter,
    LevelConfig,
    LevelController,
    ScoreReportError,
    load_levels,
)


def get_levels(args: argparse.Namespace) -> Tuple[LevelConfig, ...]:
    """Level sequence from --levels, or the default one."""
    if args.levels:
        return load_levels(args.levels)
    return LEVELS


def make_agent(name: str, seed: Optional[int] = None) -> BaseAgent:
    """Build an agent by command line name."""
    if name == "random":
        return RandomAgent(seed=seed)
    return LogicAgent(seed=seed)


def evaluate(args: argparse.Namespace) -> None:
    """Evaluate a specific agent."""
    agent = make_agent(args.agent, args.seed)
    config = EvaluationConfig(num_sessions=args.games, seed=args.seed)
    evaluator = Evaluator(get_levels(args), config)

    print(f"\nEvaluating {args.agent} agent over {args.games} sessions...")
    results = evaluator.evaluate(agent)

    print(f"Results for {args.agent}:")
    print(f"  Completion rate: {results['completion_rate']:.1%}")
    print(f"  Avg clicks: {results['avg_clicks']:.1f}")
    print(f"  Best / worst: {results['min_clicks']:.0f} / {results['max_clicks']:.0f}")
    print(f"  Avg safe clicks: {results['avg_safe_clicks']:.1f}")
    print(f"  Avg levels cleared: {results['avg_levels_cleared']:.1f}")


def compare(args: argparse.Namespace) -> None:
    """Compare all agents."""
    agents = {
        "Random": RandomAgent(seed=args.seed),
        "Logic": LogicAgent(seed=args.seed),
    }
    config = EvaluationConfig(num_sessions=args.games, seed=args.seed)
    results = Evaluator(get_levels(args), config).compare(agents)

    print("\n" + "=" * 50)
    print("Agent Comparison Results")
    print("=" * 50)
    print(f"{'Agent':<12} {'Avg Clicks':<12} {'Best':<8} {'Safe Clicks':<12}")
    print("-" * 50)

    for name, metrics in results.items():
        print(
            f"{name:<12} {metrics['avg_clicks']:>10.1f} "
            f"{metrics['min_clicks']:>6.0f} "
            f"{metrics['avg_safe_clicks']:>11.1f}"
        )


def play(args: argparse.Namespace) -> None:
    """Let an agent play one session and file its score."""
    reporter = JsonScoreReporter(args.scores, user_name=args.name)
    controller = LevelController(get_levels(args), reporter=reporter)
    agent = make_agent(args.agent, args.seed)

    while controller.state is not GameState.ALL_COMPLETE:
        if controller.state is GameState.LEVEL_COMPLETE:
            print(
                f"Level {controller.level.id} cleared "
                f"({controller.total_clicks} clicks so far)"
            )
            controller.advance_level()
        observation = controller.observation()
        action = agent.select_action(observation)
        controller.click(*agent.action_to_position(action, observation.shape[1]))

    print(controller.board.render())
    print(f"\nAll levels cleared in {controller.total_clicks} clicks")
    try:
        ranking = reporter.top(3)
    except ScoreReportError as exc:
        print(f"Could not load the ranking: {exc}")
        return

    if ranking:
        print("\nTop scores:")
    for place, record in enumerate(ranking, start=1):
        print(f"  {place}. {record.user_name:<12} {record.total_clicks} clicks")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minehunt - Reverse minesweeper engine and agents"
    )
    parser.add_argument(
        "--levels", default=None, help="JSON file with the level sequence"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Evaluate command
    eval_parser = subparsers.add_parser("evaluate", help="Evaluate an agent")
    eval_parser.add_argument(
        "--agent", choices=["random", "logic"], default="logic",
        help="Agent to evaluate",
    )
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of sessions to play"
    )

    # Compare command
    compare_parser = subparsers.add_parser("compare", help="Compare all agents")
    compare_parser.add_argument(
        "--games", type=int, default=100, help="Number of sessions per agent"
    )

    # Play command
    play_parser = subparsers.add_parser("play", help="Play one scored session")
    play_parser.add_argument(
        "--agent", choices=["random", "logic"], default="logic",
        help="Agent playing the session",
    )
    play_parser.add_argument(
        "--scores", default="scores.json", help="Score record file"
    )
    play_parser.add_argument(
        "--name", default="GUEST", help="Name stored with the score"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "evaluate":
        evaluate(args)
    elif args.command == "compare":
        compare(args)
    elif args.command == "play":
        play(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
