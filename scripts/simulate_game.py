"""Simulate a four-CPU game and print the log."""

import logging

from unoengine.agents import CpuAgent
from unoengine.orchestration.game_runner import GameRunner


def main():
    logging.basicConfig(level=logging.INFO)
    agents = {
        "p1": CpuAgent("Bot1"),
        "p2": CpuAgent("Bot2"),
        "p3": CpuAgent("Bot3"),
        "p4": CpuAgent("Bot4"),
    }

    runner = GameRunner(agents, seed=42)
    result = runner.run()

    for event in runner.engine.history:
        print(f"> {event}")
    print(f"Game finished! Winner: {result.winner}")
    print(f"Turns: {result.num_turns}")


if __name__ == "__main__":
    main()
