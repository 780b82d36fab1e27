"""
Bot Demo: the heuristic policy plays batches of random caves.

Each tick the bot asks the policy for one action and applies it, stopping
when it grabs the gold, dies, or runs out of ticks. Larger caves with the
same pit density are harder: more cells to explore, more ways to die.

Set OPENAI_API_KEY to let the remote advisor pick the actions instead; any
failure of the remote call falls back to the local policy.
"""

import logging

from wumpus_world.advisor import Advisor, AdvisorConfig
from wumpus_world.bot import BotConfig, BotRunner


def main():
    logging.basicConfig(level=logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("  Wumpus World — Bot Mode")
    print("=" * 60)

    for size in (4, 6):
        print(f"\n--- {size}x{size} caves ---\n")
        runner = BotRunner(BotConfig(grid_size=size, episodes=15, seed=42))
        result = runner.run(verbose=True)
        print()
        print(result.summary())

    advisor_config = AdvisorConfig.from_env()
    if advisor_config.configured:
        print("\n--- 4x4 caves, remote advisor ---\n")
        advisor = Advisor(advisor_config)
        runner = BotRunner(BotConfig(episodes=3, max_ticks=40, seed=42),
                           decide=advisor.action)
        result = runner.run(verbose=True)
        print()
        print(result.summary())


if __name__ == "__main__":
    main()
