"""
Bot mode — play whole games by asking a decision function once per tick.

The loop is the whole contract:

    decide(state) → action → apply → next tick ...

It stops as soon as the game is lost or won, or when the tick budget runs
out. A decision function answering restart is treated as "the game is
won, stop" rather than as a request for a new cave, so one episode is
always one cave.

BotRunner plays many episodes on freshly generated caves and reports how
the policy does: win rate, death rate, mean score.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import numpy as np

from wumpus_world.engine import apply
from wumpus_world.heuristics import policy
from wumpus_world.knowledge import frontier
from wumpus_world.world import (
    DEFAULT_GRID_SIZE, PIT_PROBABILITY, Action, GameState, Position, WorldConfig,
    generate_world,
)

logger = logging.getLogger(__name__)

DecisionFn = Callable[[GameState], Action]

DEFAULT_MAX_TICKS = 200


@dataclass
class BotConfig:
    """Configuration for a batch of bot games."""
    max_ticks: int = DEFAULT_MAX_TICKS  # Tick budget per episode
    episodes: int = 20
    grid_size: int = DEFAULT_GRID_SIZE
    pit_probability: float = PIT_PROBABILITY
    seed: Optional[int] = None


@dataclass
class EpisodeLog:
    """Record of a single game played by the bot."""
    ticks: int
    score: int
    won: bool
    died: bool
    path: List[Position]
    actions: List[Action]
    final_state: Optional[GameState] = None
    frontier_size: int = 0             # Unexplored border left at the end


@dataclass
class BotResult:
    """Result of a batch of bot games."""
    episodes: List[EpisodeLog] = field(default_factory=list)

    @property
    def win_rate(self) -> float:
        if not self.episodes:
            return 0.0
        return float(np.mean([e.won for e in self.episodes]))

    @property
    def death_rate(self) -> float:
        if not self.episodes:
            return 0.0
        return float(np.mean([e.died for e in self.episodes]))

    @property
    def mean_score(self) -> float:
        if not self.episodes:
            return 0.0
        return float(np.mean([e.score for e in self.episodes]))

    def summary(self) -> str:
        lines = [
            "═" * 55,
            "  Wumpus Bot — Batch Result",
            "═" * 55,
            f"  Episodes:          {len(self.episodes)}",
            f"  Won:               {sum(e.won for e in self.episodes)}"
            f" ({self.win_rate:.0%})",
            f"  Died:              {sum(e.died for e in self.episodes)}"
            f" ({self.death_rate:.0%})",
            f"  Mean score:        {self.mean_score:.1f}",
        ]
        if self.episodes:
            ticks = [e.ticks for e in self.episodes]
            lines.append(f"  Mean ticks:        {np.mean(ticks):.1f}")
            won = [e.ticks for e in self.episodes if e.won]
            if won:
                lines.append(f"  Fastest win:       {min(won)} ticks")
            left = [e.frontier_size for e in self.episodes]
            lines.append(f"  Mean frontier:     {np.mean(left):.1f} cells")
        lines.append("═" * 55)
        return "\n".join(lines)


def run_episode(state: GameState, decide: Optional[DecisionFn] = None,
                max_ticks: int = DEFAULT_MAX_TICKS,
                rng: Optional[random.Random] = None) -> EpisodeLog:
    """
    Drive one game until it ends or the tick budget runs out.

    decide defaults to the heuristic policy drawing its random turns from
    rng, so the same seed replays the same game.
    """
    if decide is None:
        def decide(s: GameState) -> Action:
            return policy(s, rng)

    path = [state.agent_position]
    actions: List[Action] = []
    ticks = 0

    while not state.finished and ticks < max_ticks:
        action = decide(state)
        ticks += 1
        actions.append(action)
        if action == Action.RESTART:
            break
        state = apply(state, action)
        if state.agent_position != path[-1]:
            path.append(state.agent_position)

    unexplored = frontier(state)
    logger.debug("Episode ended after %d ticks: score=%d won=%s over=%s "
                 "frontier=%d", ticks, state.score, state.game_won,
                 state.game_over, len(unexplored))
    return EpisodeLog(
        ticks=ticks,
        score=state.score,
        won=state.game_won,
        died=state.game_over,
        path=path,
        actions=actions,
        final_state=state,
        frontier_size=len(unexplored),
    )


class BotRunner:
    """Plays a batch of games with one decision function."""

    def __init__(self, config: Optional[BotConfig] = None,
                 decide: Optional[DecisionFn] = None):
        self.config = config or BotConfig()
        self.rng = random.Random(self.config.seed)
        self.decide = decide or (lambda state: policy(state, self.rng))

    def run(self, verbose: bool = False) -> BotResult:
        world_config = WorldConfig(
            grid_size=self.config.grid_size,
            pit_probability=self.config.pit_probability,
        )
        result = BotResult()

        for episode in range(self.config.episodes):
            state = generate_world(world_config, self.rng)
            log = run_episode(state, self.decide, self.config.max_ticks,
                              self.rng)
            result.episodes.append(log)

            if verbose:
                status = "✓" if log.won else ("✗" if log.died else "·")
                print(
                    f"  [ep {episode:3d}] {status} "
                    f"ticks={log.ticks:3d}  "
                    f"score={log.score:6d}  "
                    f"cells={len(set(log.path)):2d}  "
                    f"frontier={log.frontier_size:2d}"
                )

        return result
