"""
Wumpus World: a partially observable cave, an agent, and decision support.

An agent explores a grid hiding pits, a single Wumpus and a pile of gold.
The package provides the deterministic game engine, a local knowledge base
that marks cells safe or suspect from percepts, a rule-based hint and an
autonomous policy built on it, A* and DFS path search over the known map,
and an optional remote advisor that falls back to the local heuristics.
"""

from wumpus_world.world import (
    Action,
    Cell,
    Direction,
    GameState,
    Grid,
    Percept,
    Position,
    Safety,
    WorldConfig,
    build_world,
    generate_world,
    render,
)
from wumpus_world.engine import apply
from wumpus_world.knowledge import infer, most_promising_cell, safety_score
from wumpus_world.heuristics import actions_to_face, hint, policy
from wumpus_world.search import SearchResult, astar, dfs, find_path
from wumpus_world.advisor import Advisor, AdvisorConfig
from wumpus_world.bot import BotConfig, BotResult, BotRunner, run_episode

__version__ = "0.1.0"
__all__ = [
    "Action",
    "Cell",
    "Direction",
    "GameState",
    "Grid",
    "Percept",
    "Position",
    "Safety",
    "WorldConfig",
    "build_world",
    "generate_world",
    "render",
    "apply",
    "infer",
    "most_promising_cell",
    "safety_score",
    "actions_to_face",
    "hint",
    "policy",
    "SearchResult",
    "astar",
    "dfs",
    "find_path",
    "Advisor",
    "AdvisorConfig",
    "BotConfig",
    "BotResult",
    "BotRunner",
    "run_episode",
]
