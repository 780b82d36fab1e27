"""
Benchmark suite for Wumpus World.

Two measurements:
- Policy: how often the heuristic bot wins, dies, or stalls on caves of
  increasing size, and its mean score
- Search: path length, cells explored and time for A* and DFS on random
  obstacle maps. A* paths are optimal, so the DFS overhead shows directly
"""

import random
import time
from dataclasses import dataclass
from typing import List

import numpy as np

from wumpus_world.bot import BotConfig, BotRunner
from wumpus_world.search import astar, dfs


@dataclass
class PolicyProblem:
    """A batch of caves for the bot to play."""
    name: str
    grid_size: int
    pit_probability: float = 0.2
    episodes: int = 200
    difficulty: str = "easy"  # easy, medium, hard


POLICY_BENCHMARKS = [
    PolicyProblem("small", 4, difficulty="easy"),
    PolicyProblem("small_sparse", 4, pit_probability=0.1, difficulty="easy"),
    PolicyProblem("medium", 6, difficulty="medium"),
    PolicyProblem("large", 8, difficulty="hard"),
    PolicyProblem("large_dense", 8, pit_probability=0.3, difficulty="hard"),
]


def run_policy_benchmark(problem: PolicyProblem, seed: int = 42) -> dict:
    """Play one batch of caves with the heuristic policy."""
    config = BotConfig(
        grid_size=problem.grid_size,
        pit_probability=problem.pit_probability,
        episodes=problem.episodes,
        max_ticks=problem.grid_size * problem.grid_size * 8,
        seed=seed,
    )
    t0 = time.time()
    result = BotRunner(config).run()
    elapsed = time.time() - t0

    stalled = [e for e in result.episodes if not e.won and not e.died]
    return {
        "name": problem.name,
        "difficulty": problem.difficulty,
        "win_rate": result.win_rate,
        "death_rate": result.death_rate,
        "stall_rate": len(stalled) / max(len(result.episodes), 1),
        "mean_score": result.mean_score,
        "time_sec": elapsed,
    }


def random_obstacles(rng: random.Random, size: int, density: float) -> List[tuple]:
    cells = [(x, y) for y in range(size) for x in range(size)
             if (x, y) not in ((0, 0), (size - 1, size - 1))]
    return [c for c in cells if rng.random() < density]


def run_search_benchmark(size: int, density: float = 0.25,
                         trials: int = 100, seed: int = 42) -> dict:
    """Compare A* and DFS on random maps that have a path."""
    rng = random.Random(seed)
    astar_len, dfs_len = [], []
    astar_explored, dfs_explored = [], []
    astar_time = dfs_time = 0.0
    goal = (size - 1, size - 1)

    for _ in range(trials):
        obstacles = random_obstacles(rng, size, density)

        t0 = time.time()
        a = astar(size, obstacles, (0, 0), goal)
        astar_time += time.time() - t0
        if not a.found:
            continue

        t0 = time.time()
        d = dfs(size, obstacles, (0, 0), goal)
        dfs_time += time.time() - t0

        astar_len.append(a.length)
        dfs_len.append(d.length)
        astar_explored.append(len(a.explored))
        dfs_explored.append(len(d.explored))

    return {
        "size": size,
        "solvable": len(astar_len),
        "astar_len": float(np.mean(astar_len)) if astar_len else 0.0,
        "dfs_len": float(np.mean(dfs_len)) if dfs_len else 0.0,
        "astar_explored": float(np.mean(astar_explored)) if astar_explored else 0.0,
        "dfs_explored": float(np.mean(dfs_explored)) if dfs_explored else 0.0,
        "astar_ms": astar_time * 1000 / trials,
        "dfs_ms": dfs_time * 1000 / trials,
    }


def run_all_benchmarks(seed: int = 42, verbose: bool = True):
    """Run every benchmark and print summary tables."""
    print("=" * 90)
    print("  Wumpus World — Benchmark Suite")
    print("=" * 90)
    print()

    policy_results = []
    for problem in POLICY_BENCHMARKS:
        r = run_policy_benchmark(problem, seed=seed)
        policy_results.append(r)
        if verbose:
            print(f"  [{problem.difficulty:6s}] {problem.name:12s} "
                  f"{problem.grid_size}x{problem.grid_size} "
                  f"p={problem.pit_probability:.2f}  "
                  f"won={r['win_rate']:5.1%}  died={r['death_rate']:5.1%}  "
                  f"stalled={r['stall_rate']:5.1%}  "
                  f"score={r['mean_score']:8.1f}  time={r['time_sec']:.1f}s")

    print()
    search_results = []
    for size in (4, 8, 16, 24):
        r = run_search_benchmark(size, seed=seed)
        search_results.append(r)
        if verbose:
            print(f"  search {size:2d}x{size:<2d}  solvable={r['solvable']:3d}  "
                  f"len A*={r['astar_len']:5.1f} DFS={r['dfs_len']:5.1f}  "
                  f"explored A*={r['astar_explored']:6.1f} "
                  f"DFS={r['dfs_explored']:6.1f}  "
                  f"ms A*={r['astar_ms']:.2f} DFS={r['dfs_ms']:.2f}")

    print("=" * 90)
    return policy_results, search_results


if __name__ == "__main__":
    run_all_benchmarks()
