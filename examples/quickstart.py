"""
Quick start example for Wumpus World.

Demonstrates the core workflow:
1. Generate a cave
2. Ask for a hint, let the policy pick an action, apply it
3. Watch the knowledge base fill in, list the frontier, then plan a path
   home with A*
"""

from wumpus_world import (
    Action, WorldConfig, apply, astar, generate_world, hint, policy, render,
)
from wumpus_world.knowledge import frontier
from wumpus_world.search import obstacles_from_state


def main():
    state = generate_world(WorldConfig(grid_size=4, seed=7))

    print("Wumpus World — Quick Start")
    print("=" * 50)
    print("Cave (revealed):")
    print(render(state, reveal=True))
    print()

    for tick in range(25):
        if state.finished:
            break
        action = policy(state)
        print(f"[{tick:2d}] {state.percepts}  hint: {hint(state)}")
        print(f"     → {action.value}")
        if action == Action.RESTART:
            break
        state = apply(state, action)

    print()
    print("What the agent knows:")
    print(render(state))
    print()
    print(f"  Score: {state.score}   Moves: {state.moves}   "
          f"Won: {state.game_won}   Dead: {state.game_over}")

    # --- Cells bordering the explored region, safest first ---
    edge = frontier(state)
    print(f"  Frontier: {len(edge)} cells")
    for pos, score in edge:
        print(f"    {pos}  safety={score:4d}")

    # --- Plan a path home on the cells the agent suspects ---
    obstacles = obstacles_from_state(state, known_only=True)
    result = astar(state.grid_size, obstacles, state.agent_position, (0, 0))
    print(f"\n  Path home avoiding suspects: {result.path or 'none'}")


if __name__ == "__main__":
    main()
