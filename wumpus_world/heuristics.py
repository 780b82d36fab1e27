"""
Decision heuristics — a hint for a human player and a policy for the bot.

Both read the game state and the knowledge base beliefs; neither changes
anything. The hint is an ordered list of rules where the first match
wins. The policy follows the same neighbour ranking but returns a single
action per call, so a bot issues one action per tick.
"""

from __future__ import annotations

import random
from typing import List, Optional

from wumpus_world.engine import is_valid_position, next_position
from wumpus_world.knowledge import most_promising_cell, safety_score
from wumpus_world.world import Action, Direction, GameState


def actions_to_face(current: Direction, target: Direction) -> List[Action]:
    """Turns needed to go from one heading to another."""
    if current == target:
        return []
    if current.turn_right() == target:
        return [Action.TURN_RIGHT]
    if current.turn_left() == target:
        return [Action.TURN_LEFT]
    return [Action.TURN_RIGHT, Action.TURN_RIGHT]


def best_neighbor_direction(state: GameState,
                            allow_visited: bool = False) -> Optional[Direction]:
    """
    Heading of the highest-scoring neighbour.

    Neighbours are scanned north, east, south, west and the first strictly
    better score wins. Visited cells only count when allow_visited is set.
    """
    best_direction = None
    best_score = float("-inf")
    for direction in Direction.all():
        pos = next_position(state.agent_position, direction)
        if not is_valid_position(pos, state.grid_size):
            continue
        visited = state.grid.cell(pos).visited
        score = safety_score(state, pos)
        if score > best_score and (not visited or allow_visited):
            best_score = score
            best_direction = direction
    return best_direction


def hint(state: GameState) -> str:
    """Advice for the next move, as text."""
    percepts = state.percepts

    if state.has_gold:
        return ("You have the gold! Head back to the starting cell (0, 0); "
                "the game is already won.")
    if percepts.glitter:
        return "Something glitters here. Use Grab to pick up the gold."
    if percepts.stench:
        return ("There is a stench. The Wumpus may be in an adjacent cell, "
                "so be careful.")
    if percepts.breeze:
        return ("There is a breeze. A pit may be in an adjacent cell, "
                "so proceed with caution.")

    direction = best_neighbor_direction(state)
    if direction is not None:
        if actions_to_face(state.agent_direction, direction):
            return (f"Explore the {direction.value} cell next. "
                    f"Turn to face {direction.value} first.")
        return (f"Explore the {direction.value} cell next. "
                f"You are already facing it, so move forward.")

    target = most_promising_cell(state)
    if target is not None:
        return (f"Every adjacent cell has been explored. Head towards "
                f"({target.x}, {target.y}) to find new ground.")

    return "No obvious move. Keep exploring the cave."


def _return_home(state: GameState) -> Action:
    """Greedy walk to (0, 0): west first, then north, one turn per tick."""
    pos = state.agent_position
    facing = state.agent_direction

    if pos.x > 0 and facing == Direction.WEST:
        return Action.MOVE_FORWARD
    if pos.y > 0 and facing == Direction.NORTH:
        return Action.MOVE_FORWARD
    if pos.x > 0:
        if facing == Direction.SOUTH:
            return Action.TURN_RIGHT
        # North or east; east needs two turns, the second comes next tick
        return Action.TURN_LEFT
    if pos.y > 0:
        if facing == Direction.WEST:
            return Action.TURN_RIGHT
        return Action.TURN_LEFT
    return Action.MOVE_FORWARD


def policy(state: GameState, rng: Optional[random.Random] = None) -> Action:
    """
    Pick the bot's next action.

    1. Glitter            → grab
    2. Gold at the origin → restart (the game is won)
    3. Gold elsewhere     → greedy walk home
    4. Best neighbour     → turn towards it, or step if already facing it
    5. Nothing to rank    → random turn to get unstuck
    """
    if state.percepts.glitter:
        return Action.GRAB
    if state.has_gold and state.at_origin:
        return Action.RESTART
    if state.has_gold:
        return _return_home(state)

    direction = best_neighbor_direction(state, allow_visited=state.has_gold)
    if direction is not None:
        turns = actions_to_face(state.agent_direction, direction)
        return turns[0] if turns else Action.MOVE_FORWARD

    rng = rng or random
    return rng.choice([Action.TURN_LEFT, Action.TURN_RIGHT])
