"""
State transition engine — applies one action to a game state.

    apply(state, action) → new_state

The input state is never modified. Every action except restart first
clears the momentary percepts (bump, scream) left over from the previous
step, then:

    turnLeft / turnRight   rotate, pay the move penalty
    moveForward            step (or bump into the wall), die on a hazard,
                           sense the new cell, update the knowledge base
    grab                   pick up gold on the current cell, win
    shoot                  spend the arrow along the facing direction
    restart                throw everything away, generate a new cave

Invalid or pointless actions (grabbing nothing, shooting without an arrow,
walking into a wall) are not errors: they just produce an unchanged or
percept-only state. Terminal flags do not block anything either; the
caller decides when to stop.
"""

from __future__ import annotations

import random
from typing import Optional, Union

from wumpus_world.knowledge import infer
from wumpus_world.world import (
    DEFAULT_GRID_SIZE,
    PIT_PROBABILITY,
    Action,
    Direction,
    GameState,
    Percept,
    Position,
    WorldConfig,
    generate_world,
    sense,
)


# ---------------------------------------------------------------------------
# Scoring constants
# ---------------------------------------------------------------------------

MOVE_PENALTY = -1
ARROW_PENALTY = -10
WUMPUS_PENALTY = -1000
PIT_PENALTY = -1000
GOLD_REWARD = 1000

# DEFAULT_GRID_SIZE and PIT_PROBABILITY come from world, alongside WorldConfig


# ---------------------------------------------------------------------------
# Geometry helpers
# ---------------------------------------------------------------------------

def is_valid_position(pos: Position, grid_size: int) -> bool:
    return 0 <= pos.x < grid_size and 0 <= pos.y < grid_size


def next_position(pos: Position, direction: Direction) -> Position:
    """The cell one step away in the given direction (may be out of bounds)."""
    dx, dy = direction.delta()
    return Position(pos.x + dx, pos.y + dy)


def calculate_percepts(state: GameState) -> Percept:
    """Fresh percepts for the agent's cell. Bump and scream are always False."""
    return sense(state.grid, state.agent_position)


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------

def apply(state: GameState, action: Union[Action, str],
          rng: Optional[random.Random] = None,
          config: Optional[WorldConfig] = None) -> GameState:
    """
    Apply an action and return the resulting state.

    Parameters
    ----------
    state : GameState
        Current state. Left untouched.
    action : Action or str
        An Action or its token ("moveForward", "turnLeft", ...).
    rng : random.Random, optional
        Random source used only by restart.
    config : WorldConfig, optional
        World settings used only by restart. Defaults to the current
        grid size with the standard pit probability.
    """
    action = Action(action)

    if action == Action.RESTART:
        config = config or WorldConfig(grid_size=state.grid_size,
                                       pit_probability=PIT_PROBABILITY)
        return generate_world(config, rng)

    new_state = state.copy()
    new_state.percepts = new_state.percepts.replace(bump=False, scream=False)

    if action == Action.TURN_LEFT:
        return _turn(new_state, new_state.agent_direction.turn_left())
    if action == Action.TURN_RIGHT:
        return _turn(new_state, new_state.agent_direction.turn_right())
    if action == Action.MOVE_FORWARD:
        return _move_forward(new_state)
    if action == Action.GRAB:
        return _grab(new_state)
    return _shoot(new_state)


def _turn(state: GameState, direction: Direction) -> GameState:
    state.agent_direction = direction
    state.moves += 1
    state.score += MOVE_PENALTY
    return state


def _move_forward(state: GameState) -> GameState:
    target = next_position(state.agent_position, state.agent_direction)

    # Bump: informational only, nothing else changes
    if not is_valid_position(target, state.grid_size):
        state.percepts = state.percepts.replace(bump=True)
        return state

    state.agent_position = target
    state.moves += 1
    state.score += MOVE_PENALTY
    state.grid.set(target, visited=True)

    cell = state.grid.cell(target)
    if cell.has_wumpus:
        state.game_over = True
        state.score += WUMPUS_PENALTY
    elif cell.has_pit:
        state.game_over = True
        state.score += PIT_PENALTY

    state.percepts = calculate_percepts(state)
    return infer(state)


def _grab(state: GameState) -> GameState:
    here = state.agent_position
    if not state.grid.cell(here).has_gold:
        return state

    state.grid.set(here, has_gold=False)
    state.has_gold = True
    state.percepts = state.percepts.replace(glitter=False)
    state.score += GOLD_REWARD
    # Grabbing the gold wins immediately; walking home is only advised
    state.game_won = True
    return state


def _shoot(state: GameState) -> GameState:
    if not state.has_arrow:
        return state

    state.has_arrow = False
    state.score += ARROW_PENALTY

    arrow = state.agent_position
    hit = False
    while is_valid_position(arrow, state.grid_size):
        arrow = next_position(arrow, state.agent_direction)
        if not is_valid_position(arrow, state.grid_size):
            break
        if state.grid.cell(arrow).has_wumpus:
            hit = True
            break

    if not hit:
        return state

    state.grid.set(arrow, has_wumpus=False)
    state.percepts = state.percepts.replace(scream=True)
    return infer(state)
