"""
Knowledge base — per-cell safety beliefs inferred from percepts.

After every successful move the agent updates what it believes about the
cells around it:

    visited cell            → safe, no suspicion
    no stench, no breeze    → every neighbour safe, no suspicion
    stench and/or breeze    → neighbours not yet known safe become suspects
                              (possible_wumpus / possible_pit, monotonic OR)
    scream                  → the only Wumpus is dead, drop every
                              possible_wumpus mark

The deduction is local: it is sound (a cell marked safe really is safe)
but incomplete, since it never combines percepts from two different cells
to clear a third.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from wumpus_world.world import GameState, Position, Safety


# Safety score values. A ranking signal, not a probability.
OUT_OF_BOUNDS_SCORE = -100
VISITED_SCORE = 10
SAFE_SCORE = 8
DOUBLE_SUSPECT_SCORE = -5
SUSPECT_SCORE = -3
UNKNOWN_SCORE = 0


def infer(state: GameState) -> GameState:
    """Return a copy of state with beliefs refreshed from its percepts."""
    new_state = state.copy()
    grid = new_state.grid
    percepts = new_state.percepts
    here = new_state.agent_position

    grid.set(here, safe=Safety.SAFE, possible_wumpus=False, possible_pit=False)

    if not percepts.stench and not percepts.breeze:
        for pos in grid.neighbors(here):
            grid.set(pos, safe=Safety.SAFE,
                     possible_wumpus=False, possible_pit=False)
    else:
        for pos in grid.neighbors(here):
            cell = grid.cell(pos)
            if cell.safe == Safety.SAFE:
                continue
            grid.set(
                pos,
                possible_wumpus=percepts.stench or cell.possible_wumpus,
                possible_pit=percepts.breeze or cell.possible_pit,
            )

    if percepts.scream:
        grid.clear("possible_wumpus")

    return new_state


def safety_score(state: GameState, pos: Position) -> int:
    """Rank a cell by how safe it looks to the agent (higher is safer)."""
    if not state.grid.in_bounds(pos):
        return OUT_OF_BOUNDS_SCORE

    cell = state.grid.cell(pos)
    if cell.visited:
        return VISITED_SCORE
    if cell.safe == Safety.SAFE:
        return SAFE_SCORE
    if cell.possible_wumpus and cell.possible_pit:
        return DOUBLE_SUSPECT_SCORE
    if cell.possible_wumpus or cell.possible_pit:
        return SUSPECT_SCORE
    return UNKNOWN_SCORE


def most_promising_cell(state: GameState) -> Optional[Position]:
    """
    Best unvisited cell anywhere on the grid.

    Scans row-major and keeps the first cell with a strictly higher score,
    so ties go to the earliest cell. None when every cell is visited.
    """
    best_pos: Optional[Position] = None
    best_score = float("-inf")
    for pos in state.grid.positions():
        if state.grid.cell(pos).visited:
            continue
        score = safety_score(state, pos)
        if score > best_score:
            best_score = score
            best_pos = pos
    return best_pos


def frontier(state: GameState) -> List[Tuple[Position, int]]:
    """
    Unvisited cells bordering the explored region, safest first.

    Ties keep row-major order.
    """
    grid = state.grid
    cells = []
    for pos in grid.positions():
        if grid.cell(pos).visited:
            continue
        if any(grid.cell(n).visited for n in grid.neighbors(pos)):
            cells.append((pos, safety_score(state, pos)))
    return sorted(cells, key=lambda item: -item[1])
