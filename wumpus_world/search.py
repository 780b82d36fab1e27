"""
Shortest-path search over a grid with known obstacles.

Two classical algorithms share one neighbour function (the four orthogonal
moves, staying in bounds, skipping obstacles):

- **A\\***: informed search ordered by f = g + h with the Manhattan
  distance as h. With unit step costs and no diagonal moves the heuristic
  is admissible and consistent, so the returned path is optimal. Among
  equal f values the first node found wins, so two optimal paths of the
  same length may differ between implementations.
- **DFS**: uninformed depth-first search with an explicit stack. Complete
  on a finite grid (visited positions are never expanded twice) but not
  optimal.

Nodes of one run live in an arena (a plain list); each node stores the
index of its parent, and the path is rebuilt by following those indices
back to the root. Neither algorithm raises when there is no path: the
result simply has an empty path.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Iterable, List, Tuple

from wumpus_world.world import Direction, GameState, Position


@dataclass
class SearchNode:
    """One node of a search run. parent is an arena index, -1 for the root."""
    position: Position
    parent: int = -1
    g: int = 0      # Cost from start
    h: int = 0      # Estimated cost to goal
    f: int = 0      # g + h


@dataclass
class SearchResult:
    """Outcome of a search: the path (start…goal) and the expanded cells."""
    path: List[Position] = field(default_factory=list)
    explored: List[Position] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return len(self.path) > 0

    @property
    def length(self) -> int:
        """Number of steps along the path (positions - 1), or 0."""
        return max(len(self.path) - 1, 0)

    def __repr__(self) -> str:
        return (f"SearchResult(found={self.found}, steps={self.length}, "
                f"explored={len(self.explored)})")


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def manhattan_distance(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _as_obstacles(obstacles: Iterable[Tuple[int, int]]) -> FrozenSet[Position]:
    return frozenset(Position(*pos) for pos in obstacles)


def _passable(pos: Position, grid_size: int,
              obstacles: FrozenSet[Position]) -> bool:
    return (0 <= pos.x < grid_size and 0 <= pos.y < grid_size
            and pos not in obstacles)


def grid_neighbors(pos: Tuple[int, int], grid_size: int,
                   obstacles: Iterable[Tuple[int, int]] = ()) -> List[Position]:
    """Passable orthogonal neighbours in north, east, south, west order."""
    blocked = obstacles if isinstance(obstacles, frozenset) else _as_obstacles(obstacles)
    result = []
    for direction in Direction.all():
        dx, dy = direction.delta()
        candidate = Position(pos[0] + dx, pos[1] + dy)
        if _passable(candidate, grid_size, blocked):
            result.append(candidate)
    return result


def _reconstruct(nodes: List[SearchNode], index: int) -> List[Position]:
    path = []
    while index != -1:
        node = nodes[index]
        path.append(node.position)
        index = node.parent
    path.reverse()
    return path


# ---------------------------------------------------------------------------
# Algorithms
# ---------------------------------------------------------------------------

def astar(grid_size: int, obstacles: Iterable[Tuple[int, int]],
          start: Tuple[int, int], goal: Tuple[int, int]) -> SearchResult:
    """
    A* search from start to goal.

    Returns the optimal path (start and goal included) and the closed list
    in expansion order. An unreachable or blocked goal gives an empty path.
    """
    blocked = _as_obstacles(obstacles)
    start, goal = Position(*start), Position(*goal)
    if not (_passable(start, grid_size, blocked)
            and _passable(goal, grid_size, blocked)):
        return SearchResult()

    h0 = manhattan_distance(start, goal)
    nodes = [SearchNode(start, parent=-1, g=0, h=h0, f=h0)]
    open_list: List[int] = [0]
    closed: List[Position] = []
    closed_set = set()

    while open_list:
        # Lowest f; the first one found wins ties
        best = 0
        for i in range(1, len(open_list)):
            if nodes[open_list[i]].f < nodes[open_list[best]].f:
                best = i
        current_index = open_list[best]
        current = nodes[current_index]

        if current.position == goal:
            return SearchResult(_reconstruct(nodes, current_index), closed)

        open_list.pop(best)
        closed.append(current.position)
        closed_set.add(current.position)

        for neighbor in grid_neighbors(current.position, grid_size, blocked):
            if neighbor in closed_set:
                continue

            g = current.g + 1
            existing = next(
                (i for i in open_list if nodes[i].position == neighbor), None
            )
            if existing is None:
                h = manhattan_distance(neighbor, goal)
                nodes.append(SearchNode(neighbor, current_index, g, h, g + h))
                open_list.append(len(nodes) - 1)
            elif g < nodes[existing].g:
                node = nodes[existing]
                node.g = g
                node.f = g + node.h
                node.parent = current_index

    return SearchResult([], closed)


def dfs(grid_size: int, obstacles: Iterable[Tuple[int, int]],
        start: Tuple[int, int], goal: Tuple[int, int]) -> SearchResult:
    """
    Depth-first search from start to goal.

    Neighbours are pushed in reverse so they pop north, east, south, west.
    The path is valid but not necessarily the shortest.
    """
    blocked = _as_obstacles(obstacles)
    start, goal = Position(*start), Position(*goal)
    if not (_passable(start, grid_size, blocked)
            and _passable(goal, grid_size, blocked)):
        return SearchResult()

    nodes = [SearchNode(start)]
    stack: List[int] = [0]
    visited: List[Position] = []
    visited_set = set()

    while stack:
        current_index = stack.pop()
        current = nodes[current_index]
        if current.position in visited_set:
            continue

        visited.append(current.position)
        visited_set.add(current.position)

        if current.position == goal:
            return SearchResult(_reconstruct(nodes, current_index), visited)

        for neighbor in reversed(grid_neighbors(current.position, grid_size, blocked)):
            if neighbor not in visited_set:
                nodes.append(SearchNode(neighbor, parent=current_index))
                stack.append(len(nodes) - 1)

    return SearchResult([], visited)


ALGORITHMS: Dict[str, Callable[..., SearchResult]] = {
    "astar": astar,
    "dfs": dfs,
}


def find_path(algorithm: str, grid_size: int,
              obstacles: Iterable[Tuple[int, int]],
              start: Tuple[int, int], goal: Tuple[int, int]) -> SearchResult:
    """Run a search algorithm by name ("astar" or "dfs")."""
    try:
        search_fn = ALGORITHMS[algorithm]
    except KeyError:
        raise ValueError(
            f"Unknown search algorithm {algorithm!r}; "
            f"expected one of {sorted(ALGORITHMS)}"
        ) from None
    return search_fn(grid_size, obstacles, start, goal)


def obstacles_from_state(state: GameState,
                         known_only: bool = False) -> FrozenSet[Position]:
    """
    Obstacles for planning on a game's map.

    By default every cell that really holds a pit or the Wumpus. With
    known_only the agent's own beliefs are used instead: unvisited cells
    it suspects of a pit or of the Wumpus.
    """
    grid = state.grid
    if not known_only:
        return frozenset(grid.hazard_positions())

    blocked = set()
    for pos in grid.positions():
        cell = grid.cell(pos)
        if cell.visited:
            continue
        if cell.possible_pit or cell.possible_wumpus:
            blocked.add(pos)
    return frozenset(blocked)
