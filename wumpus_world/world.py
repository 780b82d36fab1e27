"""
Grid world model — the cave, its cells, the agent, and what the agent senses.

The cave is a square grid addressed [row][col] = [y][x], with x growing
east and y growing south. It hides:
- Exactly one Wumpus (never at the start cell)
- Exactly one pile of gold (never at the start, never with the Wumpus)
- Pits, each placed independently with a fixed probability

The agent starts at (0, 0) facing east, carrying a single arrow. Everything
it knows about the cave comes from its percepts and from the belief flags
(safe / possible_wumpus / possible_pit) the knowledge base keeps per cell.

A GameState is the single unit of truth. Transitions never mutate a state in
place: they copy it and mutate the copy, so any earlier state can still be
inspected (history, undo, before/after comparisons in tests).

Storage:
    The grid is an arena of numpy layers, one boolean layer per cell flag
    plus an int8 layer for the tri-state safety belief. Copying a state is
    a handful of small array copies, and updates are plain index writes.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Tuple

import numpy as np


# ---------------------------------------------------------------------------
# Positions, directions and actions
# ---------------------------------------------------------------------------

class Position(NamedTuple):
    """Grid coordinate: x grows east, y grows south."""
    x: int
    y: int

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


ORIGIN = Position(0, 0)
DEFAULT_GRID_SIZE = 4
PIT_PROBABILITY = 0.2


class Direction(str, Enum):
    """Compass heading. Clockwise order defines turning right."""
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    def delta(self) -> Tuple[int, int]:
        """x, y displacement for one step in this direction."""
        return {
            Direction.NORTH: (0, -1),
            Direction.EAST: (1, 0),
            Direction.SOUTH: (0, 1),
            Direction.WEST: (-1, 0),
        }[self]

    def turn_right(self) -> "Direction":
        order = Direction.all()
        return order[(order.index(self) + 1) % 4]

    def turn_left(self) -> "Direction":
        order = Direction.all()
        return order[(order.index(self) - 1) % 4]

    @staticmethod
    def all() -> List["Direction"]:
        return [Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST]


class Action(str, Enum):
    """The action vocabulary. Values are the exact wire tokens."""
    MOVE_FORWARD = "moveForward"
    TURN_LEFT = "turnLeft"
    TURN_RIGHT = "turnRight"
    GRAB = "grab"
    SHOOT = "shoot"
    RESTART = "restart"

    @classmethod
    def parse(cls, token: str) -> Optional["Action"]:
        """Map a token to an Action, or None if it is not in the vocabulary."""
        try:
            return cls(token)
        except ValueError:
            return None

    @staticmethod
    def all() -> List["Action"]:
        return list(Action)


class Safety(IntEnum):
    """Tri-state belief about a cell."""
    UNKNOWN = 0
    SAFE = 1
    UNSAFE = 2


# ---------------------------------------------------------------------------
# Cells and percepts
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Cell:
    """A read-only view of one grid cell."""
    has_wumpus: bool = False
    has_pit: bool = False
    has_gold: bool = False
    visited: bool = False
    safe: Safety = Safety.UNKNOWN
    possible_wumpus: bool = False
    possible_pit: bool = False


@dataclass(frozen=True)
class Percept:
    """What the agent senses right now. Recomputed every step."""
    stench: bool = False
    breeze: bool = False
    glitter: bool = False
    bump: bool = False
    scream: bool = False

    def replace(self, **changes: bool) -> "Percept":
        return replace(self, **changes)

    def as_dict(self) -> Dict[str, bool]:
        return {
            "stench": self.stench,
            "breeze": self.breeze,
            "glitter": self.glitter,
            "bump": self.bump,
            "scream": self.scream,
        }

    def __repr__(self) -> str:
        active = [name for name, on in self.as_dict().items() if on]
        return f"Percept({', '.join(active) or 'none'})"


# ---------------------------------------------------------------------------
# Grid arena
# ---------------------------------------------------------------------------

class Grid:
    """
    Square grid of cells backed by numpy layers.

    Every boolean flag of a Cell lives in its own (size, size) array;
    the safety belief lives in an int8 array holding Safety values.
    """

    FLAGS = ("has_wumpus", "has_pit", "has_gold", "visited",
             "possible_wumpus", "possible_pit")

    def __init__(self, size: int,
                 layers: Optional[Dict[str, np.ndarray]] = None,
                 safety: Optional[np.ndarray] = None):
        self.size = size
        if layers is None:
            layers = {name: np.zeros((size, size), dtype=bool)
                      for name in self.FLAGS}
        if safety is None:
            safety = np.full((size, size), Safety.UNKNOWN, dtype=np.int8)
        self._layers = layers
        self._safety = safety

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.size and 0 <= pos.y < self.size

    def cell(self, pos: Position) -> Cell:
        x, y = pos
        return Cell(
            has_wumpus=bool(self._layers["has_wumpus"][y, x]),
            has_pit=bool(self._layers["has_pit"][y, x]),
            has_gold=bool(self._layers["has_gold"][y, x]),
            visited=bool(self._layers["visited"][y, x]),
            safe=Safety(int(self._safety[y, x])),
            possible_wumpus=bool(self._layers["possible_wumpus"][y, x]),
            possible_pit=bool(self._layers["possible_pit"][y, x]),
        )

    def set(self, pos: Position, **values) -> None:
        """Write one or more fields of a cell in place."""
        x, y = pos
        for name, value in values.items():
            if name == "safe":
                self._safety[y, x] = int(value)
            elif name in self._layers:
                self._layers[name][y, x] = bool(value)
            else:
                raise ValueError(f"Unknown cell field: {name!r}")

    def clear(self, name: str) -> None:
        """Reset a boolean flag on every cell."""
        self._layers[name][:, :] = False

    def layer(self, name: str) -> np.ndarray:
        """Copy of one layer, indexed [y, x]."""
        if name == "safe":
            return self._safety.copy()
        return self._layers[name].copy()

    def neighbors(self, pos: Position) -> List[Position]:
        """In-bounds orthogonal neighbours in north, east, south, west order."""
        result = []
        for direction in Direction.all():
            dx, dy = direction.delta()
            candidate = Position(pos.x + dx, pos.y + dy)
            if self.in_bounds(candidate):
                result.append(candidate)
        return result

    def positions(self) -> Iterator[Position]:
        """All positions in row-major order (y, then x)."""
        for y in range(self.size):
            for x in range(self.size):
                yield Position(x, y)

    def positions_where(self, name: str) -> List[Position]:
        ys, xs = np.nonzero(self._layers[name])
        return sorted((Position(int(x), int(y)) for x, y in zip(xs, ys)),
                      key=lambda p: (p.y, p.x))

    def count_visited(self) -> int:
        return int(self._layers["visited"].sum())

    def hazard_positions(self) -> List[Position]:
        """Cells holding a pit or the Wumpus."""
        mask = self._layers["has_pit"] | self._layers["has_wumpus"]
        ys, xs = np.nonzero(mask)
        return sorted((Position(int(x), int(y)) for x, y in zip(xs, ys)),
                      key=lambda p: (p.y, p.x))

    def copy(self) -> "Grid":
        return Grid(
            self.size,
            layers={name: arr.copy() for name, arr in self._layers.items()},
            safety=self._safety.copy(),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.size == other.size
                and np.array_equal(self._safety, other._safety)
                and all(np.array_equal(self._layers[n], other._layers[n])
                        for n in self.FLAGS))

    def __repr__(self) -> str:
        return f"Grid(size={self.size}, visited={self.count_visited()})"


# ---------------------------------------------------------------------------
# Game state
# ---------------------------------------------------------------------------

@dataclass
class GameState:
    """Everything about one moment of a game."""
    grid_size: int
    grid: Grid
    agent_position: Position = ORIGIN
    agent_direction: Direction = Direction.EAST
    percepts: Percept = field(default_factory=Percept)
    has_arrow: bool = True
    has_gold: bool = False
    game_over: bool = False
    game_won: bool = False
    score: int = 0
    moves: int = 0          # Turns and forward steps only

    @property
    def current_cell(self) -> Cell:
        return self.grid.cell(self.agent_position)

    @property
    def at_origin(self) -> bool:
        return self.agent_position == ORIGIN

    @property
    def finished(self) -> bool:
        return self.game_over or self.game_won

    def copy(self) -> "GameState":
        """Independent copy: mutating the copy never touches this state."""
        return replace(self, grid=self.grid.copy())

    def __repr__(self) -> str:
        return (f"GameState(pos={self.agent_position}, "
                f"dir={self.agent_direction.value}, score={self.score}, "
                f"moves={self.moves}, over={self.game_over}, "
                f"won={self.game_won})")


@dataclass
class WorldConfig:
    """Configuration for generating a cave."""
    grid_size: int = DEFAULT_GRID_SIZE
    pit_probability: float = PIT_PROBABILITY
    seed: Optional[int] = None


# ---------------------------------------------------------------------------
# World construction
# ---------------------------------------------------------------------------

def sense(grid: Grid, pos: Position) -> Percept:
    """Percepts at pos: stench/breeze from neighbours, glitter from the cell."""
    stench = breeze = False
    for n in grid.neighbors(pos):
        cell = grid.cell(n)
        stench = stench or cell.has_wumpus
        breeze = breeze or cell.has_pit
    return Percept(stench=stench, breeze=breeze,
                   glitter=grid.cell(pos).has_gold)


def _initial_state(grid: Grid) -> GameState:
    grid.set(ORIGIN, visited=True, safe=Safety.SAFE)
    state = GameState(grid_size=grid.size, grid=grid)
    state.percepts = sense(grid, ORIGIN)
    return state


def generate_world(config: Optional[WorldConfig] = None,
                   rng: Optional[random.Random] = None) -> GameState:
    """
    Generate a random cave.

    The Wumpus and the gold are placed by rejection sampling away from the
    start (and from each other); every remaining cell except the start gets
    a pit with probability config.pit_probability. The result is not
    guaranteed to be solvable.
    """
    config = config or WorldConfig()
    if config.grid_size < 2:
        raise ValueError(f"grid_size must be at least 2, got {config.grid_size}")
    rng = rng or random.Random(config.seed)
    n = config.grid_size
    grid = Grid(n)

    wumpus = ORIGIN
    while wumpus == ORIGIN:
        wumpus = Position(rng.randrange(n), rng.randrange(n))
    grid.set(wumpus, has_wumpus=True)

    gold = ORIGIN
    while gold == ORIGIN or gold == wumpus:
        gold = Position(rng.randrange(n), rng.randrange(n))
    grid.set(gold, has_gold=True)

    for pos in grid.positions():
        if pos in (ORIGIN, wumpus, gold):
            continue
        if rng.random() < config.pit_probability:
            grid.set(pos, has_pit=True)

    return _initial_state(grid)


def build_world(size: int, wumpus: Optional[Tuple[int, int]] = None,
                gold: Optional[Tuple[int, int]] = None,
                pits: Iterable[Tuple[int, int]] = ()) -> GameState:
    """
    Build a cave by hand (tests, demos). The agent starts at (0, 0) facing
    east on a visited, safe cell as in generate_world, but nothing is
    random and nothing is checked: hazards and gold go exactly where they
    are given, the start cell included.
    """
    grid = Grid(size)
    if wumpus is not None:
        grid.set(Position(*wumpus), has_wumpus=True)
    if gold is not None:
        grid.set(Position(*gold), has_gold=True)
    for pit in pits:
        grid.set(Position(*pit), has_pit=True)
    return _initial_state(grid)


def render(state: GameState, reveal: bool = False) -> str:
    """
    ASCII rendering for debugging.

        A agent     . visited   s known safe   ! suspected hazard   ? unknown
        W wumpus    P pit       G gold   (only with reveal=True)
    """
    lines = []
    for y in range(state.grid_size):
        row = ""
        for x in range(state.grid_size):
            pos = Position(x, y)
            cell = state.grid.cell(pos)
            if pos == state.agent_position:
                row += "A"
            elif reveal and cell.has_wumpus:
                row += "W"
            elif reveal and cell.has_pit:
                row += "P"
            elif reveal and cell.has_gold:
                row += "G"
            elif cell.visited:
                row += "."
            elif cell.safe == Safety.SAFE:
                row += "s"
            elif cell.possible_wumpus or cell.possible_pit:
                row += "!"
            else:
                row += "?"
        lines.append(row)
    return "\n".join(lines)
