"""Tests for the knowledge base inference engine."""

import unittest

from wumpus_world.engine import apply
from wumpus_world.knowledge import (
    frontier, infer, most_promising_cell, safety_score,
)
from wumpus_world.world import Action, Percept, Position, Safety, build_world


class TestInfer(unittest.TestCase):
    """Test belief updates from percepts."""

    def test_quiet_cell_clears_neighbors(self):
        state = build_world(3, wumpus=(2, 2), gold=(2, 0))
        updated = infer(state)
        for pos in [(0, 0), (1, 0), (0, 1)]:
            cell = updated.grid.cell(Position(*pos))
            self.assertEqual(cell.safe, Safety.SAFE)
            self.assertFalse(cell.possible_wumpus)
            self.assertFalse(cell.possible_pit)
        # Not adjacent, untouched
        self.assertEqual(updated.grid.cell(Position(1, 1)).safe, Safety.UNKNOWN)

    def test_infer_does_not_mutate_input(self):
        state = build_world(3, wumpus=(2, 2))
        infer(state)
        self.assertEqual(state.grid.cell(Position(1, 0)).safe, Safety.UNKNOWN)

    def test_breeze_marks_unknown_neighbors(self):
        state = build_world(3, wumpus=(2, 2), pits=[(1, 0)])
        updated = infer(state)
        for pos in [(1, 0), (0, 1)]:
            cell = updated.grid.cell(Position(*pos))
            self.assertTrue(cell.possible_pit)
            self.assertFalse(cell.possible_wumpus)
            self.assertEqual(cell.safe, Safety.UNKNOWN)

    def test_suspicion_skips_known_safe_cells(self):
        state = build_world(3, wumpus=(2, 2), pits=[(1, 0)])
        state.grid.set(Position(0, 1), safe=Safety.SAFE)
        updated = infer(state)
        self.assertFalse(updated.grid.cell(Position(0, 1)).possible_pit)
        self.assertTrue(updated.grid.cell(Position(1, 0)).possible_pit)

    def test_suspicion_is_monotonic(self):
        # Breeze at (0, 0) marks (0, 1); a later stench only adds to it
        state = build_world(3, wumpus=(2, 2), pits=[(1, 0)])
        state = infer(state)
        state.percepts = Percept(stench=True)
        state = infer(state)
        cell = state.grid.cell(Position(0, 1))
        self.assertTrue(cell.possible_pit)
        self.assertTrue(cell.possible_wumpus)

    def test_current_cell_always_safe(self):
        state = build_world(3, wumpus=(2, 2))
        state.grid.set(Position(0, 0), possible_pit=True, safe=Safety.UNKNOWN)
        updated = infer(state)
        cell = updated.grid.cell(Position(0, 0))
        self.assertEqual(cell.safe, Safety.SAFE)
        self.assertFalse(cell.possible_pit)

    def test_scream_clears_all_wumpus_marks(self):
        state = build_world(4, wumpus=(3, 3))
        state.grid.set(Position(2, 2), possible_wumpus=True)
        state.grid.set(Position(3, 1), possible_wumpus=True, possible_pit=True)
        state.percepts = Percept(scream=True)
        updated = infer(state)
        self.assertFalse(updated.grid.layer("possible_wumpus").any())
        self.assertTrue(updated.grid.cell(Position(3, 1)).possible_pit)

    def test_no_cross_cell_deduction(self):
        # Breeze at (1, 0) comes from (2, 0), yet (1, 1) is suspected too:
        # inference never narrows down which neighbour holds the pit.
        state = build_world(4, wumpus=(3, 3), pits=[(2, 0)])
        state = apply(state, Action.MOVE_FORWARD)
        self.assertTrue(state.grid.cell(Position(1, 1)).possible_pit)
        self.assertTrue(state.grid.cell(Position(2, 0)).possible_pit)
        self.assertEqual(state.grid.cell(Position(0, 0)).safe, Safety.SAFE)


class TestSafetyScore(unittest.TestCase):

    def setUp(self):
        self.state = build_world(4, wumpus=(3, 3))
        grid = self.state.grid
        grid.set(Position(1, 0), visited=True, safe=Safety.SAFE)
        grid.set(Position(2, 0), safe=Safety.SAFE)
        grid.set(Position(1, 1), possible_wumpus=True, possible_pit=True)
        grid.set(Position(2, 1), possible_wumpus=True)
        grid.set(Position(0, 2), possible_pit=True)

    def test_scores(self):
        s = self.state
        self.assertEqual(safety_score(s, Position(-1, 0)), -100)
        self.assertEqual(safety_score(s, Position(0, 4)), -100)
        self.assertEqual(safety_score(s, Position(1, 0)), 10)
        self.assertEqual(safety_score(s, Position(2, 0)), 8)
        self.assertEqual(safety_score(s, Position(1, 1)), -5)
        self.assertEqual(safety_score(s, Position(2, 1)), -3)
        self.assertEqual(safety_score(s, Position(0, 2)), -3)
        self.assertEqual(safety_score(s, Position(3, 3)), 0)

    def test_most_promising_prefers_safe(self):
        self.assertEqual(most_promising_cell(self.state), (2, 0))

    def test_most_promising_ties_go_row_major(self):
        state = build_world(3, wumpus=(2, 2))
        # All unknown: first unvisited cell in row-major order
        self.assertEqual(most_promising_cell(state), (1, 0))

    def test_most_promising_none_when_all_visited(self):
        state = build_world(2, wumpus=(1, 1))
        for pos in state.grid.positions():
            state.grid.set(pos, visited=True)
        self.assertIsNone(most_promising_cell(state))

    def test_frontier(self):
        cells = frontier(self.state)
        positions = [pos for pos, _ in cells]
        self.assertEqual(positions[0], (2, 0))
        self.assertIn((0, 1), positions)
        self.assertNotIn((3, 3), positions)
        scores = [score for _, score in cells]
        self.assertEqual(scores, sorted(scores, reverse=True))


if __name__ == "__main__":
    unittest.main()
