import unittest
import sys
import os
from collections import deque

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_finder.core.grid import Grid
from maze_finder.core.events import EventRecorder, EVT_WALL
from maze_finder.algo.division import RecursiveDivision
from maze_finder.algo.solvers import BFS

def reachable_from(grid, cell):
    seen = {cell.index}
    queue = deque([cell])
    while queue:
        current = queue.popleft()
        for n in grid.neighbors_of(current):
            if n.passable and n.index not in seen:
                seen.add(n.index)
                queue.append(n)
    return seen

class TestRecursiveDivision(unittest.TestCase):
    def test_small_region_is_base_case(self):
        grid = Grid(5, seed=1)  # 25 cells, below the threshold
        divisions = RecursiveDivision(grid, seed=1).generate()
        self.assertEqual(divisions, [])
        self.assertTrue(all(c.passable for c in grid.cells))

    def test_three_openings_per_division(self):
        for size in (8, 12, 16, 25):
            grid = Grid(size, seed=size)
            gen = RecursiveDivision(grid, seed=size)
            divisions = gen.generate()
            self.assertGreater(len(divisions), 0)

            for d in divisions:
                self.assertEqual(len(d.openings), 3)
                for r, c in d.openings:
                    # Openings sit on the dividers and survive later divisions
                    self.assertTrue(r == d.row or c == d.col)
                    self.assertTrue(grid.cell(r, c).passable)

    def test_spared_side_cycles(self):
        grid = Grid(30, seed=4)
        divisions = RecursiveDivision(grid, seed=4).generate()
        self.assertGreater(len(divisions), 4)
        self.assertEqual([d.spared for d in divisions], [i % 4 for i in range(len(divisions))])

        for d in divisions:
            sides = set()
            for r, c in d.openings:
                if c == d.col:
                    sides.add(RecursiveDivision.SEG_NORTH if r < d.row else RecursiveDivision.SEG_SOUTH)
                else:
                    sides.add(RecursiveDivision.SEG_WEST if c < d.col else RecursiveDivision.SEG_EAST)
            self.assertNotIn(d.spared, sides)
            self.assertEqual(len(sides), 3)

    def test_dividers_near_midpoint(self):
        grid = Grid(20, seed=9)
        first = RecursiveDivision(grid, seed=9).generate()[0]
        self.assertEqual(first.region, ((0, 0), (19, 19)))
        self.assertIn(first.row, (9, 10))
        self.assertIn(first.col, (9, 10))

    def test_connectivity(self):
        for size in (8, 10, 15, 20, 32):
            for seed in range(3):
                grid = Grid(size, seed=seed)
                RecursiveDivision(grid, seed=seed).generate()

                open_cells = {c.index for c in grid.cells if c.passable}
                self.assertEqual(reachable_from(grid, grid.start), open_cells,
                                 f"sealed region at size={size} seed={seed}")
                self.assertTrue(BFS(grid).run_all().found)

    def test_repeated_generate_stays_connected(self):
        for seed in range(4):
            grid = Grid(20, seed=1)
            gen = RecursiveDivision(grid, seed=seed)
            gen.generate()
            second = gen.generate()
            self.assertGreater(len(second), 0)

            open_cells = {c.index for c in grid.cells if c.passable}
            self.assertEqual(reachable_from(grid, grid.start), open_cells,
                             f"sealed region after second pass, seed={seed}")
            for d in second:
                for r, c in d.openings:
                    self.assertTrue(grid.cell(r, c).passable)

    def test_guarded_opening_not_walled(self):
        grid = Grid(10, place_endpoints=False)
        gen = RecursiveDivision(grid, seed=0)
        gen._punch(4, 4)
        self.assertTrue(grid.cell(4, 4).opening_guard)
        for r, c in ((4, 4), (3, 4), (5, 4), (4, 3), (4, 5)):
            gen._wall(r, c)
            self.assertTrue(grid.cell(r, c).passable)

    def test_endpoints_never_walled(self):
        for seed in range(5):
            grid = Grid(16, seed=seed)
            RecursiveDivision(grid, seed=seed).generate()
            self.assertTrue(grid.start.passable)
            self.assertTrue(grid.end.passable)

    def test_determinism(self):
        grid1 = Grid(24, seed=3)
        RecursiveDivision(grid1, seed=12345).generate()

        grid2 = Grid(24, seed=3)
        gen = RecursiveDivision(grid2, seed=12345)
        for _ in gen.run(): pass

        self.assertTrue((grid1.snapshot() == grid2.snapshot()).all())

    def test_sub_region(self):
        recorder = EventRecorder()
        grid = Grid(20, observer=recorder, seed=2)
        recorder.clear()
        region = ((0, 0), (9, 9))
        RecursiveDivision(grid, seed=2).generate(region)

        walls = recorder.of_kind(EVT_WALL)
        self.assertGreater(len(walls), 0)
        for _, r, c in walls:
            self.assertTrue(r <= 9 and c <= 9)
        for cell in grid.cells:
            if cell.row > 9 or cell.col > 9:
                self.assertTrue(cell.passable)

    def test_reset_clears_maze(self):
        grid = Grid(16, seed=6)
        RecursiveDivision(grid, seed=6).generate()
        self.assertTrue(any(not c.passable for c in grid.cells))
        self.assertTrue(any(c.opening_guard for c in grid.cells))
        grid.reset()
        self.assertTrue(all(c.passable and not c.opening_guard for c in grid.cells))

if __name__ == '__main__':
    unittest.main()
