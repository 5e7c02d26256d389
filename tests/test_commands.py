import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_finder.core.grid import Grid
from maze_finder.core.commands import CommandProcessor
from maze_finder.algo.solvers import SearchStatus

class TestCommands(unittest.TestCase):
    def setUp(self):
        self.grid = Grid(6, place_endpoints=False)
        self.proc = CommandProcessor(self.grid, seed=1)

    def test_editing(self):
        results = self.proc.execute_all([
            "start 0 0",
            "end 5 5",
            "wall 2 2",
            "wall 9 9",   # out of bounds
            "wall 0 0",   # start
            "open 2 2",
            "wall 3 3",
        ])
        self.assertEqual(results, [True, True, True, False, False, True, True])
        self.assertIs(self.grid.start, self.grid.cell(0, 0))
        self.assertIs(self.grid.end, self.grid.cell(5, 5))
        self.assertTrue(self.grid.cell(2, 2).passable)
        self.assertFalse(self.grid.cell(3, 3).passable)

    def test_search_and_reset(self):
        self.proc.execute_all(["start 0 0", "end 3 3"])
        result = self.proc.execute("BFS")
        self.assertEqual(result.status, SearchStatus.FOUND)
        self.assertEqual(result.path_length, 6)
        self.assertIs(self.proc.last_result, result)

        self.assertEqual(self.proc.execute("astar").status, SearchStatus.NOT_READY)
        self.proc.execute("reset")
        self.assertIsNone(self.proc.last_result)
        self.assertTrue(self.proc.execute("dfs").found)

    def test_not_ready(self):
        result = self.proc.execute("astar")
        self.assertEqual(result.status, SearchStatus.NOT_READY)

    def test_maze(self):
        grid = Grid(12, seed=5)
        proc = CommandProcessor(grid, seed=5)
        divisions = proc.execute("maze")
        self.assertGreater(len(divisions), 0)
        self.assertTrue(any(not c.passable for c in grid.cells))
        self.assertTrue(proc.execute("bfs").found)

    def test_maze_twice(self):
        grid = Grid(20, seed=1)
        proc = CommandProcessor(grid, seed=1)
        proc.execute("maze")
        proc.execute("maze")

        seen = {grid.start.index}
        frontier = [grid.start]
        while frontier:
            cell = frontier.pop()
            for n in grid.neighbors_of(cell):
                if n.passable and n.index not in seen:
                    seen.add(n.index)
                    frontier.append(n)
        self.assertEqual(seen, {c.index for c in grid.cells if c.passable})
        self.assertTrue(proc.execute("bfs").found)

    def test_reset_random(self):
        grid = Grid(10, seed=3)
        proc = CommandProcessor(grid)
        proc.execute("wall 0 9")
        proc.execute("reset random")
        self.assertTrue(grid.cell(0, 9).passable)
        self.assertIsNotNone(grid.start)
        self.assertIsNot(grid.start, grid.end)

    def test_malformed_ignored(self):
        self.assertIsNone(self.proc.execute(""))
        self.assertIsNone(self.proc.execute("# just a comment"))
        with self.assertLogs("maze_finder.core.commands", level="WARNING"):
            self.assertIsNone(self.proc.execute("teleport 1 1"))
        with self.assertLogs("maze_finder.core.commands", level="WARNING"):
            self.assertIsNone(self.proc.execute("wall one 2"))
        with self.assertLogs("maze_finder.core.commands", level="WARNING"):
            self.assertIsNone(self.proc.execute("wall 1"))
        with self.assertLogs("maze_finder.core.commands", level="WARNING"):
            self.assertIsNone(self.proc.execute("reset sideways"))
        with self.assertLogs("maze_finder.core.commands", level="WARNING"):
            self.assertIsNone(self.proc.execute('wall "1 2'))
        self.assertTrue(all(c.passable for c in self.grid.cells))

    def test_operations_logged(self):
        with self.assertLogs("maze_finder", level="INFO") as logs:
            self.proc.execute("wall 1 1")
        self.assertEqual(len(logs.records), 1)

if __name__ == '__main__':
    unittest.main()
