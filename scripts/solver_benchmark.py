import sys
import os
import time
import argparse

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_finder.core.grid import Grid
from maze_finder.algo.division import RecursiveDivision
from maze_finder.algo.solvers import SearchEngine

# ==========================================
# GLOBAL CONFIGURATION
# Add or remove solver names here to include/exclude them from the race.
# ==========================================
ENABLED_SOLVERS = [
    "bfs",
    "dfs",
    "astar",
]

def run_benchmark():
    parser = argparse.ArgumentParser(description="Solver Benchmark")
    parser.add_argument("--size", type=int, default=60, help="Grid Size")
    parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    parser.add_argument("--no-maze", action="store_true", help="Race on an empty grid")
    args = parser.parse_args()

    print(f"=== MAZE SOLVER BENCHMARK ===")
    print(f"Size: {args.size}x{args.size} | Maze: {not args.no_maze}")

    grid = Grid(args.size, seed=args.seed)
    if not args.no_maze:
        t0 = time.time()
        divisions = RecursiveDivision(grid, seed=args.seed).generate()
        print(f"Maze: {len(divisions)} divisions in {time.time() - t0:.4f}s")

    # Walls survive between runs; only search state is cleared
    walls = [c.index for c in grid.cells if not c.passable]
    engine = SearchEngine(grid)

    print(f"\n{'ALGORITHM':<10} | {'TIME (s)':<10} | {'STATUS':<10} | {'PATH LEN':<10} | {'VISITED':<10}")
    print("-" * 62)

    for name in ENABLED_SOLVERS:
        grid.reset()
        for idx in walls:
            cell = grid.cells[idx]
            grid.set_passable(cell.row, cell.col, False)

        solver = engine.solver(name)
        t_start = time.time()
        result = solver.run_all()
        duration = time.time() - t_start

        print(f"{name:<10} | {duration:<10.4f} | {result.status.value:<10} | "
              f"{result.path_length:<10} | {solver.visited_count:<10}")

if __name__ == "__main__":
    run_benchmark()
