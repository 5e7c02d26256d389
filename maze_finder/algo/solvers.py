import logging
from abc import ABC, abstractmethod
from collections import deque
from enum import Enum
from typing import Iterator, List, NamedTuple, Optional, Tuple

from maze_finder.core.grid import Grid, Cell
from maze_finder.algo.heap import MinHeap, ClosedIndex
from maze_finder.algo.paths import PathReconstructor

logger = logging.getLogger(__name__)


class SearchStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    FOUND = "found"
    EXHAUSTED = "exhausted"
    NOT_READY = "not_ready"


class SearchResult(NamedTuple):
    status: SearchStatus
    path: Tuple[Cell, ...] = ()

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND

    @property
    def path_length(self) -> int:
        return len(self.path)


class Solver(ABC):
    name = "solver"

    def __init__(self, grid: Grid):
        self.grid = grid
        self.path: List[Cell] = []
        self.visited_count = 0
        self.status = SearchStatus.IDLE

    @property
    def result(self) -> SearchResult:
        return SearchResult(self.status, tuple(self.path))

    def run(self) -> Iterator[str]:
        """
        Yields one status string per algorithm step.
        Grid state is mutated in place; the outcome is left in self.result.
        """
        grid = self.grid
        if grid.start is None:
            logger.warning(f"{self.name}: no start designated")
            self.status = SearchStatus.NOT_READY
            return
        if grid.episode_started:
            logger.warning(f"{self.name}: grid holds a previous search, reset first")
            self.status = SearchStatus.NOT_READY
            return

        grid.episode_started = True
        self.status = SearchStatus.RUNNING
        grid.mark_visited(grid.start)
        self.visited_count = 1

        yield from self.search(grid.start, grid.end)

        if self.status is SearchStatus.RUNNING:
            self.status = SearchStatus.EXHAUSTED
        logger.info(f"{self.name}: {self.status.value}, path length {len(self.path)}, "
                    f"visited {self.visited_count}")
        yield "Solved" if self.status is SearchStatus.FOUND else "Exhausted"

    @abstractmethod
    def search(self, start: Cell, end: Optional[Cell]) -> Iterator[str]:
        pass

    def run_all(self) -> SearchResult:
        """Helper to run the solver to completion."""
        for _ in self.run():
            pass
        return self.result

    def visit(self, cell: Cell):
        self.grid.mark_visited(cell)
        self.visited_count += 1


class BFS(Solver):
    name = "bfs"

    def search(self, start: Cell, end: Optional[Cell]) -> Iterator[str]:
        grid = self.grid
        queue = deque([start])
        start.distance = 0

        while queue:
            current = queue.popleft()

            for n in grid.neighbors_of(current):
                if n.passable and not n.visited:
                    n.distance = current.distance + 1
                    self.visit(n)
                    queue.append(n)

                    # Found as soon as the goal is enqueued
                    if n is end:
                        self.status = SearchStatus.FOUND
                        self.path = PathReconstructor.by_distance(grid, end)
                        return

            yield f"Visited: {self.visited_count}"


class DepthFirst(Solver):
    """
    Visits neighbors in the same order as a recursive descent would,
    using an explicit stack of neighbor iterators instead of recursion.
    """
    name = "dfs"

    def search(self, start: Cell, end: Optional[Cell]) -> Iterator[str]:
        grid = self.grid
        stack = [(start, grid.neighbors_of(start))]

        while stack:
            current, pending = stack[-1]

            for n in pending:
                if n.passable and not n.visited:
                    n.search_parent = current.index
                    self.visit(n)

                    if n is end:
                        self.status = SearchStatus.FOUND
                        self.path = PathReconstructor.by_parent(grid, end)
                        return

                    stack.append((n, grid.neighbors_of(n)))
                    break
            else:
                # Exhausted this cell's neighbors: backtrack
                stack.pop()
                continue

            yield f"Depth: {len(stack)}"


class AStar(Solver):
    """
    Best-first search over an f-cost heap.

    g_cost is the Manhattan distance back to the start rather than the travelled
    distance, and after every extraction the entry with the smallest h_cost is
    pulled to the front of the open set. Together these bias the search hard
    towards the goal; paths are not guaranteed shortest around obstacles.
    """
    name = "astar"

    def __init__(self, grid: Grid):
        super().__init__(grid)
        self.open_set = MinHeap()
        self.closed = ClosedIndex()
        self.extractions = 0

    def search(self, start: Cell, end: Optional[Cell]) -> Iterator[str]:
        grid = self.grid
        open_set = self.open_set
        closed = self.closed
        open_set.clear()
        closed.clear()

        h = grid.manhattan(start, end) if end is not None else 0
        start.set_costs(0, h)
        open_set.insert(start)

        while True:
            current = open_set.extract_min()
            if current is None:
                return
            self.extractions += 1
            open_set.promote(lambda c: c.h_cost)
            closed.add(current)

            if current is end:
                self.status = SearchStatus.FOUND
                self.path = PathReconstructor.by_parent(grid, end)
                return

            for n in grid.neighbors_of(current):
                if not n.passable or n in closed:
                    continue

                tentative_g = grid.manhattan(n, start)
                if tentative_g < n.g_cost or n not in open_set:
                    n.search_parent = current.index
                    n.set_costs(tentative_g, grid.manhattan(n, end) if end is not None else 0)
                    if n in open_set:
                        open_set.update(n)
                    else:
                        open_set.insert(n)
                        if not n.visited:
                            self.visit(n)

            yield f"Open: {len(open_set)}"


class SearchEngine:
    """Entry point for the presentation layer: one call per search, run to completion."""

    SOLVERS = {"bfs": BFS, "dfs": DepthFirst, "astar": AStar}

    def __init__(self, grid: Grid):
        self.grid = grid

    def solver(self, algo: str) -> Solver:
        try:
            return self.SOLVERS[algo](self.grid)
        except KeyError:
            raise ValueError(f"Unknown search algorithm: {algo}") from None

    def run(self, algo: str) -> SearchResult:
        return self.solver(algo).run_all()

    def run_bfs(self) -> SearchResult:
        return self.run("bfs")

    def run_dfs(self) -> SearchResult:
        return self.run("dfs")

    def run_astar(self) -> SearchResult:
        return self.run("astar")
