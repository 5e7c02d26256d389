import logging
import shlex
from typing import Iterable, List, Optional, Union

from maze_finder.core.grid import Grid
from maze_finder.algo.solvers import SearchEngine, SearchResult
from maze_finder.algo.division import RecursiveDivision, Division

logger = logging.getLogger(__name__)

Outcome = Union[bool, SearchResult, List[Division], None]


class CommandProcessor:
    """
    Applies normalized commands from an input-translation layer to a grid.

        wall R C | open R C | start R C | end R C
        bfs | dfs | astar
        reset [random]
        maze

    Malformed commands are logged and ignored; they never touch the grid.
    """
    def __init__(self, grid: Grid, seed: int = None):
        self.grid = grid
        self.engine = SearchEngine(grid)
        self.maze = RecursiveDivision(grid, seed=seed)
        self.last_result: Optional[SearchResult] = None

    def execute(self, line: str) -> Outcome:
        try:
            parts = shlex.split(line, comments=True)
        except ValueError as e:
            logger.warning(f"Unparseable command '{line.strip()}': {e}")
            return None
        if not parts:
            return None

        verb, args = parts[0].lower(), parts[1:]
        handler = getattr(self, f"_cmd_{verb}", None)
        if handler is None:
            logger.warning(f"Unknown command: {line.strip()}")
            return None
        try:
            return handler(*args)
        except (TypeError, ValueError) as e:
            logger.warning(f"Bad arguments for '{verb}': {e}")
            return None

    def execute_all(self, lines: Iterable[str]) -> List[Outcome]:
        return [self.execute(line) for line in lines]

    # --- Handlers ---

    def _cmd_wall(self, row, col) -> bool:
        return self.grid.set_passable(int(row), int(col), False)

    def _cmd_open(self, row, col) -> bool:
        return self.grid.set_passable(int(row), int(col), True)

    def _cmd_start(self, row, col) -> bool:
        return self.grid.designate_start(int(row), int(col))

    def _cmd_end(self, row, col) -> bool:
        return self.grid.designate_end(int(row), int(col))

    def _search(self, algo: str) -> SearchResult:
        self.last_result = self.engine.run(algo)
        return self.last_result

    def _cmd_bfs(self) -> SearchResult:
        return self._search("bfs")

    def _cmd_dfs(self) -> SearchResult:
        return self._search("dfs")

    def _cmd_astar(self) -> SearchResult:
        return self._search("astar")

    def _cmd_reset(self, mode: str = "") -> None:
        if mode not in ("", "random"):
            raise ValueError(f"unknown reset mode '{mode}'")
        self.grid.reset(randomize=(mode == "random"))
        self.last_result = None

    def _cmd_maze(self) -> List[Division]:
        return self.maze.generate()
