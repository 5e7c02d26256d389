import logging
import random
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from maze_finder.core.events import (
    StepEvent, EVT_VISIT, EVT_WALL, EVT_OPEN, EVT_PATH, EVT_START, EVT_END, EVT_RESET
)

logger = logging.getLogger(__name__)

# Sentinels
NO_CELL = -1
INFINITE_COST = 2 ** 31 - 1


class ConfigurationError(ValueError):
    """Raised when a grid is constructed with unusable parameters."""


class Cell:
    __slots__ = ('row', 'col', 'index', 'passable', 'visited', 'distance',
                 'g_cost', 'h_cost', 'search_parent', 'neighbors',
                 'opening_guard', 'on_path')

    def __init__(self, row: int, col: int, index: int):
        self.row = row
        self.col = col
        self.index = index
        self.passable = True
        # (north, south, east, west) arena indices, filled once by Grid
        self.neighbors: Tuple[int, int, int, int] = (NO_CELL, NO_CELL, NO_CELL, NO_CELL)
        self.clear()

    def clear(self):
        """Drops all per-episode and per-maze state. Identity and links stay."""
        self.visited = False
        self.distance = 0
        self.g_cost = INFINITE_COST
        self.h_cost = INFINITE_COST
        self.search_parent = NO_CELL
        self.opening_guard = False
        self.on_path = False

    @property
    def f_cost(self) -> int:
        if self.g_cost == INFINITE_COST or self.h_cost == INFINITE_COST:
            return INFINITE_COST
        return self.g_cost + self.h_cost

    def set_costs(self, g_cost: int, h_cost: int):
        self.g_cost = g_cost
        self.h_cost = h_cost

    def __repr__(self):
        return f"Cell({self.row}, {self.col})"


class Grid:
    MIN_SIZE = 2

    # Neighbor slot order inside Cell.neighbors
    NORTH = 0
    SOUTH = 1
    EAST = 2
    WEST = 3

    # Direction Helpers
    DR = {NORTH: -1, SOUTH: 1, EAST: 0, WEST: 0}
    DC = {NORTH: 0, SOUTH: 0, EAST: 1, WEST: -1}
    OPPOSITE = {NORTH: SOUTH, SOUTH: NORTH, EAST: WEST, WEST: EAST}

    # Expansion order shared by the searches: west, south, east, north
    SEARCH_ORDER = (WEST, SOUTH, EAST, NORTH)

    # Display states for snapshot()
    STATE_OPEN = 0
    STATE_WALL = 1
    STATE_VISITED = 2
    STATE_PATH = 3
    STATE_START = 4
    STATE_END = 5

    __slots__ = ('size', 'cells', 'start', 'end', 'observer', 'rng', 'episode_started')

    def __init__(self, size: int, observer: Optional[Callable[[StepEvent], None]] = None,
                 seed: int = None, place_endpoints: bool = True):
        if isinstance(size, bool) or not isinstance(size, int):
            raise ConfigurationError(f"Grid size must be an integer, got {size!r}")
        if size < self.MIN_SIZE:
            raise ConfigurationError(f"Grid size must be at least {self.MIN_SIZE}, got {size}")

        self.size = size
        self.observer = observer
        self.rng = random.Random(seed)
        self.start: Optional[Cell] = None
        self.end: Optional[Cell] = None
        self.episode_started = False

        self.cells: List[Cell] = [
            Cell(r, c, r * size + c) for r in range(size) for c in range(size)
        ]
        # Links only after every cell exists
        for cell in self.cells:
            cell.neighbors = self._compute_neighbors(cell.row, cell.col)

        if place_endpoints:
            self._place_endpoints()

        logger.info(f"Built {size}x{size} grid")

    def _compute_neighbors(self, row: int, col: int) -> Tuple[int, int, int, int]:
        slots = []
        for direction in (self.NORTH, self.SOUTH, self.EAST, self.WEST):
            nr, nc = row + self.DR[direction], col + self.DC[direction]
            slots.append(nr * self.size + nc if self.in_bounds(nr, nc) else NO_CELL)
        return tuple(slots)

    # --- Lookup ---

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get_index(self, row: int, col: int) -> int:
        if self.in_bounds(row, col):
            return row * self.size + col
        raise IndexError(f"Coordinate ({row}, {col}) out of bounds")

    def cell(self, row: int, col: int) -> Optional[Cell]:
        if self.in_bounds(row, col):
            return self.cells[row * self.size + col]
        return None

    def neighbor(self, cell: Cell, direction: int) -> Optional[Cell]:
        idx = cell.neighbors[direction]
        return None if idx == NO_CELL else self.cells[idx]

    def neighbors_of(self, cell: Cell, order: Sequence[int] = SEARCH_ORDER) -> Iterator[Cell]:
        """
        Yields existing neighbor cells in 'order'.
        Does NOT check passability (that's for the searches).
        """
        for direction in order:
            idx = cell.neighbors[direction]
            if idx != NO_CELL:
                yield self.cells[idx]

    @staticmethod
    def manhattan(a: Cell, b: Cell) -> int:
        return abs(a.row - b.row) + abs(a.col - b.col)

    def is_endpoint(self, cell: Cell) -> bool:
        return cell is self.start or cell is self.end

    # --- Observer ---

    def emit(self, kind: int, cell: Cell = None):
        if self.observer is None:
            return
        if cell is None:
            self.observer(StepEvent(kind, NO_CELL, NO_CELL))
        else:
            self.observer(StepEvent(kind, cell.row, cell.col))

    def mark_visited(self, cell: Cell):
        cell.visited = True
        self.emit(EVT_VISIT, cell)

    def mark_path(self, cell: Cell):
        cell.on_path = True
        self.emit(EVT_PATH, cell)

    def draw_wall(self, cell: Cell):
        cell.passable = False
        self.emit(EVT_WALL, cell)

    def open_cell(self, cell: Cell):
        cell.passable = True
        self.emit(EVT_OPEN, cell)

    # --- Editing ---

    def set_passable(self, row: int, col: int, passable: bool) -> bool:
        """Returns False (and changes nothing) for out-of-bounds or endpoint cells."""
        cell = self.cell(row, col)
        if cell is None or self.is_endpoint(cell):
            logger.debug(f"Ignored set_passable({row}, {col})")
            return False

        if passable:
            self.open_cell(cell)
        else:
            self.draw_wall(cell)
        logger.info(f"Set ({row}, {col}) {'open' if passable else 'wall'}")
        return True

    def designate_start(self, row: int, col: int) -> bool:
        return self._designate(row, col, is_start=True)

    def designate_end(self, row: int, col: int) -> bool:
        return self._designate(row, col, is_start=False)

    def _designate(self, row: int, col: int, is_start: bool) -> bool:
        target = self.cell(row, col)
        other = self.end if is_start else self.start
        name = "start" if is_start else "end"
        if target is None or target is other:
            logger.debug(f"Ignored {name} designation at ({row}, {col})")
            return False

        previous = self.start if is_start else self.end
        if previous is not None and previous is not target:
            previous.passable = True
            previous.visited = False
            self.emit(EVT_OPEN, previous)

        target.passable = True
        if is_start:
            self.start = target
        else:
            self.end = target
        self.emit(EVT_START if is_start else EVT_END, target)
        logger.info(f"Designated {name} at ({row}, {col})")
        return True

    def randomize_endpoints(self):
        """
        Start goes to the top-left quadrant, end to the bottom-right one.
        One cell of margin from the outer border is kept when the quadrant allows it.
        """
        self._place_endpoints()
        logger.info(f"Randomized endpoints: start={self.start}, end={self.end}")

    def _place_endpoints(self):
        half = self.size // 2
        margin = 1 if half > 1 else 0

        start_row = self.rng.randrange(margin, half)
        start_col = self.rng.randrange(margin, half)
        end_row = self.rng.randrange(half, max(half + 1, self.size - margin))
        end_col = self.rng.randrange(half, max(half + 1, self.size - margin))

        for old in (self.start, self.end):
            if old is not None:
                old.passable = True
                old.visited = False
                self.emit(EVT_OPEN, old)

        self.start = self.cells[start_row * self.size + start_col]
        self.end = self.cells[end_row * self.size + end_col]
        self.emit(EVT_START, self.start)
        self.emit(EVT_END, self.end)
        logger.debug(f"Placed endpoints: start={self.start}, end={self.end}")

    def reset(self, randomize: bool = False):
        for cell in self.cells:
            cell.clear()
            cell.passable = True
        self.episode_started = False
        self.emit(EVT_RESET)

        if randomize:
            self._place_endpoints()
        logger.info("Grid reset")

    # --- Presentation ---

    def snapshot(self) -> np.ndarray:
        """Display state of every cell as a (size, size) uint8 array."""
        states = np.full((self.size, self.size), self.STATE_OPEN, dtype=np.uint8)
        for cell in self.cells:
            if not cell.passable:
                states[cell.row, cell.col] = self.STATE_WALL
            elif cell.on_path:
                states[cell.row, cell.col] = self.STATE_PATH
            elif cell.visited:
                states[cell.row, cell.col] = self.STATE_VISITED
        if self.start is not None:
            states[self.start.row, self.start.col] = self.STATE_START
        if self.end is not None:
            states[self.end.row, self.end.col] = self.STATE_END
        return states
