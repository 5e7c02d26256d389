import logging
from typing import Iterator, List, NamedTuple, Optional, Tuple

from maze_finder.core.grid import Grid
from maze_finder.algo.base import Generator, Region

logger = logging.getLogger(__name__)


class Division(NamedTuple):
    region: Region
    row: int
    col: int
    spared: int
    openings: Tuple[Tuple[int, int], ...]


class RecursiveDivision(Generator):
    """
    Recursive quadrant division.

    Each region at or above AREA_THRESHOLD cells is cut by one wall row and one
    wall column. Of the four wall segments meeting at the crossing, three get a
    single-cell opening; the spared segment rotates north, east, south, west
    across successive divisions. Cells next to an opening are guarded so that
    the smaller divisions drawn later leave it reachable.
    """
    AREA_THRESHOLD = 30

    # Segment order around the crossing, as cycled by divide_counter
    SEG_NORTH = 0
    SEG_EAST = 1
    SEG_SOUTH = 2
    SEG_WEST = 3

    def __init__(self, grid: Grid, seed: int = None):
        super().__init__(grid, seed)
        self.divide_counter = 0
        self.divisions: List[Division] = []

    def generate(self, region: Optional[Region] = None) -> List[Division]:
        """Runs to completion and returns the divisions made by this call."""
        before = len(self.divisions)
        self.run_all(region)
        return self.divisions[before:]

    def run(self, region: Optional[Region] = None) -> Iterator[str]:
        if region is None:
            region = self.full_region()
        before = len(self.divisions)
        region = self._clip(region)
        self._clear(region)

        # Endpoints are never walled; guarding their neighbors keeps them from being boxed in
        for endpoint in (self.grid.start, self.grid.end):
            if endpoint is not None:
                for n in self.grid.neighbors_of(endpoint):
                    n.opening_guard = True

        yield from self._divide(region)

        logger.info(f"Maze generated over {region}: {len(self.divisions) - before} divisions")
        yield "Done"

    def _clip(self, region: Region) -> Region:
        (top, left), (bottom, right) = region
        last = self.grid.size - 1
        return ((max(top, 0), max(left, 0)), (min(bottom, last), min(right, last)))

    def _clear(self, region: Region):
        """A new maze replaces whatever walls and guards the region held."""
        (top, left), (bottom, right) = region
        for r in range(top, bottom + 1):
            for c in range(left, right + 1):
                cell = self.grid.cell(r, c)
                cell.opening_guard = False
                if not cell.passable:
                    self.grid.open_cell(cell)

    def _divide(self, region: Region) -> Iterator[str]:
        (top, left), (bottom, right) = region
        height = bottom - top + 1
        width = right - left + 1
        if height <= 0 or width <= 0 or height * width < self.AREA_THRESHOLD:
            return

        rng = self.rng
        div_row = min((top + bottom) // 2 + rng.randint(0, 1), bottom)
        div_col = min((left + right) // 2 + rng.randint(0, 1), right)

        for c in range(left, right + 1):
            self._wall(div_row, c)
        for r in range(top, bottom + 1):
            self._wall(r, div_col)
        self.step_count += 1
        yield f"Divided at ({div_row}, {div_col})"

        segments = {
            self.SEG_NORTH: [(r, div_col) for r in range(top, div_row)],
            self.SEG_EAST: [(div_row, c) for c in range(div_col + 1, right + 1)],
            self.SEG_SOUTH: [(r, div_col) for r in range(div_row + 1, bottom + 1)],
            self.SEG_WEST: [(div_row, c) for c in range(left, div_col)],
        }
        spared = self.divide_counter
        self.divide_counter = (self.divide_counter + 1) % 4

        openings = []
        for side in (self.SEG_NORTH, self.SEG_EAST, self.SEG_SOUTH, self.SEG_WEST):
            cells = segments[side]
            if side == spared or not cells:
                continue
            openings.append(self._punch(*rng.choice(cells)))

        self.divisions.append(Division(region, div_row, div_col, spared, tuple(openings)))
        yield f"Openings: {len(openings)}"

        quadrants = (
            ((top, left), (div_row - 1, div_col - 1)),
            ((top, div_col + 1), (div_row - 1, right)),
            ((div_row + 1, left), (bottom, div_col - 1)),
            ((div_row + 1, div_col + 1), (bottom, right)),
        )
        for quadrant in quadrants:
            yield from self._divide(quadrant)

    def _wall(self, row: int, col: int):
        cell = self.grid.cell(row, col)
        if cell.opening_guard or self.grid.is_endpoint(cell) or not cell.passable:
            return
        self.grid.draw_wall(cell)

    def _punch(self, row: int, col: int) -> Tuple[int, int]:
        grid = self.grid
        cell = grid.cell(row, col)
        grid.open_cell(cell)
        cell.opening_guard = True
        for n in grid.neighbors_of(cell):
            n.opening_guard = True
        return (row, col)
