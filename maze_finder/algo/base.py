import random
from abc import ABC, abstractmethod
from typing import Iterator, Optional, Tuple
from maze_finder.core.grid import Grid

# ((top, left), (bottom, right)), both corners inclusive
Region = Tuple[Tuple[int, int], Tuple[int, int]]

class Generator(ABC):
    def __init__(self, grid: Grid, seed: int = None):
        self.grid = grid
        self.seed = seed
        self.rng = random.Random(seed)
        self.step_count = 0

    def full_region(self) -> Region:
        last = self.grid.size - 1
        return ((0, 0), (last, last))

    @abstractmethod
    def run(self, region: Optional[Region] = None) -> Iterator[str]:
        """
        Yields status strings or progress updates.
        The actual grid modifications happen in-place on self.grid.
        """
        pass

    def run_all(self, region: Optional[Region] = None):
        """Helper to run the generator to completion."""
        for _ in self.run(region):
            pass
