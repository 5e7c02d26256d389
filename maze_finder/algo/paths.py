from typing import List

from maze_finder.core.grid import Grid, Cell, NO_CELL


class PathReconstructor:
    """
    Walks back from the goal once a search has found it.
    Both modes return cells ordered from the one next to 'end' back to 'start' (inclusive).
    Every returned cell except 'start' is marked on the path.
    """

    @staticmethod
    def by_distance(grid: Grid, end: Cell) -> List[Cell]:
        """
        BFS mode: follow the distance gradient down to 0.
        Returns [] when 'end' was never reached.
        """
        if end is None or not end.visited or end.distance == 0:
            return []

        path: List[Cell] = []
        current = end
        while current.distance > 0:
            step = None
            for n in grid.neighbors_of(current):
                if n.visited and n.passable and n.distance == current.distance - 1:
                    step = n
                    break
            if step is None:
                # Gradient broken (state edited mid-episode); give up rather than guess
                return []
            path.append(step)
            current = step

        for cell in path:
            if cell is not grid.start:
                grid.mark_path(cell)
        return path

    @staticmethod
    def by_parent(grid: Grid, end: Cell) -> List[Cell]:
        """A* / DFS mode: follow search_parent links to the start."""
        if end is None or end.search_parent == NO_CELL:
            return []

        path: List[Cell] = []
        idx = end.search_parent
        # Each cell can appear once; the bound guards against corrupted links
        while idx != NO_CELL and len(path) < len(grid.cells):
            cell = grid.cells[idx]
            path.append(cell)
            if cell is grid.start:
                break
            idx = cell.search_parent

        if path[-1] is not grid.start:
            return []

        for cell in path:
            if cell is not grid.start:
                grid.mark_path(cell)
        return path
