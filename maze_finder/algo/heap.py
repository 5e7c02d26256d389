from typing import Callable, Dict, Iterator, List, Optional

from maze_finder.core.grid import Cell


def f_cost_key(cell: Cell) -> int:
    return cell.f_cost


class MinHeap:
    """
    Array-backed binary min-heap of cells, used as the A* open set.
    Ordered by 'key' (f_cost by default). Membership is by identity.
    """
    def __init__(self, key: Callable[[Cell], int] = f_cost_key):
        self.key = key
        self.items: List[Cell] = []
        self._members = set()

    @staticmethod
    def parent(i: int) -> int:
        return (i - 1) // 2

    @staticmethod
    def left(i: int) -> int:
        return 2 * i + 1

    @staticmethod
    def right(i: int) -> int:
        return 2 * i + 2

    def __len__(self):
        return len(self.items)

    def __bool__(self):
        return bool(self.items)

    def __contains__(self, cell: Cell) -> bool:
        return id(cell) in self._members

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.items)

    def peek(self) -> Optional[Cell]:
        return self.items[0] if self.items else None

    def insert(self, cell: Cell):
        self.items.append(cell)
        self._members.add(id(cell))
        self._sift_up(len(self.items) - 1)

    def extract_min(self) -> Optional[Cell]:
        """Returns None when the open set is empty."""
        if not self.items:
            return None

        root = self.items[0]
        last = self.items.pop()
        if self.items:
            self.items[0] = last
            self.min_heapify(0)
        self._members.discard(id(root))
        return root

    def update(self, cell: Cell):
        """Re-sift a member whose key dropped."""
        for i, item in enumerate(self.items):
            if item is cell:
                self._sift_up(i)
                return
        self.insert(cell)

    def promote(self, key: Callable[[Cell], int]):
        """
        Swaps to the front any entry whose 'key' beats the current front's.
        Deliberately leaves the array un-heapified.
        """
        items = self.items
        for i in range(1, len(items)):
            if key(items[i]) < key(items[0]):
                items[0], items[i] = items[i], items[0]

    def min_heapify(self, i: int):
        items = self.items
        n = len(items)
        while True:
            l, r = self.left(i), self.right(i)
            smallest = i
            if l < n and self.key(items[l]) < self.key(items[smallest]):
                smallest = l
            if r < n and self.key(items[r]) < self.key(items[smallest]):
                smallest = r
            if smallest == i:
                return
            items[i], items[smallest] = items[smallest], items[i]
            i = smallest

    def _sift_up(self, i: int):
        items = self.items
        while i > 0:
            p = self.parent(i)
            if self.key(items[i]) < self.key(items[p]):
                items[i], items[p] = items[p], items[i]
                i = p
            else:
                return

    def is_valid(self) -> bool:
        for i in range(1, len(self.items)):
            if self.key(self.items[i]) < self.key(self.items[self.parent(i)]):
                return False
        return True

    def clear(self):
        self.items.clear()
        self._members.clear()


class ClosedIndex:
    """Cells already finalized by A*, keyed by the Cantor pairing of (row, col)."""
    def __init__(self):
        self._cells: Dict[int, Cell] = {}

    @staticmethod
    def key(row: int, col: int) -> int:
        s = row + col
        return s * (s + 1) // 2 + col

    def add(self, cell: Cell):
        self._cells[self.key(cell.row, cell.col)] = cell

    def get(self, row: int, col: int) -> Optional[Cell]:
        return self._cells.get(self.key(row, col))

    def __contains__(self, cell: Cell) -> bool:
        return self.key(cell.row, cell.col) in self._cells

    def __len__(self):
        return len(self._cells)

    def clear(self):
        self._cells.clear()
