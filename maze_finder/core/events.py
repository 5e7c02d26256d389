from collections import Counter
from typing import Dict, Iterator, List, NamedTuple

import numpy as np

# Event Types
EVT_VISIT = 0x01
EVT_WALL = 0x02
EVT_OPEN = 0x03
EVT_PATH = 0x04
EVT_START = 0x05
EVT_END = 0x06
EVT_RESET = 0x07

EVENT_NAMES = {
    EVT_VISIT: "visit",
    EVT_WALL: "wall",
    EVT_OPEN: "open",
    EVT_PATH: "path",
    EVT_START: "start",
    EVT_END: "end",
    EVT_RESET: "reset",
}

# row/col are -1 for grid-wide events (reset)
EVENT_DTYPE = np.dtype([("kind", "u1"), ("row", "i4"), ("col", "i4")])


class StepEvent(NamedTuple):
    kind: int
    row: int
    col: int

    @property
    def name(self) -> str:
        return EVENT_NAMES.get(self.kind, "unknown")


class EventRecorder:
    """
    Step observer that keeps every event in memory.
    Pass an instance as Grid(observer=...) to capture a run for replay or inspection.
    """
    def __init__(self):
        self.events: List[StepEvent] = []

    def __call__(self, event: StepEvent):
        self.events.append(event)

    def __len__(self):
        return len(self.events)

    def __iter__(self) -> Iterator[StepEvent]:
        return iter(self.events)

    def of_kind(self, kind: int) -> List[StepEvent]:
        return [e for e in self.events if e.kind == kind]

    def counts(self) -> Dict[str, int]:
        tally = Counter(e.kind for e in self.events)
        return {EVENT_NAMES[k]: v for k, v in tally.items()}

    def to_array(self) -> np.ndarray:
        return np.array([tuple(e) for e in self.events], dtype=EVENT_DTYPE)

    def clear(self):
        self.events.clear()
