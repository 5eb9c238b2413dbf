# src/gearopt_core/simulation/history.py
import logging
from collections import deque
from typing import Iterator, Optional

from ..constants import HISTORY_CAPACITY
from ..data_structures import SimulationPoint
from .results import SimulationTrace

logger = logging.getLogger(__name__)


class SimulationHistory:
    """
    Bounded trailing window of simulation points.

    Once `capacity` points are held, each new point evicts the oldest one.
    """

    def __init__(self, capacity: int = HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError(f"History capacity must be at least 1, got {capacity}.")
        self._points: deque = deque(maxlen=capacity)
        logger.debug(f"SimulationHistory created with capacity {capacity}.")

    @property
    def capacity(self) -> int:
        return self._points.maxlen

    def append(self, point: SimulationPoint) -> None:
        self._points.append(point)

    def clear(self) -> None:
        self._points.clear()

    @property
    def latest(self) -> Optional[SimulationPoint]:
        return self._points[-1] if self._points else None

    @property
    def is_full(self) -> bool:
        return len(self._points) == self.capacity

    def to_trace(self) -> SimulationTrace:
        return SimulationTrace.from_points(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[SimulationPoint]:
        return iter(self._points)
