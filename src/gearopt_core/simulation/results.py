# src/gearopt_core/simulation/results.py
"""
Column-oriented record of a run of simulation points.
"""
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from ..data_structures import SimulationPoint


@dataclass(frozen=True)
class SimulationTrace:
    """
    The sampled simulation as parallel 1D float arrays, one entry per tick,
    ordered by time.

    Attributes:
        time: Sample times, s.
        input_torque: Pinion shaft torque, N*m.
        output_torque: Gear shaft torque, N*m.
        input_rpm: Pinion speed, rpm.
        output_rpm: Gear speed, rpm.
        stress: Pinion root bending stress, MPa.
    """
    time: np.ndarray
    input_torque: np.ndarray
    output_torque: np.ndarray
    input_rpm: np.ndarray
    output_rpm: np.ndarray
    stress: np.ndarray

    @classmethod
    def from_points(cls, points: Iterable[SimulationPoint]) -> "SimulationTrace":
        points = list(points)

        def column(name: str) -> np.ndarray:
            return np.array([getattr(p, name) for p in points], dtype=float)

        return cls(
            time=column("time"),
            input_torque=column("input_torque"),
            output_torque=column("output_torque"),
            input_rpm=column("input_rpm"),
            output_rpm=column("output_rpm"),
            stress=column("stress"),
        )

    def __len__(self) -> int:
        return len(self.time)

    @property
    def peak_stress(self) -> float:
        return float(np.max(self.stress)) if len(self) else float("nan")

    @property
    def mean_input_rpm(self) -> float:
        return float(np.mean(self.input_rpm)) if len(self) else float("nan")

    @property
    def input_rpm_range(self) -> tuple:
        """(min, max) of the input speed over the trace."""
        if not len(self):
            return (float("nan"), float("nan"))
        return (float(np.min(self.input_rpm)), float(np.max(self.input_rpm)))

    def input_power_kw(self) -> np.ndarray:
        """Instantaneous input power, kW. Varies with speed under sine/noise forcing."""
        return self.input_torque * self.input_rpm * (2 * np.pi / 60.0) / 1000.0
