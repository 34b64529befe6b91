"""
Single simulated path aligned to a time grid.

A Path is a transient value: created by a path generator, consumed by a
path pricer. Values are read-only once built.
"""

from dataclasses import dataclass

import numpy as np
import pandas as pd

from path_pricing.montecarlo.time_grid import TimeGrid


@dataclass(frozen=True, eq=False)
class Path:
    """
    Immutable simulated path.

    Attributes
    ----------
    time_grid : TimeGrid
        Grid the path is sampled on
    values : np.ndarray
        Process values, shape (time_grid.size,)
    weight : float
        Sample weight carried over from the random draw
    """

    time_grid: TimeGrid
    values: np.ndarray
    weight: float = 1.0

    def __post_init__(self) -> None:
        """Validate alignment and freeze values."""
        values = np.array(self.values, dtype=float)
        if values.ndim != 1 or values.shape[0] != self.time_grid.size:
            raise ValueError(
                f"CRITICAL: path length must equal time grid size. "
                f"Got values={values.shape}, grid={self.time_grid.size}"
            )
        values.flags.writeable = False
        object.__setattr__(self, "values", values)

    @property
    def length(self) -> int:
        """Number of points (time_grid.size)."""
        return self.values.shape[0]

    @property
    def front(self) -> float:
        """Initial value."""
        return float(self.values[0])

    @property
    def back(self) -> float:
        """Final value."""
        return float(self.values[-1])

    def __len__(self) -> int:
        return self.length

    def __getitem__(self, i: int) -> float:
        return float(self.values[i])

    def value_at(self, t: float) -> float:
        """Value at grid time ``t``."""
        return float(self.values[self.time_grid.index_of(t)])

    def to_series(self) -> pd.Series:
        """
        Path as a pandas Series indexed by time.

        Returns
        -------
        pd.Series
            Values named "value" with a float index named "time"
        """
        return pd.Series(
            self.values.copy(),
            index=pd.Index(self.time_grid.times.copy(), name="time"),
            name="value",
        )
