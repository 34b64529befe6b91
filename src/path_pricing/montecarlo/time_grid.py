"""
Time discretization for path simulation.

A TimeGrid is the ordered set of times at which a process is sampled,
starting at 0. Mandatory times are the caller's fixing dates; they are
guaranteed to be grid points and are stored as the matched grid times so
pricers can compare them exactly.

[T1] A grid of N+1 points defines N steps with dt(i) = t[i+1] - t[i].
"""

from collections.abc import Iterable, Iterator

import numpy as np

from path_pricing.config.settings import SETTINGS
from path_pricing.errors import ConstructionError


class TimeGrid:
    """
    Strictly increasing time grid starting at 0.

    Parameters
    ----------
    times : Iterable[float]
        Grid times, strictly increasing, first element 0
    mandatory_times : Iterable[float], optional
        Fixing times that must appear in the grid (default: the last time).
        Each is replaced by the grid point it matches within the fixing-time
        tolerance, so a fixing within tolerance of 0 reads back as exactly 0.

    Examples
    --------
    >>> grid = TimeGrid.uniform(1.0, 4)
    >>> grid.size, grid.dt(0)
    (5, 0.25)
    >>> grid.mandatory_times
    (1.0,)
    """

    def __init__(
        self,
        times: Iterable[float],
        mandatory_times: Iterable[float] | None = None,
    ):
        grid = np.array([float(t) for t in times], dtype=float)
        if grid.size == 0:
            raise ConstructionError("CRITICAL: time grid cannot be empty")
        if grid[0] != 0.0:
            raise ConstructionError(f"CRITICAL: time grid must start at 0, got {grid[0]}")
        if np.any(np.diff(grid) <= 0.0):
            raise ConstructionError("CRITICAL: time grid must be strictly increasing")

        if mandatory_times is None:
            mandatory = (float(grid[-1]),)
        else:
            requested = [float(t) for t in mandatory_times]
            if not requested:
                raise ConstructionError("CRITICAL: mandatory times cannot be empty")
            tolerance = SETTINGS.pricing.fixing_time_tolerance
            snapped = set()
            for t in requested:
                i = int(np.argmin(np.abs(grid - t)))
                if abs(grid[i] - t) > tolerance:
                    raise ConstructionError(
                        f"CRITICAL: mandatory time {t} is not a grid point"
                    )
                snapped.add(float(grid[i]))
            mandatory = tuple(sorted(snapped))

        grid.flags.writeable = False
        self._times = grid
        self._dt = np.diff(grid)
        self._dt.flags.writeable = False
        self._mandatory_times = mandatory

    @classmethod
    def uniform(cls, end: float, steps: int) -> "TimeGrid":
        """
        Build an evenly spaced grid on [0, end].

        The only mandatory time is ``end``; time 0 is not a fixing.

        Parameters
        ----------
        end : float
            Last grid time (> 0)
        steps : int
            Number of steps (> 0)
        """
        if steps <= 0:
            raise ConstructionError(f"CRITICAL: steps must be > 0, got {steps}")
        if end <= 0:
            raise ConstructionError(f"CRITICAL: end must be > 0, got {end}")
        return cls(np.linspace(0.0, end, steps + 1), mandatory_times=(float(end),))

    @classmethod
    def from_mandatory_times(cls, times: Iterable[float], steps: int = 0) -> "TimeGrid":
        """
        Build a grid containing 0 and every mandatory time.

        With ``steps > 0`` each interval between consecutive mandatory times
        is subdivided so that no step exceeds ``last_time / steps``.

        Parameters
        ----------
        times : Iterable[float]
            Fixing times (>= 0); sorted and deduplicated
        steps : int, default 0
            Target number of steps over the whole horizon (0: fixings only)

        Notes
        -----
        A fixing at t=0 is kept as the first mandatory time, which is what
        averaging pricers check to decide whether the initial value counts.
        """
        mandatory = sorted(set(float(t) for t in times))
        if not mandatory:
            raise ConstructionError("CRITICAL: mandatory times cannot be empty")
        if mandatory[0] < 0.0:
            raise ConstructionError(
                f"CRITICAL: mandatory times must be >= 0, got {mandatory[0]}"
            )
        if mandatory[-1] <= 0.0:
            raise ConstructionError("CRITICAL: at least one mandatory time must be > 0")
        if steps < 0:
            raise ConstructionError(f"CRITICAL: steps must be >= 0, got {steps}")

        points = [0.0] + [t for t in mandatory if t > 0.0]
        if steps == 0:
            return cls(points, mandatory_times=mandatory)

        max_dt = points[-1] / steps
        grid = [0.0]
        for start, stop in zip(points[:-1], points[1:]):
            n_sub = max(1, int(np.ceil((stop - start) / max_dt - 1e-12)))
            grid.extend(start + (stop - start) * k / n_sub for k in range(1, n_sub))
            grid.append(stop)
        return cls(grid, mandatory_times=mandatory)

    @property
    def times(self) -> np.ndarray:
        """Grid times (read-only)."""
        return self._times

    @property
    def mandatory_times(self) -> tuple[float, ...]:
        """Fixing times supplied by the caller, in increasing order."""
        return self._mandatory_times

    @property
    def size(self) -> int:
        """Number of grid points (N + 1)."""
        return self._times.shape[0]

    @property
    def steps(self) -> int:
        """Number of steps (N)."""
        return self._times.shape[0] - 1

    @property
    def front(self) -> float:
        return float(self._times[0])

    @property
    def back(self) -> float:
        return float(self._times[-1])

    def dt(self, i: int) -> float:
        """Length of step ``i``: t[i+1] - t[i]."""
        return float(self._dt[i])

    @property
    def dts(self) -> np.ndarray:
        """All step lengths (read-only)."""
        return self._dt

    def index_of(self, t: float) -> int:
        """
        Index of grid time ``t``.

        Raises
        ------
        ValueError
            If ``t`` is not a grid point within the fixing-time tolerance
        """
        i = self.closest_index(t)
        if abs(self._times[i] - t) > SETTINGS.pricing.fixing_time_tolerance:
            raise ValueError(f"CRITICAL: {t} is not a grid point (closest: {self._times[i]})")
        return i

    def closest_index(self, t: float) -> int:
        """Index of the grid time closest to ``t``."""
        return int(np.argmin(np.abs(self._times - t)))

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, i: int) -> float:
        return float(self._times[i])

    def __iter__(self) -> Iterator[float]:
        return (float(t) for t in self._times)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeGrid):
            return NotImplemented
        return (
            np.array_equal(self._times, other._times)
            and self._mandatory_times == other._mandatory_times
        )

    def __repr__(self) -> str:
        return (
            f"TimeGrid(size={self.size}, back={self.back}, "
            f"mandatory_times={self._mandatory_times})"
        )
