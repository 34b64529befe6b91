"""
Path pricers for discretely-averaging average-price (Asian) options.

A path pricer reduces one simulated path, plus fixings already observed
before the simulation start, to a discounted payoff. Aggregating payoffs over
many paths is the caller's job.

[T1] Arithmetic: A = (running_sum + Σ S(t_i)) / (past_fixings + n_fixings)
[T1] Geometric:  G = (running_product · Π S(t_i))^(1 / (past_fixings + n_fixings))
[T1] Price per path: discount · payoff(A or G)

Precondition on the path's grid: ``mandatory_times`` holds the fixing times,
sorted. If the first one is 0, the initial value S(0) is a fixing; otherwise
it is skipped. Whoever builds the grid owns the correctness of that metadata.

See: Kemna & Vorst (1990), Glasserman (2003) Section 4.1
"""

import numpy as np

from path_pricing.config.settings import SETTINGS
from path_pricing.errors import ConstructionError, EvaluationError
from path_pricing.montecarlo.path import Path
from path_pricing.pricers.payoffs import OptionType, PlainVanillaPayoff


def _fixing_values(path: Path) -> np.ndarray:
    """Path values that count as fixings, per the grid's mandatory times."""
    n = path.length
    if n <= 1:
        raise EvaluationError("CRITICAL: the path cannot be empty")
    if path.time_grid.mandatory_times[0] == 0.0:
        return path.values
    return path.values[1:]


class ArithmeticAPOPathPricer:
    """
    Arithmetic average-price option path pricer.

    Parameters
    ----------
    option_type : OptionType
        CALL or PUT
    strike : float
        Strike price (>= 0)
    discount : float, optional
        Discount factor to the valuation date
        (default: SETTINGS.pricing.default_discount)
    running_sum : float, default 0.0
        Sum of fixings observed before the simulation start
    past_fixings : int, default 0
        Number of fixings observed before the simulation start

    Examples
    --------
    >>> from path_pricing.montecarlo import Path, TimeGrid
    >>> grid = TimeGrid.from_mandatory_times([0.0, 0.25, 0.5, 0.75, 1.0])
    >>> path = Path(grid, [100.0, 102.0, 98.0, 105.0, 110.0])
    >>> pricer = ArithmeticAPOPathPricer(OptionType.CALL, 100.0, discount=0.95)
    >>> round(pricer(path), 10)
    2.85
    """

    def __init__(
        self,
        option_type: OptionType,
        strike: float,
        discount: float | None = None,
        running_sum: float = 0.0,
        past_fixings: int = 0,
    ):
        if strike < 0.0:
            raise ConstructionError("CRITICAL: strike less than zero not allowed")
        if past_fixings < 0:
            raise ConstructionError(f"CRITICAL: past_fixings must be >= 0, got {past_fixings}")
        if discount is None:
            discount = SETTINGS.pricing.default_discount

        self._payoff = PlainVanillaPayoff(option_type, strike)
        self._discount = float(discount)
        self._running_sum = float(running_sum)
        self._past_fixings = int(past_fixings)

    @property
    def payoff(self) -> PlainVanillaPayoff:
        return self._payoff

    @property
    def discount(self) -> float:
        return self._discount

    @property
    def running_sum(self) -> float:
        return self._running_sum

    @property
    def past_fixings(self) -> int:
        return self._past_fixings

    def average(self, path: Path) -> float:
        """
        Arithmetic average over past and simulated fixings.

        Raises
        ------
        EvaluationError
            If the path has one point or fewer
        """
        fixings = _fixing_values(path)
        total = self._running_sum + float(np.sum(fixings))
        return total / (self._past_fixings + fixings.shape[0])

    def __call__(self, path: Path) -> float:
        """
        Discounted payoff of one path.

        Raises
        ------
        EvaluationError
            If the path has one point or fewer
        """
        return self._discount * self._payoff(self.average(path))


class GeometricAPOPathPricer:
    """
    Geometric average-price option path pricer.

    Same fixing rules as ArithmeticAPOPathPricer. The product is accumulated in
    log space, so long paths do not overflow. Its closed form
    (pricers.analytic) makes it the usual control variate for the arithmetic
    pricer.

    Parameters
    ----------
    option_type : OptionType
        CALL or PUT
    strike : float
        Strike price (>= 0)
    discount : float, optional
        Discount factor (default: SETTINGS.pricing.default_discount)
    running_product : float, default 1.0
        Product of fixings observed before the simulation start (> 0)
    past_fixings : int, default 0
        Number of fixings observed before the simulation start
    """

    def __init__(
        self,
        option_type: OptionType,
        strike: float,
        discount: float | None = None,
        running_product: float = 1.0,
        past_fixings: int = 0,
    ):
        if strike < 0.0:
            raise ConstructionError("CRITICAL: strike less than zero not allowed")
        if running_product <= 0.0:
            raise ConstructionError(
                f"CRITICAL: running_product must be > 0, got {running_product}"
            )
        if past_fixings < 0:
            raise ConstructionError(f"CRITICAL: past_fixings must be >= 0, got {past_fixings}")
        if discount is None:
            discount = SETTINGS.pricing.default_discount

        self._payoff = PlainVanillaPayoff(option_type, strike)
        self._discount = float(discount)
        self._running_product = float(running_product)
        self._past_fixings = int(past_fixings)

    @property
    def payoff(self) -> PlainVanillaPayoff:
        return self._payoff

    @property
    def discount(self) -> float:
        return self._discount

    @property
    def running_product(self) -> float:
        return self._running_product

    @property
    def past_fixings(self) -> int:
        return self._past_fixings

    def average(self, path: Path) -> float:
        """Geometric average over past and simulated fixings."""
        fixings = _fixing_values(path)
        if np.any(fixings <= 0.0):
            raise EvaluationError(
                "CRITICAL: geometric average requires strictly positive fixings"
            )
        log_total = np.log(self._running_product) + float(np.sum(np.log(fixings)))
        return float(np.exp(log_total / (self._past_fixings + fixings.shape[0])))

    def __call__(self, path: Path) -> float:
        """Discounted payoff of one path."""
        return self._discount * self._payoff(self.average(path))
