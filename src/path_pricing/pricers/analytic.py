"""
Closed-form price of a discretely-monitored geometric average-price option.

Under Black-Scholes the geometric average of log-normal fixings is itself
log-normal, so the option prices with a Black formula on the average's
forward and variance. This is the reference value for the geometric path
pricer and the natural control variate for the arithmetic one.

[T1] For fixings t_1 <= ... <= t_m still to come, n past fixings, N = n + m:
     Var[log G] = σ² / N² · (Σ t_j + 2 Σ_j t_j (m - 1 - j))
     E[log G]   = (n/N) log(P)^(1/n) + (m/N) log S + (r - q - σ²/2) Σ t_j / N
     where P is the running product of past fixings.

References
----------
[T1] Kemna, A. G. Z., & Vorst, A. C. F. (1990). A pricing method for options
     based on average asset values.
"""

from collections.abc import Iterable

import numpy as np
from scipy import stats

from path_pricing.errors import ConstructionError
from path_pricing.pricers.payoffs import OptionType, PlainVanillaPayoff
from path_pricing.processes.black_scholes import BlackScholesProcess


def _black_formula(
    option_type: OptionType,
    strike: float,
    forward: float,
    std_dev: float,
    discount: float,
) -> float:
    """Undiscounted Black formula scaled by ``discount``."""
    if std_dev <= 0.0:
        return discount * PlainVanillaPayoff(option_type, strike)(forward)
    if strike == 0.0:
        return discount * forward if option_type == OptionType.CALL else 0.0

    d1 = np.log(forward / strike) / std_dev + 0.5 * std_dev
    d2 = d1 - std_dev
    if option_type == OptionType.CALL:
        return discount * (forward * stats.norm.cdf(d1) - strike * stats.norm.cdf(d2))
    return discount * (strike * stats.norm.cdf(-d2) - forward * stats.norm.cdf(-d1))


def discrete_geometric_average_price(
    process: BlackScholesProcess,
    option_type: OptionType,
    strike: float,
    fixing_times: Iterable[float],
    exercise_time: float,
    running_product: float = 1.0,
    past_fixings: int = 0,
) -> float:
    """
    Price a discrete geometric average-price option in closed form.

    Parameters
    ----------
    process : BlackScholesProcess
        Flat Black-Scholes dynamics (spot, rate, dividend, volatility)
    option_type : OptionType
        CALL or PUT
    strike : float
        Strike price (>= 0)
    fixing_times : Iterable[float]
        Remaining fixing times in years (>= 0); a fixing at 0 observes the spot
    exercise_time : float
        Payment time used for discounting (years)
    running_product : float, default 1.0
        Product of past fixings (> 0)
    past_fixings : int, default 0
        Number of past fixings

    Returns
    -------
    float
        Option price

    Examples
    --------
    >>> process = BlackScholesProcess(spot=100.0, rate=0.05, dividend=0.0, volatility=0.2)
    >>> price = discrete_geometric_average_price(
    ...     process, OptionType.CALL, 100.0, [0.25, 0.5, 0.75, 1.0], exercise_time=1.0
    ... )
    >>> 0.0 < price < 10.0
    True
    """
    if strike < 0.0:
        raise ConstructionError("CRITICAL: strike less than zero not allowed")
    if running_product <= 0.0:
        raise ConstructionError(f"CRITICAL: running_product must be > 0, got {running_product}")
    if past_fixings < 0:
        raise ConstructionError(f"CRITICAL: past_fixings must be >= 0, got {past_fixings}")

    times = np.sort(np.array([float(t) for t in fixing_times], dtype=float))
    if times.size == 0:
        raise ConstructionError("CRITICAL: at least one remaining fixing time is required")
    if times[0] < 0.0:
        raise ConstructionError(f"CRITICAL: fixing times must be >= 0, got {times[0]}")

    remaining = times.size
    n_total = past_fixings + remaining
    past_weight = past_fixings / n_total
    future_weight = 1.0 - past_weight

    time_sum = float(times.sum())
    cross = float(np.sum(times * (remaining - 1 - np.arange(remaining))))
    sigma = process.volatility
    variance = sigma**2 / n_total**2 * (time_sum + 2.0 * cross)

    running_log = np.log(running_product) / past_fixings if past_fixings > 0 else 0.0
    mu = (
        past_weight * running_log
        + future_weight * np.log(process.spot)
        + process.drift * time_sum / n_total
    )
    forward = np.exp(mu + 0.5 * variance)
    discount = np.exp(-process.rate * exercise_time)

    return float(_black_formula(option_type, strike, forward, np.sqrt(variance), discount))
