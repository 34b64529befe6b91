"""
Plain-vanilla payoffs applied to an averaged underlying.

See: Hull (2021) Ch. 26 - Asian options
"""

from dataclasses import dataclass
from enum import Enum

from path_pricing.errors import ConstructionError


class OptionType(Enum):
    """Option type enumeration."""

    CALL = "call"
    PUT = "put"


@dataclass(frozen=True)
class PlainVanillaPayoff:
    """
    Call or put payoff on a single price.

    [T1] Call: max(S - K, 0)
    [T1] Put:  max(K - S, 0)

    Attributes
    ----------
    option_type : OptionType
        CALL or PUT
    strike : float
        Strike price

    Examples
    --------
    >>> payoff = PlainVanillaPayoff(OptionType.CALL, 100.0)
    >>> payoff(103.0)
    3.0
    """

    option_type: OptionType
    strike: float

    def __post_init__(self) -> None:
        """Normalize option type given as a string."""
        if isinstance(self.option_type, str):
            try:
                object.__setattr__(self, "option_type", OptionType(self.option_type.lower()))
            except ValueError as err:
                raise ConstructionError(
                    f"CRITICAL: option_type must be 'call' or 'put', got {self.option_type!r}"
                ) from err

    def __call__(self, price: float) -> float:
        if self.option_type == OptionType.CALL:
            return max(price - self.strike, 0.0)
        return max(self.strike - price, 0.0)
