"""
Path pricers for discretely-averaging options.

Provides:
- OptionType and PlainVanillaPayoff
- Arithmetic and geometric average-price path pricers
- Closed-form discrete geometric average price (control variate reference)
"""

from path_pricing.pricers.analytic import discrete_geometric_average_price
from path_pricing.pricers.asian import ArithmeticAPOPathPricer, GeometricAPOPathPricer
from path_pricing.pricers.payoffs import OptionType, PlainVanillaPayoff

__all__ = [
    "ArithmeticAPOPathPricer",
    "GeometricAPOPathPricer",
    "OptionType",
    "PlainVanillaPayoff",
    "discrete_geometric_average_price",
]
