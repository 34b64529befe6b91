"""
Exception hierarchy for path simulation and path pricing.

Construction-time contract violations and per-call evaluation failures are
kept apart so callers can tell a misconfigured pipeline from a bad sample.
None of these are retried; every operation is a deterministic computation
over caller-supplied inputs.
"""


class PathPricingError(Exception):
    """Base class for all path-pricing errors."""

    pass


class ConstructionError(PathPricingError, ValueError):
    """Raised when a generator, buffer, grid or pricer is built with invalid inputs."""

    pass


class EvaluationError(PathPricingError, ValueError):
    """Raised when a pricer is handed a degenerate or empty path."""

    pass


class SamplingError(PathPricingError, RuntimeError):
    """Raised when a draw is requested in a state that cannot produce one."""

    pass
