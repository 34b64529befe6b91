"""
Tests for average-price path pricers - pricers/asian.py.

Covers the fixing-count rule (is S(0) a fixing?), past fixings, and the
degenerate-input contract.
"""

import pytest

from path_pricing.errors import ConstructionError, EvaluationError
from path_pricing.montecarlo.path import Path
from path_pricing.montecarlo.time_grid import TimeGrid
from path_pricing.pricers.asian import ArithmeticAPOPathPricer, GeometricAPOPathPricer
from path_pricing.pricers.payoffs import OptionType, PlainVanillaPayoff

EXAMPLE_VALUES = [100.0, 102.0, 98.0, 105.0, 110.0]


@pytest.fixture
def path_with_initial_fixing(fixing_grid) -> Path:
    """Example path whose grid counts S(0) as a fixing."""
    return Path(fixing_grid, EXAMPLE_VALUES)


@pytest.fixture
def path_without_initial_fixing() -> Path:
    """Same values on a grid whose first mandatory time is not 0."""
    return Path(TimeGrid.uniform(1.0, 4), EXAMPLE_VALUES)


# =============================================================================
# Arithmetic pricer
# =============================================================================

class TestArithmeticPricerExamples:
    """Worked examples with known answers."""

    @pytest.mark.unit
    def test_flat_path_at_the_money(self, fixing_grid) -> None:
        """Five points at 100, K=100, call, df=1 → 0."""
        path = Path(fixing_grid, [100.0] * 5)
        pricer = ArithmeticAPOPathPricer(OptionType.CALL, 100.0, discount=1.0)

        assert pricer.average(path) == pytest.approx(100.0)
        assert pricer(path) == 0.0

    @pytest.mark.unit
    def test_discounted_call(self, path_with_initial_fixing) -> None:
        """Sum 515 over 5 fixings → average 103, payoff 3, price 0.95 * 3."""
        pricer = ArithmeticAPOPathPricer(OptionType.CALL, 100.0, discount=0.95)

        assert pricer.average(path_with_initial_fixing) == pytest.approx(103.0)
        assert pricer(path_with_initial_fixing) == pytest.approx(2.85)

    @pytest.mark.unit
    def test_initial_value_skipped_without_zero_fixing(
        self, path_without_initial_fixing
    ) -> None:
        """Grid without a t=0 fixing: average over the last four values only."""
        pricer = ArithmeticAPOPathPricer(OptionType.CALL, 100.0)

        assert pricer.average(path_without_initial_fixing) == pytest.approx(415.0 / 4)
        assert pricer(path_without_initial_fixing) == pytest.approx(3.75)

    @pytest.mark.unit
    def test_past_fixings_enter_average(self, path_with_initial_fixing) -> None:
        pricer = ArithmeticAPOPathPricer(
            OptionType.CALL, 100.0, running_sum=200.0, past_fixings=2
        )

        assert pricer.average(path_with_initial_fixing) == pytest.approx(715.0 / 7)
        assert pricer(path_with_initial_fixing) == pytest.approx(715.0 / 7 - 100.0)

    @pytest.mark.unit
    def test_put(self, path_with_initial_fixing) -> None:
        pricer = ArithmeticAPOPathPricer(OptionType.PUT, 105.0, discount=0.5)
        assert pricer(path_with_initial_fixing) == pytest.approx(1.0)

    @pytest.mark.unit
    def test_out_of_the_money_is_zero(self, path_with_initial_fixing) -> None:
        pricer = ArithmeticAPOPathPricer(OptionType.CALL, 120.0)
        assert pricer(path_with_initial_fixing) == 0.0

    @pytest.mark.unit
    def test_zero_strike_allowed(self, path_with_initial_fixing) -> None:
        pricer = ArithmeticAPOPathPricer(OptionType.CALL, 0.0)
        assert pricer(path_with_initial_fixing) == pytest.approx(103.0)

    @pytest.mark.unit
    def test_default_discount_is_one(self) -> None:
        pricer = ArithmeticAPOPathPricer(OptionType.CALL, 100.0)
        assert pricer.discount == 1.0
        assert pricer.running_sum == 0.0
        assert pricer.past_fixings == 0

    @pytest.mark.unit
    def test_near_zero_fixing_counts_initial_value(self) -> None:
        """A fixing within tolerance of 0 makes S(0) a fixing."""
        grid = TimeGrid(
            [0.0, 0.25, 0.5, 0.75, 1.0], mandatory_times=[1e-12, 0.25, 0.5, 0.75, 1.0]
        )
        pricer = ArithmeticAPOPathPricer(OptionType.CALL, 100.0, discount=0.95)

        path = Path(grid, EXAMPLE_VALUES)

        assert pricer.average(path) == pytest.approx(103.0)
        assert pricer(path) == pytest.approx(2.85)


class TestArithmeticPricerErrors:
    """Degenerate inputs."""

    @pytest.mark.unit
    def test_negative_strike_raises(self) -> None:
        with pytest.raises(ConstructionError, match="strike less than zero not allowed"):
            ArithmeticAPOPathPricer(OptionType.CALL, -1.0)

    @pytest.mark.unit
    def test_negative_past_fixings_raises(self) -> None:
        with pytest.raises(ConstructionError, match="past_fixings must be >= 0"):
            ArithmeticAPOPathPricer(OptionType.CALL, 100.0, past_fixings=-1)

    @pytest.mark.unit
    def test_single_point_path_raises(self) -> None:
        path = Path(TimeGrid([0.0]), [100.0])
        pricer = ArithmeticAPOPathPricer(OptionType.CALL, 100.0)

        with pytest.raises(EvaluationError, match="the path cannot be empty"):
            pricer(path)

    @pytest.mark.unit
    def test_evaluation_error_is_value_error(self) -> None:
        path = Path(TimeGrid([0.0]), [100.0])
        with pytest.raises(ValueError):
            ArithmeticAPOPathPricer(OptionType.PUT, 100.0)(path)


# =============================================================================
# Geometric pricer
# =============================================================================

class TestGeometricPricer:
    """Tests for the geometric average-price pricer."""

    @pytest.mark.unit
    def test_flat_path(self, fixing_grid) -> None:
        pricer = GeometricAPOPathPricer(OptionType.CALL, 90.0)
        assert pricer(Path(fixing_grid, [100.0] * 5)) == pytest.approx(10.0)

    @pytest.mark.unit
    def test_two_point_average(self) -> None:
        grid = TimeGrid.from_mandatory_times([0.0, 1.0])
        pricer = GeometricAPOPathPricer(OptionType.CALL, 100.0, discount=0.9)

        path = Path(grid, [100.0, 121.0])

        assert pricer.average(path) == pytest.approx(110.0)
        assert pricer(path) == pytest.approx(9.0)

    @pytest.mark.unit
    def test_running_product(self) -> None:
        """sqrt(400 * 100) = 200 with one past fixing and S(0) skipped."""
        grid = TimeGrid.from_mandatory_times([1.0])
        pricer = GeometricAPOPathPricer(
            OptionType.PUT, 250.0, running_product=400.0, past_fixings=1
        )

        path = Path(grid, [50.0, 100.0])

        assert pricer.average(path) == pytest.approx(200.0)
        assert pricer(path) == pytest.approx(50.0)

    @pytest.mark.unit
    def test_accessors(self) -> None:
        pricer = GeometricAPOPathPricer(
            OptionType.PUT, 250.0, discount=0.9, running_product=400.0, past_fixings=1
        )

        assert pricer.running_product == 400.0
        assert pricer.past_fixings == 1
        assert pricer.discount == 0.9
        assert pricer.payoff == PlainVanillaPayoff(OptionType.PUT, 250.0)

    @pytest.mark.unit
    def test_accessor_defaults(self) -> None:
        pricer = GeometricAPOPathPricer(OptionType.CALL, 100.0)

        assert pricer.running_product == 1.0
        assert pricer.past_fixings == 0

    @pytest.mark.unit
    def test_geometric_below_arithmetic(self, path_with_initial_fixing) -> None:
        """[T1] AM-GM: geometric average never exceeds the arithmetic one."""
        geometric = GeometricAPOPathPricer(OptionType.CALL, 0.0)
        arithmetic = ArithmeticAPOPathPricer(OptionType.CALL, 0.0)

        assert geometric.average(path_with_initial_fixing) <= arithmetic.average(
            path_with_initial_fixing
        )

    @pytest.mark.unit
    def test_non_positive_fixing_raises(self, fixing_grid) -> None:
        pricer = GeometricAPOPathPricer(OptionType.CALL, 100.0)
        with pytest.raises(EvaluationError, match="strictly positive fixings"):
            pricer(Path(fixing_grid, [100.0, 0.0, 98.0, 105.0, 110.0]))

    @pytest.mark.unit
    def test_single_point_path_raises(self) -> None:
        pricer = GeometricAPOPathPricer(OptionType.CALL, 100.0)
        with pytest.raises(EvaluationError, match="the path cannot be empty"):
            pricer(Path(TimeGrid([0.0]), [100.0]))

    @pytest.mark.unit
    def test_negative_strike_raises(self) -> None:
        with pytest.raises(ConstructionError, match="strike less than zero not allowed"):
            GeometricAPOPathPricer(OptionType.CALL, -1.0)

    @pytest.mark.unit
    def test_non_positive_running_product_raises(self) -> None:
        with pytest.raises(ConstructionError, match="running_product must be > 0"):
            GeometricAPOPathPricer(OptionType.CALL, 100.0, running_product=0.0)


# =============================================================================
# Payoff
# =============================================================================

class TestPlainVanillaPayoff:
    """Tests for the call/put payoff."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "option_type, price, expected",
        [
            (OptionType.CALL, 110.0, 10.0),
            (OptionType.CALL, 90.0, 0.0),
            (OptionType.PUT, 90.0, 10.0),
            (OptionType.PUT, 110.0, 0.0),
        ],
    )
    def test_payoff(self, option_type: OptionType, price: float, expected: float) -> None:
        assert PlainVanillaPayoff(option_type, 100.0)(price) == pytest.approx(expected)

    @pytest.mark.unit
    def test_string_option_type(self) -> None:
        assert PlainVanillaPayoff("Put", 100.0).option_type == OptionType.PUT

    @pytest.mark.unit
    def test_invalid_string_raises(self) -> None:
        with pytest.raises(ConstructionError, match="option_type must be 'call' or 'put'"):
            PlainVanillaPayoff("straddle", 100.0)
