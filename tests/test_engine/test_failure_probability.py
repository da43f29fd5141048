"""
Failure Probability Converter Tests.
"""

import math
from datetime import date

import pytest

from homerisk.engine.failure_probability import (
    failure_probability_12mo,
    failure_probability_tier,
    remaining_years_until,
    resolve_failure_probability,
    risk_outlook_to_probability,
)
from homerisk.engine.lifespan import compute_replacement_window
from homerisk.exceptions import ErrorCode, MissingFailureInputError
from homerisk.schemas.intervention import ProbabilitySource
from tests.factories import REFERENCE_DATE, make_instance


class TestYearsRemainingCurve:
    """Exponential decay with floor, ceiling and past-end-of-life ramp."""

    def test_at_end_of_life(self):
        assert failure_probability_12mo(0, "hvac") == pytest.approx(0.85 * 0.9)

    def test_mid_life(self):
        assert failure_probability_12mo(5, "hvac") == pytest.approx(0.85 * math.exp(-0.35 * 5))

    def test_long_horizon_floor(self):
        assert failure_probability_12mo(10, "hvac") == 0.03
        assert failure_probability_12mo(25, "hvac") == 0.03

    def test_near_horizon_clamped_to_floor(self):
        # 0.85 × e^(−3.465) ≈ 0.027, below the 0.03 floor
        assert failure_probability_12mo(9.9, "hvac") == 0.03

    def test_past_end_of_life_rises(self):
        at_eol = failure_probability_12mo(0, "hvac")
        past = failure_probability_12mo(-3, "hvac")
        assert past > at_eol
        assert past == pytest.approx(0.85 * 0.96)

    def test_past_end_of_life_capped_at_ceiling(self):
        assert failure_probability_12mo(-5, "hvac") == pytest.approx(0.85)
        assert failure_probability_12mo(-40, "hvac") == pytest.approx(0.85)

    def test_spot_points_non_increasing(self):
        p0 = failure_probability_12mo(0, "hvac")
        p5 = failure_probability_12mo(5, "hvac")
        p10 = failure_probability_12mo(10, "hvac")
        assert p0 >= p5 >= p10

    def test_per_type_curves(self):
        assert failure_probability_12mo(0, "roof") == pytest.approx(0.70 * 0.9)
        assert failure_probability_12mo(0, "water_heater") == pytest.approx(0.90 * 0.9)
        assert failure_probability_12mo(15, "roof") == 0.02

    def test_unknown_type_uses_hvac_curve(self):
        assert failure_probability_12mo(5, "pool") == failure_probability_12mo(5, "hvac")


class TestRiskOutlook:

    def test_percentage_to_probability(self):
        assert risk_outlook_to_probability(0) == 0.0
        assert risk_outlook_to_probability(42) == pytest.approx(0.42)
        assert risk_outlook_to_probability(100) == 1.0

    def test_out_of_range_clamped(self):
        assert risk_outlook_to_probability(150) == 1.0
        assert risk_outlook_to_probability(-10) == 0.0


class TestResolve:
    """The window path is canonical; the outlook only stands in."""

    def setup_method(self):
        self.window = compute_replacement_window(
            make_instance(install_date=date(2018, 1, 1)), REFERENCE_DATE
        )

    def test_window_path(self):
        probability, source = resolve_failure_probability("hvac", window=self.window)
        assert source == ProbabilitySource.YEARS_REMAINING
        assert probability == failure_probability_12mo(self.window.signed_years_remaining, "hvac")

    def test_window_wins_over_outlook(self):
        probability, source = resolve_failure_probability(
            "hvac", window=self.window, risk_outlook_pct=99
        )
        assert source == ProbabilitySource.YEARS_REMAINING
        assert probability != 0.99

    def test_outlook_path(self):
        probability, source = resolve_failure_probability("hvac", risk_outlook_pct=30)
        assert source == ProbabilitySource.RISK_OUTLOOK
        assert probability == pytest.approx(0.30)

    def test_neither_raises(self):
        with pytest.raises(MissingFailureInputError) as exc_info:
            resolve_failure_probability("roof")
        assert exc_info.value.code == ErrorCode.MISSING_FAILURE_INPUT

    def test_past_window_uses_signed_years(self):
        old = compute_replacement_window(make_instance(install_date=date(2005, 1, 1)), REFERENCE_DATE)
        probability, _ = resolve_failure_probability("hvac", window=old)
        assert probability > failure_probability_12mo(0, "hvac")


class TestHelpers:

    def test_tiers(self):
        assert failure_probability_tier(0.05) == "low"
        assert failure_probability_tier(0.10) == "moderate"
        assert failure_probability_tier(0.45) == "high"
        assert failure_probability_tier(0.80) == "critical"

    def test_remaining_years_until(self):
        assert remaining_years_until(2030, 2025) == 5
        assert remaining_years_until(2020, date(2025, 6, 1)) == -5
        assert remaining_years_until(None, 2025) is None
