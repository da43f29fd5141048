"""
Timeline Aggregator Tests.

Covers:
- Bar geometry on the display horizon
- Urgency tiers and quality flags
- Ordering (default and priority)
- Home-level completeness, limiting factors and capital outlook
"""

from datetime import date

import pytest

from homerisk.engine.lifespan import compute_replacement_window
from homerisk.engine.timeline import build_timeline, urgency_tier
from homerisk.schemas.timeline import (
    CostRange,
    DataQuality,
    TimelineInput,
    UrgencyTier,
)
from tests.factories import REFERENCE_DATE, make_instance, make_window


def _entry(timeline, system_id):
    return next(e for e in timeline.entries if e.system_id == system_id)


class TestGeometry:
    """Year → percentage positions, clamped to [0, 100]."""

    def setup_method(self):
        self.now = REFERENCE_DATE

    def test_window_inside_horizon(self):
        timeline = build_timeline([TimelineInput(window=make_window())], 10, self.now)
        entry = timeline.entries[0]

        assert (timeline.start_year, timeline.end_year) == (2025, 2035)
        assert (entry.early_pct, entry.likely_pct, entry.late_pct) == (20.0, 50.0, 80.0)
        assert entry.bar_start_pct == 20.0
        assert entry.bar_width_pct == 60.0
        assert entry.is_window_visible
        assert not entry.beyond_horizon
        assert entry.years_to_likely == 5

    def test_likely_past_horizon(self):
        window = make_window(early_year=2030, likely_year=2036, late_year=2040)
        entry = build_timeline([TimelineInput(window=window)], 10, self.now).entries[0]
        assert entry.likely_pct == 100.0
        assert entry.late_pct == 100.0
        assert entry.bar_width_pct == 50.0
        assert entry.beyond_horizon
        assert entry.is_window_visible

    def test_window_entirely_past_horizon(self):
        window = make_window(early_year=2037, likely_year=2040, late_year=2045)
        entry = build_timeline([TimelineInput(window=window)], 10, self.now).entries[0]
        assert not entry.is_window_visible
        assert entry.early_pct == 100.0

    def test_minimum_bar_width(self):
        window = make_window(early_year=2026, likely_year=2026, late_year=2026)
        entry = build_timeline([TimelineInput(window=window)], 10, self.now).entries[0]
        assert entry.bar_width_pct == 5.0

    def test_horizon_clamped_to_one_year(self):
        timeline = build_timeline([TimelineInput(window=make_window())], 0, self.now)
        assert timeline.horizon_years == 1
        assert timeline.end_year == 2026
        entry = timeline.entries[0]
        assert 0.0 <= entry.early_pct <= 100.0

    def test_default_label(self):
        window = make_window(system_id="wh_1", system_type="water_heater")
        entry = build_timeline([TimelineInput(window=window)], 10, self.now).entries[0]
        assert entry.label == "Water Heater"

    def test_custom_label(self):
        item = TimelineInput(window=make_window(), label="Upstairs AC")
        assert build_timeline([item], 10, self.now).entries[0].label == "Upstairs AC"

    def test_empty_home(self, now):
        timeline = build_timeline([], 10, now)
        assert timeline.entries == []
        assert timeline.completeness_percent == 0
        assert timeline.capital_outlook is None

    def test_overdue_system_visible(self, now):
        """A window floored to today sits at the left edge and stays visible."""
        window = compute_replacement_window(make_instance(install_date=date(2000, 1, 1)), now)
        entry = build_timeline([TimelineInput(window=window)], 10, now).entries[0]
        assert (entry.early_year, entry.late_year) == (2025, 2025)
        assert entry.late_pct == 0.0
        assert entry.is_window_visible
        assert entry.tier == UrgencyTier.NEAR

    def test_bar_stays_inside_horizon(self):
        # 50-year horizon: 2074 sits at 98%, a 5% bar must start at 95%
        window = make_window(early_year=2074, likely_year=2074, late_year=2074)
        entry = build_timeline([TimelineInput(window=window)], 50, self.now).entries[0]
        assert entry.early_pct == 98.0
        assert entry.bar_width_pct == 5.0
        assert entry.bar_start_pct == 95.0
        assert entry.bar_start_pct + entry.bar_width_pct <= 100.0

    def test_now_is_required(self):
        with pytest.raises(TypeError):
            build_timeline([TimelineInput(window=make_window())], 10)  # type: ignore[call-arg]


class TestTiers:

    def test_boundaries(self):
        assert urgency_tier(-2) == UrgencyTier.NEAR
        assert urgency_tier(3) == UrgencyTier.NEAR
        assert urgency_tier(4) == UrgencyTier.MID
        assert urgency_tier(6) == UrgencyTier.MID
        assert urgency_tier(7) == UrgencyTier.FAR

    def test_entry_tier(self):
        near = make_window(system_id="a", early_year=2025, likely_year=2027, late_year=2029)
        far = make_window(system_id="b", early_year=2030, likely_year=2034, late_year=2038)
        timeline = build_timeline(
            [TimelineInput(window=near), TimelineInput(window=far)], 10, REFERENCE_DATE
        )
        assert _entry(timeline, "a").tier == UrgencyTier.NEAR
        assert _entry(timeline, "b").tier == UrgencyTier.FAR


class TestOrdering:

    def setup_method(self):
        self.items = [
            TimelineInput(window=make_window(system_id="c", early_year=2030, likely_year=2033, late_year=2036)),
            TimelineInput(window=make_window(system_id="a", early_year=2026, likely_year=2028, late_year=2031)),
            TimelineInput(window=make_window(system_id="b", early_year=2027, likely_year=2028, late_year=2030)),
        ]

    def test_default_order_by_dates(self):
        timeline = build_timeline(self.items, 10, REFERENCE_DATE)
        assert [e.system_id for e in timeline.entries] == ["a", "b", "c"]

    def test_order_invariant_to_input_order(self):
        forward = build_timeline(self.items, 10, REFERENCE_DATE)
        backward = build_timeline(list(reversed(self.items)), 10, REFERENCE_DATE)
        assert forward.model_dump_json() == backward.model_dump_json()

    def test_priority_order(self):
        timeline = build_timeline(self.items, 10, REFERENCE_DATE, priority=["c", "b"])
        assert [e.system_id for e in timeline.entries] == ["c", "b", "a"]

    def test_priority_does_not_move_bars(self):
        by_date = build_timeline(self.items, 10, REFERENCE_DATE)
        by_priority = build_timeline(self.items, 10, REFERENCE_DATE, priority=["c"])
        assert _entry(by_date, "c") == _entry(by_priority, "c")

    def test_lanes_without_ids_order_invariant(self):
        """Same-type lanes with no system id still sort the same way."""
        upstairs = TimelineInput(window=make_window(system_id=None), label="Upstairs")
        downstairs = TimelineInput(window=make_window(system_id=None), label="Downstairs")

        forward = build_timeline([upstairs, downstairs], 10, REFERENCE_DATE)
        backward = build_timeline([downstairs, upstairs], 10, REFERENCE_DATE)

        assert [e.label for e in forward.entries] == [e.label for e in backward.entries]
        assert forward.model_dump_json() == backward.model_dump_json()


class TestHomeSummary:
    """Completeness, limiting factors and capital outlook."""

    def test_completeness_and_limiting_factors(self):
        items = [
            TimelineInput(window=make_window(system_id="a", confidence=0.9)),
            TimelineInput(window=make_window(system_id="b", confidence=0.3)),
            TimelineInput(window=make_window(system_id="c", confidence=0.2)),
            TimelineInput(window=make_window(system_id="d", confidence=0.6, system_type="roof")),
        ]
        timeline = build_timeline(items, 10, REFERENCE_DATE)

        assert timeline.completeness_percent == 25
        # Two low-quality HVAC lanes collapse into one line
        assert timeline.limiting_factors == ["HVAC install date is estimated"]
        assert _entry(timeline, "d").data_quality == DataQuality.MEDIUM

    def test_capital_outlook_weighting(self):
        soon = make_window(system_id="a", early_year=2027, likely_year=2030, late_year=2033)
        later = make_window(system_id="b", early_year=2031, likely_year=2034, late_year=2037)
        items = [
            TimelineInput(window=soon, capital_cost=CostRange(low=8000, high=12000)),
            TimelineInput(window=later, capital_cost=CostRange(low=15000, high=25000)),
        ]
        outlook = build_timeline(items, 10, REFERENCE_DATE).capital_outlook
        by_horizon = {h.years_ahead: h for h in outlook.horizons}

        # 3 years: only the early edge of "a" falls inside
        assert by_horizon[3].low_estimate == pytest.approx(2400.0)
        assert by_horizon[3].high_estimate == pytest.approx(6000.0)
        # 5 years: "a" likely inside, "b" not started
        assert by_horizon[5].low_estimate == pytest.approx(8000.0)
        assert by_horizon[5].high_estimate == pytest.approx(12000.0)
        # 10 years: both likely inside
        assert by_horizon[10].low_estimate == pytest.approx(23000.0)
        assert by_horizon[10].high_estimate == pytest.approx(37000.0)
        assert all(h.methodology == "weighted" for h in outlook.horizons)

    def test_no_costs_no_outlook(self):
        timeline = build_timeline([TimelineInput(window=make_window())], 10, REFERENCE_DATE)
        assert timeline.capital_outlook is None
