"""
Timeline Aggregator.

Assembles per-system replacement windows into one ordered, render-ready
home timeline. This is a coordinate transform over windows that were
already computed; no risk is recalculated here.

Implements:
- Year → percentage positions on the display horizon, clamped to [0, 100]
- Urgency tier from years to likely replacement (near / mid / far)
- Propagated data quality and window uncertainty, kept separate
- Deterministic ordering (by dates, or by an external priority list)
- Home-level completeness, limiting factors and weighted capital outlook
"""

from datetime import date, datetime
from typing import Iterable, Optional, Sequence, Union

import structlog

from homerisk.config import settings
from homerisk.engine.lifespan import confidence_level, window_uncertainty
from homerisk.schemas.timeline import (
    CapitalHorizon,
    CapitalOutlook,
    CostRange,
    DataQuality,
    HomeTimeline,
    TimelineEntry,
    TimelineInput,
    UrgencyTier,
)

logger = structlog.get_logger(__name__)

CAPITAL_HORIZONS: tuple[int, ...] = (3, 5, 10)

# Weights for a window that only starts inside a capital horizon
EARLY_LOW_WEIGHT: float = 0.3
EARLY_HIGH_WEIGHT: float = 0.5

SYSTEM_LABELS: dict[str, str] = {
    "hvac": "HVAC",
    "roof": "Roof",
    "water_heater": "Water Heater",
}


def default_label(system_type: str) -> str:
    return SYSTEM_LABELS.get(system_type, system_type.replace("_", " ").title())


def _position_pct(year: int, start_year: int, horizon_years: int) -> float:
    return (year - start_year) / horizon_years * 100


def _clamp_pct(value: float) -> float:
    return max(0.0, min(100.0, value))


def urgency_tier(
    years_to_likely: int,
    near_years: Optional[int] = None,
    mid_years: Optional[int] = None,
) -> UrgencyTier:
    """Bucket years-to-likely-replacement into near / mid / far."""
    near = settings.timeline_near_years if near_years is None else near_years
    mid = settings.timeline_mid_years if mid_years is None else mid_years
    if years_to_likely <= near:
        return UrgencyTier.NEAR
    if years_to_likely <= mid:
        return UrgencyTier.MID
    return UrgencyTier.FAR


def build_entry(
    item: TimelineInput,
    start_year: int,
    horizon_years: int,
    min_bar_width_pct: Optional[float] = None,
) -> TimelineEntry:
    """Bar geometry, tier and quality flags for one system."""
    min_width = settings.timeline_min_bar_width_pct if min_bar_width_pct is None else min_bar_width_pct
    window = item.window

    early_year = window.p10_date.year
    likely_year = window.p50_date.year
    late_year = window.p90_date.year

    raw_early = _position_pct(early_year, start_year, horizon_years)
    raw_likely = _position_pct(likely_year, start_year, horizon_years)
    raw_late = _position_pct(late_year, start_year, horizon_years)

    early_pct = _clamp_pct(raw_early)
    likely_pct = _clamp_pct(raw_likely)
    late_pct = _clamp_pct(raw_late)

    years_to_likely = likely_year - start_year

    # Minimum width keeps short windows visible; pull the start back so the
    # bar never runs past the end of the horizon
    bar_width = min(100.0, max(min_width, late_pct - early_pct))
    bar_start = min(early_pct, 100.0 - bar_width)

    return TimelineEntry(
        system_id=window.system_id or window.system_type,
        system_type=window.system_type,
        label=item.label or default_label(window.system_type),
        early_year=early_year,
        likely_year=likely_year,
        late_year=late_year,
        years_to_likely=years_to_likely,
        early_pct=round(early_pct, 2),
        likely_pct=round(likely_pct, 2),
        late_pct=round(late_pct, 2),
        bar_start_pct=round(bar_start, 2),
        bar_width_pct=round(bar_width, 2),
        is_window_visible=raw_early < 100 and raw_late >= 0,
        beyond_horizon=raw_likely > 100,
        tier=urgency_tier(years_to_likely),
        data_quality=confidence_level(window.confidence),
        window_uncertainty=window_uncertainty(window),
        confidence=window.confidence,
        model_version=window.model_version,
        capital_cost=item.capital_cost,
    )


def order_entries(
    entries: Iterable[TimelineEntry],
    priority: Optional[Sequence[str]] = None,
) -> list[TimelineEntry]:
    """
    Default order is (likely, early, late, system id), ascending, with the
    serialised entry as the final tie-break so the order is total.

    With a priority list, listed systems come first in list order and the
    rest follow in the default order.
    """
    ordered = sorted(
        entries,
        key=lambda e: (e.likely_year, e.early_year, e.late_year, e.system_id, e.model_dump_json()),
    )
    if not priority:
        return ordered

    rank = {system_id: i for i, system_id in enumerate(priority)}
    return sorted(ordered, key=lambda e: rank.get(e.system_id, len(rank)))


def completeness_percent(entries: Sequence[TimelineEntry]) -> int:
    if not entries:
        return 0
    high = sum(1 for e in entries if e.data_quality == DataQuality.HIGH)
    return round(high / len(entries) * 100)


def limiting_factors(entries: Sequence[TimelineEntry]) -> list[str]:
    """One line per low-quality system, de-duplicated, in display order."""
    factors: list[str] = []
    for entry in entries:
        if entry.data_quality != DataQuality.LOW:
            continue
        line = f"{entry.label} install date is estimated"
        if line not in factors:
            factors.append(line)
    return factors


def capital_outlook(
    entries: Sequence[TimelineEntry],
    start_year: int,
    horizons: Sequence[int] = CAPITAL_HORIZONS,
) -> Optional[CapitalOutlook]:
    """
    Weighted replacement spend per horizon.

    Likely year inside the horizon → full range; only the early year
    inside → partial weight; window starts after it → nothing.
    """
    costed = [(e, e.capital_cost) for e in entries if e.capital_cost is not None]
    if not costed:
        return None

    result: list[CapitalHorizon] = []
    for years_ahead in horizons:
        cutoff = start_year + years_ahead
        low = high = 0.0
        for entry, cost in costed:
            low_add, high_add = _weighted_cost(entry, cost, cutoff)
            low += low_add
            high += high_add
        result.append(CapitalHorizon(
            years_ahead=years_ahead,
            low_estimate=round(low, 2),
            high_estimate=round(high, 2),
        ))

    return CapitalOutlook(horizons=result)


def _weighted_cost(entry: TimelineEntry, cost: CostRange, cutoff: int) -> tuple[float, float]:
    if entry.early_year > cutoff:
        return 0.0, 0.0
    if entry.likely_year <= cutoff:
        return cost.low, cost.high
    return cost.low * EARLY_LOW_WEIGHT, cost.high * EARLY_HIGH_WEIGHT


def build_timeline(
    entries: Iterable[TimelineInput],
    horizon_years: Optional[int],
    now: Union[date, datetime],
    priority: Optional[Sequence[str]] = None,
) -> HomeTimeline:
    """
    Build the home timeline from already-computed replacement windows.

    Args:
        entries: One TimelineInput per system
        horizon_years: Display horizon (None → settings; clamped to at least 1 year)
        now: Reference date; the timeline starts in its year
        priority: Optional system-id order overriding date ordering
    """
    horizon = max(1, settings.timeline_horizon_years if horizon_years is None else horizon_years)
    start_year = now.year

    built = [build_entry(item, start_year, horizon) for item in entries]
    ordered = order_entries(built, priority)

    timeline = HomeTimeline(
        horizon_years=horizon,
        start_year=start_year,
        end_year=start_year + horizon,
        entries=ordered,
        completeness_percent=completeness_percent(ordered),
        limiting_factors=limiting_factors(ordered),
        capital_outlook=capital_outlook(ordered, start_year),
    )

    logger.debug(
        "timeline_built",
        systems=len(ordered),
        horizon_years=horizon,
        completeness_percent=timeline.completeness_percent,
        beyond_horizon=sum(1 for e in ordered if e.beyond_horizon),
    )
    return timeline
