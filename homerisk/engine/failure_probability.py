"""
Failure Probability Converter.

Converts remaining lifespan into a probability of failure within the next
12 months, so the intervention score works in probabilities (not years).

Model: exponential decay calibrated per system type
    P = ceiling × e^(−decay × remaining_years), clamped to [floor, ceiling]
- Past end of life: ceiling × factor, factor rising from 0.9 toward 1.0
- Far from end of life (>= 10 years): floor only

A second entry point maps an external 0-100 risk outlook to [0, 1].
Both paths produce a probability, never a percentage.
"""

import math
from datetime import date, datetime
from typing import Optional, Union

import structlog

from homerisk.config import settings
from homerisk.engine.calibration import get_calibration_set
from homerisk.exceptions import MissingFailureInputError
from homerisk.schemas.intervention import ProbabilitySource
from homerisk.schemas.window import ReplacementWindow

logger = structlog.get_logger(__name__)

# Probability → display tier
TIER_MODERATE: float = 0.10
TIER_HIGH: float = 0.30
TIER_CRITICAL: float = 0.60


def failure_probability_12mo(
    remaining_years: float,
    system_type: str,
    calibration_version: Optional[str] = None,
) -> float:
    """
    12-month failure probability from years remaining to the p50 date.

    Args:
        remaining_years: Years until likely replacement (negative = past it)
        system_type: Selects the calibration curve (unknown → HVAC, logged)
    """
    calibration = get_calibration_set(calibration_version or settings.calibration_version)
    curve, _ = calibration.resolve_failure_curve(system_type)

    if remaining_years <= 0:
        past_eol_factor = min(
            1.0,
            calibration.past_eol_base_factor
            + abs(remaining_years) * calibration.past_eol_factor_per_year,
        )
        return curve.ceiling * past_eol_factor

    if remaining_years >= calibration.long_horizon_years:
        return curve.floor

    raw = curve.ceiling * math.exp(-curve.decay_rate * remaining_years)
    return max(curve.floor, min(curve.ceiling, raw))


def risk_outlook_to_probability(risk_outlook_pct: float) -> float:
    """0-100 risk outlook → probability in [0, 1]."""
    return max(0.0, min(100.0, risk_outlook_pct)) / 100.0


def resolve_failure_probability(
    system_type: str,
    window: Optional[ReplacementWindow] = None,
    risk_outlook_pct: Optional[float] = None,
    calibration_version: Optional[str] = None,
) -> tuple[float, ProbabilitySource]:
    """
    Pick the single canonical probability for a system.

    The window (years-remaining) path always wins when a window exists;
    the external outlook is only a stand-in for systems without one.
    """
    if window is not None:
        if risk_outlook_pct is not None:
            logger.info(
                "risk_outlook_ignored",
                system_id=window.system_id,
                system_type=system_type,
                risk_outlook_pct=risk_outlook_pct,
                reason="replacement window available",
            )
        probability = failure_probability_12mo(
            window.signed_years_remaining,
            system_type,
            calibration_version or window.provenance.calibration_version,
        )
        return probability, ProbabilitySource.YEARS_REMAINING

    if risk_outlook_pct is not None:
        return risk_outlook_to_probability(risk_outlook_pct), ProbabilitySource.RISK_OUTLOOK

    raise MissingFailureInputError(system_type)


def failure_probability_tier(probability: float) -> str:
    """'low' | 'moderate' | 'high' | 'critical' for display."""
    if probability < TIER_MODERATE:
        return "low"
    if probability < TIER_HIGH:
        return "moderate"
    if probability < TIER_CRITICAL:
        return "high"
    return "critical"


def remaining_years_until(
    likely_year: Optional[int],
    current: Union[int, date, datetime],
) -> Optional[int]:
    """Whole years from the current year to a p50 year (negative if past)."""
    if not likely_year:
        return None
    current_year = current if isinstance(current, int) else current.year
    return likely_year - current_year
