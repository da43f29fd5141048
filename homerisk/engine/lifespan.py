"""
Lifespan / Failure-Window Model.

Converts a system's install date and evidence indices into a
probabilistic replacement window (p10 / p50 / p90 dates).

Implements:
- Linear index → multiplier transforms, multiplied and clamped to a band
- Effective median lifespan = baseline × total multiplier
- Spread that widens as evidence gets thinner:
    sigma_eff = sigma_base × (1 + k × (1 − completeness))
- Normal-quantile p10/p90 lifespans, clamped to absolute bounds
- Confidence from evidence quality, NEVER from system condition

Deterministic: same instance + same now + same calibration version
gives the same window.
"""

from datetime import date, datetime, timedelta
from typing import Optional, Union

import structlog

from homerisk.config import settings
from homerisk.engine.calibration import (
    FALLBACK_SYSTEM_TYPE,
    CalibrationSet,
    get_calibration_set,
)
from homerisk.exceptions import MissingInstallDateError
from homerisk.schemas.system import SystemInstance
from homerisk.schemas.timeline import DataQuality, WindowUncertainty
from homerisk.schemas.window import (
    ReplacementWindow,
    WindowMultipliers,
    WindowProvenance,
)

logger = structlog.get_logger(__name__)

DAYS_PER_YEAR: float = 365.25

# Confidence → data quality label
CONFIDENCE_HIGH: float = 0.80
CONFIDENCE_LOW: float = 0.50

# p10-p90 spread (years) → window uncertainty label
SPREAD_NARROW_YEARS: float = 4.0
SPREAD_MEDIUM_YEARS: float = 8.0


def clamp(value: float, lower: float, upper: float) -> float:
    return min(max(value, lower), upper)


def normalize_index(value: Optional[float]) -> float:
    """Absent → 0 ("no evidence"), otherwise clamped to [0, 1]."""
    return clamp(value if value is not None else 0.0, 0.0, 1.0)


def _as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


def years_between(start: date, end: date) -> float:
    return (end - start).days / DAYS_PER_YEAR


def add_years(start: date, years: float) -> date:
    return start + timedelta(days=round(years * DAYS_PER_YEAR))


def compute_replacement_window(
    instance: SystemInstance,
    now: Union[date, datetime],
    calibration_version: Optional[str] = None,
) -> ReplacementWindow:
    """
    Compute the replacement window for one system instance.

    Args:
        instance: The system record (install date is required)
        now: Reference date; results never fall before it
        calibration_version: Registered calibration set (defaults to settings)

    Raises:
        MissingInstallDateError: install date unknown. The engine never
            fabricates one; resolving unknown installs is the caller's job.
    """
    if instance.install_date is None:
        raise MissingInstallDateError(instance.system_id, instance.system_type)

    calibration = get_calibration_set(calibration_version or settings.calibration_version)
    today = _as_date(now)
    return _score_window(instance, instance.install_date, today, calibration)


def _score_window(
    instance: SystemInstance,
    install_date: date,
    today: date,
    calibration: CalibrationSet,
) -> ReplacementWindow:
    lifespan, used_fallback = calibration.resolve_lifespan(instance.system_type)
    k = calibration.coefficients

    # ── 1. Normalise evidence ────────────────────────────────────────
    climate = normalize_index(instance.climate_stress_index)
    maintenance = normalize_index(instance.maintenance_score)
    completeness = normalize_index(instance.feature_completeness)
    usage = normalize_index(instance.usage_index)
    environment = normalize_index(instance.environment_index)

    # ── 2. Multipliers ───────────────────────────────────────────────
    m_climate = 1 - k.climate_penalty * climate
    m_maintenance = k.maintenance_base + k.maintenance_gain * maintenance
    m_install = k.install_base + (k.install_verified_bonus if instance.install_verified else 0.0)
    m_usage = 1 - k.usage_penalty * usage
    m_environment = 1 - k.environment_penalty * environment
    m_unknowns = k.unknowns_base + k.unknowns_gain * completeness

    m_raw = m_climate * m_maintenance * m_install * m_usage * m_environment * m_unknowns
    m_total = clamp(m_raw, lifespan.multiplier_min, lifespan.multiplier_max)

    # ── 3. Lifespans ─────────────────────────────────────────────────
    l50 = lifespan.median_lifespan_years * m_total
    age = max(years_between(install_date, today), 0.0)
    years_remaining = max(l50 - age, 0.0)

    sigma = lifespan.sigma_years * (1 + k.sigma_widening * (1 - completeness))
    l10 = clamp(l50 - k.z_p90 * sigma, lifespan.lifespan_floor_years, lifespan.lifespan_ceiling_years)
    l90 = clamp(l50 + k.z_p90 * sigma, lifespan.lifespan_floor_years, lifespan.lifespan_ceiling_years)
    # Absolute bounds must never invert the percentiles
    l10 = min(l10, l50)
    l90 = max(l90, l50)

    # ── 4. Dates (a system past its window is due now, not in the past) ──
    p10_date = max(add_years(install_date, l10), today)
    p50_date = max(add_years(install_date, l50), today)
    p90_date = max(add_years(install_date, l90), today)

    # ── 5. Confidence (evidence quality only) ────────────────────────
    confidence = clamp(
        k.confidence_base
        + (k.confidence_verified if instance.install_verified else 0.0)
        + k.confidence_maintenance * maintenance
        + k.confidence_completeness * completeness
        + (k.confidence_usage_signal if instance.has_usage_signal else 0.0),
        0.0,
        1.0,
    )

    # Tagged with the type whose constants actually produced the window
    model_version = calibration.model_version(
        FALLBACK_SYSTEM_TYPE if used_fallback else instance.system_type
    )
    provenance = WindowProvenance(
        model_version=model_version,
        calibration_version=calibration.version,
        calibration_fallback=used_fallback,
        multipliers=WindowMultipliers(
            climate=m_climate,
            maintenance=m_maintenance,
            install=m_install,
            usage=m_usage,
            environment=m_environment,
            unknowns=m_unknowns,
            total=m_total,
            total_unclamped=m_raw,
        ),
        l50_base=lifespan.median_lifespan_years,
        sigma_base=lifespan.sigma_years,
        l50_effective=l50,
        sigma_effective=sigma,
        l10_years=l10,
        l90_years=l90,
        age_years=age,
        normalized_indices={
            "climate_stress": climate,
            "maintenance": maintenance,
            "feature_completeness": completeness,
            "usage": usage,
            "environment": environment,
        },
        inputs=instance.model_copy(deep=True),
    )

    logger.debug(
        "replacement_window_computed",
        system_id=instance.system_id,
        system_type=instance.system_type,
        model_version=model_version,
        multiplier_total=round(m_total, 4),
        years_remaining_p50=round(years_remaining, 1),
        calibration_fallback=used_fallback,
    )

    return ReplacementWindow(
        system_id=instance.system_id,
        system_type=instance.system_type,
        p10_date=p10_date,
        p50_date=p50_date,
        p90_date=p90_date,
        years_remaining_p50=round(years_remaining, 1),
        confidence=round(confidence, 2),
        model_version=model_version,
        computed_at=today,
        provenance=provenance,
    )


def confidence_level(confidence: float) -> DataQuality:
    """Map a confidence score onto the high / medium / low quality label."""
    if confidence >= CONFIDENCE_HIGH:
        return DataQuality.HIGH
    if confidence >= CONFIDENCE_LOW:
        return DataQuality.MEDIUM
    return DataQuality.LOW


def window_uncertainty(window: ReplacementWindow) -> WindowUncertainty:
    """How wide the p10-p90 lifespan spread is, independent of data quality."""
    spread = window.provenance.l90_years - window.provenance.l10_years
    if spread <= SPREAD_NARROW_YEARS:
        return WindowUncertainty.NARROW
    if spread <= SPREAD_MEDIUM_YEARS:
        return WindowUncertainty.MEDIUM
    return WindowUncertainty.WIDE
