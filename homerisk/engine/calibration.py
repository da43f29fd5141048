"""
Calibration Registry — versioned, immutable model constants.

Every number the models use lives in a CalibrationSet registered under a
version tag. Results carry that tag, so a stored result can always be
traced back to the exact constants that produced it.

Retuning a constant means registering a new version. Registered sets are
frozen and the registry itself is a read-only mapping.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

import structlog

from homerisk.exceptions import UnknownCalibrationVersionError
from homerisk.schemas.system import SystemType, normalize_system_type

logger = structlog.get_logger(__name__)

# Unknown system types borrow this type's constants (flagged, never silent)
FALLBACK_SYSTEM_TYPE: str = SystemType.HVAC.value

CURRENT_VERSION: str = "v1"


@dataclass(frozen=True)
class LifespanCalibration:
    """Baseline lifespan distribution for one system type."""
    median_lifespan_years: float
    sigma_years: float
    multiplier_min: float = 0.6
    multiplier_max: float = 1.3
    lifespan_floor_years: float = 3.0      # Absolute bound on p10/p90 lifespans
    lifespan_ceiling_years: float = 30.0


@dataclass(frozen=True)
class FailureCurve:
    """12-month failure probability curve for one system type."""
    decay_rate: float          # Higher = sharper cutoff near end of life
    floor: float               # Baseline probability, even for new systems
    ceiling: float             # Never 100% certain


@dataclass(frozen=True)
class WindowCoefficients:
    """Linear index → multiplier transforms and spread constants."""
    climate_penalty: float = 0.18          # M_climate = 1 - k * climate
    maintenance_base: float = 0.85         # M_maintenance = base + k * maintenance
    maintenance_gain: float = 0.25
    install_base: float = 0.97             # M_install = base (+ bonus if verified)
    install_verified_bonus: float = 0.06
    usage_penalty: float = 0.12
    environment_penalty: float = 0.10
    unknowns_base: float = 0.90            # M_unknowns = base + k * completeness
    unknowns_gain: float = 0.10
    sigma_widening: float = 0.9            # sigma_eff = sigma * (1 + k * (1 - completeness))
    z_p90: float = 1.2816                  # Normal z-score for the 10th/90th percentile
    # Confidence = base + verified + k_m * maintenance + k_c * completeness + usage
    confidence_base: float = 0.25
    confidence_verified: float = 0.30
    confidence_maintenance: float = 0.25
    confidence_completeness: float = 0.10
    confidence_usage_signal: float = 0.10


@dataclass(frozen=True)
class UrgencySchedule:
    """Additive dollar premiums for situational urgency."""
    version: str
    hurricane_season: float
    freeze_warning: float
    heat_wave: float
    peak_season: float
    hurricane_types: frozenset[str]
    freeze_types: frozenset[str]
    heat_wave_types: frozenset[str]


@dataclass(frozen=True)
class CalibrationSet:
    """All constants for one model version."""
    version: str
    lifespans: Mapping[str, LifespanCalibration]
    failure_curves: Mapping[str, FailureCurve]
    coefficients: WindowCoefficients
    urgency: UrgencySchedule
    # Remaining years at or beyond which only the floor probability applies
    long_horizon_years: float = 10.0
    past_eol_base_factor: float = 0.9
    past_eol_factor_per_year: float = 0.02

    def model_version(self, system_type: str) -> str:
        """Version tag attached to failure-window results."""
        return f"{system_type}_failure_{self.version}"

    def resolve_lifespan(self, system_type: str) -> tuple[LifespanCalibration, bool]:
        """Return (calibration, used_fallback) for a system type."""
        key = normalize_system_type(system_type)
        if key in self.lifespans:
            return self.lifespans[key], False
        logger.warning(
            "calibration_fallback",
            table="lifespan",
            system_type=system_type,
            fallback=FALLBACK_SYSTEM_TYPE,
            version=self.version,
        )
        return self.lifespans[FALLBACK_SYSTEM_TYPE], True

    def resolve_failure_curve(self, system_type: str) -> tuple[FailureCurve, bool]:
        """Return (curve, used_fallback) for a system type."""
        key = normalize_system_type(system_type)
        if key in self.failure_curves:
            return self.failure_curves[key], False
        logger.warning(
            "calibration_fallback",
            table="failure_curve",
            system_type=system_type,
            fallback=FALLBACK_SYSTEM_TYPE,
            version=self.version,
        )
        return self.failure_curves[FALLBACK_SYSTEM_TYPE], True


# ── v1 ────────────────────────────────────────────────────────────────────

_V1 = CalibrationSet(
    version="v1",
    lifespans=MappingProxyType({
        SystemType.HVAC.value: LifespanCalibration(
            median_lifespan_years=13.0,
            sigma_years=2.5,
        ),
        SystemType.ROOF.value: LifespanCalibration(
            median_lifespan_years=22.0,
            sigma_years=4.0,
            lifespan_floor_years=5.0,
            lifespan_ceiling_years=40.0,
        ),
        SystemType.WATER_HEATER.value: LifespanCalibration(
            median_lifespan_years=10.0,
            sigma_years=1.8,
            lifespan_ceiling_years=20.0,
        ),
    }),
    failure_curves=MappingProxyType({
        SystemType.HVAC.value: FailureCurve(decay_rate=0.35, floor=0.03, ceiling=0.85),
        SystemType.ROOF.value: FailureCurve(decay_rate=0.25, floor=0.02, ceiling=0.70),
        SystemType.WATER_HEATER.value: FailureCurve(decay_rate=0.40, floor=0.03, ceiling=0.90),
    }),
    coefficients=WindowCoefficients(),
    urgency=UrgencySchedule(
        version="urgency_v1",
        hurricane_season=2000.0,
        freeze_warning=1500.0,
        heat_wave=1200.0,
        peak_season=500.0,
        hurricane_types=frozenset({SystemType.ROOF.value}),
        freeze_types=frozenset({SystemType.WATER_HEATER.value, SystemType.HVAC.value}),
        heat_wave_types=frozenset({SystemType.HVAC.value}),
    ),
)

CALIBRATION_REGISTRY: Mapping[str, CalibrationSet] = MappingProxyType({
    _V1.version: _V1,
})


def get_calibration_set(version: str = CURRENT_VERSION) -> CalibrationSet:
    """Look up a registered calibration set by version tag."""
    try:
        return CALIBRATION_REGISTRY[version]
    except KeyError:
        raise UnknownCalibrationVersionError(version, sorted(CALIBRATION_REGISTRY)) from None
