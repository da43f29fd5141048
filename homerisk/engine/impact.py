"""
Estimated-Impact Heuristic.

Rough forecast of what completing a maintenance action is worth, used
until real outcome history exists.

Strategy:
1. Historical impacts for the same type + category (future estimator)
2. Per-type calibrated defaults
3. Generic estimate for unrecognised types (flagged)

Any estimator returns the same EstimatedImpact contract, so the static
table can be swapped out without touching callers.
"""

from types import MappingProxyType
from typing import Mapping, Optional, Protocol

import structlog

from homerisk.schemas.impact import EstimatedImpact, ImpactBasis
from homerisk.schemas.system import normalize_system_type

logger = structlog.get_logger(__name__)

# (score points, months added, failure probability reduction)
SYSTEM_DEFAULTS: Mapping[str, tuple[float, float, float]] = MappingProxyType({
    "hvac": (5, 6, 0.05),
    "roof": (3, 12, 0.03),
    "water_heater": (4, 8, 0.04),
    "plumbing": (3, 6, 0.03),
    "electrical_panel": (4, 12, 0.04),
    "electrical": (4, 12, 0.04),
    "pool": (3, 6, 0.03),
    "foundation": (2, 24, 0.02),
    "windows": (2, 12, 0.02),
    "doors": (2, 12, 0.02),
    "siding": (2, 18, 0.02),
    "appliances": (3, 6, 0.03),
    "garage_door": (2, 6, 0.02),
    "irrigation": (2, 6, 0.02),
    "septic": (3, 12, 0.03),
    "well": (3, 12, 0.03),
})

GENERIC_ESTIMATE: tuple[float, float, float] = (3, 6, 0.03)


class ImpactEstimator(Protocol):
    """Anything that can forecast the value of a maintenance action."""

    def estimate(
        self, system_type: str, category: Optional[str] = None
    ) -> Optional[EstimatedImpact]:
        ...


class StaticImpactEstimator:
    """Lookup-table estimator with a generic fallback."""

    def __init__(
        self,
        defaults: Mapping[str, tuple[float, float, float]] = SYSTEM_DEFAULTS,
        generic: tuple[float, float, float] = GENERIC_ESTIMATE,
    ):
        self.defaults = defaults
        self.generic = generic

    def estimate(
        self, system_type: str, category: Optional[str] = None
    ) -> Optional[EstimatedImpact]:
        if not system_type or not system_type.strip():
            return None

        key = normalize_system_type(system_type)
        values = self.defaults.get(key)
        basis = ImpactBasis.SYSTEM_DEFAULT

        if values is None:
            logger.warning(
                "impact_generic_fallback",
                system_type=system_type,
                category=category,
            )
            values = self.generic
            basis = ImpactBasis.GENERIC_FALLBACK

        score_change, months_added, prob_reduction = values
        return EstimatedImpact(
            score_change=score_change,
            months_added=months_added,
            failure_prob_reduction=prob_reduction,
            basis=basis,
        )


_default_estimator = StaticImpactEstimator()


def estimated_impact(
    system_type: str,
    category: Optional[str] = None,
    estimator: Optional[ImpactEstimator] = None,
) -> Optional[EstimatedImpact]:
    """Estimated impact for a system type; None when no type is given."""
    return (estimator or _default_estimator).estimate(system_type, category)


def format_estimated_impact(estimate: Optional[EstimatedImpact]) -> Optional[str]:
    """Compact display form, e.g. 'Est: ~5pts, ~6mo'."""
    if estimate is None:
        return None

    parts: list[str] = []
    if estimate.score_change:
        parts.append(f"~{estimate.score_change:g}pts")
    if estimate.months_added:
        parts.append(f"~{estimate.months_added:g}mo")

    return f"Est: {', '.join(parts)}" if parts else None
