"""
HomeRisk data model.

- system: SystemInstance, SystemType
- window: ReplacementWindow and its provenance
- context: RiskContext
- intervention: costs, score, eligibility (live) and snapshot (stored)
- impact: EstimatedImpact
- timeline: HomeTimeline and its entries
"""

from homerisk.schemas.context import RiskContext
from homerisk.schemas.impact import EstimatedImpact, ImpactBasis
from homerisk.schemas.intervention import (
    InterventionCosts,
    InterventionEligibility,
    InterventionScoreResult,
    InterventionSnapshot,
    ProbabilitySource,
    ScoreBreakdown,
    UrgencyFactors,
    UrgencyPremium,
)
from homerisk.schemas.system import SystemInstance, SystemType, normalize_system_type
from homerisk.schemas.timeline import (
    CapitalHorizon,
    CapitalOutlook,
    CostRange,
    DataQuality,
    HomeTimeline,
    TimelineEntry,
    TimelineInput,
    UrgencyTier,
    WindowUncertainty,
)
from homerisk.schemas.window import ReplacementWindow, WindowMultipliers, WindowProvenance

__all__ = [
    "CapitalHorizon",
    "CapitalOutlook",
    "CostRange",
    "DataQuality",
    "EstimatedImpact",
    "HomeTimeline",
    "ImpactBasis",
    "InterventionCosts",
    "InterventionEligibility",
    "InterventionScoreResult",
    "InterventionSnapshot",
    "ProbabilitySource",
    "ReplacementWindow",
    "RiskContext",
    "ScoreBreakdown",
    "SystemInstance",
    "SystemType",
    "TimelineEntry",
    "TimelineInput",
    "UrgencyFactors",
    "UrgencyPremium",
    "UrgencyTier",
    "WindowMultipliers",
    "WindowProvenance",
    "WindowUncertainty",
    "normalize_system_type",
]
