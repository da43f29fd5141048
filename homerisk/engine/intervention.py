"""
Intervention Scorer.

FROZEN FORMULA (do not modify without a new version and review):

    InterventionScore = (FailureProbability12mo × EmergencyCost) + UrgencyPremium

Rules:
- Dollar-denominated only; no normalisation away from dollars
- No engagement multipliers, no user-anxiety signals
- Explainable: the base-risk and premium parts are returned with the total

Eligibility is a single inclusive comparison against a per-home
threshold. Cooldowns, snoozes and open/closed state belong to the
intervention lifecycle outside this engine.
"""

from datetime import datetime
from typing import Optional

import structlog

from homerisk.config import settings
from homerisk.engine.calibration import get_calibration_set
from homerisk.engine.failure_probability import resolve_failure_probability
from homerisk.engine.urgency import calculate_urgency_premium
from homerisk.schemas.context import RiskContext
from homerisk.schemas.intervention import (
    InterventionCosts,
    InterventionEligibility,
    InterventionScoreResult,
    InterventionSnapshot,
    ProbabilitySource,
    ScoreBreakdown,
)
from homerisk.schemas.system import normalize_system_type
from homerisk.schemas.window import ReplacementWindow

logger = structlog.get_logger(__name__)


def calculate_intervention_score(
    failure_probability_12mo: float,
    emergency_cost: float,
    urgency_premium: float,
) -> InterventionScoreResult:
    """FROZEN: (failure probability × emergency cost) + urgency premium."""
    probability = max(0.0, min(1.0, failure_probability_12mo))
    cost = max(0.0, emergency_cost)
    premium = max(0.0, urgency_premium)

    base_risk = probability * cost
    score = base_risk + premium

    return InterventionScoreResult(
        score=round(score, 2),
        breakdown=ScoreBreakdown(
            base_risk=round(base_risk, 2),
            urgency_premium=premium,
        ),
    )


def should_trigger_intervention(score: float, threshold: float) -> bool:
    """At or above the home's threshold → eligible for an intervention record."""
    return score >= threshold


def default_costs() -> InterventionCosts:
    """Cost estimates used when a system has none on record."""
    return InterventionCosts(
        proactive=settings.default_proactive_cost,
        emergency=settings.default_emergency_cost,
        potential_damage=settings.default_potential_damage,
    )


def _evaluate(
    failure_probability: float,
    source: ProbabilitySource,
    failure_model_version: str,
    costs: InterventionCosts,
    system_type: str,
    context: RiskContext,
    threshold: float,
    calibration_version: str,
    system_id: Optional[str] = None,
) -> InterventionEligibility:
    schedule = get_calibration_set(calibration_version).urgency
    urgency = calculate_urgency_premium(system_type, context, schedule)
    result = calculate_intervention_score(failure_probability, costs.emergency, urgency.premium)
    eligible = should_trigger_intervention(result.score, threshold)

    logger.info(
        "intervention_scored",
        system_id=system_id,
        system_type=system_type,
        score=result.score,
        threshold=threshold,
        eligible=eligible,
        probability_source=source.value,
        urgency_factors=urgency.factors.fired(),
    )

    return InterventionEligibility(
        eligible=eligible,
        score=result.score,
        threshold=threshold,
        breakdown=result.breakdown,
        urgency_factors=urgency.factors,
        failure_probability_12mo=max(0.0, min(1.0, failure_probability)),
        probability_source=source,
        system_type=system_type,
        system_id=system_id,
        costs=costs,
        context=context,
        urgency_schedule_version=urgency.schedule_version,
        failure_model_version=failure_model_version,
    )


def intervention_eligibility(
    risk_outlook_pct: float,
    costs: InterventionCosts,
    system_type: str,
    context: RiskContext,
    threshold: Optional[float] = None,
    system_id: Optional[str] = None,
    calibration_version: Optional[str] = None,
) -> InterventionEligibility:
    """
    Eligibility from an external 0-100 risk outlook.

    Use this only for systems without a replacement window; see
    eligibility_for_window for the canonical path.
    """
    version = calibration_version or settings.calibration_version
    key = normalize_system_type(system_type)
    probability, source = resolve_failure_probability(
        key, risk_outlook_pct=risk_outlook_pct, calibration_version=version
    )
    return _evaluate(
        probability,
        source,
        failure_model_version=f"risk_outlook_{version}",
        costs=costs,
        system_type=key,
        context=context,
        threshold=settings.default_intervention_threshold if threshold is None else threshold,
        calibration_version=version,
        system_id=system_id,
    )


def eligibility_for_window(
    window: ReplacementWindow,
    costs: InterventionCosts,
    context: RiskContext,
    threshold: Optional[float] = None,
    risk_outlook_pct: Optional[float] = None,
) -> InterventionEligibility:
    """
    Eligibility from a replacement window (canonical path).

    An outlook passed alongside is ignored and logged.
    """
    version = window.provenance.calibration_version
    probability, source = resolve_failure_probability(
        window.system_type,
        window=window,
        risk_outlook_pct=risk_outlook_pct,
        calibration_version=version,
    )
    return _evaluate(
        probability,
        source,
        failure_model_version=window.model_version,
        costs=costs,
        system_type=window.system_type,
        context=context,
        threshold=settings.default_intervention_threshold if threshold is None else threshold,
        calibration_version=version,
        system_id=window.system_id,
    )


def capture_snapshot(
    eligibility: InterventionEligibility,
    captured_at: datetime,
) -> InterventionSnapshot:
    """Freeze a live result for storage alongside a new intervention."""
    snapshot = InterventionSnapshot.capture(eligibility, captured_at=captured_at)
    logger.info(
        "intervention_snapshot_captured",
        snapshot_id=snapshot.snapshot_id,
        system_id=eligibility.system_id,
        score=eligibility.score,
        content_hash=snapshot.content_hash[:16],
    )
    return snapshot
