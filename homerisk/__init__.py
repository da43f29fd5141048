"""
HomeRisk — Home System Risk & Intervention Scoring Engine.

Architecture:
    homerisk/
    ├── engine/          # Pure scoring components (lifespan, probability, urgency, ...)
    ├── schemas/         # Pydantic input/output models
    ├── config.py        # pydantic-settings defaults
    ├── exceptions.py    # Error codes + domain exceptions
    └── logging_config.py

Module Boundaries:
    - The engine owns no state and performs no I/O
    - Record storage, risk-context ingestion and rendering live outside it
    - Every score is explainable: breakdowns and provenance travel with it
    - The intervention formula is frozen; changes need a new version

Data Flow:
    SystemInstance → Replacement Window → Failure Probability
    → Urgency Premium → Intervention Score → Snapshot
    Replacement Windows → Home Timeline

Version: 1.0.0
"""

from homerisk.engine.failure_probability import (
    failure_probability_12mo,
    resolve_failure_probability,
    risk_outlook_to_probability,
)
from homerisk.engine.impact import estimated_impact, format_estimated_impact
from homerisk.engine.intervention import (
    calculate_intervention_score,
    capture_snapshot,
    eligibility_for_window,
    intervention_eligibility,
    should_trigger_intervention,
)
from homerisk.engine.lifespan import compute_replacement_window
from homerisk.engine.timeline import build_timeline
from homerisk.engine.urgency import calculate_urgency_premium, select_risk_context

__version__ = "1.0.0"

__all__ = [
    "build_timeline",
    "calculate_intervention_score",
    "calculate_urgency_premium",
    "capture_snapshot",
    "compute_replacement_window",
    "eligibility_for_window",
    "estimated_impact",
    "failure_probability_12mo",
    "format_estimated_impact",
    "intervention_eligibility",
    "resolve_failure_probability",
    "risk_outlook_to_probability",
    "select_risk_context",
    "should_trigger_intervention",
]
