"""
Estimated Impact Schemas.

Output contract of the impact heuristic: three optional deltas. Any
estimator (static table today, historical outcomes later) returns this.
"""

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel


class ImpactBasis(StrEnum):
    SYSTEM_DEFAULT = "system_default"
    GENERIC_FALLBACK = "generic_fallback"
    HISTORICAL = "historical"


class EstimatedImpact(BaseModel):
    """What completing a maintenance action is expected to be worth."""
    model_config = {"frozen": True}

    score_change: Optional[float] = None            # Health score points
    months_added: Optional[float] = None            # Lifespan extension
    failure_prob_reduction: Optional[float] = None  # Absolute 12-month probability drop
    basis: ImpactBasis = ImpactBasis.SYSTEM_DEFAULT
