"""
Replacement Window Schemas.

A replacement window is derived, never a source of truth: it is
recomputed per request from a SystemInstance and a reference date.
The provenance record carries every number used, for auditability.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from homerisk.schemas.system import SystemInstance


class WindowMultipliers(BaseModel):
    """Lifespan multipliers, one per evidence index."""
    model_config = {"frozen": True}

    climate: float
    maintenance: float
    install: float
    usage: float
    environment: float
    unknowns: float
    total: float                 # Product, clamped to the calibration band
    total_unclamped: float


class WindowProvenance(BaseModel):
    """Everything needed to reproduce a window by hand."""
    model_config = {"frozen": True}

    model_version: str
    calibration_version: str
    calibration_fallback: bool = False   # Unknown type used the fallback constants
    multipliers: WindowMultipliers
    l50_base: float
    sigma_base: float
    l50_effective: float
    sigma_effective: float
    l10_years: float
    l90_years: float
    age_years: float
    normalized_indices: dict[str, float] = Field(default_factory=dict)
    inputs: SystemInstance


class ReplacementWindow(BaseModel):
    """p10 / p50 / p90 replacement dates for one system at one point in time."""
    model_config = {"frozen": True}

    system_id: Optional[str] = None
    system_type: str
    p10_date: date               # Early
    p50_date: date               # Most likely
    p90_date: date               # Late
    years_remaining_p50: float   # >= 0
    confidence: float            # 0-1, evidence quality only
    model_version: str
    computed_at: date
    provenance: WindowProvenance

    @property
    def signed_years_remaining(self) -> float:
        """Years to p50 without the >= 0 clamp (negative = past the window)."""
        return self.provenance.l50_effective - self.provenance.age_years
