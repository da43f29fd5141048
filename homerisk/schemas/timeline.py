"""
Home Timeline Schemas.

Render-ready, multi-system replacement timeline. Positions are
percentages of the display horizon; no risk is computed here.

dataQuality and windowUncertainty are deliberately separate:
- data_quality: how reliable the inputs are (confidence)
- window_uncertainty: how wide the probabilistic window is
"""

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field

from homerisk.schemas.window import ReplacementWindow


class UrgencyTier(StrEnum):
    NEAR = "near"      # Likely replacement within the near bucket (red)
    MID = "mid"        # Within the mid bucket (amber)
    FAR = "far"        # Beyond it (green)


class DataQuality(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class WindowUncertainty(StrEnum):
    NARROW = "narrow"
    MEDIUM = "medium"
    WIDE = "wide"


class CostRange(BaseModel):
    model_config = {"frozen": True}

    low: float
    high: float
    currency: str = "USD"


class TimelineInput(BaseModel):
    """One system lane to place on the timeline."""
    model_config = {"frozen": True}

    window: ReplacementWindow
    label: Optional[str] = None
    capital_cost: Optional[CostRange] = None


class TimelineEntry(BaseModel):
    """Bar geometry and tier for one system."""
    model_config = {"frozen": True}

    system_id: str
    system_type: str
    label: str

    early_year: int
    likely_year: int
    late_year: int
    years_to_likely: int

    early_pct: float          # 0-100
    likely_pct: float
    late_pct: float
    bar_start_pct: float
    bar_width_pct: float
    is_window_visible: bool
    beyond_horizon: bool      # Likely year falls past the horizon

    tier: UrgencyTier
    data_quality: DataQuality
    window_uncertainty: WindowUncertainty
    confidence: float
    model_version: str
    capital_cost: Optional[CostRange] = None


class CapitalHorizon(BaseModel):
    model_config = {"frozen": True}

    years_ahead: int
    low_estimate: float
    high_estimate: float
    methodology: str = "weighted"


class CapitalOutlook(BaseModel):
    model_config = {"frozen": True}

    horizons: list[CapitalHorizon] = Field(default_factory=list)
    methodology_note: str = "Estimates weighted by replacement probability within each horizon"


class HomeTimeline(BaseModel):
    """All system lanes for one home, ordered for display."""
    model_config = {"frozen": True}

    horizon_years: int
    start_year: int
    end_year: int
    entries: list[TimelineEntry]
    completeness_percent: int       # Share of high-quality entries, 0-100
    limiting_factors: list[str] = Field(default_factory=list)
    capital_outlook: Optional[CapitalOutlook] = None
