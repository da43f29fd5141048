"""
Risk Context Schemas.

Situational, region-scoped and time-bounded conditions (seasons, weather
warnings, contractor market). Records are maintained by an external
collaborator and are read-only from the engine's perspective.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel


class RiskContext(BaseModel):
    """Active conditions for one region over one validity interval."""
    model_config = {"frozen": True}

    state: str = ""
    climate_zone: str = ""

    # Active conditions
    hurricane_season: bool = False
    freeze_warning: bool = False
    heat_wave: bool = False

    # Contractor market
    peak_season_hvac: bool = False
    peak_season_roofing: bool = False

    # Temporal (inclusive)
    valid_from: Optional[date] = None
    valid_until: Optional[date] = None

    def is_active_on(self, on: date) -> bool:
        if self.valid_from is not None and on < self.valid_from:
            return False
        if self.valid_until is not None and on > self.valid_until:
            return False
        return True
