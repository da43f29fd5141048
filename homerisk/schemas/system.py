"""
System Instance Schemas.

A system instance is one physical system (HVAC unit, roof, water heater)
belonging to one home. Records are owned by the caller; the engine only
reads them.
"""

from datetime import date
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, field_validator


class SystemType(StrEnum):
    HVAC = "hvac"
    ROOF = "roof"
    WATER_HEATER = "water_heater"


def normalize_system_type(system_type: str) -> str:
    """Lower-case a type key and fold '-' and spaces into '_'."""
    return system_type.strip().lower().replace("-", "_").replace(" ", "_")


class SystemInstance(BaseModel):
    """
    One tracked home system.

    Index fields are raw evidence in [0, 1]. They are stored as given and
    clamped by the engine, so out-of-range values survive into the
    provenance record. Absent indices mean "no evidence", i.e. 0.
    """
    system_id: Optional[str] = None
    system_type: str
    install_date: Optional[date] = None     # None = unknown install
    install_verified: bool = False          # Permit record or explicit confirmation

    maintenance_score: Optional[float] = None       # 0 = no records, 1 = documented service
    usage_index: Optional[float] = None             # 0 = normal, 1 = heavy
    environment_index: Optional[float] = None       # 0 = inland, 1 = coastal/harsh
    climate_stress_index: Optional[float] = None    # 0 = mild, 1 = harsh
    feature_completeness: Optional[float] = None    # Share of the above actually known
    has_usage_signal: bool = False                  # Usage telemetry exists

    @field_validator("system_type", mode="before")
    @classmethod
    def normalize_type(cls, v: str) -> str:
        return normalize_system_type(str(v))

    @property
    def is_known_type(self) -> bool:
        return self.system_type in {t.value for t in SystemType}
