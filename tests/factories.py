"""
Test data builders shared across the engine test suites.
"""

from datetime import date
from typing import Optional

from homerisk.engine.lifespan import compute_replacement_window
from homerisk.schemas.system import SystemInstance
from homerisk.schemas.window import ReplacementWindow

REFERENCE_DATE = date(2025, 1, 21)


def make_instance(
    system_type: str = "hvac",
    install_date: Optional[date] = date(2015, 6, 1),
    system_id: Optional[str] = "sys_hvac_1",
    **indices,
) -> SystemInstance:
    return SystemInstance(
        system_id=system_id,
        system_type=system_type,
        install_date=install_date,
        **indices,
    )


def make_window(
    system_id: str = "sys_hvac_1",
    early_year: int = 2027,
    likely_year: int = 2030,
    late_year: int = 2033,
    confidence: float = 0.85,
    system_type: str = "hvac",
) -> ReplacementWindow:
    """A computed window with its dates moved to the given years."""
    base = compute_replacement_window(
        make_instance(system_type=system_type, system_id=system_id),
        REFERENCE_DATE,
    )
    return base.model_copy(update={
        "p10_date": date(early_year, 6, 1),
        "p50_date": date(likely_year, 6, 1),
        "p90_date": date(late_year, 6, 1),
        "confidence": confidence,
    })
