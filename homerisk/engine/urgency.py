"""
Urgency Premium Calculator.

Situational dollar add-ons keyed by (system type, active condition):
- Hurricane season → roofs
- Freeze warning → water heaters and HVAC
- Heat wave → HVAC
- Contractor peak season → HVAC / roofing, each on its own flag

Premiums are summed, never multiplied. Each one that fires is recorded
as a named boolean so the score can be explained.

The premium is derived at calculation time and never stored on its own;
it is snapshotted together with the score when an alert is created.
"""

from datetime import date
from typing import Iterable, Optional

import structlog

from homerisk.config import settings
from homerisk.engine.calibration import UrgencySchedule, get_calibration_set
from homerisk.schemas.context import RiskContext
from homerisk.schemas.intervention import UrgencyFactors, UrgencyPremium
from homerisk.schemas.system import SystemType, normalize_system_type

logger = structlog.get_logger(__name__)


def is_contractor_peak_season(context: RiskContext, system_type: str) -> bool:
    """True when the trade serving this system type is in its busy season."""
    key = normalize_system_type(system_type)
    if key == SystemType.HVAC and context.peak_season_hvac:
        return True
    if key == SystemType.ROOF and context.peak_season_roofing:
        return True
    return False


def calculate_urgency_premium(
    system_type: str,
    context: RiskContext,
    schedule: Optional[UrgencySchedule] = None,
) -> UrgencyPremium:
    """Sum the premiums that apply to this system type under this context."""
    if schedule is None:
        schedule = get_calibration_set(settings.calibration_version).urgency
    key = normalize_system_type(system_type)

    premium = 0.0
    hurricane = freeze = heat = peak = False

    if context.hurricane_season and key in schedule.hurricane_types:
        premium += schedule.hurricane_season
        hurricane = True

    if context.freeze_warning and key in schedule.freeze_types:
        premium += schedule.freeze_warning
        freeze = True

    if context.heat_wave and key in schedule.heat_wave_types:
        premium += schedule.heat_wave
        heat = True

    if is_contractor_peak_season(context, key):
        premium += schedule.peak_season
        peak = True

    factors = UrgencyFactors(
        hurricane_season=hurricane,
        freeze_warning=freeze,
        heat_wave=heat,
        peak_season=peak,
    )
    if premium > 0:
        logger.debug(
            "urgency_premium_applied",
            system_type=key,
            premium=premium,
            factors=factors.fired(),
            schedule_version=schedule.version,
        )

    return UrgencyPremium(
        premium=premium,
        factors=factors,
        schedule_version=schedule.version,
    )


def default_risk_context(
    state: str = "",
    climate_zone: str = "",
    on: Optional[date] = None,
) -> RiskContext:
    """No active conditions: premiums are never invented for missing data."""
    return RiskContext(
        state=state,
        climate_zone=climate_zone,
        valid_from=on,
        valid_until=on,
    )


def select_risk_context(
    contexts: Iterable[RiskContext],
    state: str,
    on: date,
    climate_zone: Optional[str] = None,
) -> RiskContext:
    """
    Pick the active context for a region on a date.

    Matches state (case-insensitive), climate zone when one is given, and
    an inclusive validity interval. The first match wins; with no match a
    flag-free default is returned.
    """
    wanted_state = state.strip().upper()
    for context in contexts:
        if context.state.strip().upper() != wanted_state:
            continue
        if climate_zone and context.climate_zone and context.climate_zone != climate_zone:
            continue
        if context.is_active_on(on):
            return context

    logger.debug("risk_context_default", state=state, climate_zone=climate_zone, on=on.isoformat())
    return default_risk_context(state, climate_zone or "", on)
