"""
HomeRisk Configuration.

Pydantic Settings v2 — loads from .env, environment variables.

Only defaults live here. Every engine function takes its inputs
explicitly; settings fill in the values a caller chose not to pass.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine defaults loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ── Application ──────────────────────────────────────────────────────
    app_name: str = "HomeRisk"
    app_version: str = "1.0.0"
    environment: str = Field(default="development", alias="ENVIRONMENT")

    # ── Calibration ──────────────────────────────────────────────────────
    calibration_version: str = Field(default="v1", alias="HOMERISK_CALIBRATION_VERSION")

    # ── Intervention ─────────────────────────────────────────────────────
    default_intervention_threshold: float = Field(
        default=1000.0, alias="DEFAULT_INTERVENTION_THRESHOLD",
        description="Per-home threshold used when a home has none configured",
    )
    default_proactive_cost: float = Field(default=5000.0, alias="DEFAULT_PROACTIVE_COST")
    default_emergency_cost: float = Field(default=8000.0, alias="DEFAULT_EMERGENCY_COST")
    default_potential_damage: float = Field(default=2000.0, alias="DEFAULT_POTENTIAL_DAMAGE")

    # ── Timeline ─────────────────────────────────────────────────────────
    timeline_horizon_years: int = Field(default=10, alias="TIMELINE_HORIZON_YEARS")
    timeline_min_bar_width_pct: float = Field(default=5.0, alias="TIMELINE_MIN_BAR_WIDTH_PCT")
    timeline_near_years: int = Field(default=3, alias="TIMELINE_NEAR_YEARS")
    timeline_mid_years: int = Field(default=6, alias="TIMELINE_MID_YEARS")

    # ── Operational ──────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="console", alias="LOG_FORMAT")


settings = Settings()
