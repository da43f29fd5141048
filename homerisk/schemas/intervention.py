"""
Intervention Scoring Schemas.

Two result types on purpose:

- InterventionEligibility is the LIVE result, recomputed on demand.
- InterventionSnapshot is the STORED result, copied at the moment an
  alert is created. Risk contexts and cost estimates change over time,
  so a stored score is never re-derived on read.
"""

import hashlib
import json
import uuid
from datetime import datetime
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field

from homerisk.schemas.context import RiskContext


class ProbabilitySource(StrEnum):
    YEARS_REMAINING = "years_remaining"   # From a ReplacementWindow (canonical)
    RISK_OUTLOOK = "risk_outlook"         # External 0-100 outlook score


class InterventionCosts(BaseModel):
    """Dollar cost estimates for one system."""
    model_config = {"frozen": True}

    proactive: float = 0.0          # Planned replacement
    emergency: float = 0.0          # Replacement after failure (includes labor premium)
    potential_damage: float = 0.0   # Collateral damage if it fails


class ScoreBreakdown(BaseModel):
    model_config = {"frozen": True}

    base_risk: float          # failure probability × emergency cost
    urgency_premium: float


class InterventionScoreResult(BaseModel):
    """Output of the frozen intervention formula."""
    model_config = {"frozen": True}

    score: float              # Dollars, rounded to cents
    breakdown: ScoreBreakdown


class UrgencyFactors(BaseModel):
    """Which situational premiums fired."""
    model_config = {"frozen": True}

    hurricane_season: bool = False
    freeze_warning: bool = False
    heat_wave: bool = False
    peak_season: bool = False

    def fired(self) -> list[str]:
        return [name for name, active in self.model_dump().items() if active]


class UrgencyPremium(BaseModel):
    model_config = {"frozen": True}

    premium: float
    factors: UrgencyFactors
    schedule_version: str


class InterventionEligibility(BaseModel):
    """
    Live eligibility result for one system in one home.

    Everything a UI needs to explain the number is here; nothing has to be
    recomputed downstream.
    """
    model_config = {"frozen": True}

    eligible: bool
    score: float
    threshold: float
    breakdown: ScoreBreakdown
    urgency_factors: UrgencyFactors
    failure_probability_12mo: float
    probability_source: ProbabilitySource
    system_type: str
    system_id: Optional[str] = None
    costs: InterventionCosts
    context: RiskContext
    urgency_schedule_version: str
    failure_model_version: str


def _canonical_hash(payload: dict) -> str:
    json_str = json.dumps(payload, sort_keys=True, default=str)
    return hashlib.sha256(json_str.encode()).hexdigest()


class InterventionSnapshot(BaseModel):
    """
    Immutable copy of an eligibility result at alert creation time.

    A snapshot never recomputes anything. Changing a stored score means
    superseding it with a new revision built from a fresh live result.
    """
    model_config = {"frozen": True}

    snapshot_id: str = Field(default_factory=lambda: f"snap_{uuid.uuid4().hex[:16]}")
    captured_at: datetime
    revision: int = 1
    supersedes: Optional[str] = None     # content_hash of the previous revision

    eligibility: InterventionEligibility
    content_hash: str

    @classmethod
    def capture(
        cls,
        eligibility: InterventionEligibility,
        captured_at: datetime,
        revision: int = 1,
        supersedes: Optional[str] = None,
    ) -> "InterventionSnapshot":
        # model_copy(deep=True) detaches the stored copy from the live object
        frozen = eligibility.model_copy(deep=True)
        return cls(
            captured_at=captured_at,
            revision=revision,
            supersedes=supersedes,
            eligibility=frozen,
            content_hash=cls._hash_payload(frozen, captured_at, revision, supersedes),
        )

    @staticmethod
    def _hash_payload(
        eligibility: InterventionEligibility,
        captured_at: datetime,
        revision: int,
        supersedes: Optional[str],
    ) -> str:
        return _canonical_hash({
            "eligibility": eligibility.model_dump(mode="json"),
            "captured_at": captured_at.isoformat(),
            "revision": revision,
            "supersedes": supersedes,
        })

    @property
    def score(self) -> float:
        return self.eligibility.score

    @property
    def eligible(self) -> bool:
        return self.eligibility.eligible

    def verify_integrity(self) -> bool:
        """True if the stored payload still matches its hash."""
        expected = self._hash_payload(
            self.eligibility, self.captured_at, self.revision, self.supersedes
        )
        return expected == self.content_hash

    def supersede(
        self,
        eligibility: InterventionEligibility,
        captured_at: datetime,
    ) -> "InterventionSnapshot":
        """Explicit, versioned recompute: a new revision pointing at this one."""
        return InterventionSnapshot.capture(
            eligibility,
            captured_at=captured_at,
            revision=self.revision + 1,
            supersedes=self.content_hash,
        )
