"""
Engine Exceptions.

The engine clamps out-of-range numbers instead of rejecting them, so the
taxonomy is small: missing required inputs and unknown calibration
versions. Each error carries a stable code for callers that map errors
onto their own responses.
"""

from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    """Engine error codes."""

    # Missing inputs (1xxx)
    MISSING_INSTALL_DATE = "E1001"
    MISSING_FAILURE_INPUT = "E1002"

    # Calibration (2xxx)
    UNKNOWN_CALIBRATION_VERSION = "E2001"


class HomeRiskError(Exception):
    """Base class for all engine errors."""

    code: ErrorCode

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class MissingInstallDateError(HomeRiskError):
    """A replacement window was requested for a system with no install date."""

    code = ErrorCode.MISSING_INSTALL_DATE

    def __init__(self, system_id: Optional[str] = None, system_type: Optional[str] = None):
        super().__init__(
            "Install date is required to compute a replacement window",
            details={"system_id": system_id, "system_type": system_type},
        )


class MissingFailureInputError(HomeRiskError):
    """Neither a replacement window nor a risk outlook was supplied."""

    code = ErrorCode.MISSING_FAILURE_INPUT

    def __init__(self, system_type: str):
        super().__init__(
            "A replacement window or a risk outlook is required to derive failure probability",
            details={"system_type": system_type},
        )


class UnknownCalibrationVersionError(HomeRiskError, KeyError):
    """The requested calibration version is not registered."""

    code = ErrorCode.UNKNOWN_CALIBRATION_VERSION

    def __init__(self, version: str, known: list[str]):
        HomeRiskError.__init__(
            self,
            f"Unknown calibration version: {version}",
            details={"version": version, "known_versions": known},
        )

    def __str__(self) -> str:
        return self.message
