"""Risk entities.

Ordered risk levels, resource/criticality tiers and the RiskAssessment
produced by the context analyzer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable


class RiskLevel(str, Enum):
    """Risk level, ordered LOW < MEDIUM < HIGH < CRITICAL."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        """Position in the LOW..CRITICAL ordering."""
        return _RISK_RANKS[self]

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def highest(cls, levels: Iterable["RiskLevel"]) -> "RiskLevel":
        """Return the highest level in levels, LOW when levels is empty."""
        return max(levels, key=lambda level: level.rank, default=cls.LOW)

    @classmethod
    def from_label(cls, label: str | None) -> "RiskLevel":
        """Convert a free-text label to a RiskLevel, defaulting to LOW."""
        if label is None:
            return cls.LOW
        try:
            return cls(label.strip().upper())
        except ValueError:
            return cls.LOW


_RISK_RANKS = {
    RiskLevel.LOW: 0,
    RiskLevel.MEDIUM: 1,
    RiskLevel.HIGH: 2,
    RiskLevel.CRITICAL: 3,
}


class Tier(str, Enum):
    """Three-level tier for resource usage and criticality."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class SeverityLevel(str, Enum):
    """Severity of a dependency analysis. UNKNOWN marks a failed analysis."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    UNKNOWN = "UNKNOWN"


@dataclass
class RiskAssessment:
    """Risk assessment for a command's execution.

    Domain invariants:
    - overall_risk_level is the highest level in risk_levels (LOW if empty)

    Attributes:
        overall_risk_level: Highest contributing risk level
        risk_factors: Human-readable risk factors, in discovery order
        risk_levels: Per-dimension risk level (test type or action name -> level)
        mitigation_strategies: Suggested mitigations for the risk factors
        warnings: Warnings raised while assessing risk
        confidence: Confidence label for the assessment
    """

    overall_risk_level: RiskLevel = RiskLevel.LOW
    risk_factors: list[str] = field(default_factory=list)
    risk_levels: dict[str, RiskLevel] = field(default_factory=dict)
    mitigation_strategies: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    confidence: str = "HIGH"
