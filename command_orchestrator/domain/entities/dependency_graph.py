"""Dependency graph entities.

This module defines the DependencyGraph produced by the dependency analysis
for a single command, together with its impact and risk breakdowns.
"""

from dataclasses import dataclass, field

from command_orchestrator.domain.entities.risk import RiskLevel, SeverityLevel, Tier


@dataclass
class ImpactAnalysis:
    """Estimated impact of running a command.

    Attributes:
        impact_score: Additive impact score capped at 1.0
        impact_level: Level derived from impact_score
        affected_endpoints: Number of endpoints exposed by the requested services
        estimated_downtime: Estimated downtime (e.g. "12 minutes")
        resource_impact: Impact tier per resource ("cpu", "memory", "network")
    """

    impact_score: float = 0.0
    impact_level: Tier = Tier.LOW
    affected_endpoints: int = 0
    estimated_downtime: str = "0 minutes"
    resource_impact: dict[str, Tier] = field(default_factory=dict)


@dataclass
class RiskFactors:
    """Independent risk tiers per dimension.

    Domain invariants:
    - overall_risk is the highest of the four dimension tiers
    """

    blast_radius_risk: RiskLevel = RiskLevel.LOW
    test_type_risk: RiskLevel = RiskLevel.LOW
    service_risk: RiskLevel = RiskLevel.LOW
    action_risk: RiskLevel = RiskLevel.LOW
    overall_risk: RiskLevel = RiskLevel.LOW


@dataclass
class DependencyGraph:
    """Result of analysing the dependencies of a command.

    Created fresh for every analysis and owned by the caller that requested
    it; never persisted.

    Domain invariants:
    - affected_services contains every requested service
    - blast_radius == len(affected_services) + sum of len(dependencies[s])

    Attributes:
        affected_services: Requested services plus two hops of dependencies
        dependencies: Requested service -> external resources it needs
        blast_radius: Proxy for the scope of potential disruption
        severity_level: LOW / MEDIUM / HIGH, or UNKNOWN if analysis failed
        critical_path: Critical services and their dependencies, in order
        impact_analysis: Impact breakdown
        isolation_points: Services safe to test in isolation
        risk_factors: Per-dimension risk tiers
    """

    affected_services: list[str] = field(default_factory=list)
    dependencies: dict[str, list[str]] = field(default_factory=dict)
    blast_radius: int = 0
    severity_level: SeverityLevel = SeverityLevel.UNKNOWN
    critical_path: list[str] = field(default_factory=list)
    impact_analysis: ImpactAnalysis | None = None
    isolation_points: list[str] = field(default_factory=list)
    risk_factors: RiskFactors | None = None

    @classmethod
    def empty(cls) -> "DependencyGraph":
        """Zeroed graph returned when the analysis fails."""
        return cls(severity_level=SeverityLevel.UNKNOWN)

    def dependencies_of(self, service_name: str) -> list[str]:
        return list(self.dependencies.get(service_name, []))
