"""Domain service for dependency and blast-radius analysis.

Computes which services a command touches, the external resources each
requested service needs, and heuristic severity, impact and risk tiers.
"""

import logging

from command_orchestrator.domain.entities.command import ActionType, TestType
from command_orchestrator.domain.entities.dependency_graph import (
    DependencyGraph,
    ImpactAnalysis,
    RiskFactors,
)
from command_orchestrator.domain.entities.registry import ContextRegistry
from command_orchestrator.domain.entities.risk import RiskLevel, SeverityLevel, Tier

logger = logging.getLogger(__name__)

# Services whose disruption affects the whole system
CRITICAL_SERVICES = frozenset({"gateway-service", "user-service", "order-service"})

# Services that can be exercised without touching the critical path
ISOLATABLE_SERVICES = frozenset({"product-service", "notification-service"})

GATEWAY_SERVICE = "gateway-service"

_ENDPOINT_COUNTS = {
    "gateway-service": 10,
    "user-service": 8,
    "product-service": 6,
    "order-service": 8,
    "notification-service": 6,
}
_DEFAULT_ENDPOINT_COUNT = 5

_TEST_TYPE_IMPACT = {
    TestType.CHAOS_TEST: 0.5,
    TestType.PERFORMANCE_TEST: 0.3,
    TestType.SECURITY_TEST: 0.3,
    TestType.END_TO_END_TEST: 0.2,
}
_DEFAULT_TEST_TYPE_IMPACT = 0.1
_BLAST_RADIUS_IMPACT = 0.2
_CRITICAL_SERVICE_IMPACT = 0.2

_DOWNTIME_MINUTES = {
    TestType.CHAOS_TEST: 5,
    TestType.PERFORMANCE_TEST: 10,
    TestType.END_TO_END_TEST: 15,
}
_DEFAULT_DOWNTIME_MINUTES = 2


class DependencyAnalysisService:
    """Analyzes service and test-type dependencies for a command.

    Algorithm:
    1. Expand the requested services by two hops of service dependencies
    2. Merge each requested service's dependencies with the test type dependencies
    3. Derive blast radius, severity, critical path, impact, isolation points
       and per-dimension risk tiers from the result

    The expansion is exactly two hops, not a transitive closure: a service
    reachable only through three or more hops is not included.
    """

    def __init__(self, registry: ContextRegistry):
        self._registry = registry

    def analyze_dependencies(
        self,
        test_types: list[TestType],
        services: list[str],
        actions: list[ActionType],
    ) -> DependencyGraph:
        """Build the dependency graph for a resolved command.

        Args:
            test_types: Resolved test types
            services: Resolved service names
            actions: Resolved actions

        Returns:
            DependencyGraph for the command. If anything goes wrong an empty
            graph with severity UNKNOWN is returned instead of raising.
        """
        logger.info(
            f"Analyzing dependencies for test_types={[t.value for t in test_types]}, "
            f"services={services}, actions={[a.value for a in actions]}"
        )
        try:
            affected_services = self._expand_affected_services(services)
            dependencies = self._merge_dependencies(test_types, services)
            blast_radius = len(affected_services) + sum(
                len(deps) for deps in dependencies.values()
            )
            severity = self._determine_severity(blast_radius, test_types, actions)
            critical_path = self._identify_critical_path(services, dependencies)
            impact = self._analyze_impact(test_types, services, blast_radius)
            isolation_points = [s for s in services if s in ISOLATABLE_SERVICES]
            risk_factors = self._assess_risk_factors(
                test_types, services, actions, blast_radius
            )

            logger.debug(
                f"Dependency analysis: affected={affected_services}, "
                f"blast_radius={blast_radius}, severity={severity.value}, "
                f"critical_path={critical_path}"
            )
            logger.info(
                f"Dependency analysis completed with blast radius: {blast_radius}"
            )
            return DependencyGraph(
                affected_services=affected_services,
                dependencies=dependencies,
                blast_radius=blast_radius,
                severity_level=severity,
                critical_path=critical_path,
                impact_analysis=impact,
                isolation_points=isolation_points,
                risk_factors=risk_factors,
            )
        except Exception as e:
            logger.error(f"Error analyzing dependencies: {e}", exc_info=True)
            return DependencyGraph.empty()

    def _expand_affected_services(self, services: list[str]) -> list[str]:
        """Requested services plus their direct and second-hop dependencies."""
        affected = list(dict.fromkeys(services))

        for service in services:
            self._extend_unique(affected, self._registry.service_dependencies(service))

        # One more hop over everything gathered so far
        second_hop: list[str] = []
        for service in affected:
            self._extend_unique(second_hop, self._registry.service_dependencies(service))
        self._extend_unique(affected, second_hop)

        return affected

    def _merge_dependencies(
        self, test_types: list[TestType], services: list[str]
    ) -> dict[str, list[str]]:
        dependencies: dict[str, list[str]] = {}
        for service in services:
            merged: list[str] = []
            self._extend_unique(merged, self._registry.service_dependencies(service))
            for test_type in test_types:
                self._extend_unique(
                    merged, self._registry.test_type_dependencies(test_type)
                )
            dependencies[service] = merged
        return dependencies

    @staticmethod
    def _determine_severity(
        blast_radius: int, test_types: list[TestType], actions: list[ActionType]
    ) -> SeverityLevel:
        if (
            blast_radius >= 5
            or TestType.CHAOS_TEST in test_types
            or ActionType.RUN_CHAOS_TESTS in actions
        ):
            return SeverityLevel.HIGH
        if blast_radius >= 3:
            return SeverityLevel.MEDIUM
        return SeverityLevel.LOW

    def _identify_critical_path(
        self, services: list[str], dependencies: dict[str, list[str]]
    ) -> list[str]:
        critical_services: list[str] = []
        if GATEWAY_SERVICE in services:
            critical_services.append(GATEWAY_SERVICE)
        for service in services:
            if self._is_critical(service) and service not in critical_services:
                critical_services.append(service)

        critical_path = list(critical_services)
        for service in critical_services:
            self._extend_unique(critical_path, dependencies.get(service, []))
        return critical_path

    def _analyze_impact(
        self, test_types: list[TestType], services: list[str], blast_radius: int
    ) -> ImpactAnalysis:
        score = blast_radius * _BLAST_RADIUS_IMPACT
        score += sum(
            _TEST_TYPE_IMPACT.get(t, _DEFAULT_TEST_TYPE_IMPACT) for t in test_types
        )
        score += _CRITICAL_SERVICE_IMPACT * sum(
            1 for s in services if self._is_critical(s)
        )
        score = min(score, 1.0)

        if score >= 0.7:
            level = Tier.HIGH
        elif score >= 0.4:
            level = Tier.MEDIUM
        else:
            level = Tier.LOW

        downtime = sum(
            _DOWNTIME_MINUTES.get(t, _DEFAULT_DOWNTIME_MINUTES) for t in test_types
        )

        return ImpactAnalysis(
            impact_score=score,
            impact_level=level,
            affected_endpoints=sum(
                _ENDPOINT_COUNTS.get(s, _DEFAULT_ENDPOINT_COUNT) for s in services
            ),
            estimated_downtime=f"{downtime} minutes",
            resource_impact=self._resource_impact(test_types),
        )

    @staticmethod
    def _resource_impact(test_types: list[TestType]) -> dict[str, Tier]:
        if TestType.PERFORMANCE_TEST in test_types:
            cpu = Tier.HIGH
        elif TestType.CHAOS_TEST in test_types:
            cpu = Tier.MEDIUM
        else:
            cpu = Tier.LOW

        if TestType.PERFORMANCE_TEST in test_types:
            memory = Tier.HIGH
        elif TestType.INTEGRATION_TEST in test_types:
            memory = Tier.MEDIUM
        else:
            memory = Tier.LOW

        if TestType.API_TEST in test_types or TestType.INTEGRATION_TEST in test_types:
            network = Tier.MEDIUM
        else:
            network = Tier.LOW

        return {"cpu": cpu, "memory": memory, "network": network}

    def _assess_risk_factors(
        self,
        test_types: list[TestType],
        services: list[str],
        actions: list[ActionType],
        blast_radius: int,
    ) -> RiskFactors:
        if blast_radius >= 5:
            blast_radius_risk = RiskLevel.HIGH
        elif blast_radius >= 3:
            blast_radius_risk = RiskLevel.MEDIUM
        else:
            blast_radius_risk = RiskLevel.LOW

        if TestType.CHAOS_TEST in test_types:
            test_type_risk = RiskLevel.HIGH
        elif (
            TestType.PERFORMANCE_TEST in test_types
            or TestType.SECURITY_TEST in test_types
        ):
            test_type_risk = RiskLevel.MEDIUM
        else:
            test_type_risk = RiskLevel.LOW

        service_risk = (
            RiskLevel.HIGH
            if any(self._is_critical(s) for s in services)
            else RiskLevel.MEDIUM
        )

        if ActionType.RUN_CHAOS_TESTS in actions:
            action_risk = RiskLevel.HIGH
        elif (
            ActionType.RUN_PERFORMANCE_TESTS in actions
            or ActionType.RUN_SECURITY_TESTS in actions
        ):
            action_risk = RiskLevel.MEDIUM
        else:
            action_risk = RiskLevel.LOW

        return RiskFactors(
            blast_radius_risk=blast_radius_risk,
            test_type_risk=test_type_risk,
            service_risk=service_risk,
            action_risk=action_risk,
            overall_risk=RiskLevel.highest(
                [blast_radius_risk, test_type_risk, service_risk, action_risk]
            ),
        )

    @staticmethod
    def _is_critical(service_name: str) -> bool:
        return service_name in CRITICAL_SERVICES

    @staticmethod
    def _extend_unique(target: list[str], items) -> None:
        for item in items:
            if item not in target:
                target.append(item)
