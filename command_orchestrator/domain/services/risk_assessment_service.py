"""Domain service for command risk assessment.

Scores a resolved command against the registry: test types and actions
contribute risk levels, critical services contribute risk factors and
warnings only.
"""

import logging

from command_orchestrator.domain.entities.command import ActionType, TestType
from command_orchestrator.domain.entities.registry import ContextRegistry
from command_orchestrator.domain.entities.risk import RiskAssessment, RiskLevel, Tier

logger = logging.getLogger(__name__)

_CHAOS_RISK_FACTOR = f"High risk test type: {TestType.CHAOS_TEST.display_name}"
_CHAOS_MITIGATIONS = (
    "Enable monitoring and rollback mechanisms",
    "Run during low-traffic periods",
    "Prepare emergency stop procedures",
)

_GATEWAY_RISK_FACTOR = "Critical service: gateway-service"
_GATEWAY_MITIGATIONS = (
    "Ensure gateway service redundancy",
    "Monitor gateway health continuously",
    "Prepare failover procedures",
)


class RiskAssessmentService:
    """Assesses the risk of executing a command."""

    def __init__(self, registry: ContextRegistry):
        self._registry = registry

    def assess(
        self,
        test_types: list[TestType],
        services: list[str],
        actions: list[ActionType],
    ) -> RiskAssessment:
        """Build a RiskAssessment for the resolved command.

        Args:
            test_types: Resolved test types
            services: Resolved service names
            actions: Resolved actions

        Returns:
            RiskAssessment whose overall level is the highest per-dimension
            level (LOW when nothing contributed)
        """
        risk_factors: list[str] = []
        risk_levels: dict[str, RiskLevel] = {}
        warnings: list[str] = []

        for test_type in test_types:
            context = self._registry.test_type(test_type)
            if context is None:
                continue
            risk_levels[test_type.value] = context.risk_level
            if context.risk_level == RiskLevel.HIGH:
                risk_factors.append(f"High risk test type: {test_type.display_name}")
                warnings.append(
                    f"HIGH RISK: {test_type.display_name} may cause system disruption"
                )

        for service in services:
            context = self._registry.service(service)
            if context is not None and context.criticality == Tier.HIGH:
                risk_factors.append(f"Critical service: {service}")
                warnings.append(
                    f"CRITICAL SERVICE: {service} is essential for system operation"
                )

        for action in actions:
            context = self._registry.action(action)
            if context is None:
                continue
            risk_levels[action.value] = context.risk_level
            if context.risk_level == RiskLevel.HIGH:
                risk_factors.append(f"High risk action: {action.value}")
                warnings.append(
                    f"HIGH RISK ACTION: {action.value} may have significant impact"
                )

        overall = RiskLevel.highest(risk_levels.values())
        logger.debug(
            f"Risk assessment: overall={overall.value}, factors={len(risk_factors)}"
        )
        return RiskAssessment(
            overall_risk_level=overall,
            risk_factors=risk_factors,
            risk_levels=risk_levels,
            mitigation_strategies=self._mitigations(risk_factors),
            warnings=warnings,
            confidence="HIGH",
        )

    @staticmethod
    def _mitigations(risk_factors: list[str]) -> list[str]:
        strategies: list[str] = []
        if _CHAOS_RISK_FACTOR in risk_factors:
            strategies.extend(_CHAOS_MITIGATIONS)
        if _GATEWAY_RISK_FACTOR in risk_factors:
            strategies.extend(_GATEWAY_MITIGATIONS)
        return strategies
