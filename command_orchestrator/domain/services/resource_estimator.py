"""Domain service for resource requirement estimation."""

from command_orchestrator.domain.entities.command import TestType
from command_orchestrator.domain.entities.comprehensive_context import (
    ResourceRequirements,
)
from command_orchestrator.domain.entities.registry import ContextRegistry
from command_orchestrator.domain.entities.risk import Tier


class ResourceEstimator:
    """Estimates the resources a command needs.

    Baseline is MEDIUM cpu/memory/network and LOW storage; any test type with
    HIGH resource usage raises cpu and memory to HIGH. External dependencies
    are the test type dependencies followed by the service dependencies,
    de-duplicated in first-seen order.
    """

    def __init__(self, registry: ContextRegistry):
        self._registry = registry

    def estimate(
        self, test_types: list[TestType], services: list[str]
    ) -> ResourceRequirements:
        requirements = ResourceRequirements()
        external: list[str] = []

        for test_type in test_types:
            context = self._registry.test_type(test_type)
            if context is None:
                continue
            if context.resource_usage == Tier.HIGH:
                requirements.cpu = Tier.HIGH
                requirements.memory = Tier.HIGH
            external.extend(context.dependencies)

        for service in services:
            context = self._registry.service(service)
            if context is not None:
                external.extend(context.dependencies)

        requirements.external_dependencies = list(dict.fromkeys(external))
        return requirements
