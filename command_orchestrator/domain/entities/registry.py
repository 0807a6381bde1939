"""Static context registry entities.

Reference data describing every known test type, service and action. The
data is loaded once at startup and never mutated afterwards: records are
frozen dataclasses and the ContextRegistry exposes read-only mappings.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from command_orchestrator.domain.entities.command import ActionType, TestType
from command_orchestrator.domain.entities.risk import RiskLevel, Tier


@dataclass(frozen=True)
class ExecutionTimeRange:
    """Typical execution time range in minutes (e.g. 5-15 minutes)."""

    min_minutes: int
    max_minutes: int

    def __post_init__(self):
        if self.min_minutes < 0 or self.max_minutes < self.min_minutes:
            raise ValueError(
                f"invalid execution time range: {self.min_minutes}-{self.max_minutes}"
            )

    @property
    def label(self) -> str:
        return f"{self.min_minutes}-{self.max_minutes} minutes"


@dataclass(frozen=True)
class TestTypeContext:
    """Reference data for a test type.

    Attributes:
        test_type: The test type described
        description: Short description
        tools: Tooling typically used for this kind of test
        execution_time: Typical execution time range
        resource_usage: Resource usage tier
        dependencies: External resources the test type needs
        risk_level: Risk of running this kind of test
        parallelizable: Whether instances can run concurrently
        criticality: Criticality tier
        supported_services: Services this test type applies to
    """

    __test__ = False

    test_type: TestType
    description: str
    tools: tuple[str, ...]
    execution_time: ExecutionTimeRange
    resource_usage: Tier
    dependencies: tuple[str, ...]
    risk_level: RiskLevel
    parallelizable: bool
    criticality: Tier
    supported_services: tuple[str, ...] = ()


@dataclass(frozen=True)
class ServiceContext:
    """Reference data for a service.

    Attributes:
        service_name: Business identifier (e.g. "order-service")
        port: Network port the service listens on
        description: Short description
        dependencies: Direct dependencies (services or datastores)
        endpoints: Public endpoints
        supported_test_types: Test types applicable to the service
        criticality: Criticality tier
        health_check_endpoints: Endpoints polled by health checks
        supported_actions: Actions applicable to the service
        deployment_type: Deployment descriptor (e.g. "DOCKER")
    """

    service_name: str
    port: int
    description: str
    dependencies: tuple[str, ...]
    endpoints: tuple[str, ...]
    supported_test_types: tuple[TestType, ...]
    criticality: Tier
    health_check_endpoints: tuple[str, ...] = ("/actuator/health",)
    supported_actions: tuple[ActionType, ...] = ()
    deployment_type: str = "DOCKER"

    @property
    def is_critical(self) -> bool:
        return self.criticality == Tier.HIGH


@dataclass(frozen=True)
class ActionContext:
    """Reference data for an action type.

    Attributes:
        action_type: The action described
        description: Short description
        prerequisites: What must be in place before running the action
        supported_services: Services the action applies to
        supported_test_types: Test types the action applies to
        execution_time: Typical execution time range
        resource_usage: Resource usage tier
        risk_level: Risk of running the action
        parallelizable: Whether instances can run concurrently
        criticality: Criticality tier
        output_types: Kinds of output the action produces
    """

    action_type: ActionType
    description: str
    prerequisites: tuple[str, ...]
    supported_services: tuple[str, ...]
    supported_test_types: tuple[TestType, ...]
    execution_time: ExecutionTimeRange
    resource_usage: Tier
    risk_level: RiskLevel
    parallelizable: bool
    criticality: Tier
    output_types: tuple[str, ...] = ()


@dataclass(frozen=True)
class ContextRegistry:
    """Read-only lookup tables for test types, services and actions.

    The service dependency table is derived from the service contexts.
    test_type_dependency_table lists the external systems the dependency
    analyzer charges to every targeted service per test type; it is separate
    from TestTypeContext.dependencies, which only feeds resource estimates.
    Service order is preserved and used wherever "all services" is needed.
    """

    test_types: Mapping[TestType, TestTypeContext]
    services: Mapping[str, ServiceContext]
    actions: Mapping[ActionType, ActionContext]
    test_type_dependency_table: Mapping[TestType, tuple[str, ...]] = field(
        default_factory=dict
    )
    _service_dependencies: Mapping[str, tuple[str, ...]] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self):
        # Freeze the tables so no caller can mutate shared reference data
        object.__setattr__(self, "test_types", MappingProxyType(dict(self.test_types)))
        object.__setattr__(self, "services", MappingProxyType(dict(self.services)))
        object.__setattr__(self, "actions", MappingProxyType(dict(self.actions)))
        object.__setattr__(
            self,
            "_service_dependencies",
            MappingProxyType(
                {name: ctx.dependencies for name, ctx in self.services.items()}
            ),
        )
        object.__setattr__(
            self,
            "test_type_dependency_table",
            MappingProxyType(dict(self.test_type_dependency_table)),
        )

    def test_type(self, test_type: TestType) -> TestTypeContext | None:
        return self.test_types.get(test_type)

    def service(self, service_name: str) -> ServiceContext | None:
        return self.services.get(service_name)

    def action(self, action_type: ActionType) -> ActionContext | None:
        return self.actions.get(action_type)

    def service_dependencies(self, service_name: str) -> tuple[str, ...]:
        """Direct dependencies of a service (empty for unknown services)."""
        return self._service_dependencies.get(service_name, ())

    def test_type_dependencies(self, test_type: TestType) -> tuple[str, ...]:
        """External resources a test type needs (empty for unknown types)."""
        return self.test_type_dependency_table.get(test_type, ())

    def known_services(self) -> list[str]:
        """All registered service names, in registration order."""
        return list(self.services.keys())
