"""Seed reference data for the context registry.

Describes the known test types, the five platform services and the actions
with registry metadata. build_default_registry() freezes the tables into a
ContextRegistry that is shared read-only by the analyzers.
"""

from command_orchestrator.domain.entities.command import ActionType, TestType
from command_orchestrator.domain.entities.registry import (
    ActionContext,
    ContextRegistry,
    ExecutionTimeRange,
    ServiceContext,
    TestTypeContext,
)
from command_orchestrator.domain.entities.risk import RiskLevel, Tier

# Registration order is the default service order
ALL_SERVICES = (
    "user-service",
    "product-service",
    "order-service",
    "notification-service",
    "gateway-service",
)


def _test_type(
    test_type: TestType,
    description: str,
    tools: tuple[str, ...],
    minutes: tuple[int, int],
    resource_usage: Tier,
    dependencies: tuple[str, ...],
    risk_level: RiskLevel,
    parallelizable: bool,
    criticality: Tier,
) -> TestTypeContext:
    return TestTypeContext(
        test_type=test_type,
        description=description,
        tools=tools,
        execution_time=ExecutionTimeRange(*minutes),
        resource_usage=resource_usage,
        dependencies=dependencies,
        risk_level=risk_level,
        parallelizable=parallelizable,
        criticality=criticality,
        supported_services=ALL_SERVICES,
    )


# PENETRATION_TEST has no registry entry; it is ignored by duration,
# strategy and risk calculations.
TEST_TYPE_CONTEXTS = {
    ctx.test_type: ctx
    for ctx in (
        _test_type(
            TestType.UNIT_TEST,
            "Individual component testing",
            ("JUnit 5", "Mockito", "TestNG"),
            (1, 5),
            Tier.LOW,
            (),
            RiskLevel.LOW,
            True,
            Tier.LOW,
        ),
        _test_type(
            TestType.INTEGRATION_TEST,
            "Component interaction testing",
            ("Spring Boot Test", "TestContainers", "WireMock"),
            (5, 15),
            Tier.MEDIUM,
            ("Database", "External Services"),
            RiskLevel.MEDIUM,
            False,
            Tier.MEDIUM,
        ),
        _test_type(
            TestType.API_TEST,
            "REST API endpoint testing",
            ("RestAssured", "Karate", "Postman"),
            (3, 10),
            Tier.MEDIUM,
            ("API Gateway", "Service Endpoints"),
            RiskLevel.LOW,
            True,
            Tier.MEDIUM,
        ),
        _test_type(
            TestType.PERFORMANCE_TEST,
            "Load and stress testing",
            ("JMeter", "Gatling", "K6"),
            (15, 60),
            Tier.HIGH,
            ("Load Balancer", "Monitoring"),
            RiskLevel.HIGH,
            False,
            Tier.HIGH,
        ),
        _test_type(
            TestType.SECURITY_TEST,
            "Security vulnerability testing",
            ("OWASP ZAP", "Burp Suite", "Nessus"),
            (10, 30),
            Tier.MEDIUM,
            ("Security Scanner", "Vulnerability Database"),
            RiskLevel.MEDIUM,
            True,
            Tier.HIGH,
        ),
        _test_type(
            TestType.CHAOS_TEST,
            "Resilience and failure testing",
            ("Litmus Chaos", "Chaos Monkey", "Gremlin"),
            (5, 30),
            Tier.MEDIUM,
            ("Chaos Engine", "Monitoring"),
            RiskLevel.HIGH,
            False,
            Tier.HIGH,
        ),
        _test_type(
            TestType.CONTRACT_TEST,
            "Service contract validation",
            ("Pact", "Spring Cloud Contract", "WireMock"),
            (2, 8),
            Tier.LOW,
            ("Contract Repository", "Service Registry"),
            RiskLevel.LOW,
            True,
            Tier.MEDIUM,
        ),
        _test_type(
            TestType.END_TO_END_TEST,
            "Complete workflow testing",
            ("Selenium", "Cypress", "Playwright"),
            (10, 45),
            Tier.HIGH,
            ("Browser", "Test Data", "External Services"),
            RiskLevel.MEDIUM,
            False,
            Tier.HIGH,
        ),
        _test_type(
            TestType.SMOKE_TEST,
            "Basic functionality verification",
            ("JUnit 5", "RestAssured", "Selenium"),
            (1, 3),
            Tier.LOW,
            (),
            RiskLevel.LOW,
            True,
            Tier.LOW,
        ),
        _test_type(
            TestType.REGRESSION_TEST,
            "Regression detection testing",
            ("JUnit 5", "TestNG", "Selenium"),
            (5, 20),
            Tier.MEDIUM,
            ("Test Data", "Baseline Results"),
            RiskLevel.LOW,
            True,
            Tier.MEDIUM,
        ),
        _test_type(
            TestType.EXPLORATORY_TEST,
            "Ad-hoc testing",
            ("Manual Testing", "Session-Based Testing"),
            (15, 60),
            Tier.LOW,
            ("Test Environment", "Test Data"),
            RiskLevel.LOW,
            False,
            Tier.LOW,
        ),
        _test_type(
            TestType.ACCESSIBILITY_TEST,
            "Accessibility compliance testing",
            ("axe-core", "WAVE", "Lighthouse"),
            (3, 10),
            Tier.LOW,
            ("Browser", "Accessibility Standards"),
            RiskLevel.LOW,
            True,
            Tier.MEDIUM,
        ),
        _test_type(
            TestType.COMPATIBILITY_TEST,
            "Cross-platform compatibility testing",
            ("BrowserStack", "Sauce Labs", "CrossBrowserTesting"),
            (10, 30),
            Tier.MEDIUM,
            ("Multiple Browsers", "Multiple Devices"),
            RiskLevel.LOW,
            True,
            Tier.MEDIUM,
        ),
        _test_type(
            TestType.LOCALIZATION_TEST,
            "Internationalization testing",
            ("i18n Testing Tools", "Translation Management"),
            (5, 15),
            Tier.LOW,
            ("Translation Files", "Locale Data"),
            RiskLevel.LOW,
            True,
            Tier.LOW,
        ),
    )
}

# External systems the dependency analyzer adds to every targeted service.
# Test types without an entry contribute nothing.
TEST_TYPE_DEPENDENCIES = {
    TestType.INTEGRATION_TEST: ("Database", "External Services"),
    TestType.API_TEST: ("API Gateway", "Service Endpoints"),
    TestType.PERFORMANCE_TEST: ("Load Balancer", "Monitoring"),
    TestType.CHAOS_TEST: ("Chaos Engine", "Monitoring"),
    TestType.CONTRACT_TEST: ("Contract Repository", "Service Registry"),
    TestType.END_TO_END_TEST: ("Browser", "Test Data", "External Services"),
    TestType.SECURITY_TEST: ("Security Scanner", "Vulnerability Database"),
}

_STANDARD_ACTIONS = (
    ActionType.RUN_TESTS,
    ActionType.ANALYZE_FAILURES,
    ActionType.GENERATE_TESTS,
    ActionType.HEALTH_CHECK,
)

SERVICE_CONTEXTS = {
    ctx.service_name: ctx
    for ctx in (
        ServiceContext(
            service_name="user-service",
            port=8081,
            description="User management, authentication, and authorization",
            dependencies=("users-db",),
            endpoints=(
                "/api/users/register",
                "/api/users/{id}",
                "/api/auth/login",
                "/api/users",
            ),
            supported_test_types=(
                TestType.UNIT_TEST,
                TestType.INTEGRATION_TEST,
                TestType.API_TEST,
                TestType.SECURITY_TEST,
            ),
            criticality=Tier.HIGH,
            supported_actions=_STANDARD_ACTIONS,
        ),
        ServiceContext(
            service_name="product-service",
            port=8082,
            description="Product catalog management",
            dependencies=("products-db",),
            endpoints=("/api/products", "/api/products/{id}"),
            supported_test_types=(
                TestType.UNIT_TEST,
                TestType.INTEGRATION_TEST,
                TestType.API_TEST,
                TestType.PERFORMANCE_TEST,
            ),
            criticality=Tier.MEDIUM,
            supported_actions=_STANDARD_ACTIONS,
        ),
        ServiceContext(
            service_name="order-service",
            port=8083,
            description="Order processing and management",
            dependencies=(
                "orders-db",
                "user-service",
                "product-service",
                "notification-service",
            ),
            endpoints=("/api/orders", "/api/orders/{id}", "/api/orders/user/{userId}"),
            supported_test_types=(
                TestType.UNIT_TEST,
                TestType.INTEGRATION_TEST,
                TestType.API_TEST,
                TestType.CHAOS_TEST,
                TestType.PERFORMANCE_TEST,
            ),
            criticality=Tier.HIGH,
            supported_actions=_STANDARD_ACTIONS + (ActionType.RUN_CHAOS_TESTS,),
        ),
        ServiceContext(
            service_name="notification-service",
            port=8084,
            description="Notification management and delivery",
            dependencies=("notifications-db",),
            endpoints=(
                "/api/notifications",
                "/api/notifications/user/{userId}",
                "/api/notifications/{id}",
            ),
            supported_test_types=(
                TestType.UNIT_TEST,
                TestType.INTEGRATION_TEST,
                TestType.API_TEST,
                TestType.PERFORMANCE_TEST,
            ),
            criticality=Tier.MEDIUM,
            supported_actions=_STANDARD_ACTIONS,
        ),
        ServiceContext(
            service_name="gateway-service",
            port=8080,
            description="API Gateway and routing service",
            dependencies=(
                "user-service",
                "product-service",
                "order-service",
                "notification-service",
            ),
            endpoints=("/api/gateway/health", "/api/gateway/routes"),
            supported_test_types=(
                TestType.API_TEST,
                TestType.INTEGRATION_TEST,
                TestType.PERFORMANCE_TEST,
                TestType.SECURITY_TEST,
            ),
            criticality=Tier.HIGH,
            supported_actions=(
                ActionType.RUN_TESTS,
                ActionType.HEALTH_CHECK,
                ActionType.MONITOR_SYSTEM,
            ),
        ),
    )
}

_CORE_TEST_TYPES = (
    TestType.UNIT_TEST,
    TestType.INTEGRATION_TEST,
    TestType.API_TEST,
    TestType.PERFORMANCE_TEST,
    TestType.SECURITY_TEST,
    TestType.CHAOS_TEST,
)

ACTION_CONTEXTS = {
    ctx.action_type: ctx
    for ctx in (
        ActionContext(
            action_type=ActionType.RUN_TESTS,
            description="Execute test suites",
            prerequisites=("Test Environment", "Test Data"),
            supported_services=ALL_SERVICES,
            supported_test_types=_CORE_TEST_TYPES,
            execution_time=ExecutionTimeRange(5, 60),
            resource_usage=Tier.MEDIUM,
            risk_level=RiskLevel.LOW,
            parallelizable=True,
            criticality=Tier.MEDIUM,
            output_types=("Test Results", "Coverage Reports", "Performance Metrics"),
        ),
        ActionContext(
            action_type=ActionType.ANALYZE_FAILURES,
            description="Analyze test failures",
            prerequisites=("Test Results", "Log Files"),
            supported_services=ALL_SERVICES,
            supported_test_types=_CORE_TEST_TYPES,
            execution_time=ExecutionTimeRange(2, 10),
            resource_usage=Tier.LOW,
            risk_level=RiskLevel.LOW,
            parallelizable=False,
            criticality=Tier.HIGH,
            output_types=("Failure Analysis", "Root Cause Analysis", "Recommendations"),
        ),
        ActionContext(
            action_type=ActionType.GENERATE_TESTS,
            description="Generate new test cases",
            prerequisites=("Source Code", "Test Requirements"),
            supported_services=ALL_SERVICES,
            supported_test_types=(
                TestType.UNIT_TEST,
                TestType.INTEGRATION_TEST,
                TestType.API_TEST,
            ),
            execution_time=ExecutionTimeRange(5, 30),
            resource_usage=Tier.MEDIUM,
            risk_level=RiskLevel.LOW,
            parallelizable=False,
            criticality=Tier.MEDIUM,
            output_types=("Generated Test Code", "Test Documentation", "Test Data"),
        ),
        ActionContext(
            action_type=ActionType.OPTIMIZE_TESTS,
            description="Optimize existing test suites",
            prerequisites=("Test Results", "Execution History"),
            supported_services=ALL_SERVICES,
            supported_test_types=_CORE_TEST_TYPES,
            execution_time=ExecutionTimeRange(5, 20),
            resource_usage=Tier.LOW,
            risk_level=RiskLevel.LOW,
            parallelizable=True,
            criticality=Tier.LOW,
            output_types=("Optimization Report", "Flaky Test List"),
        ),
        ActionContext(
            action_type=ActionType.HEALTH_CHECK,
            description="Perform system health checks",
            prerequisites=("Service Endpoints", "Monitoring Tools"),
            supported_services=ALL_SERVICES,
            supported_test_types=(),
            execution_time=ExecutionTimeRange(1, 5),
            resource_usage=Tier.LOW,
            risk_level=RiskLevel.LOW,
            parallelizable=True,
            criticality=Tier.HIGH,
            output_types=("Health Status", "Metrics", "Alerts"),
        ),
        ActionContext(
            action_type=ActionType.RUN_CHAOS_TESTS,
            description="Execute chaos engineering tests",
            prerequisites=("Chaos Engine", "Monitoring", "Rollback Plan"),
            supported_services=ALL_SERVICES,
            supported_test_types=(TestType.CHAOS_TEST,),
            execution_time=ExecutionTimeRange(5, 30),
            resource_usage=Tier.MEDIUM,
            risk_level=RiskLevel.HIGH,
            parallelizable=False,
            criticality=Tier.HIGH,
            output_types=("Chaos Results", "Resilience Metrics", "Recovery Analysis"),
        ),
    )
}


def build_default_registry() -> ContextRegistry:
    """Freeze the seed tables into a ContextRegistry."""
    return ContextRegistry(
        test_types=TEST_TYPE_CONTEXTS,
        services=SERVICE_CONTEXTS,
        actions=ACTION_CONTEXTS,
        test_type_dependency_table=TEST_TYPE_DEPENDENCIES,
    )
