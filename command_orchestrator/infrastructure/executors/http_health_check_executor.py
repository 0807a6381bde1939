"""HTTP health check executor.

Polls a service's health endpoint (Spring Boot actuator style) and reports
whether it answered with status "UP". Transport errors are retried with
tenacity; all failures are returned as failed ExecutionResults.
"""

import time
from typing import Any

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from command_orchestrator.domain.entities.execution_result import ExecutionResult
from command_orchestrator.domain.entities.registry import ContextRegistry
from command_orchestrator.domain.repositories.action_executor import (
    ActionExecutorInterface,
)
from command_orchestrator.infrastructure.config.settings import get_settings
from command_orchestrator.infrastructure.observability.metrics import (
    record_health_check,
)

logger = structlog.get_logger(__name__)


class HealthCheckError(Exception):
    """Base exception for health check errors."""

    pass


class ServiceUnreachableError(HealthCheckError):
    """The service could not be reached after retries."""

    pass


class HttpHealthCheckExecutor(ActionExecutorInterface):
    """Health check executor backed by httpx.

    Attributes:
        scheme: URL scheme used to reach services
        host: Host the services listen on
        retries: Attempts per check on transport errors
    """

    def __init__(
        self,
        registry: ContextRegistry,
        client: httpx.AsyncClient | None = None,
        scheme: str | None = None,
        host: str | None = None,
        timeout: float | None = None,
        retries: int | None = None,
        retry_wait_seconds: float = 1.0,
    ) -> None:
        """Initialize the executor.

        Args:
            registry: Context registry used to resolve ports and endpoints
            client: Pre-built HTTP client (a new one is created when omitted)
            scheme: URL scheme (defaults to settings)
            host: Service host (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
            retries: Attempts on transport errors (defaults to settings)
            retry_wait_seconds: Exponential backoff multiplier between attempts
        """
        executor_config = get_settings().executor
        self._registry = registry
        self.scheme = scheme or executor_config.health_check_scheme
        self.host = host or executor_config.health_check_host
        self.retries = retries or executor_config.health_check_retries
        self.retry_wait_seconds = retry_wait_seconds
        self.client = client or httpx.AsyncClient(
            timeout=timeout or executor_config.health_check_timeout_seconds
        )

    async def close(self) -> None:
        """Close the HTTP client connection."""
        await self.client.aclose()

    async def __aenter__(self) -> "HttpHealthCheckExecutor":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def health_url(self, service_name: str) -> str | None:
        """Health endpoint URL for a registered service, None if unknown."""
        service = self._registry.service(service_name)
        if service is None:
            return None
        endpoint = (
            service.health_check_endpoints[0]
            if service.health_check_endpoints
            else "/actuator/health"
        )
        return f"{self.scheme}://{self.host}:{service.port}{endpoint}"

    async def execute(
        self, service_name: str, parameters: dict[str, Any]
    ) -> ExecutionResult:
        url = self.health_url(service_name)
        if url is None:
            logger.warning("health_check_unknown_service", service=service_name)
            record_health_check("unknown_service")
            return ExecutionResult.failure(f"Service not found: {service_name}")

        start = time.perf_counter()
        try:
            payload = await self._fetch_health(url)
        except ServiceUnreachableError as e:
            logger.error("health_check_unreachable", service=service_name, error=str(e))
            record_health_check("unreachable")
            return ExecutionResult.failure(
                f"Health check failed: {e}", {"service": service_name, "url": url}
            )
        except HealthCheckError as e:
            logger.warning("health_check_error", service=service_name, error=str(e))
            record_health_check("down")
            return ExecutionResult.failure(
                f"Health check failed: {e}", {"service": service_name, "url": url}
            )

        elapsed_ms = round((time.perf_counter() - start) * 1000, 1)
        status = payload.get("status", "UNKNOWN")
        data = {
            "service": service_name,
            "url": url,
            "status": status,
            "responseTimeMs": elapsed_ms,
        }
        if status != "UP":
            logger.warning("health_check_down", service=service_name, status=status)
            record_health_check("down")
            return ExecutionResult.failure(
                f"Service {service_name} is {status}", data
            )

        logger.info("health_check_passed", service=service_name, elapsed_ms=elapsed_ms)
        record_health_check("up")
        return ExecutionResult.ok("Health check passed", data)

    async def _fetch_health(self, url: str) -> dict[str, Any]:
        """GET the health endpoint with retry on transport errors.

        Raises:
            ServiceUnreachableError: If the service is unreachable after retries
            HealthCheckError: If the service answers with an error or invalid body
        """
        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type(httpx.RequestError),
                stop=stop_after_attempt(self.retries),
                wait=wait_exponential(multiplier=self.retry_wait_seconds, max=10),
                reraise=True,
            ):
                with attempt:
                    response = await self.client.get(url)
        except httpx.RequestError as e:
            raise ServiceUnreachableError(f"Failed to connect to {url}: {e}") from e

        if response.is_error:
            raise HealthCheckError(
                f"{url} returned status code {response.status_code}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise HealthCheckError(f"{url} returned an invalid health payload") from e
        if not isinstance(payload, dict):
            raise HealthCheckError(f"{url} returned an invalid health payload")
        return payload
