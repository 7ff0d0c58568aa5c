"""
OneAgent layer ARN resolver.

Queries the Dynatrace deployment API for the latest OneAgent Lambda layer
names and turns them into layer ARNs for the deployment region, e.g.

    {"nodejs": "arn:aws:lambda:us-east-1:725887861453:layer:Dynatrace_OneAgent_1_217_1_nodejs:1"}

Nothing is cached: every call resolves the configuration and queries the API again.
"""

import asyncio
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

import httpx

from todo_service.handlers.utils.observability import logger
from todo_service.layers.config import (
    CONNECTION_BASE_URL_PATH,
    PAAS_TOKEN_PATH,
    REGION_PATH,
    ConfigurationResolver,
)
from todo_service.layers.exceptions import (
    ConfigurationError,
    ConfigurationMissingError,
    ParseFailedError,
    RetrievalFailedError,
)

LAYER_ACCOUNT_ID = '725887861453'
DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class RegistryEndpoint:
    path: str
    accept: str


class Registry(Enum):
    """The two deployment API endpoints serving the latest layer names."""

    AGENT_LAMBDA = RegistryEndpoint(path='/api/v1/deployment/agent/lambda/latest', accept='*/*')
    LAMBDA_AGENT = RegistryEndpoint(path='/api/v1/deployment/lambda/agent/latest', accept='application/json')


@dataclass(frozen=True)
class DeploymentContext:
    region: str
    connection_base_url: str
    paas_token: str


def build_layer_arn(region: str, partial_layer_name: str, runtime: str) -> str:
    return f'arn:aws:lambda:{region}:{LAYER_ACCOUNT_ID}:layer:{partial_layer_name}_{runtime}:1'


def extract_versions(document: Any) -> Dict[str, str]:
    """
    Return the runtime to partial layer name mapping from a registry response.

    Both ``{"versions": {runtime: name}}`` and a flat ``{runtime: name}`` are accepted.
    A document carrying a ``versions`` key is always read as the envelope.

    Raises:
        ParseFailedError: If the document is not such a mapping
    """
    if not isinstance(document, dict):
        raise ParseFailedError(f'could not parse layer names - expected a JSON object, got {type(document).__name__}')

    versions = document.get('versions', document)
    if not isinstance(versions, dict):
        raise ParseFailedError(f"could not parse layer names - 'versions' is not a JSON object, got {type(versions).__name__}")
    for runtime, partial_layer_name in versions.items():
        if not isinstance(partial_layer_name, str):
            raise ParseFailedError(f"could not parse layer names - layer name for '{runtime}' is not a string")
    return versions


def to_layer_arns(region: str, versions: Dict[str, str]) -> Dict[str, str]:
    return {runtime: build_layer_arn(region, partial_layer_name, runtime) for runtime, partial_layer_name in versions.items()}


class LayerArnResolver:
    """
    Resolves OneAgent layer ARNs for every runtime the deployment API knows about.

    Args:
        configuration: Lookup into the deployment tool's configuration
        fallback_paas_token: Token used when the configuration carries none,
            typically the value of ``DT_PAAS_TOKEN``
        registry: Deployment API endpoint to query
        timeout: Request timeout in seconds
        http_client: Optional client to send the request with; the caller keeps ownership
    """

    def __init__(
        self,
        configuration: ConfigurationResolver,
        fallback_paas_token: Optional[str] = None,
        registry: Registry = Registry.AGENT_LAMBDA,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.configuration = configuration
        self.fallback_paas_token = fallback_paas_token
        self.registry = registry
        self.timeout = timeout
        self.http_client = http_client

    async def _resolve_paas_token(self) -> Optional[str]:
        token = await self.configuration.resolve(PAAS_TOKEN_PATH)
        return token if token is not None else self.fallback_paas_token

    async def resolve_context(self) -> DeploymentContext:
        """
        Resolve token, region and connection base URL concurrently.

        Raises:
            ConfigurationMissingError: If any of the three values is absent
            ConfigurationError: If the connection base URL is not an absolute http(s) URL
        """
        paas_token, region, base_url = await asyncio.gather(
            self._resolve_paas_token(),
            self.configuration.resolve(REGION_PATH),
            self.configuration.resolve(CONNECTION_BASE_URL_PATH),
        )

        if paas_token is None:
            raise ConfigurationMissingError(
                'neither custom.queryOneAgentLayerARNs.paasToken nor DT_PAAS_TOKEN environment variable defined'
            )
        if region is None:
            raise ConfigurationMissingError('could not resolve AWS region')
        if base_url is None:
            raise ConfigurationMissingError('could not resolve DT_CONNECTION_BASE_URL from custom.OneAgentConfig')

        try:
            url = httpx.URL(str(base_url))
        except httpx.InvalidURL as exc:
            raise ConfigurationError(f'DT_CONNECTION_BASE_URL is not a valid URL: {base_url}') from exc
        if url.scheme not in ('http', 'https') or not url.host:
            raise ConfigurationError(f'DT_CONNECTION_BASE_URL is not a valid URL: {base_url}')

        return DeploymentContext(region=str(region), connection_base_url=str(base_url), paas_token=str(paas_token))

    def registry_url(self, context: DeploymentContext) -> str:
        return f'{context.connection_base_url.rstrip("/")}{self.registry.value.path}'

    async def _fetch(self, client: httpx.AsyncClient, context: DeploymentContext) -> httpx.Response:
        url = self.registry_url(context)
        headers = {
            'Accept': self.registry.value.accept,
            'Authorization': f'Api-Token {context.paas_token}',
        }
        logger.debug('Querying OneAgent layer names', extra={'url': url})
        try:
            return await client.get(url, headers=headers, timeout=self.timeout)
        except httpx.HTTPError as exc:
            raise RetrievalFailedError(f'Could not retrieve OneAgent layer names - {exc}') from exc

    async def resolve(self) -> Dict[str, str]:
        """
        Resolve the layer ARN of every runtime offered by the deployment API.

        Returns:
            Mapping of runtime name to layer ARN

        Raises:
            LayerResolutionError: On missing configuration, a non-200 answer or an unparsable body
        """
        context = await self.resolve_context()

        if self.http_client is not None:
            response = await self._fetch(self.http_client, context)
        else:
            async with httpx.AsyncClient() as client:
                response = await self._fetch(client, context)

        if response.status_code != 200:
            logger.error('OneAgent layer name request failed', extra={'status_code': response.status_code})
            raise RetrievalFailedError(
                f'Could not retrieve OneAgent layer names - request failed with {response.status_code}',
                status_code=response.status_code,
            )

        try:
            versions = extract_versions(json.loads(response.text))
        except ValueError as exc:
            raise ParseFailedError(f'could not parse layer names - {exc}') from exc

        layer_arns = to_layer_arns(context.region, versions)
        logger.info('Resolved OneAgent layer ARNs', extra={'region': context.region, 'runtimes': sorted(layer_arns)})
        return layer_arns

    async def resolve_for_runtime(self, runtime: str) -> Optional[str]:
        """Resolve the layer ARN for a single runtime, None if the API offers no layer for it."""
        layer_arns = await self.resolve()
        return layer_arns.get(runtime)


def get_layer_arns(configuration: ConfigurationResolver, **kwargs: Any) -> Dict[str, str]:
    """Blocking variant of ``LayerArnResolver.resolve`` for synchronous deployment hooks."""
    return asyncio.run(LayerArnResolver(configuration, **kwargs).resolve())


def get_layer_arn(configuration: ConfigurationResolver, runtime: str, **kwargs: Any) -> Optional[str]:
    """Blocking variant of ``LayerArnResolver.resolve_for_runtime``."""
    return asyncio.run(LayerArnResolver(configuration, **kwargs).resolve_for_runtime(runtime))
