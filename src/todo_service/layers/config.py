"""
Deployment configuration lookups for the layer resolver.

The deployment tool owns the configuration; the resolver only asks for values
by path, e.g. ``("provider", "region")``.
"""

from typing import Any, Mapping, Optional, Protocol, Sequence, runtime_checkable

REGION_PATH = ('provider', 'region')
CONNECTION_BASE_URL_PATH = ('custom', 'OneAgentConfig', 'DT_CONNECTION_BASE_URL')
PAAS_TOKEN_PATH = ('custom', 'queryOneAgentLayerARNs', 'paasToken')


@runtime_checkable
class ConfigurationResolver(Protocol):
    """Resolves a configuration property by path, returning None when it is absent."""

    async def resolve(self, path: Sequence[str]) -> Optional[Any]:
        ...


class MappingConfigurationResolver:
    """ConfigurationResolver backed by a nested mapping such as a parsed serverless.yml."""

    def __init__(self, document: Mapping[str, Any]) -> None:
        self.document = document

    async def resolve(self, path: Sequence[str]) -> Optional[Any]:
        node: Any = self.document
        for key in path:
            if not isinstance(node, Mapping) or key not in node:
                return None
            node = node[key]
        return node
