"""
Deployment-time resolution of Dynatrace OneAgent Lambda layer ARNs.

Typical use from a deployment hook::

    configuration = MappingConfigurationResolver(serverless_config)
    arns = get_layer_arns(configuration, fallback_paas_token=os.environ.get('DT_PAAS_TOKEN'))
    arns['python']
"""

from todo_service.layers.config import ConfigurationResolver, MappingConfigurationResolver
from todo_service.layers.exceptions import (
    ConfigurationError,
    ConfigurationMissingError,
    LayerResolutionError,
    ParseFailedError,
    RetrievalFailedError,
)
from todo_service.layers.resolver import (
    DeploymentContext,
    LayerArnResolver,
    Registry,
    build_layer_arn,
    extract_versions,
    get_layer_arn,
    get_layer_arns,
)

__all__ = [
    "ConfigurationResolver",
    "MappingConfigurationResolver",
    "LayerArnResolver",
    "DeploymentContext",
    "Registry",
    "build_layer_arn",
    "extract_versions",
    "get_layer_arns",
    "get_layer_arn",
    "LayerResolutionError",
    "ConfigurationError",
    "ConfigurationMissingError",
    "RetrievalFailedError",
    "ParseFailedError",
]
