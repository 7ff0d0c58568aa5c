"""
Print the latest OneAgent layer ARNs as JSON.

    DT_PAAS_TOKEN=... python -m todo_service.layers --config serverless.json
    python -m todo_service.layers --region eu-west-1 --base-url https://abc.live.dynatrace.com --runtime python
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from todo_service.handlers.models.env_vars import get_layer_resolver_env_vars
from todo_service.layers.config import MappingConfigurationResolver
from todo_service.layers.exceptions import LayerResolutionError
from todo_service.layers.resolver import Registry, get_layer_arn, get_layer_arns

REGISTRY_CHOICES = {
    'agent-lambda': Registry.AGENT_LAMBDA,
    'lambda-agent': Registry.LAMBDA_AGENT,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='python -m todo_service.layers',
        description='Resolve Dynatrace OneAgent Lambda layer ARNs for a deployment',
    )
    parser.add_argument(
        '--config',
        type=Path,
        help='JSON deployment configuration with provider.region and custom.OneAgentConfig',
    )
    parser.add_argument('--region', help='AWS region, overrides provider.region')
    parser.add_argument('--base-url', help='Dynatrace connection base URL, overrides DT_CONNECTION_BASE_URL')
    parser.add_argument('--runtime', help='Print only the ARN for this runtime')
    parser.add_argument(
        '--registry',
        choices=sorted(REGISTRY_CHOICES),
        default='agent-lambda',
        help='Deployment API endpoint to query (default: agent-lambda)',
    )
    parser.add_argument('--timeout', type=float, help='Request timeout in seconds')
    return parser


def load_document(args: argparse.Namespace) -> Dict[str, Any]:
    document: Dict[str, Any] = json.loads(args.config.read_text()) if args.config else {}
    if args.region:
        document.setdefault('provider', {})['region'] = args.region
    if args.base_url:
        document.setdefault('custom', {}).setdefault('OneAgentConfig', {})['DT_CONNECTION_BASE_URL'] = args.base_url
    return document


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    env_vars = get_layer_resolver_env_vars()

    configuration = MappingConfigurationResolver(load_document(args))
    options = {
        'fallback_paas_token': env_vars.DT_PAAS_TOKEN,
        'registry': REGISTRY_CHOICES[args.registry],
        'timeout': args.timeout or env_vars.LAYER_REGISTRY_TIMEOUT_SECONDS,
    }

    try:
        if args.runtime:
            result: Any = get_layer_arn(configuration, args.runtime, **options)
        else:
            result = get_layer_arns(configuration, **options)
    except LayerResolutionError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main())
