"""Errors raised while resolving OneAgent layer ARNs. None of them are retried."""

from typing import Optional


class LayerResolutionError(Exception):
    """Base exception for layer ARN resolution failures."""
    pass


class ConfigurationError(LayerResolutionError):
    """Raised when the deployment context holds an unusable value."""
    pass


class ConfigurationMissingError(ConfigurationError):
    """Raised when the token, region or connection base URL cannot be resolved."""
    pass


class RetrievalFailedError(LayerResolutionError):
    """Raised when the deployment API does not answer with 200."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ParseFailedError(LayerResolutionError):
    """Raised when the deployment API response is not a runtime to layer name mapping."""
    pass
