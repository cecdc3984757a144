"""
Exception hierarchy for Pod Pruner
"""

from typing import Optional


class PrunerError(Exception):
    """Base class for all Pod Pruner errors"""


class ConfigError(PrunerError):
    """Raised when the configuration cannot be parsed"""


class AuthenticationError(PrunerError):
    """Raised when no usable Kubernetes configuration could be loaded"""


class ResourceListError(PrunerError):
    """Raised when resources of a kind could not be listed in a namespace"""

    def __init__(self, message: str, namespace: str, kind: Optional[str] = None):
        super().__init__(message)
        self.namespace = namespace
        self.kind = kind


class ListTimeout(ResourceListError):
    """Raised when a listing does not complete within its time budget"""
