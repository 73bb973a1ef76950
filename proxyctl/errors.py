"""Exceptions raised by proxyctl.

Library code raises these; the command layer turns them into an error
message and a non-zero exit status.
"""
from typing import Optional


class ProxyConfigError(Exception):
    """Base class for all proxyctl failures."""
    pass


class ValidationError(ProxyConfigError):
    """Bad or missing command arguments."""
    pass


class KubeConnectionError(ProxyConfigError):
    """A Kubernetes client could not be created."""
    pass


class FetchError(ProxyConfigError):
    """The config dump could not be read from the pod."""

    def __init__(self, pod: str, namespace: str, cause: str):
        self.pod = pod
        self.namespace = namespace
        self.cause = cause
        super().__init__(f"{cause} (pod {pod}, namespace {namespace})")


class FormatError(ProxyConfigError):
    """The config dump could not be decoded or re-encoded."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(message)
