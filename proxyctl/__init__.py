"""proxyctl - inspect the Envoy sidecar configuration of a Kubernetes pod."""

__version__ = "0.1.0"
