"""CLI commands for proxyctl."""
from .proxy_config import CONTEXT_SETTINGS, proxy_config

__all__ = ['proxy_config', 'CONTEXT_SETTINGS']
