"""
Proxy configuration retrieval and summary modules.
"""
from .fetcher import ProxyConfigFetcher
from .summarizer import parse_config_dump, render, summarize, format_summary

__all__ = [
    'ProxyConfigFetcher',
    'parse_config_dump',
    'render',
    'summarize',
    'format_summary',
]
