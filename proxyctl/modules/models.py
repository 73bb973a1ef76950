"""
Data models for the proxy configuration summary.
"""
from dataclasses import dataclass, field
from typing import List, Optional

@dataclass
class BootstrapSummary:
    """Identity and startup settings of the proxy."""
    node_id: Optional[str] = None
    cluster: Optional[str] = None
    namespace: Optional[str] = None
    partition: Optional[str] = None
    envoy_version: Optional[str] = None
    admin_address: Optional[str] = None
    static_clusters: List[str] = field(default_factory=list)
    extensions: int = 0
    ads_api_type: Optional[str] = None
    last_updated: Optional[str] = None

@dataclass
class ClusterSummary:
    """One upstream cluster row."""
    name: str
    type: str
    endpoints: int = 0
    connect_timeout: Optional[str] = None
    lb_policy: Optional[str] = None
    tls: bool = False
    last_updated: Optional[str] = None

@dataclass
class ListenerSummary:
    """One listener row."""
    name: str
    address: Optional[str] = None
    direction: str = 'UNSPECIFIED'
    filter_chains: int = 0
    filters: List[str] = field(default_factory=list)
    mtls: bool = False
    last_updated: Optional[str] = None

@dataclass
class ConfigSummary:
    """Summary of one config dump. ``None`` marks a section absent from the dump."""
    bootstrap: Optional[BootstrapSummary] = None
    static_clusters: Optional[List[str]] = None
    clusters: Optional[List[ClusterSummary]] = None
    listeners: Optional[List[ListenerSummary]] = None
    secrets: bool = False
