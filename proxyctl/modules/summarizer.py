"""Summarize an Envoy config dump for operators.

The dump is decoded into a plain JSON tree and only a handful of paths are
read from it. Sections are located by the last component of their ``@type``
so their order in ``configs`` does not matter, and any missing section simply
produces no report block.

TLS contexts are never descended into: certificate chains and private keys
only ever leave this module through the full-config output.
"""
import json
import logging
from typing import Any, Dict, List, Optional

import yaml
from tabulate import tabulate

from ..config import Config
from ..errors import FormatError
from ..utils import as_list, dig, display
from .models import BootstrapSummary, ClusterSummary, ConfigSummary, ListenerSummary

logger = logging.getLogger("proxyctl.summarizer")

BOOTSTRAP = "BootstrapConfigDump"
CLUSTERS = "ClustersConfigDump"
LISTENERS = "ListenersConfigDump"
SECRETS = "SecretsConfigDump"
SECTIONS = (BOOTSTRAP, CLUSTERS, LISTENERS, SECRETS)

SECRETS_NOTICE = "Secret material is present but withheld; use --full-config to show it."
INDENT = "  "

CLUSTER_HEADERS = ["Name", "Type", "Endpoints", "Connect Timeout", "LB Policy", "TLS", "Last Updated"]
LISTENER_HEADERS = ["Name", "Address", "Direction", "Filter Chains", "Filters", "mTLS", "Last Updated"]


def parse_config_dump(raw: str) -> Dict[str, Dict[str, Any]]:
    """Decode a config dump and index its sections by type.

    Args:
        raw: Config dump text as returned by the admin endpoint

    Returns:
        Mapping of section name (e.g. ``ClustersConfigDump``) to section body
        for the four known sections that are present

    Raises:
        FormatError: if the text is not a JSON object with a ``configs`` list
    """
    try:
        document = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise FormatError(f"config dump is not valid JSON: {e}", e) from e

    if not isinstance(document, dict):
        raise FormatError("config dump is not a JSON object")

    configs = document.get("configs", [])
    if not isinstance(configs, list):
        raise FormatError("config dump 'configs' is not a list")

    sections = {}
    for entry in configs:
        type_url = entry.get("@type") if isinstance(entry, dict) else None
        if not isinstance(type_url, str):
            logger.debug("Skipping config entry without @type")
            continue
        kind = type_url.rsplit(".", 1)[-1]
        if kind not in SECTIONS:
            logger.debug("Ignoring config section %s", kind)
            continue
        if kind in sections:
            logger.warning("Duplicate %s section in config dump, using the first", kind)
            continue
        sections[kind] = entry

    logger.debug("Config dump sections: %s", ", ".join(sections) or "none")
    return sections


def _socket_address(address: Any) -> Optional[str]:
    pipe = dig(address, "pipe", "path")
    if pipe:
        return pipe
    host = dig(address, "socket_address", "address")
    if host is None:
        return None
    port = dig(address, "socket_address", "port_value", default=0)
    return f"{host}:{port}"


def _bootstrap_summary(section: Dict[str, Any]) -> BootstrapSummary:
    bootstrap = section.get("bootstrap", {})
    node = dig(bootstrap, "node", default={})
    version = dig(node, "user_agent_build_version", "version")
    envoy_version = None
    if isinstance(version, dict):
        envoy_version = "{}.{}.{}".format(
            version.get("major_number", 0),
            version.get("minor_number", 0),
            version.get("patch", 0),
        )

    return BootstrapSummary(
        node_id=dig(node, "id"),
        cluster=dig(node, "cluster"),
        namespace=dig(node, "metadata", "namespace"),
        partition=dig(node, "metadata", "partition"),
        envoy_version=envoy_version,
        admin_address=_socket_address(dig(bootstrap, "admin", "address")),
        static_clusters=[
            c.get("name") for c in as_list(dig(bootstrap, "static_resources", "clusters"))
            if isinstance(c, dict)
        ],
        extensions=len(as_list(dig(node, "extensions"))),
        ads_api_type=dig(bootstrap, "dynamic_resources", "ads_config", "api_type"),
        last_updated=section.get("last_updated"),
    )


def _cluster_summary(entry: Dict[str, Any]) -> ClusterSummary:
    cluster = entry.get("cluster")
    if not isinstance(cluster, dict):
        cluster = {}
    # proto3 JSON omits enum defaults: STATIC and ROUND_ROBIN
    cluster_type = cluster.get("type") or dig(cluster, "cluster_type", "name") or "STATIC"
    endpoints = sum(
        len(as_list(locality.get("lb_endpoints")))
        for locality in as_list(dig(cluster, "load_assignment", "endpoints"))
        if isinstance(locality, dict)
    )
    return ClusterSummary(
        name=cluster.get("name"),
        type=cluster_type,
        endpoints=endpoints,
        connect_timeout=cluster.get("connect_timeout"),
        lb_policy=cluster.get("lb_policy", "ROUND_ROBIN"),
        tls="transport_socket" in cluster,
        last_updated=entry.get("last_updated"),
    )


def _listener_summary(entry: Dict[str, Any]) -> ListenerSummary:
    state = entry.get("active_state") or entry.get("warming_state") or entry.get("draining_state")
    if not isinstance(state, dict):
        state = {}
    listener = state.get("listener")
    if not isinstance(listener, dict):
        listener = {}

    chains = [c for c in as_list(listener.get("filter_chains")) if isinstance(c, dict)]
    if isinstance(listener.get("default_filter_chain"), dict):
        chains.append(listener["default_filter_chain"])

    filters = []
    for chain in chains:
        for f in as_list(chain.get("filters")):
            name = dig(f, "name")
            if name and name not in filters:
                filters.append(name)

    return ListenerSummary(
        name=entry.get("name") or listener.get("name"),
        address=_socket_address(listener.get("address")),
        direction=listener.get("traffic_direction", "UNSPECIFIED"),
        filter_chains=len(chains),
        filters=filters,
        mtls=any(
            dig(chain, "transport_socket", "typed_config", "require_client_certificate") is True
            for chain in chains
        ),
        last_updated=state.get("last_updated"),
    )


def summarize(sections: Dict[str, Dict[str, Any]]) -> ConfigSummary:
    """Extract the report fields from indexed config dump sections."""
    summary = ConfigSummary()

    if BOOTSTRAP in sections:
        summary.bootstrap = _bootstrap_summary(sections[BOOTSTRAP])

    if CLUSTERS in sections:
        section = sections[CLUSTERS]
        summary.static_clusters = [
            dig(c, "cluster", "name") for c in as_list(section.get("static_clusters"))
        ]
        summary.clusters = [
            _cluster_summary(c) for c in as_list(section.get("dynamic_active_clusters"))
            if isinstance(c, dict)
        ]

    if LISTENERS in sections:
        summary.listeners = [
            _listener_summary(item) for item in as_list(sections[LISTENERS].get("dynamic_listeners"))
            if isinstance(item, dict)
        ]

    summary.secrets = SECRETS in sections
    return summary


def _indent(text: str) -> List[str]:
    return [INDENT + line for line in text.splitlines()]


def _bootstrap_block(bootstrap: BootstrapSummary) -> List[str]:
    rows = [
        ("Node ID", bootstrap.node_id),
        ("Cluster", bootstrap.cluster),
        ("Namespace", bootstrap.namespace),
        ("Partition", bootstrap.partition),
        ("Envoy Version", bootstrap.envoy_version),
        ("Admin Address", bootstrap.admin_address),
        ("Static Clusters", ", ".join(str(n) for n in bootstrap.static_clusters if n)),
        ("Extensions", bootstrap.extensions),
        ("ADS API", bootstrap.ads_api_type),
        ("Last Updated", bootstrap.last_updated),
    ]
    return ["Bootstrap:"] + _indent(
        tabulate([(k + ":", display(v)) for k, v in rows], tablefmt="plain", disable_numparse=True)
    )


def _clusters_block(static_clusters: List[str], clusters: List[ClusterSummary]) -> List[str]:
    lines = ["Clusters:", INDENT + "Static: " + display(", ".join(str(n) for n in static_clusters if n))]
    if not clusters:
        return lines + [INDENT + "No dynamic clusters."]
    table = [
        (display(c.name), c.type, c.endpoints, display(c.connect_timeout), display(c.lb_policy),
         display(c.tls), display(c.last_updated))
        for c in clusters
    ]
    return lines + _indent(tabulate(table, headers=CLUSTER_HEADERS, tablefmt="simple", disable_numparse=True))


def _listeners_block(listeners: List[ListenerSummary]) -> List[str]:
    if not listeners:
        return ["Listeners:", INDENT + "No dynamic listeners."]
    table = [
        (display(item.name), display(item.address), item.direction, item.filter_chains,
         display(", ".join(str(f) for f in item.filters)), display(item.mtls), display(item.last_updated))
        for item in listeners
    ]
    return ["Listeners:"] + _indent(tabulate(table, headers=LISTENER_HEADERS, tablefmt="simple", disable_numparse=True))


def format_summary(summary: ConfigSummary) -> str:
    """Lay out the summary as text blocks: bootstrap, clusters, listeners, secrets."""
    blocks = []
    if summary.bootstrap is not None:
        blocks.append(_bootstrap_block(summary.bootstrap))
    if summary.clusters is not None:
        blocks.append(_clusters_block(summary.static_clusters or [], summary.clusters))
    if summary.listeners is not None:
        blocks.append(_listeners_block(summary.listeners))
    if summary.secrets:
        blocks.append(["Secrets:", INDENT + SECRETS_NOTICE])
    return "\n\n".join("\n".join(block) for block in blocks)


def render(raw: str, full_config: bool = False, output_format: Optional[str] = None) -> str:
    """Produce command output for a config dump.

    Args:
        raw: Config dump text
        full_config: Return the whole dump instead of the summary
        output_format: ``json`` (unchanged text) or ``yaml``; only used with
            ``full_config``

    Raises:
        FormatError: if the dump cannot be decoded where decoding is needed
    """
    if full_config:
        fmt = (output_format or "json").lower()
        if fmt == "json":
            return raw
        if fmt == "yaml":
            try:
                document = json.loads(raw)
            except (TypeError, ValueError) as e:
                raise FormatError(f"config dump is not valid JSON: {e}", e) from e
            return yaml.safe_dump(document, sort_keys=False, default_flow_style=False)
        raise FormatError(
            f"unsupported output format {output_format!r} (expected one of: {', '.join(Config.OUTPUT_FORMATS)})"
        )

    sections = parse_config_dump(raw)
    try:
        return format_summary(summarize(sections))
    except (AttributeError, TypeError, ValueError) as e:
        raise FormatError(f"config dump has an unexpected shape: {e}", e) from e
