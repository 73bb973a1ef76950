"""The proxy-config command: show the Envoy configuration of a pod."""
import logging
from typing import Optional

import typer

from ..config import Config
from ..errors import FetchError, FormatError, KubeConnectionError, ValidationError
from ..modules.fetcher import ProxyConfigFetcher
from ..modules.summarizer import render
from ..ui import output
from ..utils.kube import create_core_api

logger = logging.getLogger("proxyctl.proxy_config")

CONTEXT_SETTINGS = {"allow_extra_args": True}


def validate_flags(ctx: typer.Context, pod: Optional[str], output_format: Optional[str]) -> None:
    """Reject bad arguments before anything touches the cluster."""
    if ctx.args:
        raise ValidationError(f"non-flag arguments given: {', '.join(ctx.args)}")

    if not pod or not pod.strip():
        raise ValidationError("pod must be specified (e.g. --pod podname)")

    if output_format and output_format.lower() not in Config.OUTPUT_FORMATS:
        raise ValidationError(
            f"unsupported format {output_format!r} (expected one of: {', '.join(Config.OUTPUT_FORMATS)})"
        )


def proxy_config(
    ctx: typer.Context,
    pod: Optional[str] = typer.Option(None, "--pod", "-p", help="The name of the Kubernetes Pod to query."),
    namespace: str = typer.Option(Config.DEFAULT_NAMESPACE, "--namespace", "-n", help="The Namespace of the Kubernetes Pod to query."),
    full_config: bool = typer.Option(False, "--full-config", help="Return the full proxy configuration."),
    output_format: Optional[str] = typer.Option(None, "--format", "-o", help="The output format for --full-config (JSON, YAML)."),
    kubeconfig: Optional[str] = typer.Option(None, "--kubeconfig", "-c", help="The path to the Kubernetes config file."),
    context: Optional[str] = typer.Option(None, "--context", help="The name of the Kubernetes context to use."),
):
    """Get the proxy configuration for a Kubernetes Pod."""
    try:
        validate_flags(ctx, pod, output_format)
    except ValidationError as e:
        output(f"Error validating flags: {e}", style="error")
        raise typer.Exit(code=1)
    pod = pod.strip()

    if output_format and not full_config:
        logger.warning("--format only applies with --full-config; showing the summary")

    try:
        core_api = create_core_api(kubeconfig, context)
    except KubeConnectionError as e:
        output(f"Error setting up Kubernetes client: {e}", style="error")
        raise typer.Exit(code=1)

    logger.debug("Fetching config dump for %s/%s", namespace, pod)
    try:
        raw = ProxyConfigFetcher(core_api).fetch(pod, namespace)
    except FetchError as e:
        output(f"Error fetching configuration for {pod}: {e}", style="error")
        raise typer.Exit(code=1)

    try:
        report = render(raw, full_config=full_config, output_format=output_format)
    except FormatError as e:
        output(f"Error formatting configuration for {pod}: {e}", style="error")
        raise typer.Exit(code=1)

    output(f"Proxy configuration for {pod} in namespace {namespace}", style="header")
    if report:
        output(report)
