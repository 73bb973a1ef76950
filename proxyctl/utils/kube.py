import logging
import os
from pathlib import Path
from typing import List, Optional

import yaml
from kubernetes import client, config
from kubernetes.config.config_exception import ConfigException
from kubernetes.stream import stream

from ..errors import KubeConnectionError

logger = logging.getLogger("proxyctl.kube")


def create_core_api(kubeconfig: Optional[str] = None, context: Optional[str] = None) -> client.CoreV1Api:
    """
    Build a CoreV1Api client for a single command run.

    Resolution order: the KUBECONFIG_CONTENT env var, an explicit kubeconfig
    path, the default kubeconfig locations, then in-cluster service account
    credentials.

    Raises:
        KubeConnectionError: if no usable configuration is found
    """
    # CI/CD secret-based loading
    if "KUBECONFIG_CONTENT" in os.environ:
        logger.debug("Loading kubeconfig from KUBECONFIG_CONTENT")
        try:
            content = yaml.safe_load(os.environ["KUBECONFIG_CONTENT"])
        except yaml.YAMLError as e:
            raise KubeConnectionError(f"KUBECONFIG_CONTENT is not valid YAML: {e}") from e
        if not isinstance(content, dict):
            raise KubeConnectionError("KUBECONFIG_CONTENT does not contain a kubeconfig document")
        try:
            api_client = config.new_client_from_config_dict(content, context=context)
        except ConfigException as e:
            raise KubeConnectionError(str(e)) from e
        return client.CoreV1Api(api_client)

    # Local path loading
    if kubeconfig:
        resolved = Path(os.path.expanduser(kubeconfig)).resolve()
        if not resolved.exists():
            raise KubeConnectionError(f"kubeconfig not found: {resolved}")
        logger.debug("Loading kubeconfig from %s (context=%s)", resolved, context or "current")
        try:
            api_client = config.new_client_from_config(config_file=str(resolved), context=context)
        except (ConfigException, yaml.YAMLError) as e:
            raise KubeConnectionError(str(e)) from e
        return client.CoreV1Api(api_client)

    try:
        api_client = config.new_client_from_config(context=context)
        logger.debug("Loaded default kubeconfig (context=%s)", context or "current")
        return client.CoreV1Api(api_client)
    except yaml.YAMLError as e:
        raise KubeConnectionError(f"default kubeconfig is not valid YAML: {e}") from e
    except ConfigException as e:
        if context:
            raise KubeConnectionError(str(e)) from e
        logger.debug("Default kubeconfig unavailable (%s), trying in-cluster config", e)

    try:
        config.load_incluster_config()
    except ConfigException as e:
        raise KubeConnectionError(
            f"no kubeconfig found and not running in a cluster: {e}"
        ) from e
    return client.CoreV1Api()


def exec_in_container(
    core_api: client.CoreV1Api,
    pod: str,
    namespace: str,
    container: str,
    command: List[str],
) -> str:
    """
    Run a command inside a pod container and return its stdout.

    Raises:
        RuntimeError: if the command exits non-zero
    """
    logger.debug("Exec in %s/%s [%s]: %s", namespace, pod, container, " ".join(command))
    resp = stream(
        core_api.connect_get_namespaced_pod_exec,
        pod,
        namespace,
        command=command,
        container=container,
        stderr=True,
        stdin=False,
        stdout=True,
        tty=False,
        _preload_content=False,
    )
    try:
        resp.run_forever()
        stdout = resp.read_stdout() or ""
        stderr = resp.read_stderr() or ""
        returncode = resp.returncode
    finally:
        resp.close()

    if returncode:
        message = stderr.strip() or f"command exited with status {returncode}"
        raise RuntimeError(message)
    return stdout
