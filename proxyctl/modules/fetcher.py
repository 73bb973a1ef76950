"""Read the Envoy config dump from a pod's sidecar admin endpoint."""
import logging
from typing import Callable, List, Optional

from kubernetes import client
from kubernetes.client.rest import ApiException

from ..config import Config
from ..errors import FetchError
from ..utils.kube import exec_in_container

logger = logging.getLogger("proxyctl.fetcher")

Executor = Callable[[client.CoreV1Api, str, str, str, List[str]], str]


class ProxyConfigFetcher:
    """Fetches the raw config dump through the Kubernetes exec API.

    The admin endpoint listens on loopback inside the pod, so the request is
    made by running ``wget`` in the sidecar container rather than by
    connecting to the pod directly. A single attempt is made per call.
    """

    def __init__(
        self,
        core_api: client.CoreV1Api,
        container: str = Config.SIDECAR_CONTAINER,
        executor: Optional[Executor] = None,
    ):
        self.core_api = core_api
        self.container = container
        self.executor = executor or exec_in_container

    def command(self) -> List[str]:
        return ["wget", "-qO-", Config.admin_url()]

    def fetch(self, pod: str, namespace: str) -> str:
        """Return the config dump text for ``pod``.

        Raises:
            FetchError: for a missing pod or container, a stopped sidecar, or
                any exec/transport failure
        """
        self._check_pod(pod, namespace)

        try:
            output = self.executor(self.core_api, pod, namespace, self.container, self.command())
        except ApiException as e:
            raise FetchError(pod, namespace, f"exec failed: {e.reason or e}") from e
        except Exception as e:
            raise FetchError(pod, namespace, str(e) or type(e).__name__) from e

        if not output or not output.strip():
            raise FetchError(pod, namespace, "administrative endpoint returned no data")

        logger.debug("Fetched %d bytes of config dump from %s/%s", len(output), namespace, pod)
        return output

    def _check_pod(self, pod: str, namespace: str) -> None:
        try:
            pod_obj = self.core_api.read_namespaced_pod(name=pod, namespace=namespace)
        except ApiException as e:
            if e.status == 404:
                raise FetchError(pod, namespace, f"pod {pod} not found in namespace {namespace}") from e
            raise FetchError(pod, namespace, f"could not read pod: {e.reason or e}") from e
        except Exception as e:
            raise FetchError(pod, namespace, str(e) or type(e).__name__) from e

        # native sidecars are declared as init containers with restartPolicy Always
        spec = pod_obj.spec
        containers = [
            c.name for c in (spec.containers or []) + (getattr(spec, "init_containers", None) or [])
        ]
        if self.container not in containers:
            raise FetchError(
                pod, namespace,
                f"container {self.container} not found in pod (containers: {', '.join(containers) or 'none'})"
            )

        status_obj = pod_obj.status
        statuses = []
        if status_obj:
            statuses = (status_obj.container_statuses or []) + (
                getattr(status_obj, "init_container_statuses", None) or []
            )
        for status in statuses:
            if status.name == self.container and not (status.state and status.state.running):
                raise FetchError(pod, namespace, f"container {self.container} is not running")
