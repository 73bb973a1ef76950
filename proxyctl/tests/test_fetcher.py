from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from kubernetes.client.rest import ApiException

from proxyctl.errors import FetchError
from proxyctl.modules.fetcher import ProxyConfigFetcher


def make_pod(containers=("app", "envoy-sidecar"), running=True):
    state = SimpleNamespace(running=SimpleNamespace() if running else None)
    return SimpleNamespace(
        spec=SimpleNamespace(containers=[SimpleNamespace(name=c) for c in containers]),
        status=SimpleNamespace(
            container_statuses=[SimpleNamespace(name=c, state=state) for c in containers]
        ),
    )


class RecordingExecutor:
    def __init__(self, output='{"configs": []}', error=None):
        self.output = output
        self.error = error
        self.calls = []

    def __call__(self, core_api, pod, namespace, container, command):
        self.calls.append((pod, namespace, container, command))
        if self.error:
            raise self.error
        return self.output


@pytest.fixture
def core_api():
    api = MagicMock()
    api.read_namespaced_pod.return_value = make_pod()
    return api


def test_fetch_runs_wget_in_sidecar(core_api, raw_dump):
    executor = RecordingExecutor(output=raw_dump)
    fetcher = ProxyConfigFetcher(core_api, executor=executor)

    assert fetcher.fetch("web-0", "shop") == raw_dump
    core_api.read_namespaced_pod.assert_called_once_with(name="web-0", namespace="shop")
    assert executor.calls == [
        ("web-0", "shop", "envoy-sidecar", ["wget", "-qO-", "127.0.0.1:19000/config_dump"]),
    ]


def test_pod_not_found(core_api):
    core_api.read_namespaced_pod.side_effect = ApiException(status=404, reason="Not Found")
    executor = RecordingExecutor()

    with pytest.raises(FetchError) as exc:
        ProxyConfigFetcher(core_api, executor=executor).fetch("ghost", "default")

    assert exc.value.pod == "ghost"
    assert exc.value.namespace == "default"
    assert "not found" in str(exc.value)
    assert executor.calls == []


def test_pod_read_api_error(core_api):
    core_api.read_namespaced_pod.side_effect = ApiException(status=403, reason="Forbidden")
    with pytest.raises(FetchError, match="Forbidden"):
        ProxyConfigFetcher(core_api, executor=RecordingExecutor()).fetch("web-0", "default")


def test_missing_sidecar_container(core_api):
    core_api.read_namespaced_pod.return_value = make_pod(containers=("app",))
    executor = RecordingExecutor()

    with pytest.raises(FetchError, match="container envoy-sidecar not found in pod"):
        ProxyConfigFetcher(core_api, executor=executor).fetch("web-0", "default")
    assert executor.calls == []


def test_sidecar_not_running(core_api):
    core_api.read_namespaced_pod.return_value = make_pod(running=False)
    with pytest.raises(FetchError, match="is not running"):
        ProxyConfigFetcher(core_api, executor=RecordingExecutor()).fetch("web-0", "default")


def test_custom_container_name(core_api):
    core_api.read_namespaced_pod.return_value = make_pod(containers=("app", "proxy"))
    executor = RecordingExecutor()
    ProxyConfigFetcher(core_api, container="proxy", executor=executor).fetch("web-0", "default")
    assert executor.calls[0][2] == "proxy"


@pytest.mark.parametrize("error", [
    RuntimeError("wget: can't connect to remote host (127.0.0.1): Connection refused"),
    ApiException(status=500, reason="Internal Server Error"),
    ConnectionResetError("connection reset by peer"),
])
def test_exec_failures_are_fetch_errors(core_api, error):
    executor = RecordingExecutor(error=error)
    with pytest.raises(FetchError) as exc:
        ProxyConfigFetcher(core_api, executor=executor).fetch("web-0", "default")
    assert exc.value.__cause__ is error
    assert len(executor.calls) == 1


@pytest.mark.parametrize("output", ["", "  \n"])
def test_empty_output_is_a_fetch_error(core_api, output):
    with pytest.raises(FetchError, match="returned no data"):
        ProxyConfigFetcher(core_api, executor=RecordingExecutor(output=output)).fetch("web-0", "default")


def test_native_sidecar_in_init_containers(core_api):
    pod = make_pod(containers=("app",))
    state = SimpleNamespace(running=SimpleNamespace())
    pod.spec.init_containers = [SimpleNamespace(name="envoy-sidecar")]
    pod.status.init_container_statuses = [SimpleNamespace(name="envoy-sidecar", state=state)]
    core_api.read_namespaced_pod.return_value = pod
    executor = RecordingExecutor()

    ProxyConfigFetcher(core_api, executor=executor).fetch("web-0", "default")

    assert executor.calls[0][2] == "envoy-sidecar"


def test_native_sidecar_not_running(core_api):
    pod = make_pod(containers=("app",))
    pod.spec.init_containers = [SimpleNamespace(name="envoy-sidecar")]
    pod.status.init_container_statuses = [
        SimpleNamespace(name="envoy-sidecar", state=SimpleNamespace(running=None)),
    ]
    core_api.read_namespaced_pod.return_value = pod

    with pytest.raises(FetchError, match="is not running"):
        ProxyConfigFetcher(core_api, executor=RecordingExecutor()).fetch("web-0", "default")
