import pytest

from dcv.container import Container, DindContainer, HostContainer
from dcv.executor import DockerCommandError


class FakeClient:
    def __init__(self, output=b"", error=None):
        self.output = output
        self.error = error
        self.calls = []

    def execute_captured(self, *args):
        self.calls.append(list(args))
        if self.error is not None:
            raise self.error
        return self.output


def host(client):
    return HostContainer(client, "cid1", "web", "Web title", "running")


def dind(client):
    return DindContainer(client, "hostid", "hostname", "innerid", "inner", "paused")


def test_container_is_abstract():
    with pytest.raises(TypeError):
        Container()


def test_host_operation_args():
    assert host(FakeClient()).operation_args("stop") == ["stop", "cid1"]


def test_host_title_and_fields():
    c = host(FakeClient())
    assert c.title() == "Web title"
    assert (c.container_id, c.name, c.state) == ("cid1", "web", "running")


def test_host_inspect_runs_docker_inspect():
    client = FakeClient(output=b"[{}]")
    assert host(client).inspect() == b"[{}]"
    assert client.calls == [["inspect", "cid1"]]


def test_host_top_runs_docker_top():
    client = FakeClient(output=b"PID")
    assert host(client).top() == b"PID"
    assert client.calls == [["top", "cid1"]]


def test_host_inspect_failure_is_wrapped():
    client = FakeClient(error=DockerCommandError("bad", exit_code=1))
    with pytest.raises(DockerCommandError) as info:
        host(client).inspect()
    assert "failed to execute docker inspect" in str(info.value)
    assert info.value.exit_code == 1


def test_dind_operation_args():
    assert dind(FakeClient()).operation_args("restart") == [
        "exec",
        "hostid",
        "docker",
        "restart",
        "innerid",
    ]


def test_dind_title_names_host_and_container():
    assert dind(FakeClient()).title() == "DinD: hostid (inner)"


def test_dind_inspect_and_top_go_through_host():
    client = FakeClient(output=b"out")
    c = dind(client)
    assert c.inspect() == b"out"
    assert c.top() == b"out"
    assert client.calls == [
        ["exec", "hostid", "docker", "inspect", "innerid"],
        ["exec", "hostid", "docker", "top", "innerid"],
    ]


def test_dind_inspect_failure_is_wrapped():
    client = FakeClient(error=DockerCommandError("nope"))
    with pytest.raises(DockerCommandError, match="failed to execute docker inspect"):
        dind(client).inspect()