import subprocess
from unittest import mock

import pytest

from dcv.executor import DockerCommandError, docker_command, execute_captured


def test_docker_command_prefixes_docker():
    assert docker_command("ps", "--format", "json") == ["docker", "ps", "--format", "json"]


def test_docker_command_without_arguments():
    assert docker_command() == ["docker"]


def test_execute_captured_returns_output():
    result = subprocess.CompletedProcess(["docker", "ps"], 0, stdout=b"hello\n")
    with mock.patch("subprocess.run", return_value=result) as run:
        output = execute_captured("ps", "-a")
    assert output == b"hello\n"
    argv = run.call_args.args[0]
    assert argv == ["docker", "ps", "-a"]
    assert run.call_args.kwargs["stderr"] == subprocess.STDOUT
    assert run.call_args.kwargs["stdout"] == subprocess.PIPE


def test_execute_captured_empty_stdout_is_bytes():
    result = subprocess.CompletedProcess(["docker", "ps"], 0, stdout=None)
    with mock.patch("subprocess.run", return_value=result):
        assert execute_captured("ps") == b""


def test_execute_captured_nonzero_exit_raises():
    result = subprocess.CompletedProcess(["docker", "ps"], 3, stdout=b"boom")
    with mock.patch("subprocess.run", return_value=result):
        with pytest.raises(DockerCommandError) as info:
            execute_captured("ps")
    assert info.value.exit_code == 3
    assert info.value.output == b"boom"
    assert "exit code 3" in str(info.value)
    assert "boom" in str(info.value)


def test_execute_captured_start_failure_raises():
    with mock.patch("subprocess.run", side_effect=FileNotFoundError("no docker")):
        with pytest.raises(DockerCommandError) as info:
            execute_captured("ps")
    assert info.value.exit_code is None
    assert "command execution failed" in str(info.value)