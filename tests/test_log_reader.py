import sys
import time

import pytest

from dcv.log_reader import (
    CommandExecuted,
    LogLines,
    LogReaderManager,
    PollContinue,
    StreamError,
)


def python(code):
    return [sys.executable, "-c", code]


def drain(manager, timeout=15.0):
    collected = []
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        msg = manager.poll()
        if isinstance(msg, LogLines):
            collected.extend(msg.lines)
        if msg is None or manager.active is None:
            return collected
        assert isinstance(msg, (LogLines, PollContinue))
        time.sleep(0.01)
    raise AssertionError("log stream did not finish")


def test_poll_without_reader_reports_stopped():
    manager = LogReaderManager()
    assert manager.poll() == LogLines(["[Log reader stopped]"])


def test_stream_reports_command():
    manager = LogReaderManager()
    argv = python("print('hello')")
    assert manager.stream(argv) == CommandExecuted(" ".join(argv))
    drain(manager)


def test_stdout_lines_in_order():
    manager = LogReaderManager()
    manager.stream(python("print('first'); print('second'); print('third')"))
    assert drain(manager) == ["first", "second", "third"]
    assert manager.active is None


def test_stderr_lines_are_prefixed():
    manager = LogReaderManager()
    manager.stream(python("import sys; sys.stderr.write('oops\\n')"))
    assert drain(manager) == ["[STDERR] oops"]


def test_failed_command_appends_error_line():
    manager = LogReaderManager()
    manager.stream(python("print('out'); raise SystemExit(3)"))
    lines = drain(manager)
    assert lines[0] == "out"
    assert lines[-1] == "[ERROR: Command failed: exit status 3]"


def test_no_output_reports_no_logs():
    manager = LogReaderManager()
    manager.stream(python("pass"))
    assert drain(manager) == ["[No logs available for this container]"]


def test_missing_program_gives_stream_error():
    manager = LogReaderManager()
    msg = manager.stream(["/nonexistent/dir/no-such-program"])
    assert isinstance(msg, StreamError)
    assert "failed to start log command" in str(msg.error)
    assert manager.active is None


def test_stop_kills_running_command():
    manager = LogReaderManager()
    manager.stream(python("import time; time.sleep(60)"))
    reader = manager.active
    manager.stop()
    assert manager.active is None
    assert manager.last_index == 0
    assert reader.process.wait(timeout=15) != 0


def test_new_lines_past_end_returns_nothing():
    manager = LogReaderManager()
    manager.stream(python("print('x')"))
    reader = manager.active
    drain(manager)
    lines, index, done = reader.new_lines(100)
    assert (lines, index, done) == ([], 100, True)


@pytest.mark.parametrize("count", [1, 5])
def test_new_lines_returns_everything_from_start(count):
    manager = LogReaderManager()
    manager.stream(python(f"for i in range({count}): print(i)"))
    reader = manager.active
    drain(manager)
    lines, index, done = reader.new_lines(0)
    assert lines == [str(i) for i in range(count)]
    assert index == count
    assert done is True