import logging

from treecli.context import ExecutionContext


def test_timing_and_status():
    context = ExecutionContext(name="main-cli sub", args=["a"])
    assert context.duration is None
    context.start_timer()
    context.stop_timer()
    assert context.duration is not None and context.duration >= 0
    assert context.success
    assert context.status == "OK"

    context.exception = RuntimeError("boom")
    assert context.status == "ERROR"
    assert context.as_dict()["exception"] == "RuntimeError('boom')"
    assert "exception=RuntimeError: boom" in context.to_log_line()


def test_log_summary(caplog):
    log = logging.getLogger("tests.treecli.context")
    caplog.set_level(logging.DEBUG, logger=log.name)
    context = ExecutionContext(name="main-cli", result=3)
    context.log_summary(log)
    assert "[SUMMARY] [main-cli] status=OK duration=n/a" in caplog.text
    assert "result=3" in caplog.text


def test_str():
    context = ExecutionContext(name="main-cli", result="ok")
    assert str(context) == "<ExecutionContext 'main-cli' | OK | Duration: n/a | Result: 'ok'>"
