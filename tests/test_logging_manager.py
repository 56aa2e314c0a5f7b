import logging
import re
import socket

import pytest
import zmq

from chatcore.logging_manager import LoggerManager, ZmqHandler, _Formatter

_LINE = re.compile(r"\[(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3})\] (.*)")


def _free_endpoint():
    with socket.socket() as s:
        s.bind(("127.0.0.1", 0))
        port = s.getsockname()[1]
    return f"tcp://127.0.0.1:{port}"


@pytest.fixture
def manager(tmp_path):
    mgr = LoggerManager(_free_endpoint())
    mgr.initialize(tmp_path / "logs")
    yield mgr
    mgr.shutdown()


def _read(path):
    return path.read_text(encoding="utf-8")


def test_instance_is_singleton():
    first = LoggerManager.instance()
    assert first is LoggerManager.instance()


def test_initialize_writes_default_log(manager, tmp_path):
    logger = manager.get_logger("default")
    assert logger.name == "default"
    logger.info("hello")
    lines = _read(tmp_path / "logs" / "default.log").splitlines()
    bodies = [m.group(2) for m in map(_LINE.fullmatch, lines) if m]
    assert len(bodies) == len(lines)
    assert bodies[-1] == "[default] [info] hello"


def test_create_logger_returns_existing(manager):
    first = manager.create_logger("net")
    assert manager.create_logger("net") is first
    assert manager.get_logger("net") is first


def test_unknown_logger_falls_back_to_default(manager, tmp_path):
    logger = manager.get_logger("missing")
    assert logger is manager.get_logger("default")
    content = _read(tmp_path / "logs" / "default.log")
    assert "[default] [warning] Logger 'missing' not found, using default" in content


def test_set_level_filters_messages(manager, tmp_path):
    manager.set_level("default", logging.ERROR)
    logger = manager.get_logger("default")
    assert logger.level == logging.ERROR
    logger.info("hidden")
    logger.error("shown")
    content = _read(tmp_path / "logs" / "default.log")
    assert "hidden" not in content
    assert "[error] shown" in content


def test_get_logger_before_initialize_raises():
    mgr = LoggerManager(_free_endpoint())
    with pytest.raises(LookupError):
        mgr.get_logger("default")


def test_shutdown_forgets_loggers(tmp_path):
    mgr = LoggerManager(_free_endpoint())
    mgr.initialize(tmp_path / "logs")
    mgr.shutdown()
    with pytest.raises(LookupError):
        mgr.get_logger("default")


def test_rotation_keeps_max_files(manager, tmp_path):
    logger = manager.create_logger("rot", max_file_size=200, max_files=2)
    assert logger.name == "rot"
    for number in range(50):
        logger.info("message number %d", number)
    names = sorted(p.name for p in (tmp_path / "logs").glob("rot.log*"))
    assert names == ["rot.log", "rot.log.1", "rot.log.2"]
    last = _read(tmp_path / "logs" / "rot.log").splitlines()[-1]
    assert last.endswith("[rot] [info] message number 49")


def test_failed_logger_returns_default(manager, tmp_path):
    (tmp_path / "logs" / "sub").write_text("not a directory")
    logger = manager.create_logger("sub/child")
    assert logger is manager.get_logger("default")
    content = _read(tmp_path / "logs" / "default.log")
    assert "[error] Failed to create logger 'sub/child'" in content


def test_records_are_pushed_over_zmq(tmp_path):
    ctx = zmq.Context()
    pull = ctx.socket(zmq.PULL)
    pull.setsockopt(zmq.LINGER, 0)
    port = pull.bind_to_random_port("tcp://127.0.0.1")
    mgr = LoggerManager(f"tcp://127.0.0.1:{port}")
    try:
        mgr.initialize(tmp_path / "logs")
        logger = mgr.get_logger("default")
        logger.info("hello")
        assert pull.poll(5000)
        message = pull.recv().decode("utf-8")
    finally:
        mgr.shutdown()
        pull.close()
        ctx.term()
    assert logger.name == "default"
    match = _LINE.fullmatch(message.rstrip("\n"))
    assert match is not None
    assert match.group(2) == "[default] [info] hello"


def test_zmq_handler_sends_formatted_record_and_closes():
    ctx = zmq.Context()
    pull = ctx.socket(zmq.PULL)
    pull.setsockopt(zmq.LINGER, 0)
    port = pull.bind_to_random_port("tcp://127.0.0.1")
    push = ctx.socket(zmq.PUSH)
    push.connect(f"tcp://127.0.0.1:{port}")
    handler = ZmqHandler(push)
    handler.setFormatter(_Formatter())
    logger = logging.Logger("zmqtest", logging.DEBUG)
    logger.addHandler(handler)
    try:
        logger.warning("careful")
        assert pull.poll(5000)
        message = pull.recv().decode("utf-8")
    finally:
        handler.close()
        pull.close()
        ctx.term()
    assert message.endswith("[zmqtest] [warning] careful")
    assert push.closed