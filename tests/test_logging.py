from __future__ import annotations

import io
import logging

import pytest

from k6cloud_client import logging_


@pytest.fixture
def package_logger():
    logger = logging.getLogger(logging_.PACKAGE_LOGGER)
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.NOTSET)


def test_library_installs_null_handler(package_logger) -> None:
    assert any(isinstance(h, logging.NullHandler) for h in package_logger.handlers)


def test_setup_logging_verbose(package_logger) -> None:
    out = io.StringIO()
    logging_.setup_logging(verbose=True, stream=out)

    logging.getLogger("k6cloud_client.transport").debug("hello")

    assert package_logger.level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.DEBUG
    assert "DEBUG k6cloud_client.transport: hello" in out.getvalue()


def test_setup_logging_quiet_by_default(package_logger) -> None:
    out = io.StringIO()
    logging_.setup_logging(stream=out)

    logging.getLogger("k6cloud_client.transport").info("noise")

    assert package_logger.level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING
    assert out.getvalue() == ""


def test_setup_logging_is_idempotent(package_logger) -> None:
    before = len(package_logger.handlers)
    logging_.setup_logging(stream=io.StringIO())
    logging_.setup_logging(stream=io.StringIO())
    assert len(package_logger.handlers) == before + 1


def test_setup_logging_redirects_existing_handler(package_logger) -> None:
    first, second = io.StringIO(), io.StringIO()
    logging_.setup_logging(stream=first)
    logging_.setup_logging(stream=second)

    logging.getLogger("k6cloud_client.transport").error("boom")

    assert first.getvalue() == ""
    assert "ERROR k6cloud_client.transport: boom" in second.getvalue()


def test_setup_logging_leaves_root_logger_alone(package_logger) -> None:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    logging_.setup_logging(verbose=True, stream=io.StringIO())
    assert root.handlers == handlers
    assert root.level == level


def test_setup_logging_is_exported() -> None:
    import k6cloud_client

    assert k6cloud_client.setup_logging is logging_.setup_logging
