import logging

import pytest

from makanai.logging import configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    quiet = {name: logging.getLogger(name).level for name in ("httpx", "httpcore")}
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, previous in quiet.items():
        logging.getLogger(name).setLevel(previous)


def test_configure_logging_installs_single_stderr_handler(restore_root_logger) -> None:
    configure_logging("debug", app_env="prod")
    assert len(restore_root_logger.handlers) == 1
    assert restore_root_logger.level == logging.DEBUG


def test_http_client_request_urls_are_not_logged_at_info(restore_root_logger) -> None:
    configure_logging("INFO")
    assert not logging.getLogger("httpx").isEnabledFor(logging.INFO)
    assert logging.getLogger("httpx").isEnabledFor(logging.WARNING)


def test_unknown_level_falls_back_to_info(restore_root_logger) -> None:
    configure_logging("chatty", json_output=True)
    assert restore_root_logger.level == logging.INFO
