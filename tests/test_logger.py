from __future__ import annotations

import logging

from rich.logging import RichHandler

from utils.logger import configure_logging, setup_logger


def test_setup_logger_attaches_one_rich_handler() -> None:
    name = "civicfeed.tests.single"
    setup_logger(name)
    logger = setup_logger(name, level=logging.DEBUG)

    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], RichHandler)
    assert logger.level == logging.DEBUG
    assert logger.handlers[0].level == logging.DEBUG


def test_configure_logging_covers_each_package(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr("utils.logger.LOG_DIR", tmp_path)
    names = ("civicfeed.tests.a", "civicfeed.tests.b")

    configure_logging(verbose=True, log_file="civicfeed.log", names=names)
    logging.getLogger("civicfeed.tests.a").debug("ranked %d posts", 3)

    for name in names:
        assert logging.getLogger(name).level == logging.DEBUG
    assert "ranked 3 posts" in (tmp_path / "civicfeed.log").read_text(encoding="utf-8")
