import logging

from doc_reporter.core.logging import ColoredFormatter, setup_logger, verbosity_to_level


def test_verbosity_levels():
    assert verbosity_to_level(0) == logging.WARNING
    assert verbosity_to_level(1) == logging.INFO
    assert verbosity_to_level(2) == logging.INFO
    assert verbosity_to_level(3) == logging.DEBUG


def test_colored_formatter_keeps_record_levelname():
    record = logging.LogRecord("doc_reporter", logging.ERROR, __file__, 1, "boom", None, None)
    text = ColoredFormatter("%(levelname)s %(message)s").format(record)
    assert "\033[91mERROR\033[0m" in text
    assert "boom" in text
    assert record.levelname == "ERROR"


def test_setup_logger_writes_file(tmp_path):
    log_file = tmp_path / "doc_reporter.log"
    logger = setup_logger(name="doc_reporter.test_file", verbosity=1, log_file=log_file)
    logger.info("hello file")
    for handler in logger.handlers:
        handler.flush()
        handler.close()
    logger.handlers.clear()
    assert "hello file" in log_file.read_text()
