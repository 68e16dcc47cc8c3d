import logging

from hoverkd.logger import logger, setup_logging


def test_setup_logging_attaches_one_handler():
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    setup_logging(debug=True)
    setup_logging(debug=True)
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG

    setup_logging()
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO
