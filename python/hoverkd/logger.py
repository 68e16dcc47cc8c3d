import logging

LOGGER_NAME = "hoverkd"

logger = logging.getLogger(LOGGER_NAME)


def setup_logging(debug: bool = False) -> None:
    """Attach stream handler to the package logger. Called by applications, not on import."""
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(name)s] %(levelname)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(logging.DEBUG if debug else logging.INFO)
