# log_setup.py
# ---------------------------------------------------
# Logging: every logger lives under "courseregistration"
# ---------------------------------------------------
import logging

ROOT_LOGGER = "courseregistration"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level="INFO"):
    """Console logging for the service; unknown level names fall back to INFO."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)
    # replace, don't stack, handlers on repeated setup
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)

    logger.debug("logging initialized (level=%s)", level)
    return logger


def get_logger(name):
    if not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
