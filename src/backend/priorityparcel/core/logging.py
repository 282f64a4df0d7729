import logging

from priorityparcel.core.config import settings


def get_logger(name: str):
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    # terminal only
    logger.setLevel(settings.LOG_LEVEL.upper())

    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s")

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)

    logger.addHandler(ch)

    # keep records out of the root logger (uvicorn installs its own handlers there)
    logger.propagate = False

    return logger
