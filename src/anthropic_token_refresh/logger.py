import logging
import sys


def setup_logger(
    name: str = "anthropic_token_refresh", level: int | str = logging.INFO
) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)s - %(message)s", datefmt="%Y-%m-%dT%H:%M:%S"
    )

    # Level filtering happens on the logger so set_log_level() is enough
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def set_log_level(level: int | str) -> None:
    logger.setLevel(level)


logger = setup_logger()
