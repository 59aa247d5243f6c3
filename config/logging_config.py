import logging
import sys

from config.defaults import LOG_LEVEL


def setup_logging(level: str = LOG_LEVEL):
    """Configure application-wide logging."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Streamlit reruns the script on every interaction
    if not any(getattr(h, "_seat_planner", False) for h in root_logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler._seat_planner = True
        root_logger.addHandler(console_handler)

    for handler in root_logger.handlers:
        if getattr(handler, "_seat_planner", False):
            handler.setLevel(log_level)

    # Quiet down noisy libraries
    logging.getLogger("watchdog").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return root_logger
