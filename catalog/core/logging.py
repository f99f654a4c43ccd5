# catalog/core/logging.py
import logging
import sys
import colorlog

LOG_FORMAT = "%(log_color)s%(asctime)s %(levelname)-8s [%(name)s]%(reset)s %(message)s"

def configure_logging(level=logging.INFO):
    handler = colorlog.StreamHandler(sys.stdout)
    handler.setFormatter(
        colorlog.ColoredFormatter(
            LOG_FORMAT,
            datefmt="%H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
        )
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    # uvicorn installs its own handlers; route them through ours
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        lg = logging.getLogger(name)
        lg.handlers = []
        lg.propagate = True
        lg.setLevel(level)

    # the driver is noisy at DEBUG (heartbeats, topology)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


def resolve_level(name: str, debug: bool = False) -> int:
    """DEBUG wins; otherwise map LOG_LEVEL to a logging constant (INFO on unknown names)."""
    if debug:
        return logging.DEBUG
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO
