# inventory_tracker/logging_setup.py
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def setup_logging(settings) -> Optional[Path]:
    """Console logging always; a rotating file as well when LOG_FILE is set."""
    level = getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO)
    fmt = logging.Formatter(FORMAT)

    handlers = []
    console = logging.StreamHandler()
    console.setFormatter(fmt)
    console.setLevel(level)
    handlers.append(console)

    log_path = None
    if settings.LOG_FILE:
        log_path = Path(settings.LOG_FILE).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path, maxBytes=5_000_000, backupCount=3, encoding="utf-8"
        )
        file_handler.setFormatter(fmt)
        file_handler.setLevel(level)
        handlers.append(file_handler)

    logger = logging.getLogger()  # root
    logger.setLevel(level)
    # avoid duplicate handlers when the app is created twice (tests, reload)
    for h in list(logger.handlers):
        if getattr(h, "_inventory_tracker", False):
            logger.removeHandler(h)
    for h in handlers:
        h._inventory_tracker = True
        logger.addHandler(h)

    # uvicorn keeps its own handlers; only align the level
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi"):
        logging.getLogger(name).setLevel(level)

    return log_path
