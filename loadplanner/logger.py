import logging
import os
from logging.handlers import TimedRotatingFileHandler

logger = logging.getLogger("loadplanner")
logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

log_dir = os.getenv("LOG_DIR")
if log_dir:
    os.makedirs(log_dir, exist_ok=True)
    handler = TimedRotatingFileHandler(
        filename=os.path.join(log_dir, "loadplanner.log"),
        when="midnight",
        interval=1,
        backupCount=7,
        encoding="utf-8",
    )
else:
    handler = logging.StreamHandler()

handler.setFormatter(formatter)

if not logger.handlers:
    logger.addHandler(handler)
