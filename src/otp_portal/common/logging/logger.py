import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from otp_portal.common.config.settings import settings

# === Colors for terminal logs ===
COLOR_MAP = {
    "DEBUG": "\033[94m",  # Blue
    "INFO": "\033[92m",  # Green
    "WARNING": "\033[93m",  # Yellow
    "ERROR": "\033[91m",  # Red
    "CRITICAL": "\033[95m",  # Magenta
    "ENDC": "\033[0m"
}

LOG_FORMAT = '[%(asctime)s] %(levelname)s | %(message)s | context=%(context)s'


class SafeFormatter(logging.Formatter):
    def format(self, record):
        if not hasattr(record, "context"):
            record.context = {}
        return super().format(record)


class ColorFormatter(SafeFormatter):
    def format(self, record):
        # Copy so the file handler does not receive escape codes
        record = logging.makeLogRecord(record.__dict__)
        color = COLOR_MAP.get(record.levelname, "")
        record.levelname = f"{color}{record.levelname}{COLOR_MAP['ENDC']}"
        return super().format(record)


# === Create logger ===
logger = logging.getLogger("otp_portal")
logger.setLevel(logging.DEBUG if settings.ENVIRONMENT == "development" else logging.INFO)
logger.propagate = False

# === Console handler ===
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setFormatter(ColorFormatter(LOG_FORMAT))
logger.addHandler(console_handler)

# === File handler ===
if settings.LOG_DIR:
    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(
        log_dir / f"otp_portal_{datetime.now().strftime('%Y%m%d')}.log",
        encoding="utf-8"
    )
    file_handler.setFormatter(SafeFormatter(LOG_FORMAT))
    logger.addHandler(file_handler)


# === Public Logging Functions ===
def _extra_context(extra: Optional[dict] = None):
    return {"context": extra or {}}


def log_debug(message: str, extra: Optional[dict] = None):
    logger.debug(message, extra=_extra_context(extra))

def log_info(message: str, extra: Optional[dict] = None):
    logger.info(message, extra=_extra_context(extra))

def log_warning(message: str, extra: Optional[dict] = None):
    logger.warning(message, extra=_extra_context(extra))

def log_error(message: str, extra: Optional[dict] = None, exc_info: bool = False):
    logger.error(message, extra=_extra_context(extra), exc_info=exc_info)


def log_critical(message: str, extra: Optional[dict] = None, exc_info: bool = False):
    logger.critical(message, extra=_extra_context(extra), exc_info=exc_info)
