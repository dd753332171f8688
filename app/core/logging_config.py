import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
import datetime
import pytz

from app.core.config import settings

# Create logs directory if it doesn't exist
logs_dir = Path("logs")
logs_dir.mkdir(exist_ok=True)

class TimezoneFormatter(logging.Formatter):
    """Formatter that renders timestamps in the configured LOG_TIMEZONE"""
    def __init__(self, fmt=None, datefmt=None, tz_name: str = "UTC"):
        super().__init__(fmt, datefmt)
        try:
            self.tz = pytz.timezone(tz_name)
        except pytz.UnknownTimeZoneError:
            self.tz = pytz.utc

    def converter(self, timestamp):
        return datetime.datetime.fromtimestamp(timestamp, tz=pytz.utc).astimezone(self.tz)

    def formatTime(self, record, datefmt=None):
        dt = self.converter(record.created)
        if datefmt:
            return dt.strftime(datefmt)
        return dt.strftime('%Y-%m-%d %H:%M:%S,%f')[:-3]

class UnicodeSafeStreamHandler(logging.StreamHandler):
    """Stream handler that writes UTF-8 regardless of the console encoding"""
    def emit(self, record):
        try:
            msg = self.format(record)
            stream = self.stream
            if hasattr(stream, 'buffer'):
                stream.buffer.write(msg.encode('utf-8'))
                stream.buffer.write(self.terminator.encode('utf-8'))
                stream.buffer.flush()
            else:
                stream.write(msg + self.terminator)
                stream.flush()
        except Exception:
            self.handleError(record)

# Configure logging format
log_format = TimezoneFormatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    tz_name=settings.LOG_TIMEZONE,
)

def setup_logger(name: str, level: str = "INFO") -> logging.Logger:
    """
    Setup logger writing to stdout and a rotating file under logs/

    Args:
        name: Logger name
        level: Minimum level name, e.g. "INFO" or "DEBUG"
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if logger.handlers:
        return logger

    console_handler = UnicodeSafeStreamHandler(sys.stdout)
    console_handler.setFormatter(log_format)
    logger.addHandler(console_handler)

    file_handler = RotatingFileHandler(
        logs_dir / "app.log",
        maxBytes=10485760,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(log_format)
    logger.addHandler(file_handler)

    # Module loggers under "app." propagate here; stop at this logger
    logger.propagate = False

    return logger

# Main application logger. Module loggers created with
# logging.getLogger(__name__) live under "app" and share these handlers.
logger = setup_logger("app", level=settings.LOG_LEVEL)
