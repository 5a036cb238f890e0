import os
import logging
import threading
from typing import Optional

from radar_launcher.utils import ensure_dir


LOG_LINE_FORMAT = "%(asctime)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class DiagnosticLog:
    """Append-only diagnostic log file.

    Every message is mirrored to ``logger`` at DEBUG level. The file itself is opened
    only when ``enabled`` is true; otherwise ``log`` never touches the filesystem.
    Writes are serialized through one lock and flushed immediately.
    """

    def __init__(self, path: str, enabled: bool, logger: logging.Logger):
        self.path = path
        self.enabled = enabled
        self.logger = logger
        self._lock = threading.Lock()
        self._handler: Optional[logging.FileHandler] = None
        if enabled:
            ensure_dir(os.path.dirname(os.path.abspath(path)))
            self._handler = logging.FileHandler(path, mode="a", encoding="utf-8")
            self._handler.setFormatter(logging.Formatter(LOG_LINE_FORMAT, datefmt=LOG_DATE_FORMAT))
            self.logger.info("Diagnostic log enabled: %s", path)

    @property
    def is_open(self) -> bool:
        return self._handler is not None

    def log(self, message: str) -> None:
        self.logger.debug("%s", message)
        if self._handler is None:
            return
        record = logging.makeLogRecord({
            "name": self.logger.name,
            "levelno": logging.INFO,
            "levelname": "INFO",
            # one call, one line
            "msg": "\\n".join(str(message).splitlines()),
        })
        with self._lock:
            # close() may have run while we waited
            if self._handler is not None:
                self._handler.emit(record)

    def close(self) -> None:
        with self._lock:
            if self._handler is not None:
                self._handler.close()
                self._handler = None
