import os
import sys
import logging
import tempfile
import traceback
from typing import Optional


APP_NAME = "EFT Radar"
APP_VERSION = "1.0.0"

LOGGER_NAME = "radar_launcher"
LOCK_NAME = "9A19103F-16F7-4668-BE54-9A1E7A4F7556"
LOG_FILE_NAME = "log.txt"

ERROR_ALREADY_EXISTS = 183


def get_app_root() -> str:
    """Return the directory where resource files and the log file live.

    - Frozen (PyInstaller): folder of the executable
    - Development: current working directory
    """
    if getattr(sys, "frozen", False):
        return os.path.dirname(sys.executable)
    return os.path.abspath(os.getcwd())


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def get_resource_path(app_root: str, file_name: str) -> str:
    return os.path.join(app_root, file_name)


def get_log_file_path(app_root: str) -> str:
    return os.path.join(app_root, LOG_FILE_NAME)


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(console_handler)

    logger.debug("Logging initialized")
    return logger


def atomic_write_text(target_path: str, content: str) -> None:
    dirname = os.path.dirname(target_path)
    ensure_dir(dirname)
    fd, tmp_path = tempfile.mkstemp(dir=dirname, prefix=".tmp_", suffix=".json")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
            tmp_file.write(content)
        os.replace(tmp_path, target_path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)


class SingleInstanceLock:
    """System-wide lock used to detect a second running instance.

    Windows uses a named mutex created with initial ownership. Other platforms take a
    non-blocking exclusive ``flock`` on ``<lock_dir>/<name>.lock``. The lock is never
    released by this class; the OS drops it when the process exits, crash included.
    """

    def __init__(self, name: str = LOCK_NAME, lock_dir: Optional[str] = None):
        self.name = name
        self.lock_dir = lock_dir or tempfile.gettempdir()
        self.handle = None
        self.acquired = False

    @property
    def lock_path(self) -> str:
        return os.path.join(self.lock_dir, f"{self.name}.lock")

    def attempt(self) -> bool:
        if self.acquired:
            return True
        if os.name == "nt":
            self.acquired = self._attempt_mutex()
        else:
            self.acquired = self._attempt_flock()
        return self.acquired

    def _attempt_mutex(self) -> bool:
        import ctypes
        from ctypes import wintypes

        kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)
        kernel32.CreateMutexW.argtypes = (wintypes.LPVOID, wintypes.BOOL, wintypes.LPCWSTR)
        kernel32.CreateMutexW.restype = wintypes.HANDLE
        kernel32.CloseHandle.argtypes = (wintypes.HANDLE,)

        handle = kernel32.CreateMutexW(None, True, self.name)
        err = ctypes.get_last_error()
        if not handle:
            raise ctypes.WinError(err)
        if err == ERROR_ALREADY_EXISTS:
            kernel32.CloseHandle(handle)
            return False
        self.handle = handle
        return True

    def _attempt_flock(self) -> bool:
        import fcntl

        ensure_dir(self.lock_dir)
        fd = os.open(self.lock_path, os.O_CREAT | os.O_RDWR, 0o644)
        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except (BlockingIOError, PermissionError):
            os.close(fd)
            return False
        except OSError:
            os.close(fd)
            raise
        # PID is informational only
        os.ftruncate(fd, 0)
        os.write(fd, str(os.getpid()).encode("utf-8"))
        self.handle = fd
        return True


def copy_to_clipboard(widget, text: str) -> None:
    widget.clipboard_clear()
    widget.clipboard_append(text)
    widget.update()


def format_exception(e: BaseException) -> str:
    return "".join(traceback.format_exception(type(e), e, e.__traceback__))
