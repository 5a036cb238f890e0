import sys
import logging
from typing import Optional


SW_HIDE = 0
SW_SHOWNORMAL = 1


class ConsoleWindowApi:
    """OS calls needed to show or hide the process console window."""

    def get_console_window(self) -> int:
        raise NotImplementedError

    def show_window(self, hwnd: int, cmd_show: int) -> bool:
        raise NotImplementedError


class NullConsoleWindowApi(ConsoleWindowApi):
    """Platforms without a console window handle."""

    def get_console_window(self) -> int:
        return 0

    def show_window(self, hwnd: int, cmd_show: int) -> bool:
        return False


class Win32ConsoleWindowApi(ConsoleWindowApi):
    def __init__(self):
        import ctypes
        from ctypes import wintypes

        self._kernel32 = ctypes.WinDLL("kernel32")
        self._user32 = ctypes.WinDLL("user32")
        self._kernel32.GetConsoleWindow.argtypes = ()
        self._kernel32.GetConsoleWindow.restype = wintypes.HWND
        self._user32.ShowWindow.argtypes = (wintypes.HWND, ctypes.c_int)
        self._user32.ShowWindow.restype = wintypes.BOOL

    def get_console_window(self) -> int:
        # HWND restype yields None for a null handle
        return self._kernel32.GetConsoleWindow() or 0

    def show_window(self, hwnd: int, cmd_show: int) -> bool:
        return bool(self._user32.ShowWindow(hwnd, cmd_show))


def default_console_api() -> ConsoleWindowApi:
    if sys.platform == "win32":
        return Win32ConsoleWindowApi()
    return NullConsoleWindowApi()


class ConsoleVisibility:
    def __init__(self, api: ConsoleWindowApi, logger: Optional[logging.Logger] = None):
        self.api = api
        self.logger = logger or logging.getLogger(__name__)

    def set_visibility(self, visible: bool) -> None:
        hwnd = self.api.get_console_window()
        if not hwnd:
            self.logger.debug("No console window attached")
            return
        self.api.show_window(hwnd, SW_SHOWNORMAL if visible else SW_HIDE)
        self.logger.debug("Console window %s", "shown" if visible else "hidden")
