import logging

from radar_launcher.console import (
    ConsoleVisibility,
    ConsoleWindowApi,
    NullConsoleWindowApi,
    SW_HIDE,
    SW_SHOWNORMAL,
)


class FakeConsoleWindowApi(ConsoleWindowApi):
    def __init__(self, hwnd=42):
        self.hwnd = hwnd
        self.visible = True
        self.calls = []

    def get_console_window(self):
        return self.hwnd

    def show_window(self, hwnd, cmd_show):
        self.calls.append((hwnd, cmd_show))
        self.visible = cmd_show != SW_HIDE
        return True


def test_show_then_hide_leaves_console_hidden():
    api = FakeConsoleWindowApi()
    console = ConsoleVisibility(api, logging.getLogger('t'))
    console.set_visibility(True)
    console.set_visibility(False)
    assert api.visible is False
    assert api.calls == [(42, SW_SHOWNORMAL), (42, SW_HIDE)]


def test_hide_then_show_leaves_console_visible():
    api = FakeConsoleWindowApi()
    console = ConsoleVisibility(api, logging.getLogger('t'))
    console.set_visibility(False)
    console.set_visibility(True)
    assert api.visible is True


def test_missing_console_window_is_left_alone():
    api = FakeConsoleWindowApi(hwnd=0)
    ConsoleVisibility(api).set_visibility(False)
    assert api.calls == []


def test_null_api_is_a_no_op():
    ConsoleVisibility(NullConsoleWindowApi()).set_visibility(True)
