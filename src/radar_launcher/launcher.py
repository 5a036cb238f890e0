from enum import Enum
from typing import Callable, Iterable, List, Optional

from radar_launcher.console import ConsoleVisibility, NullConsoleWindowApi
from radar_launcher.diagnostics import DiagnosticLog
from radar_launcher.models import AppContext
from radar_launcher.storage import ConfigRegistry
from radar_launcher.utils import APP_NAME, APP_VERSION, SingleInstanceLock, get_log_file_path, format_exception


class StartupState(str, Enum):
    UNSTARTED = "unstarted"
    LOCK_ACQUIRED = "lock_acquired"
    RESOURCES_LOADED = "resources_loaded"
    RUNNING = "running"
    FAILED = "failed"


class AlreadyRunningError(RuntimeError):
    def __init__(self):
        super().__init__("The application is already running.")


UiHost = Callable[[AppContext, object], None]
ErrorDialog = Callable[[str, str, str], None]
WarmupHook = Callable[[AppContext], None]


class Launcher:
    """Startup sequence: single-instance lock, resources, diagnostics, console, UI host.

    ``initialize`` returns the ``AppContext`` or raises; ``run`` wraps it with the
    fatal-error dialog and returns the process exit code.
    """

    def __init__(
        self,
        app_root: str,
        logger,
        lock: Optional[SingleInstanceLock] = None,
        registry: Optional[ConfigRegistry] = None,
        console: Optional[ConsoleVisibility] = None,
        ui_host: Optional[UiHost] = None,
        error_dialog: Optional[ErrorDialog] = None,
        warmups: Iterable[WarmupHook] = (),
    ):
        self.app_root = app_root
        self.logger = logger
        self.lock = lock or SingleInstanceLock()
        self.registry = registry or ConfigRegistry(app_root, logger)
        self.console = console or ConsoleVisibility(NullConsoleWindowApi(), logger)
        self.ui_host = ui_host
        self.error_dialog = error_dialog
        self.warmups: List[WarmupHook] = list(warmups)
        self.state = StartupState.UNSTARTED
        self.history: List[StartupState] = [StartupState.UNSTARTED]
        self.context: Optional[AppContext] = None

    def _enter(self, state: StartupState) -> None:
        self.logger.debug("Startup state: %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def initialize(self) -> AppContext:
        if self.state is not StartupState.UNSTARTED:
            raise RuntimeError(f"Launcher cannot initialize from state {self.state.value}")

        if not self.lock.attempt():
            self._enter(StartupState.FAILED)
            raise AlreadyRunningError()
        self._enter(StartupState.LOCK_ACQUIRED)

        resources = self.registry.load_all()
        self._enter(StartupState.RESOURCES_LOADED)

        log = DiagnosticLog(get_log_file_path(self.app_root), resources.config.logging, self.logger)
        self.context = AppContext(app_root=self.app_root, log=log, **resources._asdict())
        self.console.set_visibility(self.context.logging_enabled)

        for hook in self.warmups:
            self.logger.debug("Running warm-up hook %r", hook)
            hook(self.context)
        return self.context

    def run(self) -> int:
        try:
            context = self.initialize()
            self._enter(StartupState.RUNNING)
            self.logger.info("%s v%s started", APP_NAME, APP_VERSION)
            self._resolve_ui_host()(context, self.logger)
            self.logger.info("UI host exited")
            return 0
        except AlreadyRunningError as e:
            self.logger.error("%s", e)
            self._show_error(str(e), str(e))
            return 1
        except Exception as e:
            if self.state is not StartupState.FAILED:
                self._enter(StartupState.FAILED)
            self.logger.exception("Fatal error")
            self._show_error(str(e) or type(e).__name__, format_exception(e))
            return 1
        finally:
            if self.context is not None:
                self.context.log.close()

    def _show_error(self, message: str, details: str) -> None:
        # The dialog needs a display; failing to show it must not mask the exit code
        try:
            self._resolve_error_dialog()(APP_NAME, message, details)
        except Exception:
            self.logger.exception("Could not show error dialog")

    def _resolve_ui_host(self) -> UiHost:
        if self.ui_host is None:
            from radar_launcher.ui import run_ui
            self.ui_host = run_ui
        return self.ui_host

    def _resolve_error_dialog(self) -> ErrorDialog:
        if self.error_dialog is None:
            from radar_launcher.dialogs import show_fatal_error
            self.error_dialog = show_fatal_error
        return self.error_dialog
