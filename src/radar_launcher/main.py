import sys
import logging

from radar_launcher.utils import get_app_root, setup_logging
from radar_launcher.console import ConsoleVisibility, default_console_api
from radar_launcher.launcher import Launcher


def main():
    # Console may print non-ASCII names (Cyrillic)
    if sys.stdout is not None and hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8")
    app_root = get_app_root()
    logger = setup_logging(level=logging.INFO)
    launcher = Launcher(
        app_root,
        logger,
        console=ConsoleVisibility(default_console_api(), logger),
    )
    sys.exit(launcher.run())


if __name__ == '__main__':
    main()
