"""
SnapBack - puts windows back on external displays when they reconnect
"""

import logging
import sys

from PyQt6.QtGui import QGuiApplication

from .config import Config
from .permissions import PermissionsHelper
from .restore_engine import RestoreEngine
from .snapshot_manager import PositionStore, SnapshotScheduler
from .window_manager import WindowManager
from .window_mover import WindowMover

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S")


def main():
    """Main application entry point"""
    app = QGuiApplication(sys.argv)
    app.setQuitOnLastWindowClosed(False)

    app.setApplicationName("SnapBack")
    app.setApplicationVersion("0.1.0")
    app.setOrganizationName("SnapBack")

    config = Config()
    setup_logging(config.log_level)

    if not PermissionsHelper.is_macos():
        logger.error("SnapBack only runs on macOS")
        return 1

    missing = PermissionsHelper.get_missing_permissions()
    if missing:
        logger.warning(
            "Missing permissions: %s; windows cannot be moved until granted",
            ", ".join(missing),
        )

    window_manager = WindowManager()
    store = PositionStore()
    scheduler = SnapshotScheduler(
        store, window_manager, interval_ms=config.snapshot_interval_ms, parent=app
    )
    restore_engine = RestoreEngine(
        store,
        window_manager,
        delay_ms=config.restore_delay_ms,
        position_epsilon=config.position_epsilon,
        parent=app,
    )

    app.screenAdded.connect(restore_engine.on_display_change)
    app.screenRemoved.connect(restore_engine.on_display_change)
    app.primaryScreenChanged.connect(restore_engine.on_display_change)

    # Library entry point for moving the frontmost window; no hotkey is bound here
    app.window_mover = WindowMover.from_config(window_manager, config)

    scheduler.start()
    logger.info("SnapBack started with %d displays", len(window_manager.get_displays()))

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
