"""
Per-display window position memory and the timer that keeps it fresh
"""

import logging

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .identifiers import identifier_for_display, window_identifier
from .models import DisplayInfo, Frame, WindowInfo

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_INTERVAL_MS = 5000


class PositionStore:
    """Display identifier -> window identifier -> last captured frame.

    Lives for the whole process and is never persisted. Entries are only ever
    overwritten, so windows that have since closed linger until exit.
    """

    def __init__(self):
        self._positions: dict[str, dict[str, Frame]] = {}

    def capture(self, displays: list[DisplayInfo], windows: list[WindowInfo]) -> int:
        """Record where every normal-layer window currently is.

        Each window is attributed to the first display, in enumeration order,
        whose frame intersects it. Returns the number of windows recorded.
        """
        display_ids = [(identifier_for_display(d), d.frame) for d in displays]
        for display_id, _ in display_ids:
            self._positions.setdefault(display_id, {})

        recorded = 0
        for window in windows:
            if not window.is_normal_layer:
                continue
            window_id = window_identifier(window.app_name, window.window_id)
            for display_id, display_frame in display_ids:
                if display_frame.intersects(window.frame):
                    self.record(display_id, window_id, window.frame)
                    recorded += 1
                    break

        return recorded

    def record(self, display_id: str, window_id: str, frame: Frame) -> None:
        """Store the last known frame of a window on a display"""
        self._positions.setdefault(display_id, {})[window_id] = frame

    def display_ids(self) -> set[str]:
        return set(self._positions)

    def windows_for(self, display_id: str) -> dict[str, Frame]:
        """Saved frames for one display (a copy, safe to iterate)"""
        return dict(self._positions.get(display_id, {}))

    def get(self, display_id: str, window_id: str) -> Frame | None:
        return self._positions.get(display_id, {}).get(window_id)

    def __contains__(self, display_id: str) -> bool:
        return display_id in self._positions

    def __len__(self) -> int:
        return len(self._positions)


class SnapshotScheduler(QObject):
    """Captures window positions at startup and then on a fixed interval"""

    snapshot_captured = pyqtSignal(int)  # windows recorded

    def __init__(
        self,
        store: PositionStore,
        window_manager,
        interval_ms: int = DEFAULT_SNAPSHOT_INTERVAL_MS,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self.store = store
        self.window_manager = window_manager
        self.interval_ms = interval_ms

        self._timer = QTimer(self)
        self._timer.setSingleShot(False)
        self._timer.timeout.connect(self.capture_now)

    def start(self) -> None:
        """Capture immediately and (re)arm the periodic timer"""
        self._timer.stop()
        self.capture_now()
        self._timer.start(self.interval_ms)
        logger.info("Periodic snapshot started (every %d ms)", self.interval_ms)

    def stop(self) -> None:
        self._timer.stop()

    def is_active(self) -> bool:
        return self._timer.isActive()

    def capture_now(self) -> int:
        try:
            displays = self.window_manager.get_displays()
            windows = self.window_manager.get_windows()
        except Exception as e:
            logger.error("Skipping snapshot, window enumeration failed: %s", e)
            return 0

        recorded = self.store.capture(displays, windows)
        logger.debug(
            "Snapshot recorded %d windows across %d displays", recorded, len(displays)
        )
        self.snapshot_captured.emit(recorded)
        return recorded
