"""
Puts windows back on an external display after it has been reconnected
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .identifiers import (
    MalformedIdentifierError,
    identifier_for_display,
    parse_window_identifier,
)
from .models import DisplayInfo, Frame, WindowInfo
from .snapshot_manager import PositionStore

logger = logging.getLogger(__name__)

DEFAULT_STABILIZATION_DELAY_MS = 1500
DEFAULT_POSITION_EPSILON = 10.0

RESTORED = "restored"
MALFORMED_IDENTIFIER = "malformed_identifier"
NOT_FOUND = "not_found"
NOT_ON_PRIMARY = "not_on_primary"
UNVERIFIED = "unverified"
MOVE_FAILED = "move_failed"


@dataclass
class RestoreReport:
    started_at: datetime
    finished_at: datetime | None = None
    target_displays: list[str] = field(default_factory=list)
    items: list[dict[str, Any]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.items)

    @property
    def restored_count(self) -> int:
        return sum(1 for it in self.items if it["restored"])

    @property
    def failed_count(self) -> int:
        return sum(1 for it in self.items if it["reason"] == MOVE_FAILED)

    @property
    def skipped_count(self) -> int:
        return self.total - self.restored_count - self.failed_count


class RestoreEngine(QObject):
    """Reacts to display topology changes by restoring saved window positions.

    The window manager is expected to provide ``get_displays()``,
    ``get_windows()``, ``get_window_positions(pid)`` returning
    ``(element, (x, y))`` pairs, and ``set_window_position(element, x, y)``.
    """

    restore_started = pyqtSignal()
    window_restored = pyqtSignal(str, float, float)  # window id, x, y
    restore_finished = pyqtSignal(int)  # restored count

    def __init__(
        self,
        store: PositionStore,
        window_manager,
        delay_ms: int = DEFAULT_STABILIZATION_DELAY_MS,
        position_epsilon: float = DEFAULT_POSITION_EPSILON,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self.store = store
        self.window_manager = window_manager
        self.position_epsilon = position_epsilon
        self.last_report: RestoreReport | None = None

        self._delay_timer = QTimer(self)
        self._delay_timer.setSingleShot(True)
        self._delay_timer.setInterval(delay_ms)
        self._delay_timer.timeout.connect(self.restore_windows_if_needed)

    @property
    def delay_ms(self) -> int:
        return self._delay_timer.interval()

    def is_pending(self) -> bool:
        return self._delay_timer.isActive()

    def on_display_change(self, *args) -> None:
        """Schedule a restore once the displays have settled.

        Repeated notifications restart the delay, so a burst of changes
        results in a single pass.
        """
        logger.info(
            "Display configuration changed, restoring in %d ms", self.delay_ms
        )
        self._delay_timer.start()

    def restore_windows_if_needed(self) -> RestoreReport | None:
        try:
            displays: list[DisplayInfo] = self.window_manager.get_displays()
        except Exception as e:
            logger.error("Restore aborted, display enumeration failed: %s", e)
            return None

        if len(displays) < 2:
            logger.info("Only %d display connected, skipping restore", len(displays))
            return None

        primary = next((d for d in displays if d.is_main), displays[0])
        primary_id = identifier_for_display(primary)
        connected = {identifier_for_display(d) for d in displays}
        targets = sorted((self.store.display_ids() & connected) - {primary_id})
        if not targets:
            logger.info("No external display with saved positions to restore")
            return None

        try:
            windows = [w for w in self.window_manager.get_windows() if w.is_normal_layer]
        except Exception as e:
            logger.error("Restore aborted, window enumeration failed: %s", e)
            return None

        self.restore_started.emit()
        report = RestoreReport(started_at=datetime.now(), target_displays=targets)
        logger.info("Restoring windows for displays: %s", ", ".join(targets))

        for display_id in targets:
            saved_windows = self.store.windows_for(display_id)
            logger.debug("%d saved windows for %s", len(saved_windows), display_id)
            for window_id, saved_frame in saved_windows.items():
                reason = self._restore_window(
                    window_id, saved_frame, windows, primary.frame
                )
                report.items.append(
                    {
                        "window_id": window_id,
                        "display_id": display_id,
                        "restored": reason == RESTORED,
                        "reason": reason,
                    }
                )

        report.finished_at = datetime.now()
        self.last_report = report
        logger.info(
            "Restored %d windows (%d failed)", report.restored_count, report.failed_count
        )
        self.restore_finished.emit(report.restored_count)
        return report

    def _restore_window(
        self,
        window_id: str,
        saved_frame: Frame,
        windows: list[WindowInfo],
        primary_frame: Frame,
    ) -> str:
        try:
            app_name, handle = parse_window_identifier(window_id)
        except MalformedIdentifierError as e:
            logger.warning("Skipping saved window: %s", e)
            return MALFORMED_IDENTIFIER

        live = next(
            (w for w in windows if w.app_name == app_name and w.window_id == handle),
            None,
        )
        if live is None:
            return NOT_FOUND

        # Only windows macOS pushed onto the primary display are moved back
        if not primary_frame.intersects(live.frame):
            return NOT_ON_PRIMARY

        try:
            positions = self.window_manager.get_window_positions(live.pid)
        except Exception as e:
            logger.warning("Could not query windows of %s: %s", app_name, e)
            return MOVE_FAILED

        element = self._verified_element(positions, live.frame)
        if element is None:
            logger.debug("No window of %s is where %s was seen", app_name, window_id)
            return UNVERIFIED

        try:
            moved = bool(
                self.window_manager.set_window_position(
                    element, saved_frame.x, saved_frame.y
                )
            )
        except Exception as e:
            logger.warning("Moving %s failed: %s", window_id, e)
            moved = False

        if not moved:
            logger.warning("Could not move %s back to %s", window_id, saved_frame.origin)
            return MOVE_FAILED

        logger.info(
            "Restored %s to (%s, %s)", app_name, saved_frame.x, saved_frame.y
        )
        self.window_restored.emit(window_id, float(saved_frame.x), float(saved_frame.y))
        return RESTORED

    def _verified_element(self, positions, live_frame: Frame):
        eps = self.position_epsilon
        for element, (x, y) in positions:
            if abs(x - live_frame.x) < eps and abs(y - live_frame.y) < eps:
                return element
        return None
