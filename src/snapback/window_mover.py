"""
Moves the frontmost window to the next or previous display
"""

import logging

from .matcher import WindowCandidate, WindowMatcher, WindowMatchInfo
from .models import WindowInfo

logger = logging.getLogger(__name__)


class WindowMover:
    """Cycles the frontmost window across displays, keeping its relative offset"""

    def __init__(self, window_manager, matcher: WindowMatcher | None = None):
        self.window_manager = window_manager
        self.matcher = matcher or WindowMatcher()

    @classmethod
    def from_config(cls, window_manager, config) -> "WindowMover":
        return cls(window_manager, WindowMatcher(size_tolerance=config.size_tolerance))

    def move_to_next_display(self) -> bool:
        return self.move_window(1)

    def move_to_previous_display(self) -> bool:
        return self.move_window(-1)

    def move_window(self, direction: int) -> bool:
        pid = self.window_manager.get_frontmost_pid()
        if pid is None:
            logger.warning("No frontmost application")
            return False

        windows = [w for w in self.window_manager.get_windows() if w.is_normal_layer]
        target = next((w for w in windows if w.pid == pid), None)
        if target is None:
            logger.warning("Frontmost application %d has no on-screen window", pid)
            return False

        window = self._relocate(target, windows)
        displays = self.window_manager.get_displays()
        current_index = next(
            (i for i, d in enumerate(displays) if d.frame.intersects(window.frame)),
            None,
        )
        if current_index is None:
            logger.warning("Could not determine the display of %s", window.app_name)
            return False

        next_index = (current_index + direction) % len(displays)
        current = displays[current_index].frame
        destination = displays[next_index].frame
        new_x = destination.x + (window.frame.x - current.x)
        new_y = destination.y + (window.frame.y - current.y)
        logger.debug(
            "Moving %s from display %d to %d at (%s, %s)",
            window.app_name,
            current_index,
            next_index,
            new_x,
            new_y,
        )

        element = self.window_manager.get_focused_window(pid)
        if element is None:
            logger.warning("No accessible window for %s", window.app_name)
            return False

        moved = bool(self.window_manager.set_window_position(element, new_x, new_y))
        if moved:
            logger.info("Moved %s to display %d", window.app_name, next_index)
        else:
            logger.warning("Failed to move %s", window.app_name)
        return moved

    def _relocate(self, window: WindowInfo, windows: list[WindowInfo]) -> WindowCandidate:
        candidates = [WindowCandidate.from_window_info(w) for w in windows]
        saved = WindowMatchInfo.capture(window.app_name, window.frame, window.window_title)
        result = self.matcher.find_match(
            saved, candidates, preferred_window_id=window.window_id
        )
        if result is None:
            return WindowCandidate.from_window_info(window)
        logger.debug("Frontmost window located by %s", result.method.value)
        return result.candidate
