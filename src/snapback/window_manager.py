"""
macOS window and display access for capture, restore and moving windows
"""

import logging

import Quartz
from AppKit import NSWorkspace
from ApplicationServices import (
    AXUIElementCopyAttributeValue,
    AXUIElementCreateApplication,
    AXUIElementSetAttributeValue,
    AXValueCreate,
    AXValueGetValue,
    kAXErrorSuccess,
    kAXFocusedWindowAttribute,
    kAXPositionAttribute,
    kAXValueCGPointType,
    kAXWindowsAttribute,
)
from PyQt6.QtGui import QGuiApplication

from .models import NORMAL_WINDOW_LAYER, DisplayInfo, Frame, WindowInfo

logger = logging.getLogger(__name__)

MAX_DISPLAYS = 32


class WindowManager:
    """Enumerates displays and windows and moves windows via Accessibility"""

    def __init__(self):
        self.workspace = NSWorkspace.sharedWorkspace()

    def get_displays(self) -> list[DisplayInfo]:
        app = QGuiApplication.instance()
        if isinstance(app, QGuiApplication):
            screens = app.screens()
            if screens:
                primary = app.primaryScreen()
                displays: list[DisplayInfo] = []
                for idx, screen in enumerate(screens):
                    geo = screen.geometry()
                    displays.append(
                        DisplayInfo(
                            name=screen.name(),
                            frame=Frame(geo.x(), geo.y(), geo.width(), geo.height()),
                            is_main=(screen == primary),
                            display_id=idx + 1,
                        )
                    )
                return displays

        return self._get_quartz_displays()

    def _get_quartz_displays(self) -> list[DisplayInfo]:
        err, display_ids, count = Quartz.CGGetOnlineDisplayList(MAX_DISPLAYS, None, None)
        if err != 0:
            logger.error("CGGetOnlineDisplayList failed: %s", err)
            return []
        main_id = Quartz.CGMainDisplayID()
        displays: list[DisplayInfo] = []
        for did in display_ids[:count]:
            bounds = Quartz.CGDisplayBounds(did)
            displays.append(
                DisplayInfo(
                    name="",
                    frame=Frame(
                        bounds.origin.x,
                        bounds.origin.y,
                        bounds.size.width,
                        bounds.size.height,
                    ),
                    is_main=(did == main_id),
                    display_id=int(did),
                )
            )
        return displays

    def get_windows(self) -> list[WindowInfo]:
        """On-screen normal-layer windows, front to back"""
        window_list = Quartz.CGWindowListCopyWindowInfo(
            Quartz.kCGWindowListOptionOnScreenOnly
            | Quartz.kCGWindowListExcludeDesktopElements,
            Quartz.kCGNullWindowID,
        )
        windows: list[WindowInfo] = []
        for window in window_list or []:
            if window.get(Quartz.kCGWindowLayer, -1) != NORMAL_WINDOW_LAYER:
                continue
            owner_name = window.get(Quartz.kCGWindowOwnerName)
            wid = window.get(Quartz.kCGWindowNumber)
            pid = window.get(Quartz.kCGWindowOwnerPID)
            bounds = window.get(Quartz.kCGWindowBounds)
            if not owner_name or wid is None or pid is None or not bounds:
                continue

            windows.append(
                WindowInfo(
                    window_id=int(wid),
                    app_name=str(owner_name),
                    pid=int(pid),
                    frame=Frame(
                        bounds.get("X", 0),
                        bounds.get("Y", 0),
                        bounds.get("Width", 0),
                        bounds.get("Height", 0),
                    ),
                    window_title=window.get(Quartz.kCGWindowName),
                    layer=NORMAL_WINDOW_LAYER,
                )
            )
        return windows

    def get_frontmost_pid(self) -> int | None:
        app = self.workspace.frontmostApplication()
        if app is None:
            return None
        return int(app.processIdentifier())

    def get_window_positions(self, pid: int) -> list[tuple[object, tuple[float, float]]]:
        """Accessibility window elements of an app with their current origins"""
        app_ref = AXUIElementCreateApplication(pid)
        err, ax_windows = AXUIElementCopyAttributeValue(app_ref, kAXWindowsAttribute, None)
        if err != kAXErrorSuccess:
            raise PermissionError(f"cannot read windows of pid {pid} (AXError {err})")

        positions = []
        for element in ax_windows or []:
            point = self._get_position(element)
            if point is not None:
                positions.append((element, point))
        return positions

    def get_focused_window(self, pid: int):
        """The focused window of an app, or its first window"""
        app_ref = AXUIElementCreateApplication(pid)
        err, element = AXUIElementCopyAttributeValue(
            app_ref, kAXFocusedWindowAttribute, None
        )
        if err == kAXErrorSuccess and element is not None:
            return element

        err, ax_windows = AXUIElementCopyAttributeValue(app_ref, kAXWindowsAttribute, None)
        if err == kAXErrorSuccess and ax_windows:
            return ax_windows[0]
        return None

    def set_window_position(self, element, x: float, y: float) -> bool:
        position = AXValueCreate(kAXValueCGPointType, Quartz.CGPoint(x, y))
        err = AXUIElementSetAttributeValue(element, kAXPositionAttribute, position)
        if err != kAXErrorSuccess:
            logger.debug("AXUIElementSetAttributeValue failed: %s", err)
            return False
        return True

    def _get_position(self, element) -> tuple[float, float] | None:
        err, value = AXUIElementCopyAttributeValue(element, kAXPositionAttribute, None)
        if err != kAXErrorSuccess or value is None:
            return None
        ok, point = AXValueGetValue(value, kAXValueCGPointType, None)
        if not ok:
            return None
        return (point.x, point.y)
