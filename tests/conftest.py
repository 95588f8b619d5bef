import pytest
from PyQt6.QtCore import QCoreApplication

from snapback.models import DisplayInfo, Frame, WindowInfo


@pytest.fixture(scope="session")
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


class FakeWindowManager:
    """In-memory stand-in for the macOS window manager"""

    def __init__(self, displays=None, windows=None):
        self.displays = list(displays or [])
        self.windows = list(windows or [])
        self.ax_positions = {}
        self.focused = {}
        self.frontmost_pid = None
        self.moves = []
        self.failing_elements = set()
        self.raising_pids = set()
        self.enumerations = 0

    def get_displays(self):
        return list(self.displays)

    def get_windows(self):
        self.enumerations += 1
        return list(self.windows)

    def get_frontmost_pid(self):
        return self.frontmost_pid

    def get_window_positions(self, pid):
        if pid in self.raising_pids:
            raise PermissionError(f"cannot read windows of pid {pid}")
        return list(self.ax_positions.get(pid, []))

    def get_focused_window(self, pid):
        return self.focused.get(pid)

    def set_window_position(self, element, x, y):
        if element in self.failing_elements:
            return False
        self.moves.append((element, x, y))
        return True

    def relocate(self, window_id, frame):
        for window in self.windows:
            if window.window_id == window_id:
                window.frame = frame


MAIN = DisplayInfo(name="Built-in Retina Display", frame=Frame(0, 0, 1440, 900), is_main=True, display_id=1)
EXTERNAL = DisplayInfo(name="DELL U2720Q", frame=Frame(1440, 0, 1920, 1080), display_id=2)


def make_window(window_id, app_name, x, y, width=800, height=600, pid=100, title=None, layer=0):
    return WindowInfo(
        window_id=window_id,
        app_name=app_name,
        pid=pid,
        frame=Frame(x, y, width, height),
        window_title=title,
        layer=layer,
    )


@pytest.fixture
def main_display():
    return MAIN


@pytest.fixture
def external_display():
    return EXTERNAL


@pytest.fixture
def window_manager():
    return FakeWindowManager(displays=[MAIN, EXTERNAL])
