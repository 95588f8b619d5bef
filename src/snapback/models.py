"""
Geometry and live window/display records shared by the capture and restore code
"""

import math
from dataclasses import dataclass

# CGWindowLayer value of ordinary application windows
NORMAL_WINDOW_LAYER = 0


@dataclass(frozen=True)
class Frame:
    """Axis-aligned rectangle in global screen coordinates"""

    x: float
    y: float
    width: float
    height: float

    @property
    def origin(self) -> tuple[float, float]:
        return (self.x, self.y)

    @property
    def size(self) -> tuple[float, float]:
        return (self.width, self.height)

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    def intersects(self, other: "Frame") -> bool:
        """True when the two rectangles share a region of non-zero area"""
        if self.width <= 0 or self.height <= 0:
            return False
        if other.width <= 0 or other.height <= 0:
            return False
        return (
            self.x < other.max_x
            and other.x < self.max_x
            and self.y < other.max_y
            and other.y < self.max_y
        )

    def distance_to(self, point: tuple[float, float]) -> float:
        """Euclidean distance from this frame's origin to a point"""
        return math.hypot(self.x - point[0], self.y - point[1])

    def with_origin(self, x: float, y: float) -> "Frame":
        return Frame(x, y, self.width, self.height)


@dataclass
class WindowInfo:
    """A live on-screen window as reported by window enumeration"""

    window_id: int
    app_name: str
    pid: int
    frame: Frame
    window_title: str | None = None
    layer: int = NORMAL_WINDOW_LAYER

    @property
    def is_normal_layer(self) -> bool:
        return self.layer == NORMAL_WINDOW_LAYER


@dataclass
class DisplayInfo:
    """A connected display"""

    name: str
    frame: Frame
    is_main: bool = False
    display_id: int | None = None
