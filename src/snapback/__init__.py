"""
SnapBack - restores window positions when an external display reconnects
"""

__version__ = "0.1.0"
__author__ = "SnapBack Team"
__description__ = (
    "Restores window positions on macOS when an external display reconnects"
)

from .config import Config
from .identifiers import (
    MalformedIdentifierError,
    display_identifier,
    parse_window_identifier,
    window_identifier,
)
from .matcher import (
    MatchMethod,
    MatchResult,
    WindowCandidate,
    WindowMatcher,
    WindowMatchInfo,
)
from .models import DisplayInfo, Frame, WindowInfo
from .restore_engine import RestoreEngine, RestoreReport
from .snapshot_manager import PositionStore, SnapshotScheduler
from .window_mover import WindowMover

__all__ = [
    "Config",
    "MalformedIdentifierError",
    "display_identifier",
    "parse_window_identifier",
    "window_identifier",
    "MatchMethod",
    "MatchResult",
    "WindowCandidate",
    "WindowMatcher",
    "WindowMatchInfo",
    "DisplayInfo",
    "Frame",
    "WindowInfo",
    "RestoreEngine",
    "RestoreReport",
    "PositionStore",
    "SnapshotScheduler",
    "WindowMover",
]
