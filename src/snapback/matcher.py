"""
Window matching for re-finding a previously seen window among the live ones

Window handles are only stable for the lifetime of a window, so a saved window
is matched against the current candidates in tiers:

1. exact handle (when the caller knows the handle it saw last time)
2. same app + same title digest
3. same app + approximately the same size
4. same app only

Within a tier the candidate nearest to the saved origin wins.
"""

import hashlib
from dataclasses import dataclass
from enum import Enum

from .models import Frame, WindowInfo

DEFAULT_SIZE_TOLERANCE = 20.0


def digest(text: str) -> str:
    """SHA-256 hex digest used for app names and window titles"""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class WindowMatchInfo:
    """Saved descriptor of a window of interest.

    Only digests of the app name and title are kept, never the raw strings.
    """

    app_name_hash: str
    frame: Frame
    title_hash: str | None = None

    @classmethod
    def capture(
        cls, app_name: str, frame: Frame, title: str | None = None
    ) -> "WindowMatchInfo":
        return cls(
            app_name_hash=digest(app_name),
            frame=frame,
            title_hash=digest(title) if title is not None else None,
        )

    @property
    def size(self) -> tuple[float, float]:
        return self.frame.size

    def size_matches(self, size: tuple[float, float], tolerance: float) -> bool:
        width, height = self.size
        return abs(width - size[0]) <= tolerance and abs(height - size[1]) <= tolerance


@dataclass(frozen=True)
class WindowCandidate:
    """A currently observable normal-layer window"""

    window_id: int
    app_name: str
    frame: Frame
    pid: int
    title: str | None = None

    @classmethod
    def from_window_info(cls, window: WindowInfo) -> "WindowCandidate":
        return cls(
            window_id=window.window_id,
            app_name=window.app_name,
            frame=window.frame,
            pid=window.pid,
            title=window.window_title,
        )

    @property
    def app_name_hash(self) -> str:
        return digest(self.app_name)

    @property
    def title_hash(self) -> str | None:
        return digest(self.title) if self.title is not None else None


class MatchMethod(Enum):
    """Which tier produced a match"""

    HANDLE_EXACT = "handle_exact"
    TITLE_HASH = "title_hash"
    SIZE_APPROXIMATE = "size_approximate"
    APP_NAME_ONLY = "app_name_only"


@dataclass(frozen=True)
class MatchResult:
    candidate: WindowCandidate
    method: MatchMethod


class WindowMatcher:
    """Finds the live window that best corresponds to a saved descriptor"""

    def __init__(self, size_tolerance: float = DEFAULT_SIZE_TOLERANCE):
        self.size_tolerance = size_tolerance

    def find_match(
        self,
        saved: WindowMatchInfo,
        candidates: list[WindowCandidate],
        excluding: set[int] | frozenset[int] = frozenset(),
        preferred_window_id: int | None = None,
    ) -> MatchResult | None:
        """Return the best match for ``saved`` or None when no app matches.

        ``excluding`` holds window ids already claimed by an earlier match.
        ``preferred_window_id`` is the handle seen when ``saved`` was captured.
        """
        title_matches: list[WindowCandidate] = []
        size_matches: list[WindowCandidate] = []
        app_only_matches: list[WindowCandidate] = []

        for candidate in candidates:
            if candidate.window_id in excluding:
                continue

            app_matches = candidate.app_name_hash == saved.app_name_hash

            # Re-checking the app guards against handle reuse after a relaunch
            if (
                preferred_window_id is not None
                and candidate.window_id == preferred_window_id
                and app_matches
            ):
                return MatchResult(candidate, MatchMethod.HANDLE_EXACT)

            if not app_matches:
                continue

            candidate_title_hash = candidate.title_hash
            if (
                saved.title_hash is not None
                and candidate_title_hash is not None
                and candidate_title_hash == saved.title_hash
            ):
                title_matches.append(candidate)
            elif saved.size_matches(candidate.frame.size, self.size_tolerance):
                size_matches.append(candidate)
            else:
                app_only_matches.append(candidate)

        origin = saved.frame.origin
        for bucket, method in (
            (title_matches, MatchMethod.TITLE_HASH),
            (size_matches, MatchMethod.SIZE_APPROXIMATE),
            (app_only_matches, MatchMethod.APP_NAME_ONLY),
        ):
            if bucket:
                # min() keeps the first of equally distant candidates
                nearest = min(bucket, key=lambda c: c.frame.distance_to(origin))
                return MatchResult(nearest, method)

        return None
