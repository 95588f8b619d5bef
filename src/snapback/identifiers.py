"""
String keys for displays and windows used by the position store
"""

from .models import DisplayInfo

SEPARATOR = "_"


class MalformedIdentifierError(ValueError):
    """A stored window identifier could not be split into app name and handle"""


def display_identifier(
    name: str | None, width: float, height: float, number: int | None = None
) -> str:
    """Build the ``name_WIDTHxHEIGHT`` key for a physical display.

    An empty name falls back to ``Display<number>``, or to ``UnknownDisplay``
    when the OS did not report a number either.
    """
    if not name:
        name = f"Display{number}" if number is not None else "UnknownDisplay"
    return f"{name}{SEPARATOR}{int(width)}x{int(height)}"


def identifier_for_display(display: DisplayInfo) -> str:
    return display_identifier(
        display.name, display.frame.width, display.frame.height, display.display_id
    )


def window_identifier(app_name: str, window_id: int) -> str:
    """Build the ``appName_windowHandle`` key for a window"""
    return f"{app_name}{SEPARATOR}{window_id}"


def parse_window_identifier(identifier: str) -> tuple[str, int]:
    """Split a window identifier back into ``(app_name, window_id)``.

    The handle is everything after the last separator, so app names that
    themselves contain the separator still parse.
    """
    app_name, sep, handle = identifier.rpartition(SEPARATOR)
    if not sep or not app_name:
        raise MalformedIdentifierError(f"missing app name or separator: {identifier!r}")
    if not (handle.isascii() and handle.isdigit()):
        raise MalformedIdentifierError(f"non-numeric window handle: {identifier!r}")
    return app_name, int(handle)
